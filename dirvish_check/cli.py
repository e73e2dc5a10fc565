"""Command-line interface for the dirvish bank check."""

import json
import logging
import sys
from datetime import datetime
from typing import Optional

import click

from .config.config_manager import ConfigManager
from .core.models import Severity, Verdict
from .core.monitor import BankMonitor
from .exceptions import ConfigurationError, MissingMetadataError
from .utils.formatters import format_date, format_detail, format_verdict_message


def setup_logging(level: str, log_file: Optional[str] = None):
    """Set up logging configuration.

    Console logging goes to stderr; stdout carries the plugin output line.
    """
    # Convert string level to logging constant
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f'Invalid log level: {level}')

    # Create formatter
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    # Set up root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Clear existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # Add console handler
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # Add file handler if specified
    if log_file:
        try:
            file_handler = logging.FileHandler(log_file)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
        except OSError as e:
            click.echo(f"Warning: Could not set up file logging: {e}", err=True)


def verdict_to_json(verdict: Verdict, now: datetime) -> str:
    """Render a verdict as a JSON document."""
    vaults = []
    for severity, results in ((Severity.CRITICAL, verdict.critical),
                              (Severity.WARNING, verdict.warning),
                              (Severity.OK, verdict.ok)):
        for result in results:
            vaults.append({
                'vault': result.vault_name,
                'severity': severity.name,
                'age_days': result.age_in_days,
                'status': result.status,
                'image': result.image_name,
                'completed': result.completed.isoformat() if result.completed else None,
                'acceptable': result.acceptable
            })

    return json.dumps({
        'status': verdict.severity.name,
        'exit_code': verdict.exit_code,
        'message': format_verdict_message(verdict),
        'checked': verdict.checked,
        'evaluated_at': now.isoformat(),
        'vaults': vaults
    }, indent=2)


class CheckCommand(click.Command):
    """Command whose usage errors exit UNKNOWN rather than click's 2 (CRITICAL)."""

    def parse_args(self, ctx, args):
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            e.exit_code = Severity.UNKNOWN.value
            raise


def _fail(kind: str, error: Exception):
    """Report an error outside the normal verdicts and exit UNKNOWN."""
    click.echo(f"{Severity.UNKNOWN.name}: {kind}: {error}")
    sys.exit(Severity.UNKNOWN.value)


@click.command(cls=CheckCommand)
@click.option('--bank', '-b', 'bank',
              help='Path to the dirvish bank')
@click.option('--warning', '-w', 'warning_days', type=int,
              help='Warn when the newest good image is this many days old [default: 2]')
@click.option('--critical', '-c', 'critical_days', type=int,
              help='Critical when the newest good image is this many days old [default: 4]')
@click.option('--allow-warnings/--no-allow-warnings', default=None,
              help='Accept images that finished with a warning status')
@click.option('--config', 'config_path',
              help='Path to configuration file')
@click.option('--log-level',
              type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
              help='Logging level [default: WARNING]')
@click.option('--log-file',
              help='Log file path')
@click.option('--output', '-o', type=click.Choice(['text', 'json']), default='text',
              help='Output format')
@click.option('--verbose', '-v', is_flag=True,
              help='Print one line per vault after the summary')
def cli(bank: Optional[str], warning_days: Optional[int], critical_days: Optional[int],
        allow_warnings: Optional[bool], config_path: Optional[str], log_level: Optional[str],
        log_file: Optional[str], output: str, verbose: bool):
    """Dirvish Check - report the freshness of every vault in a dirvish bank.

    Exits 0 (OK), 1 (WARNING), 2 (CRITICAL) or 3 when the check itself
    cannot run.
    """
    try:
        config_manager = ConfigManager(config_path)
        config = config_manager.load_config(overrides={
            'check': {
                'bank': bank,
                'warning_days': warning_days,
                'critical_days': critical_days,
                'allow_warnings': allow_warnings
            },
            'logging': {
                'level': log_level,
                'file': log_file
            }
        })
    except ConfigurationError as e:
        setup_logging(log_level or 'WARNING', log_file)
        logging.getLogger(__name__).error(f"Configuration failed: {e}")
        _fail("configuration error", e)

    # Set up logging from the merged configuration
    logging_config = config_manager.get_logging_config()
    setup_logging(logging_config['level'], logging_config.get('file'))
    logger = logging.getLogger(__name__)

    now = datetime.now()
    logger.debug(f"Evaluating bank at {format_date(now)}")

    try:
        monitor = BankMonitor.from_config(config)
        verdict = monitor.run(now=now)
    except ConfigurationError as e:
        logger.error(f"Configuration failed: {e}")
        _fail("configuration error", e)
    except MissingMetadataError as e:
        logger.error(f"Metadata error: {e}")
        _fail("metadata error", e)
    except Exception as e:
        logger.exception(f"Unexpected failure checking {config['check']['bank']}")
        _fail("unexpected error", e)

    if output == 'json':
        click.echo(verdict_to_json(verdict, now))
    else:
        click.echo(format_verdict_message(verdict))
        if verbose:
            for result in verdict.results():
                click.echo(format_detail(result))

    sys.exit(verdict.exit_code)


def main():
    """Main CLI entry point."""
    cli()


if __name__ == '__main__':
    main()
