"""Main dirvish bank check coordinator."""

import logging
from datetime import datetime
from typing import Any, Dict, Optional

from ..exceptions import ConfigurationError
from .evaluator import FreshnessEvaluator
from .models import Severity, Verdict
from .scanner import BankScanner


def classify(age: int, warning_days: int, critical_days: int) -> Severity:
    """Map a vault age to its severity bucket."""
    if age >= critical_days:
        return Severity.CRITICAL
    if age >= warning_days:
        return Severity.WARNING
    return Severity.OK


class BankMonitor:
    """Checks the freshness of every vault in a bank."""

    def __init__(self, bank_path: str, warning_days: int = 2, critical_days: int = 4,
                 allow_warnings: bool = False, early_exit: bool = True):
        """Initialize bank monitor.

        Args:
            bank_path: Root directory of the dirvish bank.
            warning_days: Age in days at which a vault is a warning.
            critical_days: Age in days at which a vault is critical.
            allow_warnings: Accept images finished with a warning status.
            early_exit: Let the evaluator stop at the first fresh image.

        Raises:
            ConfigurationError: If the thresholds are inconsistent.
        """
        if warning_days > critical_days:
            raise ConfigurationError(
                f"Warning threshold ({warning_days}) exceeds critical threshold ({critical_days})"
            )

        self.bank_path = bank_path
        self.warning_days = warning_days
        self.critical_days = critical_days
        self.scanner = BankScanner(bank_path)
        self.evaluator = FreshnessEvaluator(
            warning_days=warning_days,
            critical_days=critical_days,
            allow_warnings=allow_warnings,
            early_exit=early_exit
        )
        self.logger = logging.getLogger(__name__)

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "BankMonitor":
        """Build a monitor from a loaded configuration dictionary."""
        check_config = config.get('check', {})
        return cls(
            bank_path=check_config.get('bank'),
            warning_days=check_config.get('warning_days', 2),
            critical_days=check_config.get('critical_days', 4),
            allow_warnings=check_config.get('allow_warnings', False)
        )

    def run(self, now: Optional[datetime] = None) -> Verdict:
        """Evaluate all vaults of the bank.

        Args:
            now: Evaluation instant. Defaults to the current local time,
                read once before any vault is evaluated.

        Returns:
            Verdict for the whole bank.

        Raises:
            ConfigurationError: If the bank cannot be read.
            MissingMetadataError: If any examined image lacks a summary.
        """
        now = now or datetime.now()

        self.scanner.validate_bank()
        skip = self.scanner.load_skip_list()
        vaults = self.scanner.list_vaults(skip)

        self.logger.info(f"Checking {len(vaults)} vaults in {self.bank_path} "
                         f"(warning={self.warning_days}, critical={self.critical_days})")

        verdict = Verdict()
        for vault in vaults:
            images = self.scanner.list_images(vault)
            result = self.evaluator.evaluate(vault.name, images, now)
            severity = classify(result.age_in_days, self.warning_days, self.critical_days)
            verdict.add(result, severity)

            if severity != Severity.OK:
                self.logger.info(f"Vault {vault.name} is {severity.name}: "
                                 f"{result.age_in_days} days old ({result.status})")

        self.logger.info(f"Check complete: {verdict.checked} vaults, {len(verdict.critical)} critical, "
                         f"{len(verdict.warning)} warning")
        return verdict
