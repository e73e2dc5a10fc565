"""Formatting utilities for dirvish check output."""

from datetime import datetime
from typing import Iterable, Optional

from ..core.models import EvaluationResult, Verdict


def format_date(dt: Optional[datetime], short: bool = False) -> str:
    """Format datetime for display.

    Args:
        dt: Datetime to format, or None.
        short: If True, use short format.

    Returns:
        Formatted date string, "never" for None.
    """
    if dt is None:
        return "never"
    if short:
        return dt.strftime('%Y-%m-%d %H:%M')
    return dt.strftime('%Y-%m-%d %H:%M:%S')


def format_result(result: EvaluationResult) -> str:
    """Format one flagged vault as ``<vault>: <age> days old (<status>); ``."""
    return f"{result.vault_name}: {result.age_in_days} days old ({result.status}); "


def format_bucket(label: str, results: Iterable[EvaluationResult]) -> str:
    """Format a severity bucket, or an empty string if it has no results."""
    parts = "".join(format_result(result) for result in results)
    if not parts:
        return ""
    return f"{label}: {parts}"


def format_verdict_message(verdict: Verdict) -> str:
    """Build the one-line summary of a verdict.

    Critical vaults come first, followed by warning vaults. When no vault
    is flagged the line reports how many vaults were checked.
    """
    if not verdict.critical and not verdict.warning:
        return f"All vaults are fresh ({verdict.checked} checked)"
    return format_bucket("CRITICAL", verdict.critical) + format_bucket("WARNING", verdict.warning)


def format_detail(result: EvaluationResult) -> str:
    """Format a per-vault detail line for verbose output."""
    if not result.acceptable:
        return f"{result.vault_name}: no acceptable image ({result.status})"
    return (f"{result.vault_name}: {result.image_name} completed "
            f"{format_date(result.completed)}, {result.age_in_days} days old ({result.status})")
