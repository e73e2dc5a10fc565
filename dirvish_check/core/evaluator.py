"""Freshness evaluation of a single vault."""

import logging
from datetime import datetime
from typing import List, Optional

from .models import EvaluationResult, Image
from .summary import read_summary

NO_IMAGES_STATUS = "no images"
MIN_AGE = 0


def is_acceptable(status: str, allow_warnings: bool = False) -> bool:
    """Return True if an image status counts as a usable backup."""
    if status == "success":
        return True
    return allow_warnings and status.startswith("warning")


def age_in_days(completed: datetime, now: datetime) -> int:
    """Whole calendar days between completion and now.

    Two instants on the same calendar day are zero days apart; crossing a
    local midnight adds a day regardless of elapsed hours. Completions
    dated after now count as zero days old.
    """
    return max(MIN_AGE, (now.date() - completed.date()).days)


class FreshnessEvaluator:
    """Selects the freshest acceptable image of a vault."""

    def __init__(self, warning_days: int = 2, critical_days: int = 4,
                 allow_warnings: bool = False, early_exit: bool = True):
        """Initialize freshness evaluator.

        Args:
            warning_days: Age at which a vault becomes a warning.
            critical_days: Age at which a vault becomes critical.
            allow_warnings: Accept images whose status starts with "warning".
            early_exit: Stop scanning once an image completed today is
                found and it is below the warning threshold.
        """
        self.warning_days = warning_days
        self.critical_days = critical_days
        self.allow_warnings = allow_warnings
        self.early_exit = early_exit
        self.logger = logging.getLogger(__name__)

    @property
    def fallback_age(self) -> int:
        """Age reported for vaults without any acceptable image."""
        return self.critical_days + 1

    def evaluate(self, vault_name: str, images: List[Image], now: datetime) -> EvaluationResult:
        """Evaluate one vault.

        Args:
            vault_name: Name of the vault.
            images: Candidate images, newest first.
            now: Evaluation instant, fixed for the whole run.

        Returns:
            EvaluationResult for the vault.

        Raises:
            MissingMetadataError: If an examined image has no readable summary.
        """
        best: Optional[EvaluationResult] = None
        newest_status: Optional[str] = None

        for image in images:
            summary = read_summary(image.path)
            if newest_status is None:
                newest_status = summary.status

            if not is_acceptable(summary.status, self.allow_warnings):
                self.logger.debug(f"{vault_name}/{image.name}: status {summary.status!r} not acceptable")
                continue

            age = age_in_days(summary.completed, now)
            if best is None or age < best.age_in_days:
                best = EvaluationResult(
                    vault_name=vault_name,
                    age_in_days=age,
                    status=summary.status,
                    image_name=image.name,
                    completed=summary.completed
                )

            # Only a zero age is sure to beat every older image, whatever the mtimes
            if self.early_exit and age == MIN_AGE and age < self.warning_days:
                break

        if best is None:
            self.logger.info(f"Vault {vault_name} has no acceptable image")
            return EvaluationResult(
                vault_name=vault_name,
                age_in_days=self.fallback_age,
                status=newest_status if newest_status is not None else NO_IMAGES_STATUS,
                acceptable=False
            )

        self.logger.debug(f"Vault {vault_name}: selected {best.image_name} "
                          f"({best.age_in_days} days, {best.status})")
        return best
