"""Data models for dirvish bank checking."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from typing import Dict, List, Optional


class Severity(IntEnum):
    """Check severity, valued as the plugin exit code."""
    OK = 0
    WARNING = 1
    CRITICAL = 2
    UNKNOWN = 3


@dataclass
class Vault:
    """A backup vault directory inside the bank."""
    name: str
    path: str


@dataclass
class Image:
    """One backup image directory inside a vault."""
    name: str
    path: str
    modified_time: datetime


@dataclass
class ImageSummary:
    """Parsed contents of an image's summary file."""
    status: str
    completed: datetime
    raw: Dict[str, str] = field(default_factory=dict)


@dataclass
class EvaluationResult:
    """Freshness of the newest acceptable image of a vault."""
    vault_name: str
    age_in_days: int
    status: str
    image_name: Optional[str] = None
    completed: Optional[datetime] = None
    acceptable: bool = True


@dataclass
class Verdict:
    """Aggregate of all vault results for one run."""
    critical: List[EvaluationResult] = field(default_factory=list)
    warning: List[EvaluationResult] = field(default_factory=list)
    ok: List[EvaluationResult] = field(default_factory=list)
    checked: int = 0

    @property
    def severity(self) -> Severity:
        if self.critical:
            return Severity.CRITICAL
        if self.warning:
            return Severity.WARNING
        return Severity.OK

    @property
    def exit_code(self) -> int:
        return int(self.severity)

    def add(self, result: EvaluationResult, severity: Severity) -> None:
        """Append a result to the bucket matching its severity."""
        if severity == Severity.CRITICAL:
            self.critical.append(result)
        elif severity == Severity.WARNING:
            self.warning.append(result)
        else:
            self.ok.append(result)
        self.checked += 1

    def results(self) -> List[EvaluationResult]:
        """All results, flagged first."""
        return self.critical + self.warning + self.ok
