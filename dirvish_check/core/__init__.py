"""Core checking functionality."""

from .monitor import BankMonitor, classify
from .scanner import BankScanner
from .evaluator import FreshnessEvaluator
from .models import EvaluationResult, Image, Severity, Vault, Verdict

__all__ = [
    "BankMonitor", "BankScanner", "FreshnessEvaluator", "classify",
    "EvaluationResult", "Image", "Severity", "Vault", "Verdict"
]
