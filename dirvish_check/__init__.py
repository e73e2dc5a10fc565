"""
Dirvish Check - freshness probe for dirvish backup banks.

This package inspects every vault of a dirvish bank, finds the age of its
newest successful image and reduces the results to a Nagios-style verdict.
"""

__version__ = "1.0.0"

from .core.monitor import BankMonitor
from .core.scanner import BankScanner
from .core.evaluator import FreshnessEvaluator
from .exceptions import ConfigurationError, MissingMetadataError

__all__ = [
    "BankMonitor", "BankScanner", "FreshnessEvaluator",
    "ConfigurationError", "MissingMetadataError"
]
