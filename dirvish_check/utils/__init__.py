"""Utility modules for dirvish checks."""

from .formatters import format_date, format_detail, format_verdict_message

__all__ = ["format_date", "format_detail", "format_verdict_message"]
