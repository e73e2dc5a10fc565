"""Exceptions raised by the dirvish bank check."""

from typing import Optional


class DirvishCheckError(Exception):
    """Base class for errors that prevent a verdict from being produced."""


class ConfigurationError(DirvishCheckError, ValueError):
    """Invalid bank path, unreadable bank or bad thresholds."""


class MissingMetadataError(DirvishCheckError):
    """An image directory lacks a readable summary file."""

    def __init__(self, image_path: str, reason: Optional[str] = None):
        self.image_path = image_path
        self.reason = reason
        message = f"Missing or unreadable summary in {image_path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
