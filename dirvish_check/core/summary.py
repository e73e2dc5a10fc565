"""Parsing of dirvish image summary files."""

import logging
import os
import re
from datetime import datetime
from typing import Dict, Iterable

from dateutil import parser as date_parser

from ..exceptions import MissingMetadataError
from .models import ImageSummary

SUMMARY_FILENAME = "summary"
STATUS_KEY = "Status"
COMPLETE_KEY = "Backup-complete"
EPOCH = datetime(1970, 1, 1, 0, 0, 0)

_LINE_RE = re.compile(r"^([A-Za-z][\w-]*):\s*(.*?)\s*$")

logger = logging.getLogger(__name__)


def parse_summary_lines(lines: Iterable[str]) -> Dict[str, str]:
    """Parse ``Key: value`` lines into a dictionary.

    Lines that do not start with a keyword and a colon are ignored. When a
    key appears more than once the last value wins.

    Args:
        lines: Lines of a summary file.

    Returns:
        Mapping of key to value.
    """
    values = {}
    for line in lines:
        match = _LINE_RE.match(line)
        if match:
            values[match.group(1)] = match.group(2)
    return values


def parse_completion_time(value: str) -> datetime:
    """Parse a completion timestamp into a naive local datetime.

    Args:
        value: Free-form date/time string.

    Returns:
        Parsed datetime, or the epoch if the value cannot be parsed.
    """
    if not value:
        return EPOCH

    try:
        parsed = date_parser.parse(value)
    except (ValueError, OverflowError) as e:
        logger.debug(f"Unparseable completion time {value!r}: {e}")
        return EPOCH

    if parsed.tzinfo is not None:
        try:
            parsed = parsed.astimezone().replace(tzinfo=None)
        except (ValueError, OverflowError) as e:
            logger.debug(f"Completion time {value!r} out of local range: {e}")
            return EPOCH
    return parsed


def read_summary(image_path: str) -> ImageSummary:
    """Read and parse the summary file of an image.

    Args:
        image_path: Path of the image directory.

    Returns:
        Parsed ImageSummary.

    Raises:
        MissingMetadataError: If the summary file is absent or unreadable.
    """
    summary_path = os.path.join(image_path, SUMMARY_FILENAME)
    try:
        with open(summary_path, 'r', encoding='utf-8', errors='replace') as f:
            values = parse_summary_lines(f)
    except OSError as e:
        raise MissingMetadataError(image_path, e.strerror or str(e)) from e

    return ImageSummary(
        status=values.get(STATUS_KEY, ""),
        completed=parse_completion_time(values.get(COMPLETE_KEY, "")),
        raw=values
    )
