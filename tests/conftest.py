"""Test configuration and fixtures."""

from __future__ import annotations

import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional

import pytest

# Fixed evaluation instant shared by the non-CLI tests
NOW = datetime(2024, 3, 15, 12, 0, 0)


class BankBuilder:
    """Builds dirvish bank layouts under a temporary directory."""

    def __init__(self, root: Path):
        self.root = root
        self.root.mkdir(parents=True, exist_ok=True)

    @property
    def path(self) -> str:
        return str(self.root)

    def vault(self, name: str, tooling: bool = True) -> Path:
        """Create a vault directory, with its dirvish tooling dir by default."""
        vault_dir = self.root / name
        vault_dir.mkdir(exist_ok=True)
        if tooling:
            (vault_dir / "dirvish").mkdir(exist_ok=True)
            (vault_dir / "dirvish" / "default.conf").write_text("client: localhost\n")
        return vault_dir

    def image(
        self,
        vault: str,
        name: str,
        status: Optional[str] = "success",
        completed: Optional[datetime] = None,
        completed_text: Optional[str] = None,
        mtime: Optional[datetime] = None,
        summary: bool = True,
        extra_lines: Iterable[str] = (),
    ) -> Path:
        """Create an image directory with a summary file.

        The directory mtime defaults to the completion time so that
        modification order follows completion order.
        """
        vault_dir = self.vault(vault)
        image_dir = vault_dir / name
        image_dir.mkdir()
        (image_dir / "tree").mkdir()

        if summary:
            lines = ["client: localhost", "tree: /", f"Image: {name}"]
            if completed_text is None and completed is not None:
                completed_text = completed.strftime("%Y-%m-%d %H:%M:%S")
            if completed_text is not None:
                lines.append(f"Backup-complete: {completed_text}")
            if status is not None:
                lines.append(f"Status: {status}")
            lines.extend(extra_lines)
            (image_dir / "summary").write_text("\n".join(lines) + "\n")

        stamp = mtime or completed or NOW
        ts = stamp.timestamp()
        os.utime(image_dir, (ts, ts))
        return image_dir

    def skip(self, *names: str) -> None:
        """Write the bank skip file."""
        (self.root / ".check_skip").write_text("".join(f"{name}\n" for name in names))


@pytest.fixture
def bank(tmp_path) -> BankBuilder:
    """An empty bank to populate."""
    return BankBuilder(tmp_path / "bank")


@pytest.fixture
def now() -> datetime:
    """Fixed evaluation instant."""
    return NOW


@pytest.fixture(autouse=True)
def restore_logging():
    """Restore root logger handlers replaced by the CLI."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    for handler in handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(level)
