"""Bank and vault scanning for dirvish freshness checks."""

import os
import logging
from datetime import datetime
from typing import List, Optional, Set

from ..exceptions import ConfigurationError
from .models import Image, Vault


class BankScanner:
    """Enumerates vaults in a bank and images in a vault."""

    SKIP_FILENAME = ".check_skip"
    TOOLING_DIRNAME = "dirvish"

    def __init__(self, bank_path: str):
        """Initialize bank scanner.

        Args:
            bank_path: Root directory of the dirvish bank.
        """
        self.bank_path = bank_path
        self.logger = logging.getLogger(__name__)

    def validate_bank(self) -> None:
        """Check that the bank is an existing, listable directory.

        Raises:
            ConfigurationError: If the bank cannot be used.
        """
        if not self.bank_path:
            raise ConfigurationError("No bank path configured")

        if not os.path.exists(self.bank_path):
            raise ConfigurationError(f"Bank path does not exist: {self.bank_path}")

        if not os.path.isdir(self.bank_path):
            raise ConfigurationError(f"Bank path is not a directory: {self.bank_path}")

        if not os.access(self.bank_path, os.R_OK | os.X_OK):
            raise ConfigurationError(f"Bank path not readable: {self.bank_path}")

    def load_skip_list(self) -> Set[str]:
        """Load vault names listed in the bank's skip file.

        Returns:
            Set of vault base names to exclude. Empty if there is no skip file.

        Raises:
            ConfigurationError: If the skip file exists but cannot be read.
        """
        skip_path = os.path.join(self.bank_path, self.SKIP_FILENAME)
        if not os.path.isfile(skip_path):
            return set()

        try:
            with open(skip_path, 'r', encoding='utf-8') as f:
                lines = f.readlines()
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigurationError(f"Cannot read skip file {skip_path}: {e}")

        skip = set()
        for line in lines:
            entry = line.strip()
            if not entry:
                continue
            # Entries may be written as paths; only the final component counts
            skip.add(os.path.basename(entry.rstrip('/')) or entry)

        self.logger.debug(f"Loaded {len(skip)} skip entries from {skip_path}")
        return skip

    def list_vaults(self, skip: Optional[Set[str]] = None) -> List[Vault]:
        """List the vaults of the bank in discovery order.

        Args:
            skip: Vault base names to exclude.

        Returns:
            Vaults sorted by name.

        Raises:
            ConfigurationError: If the bank cannot be listed.
        """
        skip = skip or set()
        vaults = []

        try:
            entries = sorted(os.scandir(self.bank_path), key=lambda e: e.name)
        except OSError as e:
            raise ConfigurationError(f"Cannot list bank {self.bank_path}: {e}")

        for entry in entries:
            if not entry.is_dir():
                continue
            if entry.name in skip:
                self.logger.info(f"Skipping vault {entry.name}")
                continue
            vaults.append(Vault(name=entry.name, path=entry.path))

        self.logger.info(f"Found {len(vaults)} vaults in {self.bank_path}")
        return vaults

    def list_images(self, vault: Vault) -> List[Image]:
        """List candidate images of a vault, newest first.

        Images are ordered by directory modification time, ties broken by
        name. The dirvish tooling directory and plain files are ignored.

        Args:
            vault: Vault to list.

        Returns:
            List of Image objects.
        """
        images = []

        try:
            entries = list(os.scandir(vault.path))
        except OSError as e:
            self.logger.error(f"Cannot list vault {vault.name}: {e}")
            return images

        for entry in entries:
            if entry.name == self.TOOLING_DIRNAME:
                continue
            try:
                if not entry.is_dir():
                    continue
                modified_time = datetime.fromtimestamp(entry.stat().st_mtime)
            except OSError as e:
                self.logger.debug(f"Skipping {entry.path}: {e}")
                continue
            images.append(Image(name=entry.name, path=entry.path, modified_time=modified_time))

        images.sort(key=lambda image: (image.modified_time, image.name), reverse=True)
        self.logger.debug(f"Vault {vault.name}: {len(images)} images")
        return images
