"""Writing the mnemonic export file."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from .bip39 import entropy_to_phrase
from .errors import Bip39Error, ExportExistsError, FileIoError

log = logging.getLogger(__name__)

EXPORT_FILE = "export"


class FileIo:
    """Handles the export file kept in a root directory."""

    def __init__(self, root) -> None:
        self._export_path = Path(root) / EXPORT_FILE

    def export_path(self) -> Path:
        return self._export_path

    def check_if_not_exported(self) -> None:
        """Raise ExportExistsError if an export file is already on disk."""
        if self._export_path.exists():
            raise ExportExistsError(self._export_path)

    def entropy_to_file(self, entropy: bytes) -> None:
        """Write the phrase for ``entropy`` to the export file."""
        try:
            phrase = entropy_to_phrase(entropy)
        except Bip39Error as err:
            raise FileIoError(f"Bip39 error: {err}") from err
        self.check_if_not_exported()
        try:
            with open(self._export_path, "x", encoding="utf-8") as file:
                file.write(phrase)
                file.flush()
                os.fsync(file.fileno())
        except FileExistsError:
            raise ExportExistsError(self._export_path) from None
        except OSError as err:
            raise FileIoError(f"File IO error {err}") from err
        log.info("Mnemonic written in file %s", self._export_path)