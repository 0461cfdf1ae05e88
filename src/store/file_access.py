"""Filesystem access facade for save files.

The store layer only touches disk through this protocol so tests can
inject failures and alternate backends can be swapped in.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from core.errors import SaveKitReadError, SaveKitWriteError
from core.logging_config import get_logger

_LOGGER = get_logger(__name__)


class FileAccess(Protocol):
    """Whole-file operations required by the save store."""

    def directory_exists(self, path: Path) -> bool: ...

    def make_directory(self, path: Path) -> None: ...

    def file_exists(self, path: Path) -> bool: ...

    def read_all_bytes(self, path: Path) -> bytes: ...

    def write_all_bytes(self, path: Path, payload: bytes) -> None: ...

    def delete_file(self, path: Path) -> bool: ...


class LocalFileAccess:
    """Local disk implementation of :class:`FileAccess`."""

    def directory_exists(self, path: Path) -> bool:
        return path.is_dir()

    def make_directory(self, path: Path) -> None:
        """Create a directory and any missing parents.

        Raises:
            SaveKitWriteError: If the directory cannot be created.
        """
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as error:
            raise SaveKitWriteError(
                f"Failed to create save directory {path}: {error}. Check permissions."
            ) from error

    def file_exists(self, path: Path) -> bool:
        return path.is_file()

    def read_all_bytes(self, path: Path) -> bytes:
        """Read a whole file.

        Raises:
            SaveKitReadError: If the file is missing or unreadable.
        """
        try:
            return path.read_bytes()
        except FileNotFoundError as error:
            raise SaveKitReadError(f"Save file vanished before it could be read: {path}.") from error
        except OSError as error:
            raise SaveKitReadError(f"Failed to read save file {path}: {error}.") from error

    def write_all_bytes(self, path: Path, payload: bytes) -> None:
        """Replace a file's contents, creating it and its parent directories when missing.

        Raises:
            SaveKitWriteError: If the directory or file cannot be written.
        """
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(payload)
        except OSError as error:
            raise SaveKitWriteError(f"Failed to write save file {path}: {error}.") from error

    def delete_file(self, path: Path) -> bool:
        """Delete a file, logging instead of raising on failure.

        Returns:
            Whether a file was deleted.
        """
        if not path.is_file():
            _LOGGER.info("save_file_missing", path=str(path))
            return False
        try:
            path.unlink()
        except OSError as error:
            _LOGGER.error("save_file_delete_failed", path=str(path), error=str(error))
            return False
        _LOGGER.info("save_file_deleted", path=str(path))
        return True
