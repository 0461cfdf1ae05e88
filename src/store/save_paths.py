"""Save file path resolution.

This module maps a file name and format selector onto a path under
the configured storage root, creating the saves directory on demand.
"""

from __future__ import annotations

from pathlib import Path

from core.config import SaveKitConfig, parse_file_name
from core.constants import DEFAULT_FILE_EXTENSION, SAVED_GAMES_DIR_NAME
from core.types import SaveFileFormat
from store.file_access import FileAccess

_FORMAT_EXTENSIONS = {
    SaveFileFormat.BIN: ".bin",
    SaveFileFormat.SAV: ".sav",
    SaveFileFormat.DAT: ".dat",
}


def file_extension(file_format: SaveFileFormat) -> str:
    """Return the extension for a format, ``.bin`` for unmapped formats."""
    return _FORMAT_EXTENSIONS.get(file_format, DEFAULT_FILE_EXTENSION)


def saves_directory(storage_root: Path) -> Path:
    """Return the saves directory below a storage root."""
    return storage_root / SAVED_GAMES_DIR_NAME


def prepare_file_path(
    config: SaveKitConfig,
    file_access: FileAccess,
    file_name: str | None = None,
    file_format: SaveFileFormat | None = None,
) -> Path:
    """Build the full path of a save file.

    Args:
        config: Runtime configuration with storage root and defaults.
        file_access: Filesystem facade used to create the saves directory.
        file_name: Bare file name; the configured default when omitted.
        file_format: Extension selector; the configured default when omitted.

    Returns:
        Path of the save file. The file itself is not created.

    Raises:
        SaveKitConfigError: If the file name is empty or contains separators.
        SaveKitWriteError: If the saves directory cannot be created.
    """
    base_directory = saves_directory(config.storage_root)
    if not file_access.directory_exists(base_directory):
        file_access.make_directory(base_directory)
    name = parse_file_name(file_name, "file name") if file_name else config.default_file_name
    extension = file_extension(file_format or config.default_format)
    return base_directory / f"{name}{extension}"
