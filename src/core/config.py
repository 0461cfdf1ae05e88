"""Runtime configuration model for SaveKit.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import DEFAULT_SAVE_FILE_FORMAT, DEFAULT_SAVE_FILE_NAME, DEFAULT_STORAGE_ROOT
from core.errors import SaveKitConfigError
from core.types import SaveFileFormat


@dataclass(frozen=True)
class SaveKitConfig:
    """Validated runtime configuration.

    Attributes:
        storage_root: Writable root under which the saves directory lives.
        default_file_name: Save file name used when callers pass none.
        default_format: Save file format used when callers pass none.
    """

    storage_root: Path
    default_file_name: str
    default_format: SaveFileFormat

    @classmethod
    def from_env(cls) -> "SaveKitConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            SaveKitConfigError: If environment values are invalid.
        """
        storage_root_value = os.getenv("SAVEKIT_STORAGE_ROOT", str(DEFAULT_STORAGE_ROOT))
        file_name_value = os.getenv("SAVEKIT_DEFAULT_FILE_NAME", DEFAULT_SAVE_FILE_NAME)
        format_value = os.getenv("SAVEKIT_DEFAULT_FORMAT", DEFAULT_SAVE_FILE_FORMAT)
        return cls(
            storage_root=Path(storage_root_value).expanduser().resolve(),
            default_file_name=parse_file_name(file_name_value, "SAVEKIT_DEFAULT_FILE_NAME"),
            default_format=parse_save_file_format(format_value, "SAVEKIT_DEFAULT_FORMAT"),
        )


def parse_file_name(raw_value: str, source: str) -> str:
    """Validate a bare save file name.

    Args:
        raw_value: Candidate file name without extension.
        source: Where the value came from, used in error messages.

    Returns:
        Stripped file name.

    Raises:
        SaveKitConfigError: If the name is empty or contains a path separator.
    """
    file_name = raw_value.strip()
    if not file_name:
        raise SaveKitConfigError(
            f"Invalid {source} value: file name is empty. Provide a non-empty save file name."
        )
    if "/" in file_name or "\\" in file_name:
        raise SaveKitConfigError(
            f"Invalid {source} value '{raw_value}': file name must not contain path separators. "
            "Use the storage root to choose a directory."
        )
    return file_name


def parse_save_file_format(raw_value: str, source: str) -> SaveFileFormat:
    """Parse a save file format selector.

    Args:
        raw_value: Format name such as ``BIN`` or ``sav``.
        source: Where the value came from, used in error messages.

    Returns:
        Parsed format enum member.

    Raises:
        SaveKitConfigError: If value is not a known format.
    """
    try:
        return SaveFileFormat(raw_value.strip().upper())
    except ValueError as error:
        supported = ", ".join(member.value for member in SaveFileFormat)
        raise SaveKitConfigError(
            f"Invalid {source} value: expected one of {supported}, got '{raw_value}'."
        ) from error
