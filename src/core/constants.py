"""Core constants used across SaveKit modules.

This module centralizes format constants and filesystem defaults.
Keeping values here avoids magic literals in codec and store logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_STORAGE_ROOT = Path(".savekit")
SAVED_GAMES_DIR_NAME = "SavedGames"
DEFAULT_SAVE_FILE_NAME = "GameSave"
DEFAULT_SAVE_FILE_FORMAT = "BIN"
DEFAULT_FILE_EXTENSION = ".bin"

# All numeric fields on disk are little-endian.
TYPE_TAG_FORMAT = "<B"
LENGTH_PREFIX_FORMAT = "<I"
MAX_LENGTH_PREFIX = 2**32 - 1
TEXT_ENCODING = "utf-8"

FLOAT32_FORMAT = "<f"
INT32_FORMAT = "<i"
BOOL_FORMAT = "<B"
VECTOR_COMPONENT_FORMAT = "<3d"
TRANSFORM_FORMAT = "<3d4d3d"

ENUM_WIDTH_FORMATS = {8: "<B", 16: "<H", 32: "<I", 64: "<Q"}
DEFAULT_ENUM_WIDTH = 8

RUN_SPEC_VERSION = 1
