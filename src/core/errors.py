"""SaveKit exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type for debuggability.
"""

from __future__ import annotations


class SaveKitError(Exception):
    """Base exception for all SaveKit failures."""


class SaveKitConfigError(SaveKitError):
    """Raised for invalid runtime configuration."""


class SaveKitCodecError(SaveKitError):
    """Raised when a value cannot be encoded for storage."""


class SaveKitDecodeError(SaveKitCodecError):
    """Raised when bytes do not parse as a well-formed value or record."""


class SaveKitStoreError(SaveKitError):
    """Raised for save file persistence failures."""


class SaveKitReadError(SaveKitStoreError):
    """Raised when a save file cannot be read."""


class SaveKitWriteError(SaveKitStoreError):
    """Raised when a save file cannot be written."""


class SaveKitDependencyError(SaveKitError):
    """Raised when an optional runtime dependency is missing."""


class SaveKitRunSpecError(SaveKitError):
    """Raised for invalid or unsupported run-spec configuration."""
