"""Shared typed models.

This module defines immutable data models used by the codec, store,
SDK, and CLI layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Literal


class DataType(IntEnum):
    """Type tag stored with every record, one unsigned byte on disk."""

    FLOAT = 0
    BOOL = 1
    INT = 2
    STRING = 3
    ENUM = 4
    ACTOR = 5
    VECTOR = 6
    ROTATOR = 7
    TRANSFORM = 8


class SaveFileFormat(Enum):
    """Save file format selector; only picks the file extension."""

    BIN = "BIN"
    SAV = "SAV"
    DAT = "DAT"
    JSON = "JSON"


StoreStatus = Literal["ok", "found", "not_found", "read_failure", "write_failure", "corrupt"]


@dataclass(frozen=True)
class Record:
    """One keyed payload as serialized into a save file.

    Attributes:
        key: Caller-chosen identifier, unique within a save file.
        data_type: Tag describing how to interpret ``data``.
        data: Opaque encoded payload.
    """

    key: str
    data_type: DataType
    data: bytes


@dataclass(frozen=True)
class Vector3:
    """Three-component double precision vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


@dataclass(frozen=True)
class Rotator:
    """Euler rotation in degrees."""

    pitch: float = 0.0
    yaw: float = 0.0
    roll: float = 0.0


@dataclass(frozen=True)
class Quaternion:
    """Rotation quaternion, identity by default."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0


@dataclass(frozen=True)
class Transform:
    """Translation, rotation, and scale of an object in 3D space.

    Attributes:
        translation: Position offset.
        rotation: Orientation quaternion.
        scale: Per-axis scale factors.
    """

    translation: Vector3 = field(default_factory=Vector3)
    rotation: Quaternion = field(default_factory=Quaternion)
    scale: Vector3 = field(default_factory=lambda: Vector3(1.0, 1.0, 1.0))


@dataclass(frozen=True)
class MutationResult:
    """Outcome of an upsert or remove against a save file.

    Attributes:
        status: ``ok`` on success, otherwise the failure category.
        path: Save file path the operation targeted.
        message: Human-readable detail for failures.
        record_count: Records written to the file on success.
        removed: Whether a record with the requested key was dropped.
    """

    status: StoreStatus
    path: str
    message: str = ""
    record_count: int = 0
    removed: bool = False

    @property
    def succeeded(self) -> bool:
        """Return whether the file was written."""
        return self.status == "ok"


@dataclass(frozen=True)
class LookupResult:
    """Outcome of a key lookup.

    Attributes:
        status: ``found``, ``not_found``, ``read_failure``, or ``corrupt``.
        key: Requested key.
        data: Stored payload when found.
        data_type: Stored type tag when found.
        message: Human-readable detail for failures.
    """

    status: StoreStatus
    key: str
    data: bytes | None = None
    data_type: DataType | None = None
    message: str = ""

    @property
    def found(self) -> bool:
        """Return whether the key was present."""
        return self.status == "found"


@dataclass(frozen=True)
class RecordsResult:
    """Outcome of reading every record of a save file."""

    status: StoreStatus
    path: str
    records: tuple[Record, ...] = ()
    message: str = ""

    @property
    def succeeded(self) -> bool:
        """Return whether the file decoded cleanly."""
        return self.status == "ok"
