"""Python SDK for save file operations.

This module exposes high-level APIs that resolve save file paths from
configuration and move typed values through the value codecs and the
record store.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Any

from codec.value_codec import decode_enum, decode_value, encode_enum, encode_value
from core.config import SaveKitConfig
from core.constants import DEFAULT_ENUM_WIDTH
from core.errors import SaveKitStoreError
from core.types import DataType, LookupResult, MutationResult, SaveFileFormat
from store.file_access import FileAccess, LocalFileAccess
from store.save_paths import prepare_file_path
from store.save_store import SaveStore


class SaveKitClient:
    """Primary SDK entry point for save files."""

    def __init__(
        self,
        config: SaveKitConfig | None = None,
        file_access: FileAccess | None = None,
    ) -> None:
        """Create SDK client.

        Args:
            config: Optional runtime configuration.
            file_access: Optional filesystem facade.
        """
        self._config = config or SaveKitConfig.from_env()
        self._file_access = file_access or LocalFileAccess()
        self._store = SaveStore(self._file_access)

    @property
    def config(self) -> SaveKitConfig:
        return self._config

    @property
    def store(self) -> SaveStore:
        return self._store

    def with_storage_root(self, storage_root: str) -> "SaveKitClient":
        """Return a client bound to another storage root."""
        resolved_root = Path(storage_root).expanduser().resolve()
        return SaveKitClient(replace(self._config, storage_root=resolved_root), self._file_access)

    def file_path(
        self,
        file_name: str | None = None,
        file_format: SaveFileFormat | None = None,
    ) -> Path:
        """Resolve a save file path, creating the saves directory.

        Args:
            file_name: Bare file name; configured default when omitted.
            file_format: Extension selector; configured default when omitted.

        Returns:
            Save file path.
        """
        return prepare_file_path(self._config, self._file_access, file_name, file_format)

    def file_exists(
        self,
        file_name: str | None = None,
        file_format: SaveFileFormat | None = None,
    ) -> bool:
        """Return whether the save file exists."""
        return self._file_access.file_exists(self.file_path(file_name, file_format))

    def delete_file(
        self,
        file_name: str | None = None,
        file_format: SaveFileFormat | None = None,
    ) -> bool:
        """Delete a save file. Failures are logged and reported as ``False``."""
        return self._file_access.delete_file(self.file_path(file_name, file_format))

    def slot(
        self,
        file_name: str | None = None,
        file_format: SaveFileFormat | None = None,
    ) -> "SaveSlot":
        """Get a handle on one save file.

        Args:
            file_name: Bare file name; configured default when omitted.
            file_format: Extension selector; configured default when omitted.

        Returns:
            Save slot handle.
        """
        return SaveSlot(self.file_path(file_name, file_format), self._store)


class SaveSlot:
    """Typed access to the records of one save file."""

    def __init__(self, path: Path, store: SaveStore) -> None:
        self._path = path
        self._store = store

    @property
    def path(self) -> Path:
        return self._path

    def save(
        self,
        key: str,
        value: Any,
        data_type: DataType,
        enum_width: int = DEFAULT_ENUM_WIDTH,
    ) -> MutationResult:
        """Encode ``value`` for ``data_type`` and upsert it under ``key``.

        ``enum_width`` selects the bit width of enum payloads and is
        ignored for other types.

        Raises:
            SaveKitCodecError: If the value cannot be encoded for the type.
        """
        if data_type == DataType.ENUM:
            payload = encode_enum(value, enum_width)
        else:
            payload = encode_value(data_type, value)
        return self._store.upsert(key, payload, data_type, self._path)

    def save_raw(self, key: str, data: bytes, data_type: DataType) -> MutationResult:
        """Upsert an already encoded payload."""
        return self._store.upsert(key, data, data_type, self._path)

    def load(
        self,
        key: str,
        expected_type: DataType | None = None,
        enum_width: int = DEFAULT_ENUM_WIDTH,
    ) -> Any:
        """Load and decode the value stored under ``key``.

        Args:
            key: Record key.
            expected_type: When given, the stored type tag must match.
            enum_width: Bit width used to decode enum payloads.

        Returns:
            Decoded value, or ``None`` when the file or key is absent.

        Raises:
            SaveKitStoreError: If the file is unreadable, corrupt, or the
                stored type differs from ``expected_type``.
            SaveKitDecodeError: If the payload does not decode for its type.
        """
        result = self.load_raw(key)
        if result.status == "not_found":
            return None
        if not result.found or result.data is None or result.data_type is None:
            raise SaveKitStoreError(
                f"Failed to load '{key}' from {self._path}: {result.message}"
            )
        if expected_type is not None and result.data_type != expected_type:
            raise SaveKitStoreError(
                f"Stored value '{key}' in {self._path} is {result.data_type.name}, "
                f"expected {DataType(expected_type).name}."
            )
        if result.data_type == DataType.ENUM:
            return decode_enum(result.data, enum_width)
        return decode_value(result.data_type, result.data)

    def load_raw(self, key: str) -> LookupResult:
        """Look up the raw payload and type tag for ``key``."""
        return self._store.lookup(key, self._path)

    def delete(self, key: str) -> MutationResult:
        """Remove the record stored under ``key``."""
        return self._store.remove(key, self._path)

    def keys(self) -> tuple[str, ...]:
        """List stored keys in file order; empty when the file is absent.

        Raises:
            SaveKitStoreError: If the file is unreadable or corrupt.
        """
        result = self._store.read_records(self._path)
        if result.status == "not_found":
            return ()
        if not result.succeeded:
            raise SaveKitStoreError(f"Failed to list keys in {self._path}: {result.message}")
        return tuple(record.key for record in result.records)
