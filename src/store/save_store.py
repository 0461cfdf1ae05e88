"""Keyed record store over a single save file.

Every operation reads the whole file, decodes all records, mutates the
list in memory, re-encodes it, and rewrites the whole file. Nothing is
cached between calls. Operations report their outcome as a result
object instead of raising for read, write, or corruption failures.
"""

from __future__ import annotations

from pathlib import Path

from codec.record_codec import decode_records, encode_records, iter_records
from core.errors import (
    SaveKitCodecError,
    SaveKitDecodeError,
    SaveKitReadError,
    SaveKitStoreError,
    SaveKitWriteError,
)
from core.logging_config import get_logger
from core.types import (
    DataType,
    LookupResult,
    MutationResult,
    Record,
    RecordsResult,
    StoreStatus,
)
from store.file_access import FileAccess, LocalFileAccess

_LOGGER = get_logger(__name__)


class SaveStore:
    """Upsert, lookup, and remove records by key in a save file.

    The store holds no state besides its file access facade. Calls on
    the same path are not serialized: two overlapping writers each
    rewrite the whole file and the last one wins. Callers sharing a
    path across threads or processes must provide their own locking.
    Writes are not atomic; a failed write may leave the file partially
    overwritten.
    """

    def __init__(self, file_access: FileAccess | None = None) -> None:
        """Initialize the store.

        Args:
            file_access: Filesystem facade, local disk when omitted.
        """
        self._file_access = file_access or LocalFileAccess()

    def upsert(
        self,
        key: str,
        data: bytes,
        data_type: DataType,
        path: str | Path,
    ) -> MutationResult:
        """Insert or replace the record for ``key``.

        The previous record for the key, if any, is removed and the new
        record is appended after all others. A missing file is created
        holding just the new record.

        Args:
            key: Record key.
            data: Encoded payload.
            data_type: Type tag describing the payload.
            path: Save file path.

        Returns:
            ``ok`` with the written record count, or the failure status.
            A corrupt file is never rewritten.

        Raises:
            SaveKitCodecError: If the key, payload, or type tag cannot be encoded.
        """
        save_path = Path(path)
        new_record = Record(key=key, data_type=_coerce_data_type(data_type), data=bytes(data))
        created = not self._file_access.file_exists(save_path)
        try:
            if created:
                records = [new_record]
            else:
                existing = self._read_records(save_path)
                records = [record for record in existing if record.key != key]
                records.append(new_record)
            self._write_records(save_path, records)
        except SaveKitDecodeError as error:
            return self._mutation_failure("corrupt", save_path, error)
        except SaveKitStoreError as error:
            return self._mutation_failure(_store_error_status(error), save_path, error)
        if created:
            _LOGGER.info("save_file_created", path=str(save_path))
        _LOGGER.info(
            "record_upserted",
            path=str(save_path),
            key=key,
            data_type=new_record.data_type.name,
            record_count=len(records),
        )
        return MutationResult(status="ok", path=str(save_path), record_count=len(records))

    def lookup(self, key: str, path: str | Path) -> LookupResult:
        """Find the record stored under ``key``.

        Records are decoded in file order and the first match wins, so a
        match that precedes a corrupt tail is still returned.

        Args:
            key: Record key.
            path: Save file path.

        Returns:
            ``found`` with payload and type tag, ``not_found`` when the file
            or key is absent, otherwise the failure status.
        """
        save_path = Path(path)
        if not self._file_access.file_exists(save_path):
            return LookupResult(
                status="not_found",
                key=key,
                message=f"Save file not found: {save_path}.",
            )
        try:
            payload = self._file_access.read_all_bytes(save_path)
            for record in iter_records(payload):
                if record.key == key:
                    return LookupResult(
                        status="found",
                        key=key,
                        data=record.data,
                        data_type=record.data_type,
                    )
        except SaveKitDecodeError as error:
            _log_failure("corrupt", save_path, error)
            return LookupResult(status="corrupt", key=key, message=str(error))
        except SaveKitReadError as error:
            _log_failure("read_failure", save_path, error)
            return LookupResult(status="read_failure", key=key, message=str(error))
        return LookupResult(
            status="not_found",
            key=key,
            message=f"Key '{key}' not found in {save_path}.",
        )

    def remove(self, key: str, path: str | Path) -> MutationResult:
        """Remove the record stored under ``key``.

        The file is rewritten even when the key is absent; ``removed`` on
        the result tells whether a record was actually dropped.

        Args:
            key: Record key.
            path: Save file path.

        Returns:
            ``ok`` when the file was rewritten, ``not_found`` when the file
            does not exist, otherwise the failure status.
        """
        save_path = Path(path)
        if not self._file_access.file_exists(save_path):
            return MutationResult(
                status="not_found",
                path=str(save_path),
                message=f"Save file not found: {save_path}. Nothing to remove.",
            )
        try:
            existing = self._read_records(save_path)
            remaining = [record for record in existing if record.key != key]
            self._write_records(save_path, remaining)
        except SaveKitDecodeError as error:
            return self._mutation_failure("corrupt", save_path, error)
        except SaveKitStoreError as error:
            return self._mutation_failure(_store_error_status(error), save_path, error)
        removed = len(remaining) != len(existing)
        _LOGGER.info(
            "record_removed",
            path=str(save_path),
            key=key,
            removed=removed,
            record_count=len(remaining),
        )
        return MutationResult(
            status="ok",
            path=str(save_path),
            record_count=len(remaining),
            removed=removed,
        )

    def read_records(self, path: str | Path) -> RecordsResult:
        """Decode every record of a save file in file order."""
        save_path = Path(path)
        if not self._file_access.file_exists(save_path):
            return RecordsResult(
                status="not_found",
                path=str(save_path),
                message=f"Save file not found: {save_path}.",
            )
        try:
            records = self._read_records(save_path)
        except SaveKitDecodeError as error:
            _log_failure("corrupt", save_path, error)
            return RecordsResult(status="corrupt", path=str(save_path), message=str(error))
        except SaveKitReadError as error:
            _log_failure("read_failure", save_path, error)
            return RecordsResult(status="read_failure", path=str(save_path), message=str(error))
        return RecordsResult(status="ok", path=str(save_path), records=tuple(records))

    def _read_records(self, save_path: Path) -> list[Record]:
        return decode_records(self._file_access.read_all_bytes(save_path))

    def _write_records(self, save_path: Path, records: list[Record]) -> None:
        self._file_access.write_all_bytes(save_path, encode_records(records))

    @staticmethod
    def _mutation_failure(
        status: StoreStatus,
        save_path: Path,
        error: Exception,
    ) -> MutationResult:
        _log_failure(status, save_path, error)
        return MutationResult(status=status, path=str(save_path), message=str(error))


def _coerce_data_type(data_type: DataType | int) -> DataType:
    try:
        return DataType(data_type)
    except ValueError as error:
        raise SaveKitCodecError(f"Unknown data type {data_type!r}.") from error


def _store_error_status(error: SaveKitStoreError) -> StoreStatus:
    if isinstance(error, SaveKitWriteError):
        return "write_failure"
    return "read_failure"


def _log_failure(status: StoreStatus, save_path: Path, error: Exception) -> None:
    event = {
        "corrupt": "store_file_corrupt",
        "write_failure": "store_write_failed",
    }.get(status, "store_read_failed")
    _LOGGER.error(event, path=str(save_path), error=str(error))
