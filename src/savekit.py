"""Public SDK surface for SaveKit.

This module provides a stable import path for library users.
It re-exports the client, the record store, the codecs, and typed models.
"""

from __future__ import annotations

from codec.record_codec import decode_record, decode_records, encode_record, encode_records
from codec.value_codec import (
    decode_bool,
    decode_enum,
    decode_float,
    decode_int,
    decode_rotator,
    decode_string,
    decode_transform,
    decode_value,
    decode_vector,
    encode_bool,
    encode_enum,
    encode_float,
    encode_int,
    encode_rotator,
    encode_string,
    encode_transform,
    encode_value,
    encode_vector,
)
from core.config import SaveKitConfig
from core.errors import (
    SaveKitCodecError,
    SaveKitDecodeError,
    SaveKitError,
    SaveKitReadError,
    SaveKitStoreError,
    SaveKitWriteError,
)
from core.types import (
    DataType,
    LookupResult,
    MutationResult,
    Quaternion,
    Record,
    RecordsResult,
    Rotator,
    SaveFileFormat,
    Transform,
    Vector3,
)
from store.file_access import FileAccess, LocalFileAccess
from store.save_client import SaveKitClient, SaveSlot
from store.save_store import SaveStore

__all__ = [
    "DataType",
    "FileAccess",
    "LocalFileAccess",
    "LookupResult",
    "MutationResult",
    "Quaternion",
    "Record",
    "RecordsResult",
    "Rotator",
    "SaveFileFormat",
    "SaveKitClient",
    "SaveKitCodecError",
    "SaveKitConfig",
    "SaveKitDecodeError",
    "SaveKitError",
    "SaveKitReadError",
    "SaveKitStoreError",
    "SaveKitWriteError",
    "SaveSlot",
    "SaveStore",
    "Transform",
    "Vector3",
    "decode_bool",
    "decode_enum",
    "decode_float",
    "decode_int",
    "decode_record",
    "decode_records",
    "decode_rotator",
    "decode_string",
    "decode_transform",
    "decode_value",
    "decode_vector",
    "encode_bool",
    "encode_enum",
    "encode_float",
    "encode_int",
    "encode_record",
    "encode_records",
    "encode_rotator",
    "encode_string",
    "encode_transform",
    "encode_value",
    "encode_vector",
]
