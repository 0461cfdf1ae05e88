"""Save file record serialization.

A save file is a plain concatenation of records with no header,
footer, count, or checksum. Each record is laid out little-endian as::

    [type tag: u8][key length: u32][key: utf-8][payload length: u32][payload]

End of file is only legal exactly between two records.
"""

from __future__ import annotations

from typing import Iterable, Iterator, cast

from codec.byte_cursor import ByteReader, ByteWriter
from core.constants import TEXT_ENCODING, TYPE_TAG_FORMAT
from core.errors import SaveKitCodecError, SaveKitDecodeError
from core.types import DataType, Record


def encode_record(record: Record) -> bytes:
    """Serialize one record.

    Args:
        record: Record to encode.

    Returns:
        Encoded record bytes.

    Raises:
        SaveKitCodecError: If the key or payload is too long to length-prefix.
    """
    writer = ByteWriter()
    _write_record(writer, record)
    return writer.getvalue()


def encode_records(records: Iterable[Record]) -> bytes:
    """Serialize records back to back in iteration order."""
    writer = ByteWriter()
    for record in records:
        _write_record(writer, record)
    return writer.getvalue()


def decode_record(reader: ByteReader) -> Record | None:
    """Decode the next record from a cursor.

    Args:
        reader: Cursor positioned at a record boundary.

    Returns:
        The decoded record, or ``None`` when the cursor is exhausted.

    Raises:
        SaveKitDecodeError: If the bytes end mid-record or are malformed.
    """
    if reader.at_end():
        return None
    record_offset = reader.offset
    raw_tag = cast(int, reader.read_struct(TYPE_TAG_FORMAT, "type tag")[0])
    data_type = _parse_type_tag(raw_tag, record_offset)
    key_bytes = reader.read_length_prefixed("key")
    try:
        key = key_bytes.decode(TEXT_ENCODING)
    except UnicodeDecodeError as error:
        raise SaveKitDecodeError(
            f"Invalid key at offset {record_offset}: bytes are not valid UTF-8."
        ) from error
    data = reader.read_length_prefixed(f"payload of '{key}'")
    return Record(key=key, data_type=data_type, data=data)


def iter_records(payload: bytes) -> Iterator[Record]:
    """Yield records lazily until a clean end of stream.

    Raises:
        SaveKitDecodeError: When a malformed record is reached.
    """
    reader = ByteReader(payload)
    while True:
        record = decode_record(reader)
        if record is None:
            return
        yield record


def decode_records(payload: bytes) -> list[Record]:
    """Decode every record of a save file payload.

    An empty payload holds zero records.

    Raises:
        SaveKitDecodeError: If any record is truncated or malformed.
    """
    return list(iter_records(payload))


def _write_record(writer: ByteWriter, record: Record) -> None:
    if not isinstance(record.data_type, DataType):
        raise SaveKitCodecError(
            f"Cannot encode record '{record.key}': unknown data type {record.data_type!r}."
        )
    writer.write_struct(TYPE_TAG_FORMAT, int(record.data_type))
    writer.write_length_prefixed(record.key.encode(TEXT_ENCODING), "key")
    writer.write_length_prefixed(bytes(record.data), f"payload of '{record.key}'")


def _parse_type_tag(raw_tag: int, record_offset: int) -> DataType:
    try:
        return DataType(raw_tag)
    except ValueError as error:
        raise SaveKitDecodeError(
            f"Unknown type tag {raw_tag} in record at offset {record_offset}."
        ) from error
