"""Unit tests for save file record serialization."""

from __future__ import annotations

import pytest

from codec.byte_cursor import ByteReader
from codec.record_codec import decode_record, decode_records, encode_record, encode_records
from core.errors import SaveKitDecodeError
from core.types import DataType, Record


def _health_record() -> Record:
    return Record(key="Health", data_type=DataType.INT, data=bytes([42, 0, 0, 0]))


def test_encode_record_matches_documented_layout() -> None:
    """Record bytes should be tag, prefixed key, then prefixed payload."""
    expected = (
        b"\x02"
        + b"\x06\x00\x00\x00Health"
        + b"\x04\x00\x00\x00"
        + bytes([42, 0, 0, 0])
    )

    assert encode_record(_health_record()) == expected


def test_decode_record_returns_none_at_clean_end() -> None:
    """Exhausted cursor should signal end of stream, not an error."""
    reader = ByteReader(encode_record(_health_record()))
    first = decode_record(reader)

    assert first == _health_record() and decode_record(reader) is None


def test_decode_records_of_empty_payload_is_empty() -> None:
    """An empty save file holds zero records."""
    assert decode_records(b"") == []


def test_records_roundtrip_preserves_order() -> None:
    """Concatenated records should decode back in file order."""
    records = [
        Record(key="b", data_type=DataType.BOOL, data=b"\x01"),
        Record(key="a", data_type=DataType.STRING, data=b""),
        _health_record(),
    ]

    assert decode_records(encode_records(records)) == records


def test_non_ascii_key_roundtrip() -> None:
    """Keys should be stored as UTF-8 and survive a roundtrip."""
    record = Record(key="Spielstand-Größe", data_type=DataType.FLOAT, data=b"\x00" * 4)

    assert decode_records(encode_record(record)) == [record]


@pytest.mark.parametrize("cut", [1, 3, 5, 11, 14, 17])
def test_truncated_record_raises_decode_error(cut: int) -> None:
    """Any cut inside a record should be corruption, never a partial record."""
    payload = encode_record(_health_record())[:cut]

    with pytest.raises(SaveKitDecodeError):
        decode_records(payload)

    assert True


def test_trailing_partial_record_after_valid_record_is_corruption() -> None:
    """A valid record followed by a stray byte should fail the whole decode."""
    payload = encode_record(_health_record()) + b"\x02"

    with pytest.raises(SaveKitDecodeError):
        decode_records(payload)

    assert True


def test_length_prefix_exceeding_buffer_is_corruption() -> None:
    """A key length larger than the remaining bytes should fail."""
    payload = b"\x02" + b"\xff\x00\x00\x00" + b"abc"

    with pytest.raises(SaveKitDecodeError):
        decode_records(payload)

    assert True


def test_unknown_type_tag_is_corruption() -> None:
    """Tags outside the DataType range should be rejected."""
    payload = b"\x63" + encode_record(_health_record())[1:]

    with pytest.raises(SaveKitDecodeError):
        decode_records(payload)

    assert True


def test_invalid_utf8_key_is_corruption() -> None:
    """Keys must decode as UTF-8."""
    payload = b"\x02" + b"\x01\x00\x00\x00\xff" + b"\x00\x00\x00\x00"

    with pytest.raises(SaveKitDecodeError):
        decode_records(payload)

    assert True
