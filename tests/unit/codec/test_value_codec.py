"""Unit tests for typed value codecs."""

from __future__ import annotations

import logging

import pytest

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
from core.errors import SaveKitCodecError, SaveKitDecodeError
from core.types import DataType, Quaternion, Rotator, Transform, Vector3


@pytest.mark.parametrize("value", [0, -1, 42, -(2**31), 2**31 - 1])
def test_int_roundtrip_boundaries(value: int) -> None:
    """Int codec should roundtrip zero, negatives, and int32 limits."""
    assert decode_int(encode_int(value)) == value


def test_int_encoding_is_little_endian() -> None:
    """Int payload should match the documented little-endian layout."""
    assert encode_int(42) == bytes([42, 0, 0, 0])


@pytest.mark.parametrize("value", [2**31, -(2**31) - 1, True, 1.5])
def test_int_encode_rejects_out_of_range_values(value: object) -> None:
    """Int encoder should reject values outside int32 and non-integers."""
    with pytest.raises(SaveKitCodecError):
        encode_int(value)  # type: ignore[arg-type]

    assert True


@pytest.mark.parametrize("value", [0.0, -1.0, 1.5, 0.25, 1024.0])
def test_float_roundtrip_exact_binary32_values(value: float) -> None:
    """Float codec should roundtrip values representable in binary32."""
    assert decode_float(encode_float(value)) == value


def test_float_encode_rejects_overflow() -> None:
    """Float encoder should reject finite values beyond binary32 range."""
    with pytest.raises(SaveKitCodecError):
        encode_float(1e39)

    assert True


def test_float_encode_accepts_max_binary32_literal() -> None:
    """The usual FLT_MAX literal should round to the largest finite binary32."""
    assert encode_float(3.4028235e38) == b"\xff\xff\x7f\x7f"


def test_float_encode_rejects_non_numeric_value() -> None:
    """Non-numeric floats should fail with a codec error."""
    with pytest.raises(SaveKitCodecError):
        encode_float("1.5")  # type: ignore[arg-type]

    assert True


def test_float_decode_rejects_wrong_length() -> None:
    """Fixed-width decode should fail for payloads of another length."""
    with pytest.raises(SaveKitDecodeError):
        decode_float(b"\x00\x00\x00")

    assert True


def test_bool_roundtrip_and_single_byte_width() -> None:
    """Bool codec should write one byte and roundtrip both values."""
    assert (
        encode_bool(True) == b"\x01"
        and decode_bool(encode_bool(True)) is True
        and decode_bool(encode_bool(False)) is False
    )


def test_bool_decode_treats_nonzero_as_true() -> None:
    """Any non-zero byte should decode as true."""
    assert decode_bool(b"\x7f") is True


@pytest.mark.parametrize("value", ["", "GameSave", "héllo wörld", "セーブ", "🎮"])
def test_string_roundtrip_including_empty_and_non_ascii(value: str) -> None:
    """String codec should roundtrip empty and non-ASCII text."""
    assert decode_string(encode_string(value)) == value


def test_string_payload_is_length_prefixed_utf8() -> None:
    """String payload should be a u32 byte length followed by UTF-8."""
    assert encode_string("hé") == b"\x03\x00\x00\x00h\xc3\xa9"


def test_string_decode_rejects_prefix_longer_than_payload() -> None:
    """String decoder should fail when the prefix exceeds the bytes left."""
    with pytest.raises(SaveKitDecodeError):
        decode_string(b"\x05\x00\x00\x00abc")

    assert True


def test_string_decode_rejects_trailing_bytes() -> None:
    """String decoder should fail when bytes follow the declared text."""
    with pytest.raises(SaveKitDecodeError):
        decode_string(b"\x01\x00\x00\x00ab")

    assert True


@pytest.mark.parametrize(("width", "size"), [(8, 1), (16, 2), (32, 4), (64, 8)])
def test_enum_encode_uses_selected_width(width: int, size: int) -> None:
    """Enum encoder should emit exactly width/8 bytes."""
    assert len(encode_enum(3, width)) == size


@pytest.mark.parametrize("width", [8, 16, 32, 64])
def test_enum_roundtrip_at_matching_width(width: int) -> None:
    """Enum decode at the encoding width should roundtrip."""
    assert decode_enum(encode_enum(5, width), width) == 5


def test_enum_default_decode_truncates_wide_values(caplog: pytest.LogCaptureFixture) -> None:
    """Default 8-bit decode of a 32-bit payload should read only the low byte and warn."""
    with caplog.at_level(logging.WARNING):
        value = decode_enum(encode_enum(0x1234, 32))

    assert value == 0x34 and "enum_width_mismatch" in caplog.text


def test_enum_encode_rejects_values_wider_than_width() -> None:
    """Enum encoder should refuse values that do not fit the width."""
    with pytest.raises(SaveKitCodecError):
        encode_enum(256, 8)

    assert True


def test_enum_rejects_unsupported_width() -> None:
    """Enum codec should only accept 8, 16, 32, and 64 bit widths."""
    with pytest.raises(SaveKitCodecError):
        encode_enum(1, 24)

    assert True


def test_vector_and_rotator_roundtrip() -> None:
    """Vector and rotator codecs should roundtrip three doubles."""
    vector = Vector3(1.5, -2.25, 1e10)
    rotator = Rotator(pitch=10.0, yaw=-90.0, roll=0.5)

    assert decode_vector(encode_vector(vector)) == vector and decode_rotator(
        encode_rotator(rotator)
    ) == rotator


@pytest.mark.parametrize(
    "encode",
    [
        lambda: encode_vector(Vector3("a", 0.0, 0.0)),  # type: ignore[arg-type]
        lambda: encode_rotator(Rotator(pitch=None, yaw=0.0, roll=0.0)),  # type: ignore[arg-type]
        lambda: encode_transform(Transform(scale=Vector3(1.0, "b", 1.0))),  # type: ignore[arg-type]
    ],
)
def test_component_encoders_reject_non_numeric_values(encode) -> None:
    """Non-numeric components should raise a codec error, not struct.error."""
    with pytest.raises(SaveKitCodecError):
        encode()

    assert True


def test_identity_transform_roundtrip() -> None:
    """Identity transform should roundtrip through an 80 byte payload."""
    payload = encode_transform(Transform())

    assert len(payload) == 80 and decode_transform(payload) == Transform()


def test_transform_roundtrip_preserves_component_order() -> None:
    """Translation, rotation, and scale should decode into their own fields."""
    transform = Transform(
        translation=Vector3(1.0, 2.0, 3.0),
        rotation=Quaternion(0.0, 0.0, 0.7071067811865476, 0.7071067811865476),
        scale=Vector3(2.0, 2.0, 0.5),
    )

    assert decode_transform(encode_transform(transform)) == transform


def test_transform_decode_rejects_short_payload() -> None:
    """Transform decoder should fail on truncated payloads."""
    with pytest.raises(SaveKitDecodeError):
        decode_transform(encode_transform(Transform())[:-1])

    assert True


def test_encode_value_dispatches_by_data_type() -> None:
    """Registry dispatch should use the codec matching the type tag."""
    payload = encode_value(DataType.STRING, "Knight")

    assert decode_value(DataType.STRING, payload) == "Knight"


def test_encode_value_rejects_types_without_codec() -> None:
    """Actor records carry opaque bytes and have no value codec."""
    with pytest.raises(SaveKitCodecError):
        encode_value(DataType.ACTOR, object())

    assert True
