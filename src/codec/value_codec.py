"""Typed value encoders and decoders.

Each supported value kind has a pure encode/decode pair producing a
self-contained payload for one record. All numbers are little-endian.
Fixed-width decoders reject payloads of any other length; the text
decoder validates its length prefix against the payload.

Enumerations are the exception: ``encode_enum`` writes 8, 16, 32, or
64 bits while ``decode_enum`` reads a single width (8 bits unless told
otherwise) from the head of the payload. A wide value decoded at the
default width is silently truncated, so mismatches are logged.
"""

from __future__ import annotations

import struct
from typing import Any, Callable, cast

from codec.byte_cursor import ByteReader, ByteWriter
from core.constants import (
    BOOL_FORMAT,
    DEFAULT_ENUM_WIDTH,
    ENUM_WIDTH_FORMATS,
    FLOAT32_FORMAT,
    INT32_FORMAT,
    TEXT_ENCODING,
    TRANSFORM_FORMAT,
    VECTOR_COMPONENT_FORMAT,
)
from core.errors import SaveKitCodecError, SaveKitDecodeError
from core.logging_config import get_logger
from core.types import DataType, Quaternion, Rotator, Transform, Vector3

_LOGGER = get_logger(__name__)

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1


def encode_float(value: float) -> bytes:
    """Encode an IEEE-754 binary32 float, rounding to the nearest representable value.

    Raises:
        SaveKitCodecError: If the value is not a number or rounds beyond binary32.
    """
    return _pack(FLOAT32_FORMAT, value)


def decode_float(payload: bytes) -> float:
    return cast(float, _unpack_fixed(FLOAT32_FORMAT, payload, "float")[0])


def encode_bool(value: bool) -> bytes:
    return _pack(BOOL_FORMAT, 1 if value else 0)


def decode_bool(payload: bytes) -> bool:
    """Decode a one byte boolean; any non-zero byte is true."""
    return cast(int, _unpack_fixed(BOOL_FORMAT, payload, "bool")[0]) != 0


def encode_int(value: int) -> bytes:
    """Encode a signed 32-bit integer.

    Raises:
        SaveKitCodecError: If value is outside the int32 range.
    """
    if not _is_plain_int(value) or not _INT32_MIN <= value <= _INT32_MAX:
        raise SaveKitCodecError(
            f"Cannot encode int {value!r}: expected an integer in [{_INT32_MIN}, {_INT32_MAX}]."
        )
    return _pack(INT32_FORMAT, value)


def decode_int(payload: bytes) -> int:
    return cast(int, _unpack_fixed(INT32_FORMAT, payload, "int")[0])


def encode_string(value: str) -> bytes:
    """Encode text as a u32 byte length followed by UTF-8 bytes.

    Raises:
        SaveKitCodecError: If the text cannot be encoded as UTF-8.
    """
    try:
        encoded = value.encode(TEXT_ENCODING)
    except UnicodeEncodeError as error:
        raise SaveKitCodecError(f"Cannot encode string: {error.reason}.") from error
    writer = ByteWriter()
    writer.write_length_prefixed(encoded, "string")
    return writer.getvalue()


def decode_string(payload: bytes) -> str:
    """Decode length-prefixed UTF-8 text.

    Raises:
        SaveKitDecodeError: If the prefix disagrees with the payload length
            or the bytes are not UTF-8.
    """
    reader = ByteReader(payload)
    encoded = reader.read_length_prefixed("string")
    if not reader.at_end():
        raise SaveKitDecodeError(
            f"Invalid string payload: {reader.remaining()} trailing bytes after text."
        )
    try:
        return encoded.decode(TEXT_ENCODING)
    except UnicodeDecodeError as error:
        raise SaveKitDecodeError("Invalid string payload: bytes are not valid UTF-8.") from error


def encode_enum(value: int, width: int = DEFAULT_ENUM_WIDTH) -> bytes:
    """Encode an enumeration value as an unsigned integer of ``width`` bits.

    Args:
        value: Non-negative enumerator value.
        width: One of 8, 16, 32, or 64.

    Raises:
        SaveKitCodecError: If width is unsupported or value does not fit.
    """
    fmt = _enum_format(width)
    if not _is_plain_int(value) or not 0 <= value < 2**width:
        raise SaveKitCodecError(
            f"Cannot encode enum value {value!r}: expected an integer in [0, {2**width - 1}]."
        )
    return _pack(fmt, int(value))


def decode_enum(payload: bytes, width: int = DEFAULT_ENUM_WIDTH) -> int:
    """Decode an enumeration value of ``width`` bits from the payload head.

    Bytes past the requested width are ignored, matching how legacy
    save files were read. A length mismatch is logged because it means
    the encoder used a different width.

    Raises:
        SaveKitDecodeError: If the payload is shorter than ``width`` bits.
    """
    fmt = _enum_format(width)
    size = struct.calcsize(fmt)
    if len(payload) != size:
        _LOGGER.warning(
            "enum_width_mismatch",
            decode_width=width,
            payload_bytes=len(payload),
        )
    reader = ByteReader(payload)
    return cast(int, reader.read_struct(fmt, "enum")[0])


def encode_vector(value: Vector3) -> bytes:
    return _pack(VECTOR_COMPONENT_FORMAT, value.x, value.y, value.z)


def decode_vector(payload: bytes) -> Vector3:
    x, y, z = _unpack_fixed(VECTOR_COMPONENT_FORMAT, payload, "vector")
    return Vector3(cast(float, x), cast(float, y), cast(float, z))


def encode_rotator(value: Rotator) -> bytes:
    return _pack(VECTOR_COMPONENT_FORMAT, value.pitch, value.yaw, value.roll)


def decode_rotator(payload: bytes) -> Rotator:
    pitch, yaw, roll = _unpack_fixed(VECTOR_COMPONENT_FORMAT, payload, "rotator")
    return Rotator(cast(float, pitch), cast(float, yaw), cast(float, roll))


def encode_transform(value: Transform) -> bytes:
    """Encode translation, rotation quaternion, and scale as ten doubles."""
    translation, rotation, scale = value.translation, value.rotation, value.scale
    return _pack(
        TRANSFORM_FORMAT,
        translation.x,
        translation.y,
        translation.z,
        rotation.x,
        rotation.y,
        rotation.z,
        rotation.w,
        scale.x,
        scale.y,
        scale.z,
    )


def decode_transform(payload: bytes) -> Transform:
    unpacked = _unpack_fixed(TRANSFORM_FORMAT, payload, "transform")
    components = [cast(float, item) for item in unpacked]
    return Transform(
        translation=Vector3(*components[0:3]),
        rotation=Quaternion(*components[3:7]),
        scale=Vector3(*components[7:10]),
    )


_ENCODERS: dict[DataType, Callable[[Any], bytes]] = {
    DataType.FLOAT: encode_float,
    DataType.BOOL: encode_bool,
    DataType.INT: encode_int,
    DataType.STRING: encode_string,
    DataType.ENUM: encode_enum,
    DataType.VECTOR: encode_vector,
    DataType.ROTATOR: encode_rotator,
    DataType.TRANSFORM: encode_transform,
}

_DECODERS: dict[DataType, Callable[[bytes], Any]] = {
    DataType.FLOAT: decode_float,
    DataType.BOOL: decode_bool,
    DataType.INT: decode_int,
    DataType.STRING: decode_string,
    DataType.ENUM: decode_enum,
    DataType.VECTOR: decode_vector,
    DataType.ROTATOR: decode_rotator,
    DataType.TRANSFORM: decode_transform,
}


def encode_value(data_type: DataType, value: Any) -> bytes:
    """Encode a value with the codec registered for ``data_type``.

    Raises:
        SaveKitCodecError: If the type has no codec or the value is invalid.
    """
    return _codec_for(_ENCODERS, data_type)(value)


def decode_value(data_type: DataType, payload: bytes) -> Any:
    """Decode a payload with the codec registered for ``data_type``.

    Raises:
        SaveKitCodecError: If the type has no codec.
        SaveKitDecodeError: If the payload is malformed.
    """
    return _codec_for(_DECODERS, data_type)(payload)


def supported_value_types() -> tuple[DataType, ...]:
    """Return data types that have a value codec."""
    return tuple(_ENCODERS)


def _codec_for(registry: dict[DataType, Callable[..., Any]], data_type: DataType) -> Callable[..., Any]:
    codec = registry.get(data_type)
    if codec is None:
        raise SaveKitCodecError(
            f"No value codec for data type {DataType(data_type).name}. "
            "Store its payload as raw bytes instead."
        )
    return codec


def _enum_format(width: int) -> str:
    fmt = ENUM_WIDTH_FORMATS.get(width)
    if fmt is None:
        supported = ", ".join(str(item) for item in ENUM_WIDTH_FORMATS)
        raise SaveKitCodecError(f"Unsupported enum width {width}. Use one of: {supported}.")
    return fmt


def _is_plain_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _pack(fmt: str, *values: object) -> bytes:
    writer = ByteWriter()
    writer.write_struct(fmt, *values)
    return writer.getvalue()


def _unpack_fixed(fmt: str, payload: bytes, kind: str) -> tuple[object, ...]:
    expected_size = struct.calcsize(fmt)
    if len(payload) != expected_size:
        raise SaveKitDecodeError(
            f"Invalid {kind} payload: expected {expected_size} bytes, got {len(payload)}."
        )
    return struct.unpack(fmt, payload)
