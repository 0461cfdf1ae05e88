"""Type-safe parsing of user supplied values.

This module turns CLI strings and YAML scalars/lists into the typed
values accepted by the value codecs, and renders decoded values back
into stable text for CLI and run-spec output.
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from core.errors import SaveKitCodecError
from core.types import DataType, Quaternion, Rotator, Transform, Vector3

_TYPE_ALIASES = {
    "float": DataType.FLOAT,
    "bool": DataType.BOOL,
    "int": DataType.INT,
    "string": DataType.STRING,
    "str": DataType.STRING,
    "enum": DataType.ENUM,
    "actor": DataType.ACTOR,
    "vector": DataType.VECTOR,
    "rotator": DataType.ROTATOR,
    "transform": DataType.TRANSFORM,
}
_TRUE_WORDS = {"true", "1", "yes", "on"}
_FALSE_WORDS = {"false", "0", "no", "off"}


def value_type_names() -> tuple[str, ...]:
    """Return accepted type names for CLI choices."""
    return tuple(name for name in _TYPE_ALIASES if name not in {"str", "actor"})


def parse_data_type(raw_value: str) -> DataType:
    """Parse a type name such as ``int`` or ``Transform``.

    Raises:
        SaveKitCodecError: If the name is unknown.
    """
    data_type = _TYPE_ALIASES.get(raw_value.strip().lower())
    if data_type is None:
        supported = ", ".join(value_type_names())
        raise SaveKitCodecError(f"Unknown value type '{raw_value}'. Use one of: {supported}.")
    return data_type


def parse_value(data_type: DataType, raw_value: object) -> Any:
    """Convert a CLI string or YAML value into a codec input.

    Args:
        data_type: Target type tag.
        raw_value: Text, number, bool, list, or mapping.

    Returns:
        Value accepted by ``encode_value`` for ``data_type``.

    Raises:
        SaveKitCodecError: If the value cannot be interpreted.
    """
    if data_type == DataType.FLOAT:
        return _to_float(raw_value, "float")
    if data_type == DataType.BOOL:
        return _to_bool(raw_value)
    if data_type in (DataType.INT, DataType.ENUM):
        return _to_int(raw_value, data_type.name.lower())
    if data_type == DataType.STRING:
        return raw_value if isinstance(raw_value, str) else str(raw_value)
    if data_type == DataType.VECTOR:
        return Vector3(*_to_floats(raw_value, 3, "vector"))
    if data_type == DataType.ROTATOR:
        return Rotator(*_to_floats(raw_value, 3, "rotator"))
    if data_type == DataType.TRANSFORM:
        return _to_transform(raw_value)
    raise SaveKitCodecError(f"Values of type {data_type.name} cannot be parsed from text.")


def format_value(value: Any) -> str:
    """Render a decoded value as single-line text."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Vector3):
        return _join_floats((value.x, value.y, value.z))
    if isinstance(value, Rotator):
        return _join_floats((value.pitch, value.yaw, value.roll))
    if isinstance(value, Transform):
        translation, rotation, scale = value.translation, value.rotation, value.scale
        return _join_floats(
            (
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
        )
    return str(value)


def _to_float(raw_value: object, kind: str) -> float:
    if isinstance(raw_value, bool):
        raise SaveKitCodecError(f"Invalid {kind} value {raw_value!r}: expected a number.")
    if isinstance(raw_value, (int, float)):
        return float(raw_value)
    if isinstance(raw_value, str):
        try:
            return float(raw_value.strip())
        except ValueError as error:
            raise SaveKitCodecError(f"Invalid {kind} value '{raw_value}': expected a number.") from error
    raise SaveKitCodecError(f"Invalid {kind} value {raw_value!r}: expected a number.")


def _to_int(raw_value: object, kind: str) -> int:
    if isinstance(raw_value, bool):
        raise SaveKitCodecError(f"Invalid {kind} value {raw_value!r}: expected an integer.")
    if isinstance(raw_value, int):
        return raw_value
    if isinstance(raw_value, str):
        try:
            return int(raw_value.strip(), 10)
        except ValueError as error:
            raise SaveKitCodecError(
                f"Invalid {kind} value '{raw_value}': expected an integer."
            ) from error
    raise SaveKitCodecError(f"Invalid {kind} value {raw_value!r}: expected an integer.")


def _to_bool(raw_value: object) -> bool:
    if isinstance(raw_value, bool):
        return raw_value
    if isinstance(raw_value, str):
        word = raw_value.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
    raise SaveKitCodecError(f"Invalid bool value {raw_value!r}: expected true or false.")


def _to_floats(raw_value: object, count: int, kind: str) -> tuple[float, ...]:
    if isinstance(raw_value, str):
        items: Sequence[object] = [item for item in raw_value.split(",") if item.strip()]
    elif isinstance(raw_value, Sequence):
        items = raw_value
    else:
        raise SaveKitCodecError(
            f"Invalid {kind} value {raw_value!r}: expected {count} comma-separated numbers."
        )
    if len(items) != count:
        raise SaveKitCodecError(
            f"Invalid {kind} value {raw_value!r}: expected {count} numbers, got {len(items)}."
        )
    return tuple(_to_float(item, kind) for item in items)


def _to_transform(raw_value: object) -> Transform:
    if isinstance(raw_value, Mapping):
        unknown_keys = sorted(set(raw_value) - {"translation", "rotation", "scale"})
        if unknown_keys:
            raise SaveKitCodecError(
                f"Invalid transform fields: {', '.join(str(key) for key in unknown_keys)}."
            )
        identity = Transform()
        translation = raw_value.get("translation")
        rotation = raw_value.get("rotation")
        scale = raw_value.get("scale")
        return Transform(
            translation=Vector3(*_to_floats(translation, 3, "translation"))
            if translation is not None
            else identity.translation,
            rotation=Quaternion(*_to_floats(rotation, 4, "rotation"))
            if rotation is not None
            else identity.rotation,
            scale=Vector3(*_to_floats(scale, 3, "scale")) if scale is not None else identity.scale,
        )
    components = _to_floats(raw_value, 10, "transform")
    return Transform(
        translation=Vector3(*components[0:3]),
        rotation=Quaternion(*components[3:7]),
        scale=Vector3(*components[7:10]),
    )


def _join_floats(values: Sequence[float]) -> str:
    return ",".join(repr(float(value)) for value in values)
