"""Bounded byte reader and writer.

Both codecs read and write through these helpers so truncation is
detected in one place and reported as a decode error.
"""

from __future__ import annotations

import struct
from typing import cast

from core.constants import LENGTH_PREFIX_FORMAT, MAX_LENGTH_PREFIX
from core.errors import SaveKitCodecError, SaveKitDecodeError

_LENGTH_PREFIX_SIZE = struct.calcsize(LENGTH_PREFIX_FORMAT)


class ByteReader:
    """Forward-only cursor over an immutable byte buffer."""

    def __init__(self, payload: bytes) -> None:
        self._payload = bytes(payload)
        self._offset = 0

    @property
    def offset(self) -> int:
        """Current read position."""
        return self._offset

    def remaining(self) -> int:
        """Return the number of unread bytes."""
        return len(self._payload) - self._offset

    def at_end(self) -> bool:
        """Return whether every byte has been consumed."""
        return self._offset >= len(self._payload)

    def read_exact(self, size: int, field_name: str) -> bytes:
        """Read exactly ``size`` bytes.

        Args:
            size: Number of bytes to consume.
            field_name: Field being decoded, used in error messages.

        Returns:
            The consumed bytes.

        Raises:
            SaveKitDecodeError: If fewer than ``size`` bytes remain.
        """
        if size > self.remaining():
            raise SaveKitDecodeError(
                f"Truncated {field_name} at offset {self._offset}: "
                f"needed {size} bytes, {self.remaining()} remain."
            )
        chunk = self._payload[self._offset : self._offset + size]
        self._offset += size
        return chunk

    def read_struct(self, fmt: str, field_name: str) -> tuple[object, ...]:
        """Read and unpack one fixed-size struct."""
        return struct.unpack(fmt, self.read_exact(struct.calcsize(fmt), field_name))

    def read_length_prefixed(self, field_name: str) -> bytes:
        """Read a u32 length prefix followed by that many bytes.

        Raises:
            SaveKitDecodeError: If the prefix is truncated or exceeds the buffer.
        """
        length = cast(int, self.read_struct(LENGTH_PREFIX_FORMAT, f"{field_name} length")[0])
        if length > self.remaining():
            raise SaveKitDecodeError(
                f"Invalid {field_name} length {length} at offset "
                f"{self._offset - _LENGTH_PREFIX_SIZE}: only {self.remaining()} bytes remain."
            )
        return self.read_exact(length, field_name)


class ByteWriter:
    """Append-only byte buffer."""

    def __init__(self) -> None:
        self._buffer = bytearray()

    def write(self, chunk: bytes) -> None:
        self._buffer.extend(chunk)

    def write_struct(self, fmt: str, *values: object) -> None:
        """Pack values with ``fmt`` and append them.

        Raises:
            SaveKitCodecError: If values do not fit the format.
        """
        try:
            self._buffer.extend(struct.pack(fmt, *values))
        except (struct.error, OverflowError) as error:
            raise SaveKitCodecError(f"Cannot pack {values!r} as '{fmt}': {error}.") from error

    def write_length_prefixed(self, chunk: bytes, field_name: str) -> None:
        """Append a u32 length prefix and the chunk.

        Raises:
            SaveKitCodecError: If the chunk is too long for the prefix.
        """
        if len(chunk) > MAX_LENGTH_PREFIX:
            raise SaveKitCodecError(
                f"Cannot encode {field_name}: {len(chunk)} bytes exceeds the "
                f"{MAX_LENGTH_PREFIX} byte limit."
            )
        self.write_struct(LENGTH_PREFIX_FORMAT, len(chunk))
        self.write(chunk)

    def getvalue(self) -> bytes:
        """Return the accumulated bytes."""
        return bytes(self._buffer)
