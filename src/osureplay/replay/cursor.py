from __future__ import annotations

import io
from typing import Any, Final

from construct import Byte, Construct, Int16sl, Int32sl, Int64sl, Int64ul, StreamError, VarInt

from .errors import MalformedVarIntError, TruncatedInputError

_U8: Final = Byte
_I16: Final = Int16sl
_I32: Final = Int32sl
_U64: Final = Int64ul
_I64: Final = Int64sl

BufferLike = bytes | bytearray | memoryview


def decode_uleb128(data: BufferLike, offset: int = 0) -> tuple[int, int]:
    """Decode an unsigned LEB128 integer starting at `offset`.

    Returns `(value, encoded_length)`.
    """

    stream = io.BytesIO(memoryview(data)[offset:])
    try:
        value = VarInt.parse_stream(stream)
    except StreamError as exc:
        raise MalformedVarIntError(f"unterminated ULEB128 length at offset {offset}") from exc
    return int(value), stream.tell()


class ReplayCursor:
    """Sequential reader over a borrowed replay buffer.

    Reads only move forward; `reset()` rewinds to the start for a fresh
    decoding pass. A failed read leaves the offset where it was.
    """

    __slots__ = ("_view", "_pos")

    def __init__(self, data: BufferLike) -> None:
        self._view = memoryview(data).cast("B")
        self._pos = 0

    @property
    def position(self) -> int:
        return self._pos

    @property
    def remaining(self) -> int:
        return len(self._view) - self._pos

    def has_remaining(self) -> bool:
        return self._pos < len(self._view)

    def reset(self) -> None:
        self._pos = 0

    def _check(self, size: int) -> None:
        if not self.has_remaining():
            raise TruncatedInputError(f"read of {size} bytes at offset {self._pos}: no data left")
        if self._pos + size > len(self._view):
            raise TruncatedInputError(
                f"read of {size} bytes at offset {self._pos} would exceed buffer of {len(self._view)} bytes"
            )

    def _parse(self, field: Construct, size: int) -> Any:
        self._check(size)
        chunk = self._view[self._pos : self._pos + size]
        try:
            value = field.parse(chunk)
        except StreamError as exc:  # pragma: no cover
            raise TruncatedInputError(f"read of {size} bytes at offset {self._pos} failed") from exc
        self._pos += size
        return value

    def u8(self) -> int:
        return int(self._parse(_U8, 1))

    def i16(self) -> int:
        return int(self._parse(_I16, 2))

    def i32(self) -> int:
        return int(self._parse(_I32, 4))

    def u64(self) -> int:
        return int(self._parse(_U64, 8))

    def i64(self) -> int:
        return int(self._parse(_I64, 8))

    def bytes(self, size: int) -> bytes:
        if size < 0:
            raise TruncatedInputError(f"negative read length {size} at offset {self._pos}")
        if size == 0:
            return b""
        self._check(size)
        out = self._view[self._pos : self._pos + size].tobytes()
        self._pos += size
        return out

    def uleb128(self) -> int:
        if not self.has_remaining():
            raise MalformedVarIntError(f"ULEB128 length at offset {self._pos}: no data left")
        value, length = decode_uleb128(self._view, self._pos)
        self._pos += length
        return value
