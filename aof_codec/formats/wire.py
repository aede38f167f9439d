"""
Big-endian primitive readers and writers for AOF buffers.

All multi-byte integers in the format are big-endian:
    u8   >B    revision, region id, version parts, lengths, counts (rev < 11)
    u16  >H    fragment ids and counts (rev >= 12)
    u32  >I    game id halves
    i32  >i    player ids, champion/spell ids, fragment data lengths

ByteReader bounds-checks every read and raises TruncatedInputError instead
of struct.error or a short slice. ByteWriter range-checks every value and
raises FieldRangeError naming the field.
"""

import struct
from typing import List

from ..core.errors import FieldRangeError, TruncatedInputError


U8 = struct.Struct('>B')
U16 = struct.Struct('>H')
U32 = struct.Struct('>I')
I32 = struct.Struct('>i')

_RANGES = {
    U8: (0, 0xFF, 'u8'),
    U16: (0, 0xFFFF, 'u16'),
    U32: (0, 0xFFFFFFFF, 'u32'),
    I32: (-0x80000000, 0x7FFFFFFF, 'i32'),
}


class ByteReader:
    """
    Sequential reader over an in-memory buffer.

    Usage:
        reader = ByteReader(data)
        revision = reader.u8()
        name = reader.read(reader.u8())
    """

    def __init__(self, data: bytes):
        self._data = memoryview(bytes(data))
        self.offset = 0

    @property
    def remaining(self) -> int:
        return len(self._data) - self.offset

    def _take(self, size: int, what: str) -> memoryview:
        if size < 0 or size > self.remaining:
            raise TruncatedInputError(context={
                'field': what,
                'offset': self.offset,
                'needed': size,
                'remaining': self.remaining,
            })
        view = self._data[self.offset:self.offset + size]
        self.offset += size
        return view

    def _unpack(self, fmt: struct.Struct, what: str) -> int:
        return fmt.unpack(self._take(fmt.size, what))[0]

    def u8(self, what: str = 'u8') -> int:
        return self._unpack(U8, what)

    def u16(self, what: str = 'u16') -> int:
        return self._unpack(U16, what)

    def u32(self, what: str = 'u32') -> int:
        return self._unpack(U32, what)

    def i32(self, what: str = 'i32') -> int:
        return self._unpack(I32, what)

    def read(self, size: int, what: str = 'bytes') -> bytes:
        return bytes(self._take(size, what))

    def skip(self, size: int, what: str = 'padding') -> None:
        self._take(size, what)


class ByteWriter:
    """
    Accumulates encoded fields and joins them once at the end.

    Each value is checked against its wire width before packing so an
    out-of-range field is reported by name rather than as a bare struct.error.
    """

    def __init__(self):
        self._parts: List[bytes] = []
        self.size = 0

    def _pack(self, fmt: struct.Struct, value: int, field: str) -> None:
        low, high, name = _RANGES[fmt]
        if not isinstance(value, int) or isinstance(value, bool) or not low <= value <= high:
            raise FieldRangeError(field, value, name)
        self._append(fmt.pack(value))

    def _append(self, chunk: bytes) -> None:
        self._parts.append(chunk)
        self.size += len(chunk)

    def u8(self, value: int, field: str) -> None:
        self._pack(U8, value, field)

    def u16(self, value: int, field: str) -> None:
        self._pack(U16, value, field)

    def u32(self, value: int, field: str) -> None:
        self._pack(U32, value, field)

    def i32(self, value: int, field: str) -> None:
        self._pack(I32, value, field)

    def raw(self, data: bytes) -> None:
        self._append(bytes(data))

    def sized_u8(self, data: bytes, field: str) -> None:
        """Write a u8 length prefix followed by the bytes."""
        self.u8(len(data), f"{field} length")
        self.raw(data)

    def sized_i32(self, data: bytes, field: str) -> None:
        """Write an i32 length prefix followed by the bytes."""
        self.i32(len(data), f"{field} length")
        self.raw(data)

    def getvalue(self) -> bytes:
        return b''.join(self._parts)
