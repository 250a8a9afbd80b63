import os
import struct

import numpy as np
from numpy.typing import NDArray

from bmassets.kernel.errors import TruncatedDataError

ArrayBuffer = NDArray[np.uint8] | memoryview | bytes

UINT8 = struct.Struct('<B')
UINT16LE = struct.Struct('<H')
INT16LE = struct.Struct('<h')
UINT32LE = struct.Struct('<I')


def check_bounds(buffer: ArrayBuffer, offset: int, size: int) -> int:
    """Return the offset right after `size` bytes at `offset`, or raise."""
    end = offset + size
    if offset < 0 or size < 0 or end > len(buffer):
        raise TruncatedDataError(offset, size, max(len(buffer) - offset, 0))
    return end


def read_struct(
    fmt: struct.Struct,
    buffer: ArrayBuffer,
    offset: int = 0,
) -> tuple[int, int]:
    end = check_bounds(buffer, offset, fmt.size)
    return end, fmt.unpack_from(buffer, offset)[0]


def read_u8(buffer: ArrayBuffer, offset: int = 0) -> tuple[int, int]:
    return read_struct(UINT8, buffer, offset)


def read_u16(buffer: ArrayBuffer, offset: int = 0) -> tuple[int, int]:
    return read_struct(UINT16LE, buffer, offset)


def read_i16(buffer: ArrayBuffer, offset: int = 0) -> tuple[int, int]:
    return read_struct(INT16LE, buffer, offset)


def read_u32(buffer: ArrayBuffer, offset: int = 0) -> tuple[int, int]:
    return read_struct(UINT32LE, buffer, offset)


def read_exact(buffer: ArrayBuffer, offset: int, size: int) -> tuple[int, bytes]:
    end = check_bounds(buffer, offset, size)
    return end, bytes(buffer[offset:end])


class ByteCursor:
    """Sequential little-endian reader over an immutable buffer.

    Thin stateful wrapper around the offset-returning `read_*` functions,
    for decoders that consume a stream lazily (see `bmassets.codex.rle`).
    """

    __slots__ = ('buffer', '_position')

    def __init__(self, buffer: ArrayBuffer, position: int = 0) -> None:
        self.buffer = buffer
        self._position = 0
        self.seek(position)

    def __repr__(self) -> str:
        return f'ByteCursor<{self._position}/{len(self.buffer)}>'

    @property
    def position(self) -> int:
        return self._position

    @property
    def remaining(self) -> int:
        return len(self.buffer) - self._position

    def at_end(self) -> bool:
        return self._position >= len(self.buffer)

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        if whence == os.SEEK_CUR:
            offset += self._position
        elif whence == os.SEEK_END:
            offset += len(self.buffer)
        elif whence != os.SEEK_SET:
            raise ValueError(f'invalid whence: {whence}')
        if not 0 <= offset <= len(self.buffer):
            raise TruncatedDataError(offset, 0, max(len(self.buffer) - offset, 0))
        self._position = offset
        return offset

    def read(self, fmt: struct.Struct) -> int:
        self._position, value = read_struct(fmt, self.buffer, self._position)
        return value

    def read_u8(self) -> int:
        return self.read(UINT8)

    def read_u16(self) -> int:
        return self.read(UINT16LE)

    def read_i16(self) -> int:
        return self.read(INT16LE)

    def read_u32(self) -> int:
        return self.read(UINT32LE)

    def read_exact(self, size: int) -> bytes:
        self._position, data = read_exact(self.buffer, self._position, size)
        return data
