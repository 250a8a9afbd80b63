from abc import ABC
from collections.abc import Iterator
from dataclasses import dataclass
from typing import ClassVar, Protocol, Self, cast

import numpy as np

from bmassets.kernel.cursor import ArrayBuffer, check_bounds
from bmassets.kernel.errors import (
    MalformedHeaderError,
    TruncatedDataError,
    UnexpectedChunkError,
)

ANI_MAGIC = b'CHFILEANI '


class HeaderDType(Protocol):
    itemsize: ClassVar[int]
    names: ClassVar[tuple[str, ...]]


class StructuredTuple(ABC):
    __slots__ = ('_header',)
    dtype: ClassVar[type[HeaderDType]]

    def __init__(self, header: np.void) -> None:
        self._header = header

    @classmethod
    def itemsize(cls) -> int:
        return cls.dtype.itemsize

    @classmethod
    def from_buffer(cls, buffer: ArrayBuffer, offset: int = 0) -> Self:
        check_bounds(buffer, offset, cls.itemsize())
        header = np.frombuffer(buffer, dtype=cls.dtype, count=1, offset=offset)[0]
        return cls(header)


class ChunkHeader(StructuredTuple):
    dtype = cast(
        type[HeaderDType],
        np.dtype(
            [
                ('tag', 'S4'),  # 4-byte string for the tag
                ('size', '<u4'),  # body size, header excluded
                ('id', '<u2'),
            ],
        ),
    )

    @property
    def tag(self) -> bytes:
        return bytes(self._header['tag'])

    @property
    def size(self) -> int:
        return int(self._header['size'])

    @property
    def id(self) -> int:
        return int(self._header['id'])


class FileHeader(StructuredTuple):
    dtype = cast(
        type[HeaderDType],
        np.dtype(
            [
                ('magic', 'S10'),
                ('size', '<u4'),
                ('id', '<u2'),
            ],
        ),
    )

    @property
    def magic(self) -> bytes:
        return bytes(self._header['magic'])

    @property
    def size(self) -> int:
        return int(self._header['size'])

    @property
    def id(self) -> int:
        return int(self._header['id'])


def format_tag(tag: bytes) -> str:
    return tag.decode('ascii', errors='replace')


@dataclass(frozen=True, slots=True)
class Chunk:
    header: ChunkHeader
    start: int

    @property
    def tag(self) -> str:
        return format_tag(self.header.tag)

    @property
    def end(self) -> int:
        return self.start + self.header.size

    def __len__(self) -> int:
        return self.header.size

    def body(self, buffer: ArrayBuffer) -> bytes:
        return bytes(buffer[self.start : self.end])

    def __repr__(self) -> str:
        return f'Chunk<{self.tag}>[{len(self)}]@{self.start}'


def read_chunk_header(buffer: ArrayBuffer, offset: int = 0) -> tuple[int, ChunkHeader]:
    chunk_header = ChunkHeader.from_buffer(buffer, offset)
    return offset + ChunkHeader.itemsize(), chunk_header


def read_chunk(
    buffer: ArrayBuffer,
    offset: int = 0,
    end: int | None = None,
) -> tuple[int, Chunk]:
    """Read the chunk header at `offset`, returning the body offset and chunk.

    The body must fit before `end` (the enclosing container end).
    """
    if end is None:
        end = len(buffer)
    if offset + ChunkHeader.itemsize() > end:
        raise TruncatedDataError(offset, ChunkHeader.itemsize(), max(end - offset, 0))
    start, header = read_chunk_header(buffer, offset)
    chunk = Chunk(header, start)
    if chunk.end > end:
        raise TruncatedDataError(start, header.size, max(end - start, 0))
    return start, chunk


def peek_chunk(buffer: ArrayBuffer, offset: int = 0, end: int | None = None) -> Chunk:
    return read_chunk(buffer, offset, end)[1]


def expect_chunk(
    buffer: ArrayBuffer,
    offset: int,
    tag: bytes,
    end: int | None = None,
) -> tuple[int, Chunk]:
    start, chunk = read_chunk(buffer, offset, end)
    if chunk.header.tag != tag:
        raise UnexpectedChunkError(format_tag(tag), chunk.tag, offset)
    return start, chunk


def skip_chunk(chunk: Chunk) -> int:
    return chunk.end


def read_chunks(
    buffer: ArrayBuffer,
    offset: int = 0,
    end: int | None = None,
) -> Iterator[tuple[int, Chunk]]:
    if end is None:
        end = len(buffer)
    while offset < end:
        _, chunk = read_chunk(buffer, offset, end)
        yield offset, chunk
        offset = skip_chunk(chunk)


def read_file_header(buffer: ArrayBuffer, offset: int = 0) -> tuple[int, FileHeader]:
    if len(buffer) - offset < FileHeader.itemsize():
        raise MalformedHeaderError('file is too small for an ANI header')
    header = FileHeader.from_buffer(buffer, offset)
    # S10 drops trailing NULs only, the trailing space survives
    if header.magic != ANI_MAGIC:
        raise MalformedHeaderError(f'ANI signature is invalid: {header.magic!r}')
    return offset + FileHeader.itemsize(), header
