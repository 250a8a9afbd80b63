import io
import sys
from typing import IO

from bmassets.kernel.chunk import Chunk, read_chunks, read_file_header
from bmassets.kernel.cursor import ArrayBuffer

from .schema import DATA_ONLY_IN, SCHEMA


def has_children(chunk: Chunk, parent: Chunk | None) -> bool:
    if parent is not None and parent.header.tag in DATA_ONLY_IN:
        return False
    return chunk.header.tag in SCHEMA


def render(
    buffer: ArrayBuffer,
    chunk: Chunk,
    offset: int,
    parent: Chunk | None = None,
    level: int = 0,
    stream: IO[str] | None = None,
) -> None:
    stream = stream or sys.stdout
    name = chunk.tag.rstrip()
    indent = '    ' * level
    attribs = f' offset="{offset}" size="{len(chunk)}" id="{chunk.header.id}"'
    if not has_children(chunk, parent):
        print(f'{indent}<{name}{attribs} />', file=stream)
        return
    print(f'{indent}<{name}{attribs}>', file=stream)
    for coffset, child in read_chunks(buffer, chunk.start, chunk.end):
        render(buffer, child, coffset, parent=chunk, level=level + 1, stream=stream)
    print(f'{indent}</{name}>', file=stream)


def render_file(buffer: ArrayBuffer, stream: IO[str] | None = None) -> None:
    stream = stream or sys.stdout
    offset, header = read_file_header(buffer)
    end = min(offset + header.size, len(buffer))
    print(f'<ANI size="{header.size}" id="{header.id}">', file=stream)
    for coffset, chunk in read_chunks(buffer, offset, end):
        render(buffer, chunk, coffset, level=1, stream=stream)
    print('</ANI>', file=stream)


def renders(buffer: ArrayBuffer) -> str:
    with io.StringIO() as stream:
        render_file(buffer, stream=stream)
        return stream.getvalue()
