"""Frame images: one FRAM chunk holding HEAD, an optional FNAM and a CIMG.

CIMG layout (little-endian)::

    format:u16 unknown:u16 additional_size:u32 unknown:u32
    width:u16 height:u16 hotspot_x:u16 hotspot_y:u16 transparent_key:u16 unknown:u16
    [palette: additional_size - 32 bytes, when additional_size >= 32]
    unknown:u16 unknown:u16 compressed_size:u32 uncompressed_size:u32
    <RLE pixel stream> <1 trailing byte>
"""

from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

from bmassets.codex.rle import RLESettings, pcx8, read_pixels, tga16
from bmassets.graphics.color import indexed_to_rgba, read_rgba_palette, rgb555_to_rgba
from bmassets.kernel.chunk import Chunk, expect_chunk, peek_chunk, skip_chunk
from bmassets.kernel.cursor import ArrayBuffer, ByteCursor
from bmassets.kernel.errors import (
    MalformedHeaderError,
    PaletteMissingError,
    UnsupportedVariantError,
)

from .preset import AniSettings
from .schema import CIMG, FNAM, HEAD

FORMAT_RGB555 = 0x0004
FORMAT_INDEXED = 0x000B

CIMG_MIN_SIZE = 32
PALETTE_HEADER_SIZE = 32


@dataclass(frozen=True)
class CimgHeader:
    format: int
    additional_size: int
    width: int
    height: int
    hotspot_x: int
    hotspot_y: int
    transparent_key: int
    compressed_size: int
    uncompressed_size: int
    palette: bytes | None = field(default=None, repr=False)

    @property
    def codec(self) -> RLESettings:
        return tga16 if self.format == FORMAT_RGB555 else pcx8

    @property
    def hotspot_index(self) -> int | None:
        if self.hotspot_x < self.width and self.hotspot_y < self.height:
            return self.hotspot_x + self.width * self.hotspot_y
        return None


@dataclass(frozen=True)
class FrameImage:
    width: int
    height: int
    pixels: NDArray[np.uint8] = field(repr=False)
    name: str | None = None


def read_cimg_header(cursor: ByteCursor, chunk: Chunk) -> CimgHeader:
    if len(chunk) < CIMG_MIN_SIZE:
        raise MalformedHeaderError(f'CIMG is too small: {len(chunk)} < {CIMG_MIN_SIZE}')

    cursor.seek(chunk.start)
    fmt = cursor.read_u16()
    if fmt not in {FORMAT_RGB555, FORMAT_INDEXED}:
        raise UnsupportedVariantError(f'unsupported CIMG format: 0x{fmt:04x}')

    cursor.read_u16()
    additional_size = cursor.read_u32()
    cursor.read_u32()

    width = cursor.read_u16()
    height = cursor.read_u16()
    hotspot_x = cursor.read_u16()
    hotspot_y = cursor.read_u16()
    transparent_key = cursor.read_u16()
    cursor.read_u16()

    palette = None
    if additional_size >= PALETTE_HEADER_SIZE:
        palette = cursor.read_exact(additional_size - PALETTE_HEADER_SIZE)
    if fmt == FORMAT_INDEXED and palette is None:
        raise PaletteMissingError('8-bit CIMG does not carry a palette')

    cursor.read_u16()
    cursor.read_u16()
    compressed_size = max(cursor.read_u32() - 12, 0)
    uncompressed_size = cursor.read_u32()

    return CimgHeader(
        format=fmt,
        additional_size=additional_size,
        width=width,
        height=height,
        hotspot_x=hotspot_x,
        hotspot_y=hotspot_y,
        transparent_key=transparent_key,
        compressed_size=compressed_size,
        uncompressed_size=uncompressed_size,
        palette=palette,
    )


def transparency_key(header: CimgHeader, raw: NDArray) -> int:
    """The raw value found under the hotspot is the transparent color."""
    idx = header.hotspot_index
    if idx is None:
        return header.transparent_key
    return int(raw[idx])


def resolve_colors(header: CimgHeader, raw: NDArray) -> NDArray[np.uint8]:
    key = transparency_key(header, raw)
    if header.format == FORMAT_RGB555:
        rgba = rgb555_to_rgba(raw, key)
    else:
        assert header.palette is not None
        palette = read_rgba_palette(header.palette)
        rgba = indexed_to_rgba(raw, palette, key if key < len(palette) else None)
    return rgba.reshape(header.height, header.width, 4)


def read_cimg(
    cfg: AniSettings,
    buffer: ArrayBuffer,
    chunk: Chunk,
    end: int,
) -> tuple[int, FrameImage]:
    cursor = ByteCursor(memoryview(buffer)[:end])
    header = read_cimg_header(cursor, chunk)

    raw = read_pixels(header.codec, cursor, header.width * header.height)
    # the encoder leaves one extra byte after the pixel stream
    cursor.read_u8()

    cfg.logger.debug(
        f'CIMG {header.width}x{header.height} format=0x{header.format:04x} '
        f'ends at {cursor.position}'
    )
    return cursor.position, FrameImage(
        header.width,
        header.height,
        resolve_colors(header, raw),
    )


def read_frame_image(
    cfg: AniSettings,
    buffer: ArrayBuffer,
    frame: Chunk,
) -> tuple[int, FrameImage]:
    """Decode a top-level FRAM chunk, returning the offset after its pixels."""
    _, head = expect_chunk(buffer, frame.start, HEAD, frame.end)
    offset = skip_chunk(head)

    name = None
    if peek_chunk(buffer, offset, frame.end).header.tag == FNAM:
        _, fnam = expect_chunk(buffer, offset, FNAM, frame.end)
        name = fnam.body(buffer).split(b'\0')[0].decode('ascii', errors='replace')
        offset = skip_chunk(fnam)

    _, cimg = expect_chunk(buffer, offset, CIMG, frame.end)
    offset, image = read_cimg(cfg, buffer, cimg, frame.end)
    return offset, FrameImage(image.width, image.height, image.pixels, name=name)
