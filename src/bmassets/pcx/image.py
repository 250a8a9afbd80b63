"""ZSoft PCX still images, 8 bits per pixel with a single color plane.

Format description:
https://en.wikipedia.org/wiki/PCX
http://fastgraph.com/help/pcx_header_format.html
"""

from dataclasses import dataclass, field
from typing import cast

import numpy as np
from numpy.typing import NDArray

from bmassets.codex.rle import pcx8, read_pixels
from bmassets.graphics.color import indexed_to_rgba, read_rgb_palette
from bmassets.kernel.chunk import HeaderDType, StructuredTuple
from bmassets.kernel.cursor import ArrayBuffer, ByteCursor, check_bounds
from bmassets.kernel.errors import (
    MalformedHeaderError,
    PaletteMissingError,
    UnsupportedVariantError,
)
from bmassets.kernel.fileio import read_file
from bmassets.kernel.preset import DecoderSettings

SIGNATURE = 0x0A
PALETTE_MARKER = 0x0C
PALETTE_FOOTER_SIZE = 769

VERSIONS = {0, 2, 3, 4, 5}
ENCODINGS = {0, 1}
BITS_PER_PLANE = {1, 2, 4, 8}
COLOR_PLANES = {1, 3, 4}
PALETTE_TYPES = {0, 1, 2}

pcx = DecoderSettings()


class PcxHeader(StructuredTuple):
    dtype = cast(
        type[HeaderDType],
        np.dtype(
            [
                ('signature', 'u1'),
                ('version', 'u1'),
                ('encoding', 'u1'),
                ('bits_per_plane', 'u1'),
                ('min_x', '<u2'),
                ('min_y', '<u2'),
                ('max_x', '<u2'),
                ('max_y', '<u2'),
                ('horz_dpi', '<u2'),
                ('vert_dpi', '<u2'),
                ('ega_palette', 'u1', (48,)),  # only used by 4-bit images
                ('reserved', 'u1'),
                ('color_planes', 'u1'),
                ('bytes_per_line', '<u2'),
                ('palette_type', '<u2'),
                ('source_horz_resolution', '<u2'),
                ('source_vert_resolution', '<u2'),
                ('padding', 'u1', (54,)),
            ],
        ),
    )

    def __getattr__(self, name: str) -> int:
        if name in self.dtype.names:
            return int(self._header[name])
        raise AttributeError(name)

    @property
    def rle(self) -> bool:
        return self.encoding == 1

    @property
    def width(self) -> int:
        return self.max_x - self.min_x + 1

    @property
    def height(self) -> int:
        return self.max_y - self.min_y + 1


@dataclass(frozen=True)
class PcxImage:
    width: int
    height: int
    pixels: NDArray[np.uint8] = field(repr=False)
    header: PcxHeader = field(repr=False, compare=False)


def check_enum(name: str, value: int, supported: set[int]) -> None:
    if value not in supported:
        raise UnsupportedVariantError(f'unsupported PCX {name}: {value}')


def read_header(buffer: ArrayBuffer) -> tuple[int, PcxHeader]:
    if len(buffer) < PcxHeader.itemsize():
        raise MalformedHeaderError('file is too small for a PCX header')
    header = PcxHeader.from_buffer(buffer)
    if header.signature != SIGNATURE:
        raise MalformedHeaderError(f'PCX signature is invalid: 0x{header.signature:02x}')

    check_enum('version', header.version, VERSIONS)
    check_enum('encoding', header.encoding, ENCODINGS)
    check_enum('bits per plane', header.bits_per_plane, BITS_PER_PLANE)
    check_enum('color plane count', header.color_planes, COLOR_PLANES)
    check_enum('palette type', header.palette_type, PALETTE_TYPES)

    if header.max_x < header.min_x or header.max_y < header.min_y:
        raise MalformedHeaderError(
            f'invalid PCX bounding box: ({header.min_x}, {header.min_y}) '
            f'- ({header.max_x}, {header.max_y})'
        )
    return PcxHeader.itemsize(), header


def read_palette(buffer: ArrayBuffer) -> NDArray[np.uint8]:
    """256 color palette in the last 768 bytes, preceded by a 0x0C marker."""
    offset = len(buffer) - PALETTE_FOOTER_SIZE
    if offset < PcxHeader.itemsize() or buffer[offset] != PALETTE_MARKER:
        raise PaletteMissingError('256-color palette marker not found')
    check_bounds(buffer, offset, PALETTE_FOOTER_SIZE)
    return read_rgb_palette(bytes(buffer[offset + 1 :]))


def read_indices(
    cfg: DecoderSettings,
    buffer: ArrayBuffer,
    offset: int,
    header: PcxHeader,
) -> NDArray[np.uint8]:
    # scanlines are padded to `bytes_per_line`, which is never below the width
    stride = header.bytes_per_line
    if stride < header.width:
        cfg.logger.warning(
            f'PCX bytes per line {stride} below width {header.width}, using width'
        )
        stride = header.width

    count = stride * header.height
    cursor = ByteCursor(buffer, offset)
    if header.rle:
        indices = read_pixels(pcx8, cursor, count)
    else:
        indices = np.frombuffer(cursor.read_exact(count), dtype=np.uint8)
    return indices.reshape(header.height, stride)[:, : header.width]


def decode_pcx_image(data: ArrayBuffer, *, cfg: DecoderSettings = pcx) -> PcxImage:
    offset, header = read_header(data)

    if header.bits_per_plane != 8:
        raise UnsupportedVariantError(
            f'only 8 bits per pixel plane are supported, got {header.bits_per_plane}'
        )
    if header.color_planes != 1:
        raise UnsupportedVariantError(
            f'only a single color plane is supported, got {header.color_planes}'
        )

    indices = read_indices(cfg, data, offset, header)
    palette = read_palette(data)
    return PcxImage(
        header.width,
        header.height,
        indexed_to_rgba(indices, palette),
        header,
    )


def from_path(path: str, **kwargs) -> PcxImage:
    return decode_pcx_image(read_file(path), **kwargs)
