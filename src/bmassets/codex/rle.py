"""Run-length pixel decoding shared by the TGA-style and PCX-style streams.

Both streams are made of packets introduced by a control byte. When the
control byte carries the run marker, one pixel value follows and is repeated
`count` times. Otherwise the packet holds literal pixels: either `count` raw
values following the control byte (TGA) or the control byte itself (PCX).

See: http://www.ludorg.net/amnesia/TGA_File_Format_Spec.html
"""

import itertools
import struct
from collections.abc import Iterator
from dataclasses import dataclass

import numpy as np
from numpy.typing import DTypeLike, NDArray

from bmassets.kernel.cursor import UINT8, UINT16LE, ByteCursor
from bmassets.kernel.errors import TruncatedDataError


@dataclass(frozen=True)
class RLESettings:
    pixel: struct.Struct
    dtype: DTypeLike
    run_mask: int
    count_mask: int
    count_bias: int
    literal_control: bool

    def is_run(self, control: int) -> bool:
        return control & self.run_mask == self.run_mask

    def count(self, control: int) -> int:
        return (control & self.count_mask) + self.count_bias


tga16 = RLESettings(
    pixel=UINT16LE,
    dtype=np.uint16,
    run_mask=0x80,
    count_mask=0x7F,
    count_bias=1,
    literal_control=False,
)

pcx8 = RLESettings(
    pixel=UINT8,
    dtype=np.uint8,
    run_mask=0xC0,
    count_mask=0x3F,
    count_bias=0,
    literal_control=True,
)


def decode_rle(cfg: RLESettings, cursor: ByteCursor) -> Iterator[int]:
    while not cursor.at_end():
        control = cursor.read_u8()
        if cfg.is_run(control):
            yield from itertools.repeat(cursor.read(cfg.pixel), cfg.count(control))
        elif cfg.literal_control:
            yield control
        else:
            # raw values are read lazily, one per consumed pixel
            for _ in range(cfg.count(control)):
                yield cursor.read(cfg.pixel)


def read_pixels(cfg: RLESettings, cursor: ByteCursor, count: int) -> NDArray:
    start = cursor.position
    pixels = list(itertools.islice(decode_rle(cfg, cursor), count))
    if len(pixels) < count:
        raise TruncatedDataError(start, count, len(pixels))
    return np.array(pixels, dtype=cfg.dtype)
