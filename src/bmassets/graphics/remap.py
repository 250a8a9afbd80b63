from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

from bmassets.kernel.cursor import ArrayBuffer
from bmassets.kernel.errors import MalformedHeaderError

# 256 color mappings + 3 bytes unknown.
TABLE_SIZE = 259


@dataclass(frozen=True)
class ColorRemapTable:
    mapping: NDArray[np.uint8] = field(repr=False)
    trailer: bytes

    def remap(self, indices: NDArray[np.uint8]) -> NDArray[np.uint8]:
        return self.mapping[np.asarray(indices, dtype=np.uint8)]


def decode_color_remap_table(data: ArrayBuffer) -> ColorRemapTable:
    if len(data) != TABLE_SIZE:
        raise MalformedHeaderError(
            f'expected color remap table to be exactly {TABLE_SIZE} bytes '
            f'but got {len(data)}'
        )
    raw = bytes(data)
    return ColorRemapTable(
        mapping=np.frombuffer(raw[:256], dtype=np.uint8).copy(),
        trailer=raw[256:],
    )
