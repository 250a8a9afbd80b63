import numpy as np
from numpy.typing import NDArray

from bmassets.kernel.errors import PaletteMissingError

TRANSPARENT = (0, 0, 0, 0)
PALETTE_SIZE = 256


def rgb555_to_rgba(values: NDArray[np.uint16], key: int) -> NDArray[np.uint8]:
    """Expand 16-bit `xRRRRRGGGGGBBBBB` pixels to RGBA.

    Pixels equal to `key` or with the top bit set become fully transparent.
    """
    values = np.asarray(values, dtype=np.uint16)
    rgba = np.empty((*values.shape, 4), dtype=np.uint8)
    rgba[..., 0] = (((values & 0x7C00) >> 10) << 3).astype(np.uint8)
    rgba[..., 1] = (((values & 0x03E0) >> 5) << 3).astype(np.uint8)
    rgba[..., 2] = ((values & 0x001F) << 3).astype(np.uint8)
    rgba[..., 3] = 255
    rgba[(values == key) | ((values & 0x8000) != 0)] = TRANSPARENT
    return rgba


def read_rgba_palette(data: bytes) -> NDArray[np.uint8]:
    if len(data) != PALETTE_SIZE * 4:
        raise PaletteMissingError(
            f'expected a palette of {PALETTE_SIZE * 4} bytes but got {len(data)}'
        )
    return np.frombuffer(data, dtype=np.uint8).reshape(PALETTE_SIZE, 4).copy()


def read_rgb_palette(data: bytes) -> NDArray[np.uint8]:
    if len(data) != PALETTE_SIZE * 3:
        raise PaletteMissingError(
            f'expected a palette of {PALETTE_SIZE * 3} bytes but got {len(data)}'
        )
    rgb = np.frombuffer(data, dtype=np.uint8).reshape(PALETTE_SIZE, 3)
    return np.concatenate(
        [rgb, np.full((PALETTE_SIZE, 1), 255, dtype=np.uint8)],
        axis=1,
    )


def indexed_to_rgba(
    indices: NDArray[np.uint8],
    palette: NDArray[np.uint8],
    key: int | None = None,
) -> NDArray[np.uint8]:
    """Resolve palette indices, with the `key` entry made transparent."""
    if key is not None:
        palette = palette.copy()
        palette[key] = TRANSPARENT
    return palette[np.asarray(indices, dtype=np.uint8)]
