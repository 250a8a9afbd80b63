"""Pack frame images of differing sizes into one vertical sprite sheet.

Every frame image is right-padded with transparent pixels up to the widest
image and bottom-padded with transparent rows up to the tallest one, so the
atlas has a constant tile size. Tiles are stacked vertically, which keeps
each tile's rows contiguous in the resulting buffer.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol

import numpy as np
from numpy.typing import NDArray

from bmassets.kernel.errors import MalformedHeaderError

Materialize = Callable[[NDArray[np.uint8]], Any]


class SourceImage(Protocol):
    width: int
    height: int
    pixels: NDArray[np.uint8]


@dataclass(frozen=True)
class AnimationAtlas:
    tile_width: int
    tile_height: int
    tile_count: int
    pixels: NDArray[np.uint8] = field(repr=False)
    handle: Any = field(default=None, repr=False, compare=False)

    @property
    def buffer(self) -> bytes:
        return self.pixels.tobytes()

    def tile(self, index: int) -> NDArray[np.uint8]:
        if not 0 <= index < self.tile_count:
            raise IndexError(index)
        top = index * self.tile_height
        return self.pixels[top : top + self.tile_height]


def pad_image(image: SourceImage, tile_width: int, tile_height: int) -> NDArray[np.uint8]:
    return np.pad(
        image.pixels.reshape(image.height, image.width, 4),
        (
            (0, tile_height - image.height),
            (0, tile_width - image.width),
            (0, 0),
        ),
    )


def build_atlas(
    images: Sequence[SourceImage],
    materialize: Materialize | None = None,
) -> AnimationAtlas:
    if not images:
        raise MalformedHeaderError('cannot build an atlas without frame images')

    tile_width = max(image.width for image in images)
    tile_height = max(image.height for image in images)

    pixels = np.concatenate(
        [pad_image(image, tile_width, tile_height) for image in images],
        axis=0,
    )
    return AnimationAtlas(
        tile_width=tile_width,
        tile_height=tile_height,
        tile_count=len(images),
        pixels=pixels,
        handle=materialize(pixels) if materialize else None,
    )
