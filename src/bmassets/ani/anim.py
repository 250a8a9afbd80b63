from collections.abc import Iterator

from bmassets.graphics.atlas import Materialize, build_atlas
from bmassets.kernel.chunk import (
    expect_chunk,
    peek_chunk,
    read_chunk,
    read_file_header,
    skip_chunk,
)
from bmassets.kernel.cursor import ArrayBuffer
from bmassets.kernel.fileio import read_file

from .bundle import Animation, AnimationBundle, assemble_bundle
from .cimg import FrameImage, read_frame_image
from .preset import AniSettings, ani
from .schema import FRAM, SEQ
from .seq import read_animation


def read_file_end(cfg: AniSettings, buffer: ArrayBuffer) -> tuple[int, int]:
    offset, header = read_file_header(buffer)
    file_end = offset + header.size
    if file_end > len(buffer):
        cfg.logger.warning(
            f'declared file length {header.size} exceeds available data, '
            f'truncating at {len(buffer)}'
        )
        file_end = len(buffer)
    return offset, file_end


def skip_preamble(cfg: AniSettings, buffer: ArrayBuffer, offset: int, end: int) -> int:
    for tag in cfg.preamble:
        _, chunk = expect_chunk(buffer, offset, tag, end)
        offset = skip_chunk(chunk)
    return offset


def read_frame_images(
    cfg: AniSettings,
    buffer: ArrayBuffer,
    offset: int,
    end: int,
) -> tuple[int, list[FrameImage]]:
    images = []
    while offset < end and peek_chunk(buffer, offset, end).header.tag == FRAM:
        _, frame = read_chunk(buffer, offset, end)
        offset, image = read_frame_image(cfg, buffer, frame)
        if offset != frame.end:
            cfg.logger.debug(f'FRAM {len(images)} pixels end at {offset}, chunk at {frame.end}')
        images.append(image)
    return offset, images


def read_animations(
    cfg: AniSettings,
    buffer: ArrayBuffer,
    offset: int,
    end: int,
    images: list[FrameImage],
) -> Iterator[Animation]:
    while offset < end:
        _, chunk = read_chunk(buffer, offset, end)
        if chunk.header.tag != SEQ:
            cfg.tolerate(f'unexpected {chunk.tag!r} chunk at {offset}, skipping')
            offset = skip_chunk(chunk)
            continue
        offset, animation = read_animation(cfg, buffer, chunk, images)
        yield animation


def decode_animation_bundle(
    data: ArrayBuffer,
    *,
    cfg: AniSettings = ani,
    materialize: Materialize | None = None,
) -> AnimationBundle:
    """Decode an ANI file into a sprite sheet and its named animations.

    `materialize` receives the atlas pixels, shaped
    `(tile_height * tile_count, tile_width, 4)`, and returns the texture
    handle stored on the atlas.
    """
    offset, file_end = read_file_end(cfg, data)
    offset = skip_preamble(cfg, data, offset, file_end)

    offset, images = read_frame_images(cfg, data, offset, file_end)
    atlas = build_atlas(images, materialize)
    cfg.logger.debug(
        f'{atlas.tile_count} frame images in tiles of {atlas.tile_width}x{atlas.tile_height}'
    )

    animations = list(read_animations(cfg, data, offset, file_end, images))
    return assemble_bundle(cfg, animations, atlas)


def from_path(path: str, **kwargs) -> AnimationBundle:
    return decode_animation_bundle(read_file(path), **kwargs)
