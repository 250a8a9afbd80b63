"""Animation sequences.

A SEQ chunk is a HEAD with the nul-terminated name followed by one or more
STAT chunks. Each STAT holds a HEAD (ignored) and a FRAM referencing a frame
image by index, along with the pixel offset to draw it at.
"""

from collections.abc import Sequence
from typing import NamedTuple

from bmassets.kernel.chunk import Chunk, expect_chunk, skip_chunk
from bmassets.kernel.cursor import ArrayBuffer, ByteCursor
from bmassets.kernel.errors import MalformedHeaderError

from .bundle import Animation, Frame
from .cimg import FrameImage
from .preset import AniSettings
from .schema import FRAM, HEAD, STAT


class FrameRef(NamedTuple):
    id: int
    index: int
    offset_x: int
    offset_y: int


def read_name(buffer: ArrayBuffer, head: Chunk) -> str:
    name = head.body(buffer).split(b'\0')[0]
    try:
        return name.decode('ascii')
    except UnicodeDecodeError as exc:
        raise MalformedHeaderError(f'sequence name is not ASCII: {name!r}') from exc


def read_frame_ref(buffer: ArrayBuffer, fram: Chunk) -> FrameRef:
    cursor = ByteCursor(memoryview(buffer)[: fram.end], fram.start)
    ref = FrameRef(
        id=cursor.read_u16(),
        index=cursor.read_u16(),
        offset_x=cursor.read_i16(),
        offset_y=cursor.read_i16(),
    )
    cursor.read_u32()  # padding
    return ref


def resolve_frame(
    cfg: AniSettings,
    ref: FrameRef,
    images: Sequence[FrameImage],
) -> Frame:
    index = ref.index
    if index >= len(images):
        index = len(images) - 1
        # source files do reference missing images, keep the last one
        cfg.logger.warning(f'frame index {ref.index} out of range, clamped to {index}')
    image = images[index]
    return Frame(
        source_index=index,
        width=image.width,
        height=image.height,
        offset_x=ref.offset_x,
        offset_y=ref.offset_y,
    )


def read_animation(
    cfg: AniSettings,
    buffer: ArrayBuffer,
    seq: Chunk,
    images: Sequence[FrameImage],
) -> tuple[int, Animation]:
    if not images:
        raise MalformedHeaderError('sequence found but no frame images were decoded')

    _, head = expect_chunk(buffer, seq.start, HEAD, seq.end)
    name = read_name(buffer, head)
    offset = skip_chunk(head)

    frames: list[Frame] = []
    while offset < seq.end:
        _, stat = expect_chunk(buffer, offset, STAT, seq.end)
        _, stat_head = expect_chunk(buffer, stat.start, HEAD, stat.end)
        _, fram = expect_chunk(buffer, skip_chunk(stat_head), FRAM, stat.end)

        frame = resolve_frame(cfg, read_frame_ref(buffer, fram), images)
        if frames and (frame.width, frame.height) != (frames[0].width, frames[0].height):
            cfg.tolerate(
                f'frames of different dimensions in {name!r}: '
                f'{frame.width}x{frame.height} and {frames[0].width}x{frames[0].height}'
            )
        frames.append(frame)

        # FRAM body length wins over the fields read, trailing padding is skipped
        offset = skip_chunk(fram)

    if not frames:
        raise MalformedHeaderError(f'sequence {name!r} has no frames')

    return offset, Animation(
        name=name,
        width=max(frame.width for frame in frames),
        height=max(frame.height for frame in frames),
        frames=tuple(frames),
    )
