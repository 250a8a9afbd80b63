from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field, replace

from bmassets.graphics.atlas import AnimationAtlas
from bmassets.kernel.preset import DecoderSettings


@dataclass(frozen=True)
class Frame:
    source_index: int
    width: int
    height: int
    offset_x: int
    offset_y: int


@dataclass(frozen=True)
class Animation:
    name: str
    width: int
    height: int
    frames: tuple[Frame, ...]
    atlas: AnimationAtlas | None = field(default=None, repr=False, compare=False)


@dataclass(frozen=True)
class AnimationBundle(Mapping[str, Animation]):
    animations: dict[str, Animation]
    atlas: AnimationAtlas

    def __getitem__(self, name: str) -> Animation:
        return self.animations[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self.animations)

    def __len__(self) -> int:
        return len(self.animations)

    def __repr__(self) -> str:
        names = ','.join(self.animations)
        return f'AnimationBundle<{self.atlas.tile_count} tiles>[{names}]'


def assemble_bundle(
    cfg: DecoderSettings,
    animations: Iterable[Animation],
    atlas: AnimationAtlas,
) -> AnimationBundle:
    bound: dict[str, Animation] = {}
    for animation in animations:
        if animation.name in bound:
            # observed in some files, the later sequence replaces the earlier
            cfg.logger.warning(f'duplicate animation name {animation.name!r}, overwriting')
        bound[animation.name] = replace(animation, atlas=atlas)
    return AnimationBundle(bound, atlas)
