from dataclasses import dataclass

from parse import parse  # type: ignore[import-untyped]

from bmassets.kernel.cursor import ArrayBuffer

ENTRY = '-{}'


@dataclass(frozen=True)
class AnimationList:
    filenames: tuple[str, ...]

    def __iter__(self):
        return iter(self.filenames)

    def __len__(self) -> int:
        return len(self.filenames)


def decode_animation_list(data: ArrayBuffer) -> AnimationList:
    """Collect the `-NAME` entries of an animation list, ignoring other lines."""
    text = bytes(data).decode('latin-1')
    filenames = []
    for line in text.splitlines():
        entry = parse(ENTRY, line.strip())
        if entry:
            filenames.append(entry[0].strip())
    return AnimationList(tuple(name for name in filenames if name))
