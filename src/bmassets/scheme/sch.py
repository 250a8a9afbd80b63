"""Level schemes (`.SCH`): arena layout, start locations and powerup rules.

Every meaningful line starts with `-` followed by comma separated fields,
the first naming the attribute::

    -V,2
    -N,Crossroads
    -B,90
    -R, 0,:#:#:#:#:#:#:#:
    -S,0,0,0
    -P,3,0,1,2,0

Lines without the leading `-` are comments.
"""

from dataclasses import dataclass, field
from enum import IntEnum

import numpy as np
from numpy.typing import NDArray

from bmassets.kernel.cursor import ArrayBuffer
from bmassets.kernel.errors import MalformedHeaderError

ROWS = 11
COLUMNS = 15
PLAYERS = 10


class Cell(IntEnum):
    SOLID = 0
    BRICK = 1
    BLANK = 2


class Powerup(IntEnum):
    EXTRA_BOMB = 0
    LONGER_FLAME = 1
    DISEASE = 2
    KICK = 3
    SPEED = 4
    PUNCH = 5
    GRAB = 6
    SPOOGER = 7
    GOLDFLAME = 8
    TRIGGER = 9
    JELLY = 10
    SUPER_BAD_DISEASE = 11
    RANDOM = 12


CELLS = {'#': Cell.SOLID, ':': Cell.BRICK}


@dataclass(frozen=True)
class PowerupInfo:
    born_with: bool = False
    override_value: int | None = None
    forbidden: bool = False


@dataclass(frozen=True)
class Scheme:
    version: int
    name: str
    brick_density: int
    grid: NDArray[np.uint8] = field(repr=False)
    player_start_locations: tuple[tuple[int, int], ...]
    powerup_infos: tuple[PowerupInfo, ...]

    def cell(self, row: int, col: int) -> Cell:
        return Cell(self.grid[row, col])


def read_number(parts: list[str], idx: int, lower: int, upper: int) -> int:
    try:
        value = int(parts[idx])
    except IndexError:
        raise MalformedHeaderError(
            f'scheme attribute {parts[0]} is missing field {idx}'
        ) from None
    except ValueError:
        raise MalformedHeaderError(
            f'scheme attribute {parts[0]} has invalid number {parts[idx]!r}'
        ) from None
    if not lower <= value <= upper:
        raise MalformedHeaderError(
            f'scheme attribute {parts[0]} value {value} is out of range '
            f'[{lower}, {upper}]'
        )
    return value


def read_flag(parts: list[str], idx: int) -> bool:
    return read_number(parts, idx, 0, 255) != 0


def read_row(grid: NDArray[np.uint8], parts: list[str]) -> None:
    row = read_number(parts, 1, 0, ROWS - 1)
    cells = parts[2] if len(parts) > 2 else ''
    if len(cells) > COLUMNS:
        raise MalformedHeaderError(
            f'scheme row {row} has {len(cells)} cells, expected at most {COLUMNS}'
        )
    for col, char in enumerate(cells):
        grid[row, col] = CELLS.get(char, Cell.BLANK)


def read_powerup(parts: list[str]) -> tuple[int, PowerupInfo]:
    index = read_number(parts, 1, 0, len(Powerup) - 1)
    override = read_flag(parts, 3)
    return index, PowerupInfo(
        born_with=read_flag(parts, 2),
        override_value=read_number(parts, 4, -128, 127) if override else None,
        forbidden=read_flag(parts, 5),
    )


def decode_scheme(data: ArrayBuffer) -> Scheme:
    version = 0
    name = ''
    brick_density = 0
    grid = np.full((ROWS, COLUMNS), Cell.BLANK, dtype=np.uint8)
    starts = [(0, 0)] * PLAYERS
    powerups = [PowerupInfo()] * len(Powerup)

    for line in bytes(data).decode('latin-1').splitlines():
        line = line.strip()
        if not line.startswith('-'):
            continue
        parts = [part.strip() for part in line[1:].split(',')]
        key = parts[0]
        if key == 'V':
            version = read_number(parts, 1, 0, 255)
        elif key == 'N':
            name = parts[1] if len(parts) > 1 else ''
        elif key == 'B':
            brick_density = read_number(parts, 1, 0, 255)
        elif key == 'R':
            read_row(grid, parts)
        elif key == 'S':
            num = read_number(parts, 1, 0, PLAYERS - 1)
            starts[num] = (read_number(parts, 2, 0, 255), read_number(parts, 3, 0, 255))
        elif key == 'P':
            index, info = read_powerup(parts)
            powerups[index] = info
        else:
            raise MalformedHeaderError(f'unknown scheme attribute {key!r}')

    return Scheme(
        version=version,
        name=name,
        brick_density=brick_density,
        grid=grid,
        player_start_locations=tuple(starts),
        powerup_infos=tuple(powerups),
    )
