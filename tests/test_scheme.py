import pytest

from bmassets import Cell, Powerup, decode_scheme
from bmassets.kernel.errors import MalformedHeaderError

CROSSROADS = b"""\
; Atomic Bomberman scheme
-V,2
-N, Crossroads
-B,90
-R, 0,###############
-R, 1,#...:::::::...#\r
-R,10,###############
-S,0,1,1
-S,9,13,9
-P, 3, 1, 0, 0, 0, kick
-P,12, 0, 1,-2, 1, random
"""


def test_scheme():
    scheme = decode_scheme(CROSSROADS)
    assert scheme.version == 2
    assert scheme.name == 'Crossroads'
    assert scheme.brick_density == 90
    assert scheme.grid.shape == (11, 15)
    assert scheme.cell(0, 7) == Cell.SOLID
    assert scheme.cell(1, 1) == Cell.BLANK
    assert scheme.cell(1, 4) == Cell.BRICK
    assert scheme.cell(5, 5) == Cell.BLANK
    assert scheme.player_start_locations[0] == (1, 1)
    assert scheme.player_start_locations[9] == (13, 9)
    assert scheme.player_start_locations[4] == (0, 0)


def test_scheme_powerups():
    scheme = decode_scheme(CROSSROADS)
    kick = scheme.powerup_infos[Powerup.KICK]
    assert kick.born_with
    assert kick.override_value is None
    assert not kick.forbidden

    random = scheme.powerup_infos[Powerup.RANDOM]
    assert not random.born_with
    assert random.override_value == -2
    assert random.forbidden

    assert scheme.powerup_infos[Powerup.SPEED].override_value is None


def test_unknown_attribute():
    with pytest.raises(MalformedHeaderError, match='unknown scheme attribute'):
        decode_scheme(b'-V,2\n-X,1\n')


@pytest.mark.parametrize(
    'line',
    [
        b'-V,two',
        b'-S,10,0,0',
        b'-R,11,###',
        b'-R,0,################',
        b'-P,13,0,0,0,0',
        b'-P,1,0,1',
    ],
)
def test_malformed_values(line):
    with pytest.raises(MalformedHeaderError):
        decode_scheme(line)
