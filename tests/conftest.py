import pytest

from builders import mkani, mkframe16, mkseq


@pytest.fixture
def sample_ani() -> bytes:
    """Two frame images (2x2 and 1x2) and two sequences."""
    return mkani(
        [
            mkframe16(2, 2, [0x7FFF, 0x001F, 0x03E0, 0x7C00]),
            mkframe16(1, 2, [0x7C00, 0x8000], name=None),
        ],
        [
            mkseq(b'stand', [(0, 0, 0)]),
            mkseq(b'walk', [(0, 1, 2), (1, -3, 4)]),
        ],
    )
