import numpy as np

from bmassets.graphics.color import (
    indexed_to_rgba,
    read_rgb_palette,
    read_rgba_palette,
    rgb555_to_rgba,
)

from builders import rgb_palette, rgba_palette


def test_rgb555_white():
    rgba = rgb555_to_rgba(np.array([0x7FFF], dtype=np.uint16), key=0)
    assert rgba.tolist() == [[248, 248, 248, 255]]


def test_rgb555_channels():
    values = np.array([0x7C00, 0x03E0, 0x001F, 0x0421], dtype=np.uint16)
    rgba = rgb555_to_rgba(values, key=0xFFFF)
    assert rgba.tolist() == [
        [248, 0, 0, 255],
        [0, 248, 0, 255],
        [0, 0, 248, 255],
        [8, 8, 8, 255],
    ]


def test_rgb555_transparency():
    values = np.array([[0x1234, 0x8001], [0x0001, 0x1234]], dtype=np.uint16)
    rgba = rgb555_to_rgba(values, key=0x1234)
    assert rgba.shape == (2, 2, 4)
    assert rgba[0, 0].tolist() == [0, 0, 0, 0]
    assert rgba[0, 1].tolist() == [0, 0, 0, 0]
    assert rgba[1, 0].tolist() == [0, 0, 8, 255]
    assert rgba[1, 1].tolist() == [0, 0, 0, 0]


def test_indexed_with_key():
    palette = read_rgba_palette(rgba_palette())
    rgba = indexed_to_rgba(np.array([3, 7, 7], dtype=np.uint8), palette, key=7)
    assert rgba.tolist() == [[3, 252, 0, 255], [0, 0, 0, 0], [0, 0, 0, 0]]
    # the source palette is left alone
    assert palette[7].tolist() == [7, 248, 0, 255]


def test_rgb_palette_is_opaque():
    palette = read_rgb_palette(rgb_palette())
    assert palette.shape == (256, 4)
    assert palette[10].tolist() == [10, 0, 245, 255]
