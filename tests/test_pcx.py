import pytest

from bmassets import decode_pcx_image
from bmassets.kernel.errors import (
    MalformedHeaderError,
    PaletteMissingError,
    TruncatedDataError,
    UnsupportedVariantError,
)

from builders import mkpcx


def test_rle_image_with_padded_scanlines():
    # 3 pixels wide, scanlines padded to 4 bytes
    data = mkpcx(
        3,
        2,
        bytes([0xC3, 0x05, 0x09, 0x01, 0x02, 0x03, 0x00]),
        bytes_per_line=4,
    )
    im = decode_pcx_image(data)
    assert (im.width, im.height) == (3, 2)
    assert im.pixels.shape == (2, 3, 4)
    assert im.pixels[0].tolist() == [[5, 0, 250, 255]] * 3
    assert im.pixels[1].tolist() == [[1, 0, 254, 255], [2, 0, 253, 255], [3, 0, 252, 255]]
    assert im.header.version == 5
    assert im.header.rle


def test_raw_image():
    im = decode_pcx_image(mkpcx(2, 1, bytes([7, 8]), rle=0))
    assert im.pixels.tolist() == [[[7, 0, 248, 255], [8, 0, 247, 255]]]
    assert not im.header.rle


def test_run_crossing_scanlines():
    im = decode_pcx_image(mkpcx(2, 2, bytes([0xC4, 0x10])))
    assert im.pixels.reshape(-1, 4).tolist() == [[16, 0, 239, 255]] * 4


def test_unsupported_bits_per_plane():
    with pytest.raises(UnsupportedVariantError):
        decode_pcx_image(mkpcx(2, 1, bytes([7, 8]), bits_per_plane=4))


def test_unknown_bits_per_plane():
    with pytest.raises(UnsupportedVariantError):
        decode_pcx_image(mkpcx(2, 1, bytes([7, 8]), bits_per_plane=3))


def test_unsupported_planes():
    with pytest.raises(UnsupportedVariantError):
        decode_pcx_image(mkpcx(2, 1, bytes([7, 8]), planes=3))


def test_unsupported_version():
    with pytest.raises(UnsupportedVariantError):
        decode_pcx_image(mkpcx(2, 1, bytes([7, 8]), version=1))


def test_unsupported_encoding():
    with pytest.raises(UnsupportedVariantError):
        decode_pcx_image(mkpcx(2, 1, bytes([7, 8]), rle=2))


def test_bad_signature():
    with pytest.raises(MalformedHeaderError):
        decode_pcx_image(mkpcx(2, 1, bytes([7, 8]), signature=0x0B))


def test_too_small():
    with pytest.raises(MalformedHeaderError):
        decode_pcx_image(b'\x0a\x05\x01\x08')


def test_missing_palette():
    with pytest.raises(PaletteMissingError):
        decode_pcx_image(mkpcx(2, 1, bytes([7, 8]), palette=b''))


def test_bad_palette_marker():
    data = mkpcx(2, 1, bytes([7, 8]), palette=b'\x00' + bytes(768))
    with pytest.raises(PaletteMissingError):
        decode_pcx_image(data)


def test_truncated_raw_pixels():
    header_only = mkpcx(300, 300, b'', rle=0, palette=b'')
    with pytest.raises(TruncatedDataError):
        decode_pcx_image(header_only)
