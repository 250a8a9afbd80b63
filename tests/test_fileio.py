import pytest

from bmassets.kernel.fileio import ResourceFile, read_file


def test_read_file(tmp_path):
    path = tmp_path / 'KICK.ANI'
    path.write_bytes(b'CHFILEANI \x00\x01')
    assert read_file(str(path)) == b'CHFILEANI \x00\x01'


def test_read_empty_file(tmp_path):
    path = tmp_path / 'EMPTY.ANI'
    path.write_bytes(b'')
    assert read_file(str(path)) == b''


def test_closed_resource(tmp_path):
    path = tmp_path / 'KICK.ANI'
    path.write_bytes(b'\x01\x02\x03')
    with ResourceFile.load(str(path)) as res:
        assert len(res) == 3
        assert res[1] == 2
    assert res.closed
    with pytest.raises(OSError, match='closed'):
        res[0]
