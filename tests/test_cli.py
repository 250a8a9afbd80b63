from typer.testing import CliRunner

from bmassets.cli import app

from builders import mkpcx

runner = CliRunner()


def test_ani_command(tmp_path, sample_ani):
    source = tmp_path / 'WALK.ANI'
    source.write_bytes(sample_ani)
    output = tmp_path / 'out'

    result = runner.invoke(app, ['ani', str(source), '--output', str(output)])
    assert result.exit_code == 0, result.output
    assert '2 tiles of 2x2' in result.output
    assert 'walk (2x2): 0 1' in result.output
    assert (output / 'WALK.png').exists()


def test_ani_command_reports_failures(tmp_path, sample_ani):
    (tmp_path / 'GOOD.ANI').write_bytes(sample_ani)
    (tmp_path / 'BAD.ANI').write_bytes(b'CHFILEBMP ' + sample_ani[10:])

    result = runner.invoke(
        app,
        ['ani', str(tmp_path / '*.ANI'), '--output', str(tmp_path / 'out')],
    )
    assert result.exit_code == 1
    assert (tmp_path / 'out' / 'GOOD.png').exists()
    assert not (tmp_path / 'out' / 'BAD.png').exists()


def test_chunks_command(tmp_path, sample_ani):
    source = tmp_path / 'WALK.ANI'
    source.write_bytes(sample_ani)

    result = runner.invoke(app, ['chunks', str(source)])
    assert result.exit_code == 0, result.output
    assert '<FRAM' in result.output
    assert '<CIMG' in result.output
    assert '<STAT' in result.output


def test_pcx_command(tmp_path):
    source = tmp_path / 'TITLE.PCX'
    source.write_bytes(mkpcx(2, 1, bytes([7, 8]), rle=0))

    result = runner.invoke(app, ['pcx', str(source), '-o', str(tmp_path)])
    assert result.exit_code == 0, result.output
    assert '2x1' in result.output
    assert (tmp_path / 'TITLE.png').exists()


def test_chunks_command_tag_names(tmp_path, sample_ani):
    source = tmp_path / 'WALK.ANI'
    source.write_bytes(sample_ani)

    result = runner.invoke(app, ['chunks', str(source)])
    assert result.exit_code == 0, result.output
    assert '<SEQ offset=' in result.output
    assert '</SEQ>' in result.output
    assert '</SEQ >' not in result.output


def test_chunks_command_reports_failures(tmp_path, sample_ani):
    (tmp_path / 'GOOD.ANI').write_bytes(sample_ani)
    (tmp_path / 'BAD.ANI').write_bytes(b'CHFILEBMP ' + sample_ani[10:])

    result = runner.invoke(app, ['chunks', str(tmp_path / '*.ANI')])
    assert result.exit_code == 1
    assert 'signature' in result.output
    assert '<FRAM' in result.output


def test_ani_command_skips_empty_files(tmp_path, sample_ani):
    (tmp_path / 'GOOD.ANI').write_bytes(sample_ani)
    (tmp_path / 'EMPTY.ANI').write_bytes(b'')

    result = runner.invoke(
        app,
        ['ani', str(tmp_path / '*.ANI'), '--output', str(tmp_path / 'out')],
    )
    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert (tmp_path / 'out' / 'GOOD.png').exists()
    assert not (tmp_path / 'out' / 'EMPTY.png').exists()
