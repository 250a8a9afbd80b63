import glob
import logging
import os
import pathlib

import typer

from bmassets.ani import anim, tree
from bmassets.ani.preset import ani
from bmassets.graphics.image import convert_to_pil_image
from bmassets.kernel.errors import DecodeError
from bmassets.kernel.fileio import read_file
from bmassets.pcx import image as pcx_image
from bmassets.utils.funcutils import flatten

app = typer.Typer()


@app.callback()
def main(
    verbose: bool = typer.Option(False, '--verbose', '-v', help='log debug details'),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(levelname)s %(name)s: %(message)s',
    )


def expand(files: list[str]) -> list[str]:
    return sorted(set(flatten(glob.iglob(r) for r in files)))


@app.command()
def chunks(
    files: list[str] = typer.Argument(..., help='*.ani files to read from'),
) -> None:
    failed = False
    for filename in expand(files):
        try:
            markup = tree.renders(read_file(filename))
        except DecodeError as exc:
            typer.echo(f'{filename}: {exc}', err=True)
            failed = True
            continue
        typer.echo(f'# {filename}')
        typer.echo(markup, nl=False)

    if failed:
        raise typer.Exit(code=1)


@app.command('ani')
def decode_ani(
    files: list[str] = typer.Argument(..., help='*.ani files to read from'),
    output: str = typer.Option('.', '--output', '-o', help='directory for sprite sheets'),
    strict: bool = typer.Option(False, '--strict', help='fail on inconsistent files'),
) -> None:
    cfg = ani(errors='strict' if strict else 'ignore')
    os.makedirs(output, exist_ok=True)
    failed = False
    for filename in expand(files):
        try:
            bundle = anim.from_path(filename, cfg=cfg, materialize=convert_to_pil_image)
        except DecodeError as exc:
            typer.echo(f'{filename}: {exc}', err=True)
            failed = True
            continue

        atlas = bundle.atlas
        print(
            f'{filename}: {atlas.tile_count} tiles of '
            f'{atlas.tile_width}x{atlas.tile_height}'
        )
        for name, animation in bundle.items():
            indices = ' '.join(str(frame.source_index) for frame in animation.frames)
            print(f'    {name} ({animation.width}x{animation.height}): {indices}')
        atlas.handle.save(os.path.join(output, f'{pathlib.Path(filename).stem}.png'))

    if failed:
        raise typer.Exit(code=1)


@app.command('pcx')
def decode_pcx(
    files: list[str] = typer.Argument(..., help='*.pcx files to read from'),
    output: str = typer.Option('.', '--output', '-o', help='directory for images'),
) -> None:
    os.makedirs(output, exist_ok=True)
    failed = False
    for filename in expand(files):
        try:
            im = pcx_image.from_path(filename)
        except DecodeError as exc:
            typer.echo(f'{filename}: {exc}', err=True)
            failed = True
            continue
        print(f'{filename}: {im.width}x{im.height}')
        convert_to_pil_image(im.pixels).save(
            os.path.join(output, f'{pathlib.Path(filename).stem}.png')
        )

    if failed:
        raise typer.Exit(code=1)


if __name__ == '__main__':
    app()
