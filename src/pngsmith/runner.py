import logging
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

import typer
import yaml

from pngsmith.kernel.chunk import Chunk
from pngsmith.kernel.chunk_type import ChunkType
from pngsmith.kernel.errors import PngError
from pngsmith.kernel.png import Png, check_signature
from pngsmith.kernel.preset import png
from pngsmith.utils.fileio import read_file

app = typer.Typer()


@contextmanager
def exit_on_error() -> Iterator[None]:
    try:
        yield
    except PngError as exc:
        typer.echo(f'error: {exc}', err=True)
        raise typer.Exit(code=1) from exc


@app.callback()
def main(
    verbose: bool = typer.Option(False, '--verbose', '-v', help='Show debug logs'),
) -> None:
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)


@app.command()
def encode(
    filename: Path = typer.Argument(..., help='Path to the PNG file'),
    chunk_type: str = typer.Argument(..., help='PNG chunk type'),
    message: str = typer.Argument(..., help='Message to encode'),
    output: Optional[Path] = typer.Argument(
        None, help='Output to OUTPUT instead of overwriting'
    ),
) -> None:
    with exit_on_error():
        root = png.open(str(filename))
        root.append_chunk(Chunk.new(ChunkType.from_str(chunk_type), message.encode('utf-8')))
        root.to_path(str(output or filename))


@app.command()
def decode(
    filename: Path = typer.Argument(..., help='Path to the PNG file'),
    chunk_type: str = typer.Argument(..., help='Type of PNG chunk to search for'),
) -> None:
    with exit_on_error():
        root = png.open(str(filename))
        # drain matches in memory only, file is not rewritten
        while root.chunk_by_type(chunk_type) is not None:
            chunk = root.remove_chunk(chunk_type)
            text = chunk.data_as_string()
            print(chunk)
            print(text)


@app.command()
def remove(
    filename: Path = typer.Argument(..., help='Path to the PNG file'),
    chunk_type: str = typer.Argument(..., help='PNG chunk type to remove'),
) -> None:
    with exit_on_error():
        root = png.open(str(filename))
        removed = root.remove_chunk(chunk_type)
        root.to_path(str(filename))
    print(f'Removed: {removed}')


def describe(offset: int, chunk: Chunk) -> Dict[str, Any]:
    return {
        'offset': offset,
        'type': chunk.tag,
        'length': chunk.length,
        'crc': chunk.crc,
        'critical': chunk.chunk_type.is_critical,
    }


@app.command('print')
def print_file(
    filename: Path = typer.Argument(..., help='Path to the PNG file'),
    tag: Optional[str] = typer.Option(
        None, '--tag', '-t', help="Only chunks matching pattern (e.g. 't{}')"
    ),
    as_yaml: bool = typer.Option(False, '--yaml', help='Dump listing as YAML'),
    offsets: bool = typer.Option(False, '--offsets', help='One line per chunk'),
) -> None:
    with exit_on_error():
        data = read_file(str(filename))
        listing = list(png.read_chunks(data, offset=check_signature(png, data)))

    if not (tag or as_yaml or offsets):
        print(Png.from_chunks(png.drop_offsets(listing), cfg=png))
        return

    if tag:
        listing = png.findall(tag, listing)
    if as_yaml:
        yaml.safe_dump(
            [describe(offset, chunk) for offset, chunk in listing],
            sys.stdout,
            sort_keys=False,
        )
    elif offsets:
        for _ in png.print_chunks(listing):
            pass
    else:
        for chunk in png.drop_offsets(listing):
            print(chunk)


if __name__ == '__main__':
    app()
