from typing import Iterable, Iterator, Tuple

from parse import parse

from .chunk import Chunk


def print_chunks(
    chunks: Iterable[Tuple[int, Chunk]], base: int = 0
) -> Iterator[Tuple[int, Chunk]]:
    for offset, chunk in chunks:
        print(f'{base + offset} {chunk.tag} {chunk.length} 0x{chunk.crc:08x}')
        yield base + offset, chunk


def drop_offsets(chunks: Iterable[Tuple[int, Chunk]]) -> Iterator[Chunk]:
    """Drop offset from each (offset, chunk) tuple in given iterator"""
    return (chunk for _, chunk in chunks)


def findall(
    tag: str, chunks: Iterable[Tuple[int, Chunk]]
) -> Iterator[Tuple[int, Chunk]]:
    """Keep (offset, chunk) tuples whose tag matches given parse pattern, e.g. 't{}'"""
    for offset, chunk in chunks:
        if parse(tag, chunk.tag, evaluate_result=False, case_sensitive=True):
            yield offset, chunk
