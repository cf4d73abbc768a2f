from typing import Iterable, Iterator, Tuple, Union

from .buffer import BufferLike
from .chunk import Chunk
from .settings import _PngSetting


def read_chunks(
    cfg: _PngSetting, buffer: BufferLike, offset: int = 0
) -> Iterator[Tuple[int, Chunk]]:
    """Read all chunks from given bytes."""
    data = memoryview(buffer)
    max_size = len(data)
    while offset < max_size:
        chunk = cfg.untag(data, offset)
        cfg.logger.debug('read chunk %s at offset %d (%d bytes)', chunk.tag, offset, len(chunk))
        yield offset, chunk
        offset += len(chunk)
    assert offset == max_size


def write_chunks(cfg: _PngSetting, chunks: Iterable[Union[bytes, Chunk]]) -> bytes:
    """Write chunks sequence to bytes."""
    stream = bytearray()
    for chunk in chunks:
        assert chunk
        stream += bytes(chunk)
    cfg.logger.debug('wrote %d bytes of chunks', len(stream))
    return bytes(stream)
