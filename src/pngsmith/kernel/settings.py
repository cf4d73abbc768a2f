import logging
from dataclasses import dataclass

from .buffer import BufferLike
from .chunk import Chunk
from .chunk_type import ChunkType
from .errors import PngError

PNG_SIGNATURE = b'\x89PNG\r\n\x1a\n'


class NonConformingChunkType(PngError, ValueError):
    def __init__(self, chunk_type: ChunkType) -> None:
        super().__init__(f'chunk type {chunk_type!r} has the reserved bit set')
        self.chunk_type = chunk_type


@dataclass(frozen=True)
class _PngSetting(object):
    """Setting for chunk containers

    signature: bytes (default PNG signature) -
        magic preamble expected at the start of the container.

    strict: if set to True, throws error on chunk types with the reserved
        bit set, otherwise log warning

    logger: destination for diagnostics
    """

    signature: bytes = PNG_SIGNATURE
    strict: bool = False
    logger: logging.Logger = logging.root

    def untag(self, buffer: BufferLike, offset: int = 0) -> Chunk:
        """Read chunk from given buffer."""
        chunk = Chunk.from_bytes(buffer, offset=offset)
        check_conformance(self, chunk.chunk_type)
        return chunk

    def mktag(self, tag: str, data: bytes) -> bytes:
        """Create chunk bytes from given tag and data."""
        return bytes(Chunk.new(ChunkType.from_str(tag), data))


def check_conformance(cfg: _PngSetting, chunk_type: ChunkType) -> None:
    if chunk_type.is_valid:
        return
    exc = NonConformingChunkType(chunk_type)
    if cfg.strict:
        raise exc
    cfg.logger.warning(exc)
