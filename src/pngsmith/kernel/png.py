from typing import Iterable, Iterator, List, Optional, Tuple

from pngsmith.utils.fileio import read_file, write_file

from .buffer import BufferLike
from .chunk import Chunk
from .errors import PngError
from .helpers import drop_offsets
from .resource import read_chunks, write_chunks
from .settings import _PngSetting

DEFAULT_SETTING = _PngSetting()


class SignatureMismatch(PngError, ValueError):
    def __init__(self, expected: bytes, found: bytes) -> None:
        super().__init__(f'expected signature {expected!r} but found {found!r}')
        self.expected = expected
        self.found = found


class ChunkNotFound(PngError, KeyError):
    def __init__(self, tag: str) -> None:
        super().__init__(tag)
        self.tag = tag

    def __str__(self) -> str:
        return f'no chunk of type {self.tag!r}'


def check_signature(cfg: _PngSetting, buffer: BufferLike) -> int:
    """Verify leading magic, return the offset of the first chunk."""
    found = bytes(memoryview(buffer)[: len(cfg.signature)])
    if found != cfg.signature:
        raise SignatureMismatch(cfg.signature, found)
    return len(cfg.signature)


class Png(object):
    """Fixed signature followed by an ordered sequence of chunks.

    Chunk order is kept as given; keeping IHDR first and IEND last
    is up to the caller.
    """

    def __init__(
        self, chunks: Iterable[Chunk] = (), cfg: _PngSetting = DEFAULT_SETTING
    ) -> None:
        self._cfg = cfg
        self._chunks: List[Chunk] = list(chunks)

    @classmethod
    def from_chunks(
        cls, chunks: Iterable[Chunk], cfg: _PngSetting = DEFAULT_SETTING
    ) -> 'Png':
        return cls(chunks, cfg=cfg)

    @classmethod
    def from_bytes(cls, buffer: BufferLike, cfg: _PngSetting = DEFAULT_SETTING) -> 'Png':
        """Load container, any invalid chunk aborts the whole load."""
        offset = check_signature(cfg, buffer)
        chunks = drop_offsets(read_chunks(cfg, buffer, offset=offset))
        return cls(list(chunks), cfg=cfg)

    @classmethod
    def from_path(cls, path: str, cfg: _PngSetting = DEFAULT_SETTING) -> 'Png':
        cfg.logger.debug('loading container from %s', path)
        return cls.from_bytes(read_file(path), cfg=cfg)

    def to_path(self, path: str) -> int:
        self._cfg.logger.debug('saving container to %s', path)
        return write_file(path, self.as_bytes())

    @property
    def header(self) -> bytes:
        return self._cfg.signature

    @property
    def chunks(self) -> Tuple[Chunk, ...]:
        return tuple(self._chunks)

    def append_chunk(self, chunk: Chunk) -> None:
        self._chunks.append(chunk)

    def chunk_by_type(self, tag: str) -> Optional[Chunk]:
        return next((chunk for chunk in self._chunks if chunk.tag == tag), None)

    def chunks_by_type(self, tag: str) -> List[Chunk]:
        return [chunk for chunk in self._chunks if chunk.tag == tag]

    def remove_chunk(self, tag: str) -> Chunk:
        """Remove first chunk of given type."""
        for idx, chunk in enumerate(self._chunks):
            if chunk.tag == tag:
                return self._chunks.pop(idx)
        raise ChunkNotFound(tag)

    def as_bytes(self) -> bytes:
        return self.header + write_chunks(self._cfg, self._chunks)

    def __bytes__(self) -> bytes:
        return self.as_bytes()

    def __iter__(self) -> Iterator[Chunk]:
        return iter(self.chunks)

    def __len__(self) -> int:
        return len(self._chunks)

    def __repr__(self) -> str:
        return 'Png<{tags}>'.format(tags=','.join(chunk.tag for chunk in self._chunks))

    def __str__(self) -> str:
        lines = [f'Signature: {self.header!r}', f'Chunks: {len(self)}']
        lines.extend(str(chunk) for chunk in self._chunks)
        return '\n'.join(lines)
