import zlib
from dataclasses import dataclass, field

import deal

from .buffer import BufferLike, splice
from .chunk_type import ChunkType
from .errors import PngError
from .structured import (
    PNG_CHUNK_HEADER,
    PNG_CHUNK_TRAILER,
    ChunkHeader,
    ChunkTrailer,
)

MAX_CHUNK_LENGTH = 0xFFFFFFFF
CHUNK_OVERHEAD = PNG_CHUNK_HEADER.size + PNG_CHUNK_TRAILER.size


class ChunkTooLarge(PngError, ValueError):
    def __init__(self, size: int) -> None:
        super().__init__(
            f'chunk data of {size} bytes does not fit length field (max {MAX_CHUNK_LENGTH})'
        )
        self.size = size


class CrcMismatch(PngError, ValueError):
    def __init__(self, chunk_type: ChunkType, claimed: int, computed: int) -> None:
        super().__init__(
            f'crc mismatch for chunk {chunk_type!r}: '
            f'stored 0x{claimed:08x} but computed 0x{computed:08x}'
        )
        self.chunk_type = chunk_type
        self.claimed = claimed
        self.computed = computed


class InvalidUtf8(PngError, ValueError):
    def __init__(self, reason: str) -> None:
        super().__init__(f'chunk data is not valid UTF-8: {reason}')
        self.reason = reason


@deal.chain(
    deal.ensure(lambda _: 0 <= _.result <= 0xFFFFFFFF),
    deal.pure,
)
def crc_of(etag: bytes, data: BufferLike) -> int:
    """CRC-32 (ISO 3309 / ITU-T V.42) over chunk type and data, not the length."""
    return zlib.crc32(data, zlib.crc32(etag))


@dataclass(frozen=True)
class Chunk(object):
    """Validated chunk: length and crc always agree with type and data.

    Create with `Chunk.new` or `Chunk.from_bytes`.
    """

    length: int
    chunk_type: ChunkType
    data: bytes = field(repr=False)
    crc: int

    def __post_init__(self) -> None:
        if self.length > MAX_CHUNK_LENGTH:
            raise ChunkTooLarge(self.length)
        if self.length != len(self.data):
            raise ValueError(
                f'length field {self.length} does not match data size {len(self.data)}'
            )
        computed = crc_of(bytes(self.chunk_type), self.data)
        if computed != self.crc:
            raise CrcMismatch(self.chunk_type, self.crc, computed)

    @classmethod
    def new(cls, chunk_type: ChunkType, data: BufferLike) -> 'Chunk':
        size = len(data)
        if size > MAX_CHUNK_LENGTH:
            raise ChunkTooLarge(size)
        data = bytes(data)
        return cls(size, chunk_type, data, crc_of(bytes(chunk_type), data))

    @classmethod
    def from_bytes(cls, buffer: BufferLike, offset: int = 0) -> 'Chunk':
        """Decode the chunk starting at given offset.

        Only a prefix of the buffer is consumed, `len(chunk)` tells how much.
        """
        header = PNG_CHUNK_HEADER.unpack_from(buffer, offset)
        chunk_type = ChunkType.from_bytes(header.etag)
        data = splice(buffer, offset + PNG_CHUNK_HEADER.size, header.length)
        trailer = PNG_CHUNK_TRAILER.unpack_from(
            buffer, offset + PNG_CHUNK_HEADER.size + header.length
        )
        # crc is verified by __post_init__, mismatch rejects the chunk
        return cls(header.length, chunk_type, bytes(data), trailer.crc)

    @property
    def tag(self) -> str:
        return str(self.chunk_type)

    def data_as_string(self) -> str:
        try:
            return self.data.decode('utf-8')
        except UnicodeDecodeError as exc:
            raise InvalidUtf8(str(exc)) from exc

    def as_bytes(self) -> bytes:
        """Encode as length, type, data and crc, integers in network byte order."""
        return (
            PNG_CHUNK_HEADER.pack(ChunkHeader(self.length, bytes(self.chunk_type)))
            + self.data
            + PNG_CHUNK_TRAILER.pack(ChunkTrailer(self.crc))
        )

    def __bytes__(self) -> bytes:
        return self.as_bytes()

    def __len__(self) -> int:
        return CHUNK_OVERHEAD + self.length

    def __str__(self) -> str:
        return '\n'.join(
            (
                'Chunk {',
                f'  Length: {self.length}',
                f'  Type: {self.chunk_type}',
                f'  Data: {len(self.data)} bytes',
                f'  Crc: {self.crc}',
                '}',
            )
        )
