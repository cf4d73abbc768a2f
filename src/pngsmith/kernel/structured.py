import struct
from dataclasses import dataclass
from typing import Callable, Generic, NamedTuple, Sequence, TypeVar, cast

from .buffer import BufferLike, splice

T_Struct = TypeVar('T_Struct')


class ChunkHeader(NamedTuple):
    length: int
    etag: bytes


class ChunkTrailer(NamedTuple):
    crc: int


@dataclass(frozen=True)
class StructuredTuple(Generic[T_Struct]):
    """Couples a struct layout with the named tuple it unpacks into."""

    _fields: Sequence[str]
    _structure: struct.Struct
    _factory: Callable[..., T_Struct]

    @property
    def size(self) -> int:
        return self._structure.size

    def unpack_from(self, data: BufferLike, offset: int = 0) -> T_Struct:
        """Unpack from given offset, raising UnexpectedEndOfInput on short data."""
        factory = cast(Callable[..., T_Struct], self._factory)
        values = self._structure.unpack(splice(data, offset, self._structure.size))
        return factory(**dict(zip(self._fields, values)))

    def pack(self, data: T_Struct) -> bytes:
        return self._structure.pack(*[getattr(data, field) for field in self._fields])


PNG_CHUNK_HEADER = StructuredTuple(('length', 'etag'), struct.Struct('>I4s'), ChunkHeader)
PNG_CHUNK_TRAILER = StructuredTuple(('crc',), struct.Struct('>I'), ChunkTrailer)
