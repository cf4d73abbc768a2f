from dataclasses import dataclass

import deal

from .buffer import BufferLike
from .errors import PngError

CHUNK_TYPE_SIZE = 4
PROPERTY_BIT = 1 << 5


class InvalidChunkTypeBytes(PngError, ValueError):
    def __init__(self, etag: bytes, context: str = '') -> None:
        prefix = f'{context}: ' if context else ''
        super().__init__(f'{prefix}chunk type bytes are not ASCII letters: {etag!r}')
        self.etag = etag


class InvalidChunkTypeLength(PngError, ValueError):
    def __init__(self, text: str) -> None:
        super().__init__(
            f'chunk type must be {CHUNK_TYPE_SIZE} bytes long, got {text!r}'
        )
        self.text = text


@deal.pure
def is_valid_byte(byte: int) -> bool:
    """Valid bytes are represented by the characters A-Z or a-z."""
    return ord('A') <= byte <= ord('Z') or ord('a') <= byte <= ord('z')


@dataclass(frozen=True)
class ChunkType(object):
    """Four letter chunk tag.

    Bit 5 of each byte carries a property:

        byte 0: ancillary (set) or critical (clear)
        byte 1: private (set) or public (clear)
        byte 2: reserved, must be clear to conform
        byte 3: safe to copy (set) or unsafe to copy (clear)
    """

    etag: bytes

    def __post_init__(self) -> None:
        if len(self.etag) != CHUNK_TYPE_SIZE or not all(
            is_valid_byte(b) for b in self.etag
        ):
            raise InvalidChunkTypeBytes(self.etag)

    @classmethod
    def from_bytes(cls, etag: BufferLike) -> 'ChunkType':
        return cls(bytes(etag))

    @classmethod
    def from_str(cls, tag: str) -> 'ChunkType':
        etag = tag.encode('utf-8')
        if len(etag) != CHUNK_TYPE_SIZE:
            raise InvalidChunkTypeLength(tag)
        try:
            return cls.from_bytes(etag)
        except InvalidChunkTypeBytes as exc:
            raise InvalidChunkTypeBytes(etag, context=f'parsing {tag!r}') from exc

    def _is_bit_clear(self, index: int) -> bool:
        return self.etag[index] & PROPERTY_BIT == 0

    @property
    def is_critical(self) -> bool:
        return self._is_bit_clear(0)

    @property
    def is_public(self) -> bool:
        return self._is_bit_clear(1)

    @property
    def is_reserved_bit_valid(self) -> bool:
        return self._is_bit_clear(2)

    @property
    def is_safe_to_copy(self) -> bool:
        return not self._is_bit_clear(3)

    @property
    def is_valid(self) -> bool:
        return all(is_valid_byte(b) for b in self.etag) and self.is_reserved_bit_valid

    def __bytes__(self) -> bytes:
        return self.etag

    def __str__(self) -> str:
        # strict decoding, never substitute characters
        return self.etag.decode('ascii')

    def __repr__(self) -> str:
        return f'ChunkType<{self.etag.decode("ascii", errors="backslashreplace")}>'
