from typing import Optional, Union

import deal

from .errors import PngError

BufferLike = Union[bytes, bytearray, memoryview]


class UnexpectedEndOfInput(PngError, EOFError):
    def __init__(self, expected: int, given: int, buffer: BufferLike) -> None:
        super().__init__(f'Expected buffer of size {expected} but got size {given}')
        self.expected = expected
        self.given = given
        self.buffer = buffer


@deal.chain(
    deal.pre(lambda _: _.size is None or _.size >= 0),
    deal.raises(UnexpectedEndOfInput),
    deal.reason(UnexpectedEndOfInput, lambda _: _.size != len(_.buffer)),
)
def validate_buffer_size(buffer: BufferLike, size: Optional[int] = None) -> BufferLike:
    if size is not None and len(buffer) != size:
        raise UnexpectedEndOfInput(size, len(buffer), buffer)
    return buffer


@deal.chain(
    deal.pre(lambda _: _.size >= 0),
    deal.pre(lambda _: _.offset >= 0),
    deal.raises(UnexpectedEndOfInput),
    deal.reason(UnexpectedEndOfInput, lambda _: _.offset + _.size > len(_.buffer)),
    deal.has(),
)
def splice(buffer: BufferLike, offset: int, size: int) -> BufferLike:
    return validate_buffer_size(buffer[offset : offset + size], size)
