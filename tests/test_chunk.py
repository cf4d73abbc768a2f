import pytest

from pngsmith.kernel.buffer import UnexpectedEndOfInput
from pngsmith.kernel.chunk import (
    Chunk,
    ChunkTooLarge,
    CrcMismatch,
    InvalidUtf8,
    crc_of,
)
from pngsmith.kernel.chunk_type import ChunkType, InvalidChunkTypeBytes

from .conftest import SECRET_CRC, SECRET_MESSAGE, make_chunk, raw_chunk


@pytest.fixture
def secret_bytes():
    return raw_chunk(b'RuSt', SECRET_MESSAGE, SECRET_CRC)


def test_chunk_from_bytes(secret_bytes):
    chunk = Chunk.from_bytes(secret_bytes)

    assert chunk.length == 42
    assert str(chunk.chunk_type) == 'RuSt'
    assert chunk.data_as_string() == SECRET_MESSAGE.decode()
    assert chunk.crc == SECRET_CRC
    assert len(chunk) == len(secret_bytes)


def test_new_chunk_derives_length_and_crc():
    chunk = Chunk.new(ChunkType.from_str('RuSt'), SECRET_MESSAGE)

    assert chunk.length == len(SECRET_MESSAGE)
    assert chunk.crc == SECRET_CRC
    assert chunk == Chunk.from_bytes(bytes(chunk))


def test_chunk_encoding(secret_bytes):
    chunk = make_chunk('RuSt', SECRET_MESSAGE)
    assert chunk.as_bytes() == secret_bytes
    assert bytes(chunk) == secret_bytes


def test_chunk_round_trip_empty_data():
    chunk = make_chunk('IEND', b'')
    assert bytes(chunk) == b'\x00\x00\x00\x00IEND\xaeB`\x82'
    assert Chunk.from_bytes(bytes(chunk)) == chunk


def test_invalid_crc_is_rejected():
    with pytest.raises(CrcMismatch) as excinfo:
        Chunk.from_bytes(raw_chunk(b'RuSt', SECRET_MESSAGE, SECRET_CRC + 1))
    assert excinfo.value.claimed == SECRET_CRC + 1
    assert excinfo.value.computed == SECRET_CRC


def test_any_flipped_data_bit_is_detected(secret_bytes):
    for pos in range(8, 8 + len(SECRET_MESSAGE)):
        for bit in range(8):
            tampered = bytearray(secret_bytes)
            tampered[pos] ^= 1 << bit
            with pytest.raises(CrcMismatch):
                Chunk.from_bytes(bytes(tampered))


def test_flipped_type_case_bit_is_detected(secret_bytes):
    for pos in range(4, 8):
        tampered = bytearray(secret_bytes)
        tampered[pos] ^= 0x20
        with pytest.raises(CrcMismatch):
            Chunk.from_bytes(bytes(tampered))


def test_invalid_type_is_rejected():
    with pytest.raises(InvalidChunkTypeBytes):
        Chunk.from_bytes(raw_chunk(b'Ru1t', b'', 0))


@pytest.mark.parametrize('cut', [3, 7, 20, 46, 53])
def test_truncated_chunk(secret_bytes, cut):
    with pytest.raises(UnexpectedEndOfInput):
        Chunk.from_bytes(secret_bytes[:cut])


def test_chunk_from_bytes_at_offset(secret_bytes):
    iend = bytes(make_chunk('IEND', b''))
    buffer = secret_bytes + iend

    first = Chunk.from_bytes(buffer)
    second = Chunk.from_bytes(buffer, offset=len(first))

    assert first.tag == 'RuSt'
    assert second.tag == 'IEND'
    assert len(first) + len(second) == len(buffer)


def test_invalid_utf8_data():
    chunk = make_chunk('RuSt', b'\xff\xfe')
    with pytest.raises(InvalidUtf8):
        chunk.data_as_string()
    assert chunk.data == b'\xff\xfe'


def test_chunk_too_large():
    class Huge(bytes):
        def __len__(self):
            return 1 << 32

    with pytest.raises(ChunkTooLarge):
        Chunk.new(ChunkType.from_str('IDAT'), Huge())


def test_chunk_cannot_be_built_with_wrong_crc():
    with pytest.raises(CrcMismatch):
        Chunk(3, ChunkType.from_str('RuSt'), b'abc', 0)


def test_crc_of():
    assert crc_of(b'RuSt', SECRET_MESSAGE) == SECRET_CRC


def test_chunk_display():
    text = str(make_chunk('RuSt', SECRET_MESSAGE))
    assert 'Length: 42' in text
    assert 'Type: RuSt' in text
    assert 'Data: 42 bytes' in text
    assert f'Crc: {SECRET_CRC}' in text
