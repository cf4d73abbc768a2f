import os
import struct
import zlib
from typing import Sequence

import pytest

from pngsmith.kernel.chunk import Chunk
from pngsmith.kernel.chunk_type import ChunkType
from pngsmith.kernel.settings import PNG_SIGNATURE

SECRET_MESSAGE = b'This is where your secret message will be!'
SECRET_CRC = 2882656334


def make_chunk(tag: str, data: bytes) -> Chunk:
    return Chunk.new(ChunkType.from_str(tag), data)


def raw_chunk(tag: bytes, data: bytes, crc: int) -> bytes:
    return struct.pack('>I', len(data)) + tag + data + struct.pack('>I', crc)


def make_file(chunks: Sequence[Chunk]) -> bytes:
    return PNG_SIGNATURE + b''.join(bytes(chunk) for chunk in chunks)


@pytest.fixture
def image_chunks():
    return [
        make_chunk('IHDR', struct.pack('>IIBBBBB', 1, 1, 8, 2, 0, 0, 0)),
        make_chunk('tEXt', b'Comment\x00original'),
        make_chunk('IDAT', zlib.compress(b'\x00\xff\x00\x00')),
        make_chunk('IEND', b''),
    ]


@pytest.fixture
def image_bytes(image_chunks):
    return make_file(image_chunks)


@pytest.fixture
def image_path(tmp_path, image_bytes):
    path = tmp_path / 'image.png'
    path.write_bytes(image_bytes)
    return path


@pytest.fixture
def umask_022():
    previous = os.umask(0o022)
    yield
    os.umask(previous)
