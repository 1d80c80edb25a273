# Copyright (c) 2026 blechunk developers
# This software is distributed under the terms of the MIT License.

from __future__ import annotations
import enum
import typing
import dataclasses
import blechunk
from ._flag import ChunkFlag


MAX_CHUNK_PAYLOAD = 0x1FFF
"""
The length field is 13 bits wide, so no chunk can carry more than this many data bytes.
This is the only protocol-wide constant; the actual chunk size is chosen by the sender.
"""

MAX_SHORT_CHUNK_PAYLOAD = 0x1F
"""Chunks carrying up to this many data bytes use the one-byte header form."""

_EXTENDED_LENGTH_BIT = 0x20
_SHORT_LENGTH_MASK = 0x1F


class ChunkError(enum.Enum):
    """
    Reasons why a received chunk image could not be parsed.
    Neither is recoverable: the reassembly session that received such a chunk has to be abandoned.
    """

    TOO_FEW_BYTES = enum.auto()
    """
    The image is empty, or its first byte declares the two-byte header form but the second byte is missing.
    """

    LENGTH_MISMATCH = enum.auto()
    """
    The data length declared in the header does not equal the number of bytes following the header.
    """


@dataclasses.dataclass(frozen=True, repr=False)
class Chunk:
    """
    One header-plus-data unit of the wire format::

        byte 0:  FF E LLLLL     FF = flag, E = extended length, L = length (or its 5 most significant bits if E)
        byte 1:  LLLLLLLL       present only if E; the 8 least significant bits of the length
        data:    the declared number of bytes

    >>> Chunk(ChunkFlag.FIRST, memoryview(b"\\xaa" * 20)).header.hex()
    '54'
    >>> Chunk(ChunkFlag.LAST, memoryview(b"\\xaa" * 300)).header.hex()
    'a12c'
    >>> Chunk.parse(memoryview(bytes.fromhex("c3616263")))
    Chunk(flag=O, payload=616263)
    >>> Chunk.parse(memoryview(bytes.fromhex("c4616263")))
    <ChunkError.LENGTH_MISMATCH: 2>
    """

    flag: ChunkFlag

    payload: memoryview
    """The data carried by the chunk. May be empty."""

    def __post_init__(self) -> None:
        if not isinstance(self.flag, ChunkFlag):
            raise TypeError(f"Invalid flag: {self.flag!r}")

        if not isinstance(self.payload, memoryview):
            raise TypeError(f"Bad payload type: {type(self.payload).__name__}")

        if len(self.payload) > MAX_CHUNK_PAYLOAD:
            raise ValueError(f"Chunk payload is too large: {len(self.payload)} > {MAX_CHUNK_PAYLOAD} bytes")

    @property
    def header(self) -> bytes:
        length = len(self.payload)
        byte0 = int(self.flag) << 6
        if length <= MAX_SHORT_CHUNK_PAYLOAD:
            return bytes([byte0 | length])
        return bytes([byte0 | _EXTENDED_LENGTH_BIT | (length >> 8), length & 0xFF])

    def compile(self) -> bytes:
        """
        :returns: The header followed by the data, ready to be handed over to the transport as a single write.
        """
        return self.header + self.payload

    @staticmethod
    def header_size_for(payload_size: int) -> int:
        return 1 if payload_size <= MAX_SHORT_CHUNK_PAYLOAD else 2

    @staticmethod
    def parse(image: memoryview) -> typing.Union[Chunk, ChunkError]:
        """
        The checks are performed in a fixed order: presence of the first header byte,
        presence of the second header byte if the extended form is declared, and finally the data length.

        :returns: The chunk, or the reason why the image is malformed. Never raises.
        """
        if len(image) < 1:
            return ChunkError.TOO_FEW_BYTES
        byte0 = image[0]
        if byte0 & _EXTENDED_LENGTH_BIT:
            if len(image) < 2:
                return ChunkError.TOO_FEW_BYTES
            length = ((byte0 & _SHORT_LENGTH_MASK) << 8) | image[1]
            data = image[2:]
        else:
            length = byte0 & _SHORT_LENGTH_MASK
            data = image[1:]
        if length != len(data):
            return ChunkError.LENGTH_MISMATCH
        return Chunk(flag=ChunkFlag.from_header(byte0), payload=data)

    def __repr__(self) -> str:
        return blechunk.util.repr_attributes(
            self, flag=self.flag.mnemonic, payload=blechunk.util.repr_payload(self.payload)
        )


# ----------------------------------------  TESTS GO BELOW THIS LINE  ----------------------------------------


def _unittest_chunk_ctor() -> None:
    from pytest import raises

    Chunk(ChunkFlag.ONLY, memoryview(b""))
    Chunk(ChunkFlag.ONLY, memoryview(bytes(MAX_CHUNK_PAYLOAD)))

    with raises(TypeError):
        Chunk(3, memoryview(b""))  # type: ignore

    with raises(TypeError):
        Chunk(ChunkFlag.ONLY, b"")  # type: ignore

    with raises(ValueError):
        Chunk(ChunkFlag.ONLY, memoryview(bytes(MAX_CHUNK_PAYLOAD + 1)))


def _unittest_chunk_header_width() -> None:
    def header(flag: ChunkFlag, size: int) -> bytes:
        return Chunk(flag, memoryview(bytes(size))).header

    assert header(ChunkFlag.MIDDLE, 0) == b"\x00"
    assert header(ChunkFlag.ONLY, 0) == b"\xc0"
    assert header(ChunkFlag.FIRST, 31) == b"\x5f"
    assert header(ChunkFlag.FIRST, 32) == b"\x60\x20"
    assert header(ChunkFlag.MIDDLE, 256) == b"\x21\x00"
    assert header(ChunkFlag.LAST, 8191) == b"\xbf\xff"
    assert header(ChunkFlag.ONLY, 8191) == b"\xff\xff"

    assert Chunk.header_size_for(0) == 1
    assert Chunk.header_size_for(31) == 1
    assert Chunk.header_size_for(32) == 2
    assert Chunk.header_size_for(8191) == 2


def _unittest_chunk_parse() -> None:
    def parse(image: bytes) -> typing.Union[Chunk, ChunkError]:
        return Chunk.parse(memoryview(image))

    assert parse(b"") == ChunkError.TOO_FEW_BYTES
    assert parse(b"\x20") == ChunkError.TOO_FEW_BYTES
    assert parse(b"\xe0") == ChunkError.TOO_FEW_BYTES
    assert parse(b"\x01") == ChunkError.LENGTH_MISMATCH
    assert parse(b"\x00\x00") == ChunkError.LENGTH_MISMATCH
    assert parse(b"\x20\x05abcd") == ChunkError.LENGTH_MISMATCH
    assert parse(b"\x20\x05abcdef") == ChunkError.LENGTH_MISMATCH

    ch = parse(b"\xc0")
    assert isinstance(ch, Chunk)
    assert ch.flag == ChunkFlag.ONLY
    assert ch.payload == b""

    # The extended form may be used for short lengths as well; it is accepted although the chunker never emits it.
    ch = parse(b"\x60\x03xyz")
    assert isinstance(ch, Chunk)
    assert ch.flag == ChunkFlag.FIRST
    assert ch.payload == b"xyz"

    original = Chunk(ChunkFlag.MIDDLE, memoryview(bytes(range(256)) * 3))
    ch = parse(original.compile())
    assert isinstance(ch, Chunk)
    assert ch == original
    assert "..." in repr(ch)
