# Copyright (c) 2026 blechunk developers
# This software is distributed under the terms of the MIT License.

import typing
import blechunk
from ._flag import ChunkFlag
from ._chunk import Chunk, MAX_CHUNK_PAYLOAD, MAX_SHORT_CHUNK_PAYLOAD


DEFAULT_MTU = 20
"""
Default number of bytes per transport write. This is the payload of a Bluetooth LE write
with the default ATT MTU of 23 bytes, which translates into 19 data bytes per chunk.
"""


def normalize_chunk_size(chunk_size: int) -> int:
    """
    Values outside of [1, :data:`MAX_CHUNK_PAYLOAD`] are replaced with the maximum. This is not an error.

    >>> normalize_chunk_size(19)
    19
    >>> normalize_chunk_size(0), normalize_chunk_size(-5), normalize_chunk_size(10 ** 6)
    (8191, 8191, 8191)
    """
    chunk_size = int(chunk_size)
    if chunk_size < 1 or chunk_size > MAX_CHUNK_PAYLOAD:
        return MAX_CHUNK_PAYLOAD
    return chunk_size


def chunk_size_for_mtu(mtu: int) -> int:
    """
    The largest chunk size such that every chunk, header included, fits into a single transport write of ``mtu`` bytes.

    >>> chunk_size_for_mtu(20)
    19
    >>> chunk_size_for_mtu(33), chunk_size_for_mtu(34)
    (31, 32)
    >>> chunk_size_for_mtu(512)
    510
    >>> chunk_size_for_mtu(65535)
    8191
    """
    mtu = int(mtu)
    if mtu < 2:
        raise blechunk.InvalidConfigurationError(f"MTU of {mtu} bytes cannot accommodate a chunk")
    if mtu - 1 <= MAX_SHORT_CHUNK_PAYLOAD:
        return mtu - 1
    return min(max(mtu - 2, MAX_SHORT_CHUNK_PAYLOAD), MAX_CHUNK_PAYLOAD)


def iter_chunks(payload: typing.Union[bytes, bytearray, memoryview], chunk_size: int) -> typing.Iterable[Chunk]:
    """
    Slices the payload into consecutive pieces of at most ``chunk_size`` bytes and tags each with its position flag.
    The chunk size is normalized using :func:`normalize_chunk_size`.
    An empty payload results in a single empty chunk flagged :attr:`ChunkFlag.ONLY` so that the receiving side
    is still notified about the end of the message.

    This function is pure; the chunks reference the memory of the payload without copying it.

    >>> [(c.flag.mnemonic, bytes(c.payload)) for c in iter_chunks(b"abcdefg", 3)]
    [('F', b'abc'), ('M', b'def'), ('L', b'g')]
    >>> [(c.flag.mnemonic, bytes(c.payload)) for c in iter_chunks(b"", 3)]
    [('O', b'')]
    """
    chunk_size = normalize_chunk_size(chunk_size)
    view = memoryview(payload).cast("B")
    if len(view) == 0:
        yield Chunk(ChunkFlag.ONLY, view)
        return
    slices = (view[offset : offset + chunk_size] for offset in range(0, len(view), chunk_size))
    for index, (last, data) in enumerate(blechunk.util.mark_last(slices)):
        yield Chunk(ChunkFlag.for_position(first=index == 0, last=last), data)


def make_chunks(payload: typing.Union[bytes, bytearray, memoryview], chunk_size: int) -> typing.List[bytes]:
    """
    Constructs an ordered sequence of chunks ready for transmission, one transport write per chunk.
    Total over all payloads and all chunk sizes; see :func:`iter_chunks` for the details.

    >>> chunks = make_chunks(b"\\xaa" * 37, chunk_size=20)
    >>> [c[0] for c in chunks], [len(c) for c in chunks]
    ([84, 145], [21, 18])
    """
    return [ch.compile() for ch in iter_chunks(payload, chunk_size)]


# ----------------------------------------  TESTS GO BELOW THIS LINE  ----------------------------------------


def _unittest_make_chunks_concrete() -> None:
    payload = b"\xaa" * 37
    assert make_chunks(payload, 20) == [
        b"\x54" + b"\xaa" * 20,
        b"\x91" + b"\xaa" * 17,
    ]

    assert make_chunks(b"hi", 20) == [b"\xc2hi"]
    assert make_chunks(b"", 20) == [b"\xc0"]
    assert make_chunks(b"abc", 1) == [b"\x41a", b"\x01b", b"\x81c"]


def _unittest_make_chunks_clamping() -> None:
    payload = bytes(range(256)) * 70  # Longer than the max chunk payload.
    reference = make_chunks(payload, MAX_CHUNK_PAYLOAD)
    assert len(reference) == 3
    for chunk_size in (0, -1, MAX_CHUNK_PAYLOAD + 1, 2**40):
        assert make_chunks(payload, chunk_size) == reference


def _unittest_chunk_size_for_mtu() -> None:
    from pytest import raises

    assert chunk_size_for_mtu(2) == 1
    assert chunk_size_for_mtu(32) == 31
    assert chunk_size_for_mtu(MAX_CHUNK_PAYLOAD + 2) == MAX_CHUNK_PAYLOAD
    for mtu in range(2, 300):
        size = chunk_size_for_mtu(mtu)
        assert size + Chunk.header_size_for(size) <= mtu
        for ch in make_chunks(bytes(1000), size):
            assert len(ch) <= mtu

    with raises(blechunk.InvalidConfigurationError):
        chunk_size_for_mtu(1)
    with raises(blechunk.InvalidConfigurationError):
        chunk_size_for_mtu(0)
