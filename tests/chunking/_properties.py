# Copyright (c) 2026 blechunk developers
# This software is distributed under the terms of the MIT License.

import math
import typing
import random
from blechunk.chunking import (
    Chunk,
    ChunkFlag,
    Dechunker,
    Continuing,
    Completed,
    MAX_CHUNK_PAYLOAD,
    iter_chunks,
    make_chunks,
)


def _parse_all(chunks: typing.Sequence[bytes]) -> typing.List[Chunk]:
    out = []
    for image in chunks:
        ch = Chunk.parse(memoryview(image))
        assert isinstance(ch, Chunk), ch
        out.append(ch)
    return out


def _unittest_chunk_layout(payload_factory: typing.Callable[[int], bytes], rng: random.Random) -> None:
    for _ in range(300):
        payload = payload_factory(2000)
        chunk_size = rng.choice([1, 2, 19, 31, 32, 33, 100, 255, 256, 1000, rng.randint(1, 3000)])
        chunks = _parse_all(make_chunks(payload, chunk_size))

        # The data slices reproduce the payload exactly.
        assert b"".join(bytes(c.payload) for c in chunks) == payload

        if len(payload) <= chunk_size:
            assert len(chunks) == 1
            assert chunks[0].flag == ChunkFlag.ONLY
        else:
            assert len(chunks) == math.ceil(len(payload) / chunk_size)
            flags = [c.flag for c in chunks]
            assert flags == [ChunkFlag.FIRST] + [ChunkFlag.MIDDLE] * (len(chunks) - 2) + [ChunkFlag.LAST]
            assert all(len(c.payload) == chunk_size for c in chunks[:-1])
            assert 1 <= len(chunks[-1].payload) <= chunk_size

        assert sum(c.flag.starts_session for c in chunks) == 1
        assert sum(c.flag.ends_session for c in chunks) == 1


def _unittest_reassembly(payload_factory: typing.Callable[[int], bytes], rng: random.Random) -> None:
    dechunker = Dechunker()  # Reused across payloads; every payload starts with a FIRST or ONLY chunk.
    for _ in range(300):
        payload = payload_factory(3000)
        chunk_size = rng.randint(1, 600)
        chunks = make_chunks(payload, chunk_size)
        results = [dechunker.add_chunk(c) for c in chunks]
        assert results[:-1] == [Continuing()] * (len(chunks) - 1)
        assert results[-1] == Completed(payload)
        assert dechunker.chunk_count == len(chunks)


def _unittest_clamping(payload_factory: typing.Callable[[int], bytes]) -> None:
    payload = payload_factory(100) + bytes(MAX_CHUNK_PAYLOAD * 2)
    reference = make_chunks(payload, MAX_CHUNK_PAYLOAD)
    assert len(reference) == 3
    for chunk_size in (0, -1, -MAX_CHUNK_PAYLOAD, MAX_CHUNK_PAYLOAD + 1, 100_000):
        assert make_chunks(payload, chunk_size) == reference


def _unittest_header_width_boundary() -> None:
    def headers(size: int) -> typing.List[bytes]:
        return [c.header for c in iter_chunks(bytes(size), size)]

    assert headers(31) == [b"\xdf"]
    assert headers(32) == [b"\xe0\x20"]
    assert headers(8191) == [b"\xff\xff"]

    # A multi-chunk sequence mixing both header forms: 40 bytes in slices of 32 + 8.
    assert [c[:2] for c in make_chunks(bytes(40), 32)] == [b"\x60\x20", b"\x88\x00"]

    # The maximum chunk size results in the maximum header value.
    chunks = make_chunks(bytes(MAX_CHUNK_PAYLOAD + 1), MAX_CHUNK_PAYLOAD)
    assert [len(c) for c in chunks] == [MAX_CHUNK_PAYLOAD + 2, 2]
    assert chunks[0][:2] == b"\x7f\xff"
    assert chunks[1] == b"\x81\x00"


def _unittest_chunks_do_not_copy_payload() -> None:
    payload = bytearray(b"abcdef")
    chunks = list(iter_chunks(payload, 4))
    payload[0] = ord("X")
    assert bytes(chunks[0].payload) == b"Xbcd"  # Views into the caller's memory.
    assert make_chunks(payload, 4)[0] == b"\x44Xbcd"
