# Copyright (c) 2026 blechunk developers
# This software is distributed under the terms of the MIT License.

import typing
import random
import pytest
import blechunk
from blechunk.chunking import ChunkError, Dechunker, DEFAULT_MTU
from blechunk.link import ChunkReader, ChunkWriter, LoopbackLink, LinkCapture


class _Endpoint:
    def __init__(self) -> None:
        self.payloads: typing.List[bytes] = []
        self.aborts: typing.List[ChunkError] = []
        self.reader = ChunkReader(self.payloads.append, self.aborts.append)


def _unittest_loopback_roundtrip(payload_factory: typing.Callable[[int], bytes], rng: random.Random) -> None:
    ep = _Endpoint()
    link = LoopbackLink(ep.reader)
    assert link.mtu == DEFAULT_MTU
    assert link.reader is ep.reader
    writer = ChunkWriter(link)
    assert writer.mtu == DEFAULT_MTU
    assert writer.chunk_size == 19

    captures: typing.List[LinkCapture] = []
    link.begin_capture(captures.append)

    sent: typing.List[bytes] = []
    total_chunks = 0
    for _ in range(50):
        payload = payload_factory(500)
        total_chunks += writer.send(payload)
        sent.append(payload)

    assert ep.payloads == sent
    assert ep.aborts == []
    assert ep.reader.received_payload_count == 50
    assert writer.sent_payload_count == 50
    assert writer.sent_chunk_count == total_chunks == link.write_count == len(captures)
    assert all(len(c.chunk) <= DEFAULT_MTU for c in captures)
    assert all(a.timestamp <= b.timestamp for a, b in zip(captures, captures[1:]))
    assert "LinkCapture(" in repr(captures[0])

    # A different MTU on both ends.
    ep = _Endpoint()
    mtu = rng.randint(34, 600)
    writer = ChunkWriter(LoopbackLink(ep.reader, mtu=mtu), mtu=mtu)
    payload = payload_factory(5000) + b"tail"
    writer.send(payload)
    assert ep.payloads == [payload]


def _unittest_loopback_mtu_enforced() -> None:
    ep = _Endpoint()
    link = LoopbackLink(ep.reader, mtu=20)

    # The writer is misconfigured with an MTU larger than that of the link.
    writer = ChunkWriter(link, mtu=21)
    assert writer.send(bytes(19)) == 1  # Fits.
    with pytest.raises(ValueError):
        writer.send(bytes(20))  # Does not fit, the write error propagates.
    assert ep.payloads == [bytes(19)]

    with pytest.raises(blechunk.InvalidConfigurationError):
        LoopbackLink(ep.reader, mtu=1)


def _unittest_writer_configuration() -> None:
    with pytest.raises(blechunk.InvalidConfigurationError):
        ChunkWriter(lambda _: None, mtu=1)

    with pytest.raises(ValueError):
        ChunkWriter(123, mtu=20)  # type: ignore

    writes: typing.List[bytes] = []
    writer = ChunkWriter(writes.append, mtu=512)
    assert writer.chunk_size == 510
    assert writer.send(b"") == 1
    assert writes == [b"\xc0"]
    assert "mtu=512" in repr(writer)


def _unittest_reader_abort() -> None:
    ep = _Endpoint()
    assert ep.reader.receive(b"\x42ab") is None
    assert ep.reader.dechunker.state == Dechunker.State.ACCUMULATING

    assert ep.reader.receive(b"\x20") is None
    assert ep.aborts == [ChunkError.TOO_FEW_BYTES]
    assert ep.reader.closed
    assert ep.reader.dechunker.state == Dechunker.State.AWAITING_FIRST
    assert ep.reader.dechunker.buffered_size == 0

    with pytest.raises(blechunk.ResourceClosedError):
        ep.reader.receive(b"\xc0")

    ep.reader.close()  # Idempotent.
    assert ep.aborts == [ChunkError.TOO_FEW_BYTES]
    assert ep.payloads == []
    assert "closed=True" in repr(ep.reader)


def _unittest_reader_injected_dechunker() -> None:
    errors: typing.List[ChunkError] = []
    dechunker = Dechunker(on_error_callback=errors.append)
    dechunker.add_chunk(b"\x45abc")  # Stale state is discarded when the reader takes ownership.
    assert dechunker.state == Dechunker.State.FAILED

    received: typing.List[bytes] = []
    reader = ChunkReader(received.append, lambda e: None, dechunker=dechunker)
    assert reader.dechunker is dechunker
    assert dechunker.state == Dechunker.State.AWAITING_FIRST
    assert reader.receive(b"\x81z") == b"z"
    assert received == [b"z"]
    assert errors == [ChunkError.LENGTH_MISMATCH]

    with pytest.raises(ValueError):
        ChunkReader(received.append, None)  # type: ignore


def _unittest_link_session_teardown() -> None:
    """
    The owner of the link tears the connection down from the abort callback; no further chunks are accepted.
    """
    ep = _Endpoint()
    link = LoopbackLink(ep.reader)
    link(b"\x45hello")  # FIRST
    link(b"\x03wo")  # MIDDLE, declares 3 bytes, carries 2
    assert ep.aborts == [ChunkError.LENGTH_MISMATCH]
    with pytest.raises(blechunk.ResourceClosedError):
        link(b"\x81!")
