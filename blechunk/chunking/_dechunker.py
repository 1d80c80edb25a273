# Copyright (c) 2026 blechunk developers
# This software is distributed under the terms of the MIT License.

from __future__ import annotations
import enum
import time
import typing
import logging
import dataclasses
import blechunk
from ._chunk import Chunk, ChunkError


_logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class Continuing:
    """The chunk was accepted; more chunks are needed to complete the payload."""


@dataclasses.dataclass(frozen=True)
class Completed:
    """The chunk was accepted and it completed the payload."""

    payload: bytes


@dataclasses.dataclass(frozen=True)
class Failed:
    """The chunk was rejected. The session shall be abandoned."""

    error: ChunkError


AddChunkResult = typing.Union[Continuing, Completed, Failed]


class Dechunker:
    """
    Stateful reassembler of chunked payloads. An instance handles exactly one in-flight payload at a time;
    it may be reused for the subsequent payloads.

    The chunks shall be fed in the order of their transmission. The protocol carries no sequence numbers,
    so the reassembler trusts the order completely: reordered, lost, or duplicated chunks corrupt the result
    without detection. Likewise, a :attr:`ChunkFlag.MIDDLE` or :attr:`ChunkFlag.LAST` chunk that arrives without
    a preceding :attr:`ChunkFlag.FIRST` is appended to whatever is left in the buffer.

    Malformed chunks are not reported through exceptions; :meth:`add_chunk` returns :class:`Failed` instead.
    After a failure the buffer content is stale and the instance shall be either discarded or :meth:`reset`.

    >>> dechunker = Dechunker()
    >>> dechunker.add_chunk(bytes.fromhex("4461626364"))
    Continuing()
    >>> dechunker.state
    <State.ACCUMULATING: 2>
    >>> dechunker.add_chunk(bytes.fromhex("8165"))
    Completed(payload=b'abcde')
    >>> dechunker.add_chunk(bytes.fromhex("8565"))
    Failed(error=<ChunkError.LENGTH_MISMATCH: 2>)
    """

    class State(enum.Enum):
        AWAITING_FIRST = enum.auto()
        """No chunks received since construction or the last reset."""

        ACCUMULATING = enum.auto()
        """At least one chunk of an incomplete payload has been received."""

        COMPLETED = enum.auto()
        """The last received chunk completed a payload."""

        FAILED = enum.auto()
        """The last received chunk was malformed."""

    def __init__(
        self,
        *,
        logger: typing.Optional[logging.Logger] = None,
        on_error_callback: typing.Optional[typing.Callable[[ChunkError], None]] = None,
    ) -> None:
        """
        :param logger: Where the diagnostic output goes. Defaults to the logger of this module.

        :param on_error_callback: Invoked whenever a malformed chunk is received.
            This is intended for diagnostic purposes only, e.g., for error counting;
            the returned :class:`Failed` already carries the same information.
        """
        self._logger = logger if logger is not None else _logger
        self._on_error_callback = on_error_callback
        if self._on_error_callback is not None and not callable(self._on_error_callback):
            raise ValueError(f"Invalid error callback: {self._on_error_callback!r}")

        self._buffer = bytearray()
        self._chunk_count = 0
        self._started_at = time.monotonic()
        self._state = Dechunker.State.AWAITING_FIRST

    @property
    def state(self) -> Dechunker.State:
        return self._state

    @property
    def chunk_count(self) -> int:
        """Number of chunks absorbed into the current session, including the one that started it."""
        return self._chunk_count

    @property
    def buffered_size(self) -> int:
        return len(self._buffer)

    @property
    def elapsed(self) -> float:
        """Seconds since the current session was started. Used for latency diagnostics only."""
        return time.monotonic() - self._started_at

    def reset(self) -> None:
        """
        Discards the accumulated state and returns to :attr:`State.AWAITING_FIRST`.
        Use this to mark a session boundary explicitly instead of relying on the next starting chunk.
        """
        self._buffer = bytearray()
        self._chunk_count = 0
        self._started_at = time.monotonic()
        self._state = Dechunker.State.AWAITING_FIRST

    def add_chunk(self, image: typing.Union[bytes, bytearray, memoryview]) -> AddChunkResult:
        """
        Updates the reassembly state machine with the new chunk.

        :param image: Raw chunk as received from the transport, header included.
        :return: :class:`Continuing` if more chunks are expected, :class:`Completed` with the payload if this chunk
            was the last one, or :class:`Failed` if the chunk is malformed.
        :raises: Nothing.
        """
        self._logger.debug("%s: attempting to add chunk of %d bytes", self, len(image))
        chunk = Chunk.parse(memoryview(image).cast("B"))
        if isinstance(chunk, ChunkError):
            return self._fail(chunk)

        if chunk.flag.starts_session:
            if self._state == Dechunker.State.ACCUMULATING:
                self._logger.debug(
                    "%s: previous payload abandoned after %d chunk(s), %d bytes",
                    self,
                    self._chunk_count,
                    len(self._buffer),
                )
            self._started_at = time.monotonic()
            self._buffer = bytearray(chunk.payload)
            self._chunk_count = 1
            self._logger.debug(
                "%s: created buffer with %d bytes (%s)", self, len(self._buffer), chunk.flag.mnemonic
            )
        else:
            if self._state != Dechunker.State.ACCUMULATING:
                # Without a sequence number there is no way to tell an orphan from a valid continuation
                # of a payload that started before a reset. The chunk is appended regardless.
                self._logger.debug(
                    "%s: %s chunk received in state %s; appending to %d stale bytes",
                    self,
                    chunk.flag.mnemonic,
                    self._state.name,
                    len(self._buffer),
                )
            old_size = len(self._buffer)
            self._buffer += chunk.payload
            self._chunk_count += 1
            self._logger.debug(
                "%s: enlarged buffer to %d+%d=%d bytes (%d chunks) (%s)",
                self,
                len(chunk.payload),
                old_size,
                len(self._buffer),
                self._chunk_count,
                chunk.flag.mnemonic,
            )

        if chunk.flag.ends_session:
            self._state = Dechunker.State.COMPLETED
            self._logger.debug(
                "%s: complete, %d chunk(s), %d bytes, %.3f secs",
                self,
                self._chunk_count,
                len(self._buffer),
                self.elapsed,
            )
            return Completed(bytes(self._buffer))

        self._state = Dechunker.State.ACCUMULATING
        return Continuing()

    def _fail(self, error: ChunkError) -> Failed:
        self._state = Dechunker.State.FAILED
        self._logger.debug("%s: failed: %s", self, error.name)
        if self._on_error_callback is not None:
            self._on_error_callback(error)
        return Failed(error)

    def __repr__(self) -> str:
        return blechunk.util.repr_attributes_noexcept(
            self, state=self._state.name, chunks=self._chunk_count, buffered=len(self._buffer)
        )


# ----------------------------------------  TESTS GO BELOW THIS LINE  ----------------------------------------


def _unittest_dechunker_concrete() -> None:
    dechunker = Dechunker()
    assert dechunker.state == Dechunker.State.AWAITING_FIRST
    assert dechunker.chunk_count == 0
    assert dechunker.buffered_size == 0

    assert dechunker.add_chunk(b"\x54" + b"\xaa" * 20) == Continuing()
    assert dechunker.state == Dechunker.State.ACCUMULATING
    assert dechunker.chunk_count == 1
    assert dechunker.buffered_size == 20

    assert dechunker.add_chunk(b"\x91" + b"\xaa" * 17) == Completed(b"\xaa" * 37)
    assert dechunker.state == Dechunker.State.COMPLETED
    assert dechunker.chunk_count == 2
    assert dechunker.elapsed >= 0


def _unittest_dechunker_errors() -> None:
    errors: typing.List[ChunkError] = []
    dechunker = Dechunker(on_error_callback=errors.append)

    assert dechunker.add_chunk(b"") == Failed(ChunkError.TOO_FEW_BYTES)
    assert dechunker.state == Dechunker.State.FAILED
    assert dechunker.add_chunk(b"\x20") == Failed(ChunkError.TOO_FEW_BYTES)
    assert dechunker.add_chunk(b"\x43ab") == Failed(ChunkError.LENGTH_MISMATCH)
    assert dechunker.add_chunk(bytearray(b"\x60\x20") + bytes(31)) == Failed(ChunkError.LENGTH_MISMATCH)
    assert errors == [
        ChunkError.TOO_FEW_BYTES,
        ChunkError.TOO_FEW_BYTES,
        ChunkError.LENGTH_MISMATCH,
        ChunkError.LENGTH_MISMATCH,
    ]
    assert dechunker.chunk_count == 0

    from pytest import raises

    with raises(ValueError):
        Dechunker(on_error_callback=123)  # type: ignore


def _unittest_dechunker_failure_keeps_stale_buffer() -> None:
    dechunker = Dechunker()
    assert dechunker.add_chunk(b"\x43abc") == Continuing()
    assert dechunker.add_chunk(b"\x05de") == Failed(ChunkError.LENGTH_MISMATCH)
    assert dechunker.buffered_size == 3  # Untouched; the caller is expected to discard the session.
    dechunker.reset()
    assert dechunker.state == Dechunker.State.AWAITING_FIRST
    assert dechunker.buffered_size == 0
    assert dechunker.chunk_count == 0


def _unittest_dechunker_restart_on_first() -> None:
    dechunker = Dechunker()
    assert dechunker.add_chunk(b"\x43abc") == Continuing()
    assert dechunker.add_chunk(b"\x02de") == Continuing()
    # A new payload begins before the old one is complete; the old one is silently dropped.
    assert dechunker.add_chunk(b"\x42xy") == Continuing()
    assert dechunker.chunk_count == 1
    assert dechunker.add_chunk(b"\x81z") == Completed(b"xyz")
    assert dechunker.add_chunk(b"\xc3123") == Completed(b"123")
    assert dechunker.add_chunk(b"\xc0") == Completed(b"")


def _unittest_dechunker_orphans() -> None:
    # Neither ordering nor session start is verified; an orphan is appended to the stale buffer.
    dechunker = Dechunker()
    assert dechunker.add_chunk(b"\x82ab") == Completed(b"ab")
    assert dechunker.add_chunk(b"\x01c") == Continuing()
    assert dechunker.add_chunk(b"\x81d") == Completed(b"abcd")
    assert dechunker.chunk_count == 3


def _unittest_dechunker_logger_injection(caplog: typing.Any) -> None:
    logger = logging.getLogger("blechunk.test.injected")
    dechunker = Dechunker(logger=logger)
    with caplog.at_level(logging.DEBUG, logger="blechunk.test.injected"):
        dechunker.add_chunk(b"\xc1a")
        dechunker.add_chunk(b"")
    messages = [r.getMessage() for r in caplog.records if r.name == "blechunk.test.injected"]
    assert any("created buffer with 1 bytes (O)" in m for m in messages)
    assert any("complete, 1 chunk(s), 1 bytes" in m for m in messages)
    assert any("failed: TOO_FEW_BYTES" in m for m in messages)
