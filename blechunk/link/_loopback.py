# Copyright (c) 2026 blechunk developers
# This software is distributed under the terms of the MIT License.

from __future__ import annotations
import time
import typing
import logging
import dataclasses
import blechunk
from ._reader import ChunkReader


_logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class LinkCapture:
    """
    Reported to the capture handlers for every chunk that passes through a :class:`LoopbackLink`.
    """

    timestamp: float
    """Monotonic time of the write, in seconds."""

    chunk: bytes

    def __repr__(self) -> str:
        return blechunk.util.repr_attributes(
            self, f"{self.timestamp:.6f}", chunk=blechunk.util.repr_payload(self.chunk)
        )


CaptureCallback = typing.Callable[[LinkCapture], None]


class LoopbackLink:
    """
    The loopback link is intended for testing and API usage demonstrations.
    It short-circuits a :class:`ChunkWriter` with a :class:`ChunkReader` as if there was a real transport in between,
    delivering every write immediately and in order. Like a real transport with a small per-write ceiling,
    it refuses writes longer than the MTU.

    >>> from blechunk.link import ChunkReader, ChunkWriter
    >>> received = []
    >>> link = LoopbackLink(ChunkReader(received.append, print), mtu=4)
    >>> ChunkWriter(link, mtu=4).send(b"loopback")
    3
    >>> received
    [b'loopback']
    >>> link(b"\\x43too long")
    Traceback (most recent call last):
      ...
    ValueError: ...
    """

    def __init__(self, reader: ChunkReader, mtu: int = blechunk.chunking.DEFAULT_MTU) -> None:
        self._reader = reader
        self._mtu = int(mtu)
        if self._mtu < 2:
            raise blechunk.InvalidConfigurationError(f"Invalid MTU: {self._mtu}")
        self._capture_handlers: typing.List[CaptureCallback] = []
        self._write_count = 0

    @property
    def mtu(self) -> int:
        return self._mtu

    @property
    def reader(self) -> ChunkReader:
        return self._reader

    @property
    def write_count(self) -> int:
        return self._write_count

    def begin_capture(self, handler: CaptureCallback) -> None:
        """
        The handler will be invoked for every accepted write, before the chunk is delivered to the reader.
        Multiple handlers may be registered.
        """
        self._capture_handlers.append(handler)

    def __call__(self, chunk: bytes) -> None:
        """
        Performs one write. Matches :data:`blechunk.link.WriteCallback`.
        """
        if len(chunk) > self._mtu:
            raise ValueError(f"Write of {len(chunk)} bytes exceeds the MTU of {self._mtu} bytes")
        self._write_count += 1
        if self._capture_handlers:
            cap = LinkCapture(time.monotonic(), bytes(chunk))
            for h in self._capture_handlers:
                try:
                    h(cap)
                except Exception as ex:  # pragma: no cover
                    _logger.exception("%s: unhandled exception in the capture handler: %s", self, ex)
        self._reader.receive(chunk)

    def __repr__(self) -> str:
        return blechunk.util.repr_attributes(self, mtu=self._mtu, reader=self._reader)
