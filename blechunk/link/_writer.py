# Copyright (c) 2026 blechunk developers
# This software is distributed under the terms of the MIT License.

import typing
import logging
import blechunk


WriteCallback = typing.Callable[[bytes], None]
"""Performs one transport write. Shall not split or merge the written data."""

_logger = logging.getLogger(__name__)


class ChunkWriter:
    """
    Sending side of a chunked link. Each payload is split into chunks that fit into a single transport write,
    and the chunks are written one by one in order.

    >>> writes = []
    >>> writer = ChunkWriter(writes.append, mtu=8)
    >>> writer.send(b"0123456789")
    2
    >>> writes
    [b'G0123456', b'\\x83789']
    """

    def __init__(self, write: WriteCallback, mtu: int = blechunk.chunking.DEFAULT_MTU) -> None:
        """
        :param write: The transport write function. Exceptions raised by it propagate out of :meth:`send`.

        :param mtu: Max number of bytes per write, header included.
            Raises :class:`blechunk.InvalidConfigurationError` if too small to carry a chunk.
        """
        if not callable(write):
            raise ValueError(f"Invalid write callback: {write!r}")
        self._write = write
        self._mtu = int(mtu)
        self._chunk_size = blechunk.chunking.chunk_size_for_mtu(self._mtu)
        self._sent_chunk_count = 0
        self._sent_payload_count = 0

    @property
    def mtu(self) -> int:
        return self._mtu

    @property
    def chunk_size(self) -> int:
        """Max data bytes per chunk derived from the MTU."""
        return self._chunk_size

    @property
    def sent_chunk_count(self) -> int:
        return self._sent_chunk_count

    @property
    def sent_payload_count(self) -> int:
        return self._sent_payload_count

    def send(self, payload: typing.Union[bytes, bytearray, memoryview]) -> int:
        """
        :returns: The number of chunks written.
        """
        chunks = blechunk.chunking.make_chunks(payload, self._chunk_size)
        _logger.debug("%s: sending %d bytes in %d chunk(s)", self, len(payload), len(chunks))
        for ch in chunks:
            assert len(ch) <= self._mtu
            self._write(ch)
            self._sent_chunk_count += 1
        self._sent_payload_count += 1
        return len(chunks)

    def __repr__(self) -> str:
        return blechunk.util.repr_attributes(self, mtu=self._mtu, chunk_size=self._chunk_size)
