# Copyright (c) 2026 blechunk developers
# This software is distributed under the terms of the MIT License.

import typing
import logging
import blechunk
from blechunk.chunking import Dechunker, ChunkError, Completed, Failed


PayloadCallback = typing.Callable[[bytes], None]
AbortCallback = typing.Callable[[ChunkError], None]

_logger = logging.getLogger(__name__)


class ChunkReader:
    """
    Receiving side of a chunked link. It owns a :class:`blechunk.chunking.Dechunker`
    and acts as the owner of the reassembly session: complete payloads are delivered to the application,
    and a malformed chunk aborts the session, after which the reader is closed.
    The transport is expected to drop the connection from the abort callback.

    >>> received, aborted = [], []
    >>> reader = ChunkReader(received.append, aborted.append)
    >>> reader.receive(b"\\x42hi"), reader.receive(b"\\x81!")
    (None, b'hi!')
    >>> received
    [b'hi!']
    >>> reader.receive(b"\\x85!")
    >>> aborted, reader.closed
    ([<ChunkError.LENGTH_MISMATCH: 2>], True)
    """

    def __init__(
        self,
        on_payload: PayloadCallback,
        on_abort: AbortCallback,
        dechunker: typing.Optional[Dechunker] = None,
    ) -> None:
        """
        :param on_payload: Invoked with every reassembled payload.

        :param on_abort: Invoked once when the session is aborted due to a malformed chunk.

        :param dechunker: Use this to inject a dechunker with a custom logger or error callback.
            A new one is constructed by default. It is reset before use.
        """
        if not callable(on_payload) or not callable(on_abort):
            raise ValueError("Invalid callbacks")
        self._on_payload = on_payload
        self._on_abort = on_abort
        self._dechunker = dechunker if dechunker is not None else Dechunker()
        self._dechunker.reset()
        self._received_payload_count = 0
        self._closed = False

    @property
    def dechunker(self) -> Dechunker:
        return self._dechunker

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def received_payload_count(self) -> int:
        return self._received_payload_count

    def receive(self, image: typing.Union[bytes, bytearray, memoryview]) -> typing.Optional[bytes]:
        """
        Feeds one chunk received from the transport.

        :returns: The payload if this chunk completed one, None otherwise (including the case of failure).

        :raises: :class:`blechunk.ResourceClosedError` if the reader is closed.
        """
        if self._closed:
            raise blechunk.ResourceClosedError(f"{self} is closed")

        result = self._dechunker.add_chunk(image)
        if isinstance(result, Completed):
            self._received_payload_count += 1
            _logger.debug("%s: received %d bytes from dechunker", self, len(result.payload))
            self._on_payload(result.payload)
            return result.payload

        if isinstance(result, Failed):
            _logger.info("%s: aborting the session: %s", self, result.error.name)
            self.close()
            self._on_abort(result.error)
            return None

        _logger.debug("%s: dechunker ok, but not done yet", self)
        return None

    def close(self) -> None:
        """
        Discards the reassembly state. Further calls to :meth:`receive` will raise. Idempotent.
        """
        if not self._closed:
            self._closed = True
            self._dechunker.reset()

    def __repr__(self) -> str:
        return blechunk.util.repr_attributes_noexcept(
            self, self._dechunker, closed=self._closed, received=self._received_payload_count
        )
