# Copyright (c) 2026 blechunk developers
# This software is distributed under the terms of the MIT License.

"""
Glue between the chunking algorithms and a transport that delivers data in small writes.

The transport itself (device discovery, connection management, the actual radio link) is not part of this library.
It is represented by a write callable on the sending side and by calls to :meth:`ChunkReader.receive`
on the receiving side, one call per received write, in the order of arrival.
:class:`LoopbackLink` connects the two sides directly for testing.
"""

from ._writer import ChunkWriter as ChunkWriter
from ._writer import WriteCallback as WriteCallback

from ._reader import ChunkReader as ChunkReader
from ._reader import PayloadCallback as PayloadCallback
from ._reader import AbortCallback as AbortCallback

from ._loopback import LoopbackLink as LoopbackLink
from ._loopback import LinkCapture as LinkCapture
from ._loopback import CaptureCallback as CaptureCallback
