# Copyright (c) 2026 blechunk developers
# This software is distributed under the terms of the MIT License.

"""
This module implements the chunk wire format and the two algorithms built on top of it:
the stateless splitter :func:`make_chunks` and the stateful reassembler :class:`Dechunker`.

Every chunk starts with a one- or two-byte header:

+--------------------+----------------------------------------------------------------+
| Field              | Location                                                       |
+====================+================================================================+
| Flag               | byte 0, bits 7-6: 1 = first, 0 = middle, 2 = last, 3 = only    |
+--------------------+----------------------------------------------------------------+
| Extended length    | byte 0, bit 5: set if the header is two bytes long             |
+--------------------+----------------------------------------------------------------+
| Length             | byte 0, bits 4-0; if extended, followed by all bits of byte 1  |
+--------------------+----------------------------------------------------------------+

The header is followed by exactly as many data bytes as declared in the length field (at most 8191).
Chunks are self-describing, so the sender and the receiver do not need to agree on the chunk size.
"""

from ._flag import ChunkFlag as ChunkFlag

from ._chunk import Chunk as Chunk
from ._chunk import ChunkError as ChunkError
from ._chunk import MAX_CHUNK_PAYLOAD as MAX_CHUNK_PAYLOAD
from ._chunk import MAX_SHORT_CHUNK_PAYLOAD as MAX_SHORT_CHUNK_PAYLOAD

from ._chunker import DEFAULT_MTU as DEFAULT_MTU
from ._chunker import normalize_chunk_size as normalize_chunk_size
from ._chunker import chunk_size_for_mtu as chunk_size_for_mtu
from ._chunker import iter_chunks as iter_chunks
from ._chunker import make_chunks as make_chunks

from ._dechunker import Dechunker as Dechunker
from ._dechunker import AddChunkResult as AddChunkResult
from ._dechunker import Continuing as Continuing
from ._dechunker import Completed as Completed
from ._dechunker import Failed as Failed
