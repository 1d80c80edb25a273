# Copyright (c) 2026 blechunk developers
# This software is distributed under the terms of the MIT License.

from __future__ import annotations
import enum


class ChunkFlag(enum.IntEnum):
    """
    Position of a chunk within its sequence. The value occupies the two most significant bits of the first header byte.

    >>> ChunkFlag.FIRST.mnemonic, ChunkFlag.MIDDLE.mnemonic, ChunkFlag.LAST.mnemonic, ChunkFlag.ONLY.mnemonic
    ('F', 'M', 'L', 'O')
    >>> ChunkFlag.from_header(0x91)
    <ChunkFlag.LAST: 2>
    """

    MIDDLE = 0
    """Any chunk strictly between the first and the last one of a multi-chunk sequence."""

    FIRST = 1
    """The first chunk of a multi-chunk sequence. Starts a new reassembly session."""

    LAST = 2
    """The last chunk of a multi-chunk sequence. Completes the reassembly session."""

    ONLY = 3
    """The sole chunk of a single-chunk sequence. Starts and completes a session at once."""

    @property
    def starts_session(self) -> bool:
        return self in (ChunkFlag.FIRST, ChunkFlag.ONLY)

    @property
    def ends_session(self) -> bool:
        return self in (ChunkFlag.LAST, ChunkFlag.ONLY)

    @property
    def mnemonic(self) -> str:
        """One-letter name used in diagnostic output."""
        return self.name[0]

    @staticmethod
    def for_position(first: bool, last: bool) -> ChunkFlag:
        if first:
            return ChunkFlag.ONLY if last else ChunkFlag.FIRST
        return ChunkFlag.LAST if last else ChunkFlag.MIDDLE

    @staticmethod
    def from_header(byte0: int) -> ChunkFlag:
        """Every two-bit value is a valid flag, so this never fails for a byte-sized input."""
        return ChunkFlag((byte0 >> 6) & 0b11)


def _unittest_chunk_flag() -> None:
    assert ChunkFlag.for_position(first=True, last=True) == ChunkFlag.ONLY
    assert ChunkFlag.for_position(first=True, last=False) == ChunkFlag.FIRST
    assert ChunkFlag.for_position(first=False, last=False) == ChunkFlag.MIDDLE
    assert ChunkFlag.for_position(first=False, last=True) == ChunkFlag.LAST

    assert [f for f in ChunkFlag if f.starts_session] == [ChunkFlag.FIRST, ChunkFlag.ONLY]
    assert [f for f in ChunkFlag if f.ends_session] == [ChunkFlag.LAST, ChunkFlag.ONLY]

    for byte0 in range(256):
        assert ChunkFlag.from_header(byte0) == byte0 >> 6
