# Copyright (c) 2026 blechunk developers
# This software is distributed under the terms of the MIT License.

import typing


T = typing.TypeVar("T")


def mark_last(it: typing.Iterable[T]) -> typing.Iterable[typing.Tuple[bool, T]]:
    """
    Iteration helper in the spirit of :func:`enumerate`: every item is paired with a flag that is True only
    for the final item. The chunker uses it to tell whether more slices follow the current one
    without knowing the total count in advance. An empty input yields nothing.

    >>> list(mark_last(b""))
    []
    >>> list(mark_last([b"abc"]))
    [(True, b'abc')]
    >>> list(mark_last([b"ab", b"cd", b"e"]))
    [(False, b'ab'), (False, b'cd'), (True, b'e')]
    """
    it = iter(it)
    try:
        pending = next(it)
    except StopIteration:
        return
    for item in it:
        yield False, pending
        pending = item
    yield True, pending
