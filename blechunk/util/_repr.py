# Copyright (c) 2026 blechunk developers
# This software is distributed under the terms of the MIT License.

import typing


def repr_attributes(obj: object, *anonymous_elements: object, **named_elements: object) -> str:
    """
    Constructs a :func:`repr` form of an object from the given elements.
    String representations are obtained by invoking :func:`str` on each value.

    >>> class Link: pass
    >>> repr_attributes(Link())
    'Link()'
    >>> repr_attributes(Link(), 20, state='idle')
    'Link(20, state=idle)'
    """
    fld = list(map(str, anonymous_elements)) + list(f"{name}={value}" for name, value in named_elements.items())
    return f"{type(obj).__name__}(" + ", ".join(fld) + ")"


def repr_attributes_noexcept(obj: object, *anonymous_elements: object, **named_elements: object) -> str:
    """
    A version of :func:`repr_attributes` that never raises. Used in ``__repr__`` of stateful objects
    that may be printed from logging calls while in an inconsistent state.

    >>> class Reader: pass
    >>> class Broken:
    ...     def __str__(self) -> str:
    ...         raise ValueError('no')
    >>> repr_attributes_noexcept(Reader(), closed=False)
    'Reader(closed=False)'
    >>> repr_attributes_noexcept(Reader(), closed=Broken())
    "<REPR FAILED: ValueError('no')>"
    """
    try:
        return repr_attributes(obj, *anonymous_elements, **named_elements)
    except Exception as ex:
        # noinspection PyBroadException
        try:
            return f"<REPR FAILED: {ex!r}>"
        except Exception:
            return "<REPR FAILED: UNKNOWN ERROR>"


def repr_payload(data: typing.Union[bytes, bytearray, memoryview], limit: int = 100) -> str:
    """
    Hex representation of a binary payload for log messages.
    If the payload is unreasonably long for a sensible string representation,
    it is truncated and suffixed with an ellipsis.

    >>> repr_payload(b"\\xaa\\xbb")
    'aabb'
    >>> repr_payload(bytes(range(10)), limit=4)
    '00010203...'
    """
    if len(data) > limit:
        return bytes(data[:limit]).hex() + "..."
    return bytes(data).hex()
