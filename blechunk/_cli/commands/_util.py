# Copyright (c) 2026 blechunk developers
# This software is distributed under the terms of the MIT License.

import sys
import typing


def parse_hex(text: str) -> bytes:
    """
    Accepts hexadecimal with optional whitespace, colons, and a leading ``0x``.

    >>> parse_hex("0x54aa aa")
    b'T\\xaa\\xaa'
    >>> parse_hex("de:ad:BE:EF")
    b'\\xde\\xad\\xbe\\xef'
    >>> parse_hex("")
    b''
    >>> parse_hex("abc")
    Traceback (most recent call last):
      ...
    ValueError: ...
    """
    text = text.strip()
    if text[:2].lower() == "0x":
        text = text[2:]
    for sep in ":-_":
        text = text.replace(sep, "")
    try:
        return bytes.fromhex(text)
    except ValueError as ex:
        raise ValueError(f"Invalid hexadecimal input {text!r}: {ex}") from None


def read_hex_lines(stream: typing.Optional[typing.TextIO] = None) -> typing.List[bytes]:
    """
    Reads one hex-encoded item per line, skipping blank lines and lines starting with ``#``.
    """
    stream = stream if stream is not None else sys.stdin
    out: typing.List[bytes] = []
    for line in stream:
        line = line.strip()
        if line and not line.startswith("#"):
            out.append(parse_hex(line))
    return out
