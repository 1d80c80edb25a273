# Copyright (c) 2026 blechunk developers
# This software is distributed under the terms of the MIT License.

import sys
import typing
import logging
import argparse
import blechunk
from ._base import Command
from ._util import parse_hex
from ._yaml import YAMLDumper


_logger = logging.getLogger(__name__)


class SplitCommand(Command):
    @property
    def names(self) -> typing.Sequence[str]:
        return ["split", "chunk"]

    @property
    def help(self) -> str:
        return """
Split a payload into chunks and print them as a YAML list, one entry per
transport write, in the order of transmission.
""".strip()

    @property
    def examples(self) -> typing.Optional[str]:
        return """
blechunk split 48656c6c6f2c20776f726c6421 --chunk-size 5
blechunk split --text 'Hello, world!' --mtu 20
""".strip()

    def register_arguments(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "payload",
            help="The payload in hexadecimal, or as UTF-8 text if --text is given. May be empty.",
        )
        parser.add_argument(
            "--text",
            "-t",
            action="store_true",
            help="Treat the payload argument as UTF-8 text rather than hexadecimal.",
        )
        size = parser.add_mutually_exclusive_group()
        size.add_argument(
            "--chunk-size",
            "-S",
            type=int,
            metavar="BYTES",
            help=f"""
Max data bytes per chunk. Values outside [1, {blechunk.chunking.MAX_CHUNK_PAYLOAD}] are replaced with the maximum.
""".strip(),
        )
        size.add_argument(
            "--mtu",
            "-M",
            type=int,
            default=blechunk.chunking.DEFAULT_MTU,
            metavar="BYTES",
            help="""
Max bytes per transport write, header included; the chunk size is derived from it.
Default: %(default)s.
""".strip(),
        )

    def execute(self, args: argparse.Namespace) -> int:
        payload = args.payload.encode("utf8") if args.text else parse_hex(args.payload)
        if args.chunk_size is not None:
            chunk_size = blechunk.chunking.normalize_chunk_size(args.chunk_size)
        else:
            chunk_size = blechunk.chunking.chunk_size_for_mtu(args.mtu)
        _logger.info("Splitting %d bytes using chunk size %d", len(payload), chunk_size)

        out = []
        for ch in blechunk.chunking.iter_chunks(payload, chunk_size):
            out.append(
                {
                    "flag": ch.flag.name.lower(),
                    "size": len(ch.payload),
                    "hex": ch.compile().hex(),
                }
            )
        YAMLDumper().dump(out, sys.stdout)
        return 0
