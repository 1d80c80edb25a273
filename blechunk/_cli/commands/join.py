# Copyright (c) 2026 blechunk developers
# This software is distributed under the terms of the MIT License.

import sys
import typing
import logging
import argparse
import blechunk
from blechunk.chunking import Dechunker, Completed, Failed
from ._base import Command
from ._util import parse_hex, read_hex_lines
from ._yaml import YAMLDumper


_logger = logging.getLogger(__name__)


class JoinCommand(Command):
    @property
    def names(self) -> typing.Sequence[str]:
        return ["join", "dechunk"]

    @property
    def help(self) -> str:
        return """
Reassemble a payload from chunks given in the order of reception and print
the outcome as YAML. The exit code is zero only if the last chunk completed
the payload.
""".strip()

    @property
    def examples(self) -> typing.Optional[str]:
        return """
blechunk join 54aaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaa 91aaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaa
blechunk split 0102030405 -S 2 | grep hex | cut -d' ' -f4 | blechunk join -
""".strip()

    def register_arguments(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "chunks",
            nargs="+",
            metavar="CHUNK",
            help="""
Chunks in hexadecimal, header included. Use "-" to read one chunk per line from stdin.
""".strip(),
        )
        parser.add_argument(
            "--text",
            "-t",
            action="store_true",
            help="Print the reassembled payload as UTF-8 text rather than hexadecimal.",
        )

    def execute(self, args: argparse.Namespace) -> int:
        images: typing.List[bytes] = []
        for item in args.chunks:
            if item == "-":
                images += read_hex_lines(sys.stdin)
            else:
                images.append(parse_hex(item))

        dechunker = Dechunker()
        result: typing.Optional[blechunk.chunking.AddChunkResult] = None
        payloads: typing.List[bytes] = []
        for index, image in enumerate(images):
            result = dechunker.add_chunk(image)
            _logger.info("Chunk #%d of %d bytes: %s", index, len(image), result)
            if isinstance(result, Completed):
                payloads.append(result.payload)
            if isinstance(result, Failed):
                YAMLDumper().dump(
                    {
                        "status": "failed",
                        "error": result.error.name.lower(),
                        "chunk_index": index,
                    },
                    sys.stdout,
                )
                return 1

        report: typing.Dict[str, typing.Any] = {
            "status": "completed" if isinstance(result, Completed) else "incomplete",
            "chunks": len(images),
            "payloads": [self._render(p, args.text) for p in payloads],
        }
        YAMLDumper().dump(report, sys.stdout)
        return 0 if isinstance(result, Completed) else 1

    @staticmethod
    def _render(payload: bytes, text: bool) -> str:
        return payload.decode("utf8", errors="replace") if text else payload.hex()
