# Copyright (c) 2026 blechunk developers
# This software is distributed under the terms of the MIT License.

import typing
import argparse
import blechunk
from ._base import Command


class MTUCommand(Command):
    @property
    def names(self) -> typing.Sequence[str]:
        return ["mtu"]

    @property
    def help(self) -> str:
        return """
Print the max chunk size for the specified transport write size.
""".strip()

    @property
    def examples(self) -> typing.Optional[str]:
        return "blechunk mtu 20"

    def register_arguments(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument("mtu", type=int, help="Max bytes per transport write, header included.")

    def execute(self, args: argparse.Namespace) -> int:
        print(blechunk.chunking.chunk_size_for_mtu(args.mtu))
        return 0
