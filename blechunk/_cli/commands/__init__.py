# Copyright (c) 2026 blechunk developers
# This software is distributed under the terms of the MIT License.

import typing
from ._base import Command as Command


def get_available_command_classes() -> typing.Sequence[typing.Type[Command]]:
    import blechunk._cli
    import blechunk.util

    # noinspection PyTypeChecker
    blechunk.util.import_submodules(blechunk._cli)
    # https://github.com/python/mypy/issues/5374
    return list(sorted(blechunk.util.iter_descendants(Command), key=lambda c: c.__name__))  # type: ignore
