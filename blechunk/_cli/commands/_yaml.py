# Copyright (c) 2026 blechunk developers
# This software is distributed under the terms of the MIT License.

"""
The YAML library we use is API-unstable at the time of writing. This facade shields the
rest of the code from breaking changes in the YAML library API or from migration to another library.
"""

import io
import typing
import ruamel.yaml


class YAMLDumper:
    """
    YAML generation facade.

    >>> print(YAMLDumper().dumps({"flag": "F", "size": 19}), end="")
    flag: F
    size: 19
    """

    def __init__(self, explicit_start: bool = False):
        # We need to use the roundtrip representer to retain ordering of mappings, which is important for usability.
        self._impl = ruamel.yaml.YAML(typ="rt")
        # noinspection PyTypeHints
        self._impl.explicit_start = explicit_start  # type: ignore
        self._impl.default_flow_style = False

    def dump(self, data: typing.Any, stream: typing.TextIO) -> None:
        self._impl.dump(data, stream)

    def dumps(self, data: typing.Any) -> str:
        s = io.StringIO()
        self.dump(data, s)
        return s.getvalue()
