# Copyright (c) 2026 blechunk developers
# This software is distributed under the terms of the MIT License.

"""
Developer command line tool for inspecting and producing chunk sequences.
Installed as the ``blechunk`` console script.
"""

from ._main import main as main

from . import commands as commands
