# Copyright (c) 2026 blechunk developers
# This software is distributed under the terms of the MIT License.

"""
The util package contains small helpers used across the library and its command line tool.
"""

from ._introspect import import_submodules as import_submodules
from ._introspect import iter_descendants as iter_descendants

from ._mark_last import mark_last as mark_last

from ._repr import repr_attributes as repr_attributes
from ._repr import repr_attributes_noexcept as repr_attributes_noexcept
from ._repr import repr_payload as repr_payload
