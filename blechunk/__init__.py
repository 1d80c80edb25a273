# Copyright (c) 2026 blechunk developers
# This software is distributed under the terms of the MIT License.

r"""
Chunking protocol for transports with a small per-write size ceiling, such as Bluetooth LE characteristics.

A payload of arbitrary length is split by :func:`blechunk.chunking.make_chunks` into self-describing chunks,
each carrying a one- or two-byte header that encodes the position flag and the data length.
On the receiving side, :class:`blechunk.chunking.Dechunker` validates the chunks one by one and reconstitutes
the payload once the terminal chunk arrives.

>>> import blechunk
>>> chunks = blechunk.chunking.make_chunks(b"Hello, world!", chunk_size=5)
>>> [c.hex() for c in chunks]
['4548656c6c6f', '052c20776f72', '836c6421']
>>> dechunker = blechunk.chunking.Dechunker()
>>> [dechunker.add_chunk(c) for c in chunks]
[Continuing(), Continuing(), Completed(payload=b'Hello, world!')]


Submodule import policy
+++++++++++++++++++++++

The following submodules are auto-imported when the root module ``blechunk`` is imported:

- :mod:`blechunk.util`
- :mod:`blechunk.chunking`
- :mod:`blechunk.link`

The command line tool :mod:`blechunk._cli` is not auto-imported because it depends on extra packages.


Log level override
++++++++++++++++++

The environment variable ``BLECHUNK_LOGLEVEL`` can be set to one of the following values to override
the library log level:

- ``CRITICAL``
- ``FATAL``
- ``ERROR``
- ``WARNING``
- ``INFO``
- ``DEBUG``
"""

import os as _os


from ._version import __version__ as __version__

__version_info__ = tuple(map(int, __version__.split(".")[:3]))
__license__ = "MIT"


_log_level_from_env = _os.environ.get("BLECHUNK_LOGLEVEL")
if _log_level_from_env is not None:
    import logging as _logging

    _logging.basicConfig(
        format="%(asctime)s %(process)5d %(levelname)-8s %(name)s: %(message)s", level=_log_level_from_env
    )
    _logging.getLogger(__name__).setLevel(_log_level_from_env)
    _logging.getLogger(__name__).info("Log config from env var; level: %r", _log_level_from_env)


from ._error import ChunkingError as ChunkingError
from ._error import InvalidConfigurationError as InvalidConfigurationError
from ._error import ResourceClosedError as ResourceClosedError

# The sub-packages are imported in the order of their interdependency.
import blechunk.util as util  # pylint: disable=R0402,C0413  # noqa
import blechunk.chunking as chunking  # pylint: disable=R0402,C0413  # noqa
import blechunk.link as link  # pylint: disable=R0402,C0413  # noqa
