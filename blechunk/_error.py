# Copyright (c) 2026 blechunk developers
# This software is distributed under the terms of the MIT License.


class ChunkingError(RuntimeError):
    """
    This is the root exception class for errors raised by this library.
    Malformed frames are not reported through exceptions; see :class:`blechunk.chunking.Dechunker`.
    Exceptions are reserved for API misuse, such as an invalid configuration or an operation on a closed resource.
    """


class InvalidConfigurationError(ChunkingError):
    """
    The object could not be constructed or the operation could not be performed
    because the specified configuration is invalid. For example, an MTU that cannot accommodate even a single
    header byte and a single data byte.
    """


class ResourceClosedError(ChunkingError):
    """
    The requested operation could not be performed because an associated resource has already been terminated,
    e.g., a reader whose session has been aborted.
    Double-close should not raise exceptions.
    """
