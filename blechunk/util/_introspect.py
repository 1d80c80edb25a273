# Copyright (c) 2026 blechunk developers
# This software is distributed under the terms of the MIT License.

import types
import typing
import pkgutil
import importlib


T = typing.TypeVar("T", bound=object)  # https://github.com/python/mypy/issues/5374


def iter_descendants(ty: typing.Type[T]) -> typing.Iterable[typing.Type[T]]:
    # noinspection PyTypeChecker,PyUnresolvedReferences
    """
    Returns a recursively descending iterator over all subclasses of the argument.
    The command line tool uses this to discover its commands.

    >>> class Command: pass
    >>> class Split(Command): pass
    >>> class SplitText(Split): pass
    >>> class Join(Command): pass
    >>> sorted(t.__name__ for t in iter_descendants(Command))
    ['Join', 'Split', 'SplitText']
    >>> list(iter_descendants(Join))
    []
    """
    # noinspection PyArgumentList
    for t in ty.__subclasses__():
        yield t
        yield from iter_descendants(t)


def import_submodules(
    root_module: types.ModuleType, error_handler: typing.Optional[typing.Callable[[str, ImportError], None]] = None
) -> None:
    """
    Recursively imports all submodules and subpackages of the specified Python package.
    This is used to make all implementations of a certain abstraction visible to :func:`iter_descendants`
    when they are spread out through several submodules which are not auto-imported.

    :param root_module: The package to start the recursive descent from.

    :param error_handler: If None (default), any :class:`ImportError` is raised normally,
        terminating the process after the first error. Otherwise, the callable is invoked with the name
        of the module that could not be imported and the exception.

    >>> import blechunk
    >>> import_submodules(blechunk.link)
    >>> blechunk.link.LoopbackLink
    <class 'blechunk.link._loopback.LoopbackLink'>
    """
    for _, module_name, _ in pkgutil.walk_packages(root_module.__path__, root_module.__name__ + "."):  # type: ignore
        try:
            importlib.import_module(module_name)
        except ImportError as ex:
            if error_handler is None:
                raise
            error_handler(module_name, ex)
