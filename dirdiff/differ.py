# Copyright Red Hat
#
# dirdiff/differ.py - Directory differ orchestration
#
# This file is part of the dirdiff project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Top-level directory comparison interface.

``compare()`` lists two trees, works out which entries are only present on
one side and which common files differ, and reports each finding to a
caller supplied handler. Nothing is returned: copying, printing or counting
is left to the handlers, which receive the caller's context object as their
first argument.

A handler that raises aborts the remaining dispatch and the exception
reaches the caller unchanged. Handlers that have already run are not
undone.
"""
from dataclasses import dataclass, fields
from typing import Any, Callable, Mapping, Optional, Union
import logging

from ._dirdiff import DIRDIFF_SUBSYSTEM_COMPARE, DirDiffInputError
from .contentcmp import differing
from .options import DiffOptions
from .reconcile import only_in
from .treewalk import check_root, list_tree

_log = logging.getLogger(__name__)

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error


def _log_debug_compare(msg, *args, **kwargs):
    """A wrapper for compare subsystem debug logs."""
    _log.debug(msg, *args, extra={"subsystem": DIRDIFF_SUBSYSTEM_COMPARE}, **kwargs)


#: Handler called as ``handler(context, root, path)``
OnlyInHandler = Callable[[Any, str, str], Any]
#: Handler called as ``handler(context, root1, root2, path)``
DiffersHandler = Callable[[Any, str, str, str], Any]


@dataclass(frozen=True)
class DiffHandlers:
    """
    The set of handlers to call for comparison findings. Each slot is
    optional: findings for an unset slot are not computed.
    """

    #: Called for each entry present only beneath the first root
    only_in_1: Optional[OnlyInHandler] = None
    #: Called for each entry present only beneath the second root
    only_in_2: Optional[OnlyInHandler] = None
    #: Called for each file present beneath both roots with differing content
    differs: Optional[DiffersHandler] = None

    def __post_init__(self):
        for slot in fields(self):
            handler = getattr(self, slot.name)
            if handler is not None and not callable(handler):
                raise DirDiffInputError(
                    f"Handler {slot.name} is not callable: {handler!r}"
                )

    @property
    def empty(self) -> bool:
        """
        ``True`` if no handler slot is set.
        """
        return all(getattr(self, slot.name) is None for slot in fields(self))

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "DiffHandlers":
        """
        Build a ``DiffHandlers`` from a mapping of slot names to handlers.

        :param mapping: A mapping with any of the keys ``only_in_1``,
                        ``only_in_2`` and ``differs``.
        :type mapping: ``Mapping[str, Any]``
        :returns: A new ``DiffHandlers`` instance.
        :rtype: ``DiffHandlers``
        :raises DirDiffInputError: If ``mapping`` contains unknown keys.
        """
        slot_names = {f.name for f in fields(cls)}
        unknown = set(mapping) - slot_names
        if unknown:
            raise DirDiffInputError(
                f"Unknown handler names: {', '.join(sorted(unknown))}"
            )
        return cls(**mapping)


def only_in_notice(root: str, path: str) -> str:
    """
    Return a one-line notice that ``path`` is only found beneath ``root``.
    """
    return f"File '{path}' is only in '{root}'."


def differs_notice(root1: str, root2: str, path: str) -> str:
    """
    Return a one-line notice that ``path`` differs between ``root1`` and
    ``root2``.
    """
    return f"File '{path}' is different between '{root1}' and '{root2}'."


def default_only_in(_context: Any, root: str, path: str):
    """
    Print a notice that ``path`` is only found beneath ``root``.
    """
    print(only_in_notice(root, path))


def default_differs(_context: Any, root1: str, root2: str, path: str):
    """
    Print a notice that ``path`` differs between ``root1`` and ``root2``.
    """
    print(differs_notice(root1, root2, path))


def compare(
    root1: str,
    root2: str,
    handlers: Union[DiffHandlers, Mapping[str, Any]],
    context: Any = None,
    options: Optional[DiffOptions] = None,
):
    """
    Compare the trees beneath ``root1`` and ``root2`` and dispatch each
    finding to ``handlers``.

    ``handlers.only_in_1(context, root1, path)`` is called for every entry
    only found beneath ``root1``, ``handlers.only_in_2(context, root2,
    path)`` for every entry only found beneath ``root2`` and
    ``handlers.differs(context, root1, root2, path)`` for every file found
    beneath both roots whose content differs. Entries are dispatched in no
    particular order.

    :param root1: The first (old) directory.
    :type root1: ``str``
    :param root2: The second (new) directory.
    :type root2: ``str``
    :param handlers: The handlers to call, or a mapping of slot names to
                     handlers.
    :type handlers: ``Union[DiffHandlers, Mapping[str, Any]]``
    :param context: Caller data passed unchanged to every handler.
    :type context: ``Any``
    :param options: Options controlling verbosity and read size.
    :type options: ``Optional[DiffOptions]``
    :raises DirDiffInputError: If either root is not a readable directory or
                               ``handlers`` is malformed.
    :raises DirDiffIoError: If a directory cannot be listed.
    """
    options = options or DiffOptions()

    check_root(root1)
    check_root(root2)

    if isinstance(handlers, Mapping):
        handlers = DiffHandlers.from_mapping(handlers)
    elif not isinstance(handlers, DiffHandlers):
        raise DirDiffInputError(
            f"Invalid handlers: expected DiffHandlers, not {type(handlers).__name__}"
        )

    if handlers.empty:
        _log_warn("No handlers set: comparison of %s and %s has no effect", root1, root2)
        return

    if options.verbose:
        _log_info("Directory diff of %s and %s in progress", root1, root2)

    entries1 = list_tree(root1, options=options)
    entries2 = list_tree(root2, options=options)

    if handlers.only_in_1:
        only_in_1 = only_in(entries1, entries2, verbose=options.verbose)
        _log_debug_compare("Dispatching %d entries only in %s", len(only_in_1), root1)
        for path in only_in_1:
            handlers.only_in_1(context, root1, path)

    if handlers.only_in_2:
        only_in_2 = only_in(entries2, entries1, verbose=options.verbose)
        _log_debug_compare("Dispatching %d entries only in %s", len(only_in_2), root2)
        for path in only_in_2:
            handlers.only_in_2(context, root2, path)

    if handlers.differs:
        different = differing(root1, entries1, root2, entries2, options=options)
        _log_debug_compare("Dispatching %d differing files", len(different))
        for path in different:
            handlers.differs(context, root1, root2, path)
