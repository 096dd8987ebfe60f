# Copyright Red Hat
#
# dirdiff/reconcile.py - Directory differ set reconciliation
#
# This file is part of the dirdiff project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Entry set reconciliation.
"""
from collections.abc import Set as AbstractSet
import logging

from ._dirdiff import DIRDIFF_SUBSYSTEM_COMPARE, DirDiffInputError, EntrySet

_log = logging.getLogger(__name__)

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error


def _log_debug_compare(msg, *args, **kwargs):
    """A wrapper for compare subsystem debug logs."""
    _log.debug(msg, *args, extra={"subsystem": DIRDIFF_SUBSYSTEM_COMPARE}, **kwargs)


def check_entry_set(entries, name: str):
    """
    Check that ``entries`` is a set of entry paths.

    :param entries: The value to check.
    :param name: The argument name to use in error messages.
    :type name: ``str``
    :raises DirDiffInputError: If ``entries`` is not a set.
    """
    if not isinstance(entries, AbstractSet):
        raise DirDiffInputError(
            f"Argument {name} must be a set of entry paths, "
            f"not {type(entries).__name__}"
        )


def only_in(set_a: EntrySet, set_b: EntrySet, verbose: bool = False) -> EntrySet:
    """
    Return the entry paths present in ``set_a`` and absent from ``set_b``.

    For example, given ``{"file", "dir/", "dir/file"}`` and
    ``{"dir/", "dir2/"}`` the result is ``{"file", "dir/file"}``.

    :param set_a: The entry set to select paths from.
    :type set_a: ``EntrySet``
    :param set_b: The entry set to test membership against.
    :type set_b: ``EntrySet``
    :param verbose: Log each path found at INFO level.
    :type verbose: ``bool``
    :returns: The entry paths only found in ``set_a``.
    :rtype: ``EntrySet``
    """
    check_entry_set(set_a, "set_a")
    check_entry_set(set_b, "set_b")

    only = frozenset(path for path in set_a if path not in set_b)
    if verbose:
        for path in only:
            _log_info("%s is only in first directory", path)
    _log_debug_compare(
        "Found %d of %d entries missing from other set", len(only), len(set_a)
    )
    return only
