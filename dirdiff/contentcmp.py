# Copyright Red Hat
#
# dirdiff/contentcmp.py - Directory differ content comparison
#
# This file is part of the dirdiff project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Byte-level content comparison for entries common to two trees.
"""
from typing import Optional
import logging
import os

from ._dirdiff import (
    DIRDIFF_SUBSYSTEM_COMPARE,
    ENTRY_SEP,
    EntrySet,
    is_dir_entry,
)
from .options import DEFAULT_BUFFER_SIZE, DiffOptions
from .reconcile import check_entry_set
from .treewalk import check_root

_log = logging.getLogger(__name__)

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error


def _log_debug_compare(msg, *args, **kwargs):
    """A wrapper for compare subsystem debug logs."""
    _log.debug(msg, *args, extra={"subsystem": DIRDIFF_SUBSYSTEM_COMPARE}, **kwargs)


def entry_to_path(root: str, entry: str) -> str:
    """
    Convert the entry path ``entry`` beneath ``root`` into a host path.

    :param root: The tree root.
    :type root: ``str``
    :param entry: The relative entry path.
    :type entry: ``str``
    :returns: The joined host path.
    :rtype: ``str``
    """
    return os.path.join(root, *entry.rstrip(ENTRY_SEP).split(ENTRY_SEP))


def files_differ(
    path_a: str, path_b: str, buffer_size: int = DEFAULT_BUFFER_SIZE
) -> bool:
    """
    Compare the content of two files byte for byte.

    A failure to read either file is logged and reported as a difference.

    :param path_a: The first file.
    :type path_a: ``str``
    :param path_b: The second file.
    :type path_b: ``str``
    :param buffer_size: The read size to use.
    :type buffer_size: ``int``
    :returns: ``True`` if the files differ or could not be read, and
              ``False`` if their content is identical.
    :rtype: ``bool``
    """
    try:
        if os.stat(path_a).st_size != os.stat(path_b).st_size:
            return True
        with open(path_a, "rb") as file_a, open(path_b, "rb") as file_b:
            for chunk_a in iter(lambda: file_a.read(buffer_size), b""):
                if chunk_a != file_b.read(len(chunk_a)):
                    return True
            # File b grew since stat().
            return file_b.read(1) != b""
    except OSError as err:
        _log_warn("Could not compare %s with %s: %s", path_a, path_b, err)
        return True


def differing(
    root_a: str,
    entries_a: EntrySet,
    root_b: str,
    entries_b: EntrySet,
    options: Optional[DiffOptions] = None,
) -> EntrySet:
    """
    Return the entry paths common to both trees whose content differs.

    Only the intersection of ``entries_a`` and ``entries_b`` is examined.
    Directory markers are skipped, as is any path that is not a regular
    file under both roots at the time of the comparison: the type of an
    entry may change after it was listed and such entries are treated as
    not comparable.

    :param root_a: The first tree root.
    :type root_a: ``str``
    :param entries_a: The entry set listed from ``root_a``.
    :type entries_a: ``EntrySet``
    :param root_b: The second tree root.
    :type root_b: ``str``
    :param entries_b: The entry set listed from ``root_b``.
    :type entries_b: ``EntrySet``
    :param options: Options controlling verbosity and read size.
    :type options: ``Optional[DiffOptions]``
    :returns: The entry paths with differing content.
    :rtype: ``EntrySet``
    """
    options = options or DiffOptions()
    check_root(root_a)
    check_root(root_b)
    check_entry_set(entries_a, "entries_a")
    check_entry_set(entries_b, "entries_b")

    different = set()
    for entry in entries_a & entries_b:
        if is_dir_entry(entry):
            continue
        path_a = entry_to_path(root_a, entry)
        path_b = entry_to_path(root_b, entry)
        if not os.path.isfile(path_a) or not os.path.isfile(path_b):
            _log_debug_compare("Skipping %s: no longer a regular file", entry)
            continue
        if files_differ(path_a, path_b, options.buffer_size):
            different.add(entry)
            if options.verbose:
                _log_info("%s differs between %s and %s", entry, root_a, root_b)

    _log_debug_compare("Found %d differing files", len(different))
    return frozenset(different)
