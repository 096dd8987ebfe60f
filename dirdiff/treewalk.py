# Copyright Red Hat
#
# dirdiff/treewalk.py - Directory differ tree walk
#
# This file is part of the dirdiff project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Tree listing support for dirdiff.

``list_tree()`` enumerates every regular file and directory beneath a root
and returns the relative entry paths as an ``EntrySet``. Directories are
recorded with a trailing separator as well as having their content listed,
so that a subtree present on only one side of a comparison is reported in
full rather than as a single top-level entry.

The walk composes paths explicitly and never changes the process working
directory.
"""
from typing import Optional, Set, Tuple
import logging
import os

from ._dirdiff import (
    DIRDIFF_SUBSYSTEM_TREEWALK,
    ENTRY_SEP,
    DirDiffInputError,
    DirDiffIoError,
    EntrySet,
)
from .options import DiffOptions

_log = logging.getLogger(__name__)

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error


def _log_debug_treewalk(msg, *args, **kwargs):
    """A wrapper for treewalk subsystem debug logs."""
    _log.debug(msg, *args, extra={"subsystem": DIRDIFF_SUBSYSTEM_TREEWALK}, **kwargs)


def check_root(root: str):
    """
    Check that ``root`` names an existing, readable directory.

    :param root: The path to check.
    :type root: ``str``
    :raises DirDiffInputError: If ``root`` is empty, missing, not a
                               directory, or cannot be listed.
    """
    if not root:
        raise DirDiffInputError("Directory root must be a non-empty path")
    if not os.path.exists(root):
        raise DirDiffInputError(f"Directory root {root} does not exist")
    if not os.path.isdir(root):
        raise DirDiffInputError(f"Directory root {root} is not a directory")
    if not os.access(root, os.R_OK | os.X_OK):
        raise DirDiffInputError(f"Directory root {root} is not readable")


def _dir_key(entry: os.DirEntry) -> Tuple[int, int]:
    """
    Return the ``(st_dev, st_ino)`` identity of the directory that
    ``entry`` refers to, following symbolic links.
    """
    st = entry.stat()
    return st.st_dev, st.st_ino


def list_tree(root: str, options: Optional[DiffOptions] = None) -> EntrySet:
    """
    List the entries found beneath ``root``.

    Regular files are recorded by their relative path. Directories are
    descended into and also recorded with a trailing ``/``. Symbolic links
    are followed; entries that resolve to anything other than a regular
    file or directory (sockets, FIFOs, devices, broken links) are skipped
    with a warning, as are links that lead back to a directory that is
    already being listed.

    :param root: The directory to list.
    :type root: ``str``
    :param options: Options controlling verbosity.
    :type options: ``Optional[DiffOptions]``
    :returns: The set of entry paths found beneath ``root``.
    :rtype: ``EntrySet``
    :raises DirDiffInputError: If ``root`` is not a readable directory.
    :raises DirDiffIoError: If a directory beneath ``root`` cannot be read.
    """
    options = options or DiffOptions()
    check_root(root)

    root_stat = os.stat(root)
    entries: Set[str] = set()

    # (directory path, relative prefix, identities of directories on this path)
    to_visit = [(root, "", frozenset({(root_stat.st_dev, root_stat.st_ino)}))]

    while to_visit:
        dir_path, prefix, ancestors = to_visit.pop()
        _log_debug_treewalk("Listing %s", dir_path)
        try:
            with os.scandir(dir_path) as it:
                children = list(it)
        except OSError as err:
            raise DirDiffIoError(f"Failed to list directory {dir_path}: {err}") from err

        for child in children:
            rel_path = prefix + child.name
            try:
                if child.is_file():
                    entries.add(rel_path)
                    continue
                if child.is_dir():
                    key = _dir_key(child)
                    if key in ancestors:
                        _log_warn(
                            "Skipping directory %s: link leads back to a parent directory",
                            child.path,
                        )
                        continue
                    dir_entry = rel_path + ENTRY_SEP
                    entries.add(dir_entry)
                    to_visit.append((child.path, dir_entry, ancestors | {key}))
                    continue
            except OSError as err:
                raise DirDiffIoError(f"Failed to examine {child.path}: {err}") from err
            _log_warn("Skipping unknown type of file %s", child.path)

    if options.verbose:
        for entry in entries:
            _log_info("Found %s in %s", entry, root)

    _log_debug_treewalk("Listed %d entries beneath %s", len(entries), root)
    return frozenset(entries)
