# Copyright Red Hat
#
# dirdiff/copydiff.py - Directory differ copy of differences
#
# This file is part of the dirdiff project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Copy the files that are new or changed in one tree relative to another.

This is a consumer of ``dirdiff.differ.compare()``: it supplies handlers
that copy each new or changed file from the new tree into an output
directory.
"""
from dataclasses import dataclass
from typing import Optional
import logging
import shutil
import os

from ._dirdiff import (
    DIRDIFF_SUBSYSTEM_COPY,
    DirDiffInputError,
    DirDiffIoError,
    DirDiffStateError,
    is_dir_entry,
)
from .contentcmp import entry_to_path
from .differ import DiffHandlers, compare
from .options import DiffOptions
from .treewalk import check_root

_log = logging.getLogger(__name__)

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error


def _log_debug_copy(msg, *args, **kwargs):
    """A wrapper for copy subsystem debug logs."""
    _log.debug(msg, *args, extra={"subsystem": DIRDIFF_SUBSYSTEM_COPY}, **kwargs)


@dataclass
class CopyContext:
    """
    Handler context for ``copy_diff_only()``.
    """

    #: Directory receiving the copied files
    output_dir: str
    #: Number of files copied so far
    count: int = 0
    #: Report each directory created and file copied at INFO level
    verbose: bool = False


def mdate(path: str) -> float:
    """
    Return the modification time of ``path``.

    :param path: The path to examine.
    :type path: ``str``
    :returns: The modification time in seconds since the epoch.
    :rtype: ``float``
    :raises DirDiffInputError: If ``path`` does not exist.
    :raises DirDiffIoError: If ``path`` cannot be examined.
    """
    if not os.path.exists(path):
        raise DirDiffInputError(f"Reference file {path} not found")
    try:
        return os.stat(path).st_mtime
    except OSError as err:
        raise DirDiffIoError(f"Failed to stat {path}: {err}") from err


def _make_dirs(path: str, verbose: bool):
    """
    Create directory ``path`` and any missing parents.
    """
    if os.path.isdir(path):
        return
    if verbose:
        _log_info("Creating %s", path)
    try:
        os.makedirs(path, exist_ok=True)
    except OSError as err:
        raise DirDiffIoError(f"Could not make path {path}: {err}") from err


def _copy_file(context: CopyContext, src: str, dest: str):
    """
    Copy ``src`` to ``dest``, creating parent directories as needed, and
    count the copy.
    """
    _make_dirs(os.path.dirname(dest), context.verbose)
    if context.verbose:
        _log_info("Copying %s to %s", src, dest)
    try:
        shutil.copyfile(src, dest)
    except OSError as err:
        raise DirDiffIoError(f"Copy of {src} to {dest} failed: {err}") from err
    context.count += 1
    _log_debug_copy("Copied %s to %s (%d files)", src, dest, context.count)


def new_only_handler(context: CopyContext, root: str, path: str):
    """
    Handler for entries only present in the new tree: recreate directories
    and copy files into the output directory.
    """
    dest = entry_to_path(context.output_dir, path)
    if is_dir_entry(path):
        _make_dirs(dest, context.verbose)
        return
    src = entry_to_path(root, path)
    if not os.path.isfile(src):
        raise DirDiffIoError(f"The file to copy, {src}, does not exist")
    _copy_file(context, src, dest)


def differs_handler(context: CopyContext, _old_root: str, new_root: str, path: str):
    """
    Handler for files changed between the trees: copy the new version into
    the output directory.
    """
    _copy_file(
        context,
        entry_to_path(new_root, path),
        entry_to_path(context.output_dir, path),
    )


def _check_output_dir(output_dir: str, *roots: str):
    """
    Reject an output directory that overlaps one of the compared trees.
    """
    out = os.path.realpath(output_dir)
    for root in roots:
        real_root = os.path.realpath(root)
        common = os.path.commonpath([out, real_root])
        if common in (out, real_root):
            raise DirDiffInputError(
                f"Output directory {output_dir} overlaps compared directory {root}"
            )


def copy_diff_only(
    old_dir: str,
    new_dir: str,
    output_dir: str,
    options: Optional[DiffOptions] = None,
) -> int:
    """
    Copy the files that are new or changed in ``new_dir`` relative to
    ``old_dir`` into ``output_dir``.

    If ``output_dir`` exists it is removed and recreated, so that it holds
    only the differing files on return. Directories that only exist in
    ``new_dir`` are recreated even when empty.

    :param old_dir: The old tree.
    :type old_dir: ``str``
    :param new_dir: The new tree.
    :type new_dir: ``str``
    :param output_dir: The directory to receive the copies.
    :type output_dir: ``str``
    :param options: Options controlling verbosity and read size.
    :type options: ``Optional[DiffOptions]``
    :returns: The number of files copied.
    :rtype: ``int``
    :raises DirDiffStateError: If ``new_dir`` is older than ``old_dir``.
    :raises DirDiffInputError: If a directory argument is invalid.
    :raises DirDiffIoError: If a copy fails.
    """
    options = options or DiffOptions()

    if mdate(new_dir) < mdate(old_dir):
        raise DirDiffStateError(f"{new_dir} is older than {old_dir}")

    check_root(old_dir)
    check_root(new_dir)
    _check_output_dir(output_dir, old_dir, new_dir)

    try:
        if os.path.isdir(output_dir):
            _log_debug_copy("Removing existing output directory %s", output_dir)
            shutil.rmtree(output_dir)
        os.makedirs(output_dir)
    except OSError as err:
        raise DirDiffIoError(
            f"Failed to prepare output directory {output_dir}: {err}"
        ) from err

    context = CopyContext(output_dir, verbose=options.verbose)
    handlers = DiffHandlers(only_in_2=new_only_handler, differs=differs_handler)
    compare(old_dir, new_dir, handlers, context=context, options=options)

    _log_info("Copied %d files from %s to %s", context.count, new_dir, output_dir)
    return context.count
