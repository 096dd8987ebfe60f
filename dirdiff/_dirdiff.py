# Copyright Red Hat
#
# dirdiff/_dirdiff.py - Directory differ global definitions
#
# This file is part of the dirdiff project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Global definitions for the top-level dirdiff package.
"""
from typing import FrozenSet
import logging

_log = logging.getLogger("dirdiff")

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error

# Dirdiff debugging subsystem mask (legacy interface)
DIRDIFF_DEBUG_TREEWALK = 1
DIRDIFF_DEBUG_COMPARE = 2
DIRDIFF_DEBUG_COPY = 4
DIRDIFF_DEBUG_COMMAND = 8
DIRDIFF_DEBUG_ALL = (
    DIRDIFF_DEBUG_TREEWALK
    | DIRDIFF_DEBUG_COMPARE
    | DIRDIFF_DEBUG_COPY
    | DIRDIFF_DEBUG_COMMAND
)

# Dirdiff debugging subsystem names
DIRDIFF_SUBSYSTEM_TREEWALK = "dirdiff.treewalk"
DIRDIFF_SUBSYSTEM_COMPARE = "dirdiff.compare"
DIRDIFF_SUBSYSTEM_COPY = "dirdiff.copy"
DIRDIFF_SUBSYSTEM_COMMAND = "dirdiff.command"

_DEBUG_MASK_TO_SUBSYSTEM = {
    DIRDIFF_DEBUG_TREEWALK: DIRDIFF_SUBSYSTEM_TREEWALK,
    DIRDIFF_DEBUG_COMPARE: DIRDIFF_SUBSYSTEM_COMPARE,
    DIRDIFF_DEBUG_COPY: DIRDIFF_SUBSYSTEM_COPY,
    DIRDIFF_DEBUG_COMMAND: DIRDIFF_SUBSYSTEM_COMMAND,
}

_debug_subsystems = set()

#: Separator used to join the components of an entry path.
ENTRY_SEP = "/"

#: A set of relative entry paths found beneath one root. Directory entries
#: carry a trailing ``ENTRY_SEP``.
EntrySet = FrozenSet[str]


def is_dir_entry(path: str) -> bool:
    """
    Return ``True`` if ``path`` is a directory marker entry.

    :param path: The entry path to test.
    :type path: ``str``
    :returns: ``True`` if ``path`` ends with the entry separator.
    :rtype: ``bool``
    """
    return path.endswith(ENTRY_SEP)


class SubsystemFilter(logging.Filter):
    """
    Filters DEBUG records based on a set of enabled subsystem names.
    Non-DEBUG records or DEBUG records without a 'subsystem' attribute
    are always passed through.
    """

    def __init__(self, name=""):
        super().__init__(name)
        self.enabled_subsystems = set(_debug_subsystems)

    def filter(self, record):
        # Always pass non-DEBUG messages.
        if record.levelno != logging.DEBUG:
            return True

        # Always pass DEBUG messages that aren't for a specific subsystem.
        if not hasattr(record, "subsystem"):
            return True

        # For subsystem-specific DEBUG messages, check if the subsystem is enabled.
        return record.subsystem in self.enabled_subsystems

    def set_debug_subsystems(self, subsystems):
        """Sets the collection of subsystems to allow."""
        self.enabled_subsystems = set(subsystems)


def get_debug_mask():
    """
    Return the current debug mask for the ``dirdiff`` package.

    :returns: The current debug mask value
    :rtype: int
    """
    enabled_subsystems = set(_debug_subsystems)
    dirdiff_log = logging.getLogger("dirdiff")

    for handler in dirdiff_log.handlers:
        for f in handler.filters:
            if isinstance(f, SubsystemFilter):
                enabled_subsystems.update(f.enabled_subsystems)

    mask_map = {v: k for k, v in _DEBUG_MASK_TO_SUBSYSTEM.items()}
    mask = 0
    for subsystem_name in enabled_subsystems:
        mask |= mask_map.get(subsystem_name, 0)
    return mask


def set_debug_mask(mask):
    """
    Set the debug mask for the ``dirdiff`` package.

    :param mask: the logical OR of the ``DIRDIFF_DEBUG_*``
                 values to log.
    :rtype: None
    """
    # pylint: disable=global-statement
    global _debug_subsystems

    if mask < 0 or mask > DIRDIFF_DEBUG_ALL:
        raise ValueError(f"Invalid dirdiff debug mask: {mask}")

    enabled_subsystems = []
    for flag, subsystem_name in _DEBUG_MASK_TO_SUBSYSTEM.items():
        if mask & flag:
            enabled_subsystems.append(subsystem_name)

    dirdiff_log = logging.getLogger("dirdiff")
    for handler in dirdiff_log.handlers:
        for f in handler.filters:
            if isinstance(f, SubsystemFilter):
                f.set_debug_subsystems(enabled_subsystems)

    _debug_subsystems = set(enabled_subsystems)


#
# Dirdiff exception types
#


class DirDiffError(Exception):
    """
    Base class for directory differ errors.
    """


class DirDiffInputError(DirDiffError):
    """
    An invalid argument was passed to a directory differ API call: for
    e.g. a root that does not name a readable directory, or a malformed
    handler set.
    """


class DirDiffIoError(DirDiffError):
    """
    A file system operation failed while listing, comparing or copying.
    """


class DirDiffStateError(DirDiffError):
    """
    The state of the file system does not allow an operation to proceed:
    for e.g. the new tree is older than the old tree.
    """


__all__ = [
    "DIRDIFF_DEBUG_TREEWALK",
    "DIRDIFF_DEBUG_COMPARE",
    "DIRDIFF_DEBUG_COPY",
    "DIRDIFF_DEBUG_COMMAND",
    "DIRDIFF_DEBUG_ALL",
    # Debug logging - subsystem name interface
    "SubsystemFilter",
    "DIRDIFF_SUBSYSTEM_TREEWALK",
    "DIRDIFF_SUBSYSTEM_COMPARE",
    "DIRDIFF_SUBSYSTEM_COPY",
    "DIRDIFF_SUBSYSTEM_COMMAND",
    # Debug logging - legacy interface
    "set_debug_mask",
    "get_debug_mask",
    # Entry paths
    "ENTRY_SEP",
    "EntrySet",
    "is_dir_entry",
    "DirDiffError",
    "DirDiffInputError",
    "DirDiffIoError",
    "DirDiffStateError",
]
