# Copyright Red Hat
#
# dirdiff/options.py - Directory differ options
#
# This file is part of the dirdiff project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Directory comparison options.
"""
from dataclasses import dataclass, fields
from argparse import Namespace
import logging

from ._dirdiff import DirDiffInputError

_log = logging.getLogger(__name__)

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error

#: Default read size for content comparisons
DEFAULT_BUFFER_SIZE = 65536


@dataclass(frozen=True)
class DiffOptions:
    """
    Directory comparison options.
    """

    #: Report each listed entry and each finding at INFO level
    verbose: bool = False
    #: Read size used when comparing file content
    buffer_size: int = DEFAULT_BUFFER_SIZE

    def __post_init__(self):
        if not isinstance(self.buffer_size, int) or self.buffer_size <= 0:
            raise DirDiffInputError(
                f"Invalid buffer size: {self.buffer_size} (must be a positive integer)"
            )

    def __str__(self):
        """
        Return a human readable string representation of this
        ``DiffOptions`` instance.

        :returns: A human readable string.
        :rtype: ``str``
        """
        return "\n".join(f"{key}={val}" for key, val in self.__dict__.items())

    @classmethod
    def from_cmd_args(cls, cmd_args: Namespace) -> "DiffOptions":
        """
        Initialise DiffOptions from command line arguments.

        Construct a new ``DiffOptions`` object from the command line
        arguments in ``cmd_args``. Attributes that do not correspond to an
        option field are ignored, and a ``verbose`` count is converted to a
        boolean.

        :param cmd_args: The command line arguments.
        :type cmd_args: ``Namespace``
        :returns: A new ``DiffOptions`` instance
        :rtype: ``DiffOptions``
        """
        field_names = {f.name for f in fields(cls)}
        kwargs = {
            name: getattr(cmd_args, name)
            for name in field_names
            if getattr(cmd_args, name, None) is not None
        }
        if "verbose" in kwargs:
            kwargs["verbose"] = bool(kwargs["verbose"])
        options = cls(**kwargs)
        _log_debug("Initialised DiffOptions from arguments: %s", repr(options))
        return options
