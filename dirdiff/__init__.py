# Copyright Red Hat
#
# dirdiff/__init__.py - Directory differ package initialisation
#
# This file is part of the dirdiff project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Dirdiff top-level package.

Recursively compares two directory trees and reports entries found only
beneath one root and files whose content differs. The main entry points
are ``compare()`` and ``copy_diff_only()``.
"""
from ._dirdiff import *  # noqa: F401, F403
from ._dirdiff import __all__ as _dirdiff_all
from .contentcmp import differing, files_differ
from .copydiff import CopyContext, copy_diff_only
from .differ import DiffHandlers, compare, default_differs, default_only_in
from .options import DiffOptions
from .reconcile import only_in
from .treewalk import list_tree

__version__ = "0.1.0"

__all__ = _dirdiff_all + [
    "CopyContext",
    "DiffHandlers",
    "DiffOptions",
    "compare",
    "copy_diff_only",
    "default_differs",
    "default_only_in",
    "differing",
    "files_differ",
    "list_tree",
    "only_in",
]
