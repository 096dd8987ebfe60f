# Copyright Red Hat
#
# dirdiff/command.py - Directory differ command interface
#
# This file is part of the dirdiff project.
#
# SPDX-License-Identifier: Apache-2.0
"""The ``dirdiff.command`` module provides the dirdiff command line
interface.
"""
from argparse import ArgumentParser
from os.path import basename
from typing import List
import logging
import sys

from dirdiff import (
    DIRDIFF_DEBUG_TREEWALK,
    DIRDIFF_DEBUG_COMPARE,
    DIRDIFF_DEBUG_COPY,
    DIRDIFF_DEBUG_COMMAND,
    DIRDIFF_DEBUG_ALL,
    DIRDIFF_SUBSYSTEM_COMMAND,
    SubsystemFilter,
    set_debug_mask,
    __version__,
)
from dirdiff.copydiff import copy_diff_only
from dirdiff.differ import DiffHandlers, compare, differs_notice, only_in_notice
from dirdiff.options import DiffOptions

DIFF_FORMATS = ["text", "paths"]

_log = logging.getLogger(__name__)

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error


def _log_debug_command(msg, *args, **kwargs):
    """A wrapper for command subsystem debug logs."""
    _log.debug(msg, *args, extra={"subsystem": DIRDIFF_SUBSYSTEM_COMMAND}, **kwargs)


_DEFAULT_LOG_LEVEL = logging.WARNING
_CONSOLE_HANDLER = None


class _DiffCollector:
    """
    Handler context accumulating comparison findings for sorted output.
    """

    def __init__(self):
        self.only_in_1: List[str] = []
        self.only_in_2: List[str] = []
        self.differs: List[str] = []

    @staticmethod
    def on_only_in_1(collector, _root, path):
        collector.only_in_1.append(path)

    @staticmethod
    def on_only_in_2(collector, _root, path):
        collector.only_in_2.append(path)

    @staticmethod
    def on_differs(collector, _root1, _root2, path):
        collector.differs.append(path)

    @property
    def total(self):
        return len(self.only_in_1) + len(self.only_in_2) + len(self.differs)


def _diff_cmd(cmd_args):
    """
    Diff directories command handler.

    :param cmd_args: Command line arguments for the command
    :returns: integer status code returned from ``main()``
    """
    options = DiffOptions.from_cmd_args(cmd_args)
    dir1 = cmd_args.dir1
    dir2 = cmd_args.dir2

    collector = _DiffCollector()
    handlers = DiffHandlers(
        only_in_1=_DiffCollector.on_only_in_1,
        only_in_2=_DiffCollector.on_only_in_2,
        differs=_DiffCollector.on_differs,
    )
    compare(dir1, dir2, handlers, context=collector, options=options)
    _log_debug_command("Found %d differences", collector.total)

    if cmd_args.output_format == "paths":
        lines = (
            [f"- {path}" for path in sorted(collector.only_in_1)]
            + [f"+ {path}" for path in sorted(collector.only_in_2)]
            + [f"! {path}" for path in sorted(collector.differs)]
        )
    else:
        lines = (
            [only_in_notice(dir1, path) for path in sorted(collector.only_in_1)]
            + [only_in_notice(dir2, path) for path in sorted(collector.only_in_2)]
            + [differs_notice(dir1, dir2, path) for path in sorted(collector.differs)]
        )
    if lines:
        print("\n".join(lines))
    return 0


def _copy_cmd(cmd_args):
    """
    Copy differences command handler.

    :param cmd_args: Command line arguments for the command
    :returns: integer status code returned from ``main()``
    """
    options = DiffOptions.from_cmd_args(cmd_args)
    count = copy_diff_only(
        cmd_args.old_dir, cmd_args.new_dir, cmd_args.output_dir, options=options
    )
    print(f"Copied {count} file{'s' if count != 1 else ''} to {cmd_args.output_dir}")
    return 0


def setup_logging(cmd_args):
    """
    Set up dirdiff logging.
    """
    # pylint: disable=global-statement
    global _CONSOLE_HANDLER
    level = _DEFAULT_LOG_LEVEL
    if cmd_args.verbose and cmd_args.verbose > 1:
        level = logging.DEBUG
    elif cmd_args.verbose and cmd_args.verbose > 0:
        level = logging.INFO

    dirdiff_log = logging.getLogger("dirdiff")
    formatter = logging.Formatter("%(levelname)s - %(message)s")
    dirdiff_log.setLevel(level)
    if dirdiff_log.hasHandlers():
        dirdiff_log.handlers.clear()

    # Subsystem log filtering
    _dirdiff_subsystem_filter = SubsystemFilter("dirdiff")

    # Main console handler
    _CONSOLE_HANDLER = logging.StreamHandler(sys.stderr)

    _CONSOLE_HANDLER.setLevel(level)
    _CONSOLE_HANDLER.setFormatter(formatter)
    _CONSOLE_HANDLER.addFilter(_dirdiff_subsystem_filter)

    dirdiff_log.addHandler(_CONSOLE_HANDLER)


def shutdown_logging():
    """
    Shut down dirdiff logging.
    """
    logging.shutdown()


def set_debug(debug_arg):
    """
    Set debugging mask from command line argument.
    """
    if not debug_arg:
        return

    mask_map = {
        "treewalk": DIRDIFF_DEBUG_TREEWALK,
        "compare": DIRDIFF_DEBUG_COMPARE,
        "copy": DIRDIFF_DEBUG_COPY,
        "command": DIRDIFF_DEBUG_COMMAND,
        "all": DIRDIFF_DEBUG_ALL,
    }

    mask = 0
    for name in debug_arg.split(","):
        if name not in mask_map:
            raise ValueError(f"Unknown debug option: {name}")
        mask |= mask_map[name]
    set_debug_mask(mask)


def _add_buffer_size_arg(parser):
    parser.add_argument(
        "-b",
        "--buffer-size",
        type=int,
        metavar="BYTES",
        dest="buffer_size",
        default=None,
        help="Read size to use when comparing file content",
    )


def main(args):
    """
    Main entry point for dirdiff.
    """
    parser = ArgumentParser(description="Directory Differ", prog=basename(args[0]))

    # Global arguments
    parser.add_argument(
        "-d",
        "--debug",
        metavar="DEBUGOPTS",
        type=str,
        help="A list of debug options to enable",
    )
    parser.add_argument("-v", "--verbose", help="Enable verbose output", action="count")
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        help="Report the version number of dirdiff",
        version=__version__,
    )
    cmd_subparser = parser.add_subparsers(dest="command", help="Command")

    diff_parser = cmd_subparser.add_parser(
        "diff", help="Report differences between two directories"
    )
    diff_parser.add_argument("dir1", metavar="DIR1", help="The first directory")
    diff_parser.add_argument("dir2", metavar="DIR2", help="The second directory")
    diff_parser.add_argument(
        "-o",
        "--output-format",
        choices=DIFF_FORMATS,
        default="text",
        help="Output format for differences",
    )
    _add_buffer_size_arg(diff_parser)
    diff_parser.set_defaults(func=_diff_cmd)

    copy_parser = cmd_subparser.add_parser(
        "copy", help="Copy new and changed files into an output directory"
    )
    copy_parser.add_argument("old_dir", metavar="OLD", help="The old directory")
    copy_parser.add_argument("new_dir", metavar="NEW", help="The new directory")
    copy_parser.add_argument(
        "output_dir",
        metavar="OUTPUT",
        help="The directory to receive the copies (emptied first)",
    )
    _add_buffer_size_arg(copy_parser)
    copy_parser.set_defaults(func=_copy_cmd)

    cmd_args = parser.parse_args(args[1:])

    status = 1

    try:
        set_debug(cmd_args.debug)
    except ValueError as err:
        print(err)
        parser.print_help()
        return status

    setup_logging(cmd_args)

    _log_debug_command("Parsed %s", " ".join(args[1:]))

    if "func" not in cmd_args:
        parser.print_help()
        return status

    if cmd_args.debug:
        status = cmd_args.func(cmd_args)
    else:
        try:
            status = cmd_args.func(cmd_args)
        # pylint: disable=broad-except
        except KeyboardInterrupt:  # pragma: no cover
            _log_info("Exiting on user cancel")
        except Exception as err:
            _log_error("Command failed: %s", err)

    shutdown_logging()
    return status


def run():
    """
    Console script entry point.
    """
    sys.exit(main(sys.argv))


# vim: set et ts=4 sw=4 :
