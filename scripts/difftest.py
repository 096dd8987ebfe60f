#!/usr/bin/python3
# Copyright Red Hat
#
# difftest.py - simple example driver for dirdiff.compare
#
# This file is part of the dirdiff project.
#
# SPDX-License-Identifier: Apache-2.0
from argparse import ArgumentParser
import logging
import sys

from dirdiff import (
    DiffHandlers,
    DiffOptions,
    DirDiffError,
    compare,
    default_differs,
    default_only_in,
)

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}

def main():
    parser = ArgumentParser(prog="difftest.py")
    parser.add_argument(
        "-l",
        "--log-level",
        default="warn",
        help=f"Set log level ({', '.join(LOG_LEVELS.keys())})",
        choices=LOG_LEVELS.keys(),
    )
    parser.add_argument(
        "-v",
        "--verbose",
        help="Report each entry found",
        action="store_true",
    )
    parser.add_argument("dir1", type=str, help="The first directory")
    parser.add_argument("dir2", type=str, help="The second directory")
    args = parser.parse_args()
    dirdiff_log = logging.getLogger("dirdiff")
    formatter = logging.Formatter('%(levelname)s - %(message)s')
    dirdiff_log.setLevel(LOG_LEVELS[args.log_level])
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    dirdiff_log.addHandler(console_handler)

    options = DiffOptions.from_cmd_args(args)
    handlers = DiffHandlers(
        only_in_1=default_only_in,
        only_in_2=default_only_in,
        differs=default_differs,
    )
    try:
        compare(args.dir1, args.dir2, handlers, options=options)
    except DirDiffError as err:
        print(f"Comparison failed: {err}", file=sys.stderr)
        sys.exit(1)
    except (KeyboardInterrupt, BrokenPipeError):
        # Graceful early exit on user abort or broken pipe
        return

if __name__ == "__main__":
    main()
