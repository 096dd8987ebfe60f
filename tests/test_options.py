# Copyright Red Hat
#
# tests/test_options.py - DiffOptions tests.
#
# This file is part of the dirdiff project.
#
# SPDX-License-Identifier: Apache-2.0
import unittest
from argparse import Namespace

from dirdiff import DirDiffInputError
from dirdiff.options import DEFAULT_BUFFER_SIZE, DiffOptions


class TestDiffOptions(unittest.TestCase):
    def test_DiffOptions_defaults(self):
        opts = DiffOptions()
        self.assertFalse(opts.verbose)
        self.assertEqual(opts.buffer_size, DEFAULT_BUFFER_SIZE)

    def test_DiffOptions__str__(self):
        s = str(DiffOptions(verbose=True, buffer_size=512))
        self.assertIn("verbose=True", s)
        self.assertIn("buffer_size=512", s)

    def test_DiffOptions_bad_buffer_size(self):
        with self.assertRaises(DirDiffInputError):
            DiffOptions(buffer_size=0)
        with self.assertRaises(DirDiffInputError):
            DiffOptions(buffer_size="big")

    def test_from_cmd_args(self):
        """Test initialization from argparse Namespace."""
        args = Namespace(verbose=2, buffer_size=1024, unknown_arg="ignored")
        opts = DiffOptions.from_cmd_args(args)
        self.assertIs(opts.verbose, True)
        self.assertEqual(opts.buffer_size, 1024)

    def test_from_cmd_args_defaults(self):
        """Unset arguments fall back to defaults."""
        opts = DiffOptions.from_cmd_args(Namespace(verbose=None, buffer_size=None))
        self.assertEqual(opts, DiffOptions())
