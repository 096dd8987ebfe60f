# Copyright Red Hat
#
# tests/test_reconcile.py - Set reconciliation tests.
#
# This file is part of the dirdiff project.
#
# SPDX-License-Identifier: Apache-2.0
import unittest

from dirdiff import DirDiffInputError
from dirdiff.reconcile import only_in


class TestOnlyIn(unittest.TestCase):
    def test_only_in(self):
        set_a = frozenset({"file", "dir/", "dir/file"})
        set_b = frozenset({"dir/", "dir2/"})
        self.assertEqual(only_in(set_a, set_b), {"file", "dir/file"})
        self.assertEqual(only_in(set_b, set_a), {"dir2/"})

    def test_only_in_self_is_empty(self):
        set_a = frozenset({"a", "b/", "b/c"})
        self.assertEqual(only_in(set_a, set_a), frozenset())

    def test_only_in_empty(self):
        self.assertEqual(only_in(frozenset(), frozenset({"a"})), frozenset())
        self.assertEqual(only_in(frozenset({"a"}), frozenset()), {"a"})

    def test_only_in_accepts_mutable_sets(self):
        self.assertEqual(only_in({"a", "b"}, {"b"}), {"a"})

    def test_only_in_does_not_modify_inputs(self):
        set_a = {"a", "b"}
        set_b = {"b"}
        only_in(set_a, set_b)
        self.assertEqual(set_a, {"a", "b"})
        self.assertEqual(set_b, {"b"})

    def test_only_in_bad_inputs(self):
        with self.assertRaises(DirDiffInputError):
            only_in(["a"], frozenset())
        with self.assertRaises(DirDiffInputError):
            only_in(frozenset(), {"a": True})

    def test_only_in_verbose(self):
        with self.assertLogs("dirdiff.reconcile", level="INFO") as cm:
            only_in(frozenset({"x"}), frozenset(), verbose=True)
        self.assertIn("x is only in first directory", cm.output[0])
