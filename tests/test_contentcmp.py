# Copyright Red Hat
#
# tests/test_contentcmp.py - Content comparison tests.
#
# This file is part of the dirdiff project.
#
# SPDX-License-Identifier: Apache-2.0
import unittest
import tempfile
import os
from unittest.mock import patch

from dirdiff import DirDiffInputError, DiffOptions
from dirdiff.contentcmp import differing, entry_to_path, files_differ
from dirdiff.treewalk import list_tree

from ._util import make_tree


class TestFilesDiffer(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = self._tmp.name

    def tearDown(self):
        self._tmp.cleanup()

    def _pair(self, content_a, content_b):
        make_tree(self.root, {"a": content_a, "b": content_b})
        return os.path.join(self.root, "a"), os.path.join(self.root, "b")

    def test_files_differ_identical(self):
        path_a, path_b = self._pair(b"hello", b"hello")
        self.assertFalse(files_differ(path_a, path_b))

    def test_files_differ_same_length(self):
        path_a, path_b = self._pair(b"hello", b"world")
        self.assertTrue(files_differ(path_a, path_b))

    def test_files_differ_length(self):
        path_a, path_b = self._pair(b"hello", b"hello!")
        self.assertTrue(files_differ(path_a, path_b))

    def test_files_differ_empty(self):
        path_a, path_b = self._pair(b"", b"")
        self.assertFalse(files_differ(path_a, path_b))

    def test_files_differ_small_buffer(self):
        """Differences after the first chunk are found."""
        path_a, path_b = self._pair(b"abcdefgh1", b"abcdefgh2")
        self.assertTrue(files_differ(path_a, path_b, buffer_size=4))
        path_a, path_b = self._pair(b"abcdefgh1", b"abcdefgh1")
        self.assertFalse(files_differ(path_a, path_b, buffer_size=4))

    def test_files_differ_read_failure(self):
        path_a, path_b = self._pair(b"same", b"same")
        with patch("builtins.open", side_effect=PermissionError(13, "denied")):
            with self.assertLogs("dirdiff.contentcmp", level="WARNING"):
                self.assertTrue(files_differ(path_a, path_b))

    def test_files_differ_missing(self):
        path_a, _ = self._pair(b"x", b"x")
        with self.assertLogs("dirdiff.contentcmp", level="WARNING"):
            self.assertTrue(files_differ(path_a, os.path.join(self.root, "missing")))


class TestDiffering(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root1 = os.path.join(self._tmp.name, "one")
        self.root2 = os.path.join(self._tmp.name, "two")

    def tearDown(self):
        self._tmp.cleanup()

    def _differing(self, layout1, layout2, options=None):
        make_tree(self.root1, layout1)
        make_tree(self.root2, layout2)
        return differing(
            self.root1,
            list_tree(self.root1),
            self.root2,
            list_tree(self.root2),
            options=options,
        )

    def test_entry_to_path(self):
        self.assertEqual(entry_to_path("/r", "a/b"), os.path.join("/r", "a", "b"))
        self.assertEqual(entry_to_path("/r", "a/"), os.path.join("/r", "a"))

    def test_differing_identical(self):
        self.assertEqual(self._differing({"x.txt": "hello"}, {"x.txt": "hello"}), set())

    def test_differing_changed(self):
        self.assertEqual(
            self._differing({"x.txt": "hello"}, {"x.txt": "world"}), {"x.txt"}
        )

    def test_differing_nested(self):
        self.assertEqual(
            self._differing(
                {"d/e/f.txt": "1", "d/same.txt": "s"},
                {"d/e/f.txt": "2", "d/same.txt": "s"},
            ),
            {"d/e/f.txt"},
        )

    def test_differing_only_intersection(self):
        """Paths present on one side only are never compared."""
        result = self._differing({"a": "1", "both": "x"}, {"b": "2", "both": "y"})
        self.assertEqual(result, {"both"})

    def test_differing_skips_dir_markers(self):
        result = self._differing({"d/": None}, {"d/": None})
        self.assertEqual(result, set())

    def test_differing_type_changed(self):
        """An entry that is no longer a regular file is not comparable."""
        make_tree(self.root1, {"x/": None})
        make_tree(self.root2, {"x": "file"})
        result = differing(
            self.root1, frozenset({"x"}), self.root2, frozenset({"x"})
        )
        self.assertEqual(result, set())

    def test_differing_vanished(self):
        make_tree(self.root1, {})
        make_tree(self.root2, {"x": "file"})
        result = differing(
            self.root1, frozenset({"x"}), self.root2, frozenset({"x"})
        )
        self.assertEqual(result, set())

    def test_differing_bad_root(self):
        make_tree(self.root2, {})
        with self.assertRaises(DirDiffInputError):
            differing(self.root1, frozenset(), self.root2, frozenset())

    def test_differing_bad_entries(self):
        make_tree(self.root1, {})
        make_tree(self.root2, {})
        with self.assertRaises(DirDiffInputError):
            differing(self.root1, ["x"], self.root2, frozenset())

    def test_differing_verbose(self):
        with self.assertLogs("dirdiff.contentcmp", level="INFO") as cm:
            self._differing(
                {"x.txt": "a"}, {"x.txt": "b"}, options=DiffOptions(verbose=True)
            )
        self.assertTrue(any("x.txt differs" in msg for msg in cm.output))
