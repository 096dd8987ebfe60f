# Copyright Red Hat
#
# tests/_util.py - Directory differ test utilities.
#
# This file is part of the dirdiff project.
#
# SPDX-License-Identifier: Apache-2.0
import os

from dirdiff import DiffHandlers


def make_tree(root, layout):
    """
    Populate ``root`` from ``layout``: a dictionary mapping relative paths
    to file content. Paths ending in "/" create (possibly empty)
    directories and their value is ignored.
    """
    os.makedirs(root, exist_ok=True)
    for rel_path, content in layout.items():
        path = os.path.join(root, *rel_path.rstrip("/").split("/"))
        if rel_path.endswith("/"):
            os.makedirs(path, exist_ok=True)
            continue
        os.makedirs(os.path.dirname(path), exist_ok=True)
        mode = "wb" if isinstance(content, bytes) else "w"
        with open(path, mode) as f:
            f.write(content)
    return root


class Collector:
    """
    Handler context recording every finding dispatched by ``compare()``.
    """

    def __init__(self):
        self.only_in_1 = set()
        self.only_in_2 = set()
        self.differs = set()
        self.calls = []

    def handlers(self):
        return DiffHandlers(
            only_in_1=_on_only_in_1,
            only_in_2=_on_only_in_2,
            differs=_on_differs,
        )

    def results(self):
        return (
            frozenset(self.only_in_1),
            frozenset(self.only_in_2),
            frozenset(self.differs),
        )


def _on_only_in_1(context, root, path):
    context.calls.append(("only_in_1", root, path))
    context.only_in_1.add(path)


def _on_only_in_2(context, root, path):
    context.calls.append(("only_in_2", root, path))
    context.only_in_2.add(path)


def _on_differs(context, root1, root2, path):
    context.calls.append(("differs", root1, root2, path))
    context.differs.add(path)
