"""Tests for the per-container namespace tree."""

import pytest

from common.types import NodeKind
from storage_engine.exceptions import InvalidPathError, PathNotFoundError, TypeMismatchError
from storage_engine.namespace import NamespaceTree
from storage_engine.nodes import Directory, File


def make_file(path: str, content: bytes = b"data") -> File:
    parent, _, name = path.rpartition("/")
    return File(name=name, path=path, parent_path=parent, content=content)


@pytest.fixture
def tree():
    return NamespaceTree("mydata")


class TestResolve:
    """Test path resolution."""

    def test_root_aliases(self, tree):
        assert tree.resolve("") is tree.root
        assert tree.resolve("/") is tree.root
        assert tree.resolve("///") is tree.root

    def test_missing_path_is_none(self, tree):
        assert tree.resolve("nope") is None
        assert tree.resolve("a/b/c") is None

    def test_cannot_descend_into_file(self, tree):
        tree.upsert("a/file.txt", make_file("a/file.txt"))
        assert tree.resolve("a/file.txt/child") is None

    def test_separators_collapse(self, tree):
        node = make_file("a/b/c.txt")
        tree.upsert("a/b/c.txt", node)
        assert tree.resolve("/a//b/c.txt/") is node


class TestUpsert:
    """Test node placement and ancestor materialization."""

    def test_creates_intermediate_directories(self, tree):
        tree.upsert("a/b/c.txt", make_file("a/b/c.txt"))

        a = tree.resolve("a")
        b = tree.resolve("a/b")
        assert a.kind is NodeKind.DIRECTORY
        assert b.kind is NodeKind.DIRECTORY
        assert b.path == "a/b"
        assert b.parent_path == "a"
        assert a.parent_path == ""
        assert list(b.children) == ["c.txt"]

    def test_existing_directories_untouched(self, tree):
        tree.upsert("a/one.txt", make_file("a/one.txt"))
        directory = tree.resolve("a")

        tree.upsert("a/two.txt", make_file("a/two.txt"))

        assert tree.resolve("a") is directory
        assert list(directory.children) == ["one.txt", "two.txt"]

    def test_replaces_final_segment_unconditionally(self, tree):
        tree.upsert("a/x", make_file("a/x"))
        directory = Directory(name="x", path="a/x", parent_path="a")

        previous = tree.upsert("a/x", directory)

        assert previous.kind is NodeKind.FILE
        assert tree.resolve("a/x") is directory

    def test_replacement_keeps_child_position(self, tree):
        for name in ["first", "second", "third"]:
            tree.upsert(name, make_file(name))

        tree.upsert("second", make_file("second", b"new"))

        assert [name for name, _ in tree.list_children("")] == ["first", "second", "third"]

    def test_file_ancestor_silently_replaced_by_directory(self, tree):
        tree.upsert("a", make_file("a"))

        tree.upsert("a/b.txt", make_file("a/b.txt"))

        assert tree.resolve("a").kind is NodeKind.DIRECTORY
        assert tree.resolve("a/b.txt").kind is NodeKind.FILE

    def test_root_upsert_rejected(self, tree):
        with pytest.raises(InvalidPathError):
            tree.upsert("/", make_file("x"))

    def test_parent_touched_when_child_added(self, tree):
        tree.upsert("a/one.txt", make_file("a/one.txt"))
        directory = tree.resolve("a")
        etag = directory.properties.etag

        tree.upsert("a/two.txt", make_file("a/two.txt"))

        assert directory.properties.etag != etag


class TestRemove:
    """Test entry removal."""

    def test_remove_existing(self, tree):
        tree.upsert("a/b.txt", make_file("a/b.txt"))

        assert tree.remove("a/b.txt") is True
        assert tree.resolve("a/b.txt") is None
        assert tree.resolve("a").is_empty()

    def test_remove_missing_entry(self, tree):
        tree.upsert("a/b.txt", make_file("a/b.txt"))
        assert tree.remove("a/other.txt") is False

    def test_remove_with_missing_ancestor(self, tree):
        assert tree.remove("x/y/z") is False

    def test_remove_root_is_false(self, tree):
        assert tree.remove("") is False
        assert tree.remove("/") is False

    def test_remove_does_not_recurse(self, tree):
        tree.upsert("a/b/c.txt", make_file("a/b/c.txt"))
        detached = tree.resolve("a/b")

        assert tree.remove("a/b") is True
        assert tree.resolve("a/b") is None
        assert list(detached.children) == ["c.txt"]


class TestListChildren:
    """Test directory listing."""

    def test_lists_in_insertion_order(self, tree):
        for path in ["d/zeta.txt", "d/alpha", "d/mid.txt"]:
            tree.upsert(path, make_file(path))

        names = [name for name, _ in tree.list_children("d")]
        assert names == ["zeta.txt", "alpha", "mid.txt"]

    def test_missing_directory(self, tree):
        with pytest.raises(PathNotFoundError):
            tree.list_children("missing")

    def test_listing_a_file(self, tree):
        tree.upsert("f.txt", make_file("f.txt"))

        with pytest.raises(TypeMismatchError) as exc_info:
            tree.list_children("f.txt")

        assert exc_info.value.expected is NodeKind.DIRECTORY
        assert exc_info.value.actual is NodeKind.FILE

    def test_deep_paths_resolve_iteratively(self, tree):
        segments = [f"d{i}" for i in range(2000)]
        path = "/".join(segments + ["leaf.txt"])

        tree.upsert(path, make_file(path))

        assert tree.resolve(path).name == "leaf.txt"
        assert [name for name, _ in tree.list_children("/".join(segments))] == ["leaf.txt"]


class TestIterNodes:
    """Test the breadth-first walk over every node."""

    def test_empty_tree_yields_root(self, tree):
        assert list(tree.iter_nodes()) == [tree.root]

    def test_breadth_first_order(self, tree):
        for path in ["a/deep/x.txt", "b.txt", "a/y.txt"]:
            tree.upsert(path, make_file(path))

        paths = [node.path for node in tree.iter_nodes()]

        assert paths == ["", "a", "b.txt", "a/deep", "a/y.txt", "a/deep/x.txt"]

    def test_removed_subtree_is_not_visited(self, tree):
        tree.upsert("gone/inner.txt", make_file("gone/inner.txt"))
        tree.upsert("kept.txt", make_file("kept.txt"))

        tree.remove("gone")

        assert [node.path for node in tree.iter_nodes()] == ["", "kept.txt"]
