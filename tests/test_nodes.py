"""Tests for the File and Directory node model."""

from common.constants import DEFAULT_CONTENT_TYPE
from common.types import NodeKind
from storage_engine.nodes import Directory, File, Properties


class TestProperties:
    """Test the metadata block."""

    def test_fresh_properties(self):
        properties = Properties.fresh()

        assert properties.created_time == properties.modified_time
        assert properties.etag
        assert properties.size is None

    def test_touch_changes_etag_and_modified_time(self):
        properties = Properties.fresh()
        created = properties.created_time
        etag = properties.etag
        modified = properties.modified_time

        properties.touch()

        assert properties.etag != etag
        assert properties.modified_time > modified
        assert properties.created_time == created

    def test_repeated_touches_strictly_advance(self):
        properties = Properties.fresh()
        seen = [properties.modified_time]
        for _ in range(50):
            properties.touch()
            seen.append(properties.modified_time)

        assert all(later > earlier for earlier, later in zip(seen, seen[1:]))

    def test_copy_is_independent(self):
        properties = Properties.fresh(size=3)
        copied = properties.copy()
        properties.touch()

        assert copied.etag != properties.etag
        assert copied.size == 3


class TestFile:
    """Test File nodes."""

    def test_defaults(self):
        file = File(name="a.bin", path="a.bin", parent_path="")

        assert file.kind is NodeKind.FILE
        assert not file.is_directory()
        assert file.content == b""
        assert file.content_type == DEFAULT_CONTENT_TYPE
        assert file.properties.size == 0

    def test_size_tracks_content(self):
        file = File(name="r.txt", path="d/r.txt", parent_path="d", content=b"Hello")
        assert file.properties.size == 5

    def test_replace_content_keeps_identity(self):
        file = File(name="r.txt", path="r.txt", parent_path="", content=b"one", content_type="text/plain")
        node_id = file.node_id
        created = file.properties.created_time
        etag = file.properties.etag

        file.replace_content(b"three", "application/json")

        assert file.node_id == node_id
        assert file.properties.created_time == created
        assert file.properties.etag != etag
        assert file.properties.size == 5
        assert file.content_type == "application/json"

    def test_replace_content_without_type_keeps_type(self):
        file = File(name="r.txt", path="r.txt", parent_path="", content_type="text/plain")
        file.replace_content(b"x")
        assert file.content_type == "text/plain"

    def test_merge_metadata(self):
        file = File(name="r.txt", path="r.txt", parent_path="", metadata={"owner": "ops"})
        etag = file.properties.etag

        file.merge_metadata({"stage": "raw"})

        assert file.metadata == {"owner": "ops", "stage": "raw"}
        assert file.properties.etag != etag

    def test_snapshot_is_detached(self):
        file = File(name="r.txt", path="r.txt", parent_path="", content=b"v1")
        snapshot = file.snapshot()

        file.replace_content(b"version2")
        file.merge_metadata({"k": "v"})

        assert snapshot.content == b"v1"
        assert snapshot.properties.size == 2
        assert snapshot.metadata == {}
        assert snapshot.node_id == file.node_id


class TestDirectory:
    """Test Directory nodes."""

    def test_kind_and_emptiness(self):
        directory = Directory(name="docs", path="docs", parent_path="")

        assert directory.kind is NodeKind.DIRECTORY
        assert directory.is_directory()
        assert directory.is_empty()
        assert directory.child_count() == 0
        assert directory.properties.size is None

    def test_children_keep_insertion_order(self):
        directory = Directory(name="docs", path="docs", parent_path="")
        for name in ["zeta", "alpha", "mid"]:
            directory.children[name] = File(name=name, path=f"docs/{name}", parent_path="docs")

        assert list(directory.children) == ["zeta", "alpha", "mid"]
        assert directory.child_count() == 3

    def test_distinct_identity_tokens(self):
        first = Directory(name="a", path="a", parent_path="")
        second = Directory(name="a", path="a", parent_path="")
        assert first.node_id != second.node_id
