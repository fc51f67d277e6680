"""Node model: the File and Directory entries of a container namespace."""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import ClassVar, Dict, Mapping, Optional

from common.constants import DEFAULT_CONTENT_TYPE
from common.types import NodeKind
from storage_engine.utils import generate_uuid, get_current_timestamp


@dataclass
class Properties:
    """
    System metadata block shared by files, directories and containers.

    ``size`` is only populated for files.
    """
    created_time: datetime
    modified_time: datetime
    etag: str
    size: Optional[int] = None

    @classmethod
    def fresh(cls, size: Optional[int] = None) -> "Properties":
        now = get_current_timestamp()
        return cls(created_time=now, modified_time=now, etag=generate_uuid(), size=size)

    def touch(self) -> None:
        """Bump the modified time and regenerate the ETag."""
        self.modified_time = get_current_timestamp(self.modified_time)
        self.etag = generate_uuid()

    def copy(self) -> "Properties":
        return replace(self)


@dataclass
class Node:
    """
    Base class for namespace tree entries.

    Subclasses set ``kind``; all type checks dispatch on it.
    """
    kind: ClassVar[NodeKind]

    name: str = ""
    path: str = ""
    parent_path: Optional[str] = None
    node_id: str = field(default_factory=generate_uuid)
    properties: Properties = field(default_factory=Properties.fresh)

    def is_directory(self) -> bool:
        return self.kind is NodeKind.DIRECTORY

    def touch(self) -> None:
        self.properties.touch()

    def snapshot(self) -> "Node":
        """
        Return a detached copy safe to hand out after the container lock is released.
        """
        return replace(self, properties=self.properties.copy())


@dataclass
class File(Node):
    kind: ClassVar[NodeKind] = NodeKind.FILE

    content: bytes = b""
    content_type: str = DEFAULT_CONTENT_TYPE
    metadata: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        self.properties.size = len(self.content)

    def replace_content(self, content: bytes, content_type: Optional[str] = None) -> None:
        """
        Swap the content in place, keeping identity and creation time.

        Args:
            content: New file bytes
            content_type: New content type; the current one is kept when None
        """
        self.content = content
        if content_type is not None:
            self.content_type = content_type
        self.properties.size = len(content)
        self.touch()

    def merge_metadata(self, metadata: Mapping[str, str]) -> None:
        self.metadata.update(metadata)
        self.touch()

    def snapshot(self) -> "File":
        return replace(self, properties=self.properties.copy(), metadata=dict(self.metadata))


@dataclass
class Directory(Node):
    kind: ClassVar[NodeKind] = NodeKind.DIRECTORY

    # insertion ordered
    children: Dict[str, Node] = field(default_factory=dict)

    def child_count(self) -> int:
        return len(self.children)

    def is_empty(self) -> bool:
        return not self.children

    def snapshot(self) -> "Directory":
        """Copy with its own child mapping; the child nodes themselves are shared."""
        return replace(self, properties=self.properties.copy(), children=dict(self.children))
