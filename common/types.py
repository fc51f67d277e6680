"""Shared data type definitions (NodeKind, DirectoryEntry)."""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from storage_engine.nodes import Properties


class NodeKind(str, Enum):
    """
    Discriminator tag for namespace tree entries.
    """
    FILE = "file"
    DIRECTORY = "directory"


@dataclass(frozen=True)
class DirectoryEntry:
    """
    One child of a listed directory.
    """
    name: str
    kind: NodeKind
    properties: "Properties"

    @property
    def is_directory(self) -> bool:
        return self.kind is NodeKind.DIRECTORY
