"""Registry for tracking containers and their namespace trees."""

import threading
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from common.constants import PATH_SEPARATOR
from common.logging_config import get_logger
from storage_engine.exceptions import (
    ContainerAlreadyExistsError,
    ContainerNotFoundError,
    InvalidNameError,
)
from storage_engine.namespace import NamespaceTree
from storage_engine.nodes import Properties
from storage_engine.utils import generate_uuid

logger = get_logger(__name__)


@dataclass
class Container:
    """
    Top-level namespace owning one rooted tree of nodes.

    ``lock`` serializes every read and mutation of ``tree``.
    """
    name: str
    container_id: str = field(default_factory=generate_uuid)
    properties: Properties = field(default_factory=Properties.fresh)
    tree: Optional[NamespaceTree] = field(default=None, repr=False)
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False, compare=False)

    def __post_init__(self):
        if self.tree is None:
            self.tree = NamespaceTree(self.name)

    def touch(self) -> None:
        self.properties.touch()

    def summarize(self) -> "ContainerSummary":
        """
        Count the container's contents. The caller must hold ``lock``.

        The root directory is not counted.
        """
        file_count = 0
        directory_count = 0
        total_bytes = 0
        for node in self.tree.iter_nodes():
            if node is self.tree.root:
                continue
            if node.is_directory():
                directory_count += 1
            else:
                file_count += 1
                total_bytes += node.properties.size
        return ContainerSummary(
            name=self.name,
            container_id=self.container_id,
            properties=self.properties.copy(),
            file_count=file_count,
            directory_count=directory_count,
            total_bytes=total_bytes,
        )


@dataclass(frozen=True)
class ContainerSummary:
    """Point-in-time view of a container's properties and contents"""
    name: str
    container_id: str
    properties: Properties
    file_count: int
    directory_count: int
    total_bytes: int


class ContainerRegistry:
    """Registry mapping container names to containers"""

    def __init__(self):
        self._containers: Dict[str, Container] = {}
        self._lock = threading.Lock()

    def create(self, name: str) -> Container:
        """
        Create and register a new empty container.

        Args:
            name: Unique container name

        Returns:
            The new container

        Raises:
            InvalidNameError: If the name is empty or contains a separator
            ContainerAlreadyExistsError: If the name is already registered
        """
        self._validate_name(name)
        with self._lock:
            if name in self._containers:
                raise ContainerAlreadyExistsError(name)
            container = Container(name=name)
            self._containers[name] = container
        logger.info(f"Registered container '{name}' (id={container.container_id})")
        return container

    def get(self, name: str) -> Container:
        with self._lock:
            container = self._containers.get(name)
        if container is None:
            raise ContainerNotFoundError(name)
        return container

    def remove(self, name: str) -> Container:
        """
        Unregister a container, dropping its whole subtree.

        Returns:
            The removed container

        Raises:
            ContainerNotFoundError: If the name is not registered
        """
        with self._lock:
            container = self._containers.pop(name, None)
        if container is None:
            raise ContainerNotFoundError(name)
        logger.info(f"Removed container '{name}' (id={container.container_id})")
        return container

    def list(self) -> List[Container]:
        """Get all containers in registration order"""
        with self._lock:
            return list(self._containers.values())

    def is_registered(self, container: Container) -> bool:
        """Check that ``container`` is still the one registered under its name"""
        with self._lock:
            return self._containers.get(container.name) is container

    def clear(self) -> int:
        """
        Drop every container.

        Returns:
            Number of containers removed
        """
        with self._lock:
            count = len(self._containers)
            self._containers.clear()
        if count > 0:
            logger.info(f"Cleared {count} containers from registry")
        return count

    def __len__(self) -> int:
        with self._lock:
            return len(self._containers)

    @staticmethod
    def _validate_name(name: str) -> None:
        if not isinstance(name, str) or not name.strip():
            raise InvalidNameError("Container name must be a non-empty string")
        if PATH_SEPARATOR in name:
            raise InvalidNameError(f"Container name '{name}' must not contain '{PATH_SEPARATOR}'")
