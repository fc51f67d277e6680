"""Storage engine: file and directory operations across containers."""

from contextlib import contextmanager
from typing import Iterator, List, Mapping, Optional, Tuple

from common.constants import DEFAULT_CONTENT_TYPE
from common.logging_config import get_logger
from common.types import DirectoryEntry, NodeKind
from storage_engine.exceptions import (
    ContainerNotFoundError,
    DirectoryNotEmptyError,
    InvalidPathError,
    PathNotFoundError,
    TypeMismatchError,
)
from storage_engine.nodes import Directory, File, Node
from storage_engine.paths import join_path, split_parent, split_path
from storage_engine.registry import Container, ContainerRegistry, ContainerSummary

logger = get_logger(__name__)


class StorageEngine:
    """
    Hierarchical namespace operations on top of a container registry.

    Every operation on a container runs while holding that container's lock,
    so ancestor materialization and the final write are seen as one step by
    other callers. Files are returned as detached snapshots.
    """

    def __init__(self, registry: Optional[ContainerRegistry] = None):
        self.registry = registry if registry is not None else ContainerRegistry()

    # Container operations

    def create_container(self, name: str) -> Container:
        return self.registry.create(name)

    def get_container(self, name: str) -> Container:
        return self.registry.get(name)

    def list_containers(self) -> List[Container]:
        return self.registry.list()

    def summarize_container(self, container: Container) -> ContainerSummary:
        """Snapshot a container's properties and content counts under its lock."""
        with container.lock:
            return container.summarize()

    def list_container_summaries(self) -> List[ContainerSummary]:
        return [self.summarize_container(container) for container in self.registry.list()]

    def delete_container(self, name: str) -> None:
        self.registry.remove(name)

    def close(self) -> None:
        """Drop every container; the engine is empty afterwards."""
        self.registry.clear()

    # File operations

    def create_file(
        self,
        container_name: str,
        path: str,
        content: bytes = b"",
        content_type: Optional[str] = None,
    ) -> File:
        """
        Write a new file at ``path``, materializing missing ancestor directories.

        Any node already at ``path`` is replaced; a file sitting where an
        ancestor directory is needed is replaced by an empty directory.

        Args:
            container_name: Target container
            path: Non-root file path
            content: File bytes
            content_type: MIME type, defaults to application/octet-stream

        Returns:
            Snapshot of the new file

        Raises:
            ContainerNotFoundError: If the container does not exist
            InvalidPathError: If ``path`` is malformed or the root
        """
        with self._locked(container_name) as container:
            file = self._write_new_file(container, path, content, content_type)
            return file.snapshot()

    def update_file(
        self,
        container_name: str,
        path: str,
        content: bytes,
        content_type: Optional[str] = None,
    ) -> File:
        """
        Replace a file's content, creating the file if nothing exists at ``path``.

        An existing file keeps its identity and creation time; its size,
        modified time and ETag are refreshed.

        Returns:
            Snapshot of the written file

        Raises:
            ContainerNotFoundError: If the container does not exist
            TypeMismatchError: If ``path`` holds a directory
        """
        with self._locked(container_name) as container:
            node = container.tree.resolve(path)
            if node is None:
                file = self._write_new_file(container, path, content, content_type)
                return file.snapshot()

            file = self._expect_file(node, path)
            file.replace_content(bytes(content), content_type or DEFAULT_CONTENT_TYPE)
            container.touch()
            logger.info(f"Updated file '{file.path}' in container '{container_name}' ({len(content)} bytes)")
            return file.snapshot()

    def get_file(self, container_name: str, path: str) -> File:
        """
        Raises:
            ContainerNotFoundError: If the container does not exist
            PathNotFoundError: If nothing resolves at ``path``
            TypeMismatchError: If ``path`` holds a directory
        """
        with self._locked(container_name) as container:
            node = self._resolve_existing(container, path)
            return self._expect_file(node, path).snapshot()

    def delete_file(self, container_name: str, path: str) -> None:
        with self._locked(container_name) as container:
            self._delete_file(container, path)

    def patch_file_metadata(
        self,
        container_name: str,
        path: str,
        metadata: Mapping[str, str],
    ) -> File:
        """
        Merge user metadata pairs into a file, bumping its ETag.

        Raises:
            ContainerNotFoundError: If the container does not exist
            PathNotFoundError: If nothing resolves at ``path``
            TypeMismatchError: If ``path`` holds a directory
        """
        with self._locked(container_name) as container:
            file = self._expect_file(self._resolve_existing(container, path), path)
            file.merge_metadata(metadata)
            container.touch()
            logger.info(f"Patched metadata of '{file.path}' in container '{container_name}': {sorted(metadata)}")
            return file.snapshot()

    # Directory operations

    def create_directory(self, container_name: str, path: str) -> Directory:
        """
        Write a new empty directory at ``path``.

        Whatever was at ``path`` is replaced, so re-creating an existing
        directory empties it. Missing ancestors are created as for files.

        Raises:
            ContainerNotFoundError: If the container does not exist
            InvalidPathError: If ``path`` is malformed or the root
        """
        with self._locked(container_name) as container:
            full_path, parent_path, name = self._address(path)
            directory = Directory(name=name, path=full_path, parent_path=parent_path)
            container.tree.upsert(directory.path, directory)
            container.touch()
            logger.info(f"Created directory '{directory.path}' in container '{container_name}'")
            return directory.snapshot()

    def get_directory(self, container_name: str, path: str = "") -> List[DirectoryEntry]:
        """
        List a directory's children in insertion order.

        Args:
            container_name: Target container
            path: Directory path; ``""`` or ``"/"`` lists the root

        Returns:
            One entry per child, tagged with its node kind

        Raises:
            ContainerNotFoundError: If the container does not exist
            PathNotFoundError: If nothing resolves at ``path``
            TypeMismatchError: If ``path`` holds a file
        """
        with self._locked(container_name) as container:
            children = container.tree.list_children(path)
            return [
                DirectoryEntry(name=name, kind=child.kind, properties=child.properties.copy())
                for name, child in children
            ]

    def delete_directory(self, container_name: str, path: str) -> None:
        """
        Delete an empty directory. Deletion is never recursive.

        Raises:
            ContainerNotFoundError: If the container does not exist
            InvalidPathError: If ``path`` is the container root
            PathNotFoundError: If nothing resolves at ``path``
            TypeMismatchError: If ``path`` holds a file
            DirectoryNotEmptyError: If the directory has children
        """
        with self._locked(container_name) as container:
            self._delete_directory(container, path)

    def delete_path(self, container_name: str, path: str) -> NodeKind:
        """
        Delete whatever is at ``path``, applying the file or directory rules.

        Returns:
            Kind of the deleted node
        """
        with self._locked(container_name) as container:
            node = self._resolve_existing(container, path)
            if node.is_directory():
                self._delete_directory(container, path)
            else:
                self._delete_file(container, path)
            return node.kind

    # Helpers

    @contextmanager
    def _locked(self, container_name: str) -> Iterator[Container]:
        """
        Hold a container's lock for the duration of an operation.

        Raises:
            ContainerNotFoundError: If the container is missing, or was
                deleted while waiting for its lock
        """
        container = self.registry.get(container_name)
        with container.lock:
            if not self.registry.is_registered(container):
                raise ContainerNotFoundError(container_name)
            yield container

    def _write_new_file(
        self,
        container: Container,
        path: str,
        content: bytes,
        content_type: Optional[str],
    ) -> File:
        full_path, parent_path, name = self._address(path)
        file = File(
            name=name,
            path=full_path,
            parent_path=parent_path,
            content=bytes(content),
            content_type=content_type or DEFAULT_CONTENT_TYPE,
        )
        container.tree.upsert(file.path, file)
        container.touch()
        logger.info(
            f"Created file '{file.path}' in container '{container.name}' "
            f"({file.properties.size} bytes, {file.content_type})"
        )
        return file

    def _delete_file(self, container: Container, path: str) -> None:
        node = self._expect_file(self._resolve_existing(container, path), path)
        self._remove(container, node)

    def _delete_directory(self, container: Container, path: str) -> None:
        node = self._expect_directory(self._resolve_existing(container, path), path)
        if node is container.tree.root:
            raise InvalidPathError("Cannot delete the container root")
        if not node.is_empty():
            raise DirectoryNotEmptyError(path, node.child_count())
        self._remove(container, node)

    @staticmethod
    def _address(path: str) -> Tuple[str, str, str]:
        """Normalize a writable path into (full path, parent path, name)."""
        segments = split_path(path)
        parent_path, name = split_parent(segments)
        return join_path(segments), parent_path, name

    def _resolve_existing(self, container: Container, path: str) -> Node:
        node = container.tree.resolve(path)
        if node is None:
            raise PathNotFoundError(container.name, path)
        return node

    def _remove(self, container: Container, node: Node) -> None:
        container.tree.remove(node.path)
        container.touch()
        logger.info(f"Deleted {node.kind.value} '{node.path}' from container '{container.name}'")

    @staticmethod
    def _expect_file(node: Node, path: str) -> File:
        if node.kind is not NodeKind.FILE:
            raise TypeMismatchError(path, expected=NodeKind.FILE, actual=node.kind)
        return node

    @staticmethod
    def _expect_directory(node: Node, path: str) -> Directory:
        if node.kind is not NodeKind.DIRECTORY:
            raise TypeMismatchError(path, expected=NodeKind.DIRECTORY, actual=node.kind)
        return node
