"""Path-addressed tree of nodes backing a single container."""

from collections import deque
from typing import Iterator, List, Optional, Tuple

from common.logging_config import get_logger
from common.types import NodeKind
from storage_engine.exceptions import InvalidPathError, PathNotFoundError, TypeMismatchError
from storage_engine.nodes import Directory, Node
from storage_engine.paths import join_path, split_path

logger = get_logger(__name__)


class NamespaceTree:
    """
    Ordered tree of File and Directory nodes rooted at a container's root directory.

    The tree does no locking of its own; the owning container's lock must be
    held by the caller for every operation.
    """

    def __init__(self, container_name: str, root: Optional[Directory] = None):
        """
        Initialize the tree.

        Args:
            container_name: Name of the owning container, used in error messages
            root: Existing root directory; a fresh empty one is created when None
        """
        self.container_name = container_name
        self.root = root if root is not None else Directory(name="", path="", parent_path=None)

    def resolve(self, path: str) -> Optional[Node]:
        """
        Find the node at ``path``.

        Args:
            path: Slash-delimited path; ``""`` or ``"/"`` is the root

        Returns:
            The node, or None when any segment is missing or an intermediate
            segment is a file
        """
        return self._walk(split_path(path))

    def upsert(self, path: str, node: Node) -> Optional[Node]:
        """
        Place ``node`` at ``path``, creating missing intermediate directories.

        Intermediate files are replaced by empty directories and whatever sits
        at the final segment is replaced unconditionally.

        Args:
            path: Non-root slash-delimited path
            node: Node to store

        Returns:
            The node that was replaced, or None

        Raises:
            InvalidPathError: If ``path`` denotes the root
        """
        segments = split_path(path)
        if not segments:
            raise InvalidPathError("Cannot write to the container root")

        parent = self.ensure_directories(segments[:-1])
        name = segments[-1]
        previous = parent.children.get(name)
        parent.children[name] = node
        parent.touch()

        if previous is not None:
            logger.debug(
                f"Replaced {previous.kind.value} at '{join_path(segments)}' "
                f"with {node.kind.value} in container '{self.container_name}'"
            )
        return previous

    def ensure_directories(self, segments: List[str]) -> Directory:
        """
        Walk ``segments`` from the root, materializing empty directories as needed.

        Existing directories are left untouched; a file found on the way is
        overwritten by a new empty directory.

        Returns:
            The directory at the end of ``segments``
        """
        current = self.root
        for depth, segment in enumerate(segments):
            child = current.children.get(segment)
            if child is None or child.kind is not NodeKind.DIRECTORY:
                if child is not None:
                    logger.warning(
                        f"Overwriting file '{child.path}' with a directory "
                        f"in container '{self.container_name}'"
                    )
                child = Directory(
                    name=segment,
                    path=join_path(segments[:depth + 1]),
                    parent_path=current.path,
                )
                current.children[segment] = child
                current.touch()
            current = child
        return current

    def remove(self, path: str) -> bool:
        """
        Remove the entry at ``path`` from its parent directory.

        Descendants of a removed directory are not visited.

        Returns:
            True if an entry was removed, False if any segment was missing
        """
        segments = split_path(path)
        if not segments:
            return False

        parent = self._walk(segments[:-1])
        if parent is None or parent.kind is not NodeKind.DIRECTORY:
            return False

        if parent.children.pop(segments[-1], None) is None:
            return False

        parent.touch()
        return True

    def list_children(self, path: str) -> List[Tuple[str, Node]]:
        """
        List the children of the directory at ``path`` in insertion order.

        Raises:
            PathNotFoundError: If nothing resolves at ``path``
            TypeMismatchError: If ``path`` resolves to a file
        """
        node = self.resolve(path)
        if node is None:
            raise PathNotFoundError(self.container_name, path)
        if node.kind is not NodeKind.DIRECTORY:
            raise TypeMismatchError(path, expected=NodeKind.DIRECTORY, actual=node.kind)
        return list(node.children.items())

    def iter_nodes(self) -> Iterator[Node]:
        """
        Yield every node breadth-first, starting with the root.

        Children are visited in insertion order. The caller must not mutate
        the tree while iterating.
        """
        queue = deque([self.root])
        while queue:
            node = queue.popleft()
            yield node
            if node.kind is NodeKind.DIRECTORY:
                queue.extend(node.children.values())

    def _walk(self, segments: List[str]) -> Optional[Node]:
        current: Node = self.root
        for segment in segments:
            if current.kind is not NodeKind.DIRECTORY:
                return None
            child = current.children.get(segment)
            if child is None:
                return None
            current = child
        return current
