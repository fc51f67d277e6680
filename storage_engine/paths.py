"""Slash-delimited path parsing shared by the tree and the engine."""

from typing import List, Sequence, Tuple

from common.constants import PATH_SEPARATOR
from storage_engine.exceptions import InvalidPathError

_RESERVED_SEGMENTS = frozenset({".", ".."})


def split_path(path: str) -> List[str]:
    """
    Split a path into its non-empty segments.

    Leading, trailing and repeated separators collapse, so ``""`` and ``"/"``
    both denote the root and yield an empty list.

    Args:
        path: Slash-delimited path inside a container

    Returns:
        List of path segments

    Raises:
        InvalidPathError: If the path is not a string, contains a NUL
            character, or uses a ``.``/``..`` segment
    """
    if not isinstance(path, str):
        raise InvalidPathError(f"Path must be a string, got {type(path).__name__}")
    if "\x00" in path:
        raise InvalidPathError("Path must not contain NUL characters")

    segments = [segment for segment in path.split(PATH_SEPARATOR) if segment]
    for segment in segments:
        if segment in _RESERVED_SEGMENTS:
            raise InvalidPathError(f"Path '{path}' contains a relative segment '{segment}'")
    return segments


def join_path(segments: Sequence[str]) -> str:
    return PATH_SEPARATOR.join(segments)


def normalize_path(path: str) -> str:
    """Return the canonical form of ``path`` (``"/a//b/"`` -> ``"a/b"``)."""
    return join_path(split_path(path))


def split_parent(segments: Sequence[str]) -> Tuple[str, str]:
    """
    Split segments into (parent path, name).

    Raises:
        InvalidPathError: If ``segments`` is empty (the root has no parent)
    """
    if not segments:
        raise InvalidPathError("The container root has no parent")
    return join_path(segments[:-1]), segments[-1]
