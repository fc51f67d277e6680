"""Custom exception classes for the storage engine."""

from common.types import NodeKind


class StorageException(Exception):
    """
    Base exception class for all storage engine errors.
    """
    pass


class NotFoundError(StorageException):
    """
    Raised when a container or path does not exist.
    """
    pass


class ContainerNotFoundError(NotFoundError):
    """
    Raised when a requested container does not exist.
    """

    def __init__(self, container_name: str):
        super().__init__(f"Container '{container_name}' not found")
        self.container_name = container_name


class PathNotFoundError(NotFoundError):
    """
    Raised when nothing resolves at a path inside a container.
    """

    def __init__(self, container_name: str, path: str):
        super().__init__(f"Path '{path}' not found in container '{container_name}'")
        self.container_name = container_name
        self.path = path


class AlreadyExistsError(StorageException):
    """
    Raised when creating an entity whose key is already taken.
    """
    pass


class ContainerAlreadyExistsError(AlreadyExistsError):
    """
    Raised when attempting to create a container name that already exists.
    """

    def __init__(self, container_name: str):
        super().__init__(f"Container '{container_name}' already exists")
        self.container_name = container_name


class TypeMismatchError(StorageException):
    """
    Raised when an operation expecting a file finds a directory, or vice versa.
    """

    def __init__(self, path: str, expected: NodeKind, actual: NodeKind):
        super().__init__(f"Path '{path}' is a {actual.value}, not a {expected.value}")
        self.path = path
        self.expected = expected
        self.actual = actual


class DirectoryNotEmptyError(StorageException):
    """
    Raised when a non-recursive delete targets a directory with children.
    """

    def __init__(self, path: str, child_count: int):
        super().__init__(f"Directory '{path}' is not empty ({child_count} entries)")
        self.path = path
        self.child_count = child_count


class InvalidPathError(StorageException):
    """
    Raised when a path is malformed or cannot be the target of the operation.
    """
    pass


class InvalidNameError(StorageException):
    """
    Raised when a container name is empty or contains a path separator.
    """
    pass
