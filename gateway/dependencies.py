"""FastAPI dependencies shared by the route modules."""

from fastapi import Request

from storage_engine.engine import StorageEngine


def get_engine(request: Request) -> StorageEngine:
    """
    FastAPI dependency returning the storage engine owned by the application.

    Args:
        request: Incoming request

    Returns:
        The StorageEngine stored on ``app.state`` by ``create_app``
    """
    return request.app.state.engine
