"""Shared pytest fixtures for all tests."""

import pytest
from fastapi.testclient import TestClient

from gateway.main import create_app
from storage_engine.engine import StorageEngine
from storage_engine.registry import ContainerRegistry


@pytest.fixture
def registry():
    """
    Create an empty container registry.

    Returns:
        ContainerRegistry instance
    """
    return ContainerRegistry()


@pytest.fixture
def engine(registry):
    """
    Create a storage engine over the test registry.

    Args:
        registry: Registry fixture

    Returns:
        StorageEngine instance
    """
    return StorageEngine(registry)


@pytest.fixture
def container(engine):
    """
    Create a container named 'mydata' in the test engine.

    Returns:
        Name of the container
    """
    engine.create_container('mydata')
    return 'mydata'


@pytest.fixture
def client(engine):
    """
    Create a FastAPI test client serving the test engine.

    Args:
        engine: Engine fixture

    Yields:
        TestClient with the application lifespan running
    """
    with TestClient(create_app(engine)) as test_client:
        yield test_client
