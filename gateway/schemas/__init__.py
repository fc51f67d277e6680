"""Pydantic schemas for API requests and responses."""

from gateway.schemas.common import ErrorResponse, HealthResponse, PropertiesResponse
from gateway.schemas.containers import (
    ContainerResponse,
    CreateContainerResponse,
    ListContainersResponse,
)
from gateway.schemas.paths import (
    DirectoryEntryResponse,
    DirectoryListingResponse,
    PatchMetadataRequest,
    PatchMetadataResponse,
    PathResponse,
)

__all__ = [
    "ErrorResponse",
    "HealthResponse",
    "PropertiesResponse",
    "ContainerResponse",
    "CreateContainerResponse",
    "ListContainersResponse",
    "DirectoryEntryResponse",
    "DirectoryListingResponse",
    "PatchMetadataRequest",
    "PatchMetadataResponse",
    "PathResponse",
]
