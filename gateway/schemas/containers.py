"""Pydantic schemas for container endpoints."""

from typing import List

from pydantic import BaseModel

from gateway.schemas.common import PropertiesResponse


class ContainerResponse(BaseModel):
    """Summary of a single container."""
    id: str
    name: str
    properties: PropertiesResponse
    file_count: int
    directory_count: int
    total_bytes: int


class ListContainersResponse(BaseModel):
    """Response model for container listing."""
    containers: List[ContainerResponse]
    count: int


class CreateContainerResponse(BaseModel):
    """Response model for container creation."""
    container: ContainerResponse
    message: str
