"""Pydantic schemas for file and directory endpoints."""

from typing import Dict, List, Optional

from pydantic import BaseModel

from gateway.schemas.common import PropertiesResponse


class DirectoryEntryResponse(BaseModel):
    """One child of a listed directory."""
    name: str
    is_directory: bool
    properties: PropertiesResponse


class DirectoryListingResponse(BaseModel):
    """Response model for directory listing."""
    container: str
    path: str
    is_directory: bool = True
    contents: List[DirectoryEntryResponse]
    count: int


class PathResponse(BaseModel):
    """Response model for file upload and directory creation."""
    path: str
    is_directory: bool
    content_type: Optional[str] = None
    properties: PropertiesResponse
    message: str


class PatchMetadataRequest(BaseModel):
    """Request model for merging user metadata into a file."""
    metadata: Dict[str, str]


class PatchMetadataResponse(BaseModel):
    """Response model for metadata patch."""
    path: str
    properties: PropertiesResponse
    metadata: Dict[str, str]
