"""File and directory operation API routes."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status

from common.constants import DEFAULT_CONTENT_TYPE
from gateway import config
from gateway.dependencies import get_engine
from gateway.schemas.common import ErrorResponse
from gateway.schemas.paths import (
    DirectoryListingResponse,
    PatchMetadataRequest,
    PatchMetadataResponse,
    PathResponse,
)
from gateway.utils import (
    file_headers,
    is_directory_request,
    to_entry_response,
    to_properties_response,
)
from storage_engine.engine import StorageEngine
from storage_engine.exceptions import TypeMismatchError

router = APIRouter(
    tags=["Paths"],
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
        status.HTTP_409_CONFLICT: {"model": ErrorResponse},
    },
)


@router.put("/{container}/{path:path}", response_model=PathResponse, status_code=status.HTTP_201_CREATED)
async def put_path(
    container: str,
    path: str,
    request: Request,
    directory: Optional[str] = Query(None, description="Present to create a directory"),
    resource: Optional[str] = Query(None, description="'directory' or 'file'"),
    engine: StorageEngine = Depends(get_engine),
):
    """
    Create a directory or upload/replace a file.

    Parameters:
        - directory / resource=directory: create an empty directory at path
        - otherwise the raw request body is stored as the file content,
          typed by the Content-Type header (default application/octet-stream)

    Raises:
        - 400: Malformed path
        - 404: Container not found
        - 409: Upload targets an existing directory
        - 413: Body larger than EMULATOR_MAX_UPLOAD_BYTES
    """
    if is_directory_request(directory, resource):
        created = engine.create_directory(container, path)
        return PathResponse(
            path=created.path,
            is_directory=True,
            properties=to_properties_response(created.properties),
            message=f"Directory '{created.path}' created successfully",
        )

    content = await request.body()
    if len(content) > config.EMULATOR_MAX_UPLOAD_BYTES:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"Upload of {len(content)} bytes exceeds limit of {config.EMULATOR_MAX_UPLOAD_BYTES} bytes"
        )

    content_type = request.headers.get("content-type") or DEFAULT_CONTENT_TYPE
    file = engine.update_file(container, path, content, content_type)

    return PathResponse(
        path=file.path,
        is_directory=False,
        content_type=file.content_type,
        properties=to_properties_response(file.properties),
        message=f"File '{file.path}' uploaded successfully",
    )


@router.get("/{container}/{path:path}", response_model=DirectoryListingResponse)
async def get_path(container: str, path: str, engine: StorageEngine = Depends(get_engine)):
    """
    Download a file, or list a directory when the path is one.

    Returns:
        - File: raw content with Content-Type, ETag, Last-Modified and
          Content-Length headers
        - Directory: listing of its children

    Raises:
        - 404: Container or path not found
    """
    try:
        file = engine.get_file(container, path)
    except TypeMismatchError:
        entries = engine.get_directory(container, path)
        return DirectoryListingResponse(
            container=container,
            path=path,
            contents=[to_entry_response(entry) for entry in entries],
            count=len(entries),
        )

    return Response(
        content=file.content,
        media_type=file.content_type,
        headers=file_headers(file),
    )


@router.delete("/{container}/{path:path}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_path(container: str, path: str, engine: StorageEngine = Depends(get_engine)):
    """
    Delete a file or an empty directory.

    Raises:
        - 400: Path is the container root
        - 404: Container or path not found
        - 409: Directory is not empty
    """
    engine.delete_path(container, path)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{container}/{path:path}", response_model=PatchMetadataResponse)
async def patch_metadata(
    container: str,
    path: str,
    body: PatchMetadataRequest,
    engine: StorageEngine = Depends(get_engine),
):
    """
    Merge user metadata into a file.

    Parameters:
        - metadata: String pairs merged into the file's existing metadata

    Raises:
        - 404: Container or path not found
        - 409: Path is a directory
    """
    file = engine.patch_file_metadata(container, path, body.metadata)

    return PatchMetadataResponse(
        path=file.path,
        properties=to_properties_response(file.properties),
        metadata=file.metadata,
    )
