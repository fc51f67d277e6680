"""Container operation API routes."""

from fastapi import APIRouter, Depends, Response, status

from gateway.dependencies import get_engine
from gateway.schemas.common import ErrorResponse
from gateway.schemas.containers import CreateContainerResponse, ListContainersResponse
from gateway.schemas.paths import DirectoryListingResponse
from gateway.utils import to_container_response, to_entry_response
from storage_engine.engine import StorageEngine

router = APIRouter(
    tags=["Containers"],
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
        status.HTTP_409_CONFLICT: {"model": ErrorResponse},
    },
)


@router.get("/", response_model=ListContainersResponse)
async def list_containers(engine: StorageEngine = Depends(get_engine)):
    """
    List all containers.

    Returns:
        - containers: Container summaries (id, name, properties, content counts) in creation order
        - count: Number of containers
    """
    summaries = engine.list_container_summaries()

    return ListContainersResponse(
        containers=[to_container_response(summary) for summary in summaries],
        count=len(summaries),
    )


@router.put("/{container}", response_model=CreateContainerResponse, status_code=status.HTTP_201_CREATED)
async def create_container(container: str, engine: StorageEngine = Depends(get_engine)):
    """
    Create an empty container.

    Raises:
        - 400: Invalid container name
        - 409: Container already exists
    """
    new_container = engine.create_container(container)

    return CreateContainerResponse(
        container=to_container_response(engine.summarize_container(new_container)),
        message=f"Container '{container}' created successfully",
    )


@router.get("/{container}", response_model=DirectoryListingResponse)
async def list_container_root(container: str, engine: StorageEngine = Depends(get_engine)):
    """
    List the root directory of a container.

    Raises:
        - 404: Container not found
    """
    entries = engine.get_directory(container, "")

    return DirectoryListingResponse(
        container=container,
        path="",
        contents=[to_entry_response(entry) for entry in entries],
        count=len(entries),
    )


@router.delete("/{container}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_container(container: str, engine: StorageEngine = Depends(get_engine)):
    """
    Delete a container and everything in it.

    Raises:
        - 404: Container not found
    """
    engine.delete_container(container)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
