"""WebHDFS compatibility placeholder routes."""

from fastapi import APIRouter, status

from gateway.schemas.common import ErrorResponse

router = APIRouter(
    prefix="/webhdfs/v1",
    tags=["WebHDFS"],
    responses={status.HTTP_501_NOT_IMPLEMENTED: {"model": ErrorResponse}},
)


@router.api_route("/{path:path}", methods=["GET", "PUT", "POST", "DELETE"])
async def webhdfs_placeholder(path: str):
    """
    Reserve the WebHDFS namespace.

    Raises:
        - 501: Always; use the blob endpoints instead
    """
    raise NotImplementedError("WebHDFS API not yet implemented, use the blob API endpoints instead")
