"""Utility helper functions for the gateway."""

from dataclasses import asdict
from datetime import datetime
from email.utils import format_datetime
from typing import Dict, Optional

from gateway.schemas.common import PropertiesResponse
from gateway.schemas.containers import ContainerResponse
from gateway.schemas.paths import DirectoryEntryResponse
from common.types import DirectoryEntry
from storage_engine.nodes import File, Properties
from storage_engine.registry import ContainerSummary

USER_METADATA_HEADER_PREFIX = "x-ms-meta-"


def to_properties_response(properties: Properties) -> PropertiesResponse:
    return PropertiesResponse(**asdict(properties))


def to_container_response(summary: ContainerSummary) -> ContainerResponse:
    return ContainerResponse(
        id=summary.container_id,
        name=summary.name,
        properties=to_properties_response(summary.properties),
        file_count=summary.file_count,
        directory_count=summary.directory_count,
        total_bytes=summary.total_bytes,
    )


def to_entry_response(entry: DirectoryEntry) -> DirectoryEntryResponse:
    return DirectoryEntryResponse(
        name=entry.name,
        is_directory=entry.is_directory,
        properties=to_properties_response(entry.properties),
    )


def format_http_date(value: datetime) -> str:
    """
    Format a timestamp for the Last-Modified header.

    Args:
        value: Timezone-aware UTC datetime

    Returns:
        RFC 7231 date string (e.g., "Sun, 18 Oct 2026 10:00:00 GMT")
    """
    return format_datetime(value, usegmt=True)


def file_headers(file: File) -> Dict[str, str]:
    """
    Build the download response headers for a file.

    User metadata is exposed as ``x-ms-meta-<key>`` headers.
    """
    headers = {
        "ETag": f'"{file.properties.etag}"',
        "Last-Modified": format_http_date(file.properties.modified_time),
        "x-ms-resource-type": "file",
    }
    for key, value in file.metadata.items():
        headers[f"{USER_METADATA_HEADER_PREFIX}{key}"] = value
    return headers


def is_directory_request(directory: Optional[str], resource: Optional[str]) -> bool:
    """
    Decide whether a PUT targets a directory.

    ``?directory`` (any value, including empty) or ``?resource=directory``
    selects a directory; anything else is a file upload.
    """
    if directory is not None:
        return True
    return resource is not None and resource.lower() == "directory"
