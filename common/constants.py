"""Project-wide constants (service identity, content defaults)."""

SERVICE_NAME: str = "ADLS Gen2 Emulator"

DEFAULT_CONTENT_TYPE: str = "application/octet-stream"

PATH_SEPARATOR: str = "/"

MAX_UPLOAD_BYTES: int = 100 * 1024 * 1024  # 100 MiB default request body limit
