"""Configuration settings for the emulator gateway."""

import os
from common.constants import MAX_UPLOAD_BYTES


EMULATOR_HOST = os.environ.get("EMULATOR_HOST", "0.0.0.0")

EMULATOR_PORT = int(os.environ.get("EMULATOR_PORT", "10000"))

EMULATOR_MAX_UPLOAD_BYTES = int(os.environ.get("EMULATOR_MAX_UPLOAD_BYTES", str(MAX_UPLOAD_BYTES)))

EMULATOR_RELOAD = os.environ.get("EMULATOR_RELOAD", "false").lower() in ("1", "true", "yes")
