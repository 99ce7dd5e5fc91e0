"""
Utility modules for constants and error types.
"""

from .constants import (
    DEFAULT_JSON_DIR,
    ENV_CAMERA_URL,
    ENV_WEBHOOK_URL,
    STATUS_REPORT_INTERVAL,
)
from .errors import (
    ConfigValidationError,
    InvalidDetectionError,
    VisualAssistantError,
)

__all__ = [
    "DEFAULT_JSON_DIR",
    "ENV_CAMERA_URL",
    "ENV_WEBHOOK_URL",
    "STATUS_REPORT_INTERVAL",
    # Errors
    "ConfigValidationError",
    "InvalidDetectionError",
    "VisualAssistantError",
]
