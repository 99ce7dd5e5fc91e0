"""
Exception types raised by the visual assistant.
"""


class VisualAssistantError(Exception):
    """Base class for all visual assistant errors."""


class InvalidDetectionError(VisualAssistantError, ValueError):
    """A detection from the vision pipeline is malformed or incomplete."""


class ConfigValidationError(VisualAssistantError):
    """Configuration failed to load or validate."""

    def __init__(self, message: str, errors: list[str] | None = None):
        super().__init__(message)
        self.errors = errors or []
