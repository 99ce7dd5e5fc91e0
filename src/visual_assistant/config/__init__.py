"""
Configuration loading, validation, and resolution.

- load_config: Find, read, apply env overrides and validate
- validate_config_full: Comprehensive validation with errors/warnings
- build_tracker_settings: Convert a validated Config into TrackerSettings

Pydantic schemas available for type-safe validation:
- Config: Complete configuration schema
- validate_config_pydantic: Validate and parse config to Pydantic model
"""

from ..utils.errors import ConfigValidationError
from .loader import (
    find_config_file,
    load_config,
    load_config_with_env,
    read_config_file,
)
from .resolver import build_tracker_settings
from .schemas import (
    ApproachConfig,
    Config,
    MotionConfig,
    OutputConfig,
    SignalConfig,
    SourceConfig,
    SummaryConfig,
    TrackingConfig,
    ViewportConfig,
    validate_config_pydantic,
)
from .validator import (
    ValidationResult,
    print_validation_result,
    validate_config_full,
)

__all__ = [
    # Pydantic validation
    "ApproachConfig",
    "Config",
    "MotionConfig",
    "OutputConfig",
    "SignalConfig",
    "SourceConfig",
    "SummaryConfig",
    "TrackingConfig",
    "ViewportConfig",
    "validate_config_pydantic",
    # Exception
    "ConfigValidationError",
    "ValidationResult",
    # Loading
    "build_tracker_settings",
    "find_config_file",
    "load_config",
    "load_config_with_env",
    "read_config_file",
    # Display
    "print_validation_result",
    # Validation
    "validate_config_full",
]
