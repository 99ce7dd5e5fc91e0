"""
Configuration Validator - Validates config syntax and semantic correctness.

Wraps the Pydantic schema so that every problem is reported at once, in the
dotted-path form users see in the YAML file.
"""

import logging
import sys
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from .schemas import Config

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    """Result of config validation."""

    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    derived: dict[str, Any] = field(default_factory=dict)
    config: Config | None = None


def validate_config_full(config: dict | None) -> ValidationResult:
    """
    Comprehensive config validation with detailed error messages.

    Args:
        config: Configuration dictionary to validate (None is treated as empty)

    Returns:
        ValidationResult with errors, warnings, the parsed Config and derived settings.
    """
    result = ValidationResult(valid=True)

    if config is None:
        config = {}
    if not isinstance(config, dict):
        result.valid = False
        result.errors.append("Configuration must be a mapping at the top level")
        return result

    try:
        parsed = Config.model_validate(config)
    except ValidationError as e:
        result.valid = False
        for error in e.errors():
            location = ".".join(str(part) for part in error["loc"]) or "config"
            result.errors.append(f"{location}: {error['msg']}")
        return result

    result.config = parsed
    _collect_warnings(parsed, result)
    result.derived["sinks"] = _derive_sinks(parsed)
    result.derived["viewport"] = (parsed.viewport.width, parsed.viewport.height)
    return result


def _collect_warnings(config: Config, result: ValidationResult) -> None:
    """Settings that are legal but probably not intended."""
    if config.approach.cooldown_seconds >= config.tracking.expiry_seconds * 10:
        result.warnings.append(
            "approach.cooldown_seconds is much longer than tracking.expiry_seconds; "
            "most tracks will expire before they can alert twice"
        )
    if config.source.camera_url is None:
        result.warnings.append("source.camera_url not set (live mode unavailable)")
    if config.tracking.min_confidence > 0.9:
        result.warnings.append(
            f"tracking.min_confidence={config.tracking.min_confidence} drops most detections"
        )


def _derive_sinks(config: Config) -> list[str]:
    """Names of the output sinks this config enables."""
    sinks = ["speech"]
    if config.output.json_log:
        sinks.append("json_log")
    if config.output.webhook_url:
        sinks.append("webhook")
    return sinks


# ANSI color codes for terminal output
class Colors:
    GREEN = "\033[92m"
    RED = "\033[91m"
    YELLOW = "\033[93m"
    CYAN = "\033[96m"
    BOLD = "\033[1m"
    RESET = "\033[0m"

    @classmethod
    def disable(cls):
        """Disable colors for non-TTY output."""
        cls.GREEN = cls.RED = cls.YELLOW = cls.CYAN = cls.BOLD = cls.RESET = ""


# Disable colors if not a TTY
if not sys.stdout.isatty():
    Colors.disable()


def print_validation_result(result: ValidationResult) -> None:
    """Print validation result in Terraform-like format."""
    print()
    print(f"{Colors.BOLD}Configuration Validation{Colors.RESET}")
    print("=" * 60)

    if result.valid:
        print(f"\n{Colors.GREEN}✓ Configuration is valid{Colors.RESET}")
    else:
        print(f"\n{Colors.RED}✗ Configuration has errors{Colors.RESET}")

    if result.errors:
        print(f"\n{Colors.RED}Errors:{Colors.RESET}")
        for error in result.errors:
            print(f"  {Colors.RED}✗{Colors.RESET} {error}")

    if result.warnings:
        print(f"\n{Colors.YELLOW}Warnings:{Colors.RESET}")
        for warning in result.warnings:
            print(f"  {Colors.YELLOW}!{Colors.RESET} {warning}")

    if result.valid and result.derived:
        print(f"\n{Colors.CYAN}Derived Configuration:{Colors.RESET}")
        width, height = result.derived.get("viewport", (0, 0))
        print(f"  Viewport: {width:g} x {height:g}")
        sinks = result.derived.get("sinks", [])
        if sinks:
            print(f"  Active sinks: {', '.join(sinks)}")

    print()
