"""
Configuration loading - YAML files and environment overrides.
"""

import logging
import os
from pathlib import Path

import yaml

from ..utils.constants import ENV_CAMERA_URL, ENV_WEBHOOK_URL
from ..utils.errors import ConfigValidationError
from .schemas import Config
from .validator import validate_config_full

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = "config.yaml"


def find_config_file(config_path: str | None = None) -> Path | None:
    """
    Find config file in standard locations.

    Search order:
    1. Specified path (if provided)
    2. Current directory (config.yaml)
    3. ~/.config/visual-assistant/config.yaml

    Args:
        config_path: User-specified config path

    Returns:
        Path to config file, or None if no file exists in the standard
        locations (built-in defaults are used)

    Raises:
        ConfigValidationError: If an explicitly specified file does not exist
    """
    if config_path:
        specified = Path(config_path)
        if not specified.exists():
            raise ConfigValidationError(f"Specified config file not found: {config_path}")
        return specified

    search_paths = [
        Path.cwd() / DEFAULT_CONFIG_NAME,
        Path.home() / ".config" / "visual-assistant" / DEFAULT_CONFIG_NAME,
    ]
    for path in search_paths:
        if path.exists():
            logger.info(f"Using config: {path}")
            return path

    logger.info("No config file found - using built-in defaults")
    return None


def read_config_file(config_file: Path) -> dict:
    """
    Read a YAML config file.

    Supports pointer files: if the file only contains ``use: other.yaml``,
    that file (relative to the pointer) is loaded instead.

    Raises:
        ConfigValidationError: On unreadable or invalid YAML
    """
    try:
        with open(config_file, encoding="utf-8") as f:
            config = yaml.safe_load(f)

        if isinstance(config, dict) and list(config.keys()) == ["use"]:
            pointer_path = Path(config_file).parent / config["use"]
            logger.info(f"Config pointer: {config_file} -> {pointer_path}")
            with open(pointer_path, encoding="utf-8") as f:
                config = yaml.safe_load(f)

    except yaml.YAMLError as e:
        raise ConfigValidationError(f"Invalid YAML in {config_file}: {e}") from e
    except OSError as e:
        raise ConfigValidationError(f"Cannot read {config_file}: {e}") from e

    return config or {}


def load_config_with_env(config: dict) -> dict:
    """
    Apply environment variable overrides to config.

    Args:
        config: Base configuration dictionary

    Returns:
        Configuration with environment variables applied
    """
    if ENV_CAMERA_URL in os.environ:
        logger.info(f"Using camera URL from environment: {ENV_CAMERA_URL}")
        config.setdefault("source", {})["camera_url"] = os.environ[ENV_CAMERA_URL]

    if ENV_WEBHOOK_URL in os.environ:
        logger.info(f"Using webhook URL from environment: {ENV_WEBHOOK_URL}")
        config.setdefault("output", {})["webhook_url"] = os.environ[ENV_WEBHOOK_URL]

    return config


def load_config(config_path: str | None = None) -> Config:
    """
    Find, read, override and validate the configuration.

    Args:
        config_path: Explicit config file, or None to search standard locations

    Returns:
        Validated Config

    Raises:
        ConfigValidationError: If the file is missing, unreadable or invalid
    """
    config_file = find_config_file(config_path)
    raw = read_config_file(config_file) if config_file else {}
    raw = load_config_with_env(raw)

    result = validate_config_full(raw)
    if not result.valid:
        raise ConfigValidationError(
            f"Configuration has {len(result.errors)} error(s)", result.errors
        )
    for warning in result.warnings:
        logger.warning(warning)

    logger.info("Configuration validated")
    return result.config
