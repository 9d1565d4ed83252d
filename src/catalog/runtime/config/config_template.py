"""Configuration template substitution utilities."""

import os
import re
from pathlib import Path

import yaml
from loguru import logger
from pydantic import ValidationError

from src.catalog.runtime.config.config_data import ConfigData

_PLACEHOLDER = re.compile(r"\$\{([^}]+)\}")


def substitute_env_vars(text: str) -> str:
    """
    Substitute environment variable placeholders in text.

    Supports formats:
    - ${VAR_NAME} - required variable (raises error if missing)
    - ${VAR_NAME:-default} - optional with default value
    - ${VAR_NAME:?error_message} - required with custom error message
    """

    def replacer(match: re.Match[str]) -> str:
        expr = match.group(1)

        if ":-" in expr:
            name, default = expr.split(":-", 1)
            return os.getenv(name, default)

        if ":?" in expr:
            name, message = expr.split(":?", 1)
            value = os.getenv(name)
            if value is None:
                raise ValueError(f"Required environment variable {name}: {message}")
            return value

        value = os.getenv(expr)
        if value is None:
            raise ValueError(f"Required environment variable {expr} not set")
        return value

    return _PLACEHOLDER.sub(replacer, text)


def apply_environment_overrides(env_mode: str) -> None:
    """Promote ``<ENV>_NAME`` variables to ``NAME`` for the active environment."""
    prefix = f"{env_mode.upper()}_"
    overrides = [(name, value) for name, value in os.environ.items() if name.startswith(prefix)]
    for name, value in overrides:
        os.environ[name[len(prefix):]] = value
        logger.debug("Set environment variable {} from {}", name[len(prefix):], name)


def load_templated_yaml(file_path: Path) -> ConfigData:
    """
    Load a YAML config file with environment variable substitution.

    Args:
        file_path: Path to the YAML file

    Returns:
        Validated ConfigData built from the ``config`` section

    Raises:
        ValueError: If required environment variables are missing or the file is invalid
        FileNotFoundError: If the YAML file doesn't exist
    """
    content = file_path.read_text()

    env_mode = os.getenv("APP_ENVIRONMENT", "development")
    logger.info("Loading configuration for environment: {}", env_mode)
    apply_environment_overrides(env_mode)

    try:
        loaded = yaml.safe_load(substitute_env_vars(content))
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing YAML: {e}") from e
    if not loaded:
        raise ValueError("Failed to parse YAML")

    try:
        return ConfigData(**(loaded.get("config") or {}))
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}") from e
