"""Custom Pydantic validators for configuration.

This module provides validators for field normalization and custom type
conversions used by `BridgeConfig`.
"""

import json
from pathlib import Path


def validate_log_level(value: str) -> str:
    """Validate log level is one of the standard levels.

    Args:
        value: Log level string.

    Returns:
        Validated log level.

    Raises:
        ValueError: If log level is not valid.
    """
    valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
    if value.upper() not in valid_levels:
        raise ValueError(f"log_level must be one of {valid_levels}, got {value}")
    return value.upper()


def validate_log_format(value: str) -> str:
    """Validate log format is 'json' or 'console'.

    Args:
        value: Log format string.

    Returns:
        Validated log format.

    Raises:
        ValueError: If log format is not valid.
    """
    valid_formats = {"json", "console"}
    if value.lower() not in valid_formats:
        raise ValueError(f"log_format must be one of {valid_formats}, got {value}")
    return value.lower()


def validate_prompt_language(value: str) -> str:
    """Validate the agent instruction language ('en' or 'zh')."""
    valid_languages = {"en", "zh"}
    if value.lower() not in valid_languages:
        raise ValueError(f"prompt_language must be one of {valid_languages}, got {value}")
    return value.lower()


def parse_string_list(value: str | list[str] | tuple[str, ...]) -> list[str]:
    """Parse a list setting from a list, a JSON array string, or a comma-separated string.

    Handles:
    - JSON array: '["src/main/java", "src"]'
    - Comma-separated: "src/main/java, src"
    - Already a list: ["src/main/java", "src"]

    Raises:
        ValueError: If the value has an unsupported type.
    """
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value]

    if isinstance(value, str):
        stripped = value.strip()
        if stripped.startswith("["):
            try:
                parsed = json.loads(stripped)
            except json.JSONDecodeError:
                parsed = None
            if isinstance(parsed, list):
                return [str(item) for item in parsed]
        return [part.strip() for part in stripped.split(",") if part.strip()]

    raise ValueError(f"Invalid list setting type: {type(value)}")


def resolve_path(value: Path | str) -> Path:
    """Resolve relative paths to absolute paths.

    Relative paths are resolved against the current working directory, which
    is the project the bridge was started for.

    Args:
        value: Path value (can be string or Path).

    Returns:
        Resolved Path object.
    """
    path = Path(value) if isinstance(value, str) else value
    return path.expanduser().resolve()
