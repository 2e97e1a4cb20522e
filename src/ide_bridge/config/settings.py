"""Bridge configuration settings.

This module provides the BridgeConfig class and settings singleton.
"""

from pathlib import Path
from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from ide_bridge.config.env_loader import Environment, get_environment, load_env_files
from ide_bridge.config.validators import (
    parse_string_list,
    resolve_path,
    validate_log_format,
    validate_log_level,
    validate_prompt_language,
)
from ide_bridge.telemetry import get_logger

log = get_logger(__name__)

# Env values for these stay raw strings so the validator can split them
StringList = Annotated[list[str], NoDecode]


class BridgeConfig(BaseSettings):
    """Unified bridge configuration.

    Loads configuration from environment variables, .env files, and defaults.
    The instance is passed explicitly into the components that need it.
    """

    model_config = SettingsConfigDict(
        env_prefix="BRIDGE_",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Environment
    environment: Environment = Field(
        default_factory=get_environment, description="Current environment"
    )
    version: str = Field(default="0.1.0", description="Bridge version")

    # Project
    project_root: Path = Field(default_factory=Path.cwd, description="Project root directory")
    prompt_language: str = Field(default="en", description="Agent instruction language (en or zh)")
    wsl_mode_enabled: bool = Field(
        default=False, description="Translate Windows paths to WSL paths at the tool boundary"
    )

    # Telemetry
    log_dir: Path = Field(default=Path(".ide-bridge/logs"), description="Log directory path")
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="json", description="Log format (json or console)")

    # Source tree
    source_roots: StringList = Field(
        default_factory=lambda: [
            "src/main/java",
            "src/main/kotlin",
            "src",
            "app/src/main/java",
            "app/src/main/kotlin",
            "src/test/java",
            "src/test/kotlin",
        ],
        description="Conventional source roots, relative to the project root",
    )
    pruned_directories: StringList = Field(
        default_factory=lambda: ["build", "out", "target", ".git", "node_modules"],
        description="Directory names never descended into",
    )
    source_extensions: StringList = Field(
        default_factory=lambda: ["java", "kt", "kts"],
        description="File extensions treated as source files",
    )
    output_directories: StringList = Field(
        default_factory=lambda: ["out"],
        description="Build output directories deleted by forceRebuild",
    )

    # Stage timeouts
    syntax_check_timeout_seconds: float = Field(default=30.0, gt=0, description="SyntaxCheck bound")
    incremental_build_timeout_seconds: int = Field(
        default=120, ge=1, description="Default IncrementalBuild bound"
    )
    offline_build_timeout_seconds: int = Field(
        default=300, ge=30, description="Default OfflineFullBuild bound"
    )
    refresh_timeout_seconds: float = Field(
        default=5.0, gt=0, description="Upper bound for a best-effort file-system refresh"
    )
    analyzer_ready_poll_seconds: float = Field(
        default=0.2, gt=0, description="Polling interval while the analyzer is not ready"
    )
    timeout_grace_seconds: float = Field(
        default=10.0, ge=0, description="Extra time granted on top of a tool's own timeout argument"
    )

    # Toolchain
    maven_home_env_var: str = Field(
        default="MAVEN_HOME", description="Environment variable pointing at the Maven home"
    )
    bundled_maven_home: Path | None = Field(
        default=None, description="IDE-bundled Maven home, searched last"
    )
    incremental_compile_command: StringList = Field(
        default_factory=list,
        description=(
            "Custom incremental compile command ({files} and {scope} are expanded); "
            "empty runs an offline Maven compile"
        ),
    )

    # Schemas
    schema_override_path: Path | None = Field(
        default=None, description="YAML/JSON file overlaying the built-in tool schemas"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        return validate_log_level(v)

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log format."""
        return validate_log_format(v)

    @field_validator("prompt_language")
    @classmethod
    def validate_prompt_language(cls, v: str) -> str:
        """Validate prompt language."""
        return validate_prompt_language(v)

    @field_validator(
        "source_roots",
        "pruned_directories",
        "source_extensions",
        "output_directories",
        "incremental_compile_command",
        mode="before",
    )
    @classmethod
    def parse_lists(cls, v: str | list[str]) -> list[str]:
        """Accept JSON arrays or comma-separated strings for list settings."""
        return parse_string_list(v)

    @field_validator("project_root", "log_dir", mode="before")
    @classmethod
    def resolve_paths(cls, v: Path | str) -> Path:
        """Resolve relative paths to absolute paths."""
        return resolve_path(v)


_settings: BridgeConfig | None = None


def load_bridge_config(**overrides: object) -> BridgeConfig:
    """Load and validate bridge configuration.

    This function:
    1. Loads .env files in priority order (via env_loader)
    2. Creates BridgeConfig instance (reads from environment variables)
    3. Validates all values using Pydantic

    Args:
        **overrides: Field values that take precedence over the environment.

    Returns:
        Validated BridgeConfig instance.

    Raises:
        ValidationError: If configuration validation fails.
    """
    log.info("loading_bridge_config", environment=get_environment().value)

    load_env_files()

    try:
        config = BridgeConfig(**overrides)
        log.info(
            "bridge_config_loaded",
            environment=config.environment.value,
            project_root=str(config.project_root),
            log_level=config.log_level,
            wsl_mode_enabled=config.wsl_mode_enabled,
        )
        return config
    except Exception as e:
        log.error("bridge_config_load_failed", error=str(e), error_type=type(e).__name__)
        raise


def get_settings() -> BridgeConfig:
    """Get the bridge settings singleton.

    Returns:
        BridgeConfig instance (singleton pattern).
    """
    global _settings
    if _settings is None:
        _settings = load_bridge_config()
    return _settings
