"""Environment variable file loader with priority-based loading.

Loads environment-specific .env files from the directory the bridge is
started in, so a project can carry its own bridge settings.
"""

from enum import Enum
from pathlib import Path

from dotenv import load_dotenv

from ide_bridge.telemetry import get_logger

log = get_logger(__name__)


class Environment(str, Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TEST = "test"


def get_environment() -> Environment:
    """Detect current environment from the BRIDGE_ENV environment variable.

    Returns:
        Environment enum value.

    Environment variable mapping:
    - "production" or "prod" → Environment.PRODUCTION
    - "test" → Environment.TEST
    - Default → Environment.DEVELOPMENT

    Note: This function uses os.getenv() directly because environment
    detection must happen before settings are loaded.
    """
    import os  # noqa: PLC0415

    bridge_env = os.getenv("BRIDGE_ENV", "").lower()

    if bridge_env in ("production", "prod"):
        return Environment.PRODUCTION
    elif bridge_env == "test":
        return Environment.TEST
    else:
        return Environment.DEVELOPMENT


def load_env_files(base_dir: Path | None = None) -> list[str]:
    """Load .env files in priority order.

    Priority order (highest to lowest):
    1. `.env.{environment}.local`
    2. `.env.{environment}`
    3. `.env.local`
    4. `.env`

    Args:
        base_dir: Directory holding the .env files. Defaults to the current
            working directory.

    Returns:
        Names of the files that were loaded, lowest priority first.
    """
    if base_dir is None:
        base_dir = Path.cwd()

    env_name = get_environment().value

    # override=False means files loaded first win, so walk highest priority first
    env_files = [
        base_dir / f".env.{env_name}.local",
        base_dir / f".env.{env_name}",
        base_dir / ".env.local",
        base_dir / ".env",
    ]

    loaded_files = []
    for env_file in env_files:
        if env_file.exists():
            # Explicit environment variables always win over .env files
            load_dotenv(env_file, override=False)
            loaded_files.append(env_file.name)

    loaded_files.reverse()
    if loaded_files:
        log.info("env_files_loaded", environment=env_name, files=loaded_files, base_dir=str(base_dir))
    else:
        log.debug("no_env_files_found", environment=env_name, base_dir=str(base_dir))
    return loaded_files
