"""Unified configuration management for the bridge.

Configuration comes from environment variables (prefix `BRIDGE_`), .env
files in the working directory, and defaults. Components receive the
`BridgeConfig` instance explicitly; only the composition root calls
`get_settings()`.
"""

from ide_bridge.config.env_loader import Environment, get_environment, load_env_files
from ide_bridge.config.loader import ConfigLoadError, load_yaml_file
from ide_bridge.config.settings import BridgeConfig, get_settings, load_bridge_config

__all__ = [
    "BridgeConfig",
    "get_settings",
    "load_bridge_config",
    "Environment",
    "get_environment",
    "load_env_files",
    "load_yaml_file",
    "ConfigLoadError",
]
