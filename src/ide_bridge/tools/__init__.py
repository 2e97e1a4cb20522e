"""Tool invocation layer: schemas, validation, registry and dispatch.

This module provides:
- SchemaStore for the static tool declarations
- ToolRegistry and ToolInvoker for registration and dispatch
- The built-in tools (FileProblems, FileBuild, MavenCompile, DirectoryTree)
"""

import functools
from collections.abc import Callable
from typing import Any

from ide_bridge.config import BridgeConfig
from ide_bridge.tools.build_tools import BuildToolHandlers
from ide_bridge.tools.declarations import (
    BUILD_TOOL_ORDER,
    DIRECTORY_TREE,
    FILE_BUILD,
    FILE_PROBLEMS,
    MAVEN_COMPILE,
    load_builtin_declarations,
)
from ide_bridge.tools.directory_tree import directory_tree
from ide_bridge.tools.invoker import ToolInvoker
from ide_bridge.tools.registry import RegisteredTool, ToolRegistry
from ide_bridge.tools.schema_store import SchemaStore
from ide_bridge.tools.types import (
    ParamSpec,
    ToolFailure,
    ToolInvocation,
    ToolResult,
    ToolSchema,
    ToolSuccess,
)
from ide_bridge.tools.validation import normalize
from ide_bridge.tools.wsl import wsl_handler

__all__ = [
    # Core exports
    "SchemaStore",
    "ToolRegistry",
    "RegisteredTool",
    "ToolInvoker",
    "ParamSpec",
    "ToolSchema",
    "ToolInvocation",
    "ToolResult",
    "ToolSuccess",
    "ToolFailure",
    "normalize",
    # Built-in tools
    "BuildToolHandlers",
    "BUILD_TOOL_ORDER",
    "FILE_PROBLEMS",
    "FILE_BUILD",
    "MAVEN_COMPILE",
    "DIRECTORY_TREE",
    # Wiring
    "create_schema_store",
    "register_builtin_tools",
    "create_tool_layer",
]


def create_schema_store(config: BridgeConfig) -> SchemaStore:
    """Load the built-in declarations plus the configured override file.

    Raises:
        SchemaLoadError: If any declaration is malformed.
    """
    store = SchemaStore()
    store.load(load_builtin_declarations())
    if config.schema_override_path is not None:
        store.merge_file(config.schema_override_path)
    return store


def register_builtin_tools(
    registry: ToolRegistry,
    config: BridgeConfig,
    handlers: BuildToolHandlers | None = None,
) -> None:
    """Register the built-in tools with the registry.

    This function registers:
    - FileProblems: syntax check (fixed bound)
    - FileBuild: incremental build (bounded by its `timeout` argument)
    - MavenCompile: offline Maven build (bounded by its `timeout` argument)
    - DirectoryTree: read-only project browsing, auto-approved

    Args:
        registry: Tool registry to register tools with.
        config: Bridge configuration.
        handlers: Build-stage handlers; the default local wiring when None.
    """
    handlers = handlers or BuildToolHandlers.from_config(config)

    def wrap(handler: Callable[..., Any]) -> Callable[..., Any]:
        return wsl_handler(handler) if config.wsl_mode_enabled else handler

    registry.register(
        FILE_PROBLEMS,
        wrap(handlers.file_problems),
        timeout_seconds=config.syntax_check_timeout_seconds,
    )
    registry.register(
        FILE_BUILD,
        wrap(handlers.file_build),
        timeout_seconds=config.incremental_build_timeout_seconds,
        timeout_argument="timeout",
    )
    registry.register(
        MAVEN_COMPILE,
        wrap(handlers.maven_compile),
        timeout_seconds=config.offline_build_timeout_seconds,
        timeout_argument="timeout",
    )
    registry.register(
        DIRECTORY_TREE,
        wrap(functools.partial(directory_tree, handlers.project_root)),
        auto_approved=True,
    )


def create_tool_layer(
    config: BridgeConfig, handlers: BuildToolHandlers | None = None
) -> tuple[ToolRegistry, SchemaStore, ToolInvoker]:
    """Build the registry, schema store and invoker for one bridge process.

    Args:
        config: Bridge configuration.
        handlers: Build-stage handlers; the default local wiring when None.

    Returns:
        Tuple of (registry, schema store, invoker).
    """
    registry = ToolRegistry()
    register_builtin_tools(registry, config, handlers)
    store = create_schema_store(config)
    invoker = ToolInvoker(registry, store, timeout_grace_seconds=config.timeout_grace_seconds)
    return registry, store, invoker
