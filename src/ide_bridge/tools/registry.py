"""Tool registry for handler registration and lookup.

This module provides the ToolRegistry class that maps tool names to their
handlers together with per-tool timeout policy and the auto-approved flag.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from ide_bridge.telemetry import TOOL_REGISTERED, get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class RegisteredTool:
    """A handler and the policy it runs under.

    Attributes:
        name: Tool name.
        handler: Async or sync callable taking snake_case keyword arguments
            and returning the payload.
        auto_approved: Whether callers may run it without asking the user.
        timeout_seconds: Default time bound for one call.
        timeout_argument: Snake_case argument holding a caller-chosen timeout
            in seconds. When present it replaces `timeout_seconds`, plus a grace
            period so the handler's own timeout fires first.
    """

    name: str
    handler: Callable[..., Any]
    auto_approved: bool = False
    timeout_seconds: float = 30.0
    timeout_argument: str | None = None


class ToolRegistry:
    """Central registry of tool handlers."""

    def __init__(self) -> None:
        """Initialize empty tool registry."""
        self._tools: dict[str, RegisteredTool] = {}
        log.debug("tool_registry_initialized")

    def register(
        self,
        name: str,
        handler: Callable[..., Any],
        *,
        auto_approved: bool = False,
        timeout_seconds: float = 30.0,
        timeout_argument: str | None = None,
    ) -> RegisteredTool:
        """Register a handler under a tool name.

        Args:
            name: Tool name (must match its schema name).
            handler: Callable that executes the tool.
            auto_approved: Mark the tool as safe to run without approval.
            timeout_seconds: Default time bound.
            timeout_argument: Argument that overrides the time bound per call.

        Returns:
            The registered tool entry.

        Raises:
            ValueError: If the name is already registered or the timeout is not positive.
        """
        if name in self._tools:
            raise ValueError(f"Tool '{name}' is already registered")
        if timeout_seconds <= 0:
            raise ValueError(f"Tool '{name}' timeout must be positive, got {timeout_seconds}")

        tool = RegisteredTool(
            name=name,
            handler=handler,
            auto_approved=auto_approved,
            timeout_seconds=timeout_seconds,
            timeout_argument=timeout_argument,
        )
        self._tools[name] = tool
        log.debug(
            TOOL_REGISTERED,
            tool_name=name,
            auto_approved=auto_approved,
            timeout_seconds=timeout_seconds,
        )
        return tool

    def get_tool(self, name: str) -> RegisteredTool | None:
        """Retrieve a registered tool.

        Args:
            name: Tool name to retrieve.

        Returns:
            RegisteredTool if found, None otherwise.
        """
        return self._tools.get(name)

    def list_tools(self) -> list[RegisteredTool]:
        return list(self._tools.values())

    def list_tool_names(self) -> list[str]:
        """List names of all registered tools, in registration order."""
        return list(self._tools.keys())

    def auto_approved_tools(self) -> list[str]:
        """Names of tools that run without user approval."""
        return [tool.name for tool in self._tools.values() if tool.auto_approved]

    def is_auto_approved(self, name: str) -> bool:
        tool = self._tools.get(name)
        return tool is not None and tool.auto_approved

    def __contains__(self, name: object) -> bool:
        return name in self._tools
