"""Tool invocation with validation, timeouts and error classification.

`ToolInvoker` is the only place where exceptions are turned into result
envelopes; nothing raised by a handler crosses the tool boundary.
"""

import asyncio
import functools
import inspect
import re
import time
from collections.abc import Mapping
from typing import Any

import orjson

from ide_bridge.errors import ArgumentValidationError, ErrorKind, ToolError, ToolNotFoundError
from ide_bridge.telemetry import (
    TOOL_CALL_COMPLETED,
    TOOL_CALL_EXTRA_ARGUMENTS_IGNORED,
    TOOL_CALL_FAILED,
    TOOL_CALL_REJECTED,
    TOOL_CALL_STARTED,
    TOOL_CALL_TIMEOUT,
    TraceContext,
    get_logger,
)
from ide_bridge.tools.registry import RegisteredTool, ToolRegistry
from ide_bridge.tools.schema_store import SchemaStore
from ide_bridge.tools.types import ToolFailure, ToolInvocation, ToolResult, ToolSuccess
from ide_bridge.tools.validation import normalize

log = get_logger(__name__)

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def to_snake_case(name: str) -> str:
    """Convert a camelCase argument name to snake_case (`maxProblems` -> `max_problems`)."""
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def bind_arguments(tool: RegisteredTool, arguments: Mapping[str, Any]) -> dict[str, Any]:
    """Map normalized arguments onto the handler's keyword parameters.

    Names are converted to snake_case. Handlers that accept `**kwargs`
    receive every argument; others receive only the names they declare.
    """
    snake_arguments = {to_snake_case(name): value for name, value in arguments.items()}
    parameters = inspect.signature(tool.handler).parameters.values()
    if any(param.kind is inspect.Parameter.VAR_KEYWORD for param in parameters):
        return snake_arguments

    accepted = {param.name for param in parameters}
    dropped = sorted(set(snake_arguments) - accepted)
    if dropped:
        log.debug(TOOL_CALL_EXTRA_ARGUMENTS_IGNORED, tool_name=tool.name, arguments=dropped)
    return {name: value for name, value in snake_arguments.items() if name in accepted}


def _render_payload(result: Any) -> str:
    if isinstance(result, str):
        return result
    return orjson.dumps(result, option=orjson.OPT_INDENT_2 | orjson.OPT_NON_STR_KEYS).decode()


class ToolInvoker:
    """Dispatches tool calls: schema -> normalize -> handler -> envelope."""

    def __init__(
        self,
        registry: ToolRegistry,
        schemas: SchemaStore,
        timeout_grace_seconds: float = 10.0,
    ) -> None:
        """Initialize the invoker.

        Args:
            registry: Registered handlers.
            schemas: Tool schemas used for normalization.
            timeout_grace_seconds: Added to a caller-chosen timeout argument.
        """
        self.registry = registry
        self.schemas = schemas
        self.timeout_grace_seconds = timeout_grace_seconds

    def effective_timeout(
        self, tool: RegisteredTool, arguments: Mapping[str, Any], timeout_ms: float | None
    ) -> float:
        """Seconds a call may run.

        Precedence: explicit `timeout_ms`, then the tool's timeout argument
        plus the grace period, then the registered default.
        """
        if timeout_ms is not None:
            return timeout_ms / 1000
        if tool.timeout_argument is not None:
            value = arguments.get(tool.timeout_argument)
            if isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0:
                return float(value) + self.timeout_grace_seconds
        return tool.timeout_seconds

    async def invoke(
        self,
        tool_name: str,
        raw_args: Mapping[str, Any] | None = None,
        timeout_ms: float | None = None,
        trace_ctx: TraceContext | None = None,
    ) -> ToolResult:
        """Invoke a tool and return its result envelope.

        Args:
            tool_name: Name of the tool.
            raw_args: Arguments as sent by the caller.
            timeout_ms: Overrides the tool's time bound when given.
            trace_ctx: Trace to log under; a new one is started when None.

        Returns:
            ToolSuccess, or ToolFailure classified by ErrorKind. Never raises
            for handler errors.
        """
        trace_ctx = trace_ctx or TraceContext.new_trace()
        invocation = ToolInvocation(
            tool_name=tool_name,
            raw_arguments=dict(raw_args or {}),
            timeout_ms=timeout_ms,
            trace_id=trace_ctx.trace_id,
        )
        start_time = time.perf_counter()

        # 1. Normalize against the schema
        schema = self.schemas.get_schema(tool_name)
        try:
            invocation.normalized_arguments = normalize(schema, invocation.raw_arguments)
        except ArgumentValidationError as e:
            log.warning(
                TOOL_CALL_REJECTED,
                tool_name=tool_name,
                param=e.param,
                reason=e.reason,
                trace_id=trace_ctx.trace_id,
            )
            return ToolFailure(tool_name=tool_name, kind=e.kind, message=e.message)

        # 2. Resolve the handler
        tool = self.registry.get_tool(tool_name)
        if tool is None:
            available_tools = self.registry.list_tool_names()
            error = ToolNotFoundError(f"Tool '{tool_name}' not found. Available: {available_tools}")
            log.warning(
                TOOL_CALL_FAILED,
                tool_name=tool_name,
                kind=error.kind.value,
                error=error.message,
                trace_id=trace_ctx.trace_id,
            )
            return ToolFailure(tool_name=tool_name, kind=error.kind, message=error.message)

        # 3. Execute under the time bound
        arguments = bind_arguments(tool, invocation.normalized_arguments)
        timeout_seconds = self.effective_timeout(tool, arguments, timeout_ms)
        _, span_id = trace_ctx.new_span()
        log.info(
            TOOL_CALL_STARTED,
            tool_name=tool_name,
            arguments=invocation.normalized_arguments,
            timeout_seconds=timeout_seconds,
            trace_id=trace_ctx.trace_id,
            span_id=span_id,
        )

        try:
            result = await asyncio.wait_for(self._call(tool, arguments), timeout=timeout_seconds)
            payload = _render_payload(result)
        except asyncio.TimeoutError:
            latency_ms = (time.perf_counter() - start_time) * 1000
            log.warning(
                TOOL_CALL_TIMEOUT,
                tool_name=tool_name,
                timeout_seconds=timeout_seconds,
                latency_ms=latency_ms,
                trace_id=trace_ctx.trace_id,
                span_id=span_id,
            )
            return ToolFailure(
                tool_name=tool_name,
                kind=ErrorKind.TIMEOUT,
                message=f"Tool '{tool_name}' timed out after {timeout_seconds:g}s",
                latency_ms=latency_ms,
            )
        except ToolError as e:
            latency_ms = (time.perf_counter() - start_time) * 1000
            log.warning(
                TOOL_CALL_FAILED,
                tool_name=tool_name,
                kind=e.kind.value,
                error=e.message,
                latency_ms=latency_ms,
                trace_id=trace_ctx.trace_id,
                span_id=span_id,
            )
            return ToolFailure(
                tool_name=tool_name, kind=e.kind, message=e.message, latency_ms=latency_ms
            )
        except Exception as e:
            latency_ms = (time.perf_counter() - start_time) * 1000
            log.error(
                TOOL_CALL_FAILED,
                tool_name=tool_name,
                kind=ErrorKind.INTERNAL.value,
                error=str(e),
                error_type=type(e).__name__,
                latency_ms=latency_ms,
                trace_id=trace_ctx.trace_id,
                span_id=span_id,
                exc_info=True,
            )
            return ToolFailure(
                tool_name=tool_name,
                kind=ErrorKind.INTERNAL,
                message=f"Internal error in tool '{tool_name}' ({type(e).__name__})",
                latency_ms=latency_ms,
            )

        latency_ms = (time.perf_counter() - start_time) * 1000
        log.info(
            TOOL_CALL_COMPLETED,
            tool_name=tool_name,
            success=True,
            latency_ms=latency_ms,
            trace_id=trace_ctx.trace_id,
            span_id=span_id,
        )
        return ToolSuccess(tool_name=tool_name, payload=payload, latency_ms=latency_ms)

    async def _call(self, tool: RegisteredTool, arguments: dict[str, Any]) -> Any:
        if inspect.iscoroutinefunction(tool.handler):
            return await tool.handler(**arguments)
        # Sync handler - run in thread pool to avoid blocking
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, functools.partial(tool.handler, **arguments))
