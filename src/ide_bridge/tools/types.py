"""Type definitions for the tool invocation layer.

This module defines the Pydantic models for tool schemas, parameters,
invocations and the result envelope returned across the tool boundary.
"""

from datetime import datetime, timezone
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ide_bridge.errors import ErrorKind

ParamType = Literal["string", "integer", "number", "boolean", "array", "object"]

_JSON_TYPE_NAMES = {
    bool: "boolean",
    int: "integer",
    float: "number",
    str: "string",
    list: "array",
    dict: "object",
}


def json_type_name(value: Any) -> str:
    """Name a Python value's JSON type (e.g. 'integer', 'array')."""
    if value is None:
        return "null"
    for python_type, name in _JSON_TYPE_NAMES.items():
        if isinstance(value, python_type):
            return name
    return type(value).__name__


def matches_type(param_type: ParamType, value: Any) -> bool:
    """Whether `value` already has the declared JSON type.

    Integers count as numbers; booleans never count as numbers.
    """
    if param_type == "boolean":
        return isinstance(value, bool)
    if isinstance(value, bool):
        return False
    if param_type == "integer":
        return isinstance(value, int)
    if param_type == "number":
        return isinstance(value, (int, float))
    if param_type == "string":
        return isinstance(value, str)
    if param_type == "array":
        return isinstance(value, list)
    return isinstance(value, dict)


class ParamSpec(BaseModel):
    """Declared shape of one tool parameter."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    type: ParamType = Field(..., description="JSON type of the parameter")
    description: str = Field("", description="Parameter description for the agent")
    default: Any = Field(None, description="Value used when the argument is absent")
    enum: list[Any] | None = Field(None, description="Allowed values")
    minimum: int | float | None = Field(None, description="Inclusive lower bound")
    maximum: int | float | None = Field(None, description="Inclusive upper bound")
    items: "ParamSpec | None" = Field(None, description="Element spec for arrays")

    @model_validator(mode="after")
    def check_default_type(self) -> "ParamSpec":
        """Reject a default whose type does not match the declared type."""
        if self.default is not None and not matches_type(self.type, self.default):
            raise ValueError(
                f"default {self.default!r} is {json_type_name(self.default)}, expected {self.type}"
            )
        if self.items is not None and self.type != "array":
            raise ValueError("'items' is only valid for array parameters")
        return self

    @property
    def has_default(self) -> bool:
        return self.default is not None

    def to_json_schema(self) -> dict[str, Any]:
        schema: dict[str, Any] = {"type": self.type}
        if self.description:
            schema["description"] = self.description
        if self.items is not None:
            schema["items"] = self.items.to_json_schema()
        for key in ("default", "enum", "minimum", "maximum"):
            value = getattr(self, key)
            if value is not None:
                schema[key] = value
        return schema


class ToolSchema(BaseModel):
    """Declared input schema of one tool."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Unique tool name")
    description: str = Field("", description="Tool description for the agent")
    parameters: dict[str, ParamSpec] = Field(default_factory=dict, description="Parameters by name")
    required: frozenset[str] = Field(default_factory=frozenset, description="Required parameter names")

    @model_validator(mode="after")
    def check_required_declared(self) -> "ToolSchema":
        undeclared = sorted(self.required - self.parameters.keys())
        if undeclared:
            raise ValueError(f"required parameters not declared: {undeclared}")
        return self

    @classmethod
    def from_declaration(cls, name: str, declaration: dict[str, Any]) -> "ToolSchema":
        """Build a schema from a JSON-Schema-style object declaration.

        Args:
            name: Tool name.
            declaration: `{type: object, description, properties, required}`.

        Returns:
            Validated ToolSchema.
        """
        return cls(
            name=name,
            description=declaration.get("description", ""),
            parameters=declaration.get("properties") or {},
            required=frozenset(declaration.get("required") or ()),
        )

    def is_empty(self) -> bool:
        """True for the placeholder schema of an unknown tool."""
        return not self.parameters and not self.description

    def to_json_schema(self) -> dict[str, Any]:
        """Render the MCP `inputSchema` object."""
        return {
            "type": "object",
            "properties": {name: spec.to_json_schema() for name, spec in self.parameters.items()},
            "required": sorted(self.required),
        }


class ToolInvocation(BaseModel):
    """One in-flight tool call. Request-scoped, never persisted."""

    tool_name: str
    raw_arguments: dict[str, Any] = Field(default_factory=dict)
    normalized_arguments: dict[str, Any] | None = None
    started_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    timeout_ms: float | None = None
    trace_id: str | None = None


class ToolSuccess(BaseModel):
    """Successful tool result carrying a (typically Markdown) payload."""

    model_config = ConfigDict(frozen=True)

    ok: Literal[True] = True
    tool_name: str = Field(..., description="Name of the executed tool")
    payload: str = Field(..., description="Tool output")
    latency_ms: float = Field(0.0, ge=0, description="Execution latency in milliseconds")

    def to_envelope(self) -> dict[str, Any]:
        return {"ok": True, "result": self.payload}


class ToolFailure(BaseModel):
    """Failed tool result with a stable error classification."""

    model_config = ConfigDict(frozen=True)

    ok: Literal[False] = False
    tool_name: str = Field(..., description="Name of the requested tool")
    kind: ErrorKind = Field(..., description="Error classification")
    message: str = Field(..., description="Short, caller-facing message")
    latency_ms: float = Field(0.0, ge=0, description="Time until failure in milliseconds")

    def to_envelope(self) -> dict[str, Any]:
        return {"ok": False, "error": self.message, "kind": self.kind.value}


ToolResult = ToolSuccess | ToolFailure
