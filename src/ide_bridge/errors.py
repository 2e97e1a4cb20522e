"""Exception hierarchy for the tool boundary.

Handlers raise these; `ToolInvoker` is the only place that converts them into
`ToolResult` error envelopes. Anything not derived from `ToolError` is
reported as an internal error.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Classification of failures returned across the tool boundary."""

    INVALID_ARGUMENT = "InvalidArgument"
    NOT_FOUND = "NotFound"
    TIMEOUT = "Timeout"
    TOOLCHAIN_MISSING = "ToolchainMissing"
    INTERNAL = "Internal"


class ToolError(Exception):
    """Base class for failures a handler reports deliberately."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ArgumentValidationError(ToolError):
    """Raised when an argument violates its declared schema.

    Attributes:
        param: Name of the offending parameter.
        reason: Short, stable description (e.g. "missing", "below minimum 30").
    """

    kind = ErrorKind.INVALID_ARGUMENT

    def __init__(self, param: str, reason: str) -> None:
        super().__init__(f"Invalid argument '{param}': {reason}")
        self.param = param
        self.reason = reason


class ToolNotFoundError(ToolError):
    """Raised when no handler is registered under a tool name."""

    kind = ErrorKind.NOT_FOUND


class ToolTimeoutError(ToolError):
    """Raised when an operation exceeds its time bound."""

    kind = ErrorKind.TIMEOUT


class ToolchainMissingError(ToolError):
    """Raised when an external executable cannot be located."""

    kind = ErrorKind.TOOLCHAIN_MISSING


class SchemaLoadError(Exception):
    """Raised when tool schema declarations cannot be parsed or validated."""

    pass
