"""Argument normalization against a tool schema.

The calling agent is an LLM and often sends loosely-typed JSON, so values
are coerced permissively ("300" -> 300, "true" -> True, "x" -> ["x"]).
Bounds and enums are strict: an out-of-range value is rejected, never
clamped.
"""

import copy
from collections.abc import Mapping
from typing import Any

import orjson

from ide_bridge.errors import ArgumentValidationError
from ide_bridge.tools.types import ParamSpec, ToolSchema, json_type_name

_TRUE_STRINGS = frozenset({"true", "1", "yes", "y", "on"})
_FALSE_STRINGS = frozenset({"false", "0", "no", "n", "off"})


def _format_bound(bound: int | float) -> str:
    if isinstance(bound, float) and bound.is_integer():
        return str(int(bound))
    return str(bound)


def _format_enum(values: list[Any]) -> str:
    return "[" + ", ".join(str(value) for value in values) + "]"


def _type_error(spec: ParamSpec, value: Any) -> str:
    return f"expected {spec.type}, got {json_type_name(value)}"


def _parse_number(text: str) -> int | float | None:
    text = text.strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        return None


def _coerce_integer(param: str, spec: ParamSpec, value: Any) -> int:
    if isinstance(value, bool):
        raise ArgumentValidationError(param, _type_error(spec, value))
    if isinstance(value, str):
        parsed = _parse_number(value)
        if parsed is None:
            raise ArgumentValidationError(param, _type_error(spec, value))
        value = parsed
    if isinstance(value, float):
        if not value.is_integer():
            raise ArgumentValidationError(param, f"expected integer, got {value}")
        return int(value)
    if isinstance(value, int):
        return value
    raise ArgumentValidationError(param, _type_error(spec, value))


def _coerce_number(param: str, spec: ParamSpec, value: Any) -> int | float:
    if isinstance(value, bool):
        raise ArgumentValidationError(param, _type_error(spec, value))
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        parsed = _parse_number(value)
        if parsed is not None:
            return parsed
    raise ArgumentValidationError(param, _type_error(spec, value))


def _coerce_boolean(param: str, spec: ParamSpec, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    raise ArgumentValidationError(param, _type_error(spec, value))


def _coerce_string(param: str, spec: ParamSpec, value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    raise ArgumentValidationError(param, _type_error(spec, value))


def _coerce_array(param: str, spec: ParamSpec, value: Any) -> list[Any]:
    if isinstance(value, str) and value.strip().startswith("["):
        try:
            value = orjson.loads(value)
        except orjson.JSONDecodeError:
            raise ArgumentValidationError(param, "expected array, got malformed JSON array") from None
    if isinstance(value, (list, tuple)):
        items = list(value)
    elif isinstance(value, Mapping):
        raise ArgumentValidationError(param, _type_error(spec, value))
    else:
        items = [value]

    if spec.items is None:
        return items
    return [
        coerce_value(f"{param}[{index}]", spec.items, item) for index, item in enumerate(items)
    ]


def _coerce_object(param: str, spec: ParamSpec, value: Any) -> dict[str, Any]:
    if isinstance(value, str) and value.strip().startswith("{"):
        try:
            value = orjson.loads(value)
        except orjson.JSONDecodeError:
            raise ArgumentValidationError(param, "expected object, got malformed JSON object") from None
    if isinstance(value, Mapping):
        return dict(value)
    raise ArgumentValidationError(param, _type_error(spec, value))


_COERCERS = {
    "integer": _coerce_integer,
    "number": _coerce_number,
    "boolean": _coerce_boolean,
    "string": _coerce_string,
    "array": _coerce_array,
    "object": _coerce_object,
}


def coerce_value(param: str, spec: ParamSpec, value: Any) -> Any:
    """Coerce one present value to its declared type and check its constraints.

    Args:
        param: Parameter name used in errors.
        spec: Declared parameter spec.
        value: Raw value (not None).

    Returns:
        The coerced value.

    Raises:
        ArgumentValidationError: On a type, enum or bound violation.
    """
    coerced = _COERCERS[spec.type](param, spec, value)

    if spec.enum is not None and coerced not in spec.enum:
        raise ArgumentValidationError(param, f"must be one of {_format_enum(spec.enum)}")

    if spec.type in ("integer", "number"):
        if spec.minimum is not None and coerced < spec.minimum:
            raise ArgumentValidationError(param, f"below minimum {_format_bound(spec.minimum)}")
        if spec.maximum is not None and coerced > spec.maximum:
            raise ArgumentValidationError(param, f"above maximum {_format_bound(spec.maximum)}")
    return coerced


def normalize(schema: ToolSchema, raw: Mapping[str, Any] | None) -> dict[str, Any]:
    """Apply defaults, coerce types and enforce constraints.

    A `None` value counts as absent. Keys the schema does not declare are
    passed through untouched. The input mapping is not modified, and
    normalizing an already-normalized mapping returns it unchanged.

    Args:
        schema: Tool schema (possibly empty for unknown tools).
        raw: Raw arguments from the caller.

    Returns:
        Normalized arguments.

    Raises:
        ArgumentValidationError: For the first violated parameter, in
            declaration order; then for the first missing required name.
    """
    raw = raw or {}
    normalized = dict(raw)

    for name, spec in schema.parameters.items():
        value = raw.get(name)
        if value is None:
            normalized.pop(name, None)
            if spec.has_default:
                normalized[name] = copy.deepcopy(spec.default)
            continue
        normalized[name] = coerce_value(name, spec, value)

    for name in sorted(schema.required):
        if normalized.get(name) is None:
            raise ArgumentValidationError(name, "missing")

    return normalized
