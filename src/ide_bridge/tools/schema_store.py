"""Tool schema store.

Parses static declarations into typed `ToolSchema` objects once, then serves
lookups. Unknown tools get an empty schema instead of an exception so the
dispatch loop can report them as NotFound.
"""

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import orjson
from pydantic import ValidationError

from ide_bridge.config import load_yaml_file
from ide_bridge.errors import SchemaLoadError
from ide_bridge.telemetry import SCHEMA_NOT_FOUND, SCHEMAS_LOADED, get_logger
from ide_bridge.tools.types import ToolSchema

log = get_logger(__name__)


def parse_declarations(raw_declarations: str | bytes | Mapping[str, Any]) -> dict[str, ToolSchema]:
    """Parse `{toolName: {type: object, description, properties, required}}`.

    Args:
        raw_declarations: JSON text or an already-decoded mapping.

    Returns:
        Schemas keyed by tool name.

    Raises:
        SchemaLoadError: If the text is not JSON or an entry is malformed.
    """
    if isinstance(raw_declarations, (str, bytes)):
        try:
            decoded: Any = orjson.loads(raw_declarations)
        except orjson.JSONDecodeError as e:
            raise SchemaLoadError(f"Tool declarations are not valid JSON: {e}") from e
    else:
        decoded = raw_declarations

    if not isinstance(decoded, Mapping):
        raise SchemaLoadError(
            f"Tool declarations must be an object, got {type(decoded).__name__}"
        )

    schemas: dict[str, ToolSchema] = {}
    for name, declaration in decoded.items():
        if not isinstance(declaration, Mapping):
            raise SchemaLoadError(f"Declaration for tool '{name}' must be an object")
        declared_type = declaration.get("type", "object")
        if declared_type != "object":
            raise SchemaLoadError(
                f"Declaration for tool '{name}' must have type 'object', got '{declared_type}'"
            )
        try:
            schemas[str(name)] = ToolSchema.from_declaration(str(name), dict(declaration))
        except ValidationError as e:
            raise SchemaLoadError(f"Invalid declaration for tool '{name}': {e}") from e
    return schemas


class SchemaStore:
    """Initialize-once, read-many holder of tool schemas."""

    def __init__(self) -> None:
        self._schemas: dict[str, ToolSchema] = {}

    def load(self, raw_declarations: str | bytes | Mapping[str, Any]) -> dict[str, ToolSchema]:
        """Parse declarations and add them to the store.

        Entries replace existing schemas of the same name.

        Returns:
            The schemas parsed from `raw_declarations`.

        Raises:
            SchemaLoadError: If any declaration is malformed. Nothing is stored then.
        """
        parsed = parse_declarations(raw_declarations)
        self._schemas.update(parsed)
        log.info(SCHEMAS_LOADED, tool_names=sorted(parsed), total=len(self._schemas))
        return dict(parsed)

    def merge_file(self, path: Path) -> dict[str, ToolSchema]:
        """Overlay declarations from a YAML or JSON file.

        Raises:
            SchemaLoadError: If the file cannot be read or is malformed.
        """
        if path.suffix.lower() == ".json":
            try:
                raw: str | bytes | Mapping[str, Any] = path.read_bytes()
            except OSError as e:
                raise SchemaLoadError(f"Cannot read schema file {path}: {e}") from e
        else:
            raw = load_yaml_file(path, SchemaLoadError)
        return self.load(raw)

    def get_schema(self, name: str) -> ToolSchema:
        """Return the schema for `name`, or an empty schema for unknown tools."""
        schema = self._schemas.get(name)
        if schema is None:
            log.warning(SCHEMA_NOT_FOUND, tool_name=name)
            return ToolSchema(name=name)
        return schema

    def list_schemas(self) -> list[ToolSchema]:
        return list(self._schemas.values())

    def __contains__(self, name: object) -> bool:
        return name in self._schemas

    def __len__(self) -> int:
        return len(self._schemas)
