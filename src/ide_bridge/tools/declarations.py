"""Built-in tool names and their static schema declarations.

The declarations live in `declarations.json` next to this module, in the
JSON-Schema-like form MCP clients see. `SchemaStore.load` turns them into
typed `ToolSchema` objects once at startup.
"""

from pathlib import Path

FILE_PROBLEMS = "FileProblems"
FILE_BUILD = "FileBuild"
MAVEN_COMPILE = "MavenCompile"
DIRECTORY_TREE = "DirectoryTree"

BUILD_TOOL_ORDER = (FILE_PROBLEMS, FILE_BUILD, MAVEN_COMPILE)

DECLARATIONS_PATH = Path(__file__).with_name("declarations.json")


def load_builtin_declarations() -> bytes:
    """Read the raw JSON declarations shipped with the package."""
    return DECLARATIONS_PATH.read_bytes()
