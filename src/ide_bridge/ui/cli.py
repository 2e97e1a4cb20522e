"""CLI interface for the bridge.

This module provides a Typer-based command-line interface to serve the
tools over MCP stdio or to run a single tool call from the shell.
"""

import asyncio
from pathlib import Path
from typing import Any, Optional

import orjson
import typer
from rich.console import Console
from rich.table import Table

from ide_bridge import __version__
from ide_bridge.config import BridgeConfig, get_settings, load_bridge_config
from ide_bridge.errors import SchemaLoadError
from ide_bridge.server import create_mcp_server, get_instructions
from ide_bridge.tools import ToolSuccess, create_schema_store, create_tool_layer

app = typer.Typer(help="IDE Bridge - build validation tools for coding agents")
console = Console()
err_console = Console(stderr=True)

ProjectRootOption = typer.Option(
    None, "--project-root", "-p", help="Project root (defaults to BRIDGE_PROJECT_ROOT or cwd)"
)


def _load_config(project_root: Path | None) -> BridgeConfig:
    if project_root is None:
        return get_settings()
    return load_bridge_config(project_root=project_root)


def _parse_args(raw: str) -> dict[str, Any]:
    try:
        decoded = orjson.loads(raw)
    except orjson.JSONDecodeError as e:
        err_console.print(f"[red]Error: --args is not valid JSON: {e}[/red]")
        raise typer.Exit(2) from e
    if not isinstance(decoded, dict):
        err_console.print("[red]Error: --args must be a JSON object[/red]")
        raise typer.Exit(2)
    return decoded


@app.command(name="serve")
def serve_command(project_root: Optional[Path] = ProjectRootOption) -> None:
    """Serve the tools over MCP stdio.

    Examples:
        ide-bridge serve
        ide-bridge serve --project-root ~/work/shop
    """
    config = _load_config(project_root)
    try:
        _, store, invoker = create_tool_layer(config)
    except SchemaLoadError as e:
        err_console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from e

    instructions = get_instructions(config.prompt_language, wsl_mode=config.wsl_mode_enabled)
    server = create_mcp_server(invoker, store, instructions=instructions, version=__version__)
    asyncio.run(server.run_stdio())


@app.command(name="invoke")
def invoke_command(
    tool_name: str = typer.Argument(..., help="Tool to invoke (e.g. FileProblems)"),
    args: str = typer.Option("{}", "--args", "-a", help="Tool arguments as a JSON object"),
    timeout_ms: Optional[int] = typer.Option(
        None, "--timeout-ms", help="Override the tool's time bound"
    ),
    project_root: Optional[Path] = ProjectRootOption,
) -> None:
    """Invoke one tool and print its JSON result envelope.

    Exits with status 1 when the envelope is an error.

    Examples:
        ide-bridge invoke FileProblems
        ide-bridge invoke FileBuild --args '{"filePaths": ["src/main/java/App.java"]}'
        ide-bridge invoke MavenCompile --args '{"goals": ["test"], "timeout": 600}'
    """
    arguments = _parse_args(args)
    config = _load_config(project_root)
    try:
        _, _, invoker = create_tool_layer(config)
    except SchemaLoadError as e:
        err_console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from e

    result = asyncio.run(invoker.invoke(tool_name, arguments, timeout_ms=timeout_ms))
    typer.echo(orjson.dumps(result.to_envelope(), option=orjson.OPT_INDENT_2).decode())
    if not isinstance(result, ToolSuccess):
        raise typer.Exit(1)


@app.command(name="tools")
def tools_command(project_root: Optional[Path] = ProjectRootOption) -> None:
    """List the available tools with their parameters."""
    config = _load_config(project_root)
    try:
        registry, store, _ = create_tool_layer(config)
    except SchemaLoadError as e:
        err_console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from e

    table = Table(title=f"Tools ({len(registry.list_tool_names())})")
    table.add_column("Name", style="green")
    table.add_column("Auto-approved", style="cyan")
    table.add_column("Timeout", style="magenta")
    table.add_column("Parameters", style="white", overflow="fold")

    for tool in registry.list_tools():
        schema = store.get_schema(tool.name)
        if tool.timeout_argument:
            timeout = f"`{tool.timeout_argument}` argument"
        else:
            timeout = f"{tool.timeout_seconds:g}s"
        table.add_row(
            tool.name,
            "yes" if tool.auto_approved else "no",
            timeout,
            ", ".join(schema.parameters) or "-",
        )
    console.print(table)


@app.command(name="instructions")
def instructions_command(
    language: str = typer.Option("en", "--language", "-l", help="Instruction language (en or zh)"),
    wsl: bool = typer.Option(False, "--wsl", help="Append the WSL path notes"),
) -> None:
    """Print the agent instructions describing the build-tool order."""
    typer.echo(get_instructions(language, wsl_mode=wsl))


@app.command(name="schema")
def schema_command(
    tool_name: str = typer.Argument(..., help="Tool whose input schema to print"),
    project_root: Optional[Path] = ProjectRootOption,
) -> None:
    """Print a tool's MCP input schema as JSON."""
    config = _load_config(project_root)
    try:
        store = create_schema_store(config)
    except SchemaLoadError as e:
        err_console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from e
    if tool_name not in store:
        err_console.print(f"[red]Error: unknown tool '{tool_name}'[/red]")
        raise typer.Exit(1)
    schema = store.get_schema(tool_name)
    typer.echo(orjson.dumps(schema.to_json_schema(), option=orjson.OPT_INDENT_2).decode())


if __name__ == "__main__":
    app()
