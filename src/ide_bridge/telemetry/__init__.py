"""Telemetry module for structured logging and trace correlation.

This module provides:
- TraceContext for per-invocation correlation
- Structured logging via structlog
- Semantic event constants
"""

from ide_bridge.telemetry.events import (
    ANALYZER_WAITING,
    DIRECTORY_TREE_ENTRY_UNREADABLE,
    DIRECTORY_TREE_UNREADABLE,
    ERROR_DETAILS_COLLECTION_FAILED,
    FS_REFRESH_FAILED,
    FS_REFRESH_PATHS_MISSING,
    INCREMENTAL_BUILD_COMPLETED,
    INCREMENTAL_BUILD_STARTED,
    INCREMENTAL_COMPILE_FILES_IGNORED,
    MCP_SERVER_STARTING,
    MCP_SERVER_STOPPED,
    OFFLINE_BUILD_COMPLETED,
    OFFLINE_BUILD_STARTED,
    OUTPUT_DIRECTORY_DELETED,
    OUTPUT_DIRECTORY_OUTSIDE_PROJECT,
    PROCESS_STARTED,
    PROCESS_TIMEOUT,
    SCHEMA_NOT_FOUND,
    SCHEMAS_LOADED,
    SOURCE_FILE_UNREADABLE,
    SYNTAX_CHECK_COMPLETED,
    SYNTAX_CHECK_STARTED,
    TOOL_CALL_COMPLETED,
    TOOL_CALL_EXTRA_ARGUMENTS_IGNORED,
    TOOL_CALL_FAILED,
    TOOL_CALL_REJECTED,
    TOOL_CALL_STARTED,
    TOOL_CALL_TIMEOUT,
    TOOL_REGISTERED,
    TOOLCHAIN_NOT_FOUND,
)
from ide_bridge.telemetry.logger import configure_logging, get_logger
from ide_bridge.telemetry.trace import TraceContext

__all__ = [
    "TraceContext",
    "get_logger",
    "configure_logging",
    # Event constants
    "TOOL_CALL_STARTED",
    "TOOL_CALL_COMPLETED",
    "TOOL_CALL_FAILED",
    "TOOL_CALL_TIMEOUT",
    "TOOL_CALL_REJECTED",
    "TOOL_CALL_EXTRA_ARGUMENTS_IGNORED",
    "TOOL_REGISTERED",
    "SCHEMAS_LOADED",
    "SCHEMA_NOT_FOUND",
    "SYNTAX_CHECK_STARTED",
    "SYNTAX_CHECK_COMPLETED",
    "INCREMENTAL_BUILD_STARTED",
    "INCREMENTAL_BUILD_COMPLETED",
    "INCREMENTAL_COMPILE_FILES_IGNORED",
    "OFFLINE_BUILD_STARTED",
    "OFFLINE_BUILD_COMPLETED",
    "ERROR_DETAILS_COLLECTION_FAILED",
    "OUTPUT_DIRECTORY_DELETED",
    "OUTPUT_DIRECTORY_OUTSIDE_PROJECT",
    "SOURCE_FILE_UNREADABLE",
    "FS_REFRESH_FAILED",
    "FS_REFRESH_PATHS_MISSING",
    "ANALYZER_WAITING",
    "PROCESS_STARTED",
    "PROCESS_TIMEOUT",
    "TOOLCHAIN_NOT_FOUND",
    "MCP_SERVER_STARTING",
    "MCP_SERVER_STOPPED",
    "DIRECTORY_TREE_UNREADABLE",
    "DIRECTORY_TREE_ENTRY_UNREADABLE",
]
