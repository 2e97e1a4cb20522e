"""Semantic event constants for structured logging.

All log events should use these constants rather than magic strings to ensure
consistency and enable reliable querying and analysis.
"""

# Tool invocation events
TOOL_CALL_STARTED = "tool_call_started"
TOOL_CALL_COMPLETED = "tool_call_completed"
TOOL_CALL_FAILED = "tool_call_failed"
TOOL_CALL_TIMEOUT = "tool_call_timeout"
TOOL_CALL_REJECTED = "tool_call_rejected"
TOOL_REGISTERED = "tool_registered"
TOOL_CALL_EXTRA_ARGUMENTS_IGNORED = "tool_call_extra_arguments_ignored"

# Schema events
SCHEMAS_LOADED = "schemas_loaded"
SCHEMA_NOT_FOUND = "schema_not_found"

# Build pipeline events
SYNTAX_CHECK_STARTED = "syntax_check_started"
SYNTAX_CHECK_COMPLETED = "syntax_check_completed"
INCREMENTAL_BUILD_STARTED = "incremental_build_started"
INCREMENTAL_BUILD_COMPLETED = "incremental_build_completed"
OFFLINE_BUILD_STARTED = "offline_build_started"
OFFLINE_BUILD_COMPLETED = "offline_build_completed"
ERROR_DETAILS_COLLECTION_FAILED = "error_details_collection_failed"
OUTPUT_DIRECTORY_DELETED = "output_directory_deleted"
OUTPUT_DIRECTORY_OUTSIDE_PROJECT = "output_directory_outside_project"
SOURCE_FILE_UNREADABLE = "source_file_unreadable"
INCREMENTAL_COMPILE_FILES_IGNORED = "incremental_compile_files_ignored"

# Collaborator events
FS_REFRESH_FAILED = "fs_refresh_failed"
FS_REFRESH_PATHS_MISSING = "fs_refresh_paths_missing"
ANALYZER_WAITING = "analyzer_waiting"
PROCESS_STARTED = "process_started"
PROCESS_TIMEOUT = "process_timeout"
TOOLCHAIN_NOT_FOUND = "toolchain_not_found"

# Server events
MCP_SERVER_STARTING = "mcp_server_starting"
MCP_SERVER_STOPPED = "mcp_server_stopped"

# Directory browsing events
DIRECTORY_TREE_UNREADABLE = "directory_tree_unreadable"
DIRECTORY_TREE_ENTRY_UNREADABLE = "directory_tree_entry_unreadable"
