"""Structured logging configuration using structlog.

This module configures structlog for structured logging with:
- JSON formatter for file output
- Console output on stderr (stdout carries the MCP stdio transport)
- UTC timestamps
- File rotation for log management
- Component and event tracking
"""

import logging
import logging.handlers
import pathlib
import sys
from datetime import datetime, timezone
from typing import Any

import structlog


def _get_log_level() -> str:
    """Get log level from configuration.

    Returns:
        Log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """
    # Bootstrap from environment to avoid circular imports during startup.
    from ide_bridge.config.bootstrap import get_bootstrap_log_level  # noqa: PLC0415

    return get_bootstrap_log_level()


def _get_log_dir() -> pathlib.Path:
    """Get log directory path.

    Read from the environment rather than the settings singleton: loading
    settings logs, and an unconfigured structlog would print to stdout.

    Returns:
        Path to the log directory.
    """
    from ide_bridge.config.bootstrap import get_bootstrap_log_dir  # noqa: PLC0415

    return get_bootstrap_log_dir()


def _get_log_format() -> str:
    """Get console log format ('json' or 'console')."""
    from ide_bridge.config.bootstrap import get_bootstrap_log_format  # noqa: PLC0415

    return get_bootstrap_log_format()


def _add_timestamp(
    logger: logging.Logger, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Add UTC timestamp to log event."""
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def _add_component(
    logger: logging.Logger, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Add component name to log event.

    Args:
        logger: The logger instance.
        method_name: The log method name (info, error, etc.).
        event_dict: The event dictionary.

    Returns:
        Event dictionary with component added.
    """
    # Guard against None logger (can happen with third-party libraries during shutdown)
    if logger is None or not hasattr(logger, "name"):
        event_dict["component"] = "unknown"
        return event_dict

    event_dict["component"] = logger.name.split(".")[-1]
    return event_dict


def _add_component_from_event_dict(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Add component name to log event from the logger name in event_dict.

    Works with structlog's event_dict, which holds the logger name after the
    add_logger_name processor runs.
    """
    logger_name = event_dict.get("logger", "")
    event_dict["component"] = logger_name.split(".")[-1] if logger_name else "unknown"
    return event_dict


def _configure_file_handler(log_dir: pathlib.Path) -> logging.handlers.RotatingFileHandler:
    """Configure rotating file handler for JSON logs.

    Args:
        log_dir: Directory for log files.

    Returns:
        Configured RotatingFileHandler.
    """
    log_dir.mkdir(parents=True, exist_ok=True)

    log_file = log_dir / "current.jsonl"
    handler = logging.handlers.RotatingFileHandler(
        filename=str(log_file),
        maxBytes=20 * 1024 * 1024,  # 20 MB
        backupCount=3,
        encoding="utf-8",
    )

    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=structlog.processors.JSONRenderer(),
            foreign_pre_chain=[
                structlog.stdlib.add_log_level,
                structlog.stdlib.add_logger_name,
                _add_timestamp,  # type: ignore[list-item]
                _add_component,  # type: ignore[list-item]
            ],
        )
    )

    return handler


def _configure_console_handler(log_format: str) -> logging.StreamHandler[Any]:
    """Configure console handler on stderr.

    Args:
        log_format: 'json' for one JSON object per line, 'console' for pretty output.

    Returns:
        Configured StreamHandler.
    """
    handler = logging.StreamHandler(sys.stderr)

    renderer: Any
    if log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=renderer,
            foreign_pre_chain=[
                structlog.stdlib.add_log_level,
                structlog.stdlib.add_logger_name,
                _add_timestamp,  # type: ignore[list-item]
                _add_component,  # type: ignore[list-item]
            ],
        )
    )

    return handler


def configure_logging() -> None:
    """Configure structlog for structured logging.

    This function should be called once at startup. It is also called lazily
    by `get_logger` the first time a logger is requested.
    """
    log_level = _get_log_level()
    log_dir = _get_log_dir()
    log_format = _get_log_format()

    # Root logger accepts all levels; individual handlers gate output.
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.handlers.clear()

    # Silence noisy third-party loggers.
    logging.getLogger("mcp").setLevel(logging.WARNING)
    logging.getLogger("anyio").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    configured_level = getattr(logging, log_level, logging.INFO)

    # File handler captures INFO+ regardless of user config
    file_handler = _configure_file_handler(log_dir)
    file_handler.setLevel(min(logging.INFO, configured_level))
    root_logger.addHandler(file_handler)

    console_handler = _configure_console_handler(log_format)
    console_handler.setLevel(configured_level)
    root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            _add_component_from_event_dict,  # type: ignore[list-item]
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> Any:  # Returns structlog.stdlib.BoundLogger
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__ of the calling module).

    Returns:
        Configured structlog logger instance.

    Example:
        >>> from ide_bridge.telemetry import get_logger
        >>> log = get_logger(__name__)
        >>> log.info("tool_call_started", tool_name="FileBuild", trace_id="abc")
    """
    if not structlog.is_configured():
        configure_logging()

    return structlog.get_logger(name)
