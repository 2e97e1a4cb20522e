"""WSL path translation at the tool boundary.

When the agent runs inside WSL but the IDE and compiler run on Windows,
paths arrive as `/mnt/c/...` and leave as `C:\\...`. The `wsl_handler`
decorator converts path arguments on the way in and every Windows path in
the payload on the way out.
"""

import functools
import inspect
import re
from collections.abc import Callable
from typing import Any

from ide_bridge.build.problems import Problem
from ide_bridge.telemetry import get_logger

log = get_logger(__name__)

_WINDOWS_PATH = re.compile(r"^([A-Za-z]):[/\\](.*)$")
_WSL_MOUNT_PATH = re.compile(r"^/mnt/([a-z])/(.*)$")
_WINDOWS_PATH_IN_TEXT = re.compile(r"(?<!\w)([A-Za-z]):[\\/][^`\s\"']*[^\s`\"']")

PATH_ARGUMENTS = ("file_path", "file_paths", "path")


def is_windows_absolute_path(path: str) -> bool:
    return bool(_WINDOWS_PATH.match(path))


def is_wsl_mount_path(path: str) -> bool:
    return bool(_WSL_MOUNT_PATH.match(path))


def windows_to_wsl_path(path: str) -> str:
    """Convert `C:\\Users\\x` to `/mnt/c/Users/x`.

    Non-Windows paths are returned unchanged.
    """
    match = _WINDOWS_PATH.match(path)
    if match is None:
        log.debug("wsl_path_not_windows", path=path)
        return path
    drive, rest = match.groups()
    return f"/mnt/{drive.lower()}/{rest.replace(chr(92), '/')}"


def wsl_to_windows_path(path: str) -> str:
    """Convert `/mnt/d/work/x` to `D:\\work\\x`.

    Paths outside `/mnt/<drive>/` are returned unchanged.
    """
    match = _WSL_MOUNT_PATH.match(path)
    if match is None:
        log.debug("wsl_path_not_mount", path=path)
        return path
    drive, rest = match.groups()
    return f"{drive.upper()}:\\{rest.replace('/', chr(92))}"


def convert_paths_in_text(text: str) -> str:
    """Rewrite every Windows absolute path found in free text to its WSL form."""
    return _WINDOWS_PATH_IN_TEXT.sub(lambda m: windows_to_wsl_path(m.group(0)), text)


def translate_problem(problem: Problem) -> Problem:
    """Return a copy of `problem` with Windows paths in its file path and message in WSL form."""
    return problem.model_copy(
        update={
            "file_path": windows_to_wsl_path(problem.file_path),
            "message": convert_paths_in_text(problem.message),
        }
    )


def _translate_argument(value: Any) -> Any:
    if isinstance(value, str):
        return wsl_to_windows_path(value)
    if isinstance(value, list):
        return [wsl_to_windows_path(item) if isinstance(item, str) else item for item in value]
    return value


def _translate_payload(payload: Any) -> Any:
    if isinstance(payload, str):
        return convert_paths_in_text(payload)
    return payload


def wsl_handler(handler: Callable[..., Any]) -> Callable[..., Any]:
    """Wrap a tool handler so path arguments and results cross WSL correctly.

    Args:
        handler: Sync or async tool handler taking snake_case keyword arguments.

    Returns:
        A wrapper of the same kind (sync or async) with the same signature.
    """

    def translate_kwargs(kwargs: dict[str, Any]) -> dict[str, Any]:
        return {
            name: _translate_argument(value) if name in PATH_ARGUMENTS else value
            for name, value in kwargs.items()
        }

    if inspect.iscoroutinefunction(handler):

        @functools.wraps(handler)
        async def async_wrapper(**kwargs: Any) -> Any:
            return _translate_payload(await handler(**translate_kwargs(kwargs)))

        return async_wrapper

    @functools.wraps(handler)
    def wrapper(**kwargs: Any) -> Any:
        return _translate_payload(handler(**translate_kwargs(kwargs)))

    return wrapper
