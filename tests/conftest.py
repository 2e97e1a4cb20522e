"""Shared fixtures for the test suite."""

import os
import tempfile
from collections.abc import Callable
from pathlib import Path

# Logging is configured on first import; keep test logs out of the working tree
os.environ.setdefault("BRIDGE_LOG_DIR", tempfile.mkdtemp(prefix="ide-bridge-test-logs-"))
os.environ.setdefault("BRIDGE_ENV", "test")

import pytest  # noqa: E402

from ide_bridge.telemetry import TraceContext  # noqa: E402


@pytest.fixture
def trace_ctx() -> TraceContext:
    """Fixture for trace context."""
    return TraceContext.new_trace()


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Fixture for an empty, resolved project root."""
    root = tmp_path / "project"
    root.mkdir()
    return root.resolve()


@pytest.fixture
def write_file(project_root: Path) -> Callable[[str, str], Path]:
    """Fixture returning a helper that creates a file under the project root."""

    def write(relative: str, content: str = "") -> Path:
        path = project_root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return write
