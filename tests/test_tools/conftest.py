"""Fixtures for tool-layer tests."""

import sys
from pathlib import Path

import pytest

from ide_bridge.config import BridgeConfig
from ide_bridge.tools import SchemaStore, create_tool_layer
from ide_bridge.tools.declarations import load_builtin_declarations

MAVEN_HOME_VAR = "IDE_BRIDGE_TEST_MAVEN_HOME"

# Stand-in `mvn`: echoes its arguments, prints canned output, exits with a canned code
FAKE_MVN = """#!/bin/sh
echo "mvn $*"
printf '%s\\n' "$IDE_BRIDGE_TEST_MAVEN_OUTPUT"
exit "${IDE_BRIDGE_TEST_MAVEN_EXIT:-0}"
"""


@pytest.fixture
def schema_store() -> SchemaStore:
    """Fixture for a store holding the built-in declarations."""
    store = SchemaStore()
    store.load(load_builtin_declarations())
    return store


@pytest.fixture
def fake_maven(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Fixture installing a scripted Maven home, found through its own env variable."""
    home = tmp_path / "maven"
    executable = home / "bin" / "mvn"
    executable.parent.mkdir(parents=True)
    executable.write_text(FAKE_MVN)
    executable.chmod(0o755)
    monkeypatch.setenv(MAVEN_HOME_VAR, str(home))
    monkeypatch.setenv("IDE_BRIDGE_TEST_MAVEN_OUTPUT", "[INFO] BUILD SUCCESS")
    monkeypatch.setenv("IDE_BRIDGE_TEST_MAVEN_EXIT", "0")
    return home


@pytest.fixture
def bridge_config(project_root: Path, fake_maven: Path) -> BridgeConfig:
    """Fixture for a configuration over the temporary project."""
    return BridgeConfig(
        project_root=project_root,
        maven_home_env_var=MAVEN_HOME_VAR,
        incremental_compile_command=[sys.executable, "-c", "print('compiled')"],
        refresh_timeout_seconds=1.0,
        analyzer_ready_poll_seconds=0.01,
    )


@pytest.fixture
def tool_layer(bridge_config: BridgeConfig):
    """Fixture for the wired (registry, store, invoker) triple."""
    return create_tool_layer(bridge_config)
