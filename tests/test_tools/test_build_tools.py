"""End-to-end tests of the built-in tools through the invoker."""

import sys

import pytest

from ide_bridge.errors import ErrorKind
from ide_bridge.tools import ToolFailure, ToolSuccess, create_tool_layer

BROKEN_JAVA = 'public class Broken {\n    String s = "never closed;\n}\n'


class TestWiring:
    """Test the assembled tool layer."""

    def test_builtin_tools_registered(self, tool_layer) -> None:
        """Test all built-ins are registered with schemas and policy."""
        registry, store, _ = tool_layer

        assert registry.list_tool_names() == ["FileProblems", "FileBuild", "MavenCompile", "DirectoryTree"]
        assert registry.auto_approved_tools() == ["DirectoryTree"]
        assert all(name in store for name in registry.list_tool_names())
        assert registry.get_tool("MavenCompile").timeout_argument == "timeout"
        assert registry.get_tool("FileProblems").timeout_seconds == 30.0

    def test_schema_override(self, bridge_config, tmp_path) -> None:
        """Test the configured overlay file is applied."""
        override = tmp_path / "override.yaml"
        override.write_text("DirectoryTree:\n  type: object\n  description: Browse\n  properties: {}\n")

        _, store, _ = create_tool_layer(bridge_config.model_copy(update={"schema_override_path": override}))

        assert store.get_schema("DirectoryTree").description == "Browse"

    def test_wsl_mode_wraps_handlers(self, bridge_config) -> None:
        """Test WSL mode decorates every handler."""
        registry, _, _ = create_tool_layer(bridge_config.model_copy(update={"wsl_mode_enabled": True}))

        assert all(hasattr(tool.handler, "__wrapped__") for tool in registry.list_tools())


class TestFileProblems:
    """Test the FileProblems tool."""

    @pytest.mark.asyncio
    async def test_project_scan(self, tool_layer, write_file) -> None:
        """Test the whole project is scanned when no file is given."""
        write_file("src/main/java/app/Broken.java", BROKEN_JAVA)
        _, _, invoker = tool_layer

        result = await invoker.invoke("FileProblems", {})

        assert isinstance(result, ToolSuccess)
        assert result.payload.startswith("## 🔨 Project Analysis")
        assert "📊 Status: **FAILED** - 1 error(s)" in result.payload
        assert "`src/main/java/app/Broken.java`" in result.payload

    @pytest.mark.asyncio
    async def test_single_file(self, tool_layer, write_file) -> None:
        """Test a clean file passes."""
        write_file("src/main/java/A.java", "class A {}\n")
        _, _, invoker = tool_layer

        result = await invoker.invoke("FileProblems", {"filePath": "src/main/java/A.java"})

        assert isinstance(result, ToolSuccess)
        assert result.payload.startswith("## 🔨 File Analysis: `src/main/java/A.java`")
        assert "📊 Status: **SUCCESS**" in result.payload

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "file_path,message",
        [
            ("src/Nope.java", "Invalid argument 'filePath': file not found: src/Nope.java"),
            ("src", "Invalid argument 'filePath': not a file: src"),
            ("../escape.java", "Invalid argument 'filePath': path is outside the project root: ../escape.java"),
        ],
    )
    async def test_bad_file_path(self, tool_layer, write_file, file_path, message) -> None:
        """Test unusable paths are invalid arguments."""
        write_file("src/A.java", "class A {}\n")
        _, _, invoker = tool_layer

        result = await invoker.invoke("FileProblems", {"filePath": file_path})

        assert isinstance(result, ToolFailure)
        assert result.kind is ErrorKind.INVALID_ARGUMENT
        assert result.message == message


class TestFileBuild:
    """Test the FileBuild tool."""

    @pytest.mark.asyncio
    async def test_clean_build(self, tool_layer, write_file) -> None:
        """Test a successful compile command."""
        write_file("src/main/java/A.java", "class A {}\n")
        _, _, invoker = tool_layer

        result = await invoker.invoke("FileBuild", {"filePaths": "src/main/java/A.java", "fastMode": True})

        assert isinstance(result, ToolSuccess)
        assert result.payload.startswith("## 🔨 Incremental Build")
        assert "📊 Status: **SUCCESS**" in result.payload
        assert "Target: 1 file(s)" in result.payload

    @pytest.mark.asyncio
    async def test_failed_build_is_enriched(self, bridge_config, write_file) -> None:
        """Test a failing compile reports sweep details."""
        write_file("src/main/java/Broken.java", BROKEN_JAVA)
        config = bridge_config.model_copy(
            update={"incremental_compile_command": [sys.executable, "-c", "raise SystemExit(1)"]}
        )
        _, _, invoker = create_tool_layer(config)

        result = await invoker.invoke("FileBuild", {})

        assert isinstance(result, ToolSuccess)
        assert "📊 Status: **FAILED** - 1 error(s)" in result.payload
        assert "| 🚫 SyntaxError | `src/main/java/Broken.java` | 2 |" in result.payload

    @pytest.mark.asyncio
    async def test_default_compiler_uses_maven(self, bridge_config, write_file, monkeypatch) -> None:
        """Test an unset compile command falls back to Maven found through its home."""
        file = "src/main/java/A.java"
        write_file(file, "class A {}\n")
        monkeypatch.setenv("IDE_BRIDGE_TEST_MAVEN_OUTPUT", f"[ERROR] {file}:[1,1] cannot find symbol")
        monkeypatch.setenv("IDE_BRIDGE_TEST_MAVEN_EXIT", "1")
        _, _, invoker = create_tool_layer(bridge_config.model_copy(update={"incremental_compile_command": []}))

        result = await invoker.invoke("FileBuild", {"filePaths": file, "scope": "module"})

        assert isinstance(result, ToolSuccess)
        assert "📊 Status: **FAILED** - 1 error(s)" in result.payload
        assert "The compiler builds the whole `module` scope" in result.payload

    @pytest.mark.asyncio
    async def test_invalid_scope(self, tool_layer) -> None:
        """Test the scope enum is enforced."""
        _, _, invoker = tool_layer

        result = await invoker.invoke("FileBuild", {"scope": "workspace"})

        assert result.kind is ErrorKind.INVALID_ARGUMENT
        assert result.message == "Invalid argument 'scope': must be one of [project, module]"


class TestMavenCompile:
    """Test the MavenCompile tool against a scripted Maven."""

    @pytest.mark.asyncio
    async def test_compile_errors(self, tool_layer, monkeypatch) -> None:
        """Test Maven diagnostics end up in the report."""
        monkeypatch.setenv("IDE_BRIDGE_TEST_MAVEN_OUTPUT", "[ERROR] src/Foo.java:[10,5] incompatible types")
        monkeypatch.setenv("IDE_BRIDGE_TEST_MAVEN_EXIT", "1")
        _, _, invoker = tool_layer

        result = await invoker.invoke("MavenCompile", {"goals": ["clean", "compile"]})

        assert isinstance(result, ToolSuccess)
        assert "Command: `mvn -o -q -B clean compile`" in result.payload
        assert "| ❌ Error | `src/Foo.java` | 10 | 5 | incompatible types |" in result.payload
        assert "📊 Status: **FAILED** - 1 error(s)" in result.payload

    @pytest.mark.asyncio
    async def test_successful_build(self, tool_layer) -> None:
        """Test a clean Maven run."""
        _, _, invoker = tool_layer

        result = await invoker.invoke("MavenCompile", {"offline": "false"})

        assert isinstance(result, ToolSuccess)
        assert "Command: `mvn -q -B compile`" in result.payload
        assert "✅ **Build successful**" in result.payload

    @pytest.mark.asyncio
    async def test_timeout_below_minimum(self, tool_layer) -> None:
        """Test the 30 second floor on the timeout argument."""
        _, _, invoker = tool_layer

        result = await invoker.invoke("MavenCompile", {"timeout": 5})

        assert result.kind is ErrorKind.INVALID_ARGUMENT
        assert result.message == "Invalid argument 'timeout': below minimum 30"

    @pytest.mark.asyncio
    async def test_missing_maven(self, tool_layer, monkeypatch) -> None:
        """Test a machine without Maven reports ToolchainMissing."""
        monkeypatch.delenv("IDE_BRIDGE_TEST_MAVEN_HOME")
        monkeypatch.setenv("PATH", "")
        _, _, invoker = tool_layer

        result = await invoker.invoke("MavenCompile", {})

        assert isinstance(result, ToolFailure)
        assert result.kind is ErrorKind.TOOLCHAIN_MISSING


class TestDirectoryTreeTool:
    """Test the DirectoryTree tool through the invoker."""

    @pytest.mark.asyncio
    async def test_coerced_arguments(self, tool_layer, write_file) -> None:
        """Test loosely typed arguments are normalized before the handler runs."""
        write_file("src/main/java/deep/pkg/A.java", "class A {}")
        _, _, invoker = tool_layer

        result = await invoker.invoke("DirectoryTree", {"maxDepth": "-1", "pattern": "*.java"})

        assert isinstance(result, ToolSuccess)
        assert "A.java (10B)" in result.payload

    @pytest.mark.asyncio
    async def test_outside_root(self, tool_layer) -> None:
        """Test escaping the project root is rejected."""
        _, _, invoker = tool_layer

        result = await invoker.invoke("DirectoryTree", {"path": "../.."})

        assert result.kind is ErrorKind.INVALID_ARGUMENT

    @pytest.mark.asyncio
    async def test_dangling_symlink(self, tool_layer, project_root, write_file) -> None:
        """Test a broken link is listed instead of failing the call."""
        write_file("src/A.java", "class A {}")
        (project_root / "src" / "gone.java").symlink_to(project_root / "src" / "missing.java")
        _, _, invoker = tool_layer

        result = await invoker.invoke("DirectoryTree", {"path": "src"})

        assert isinstance(result, ToolSuccess)
        assert "gone.java\n" in result.payload
