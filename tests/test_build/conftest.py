"""Fake collaborators for build-stage tests."""

from collections.abc import Callable, Sequence
from pathlib import Path
from typing import TypeVar

import pytest

from ide_bridge.build import IncrementalBuild, LexicalAnalyzer, SourceLayout, SyntaxChecker
from ide_bridge.build.collaborators import CompileStats, CompileTarget, ProcessOutput
from ide_bridge.build.problems import Problem

T = TypeVar("T")


class FakeAnalyzer(LexicalAnalyzer):
    """Lexical analyzer with a scripted readiness sequence and canned highlights."""

    def __init__(self, ready_after: int = 0, highlights: Sequence[Problem] = ()) -> None:
        super().__init__()
        self.ready_after = ready_after
        self.ready_checks = 0
        self.highlights = list(highlights)

    def is_ready(self) -> bool:
        self.ready_checks += 1
        return self.ready_checks > self.ready_after

    def collect_highlights(self, file: Path, project_root: Path) -> list[Problem]:
        name = file.relative_to(project_root).as_posix()
        return [problem for problem in self.highlights if problem.file_path == name]


class FakeRefresher:
    """Records refresh requests."""

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.sync_calls = 0
        self.refreshed: list[list[Path]] = []

    def sync_refresh(self) -> None:
        self.sync_calls += 1
        if self.fail:
            raise RuntimeError("refresh failed")

    def refresh(self, paths: Sequence[Path]) -> None:
        self.refreshed.append(list(paths))
        if self.fail:
            raise RuntimeError("refresh failed")


class FakeCompiler:
    """Returns fixed stats and records the target it was asked to build."""

    def __init__(self, stats: CompileStats, compiles_files: bool = True) -> None:
        self.stats = stats
        self.compiles_files = compiles_files
        self.targets: list[CompileTarget] = []

    def compile_incremental(self, target: CompileTarget) -> CompileStats:
        self.targets.append(target)
        return self.stats


class InlineExecutor:
    """Privileged executor that runs work inline and counts submissions."""

    def __init__(self) -> None:
        self.calls = 0

    async def run(self, fn: Callable[[], T]) -> T:
        self.calls += 1
        return fn()


class FakeProcessRunner:
    """Returns canned output, or raises a canned exception."""

    def __init__(self, output: ProcessOutput | None = None, error: BaseException | None = None) -> None:
        self.output = output or ProcessOutput(exit_code=0, output="")
        self.error = error
        self.calls: list[tuple[str, list[str], Path, float]] = []

    async def run(self, executable: str, args: Sequence[str], cwd: Path, timeout: float) -> ProcessOutput:
        self.calls.append((executable, list(args), cwd, timeout))
        if self.error is not None:
            raise self.error
        return self.output


@pytest.fixture
def layout() -> SourceLayout:
    """Fixture for the default source layout."""
    return SourceLayout(
        roots=("src/main/java", "src/main/kotlin", "src", "src/test/java"),
        pruned_directories=frozenset({"build", "out", "target", ".git", "node_modules"}),
        extensions=frozenset({"java", "kt", "kts"}),
    )


@pytest.fixture
def refresher() -> FakeRefresher:
    """Fixture for a recording refresher."""
    return FakeRefresher()


@pytest.fixture
def analyzer() -> FakeAnalyzer:
    """Fixture for an always-ready analyzer without highlights."""
    return FakeAnalyzer()


@pytest.fixture
def checker(analyzer, refresher, layout, project_root) -> SyntaxChecker:
    """Fixture for a syntax checker over the temporary project."""
    return SyntaxChecker(
        analyzer=analyzer,
        refresher=refresher,
        layout=layout,
        project_root=project_root,
        ready_poll_seconds=0.01,
        refresh_timeout_seconds=1.0,
    )


@pytest.fixture
def executor() -> InlineExecutor:
    """Fixture for an inline privileged executor."""
    return InlineExecutor()


@pytest.fixture
def make_incremental(checker, executor) -> Callable[..., tuple[IncrementalBuild, FakeCompiler]]:
    """Fixture factory for an incremental build whose compiler reports fixed counts."""

    def make(errors: int = 0, warnings: int = 0, aborted: bool = False) -> tuple[IncrementalBuild, FakeCompiler]:
        compiler = FakeCompiler(CompileStats(aborted=aborted, errors=errors, warnings=warnings))
        build = IncrementalBuild(compiler, executor, checker, sweep_timeout_seconds=1.0)
        return build, compiler

    return make


@pytest.fixture
def make_runner() -> Callable[..., FakeProcessRunner]:
    """Fixture factory for a process runner with canned output or error."""

    def make(output: str = "", exit_code: int = 0, error: BaseException | None = None) -> FakeProcessRunner:
        return FakeProcessRunner(ProcessOutput(exit_code=exit_code, output=output), error)

    return make
