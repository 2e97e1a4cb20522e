"""Handlers for the FileProblems, FileBuild and MavenCompile tools.

Each handler takes the normalized (snake_case) arguments, runs one build
stage and returns the Markdown report. Argument problems raise
`ArgumentValidationError`; stage failures are reported inside the payload.
"""

import asyncio
from pathlib import Path

from ide_bridge.build import (
    AsyncProcessRunner,
    CommandCompiler,
    IncrementalBuild,
    LexicalAnalyzer,
    LocalFileSystemRefresher,
    MavenIncrementalCompiler,
    MavenLocator,
    OfflineFullBuild,
    SourceLayout,
    SyntaxChecker,
    ThreadPrivilegedExecutor,
    format_incremental_report,
    format_offline_report,
    format_syntax_report,
)
from ide_bridge.build.collaborators import BuildScope, Compiler
from ide_bridge.build.maven import build_maven_args
from ide_bridge.build.problems import relativize
from ide_bridge.build.source_tree import resolve_in_project
from ide_bridge.config import BridgeConfig
from ide_bridge.errors import ArgumentValidationError, ToolTimeoutError


class BuildToolHandlers:
    """Bridges tool arguments to the three build stages."""

    def __init__(
        self,
        project_root: Path,
        checker: SyntaxChecker,
        incremental: IncrementalBuild,
        offline: OfflineFullBuild,
    ) -> None:
        self.project_root = project_root
        self.checker = checker
        self.incremental = incremental
        self.offline = offline

    @classmethod
    def from_config(cls, config: BridgeConfig) -> "BuildToolHandlers":
        """Wire the default collaborators for a local project.

        Args:
            config: Bridge configuration.

        Returns:
            Handlers backed by the lexical analyzer, the configured compile
            command and the Maven found on this machine.
        """
        project_root = config.project_root.resolve()
        checker = SyntaxChecker(
            analyzer=LexicalAnalyzer(),
            refresher=LocalFileSystemRefresher(),
            layout=SourceLayout.from_config(config),
            project_root=project_root,
            ready_poll_seconds=config.analyzer_ready_poll_seconds,
            refresh_timeout_seconds=config.refresh_timeout_seconds,
        )
        locator = MavenLocator(
            home_env_var=config.maven_home_env_var,
            bundled_home=config.bundled_maven_home,
        )
        compiler: Compiler
        if config.incremental_compile_command:
            compiler = CommandCompiler(
                config.incremental_compile_command, config.incremental_build_timeout_seconds
            )
        else:
            compiler = MavenIncrementalCompiler(locator, config.incremental_build_timeout_seconds)
        incremental = IncrementalBuild(
            compiler=compiler,
            executor=ThreadPrivilegedExecutor(),
            checker=checker,
            output_directories=config.output_directories,
            sweep_timeout_seconds=config.syntax_check_timeout_seconds,
        )
        offline = OfflineFullBuild(
            runner=AsyncProcessRunner(),
            locator=locator,
            project_root=project_root,
        )
        return cls(project_root, checker, incremental, offline)

    async def file_problems(
        self,
        file_path: str | None = None,
        include_warnings: bool = True,
        include_suggestions: bool = False,
        max_problems: int = 50,
        refresh: bool | None = None,
    ) -> str:
        """Stage 1: syntax check of one file or of the whole project.

        `refresh` defaults to True for a single file and False for the project.
        """
        if not file_path or not file_path.strip():
            result = await self.checker.check_project(
                refresh=bool(refresh), max_problems=max_problems
            )
            return format_syntax_report(result)

        file = resolve_in_project(self.project_root, file_path, "filePath")
        if not file.is_file():
            raise ArgumentValidationError("filePath", f"not a file: {file_path}")
        result = await self.checker.check_file(
            file,
            refresh=True if refresh is None else refresh,
            include_warnings=include_warnings,
            include_suggestions=include_suggestions,
            max_problems=max_problems,
        )
        return format_syntax_report(result, relativize(file, self.project_root))

    async def file_build(
        self,
        file_paths: list[str] | None = None,
        scope: BuildScope = "project",
        max_errors: int = 50,
        force_rebuild: bool = False,
        fast_mode: bool = False,
        skip_warnings: bool = True,
        timeout: int = 120,
    ) -> str:
        """Stage 2: incremental build of the given files or the whole scope."""
        files = [
            resolve_in_project(self.project_root, raw_path, "filePaths")
            for raw_path in file_paths or []
            if raw_path.strip()
        ]
        try:
            result = await asyncio.wait_for(
                self.incremental.run(
                    files=files or None,
                    scope=scope,
                    force_rebuild=force_rebuild,
                    fast_mode=fast_mode,
                    skip_warnings=skip_warnings,
                    max_errors=max_errors,
                ),
                timeout=timeout,
            )
        except asyncio.TimeoutError as e:
            raise ToolTimeoutError(f"Incremental build timed out after {timeout}s") from e
        return format_incremental_report(
            result, scope, len(files), compiles_files=self.incremental.compiler.compiles_files
        )

    async def maven_compile(
        self,
        goals: list[str] | None = None,
        offline: bool = True,
        quiet: bool = True,
        batch_mode: bool = True,
        timeout: int = 300,
    ) -> str:
        """Stage 3: full Maven build in the project root."""
        goals = [goal for goal in goals or ["compile"] if goal.strip()] or ["compile"]
        result = await self.offline.run(
            goals=goals,
            offline=offline,
            quiet=quiet,
            batch_mode=batch_mode,
            timeout_seconds=timeout,
        )
        command = " ".join(["mvn", *build_maven_args(goals, offline, quiet, batch_mode)])
        return format_offline_report(result, command)
