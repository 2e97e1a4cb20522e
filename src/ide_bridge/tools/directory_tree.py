"""Project directory browsing.

Renders a Markdown tree of a directory inside the project root, with file
sizes, depth and entry limits and an optional file-name glob.
"""

import fnmatch
import re
from dataclasses import dataclass, field
from pathlib import Path

from ide_bridge.build.source_tree import resolve_in_project
from ide_bridge.errors import ArgumentValidationError
from ide_bridge.telemetry import DIRECTORY_TREE_ENTRY_UNREADABLE, DIRECTORY_TREE_UNREADABLE, get_logger

log = get_logger(__name__)

_BRACE_GROUP = re.compile(r"\{([^{}]*)\}")


@dataclass
class TreeEntry:
    """One file or directory in the rendered tree."""

    name: str
    path: str
    is_directory: bool
    size: int | None = None
    children: list["TreeEntry"] | None = None


@dataclass
class TreeStats:
    total_files: int = 0
    total_directories: int = 0
    entries: int = 0
    truncated: bool = False
    max_depth_reached: bool = False


def expand_braces(pattern: str) -> list[str]:
    """Expand `{a,b}` alternatives (`*.{ts,vue}` -> `*.ts`, `*.vue`)."""
    match = _BRACE_GROUP.search(pattern)
    if match is None:
        return [pattern]
    head, tail = pattern[: match.start()], pattern[match.end() :]
    expanded: list[str] = []
    for alternative in match.group(1).split(","):
        expanded.extend(expand_braces(head + alternative + tail))
    return expanded


def format_size(size: int) -> str:
    if size < 1024:
        return f"{size}B"
    if size < 1024**2:
        return f"{size // 1024}KB"
    if size < 1024**3:
        return f"{size // 1024**2}MB"
    return f"{size // 1024**3}GB"


@dataclass
class DirectoryTreeBuilder:
    """Walks a directory into `TreeEntry` records under depth and entry limits.

    Attributes:
        max_depth: Deepest level listed (1 is the directory's own children);
            `None` for unlimited.
        files_only: Omit directory entries (their files are still listed).
        include_hidden: Include names starting with a dot.
        patterns: File-name globs; a file is kept if any matches.
        max_entries: Stop after this many entries.
    """

    max_depth: int | None = 3
    files_only: bool = False
    include_hidden: bool = False
    patterns: list[str] = field(default_factory=list)
    max_entries: int = 100
    stats: TreeStats = field(default_factory=TreeStats)

    def matches(self, name: str) -> bool:
        if not self.patterns:
            return True
        return any(fnmatch.fnmatchcase(name, pattern) for pattern in self.patterns)

    def build(self, directory: Path, depth: int = 1, relative: str = "") -> list[TreeEntry]:
        if self.stats.entries >= self.max_entries:
            self.stats.truncated = True
            return []

        entries: list[TreeEntry] = []
        try:
            children = sorted(directory.iterdir(), key=lambda p: (not p.is_dir(), p.name))
        except OSError as e:
            log.debug(DIRECTORY_TREE_UNREADABLE, path=str(directory), error=str(e))
            return entries

        for child in children:
            if self.stats.entries >= self.max_entries:
                self.stats.truncated = True
                break
            if not self.include_hidden and child.name.startswith("."):
                continue

            child_relative = f"{relative}/{child.name}" if relative else child.name
            if child.is_dir():
                # Symlinked directories are listed but never entered
                descend = not child.is_symlink()
                below_limit = self.max_depth is None or depth < self.max_depth
                if self.files_only:
                    if not descend:
                        continue
                    if below_limit:
                        entries.extend(self.build(child, depth + 1, child_relative))
                    else:
                        self.stats.max_depth_reached = True
                    continue
                self.stats.total_directories += 1
                self.stats.entries += 1
                nested = None
                if descend and below_limit:
                    nested = self.build(child, depth + 1, child_relative)
                elif descend:
                    self.stats.max_depth_reached = True
                entries.append(
                    TreeEntry(name=child.name, path=child_relative, is_directory=True, children=nested)
                )
            elif self.matches(child.name):
                try:
                    size: int | None = child.stat().st_size
                except OSError as e:
                    # Dangling symlink or unreadable file
                    log.debug(DIRECTORY_TREE_ENTRY_UNREADABLE, path=str(child), error=str(e))
                    size = None
                self.stats.total_files += 1
                self.stats.entries += 1
                entries.append(
                    TreeEntry(
                        name=child.name,
                        path=child_relative,
                        is_directory=False,
                        size=size,
                    )
                )
        return entries


def render_entries(entries: list[TreeEntry], prefix: str = "") -> list[str]:
    """Render entries with `├──`/`└──` connectors."""
    lines: list[str] = []
    for index, entry in enumerate(entries):
        is_last = index == len(entries) - 1
        connector = "└── " if is_last else "├── "
        marker = "/" if entry.is_directory else ""
        size = f" ({format_size(entry.size)})" if entry.size is not None else ""
        lines.append(f"{prefix}{connector}{entry.name}{marker}{size}")
        if entry.children:
            lines.extend(render_entries(entry.children, prefix + ("    " if is_last else "│   ")))
    return lines


def directory_tree(
    project_root: Path,
    path: str = ".",
    max_depth: int = 3,
    files_only: bool = False,
    include_hidden: bool = False,
    pattern: str | None = None,
    max_entries: int = 100,
) -> str:
    """Render the directory tree of `path` as Markdown.

    Args:
        project_root: Absolute, resolved project root.
        path: Directory relative to the project root.
        max_depth: Maximum depth; zero or negative means unlimited.
        files_only: Hide directory entries.
        include_hidden: Include dot-files and dot-directories.
        pattern: Glob on file names, with `{a,b}` alternatives.
        max_entries: Entry limit (at least 1).

    Returns:
        Markdown with a fenced tree and a statistics line.

    Raises:
        ArgumentValidationError: If `path` escapes the project root, does not
            exist, or is not a directory.
    """
    path = path.strip() or "."
    target = resolve_in_project(project_root, path, "path")
    if not target.is_dir():
        raise ArgumentValidationError("path", f"not a directory: {path}")

    builder = DirectoryTreeBuilder(
        max_depth=max_depth if max_depth > 0 else None,
        files_only=files_only,
        include_hidden=include_hidden,
        patterns=expand_braces(pattern) if pattern else [],
        max_entries=max(1, max_entries),
    )
    entries = builder.build(target)
    stats = builder.stats

    lines = [f"## Directory Tree: `{path}`", "", "```"]
    lines.extend(render_entries(entries))
    lines.extend(["```", "", "---"])
    statistics = f"**Statistics:** {stats.total_files} files, {stats.total_directories} directories"
    if stats.truncated:
        statistics += " *(truncated, max entries reached)*"
    if stats.max_depth_reached:
        statistics += " *(max depth reached)*"
    lines.append(statistics)
    return "\n".join(lines)
