"""Project-level facade: sources in, reachable files and unused exports out."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from pathlib import Path
from typing import Iterable, Mapping, Optional, Union

from tsreach.collect import collect_sources, default_entrypoints, relative_entrypoint
from tsreach.extract import parse_module
from tsreach.graph import DependencyGraph, build_graph
from tsreach.reachability import compute_reachable
from tsreach.records import ModuleTable, ParsedFile, UnusedExport
from tsreach.usage import find_unused_exports

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisResult:
    reachable_files: list[str] = field(default_factory=list)
    unused_exports: list[UnusedExport] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "reachable_files": list(self.reachable_files),
            "unused_exports": [{"file": u.file, "name": u.name} for u in self.unused_exports],
        }


class ProjectAnalyzer:
    """Module table plus the graph derived from it; immutable once built."""

    def __init__(self, files: ModuleTable):
        self.files = files
        self.graph: DependencyGraph = build_graph(files)

    @classmethod
    def from_parsed(cls, parsed: Mapping[str, ParsedFile]) -> "ProjectAnalyzer":
        return cls(ModuleTable.build(parsed))

    @classmethod
    def from_sources(cls, sources: Mapping[str, str]) -> "ProjectAnalyzer":
        return cls.from_parsed({path: parse_module(path, text) for path, text in sources.items()})

    def compute_reachable(self, entrypoints: Iterable[str]) -> frozenset[str]:
        return compute_reachable(self.graph, self.files.paths(), entrypoints)

    def find_unused_exports(self) -> list[UnusedExport]:
        return find_unused_exports(self.files, self.graph)

    def analyze(self, entrypoints: Iterable[str]) -> AnalysisResult:
        return AnalysisResult(
            reachable_files=sorted(self.compute_reachable(entrypoints)),
            unused_exports=self.find_unused_exports(),
        )


def load_project(
    root: Union[str, Path],
    entries: Iterable[str] = (),
    excluded_dirs: Optional[Iterable[str]] = None,
) -> tuple[ProjectAnalyzer, list[str]]:
    """Collect and parse `root`; return the analyzer and the entrypoints to start from.

    `entries` are made relative to the root. When none are given, the
    conventional entry files that exist are used instead.
    """
    root = Path(root)
    sources = collect_sources(root, None if excluded_dirs is None else frozenset(excluded_dirs))
    analyzer = ProjectAnalyzer.from_sources(sources)

    entrypoints = [relative_entrypoint(root, e) for e in entries]
    if not entrypoints:
        entrypoints = default_entrypoints(analyzer.files.paths())
        if entrypoints:
            logger.info("No entrypoints given, using defaults: %s", ", ".join(entrypoints))
        else:
            logger.warning("No entrypoints given and none of the default entry files exist under %s", root)
    return analyzer, entrypoints


def analyze(
    root: Union[str, Path],
    entries: Iterable[str] = (),
    excluded_dirs: Optional[Iterable[str]] = None,
) -> AnalysisResult:
    """Scan `root` and analyze it from `entries` (default entry files if empty)."""
    analyzer, entrypoints = load_project(root, entries, excluded_dirs)
    return analyzer.analyze(entrypoints)
