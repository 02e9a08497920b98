"""Dependency graph, usage index and re-exporter index for a ModuleTable."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from types import MappingProxyType
from typing import Mapping, Optional

from tsreach.records import AllExport, ImportRecord, ModuleTable, NamedExport
from tsreach.resolve import is_relative, resolve_specifier

logger = logging.getLogger(__name__)

UsageEntry = tuple[str, ImportRecord]
# (re-exporting module, forwarded name); name is None for `export * from`.
ReexportEntry = tuple[str, Optional[str]]


@dataclass(frozen=True)
class DependencyGraph:
    edges: Mapping[str, frozenset[str]]
    usage: Mapping[str, tuple[UsageEntry, ...]]
    reexporters: Mapping[str, tuple[ReexportEntry, ...]]

    def dependencies(self, path: str) -> frozenset[str]:
        return self.edges.get(path, frozenset())

    def importers(self, path: str) -> tuple[UsageEntry, ...]:
        return self.usage.get(path, ())

    def reexporters_of(self, path: str) -> tuple[ReexportEntry, ...]:
        return self.reexporters.get(path, ())


def _resolve(path: str, specifier: str, file_set: frozenset[str]) -> Optional[str]:
    target = resolve_specifier(path, specifier, file_set)
    if target is None and is_relative(specifier):
        logger.debug("Unresolved specifier %r in %s", specifier, path)
    return target


def build_graph(table: ModuleTable) -> DependencyGraph:
    """Derive edges, usage index and re-exporter index from `table`.

    Imports contribute to the usage index; re-exports only to the edges and
    the re-exporter index. Unresolvable or package specifiers add nothing.
    """
    file_set = table.paths()
    edges: dict[str, set[str]] = {}
    usage: dict[str, list[UsageEntry]] = {}
    reexporters: dict[str, list[ReexportEntry]] = {}

    for path in sorted(table):
        parsed = table[path]

        for record in parsed.imports:
            target = _resolve(path, record.source, file_set)
            if target is None:
                continue
            edges.setdefault(path, set()).add(target)
            usage.setdefault(target, []).append((path, record))

        for item in parsed.exports:
            if isinstance(item, AllExport):
                specifier, forwarded = item.source, None
            elif isinstance(item, NamedExport) and item.source is not None:
                specifier, forwarded = item.source, item.name
            else:
                continue
            target = _resolve(path, specifier, file_set)
            if target is None:
                continue
            edges.setdefault(path, set()).add(target)
            if target != path:
                reexporters.setdefault(target, []).append((path, forwarded))

    return DependencyGraph(
        edges=MappingProxyType({k: frozenset(v) for k, v in edges.items()}),
        usage=MappingProxyType({k: tuple(v) for k, v in usage.items()}),
        reexporters=MappingProxyType({k: tuple(v) for k, v in reexporters.items()}),
    )
