"""Unused-export resolution.

An export is used when some importer asks for it directly, or when a module
re-exporting it under the same name is itself consumed for that name. Barrels
chain: a wildcard or same-name re-export of a re-export still counts, however
many hops deep. Renaming re-exports (`export { foo as bar } from`) start a new
name and are not traced back to `foo`.
"""

from __future__ import annotations

from typing import Mapping

from tsreach.graph import DependencyGraph
from tsreach.records import NamedExport, ParsedFile, UnusedExport


def is_directly_used(graph: DependencyGraph, path: str, name: str) -> bool:
    return any(record.uses(name) for _importer, record in graph.importers(path))


def _consumed_via_reexport(graph: DependencyGraph, path: str, name: str) -> bool:
    seen = {path}
    stack = [path]
    while stack:
        current = stack.pop()
        for reexporter, forwarded in graph.reexporters_of(current):
            if forwarded is not None and forwarded != name:
                continue
            if reexporter in seen:
                continue
            if is_directly_used(graph, reexporter, name):
                return True
            seen.add(reexporter)
            stack.append(reexporter)
    return False


def is_export_used(graph: DependencyGraph, path: str, name: str) -> bool:
    if is_directly_used(graph, path, name):
        return True
    return _consumed_via_reexport(graph, path, name)


def find_unused_exports(files: Mapping[str, ParsedFile], graph: DependencyGraph) -> list[UnusedExport]:
    """Every (file, name) named export with no consumer, sorted by file then name."""
    unused: set[UnusedExport] = set()
    for path, parsed in files.items():
        for item in parsed.exports:
            if not isinstance(item, NamedExport):
                continue
            if not is_export_used(graph, path, item.name):
                unused.add(UnusedExport(path, item.name))
    return sorted(unused)
