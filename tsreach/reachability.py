"""Entrypoint reachability over the dependency graph."""

from __future__ import annotations

import logging
from typing import AbstractSet, Iterable

from tsreach.graph import DependencyGraph
from tsreach.resolve import canonicalize

logger = logging.getLogger(__name__)


def compute_reachable(
    graph: DependencyGraph,
    files: AbstractSet[str],
    entrypoints: Iterable[str],
) -> frozenset[str]:
    """Return every module reachable from `entrypoints`, the entrypoints included.

    Entrypoints are canonicalized first; those not in `files` are dropped.
    """
    visited: set[str] = set()
    stack: list[str] = []

    for ep in entrypoints:
        path = canonicalize(ep)
        if path not in files:
            logger.debug("Entrypoint %s is not an analyzed file; skipping", ep)
            continue
        if path not in visited:
            visited.add(path)
            stack.append(path)

    while stack:
        node = stack.pop()
        for dep in graph.dependencies(node):
            if dep not in visited:
                visited.add(dep)
                stack.append(dep)

    return frozenset(visited)
