"""Collect JS/TS sources from disk.

Keys are POSIX paths relative to the scanned root, so results are stable no
matter where the scan runs from.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import AbstractSet, Iterable, Optional

from tsreach.config import DEFAULT_ENTRYPOINTS, EXCLUDED_DIRS, SOURCE_EXTENSIONS
from tsreach.errors import RootNotFoundError
from tsreach.resolve import canonicalize

logger = logging.getLogger(__name__)


def is_source_file(p: Path) -> bool:
    return p.suffix.lower() in SOURCE_EXTENSIONS


def read_text(p: Path) -> str:
    try:
        return p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        # Analyzed as an empty module; one bad file must not sink the scan.
        logger.warning("Could not read %s: %s", p, e)
        return ""


def collect_sources(root: Path, excluded_dirs: Optional[AbstractSet[str]] = None) -> dict[str, str]:
    """Map relative module path -> source text for every script file under `root`."""
    root = Path(root)
    if not root.is_dir():
        raise RootNotFoundError(root)

    skip = EXCLUDED_DIRS if excluded_dirs is None else excluded_dirs
    sources: dict[str, str] = {}
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if d not in skip)
        for name in sorted(filenames):
            p = Path(dirpath) / name
            if not is_source_file(p):
                continue
            sources[p.relative_to(root).as_posix()] = read_text(p)

    logger.debug("Collected %d source files under %s", len(sources), root)
    return sources


def relative_entrypoint(root: Path, entry: str) -> str:
    """Express `entry` relative to `root`.

    An entry spelled with the root as prefix (absolute or not) has it
    stripped; anything else is taken as already relative to the root.
    """
    p = Path(entry)
    for base in (Path(root), Path(root).resolve()):
        try:
            return canonicalize(p.relative_to(base).as_posix())
        except ValueError:
            continue
    return canonicalize(p.as_posix())


def default_entrypoints(files: AbstractSet[str], candidates: Iterable[str] = DEFAULT_ENTRYPOINTS) -> list[str]:
    """Conventional entry files that exist among `files`, in probe order."""
    return [c for c in candidates if c in files]
