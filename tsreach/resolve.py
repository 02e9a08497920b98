"""Module path canonicalization and relative specifier resolution.

Everything here is string algebra over POSIX-style paths; the filesystem is
never consulted, so resolution is a pure function of its inputs.
"""

from __future__ import annotations

import posixpath
from typing import AbstractSet, Optional

from tsreach.config import RESOLVE_EXTENSIONS, SCRIPT_EXTENSIONS


def canonicalize(path: str) -> str:
    """Slash-normalize `path` and fold `.`/`..` segments without touching disk."""
    p = str(path).replace("\\", "/")
    if not p:
        return "."
    p = posixpath.normpath(p)
    # normpath keeps a leading "//" (POSIX implementation-defined root).
    if p.startswith("//"):
        p = "/" + p.lstrip("/")
    return p


def is_relative(specifier: str) -> bool:
    return specifier.startswith(".")


def _with_extension(candidate: str, ext: str) -> Optional[str]:
    head, base = posixpath.split(candidate)
    if base in ("", ".", ".."):
        return None
    stem, suffix = posixpath.splitext(base)
    if suffix in SCRIPT_EXTENSIONS:
        base = stem + ext
    else:
        base = base + ext
    return posixpath.join(head, base) if head else base


def resolve_specifier(from_path: str, specifier: str, file_set: AbstractSet[str]) -> Optional[str]:
    """Resolve `specifier` as written in `from_path` to a member of `file_set`.

    Tries, first match wins: the candidate with each of RESOLVE_EXTENSIONS,
    the candidate as written, then `candidate/index.<ext>`. Non-relative
    (package) specifiers and misses return None.
    """
    if not specifier or not is_relative(specifier):
        return None

    candidate = canonicalize(posixpath.join(posixpath.dirname(from_path), specifier))

    for ext in RESOLVE_EXTENSIONS:
        with_ext = _with_extension(candidate, ext)
        if with_ext is not None and with_ext in file_set:
            return with_ext

    if candidate in file_set:
        return candidate

    for ext in RESOLVE_EXTENSIONS:
        index = canonicalize(posixpath.join(candidate, "index" + ext))
        if index in file_set:
            return index

    return None
