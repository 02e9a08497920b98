"""Per-file import/export records and the module table built from them."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from types import MappingProxyType
from typing import Iterator, Mapping, Optional, Union

from tsreach.resolve import canonicalize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImportRecord:
    source: str
    # Names as exported by the target module; empty for side-effect and namespace imports.
    specifiers: frozenset[str] = frozenset()
    has_namespace: bool = False
    has_default: bool = False

    def uses(self, name: str) -> bool:
        """Whether this import consumes the export `name` of its target."""
        if self.has_namespace:
            return True
        if name == "default" and self.has_default:
            return True
        return name in self.specifiers


@dataclass(frozen=True)
class NamedExport:
    name: str
    source: Optional[str] = None  # set for `export { name } from "..."`


@dataclass(frozen=True)
class AllExport:
    source: str


ExportItem = Union[NamedExport, AllExport]


@dataclass(frozen=True)
class ParsedFile:
    imports: tuple[ImportRecord, ...] = ()
    exports: tuple[ExportItem, ...] = ()


@dataclass(frozen=True, order=True)
class UnusedExport:
    file: str
    name: str


class ModuleTable(Mapping[str, ParsedFile]):
    """Read-only mapping of canonical module path -> ParsedFile.

    Keys are canonicalized on the way in. When two raw paths collapse to
    the same key, the first in sorted order is kept.
    """

    def __init__(self, files: Optional[Mapping[str, ParsedFile]] = None):
        files = files or {}
        table: dict[str, ParsedFile] = {}
        for raw in sorted(files):
            key = canonicalize(raw)
            if key in table:
                logger.warning("Duplicate module path %s (from %s); keeping the first", key, raw)
                continue
            table[key] = files[raw]
        self._files = MappingProxyType(table)

    @classmethod
    def build(cls, parsed: Mapping[str, ParsedFile]) -> "ModuleTable":
        return cls(parsed)

    def __getitem__(self, key: str) -> ParsedFile:
        return self._files[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._files)

    def __len__(self) -> int:
        return len(self._files)

    def paths(self) -> frozenset[str]:
        return frozenset(self._files)
