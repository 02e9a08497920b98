"""Exceptions raised by tsreach.

The analysis itself never raises for degenerate input; only the filesystem
boundary does.
"""

from __future__ import annotations


class TsreachError(Exception):
    pass


class RootNotFoundError(TsreachError):
    def __init__(self, root):
        super().__init__(f"Root directory not found: {root}")
        self.root = root
