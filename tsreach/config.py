"""Static configuration for tsreach.

Defaults live here as module constants; a few can be overridden through
environment variables so CI jobs can tune a scan without extra flags.
"""

from __future__ import annotations

import os

# Files collected from disk.
SOURCE_EXTENSIONS = (".ts", ".tsx", ".js", ".jsx", ".vue")

# Extensions tried (in this order) when resolving an extensionless specifier.
RESOLVE_EXTENSIONS = (".ts", ".tsx", ".js", ".jsx")

# Suffixes that a specifier may carry and that get swapped rather than extended,
# e.g. `./utils.js` written in a TS project resolves to `utils.ts`.
SCRIPT_EXTENSIONS = (".ts", ".tsx", ".js", ".jsx", ".mjs", ".cjs")

# Probed in order when no entrypoint is given.
DEFAULT_ENTRYPOINTS = (
    "src/index.ts",
    "src/index.tsx",
    "index.ts",
    "index.tsx",
    "src/main.ts",
    "src/main.tsx",
)

_BASE_EXCLUDED_DIRS = frozenset(
    {
        "node_modules",
        ".git",
        ".next",
        ".nuxt",
        ".svelte-kit",
        ".cache",
        "coverage",
    }
)


def _env_list(name: str) -> frozenset[str]:
    raw = os.environ.get(name, "")
    return frozenset(part.strip() for part in raw.split(",") if part.strip())


EXCLUDED_DIRS = _BASE_EXCLUDED_DIRS | _env_list("TSREACH_EXCLUDE_DIRS")

LOG_LEVEL = os.environ.get("TSREACH_LOG_LEVEL", "WARNING").upper()
