"""Lightweight import/export record extraction for JS/TS sources.

Goal:
- Turn raw module text into the ImportRecord/ExportItem shape the graph
  works on, without a real JS/TS parser (regex-based, dependency-free).

Notes:
- Only top-level statements are considered; `export` inside a namespace
  body or a function does not count as a module export.
- `import type` / `export type` are kept. Type-only edges are treated
  exactly like value edges so that unused types get reported too.
- Dynamic `import()` and CommonJS `require()` are not followed.
- Extraction never raises; anything unrecognized yields no records.
- Vue single-file components contribute their `<script>` blocks only.
"""

from __future__ import annotations

import re
from typing import Iterator, Sequence

from tsreach.records import AllExport, ExportItem, ImportRecord, NamedExport, ParsedFile

_IDENT = r"(?:[^\W\d]|\$)[\w$]*"

IMPORT_FROM_RE = re.compile(
    r"\bimport\s+(?:type\s+)?(?P<clause>[\w$*\s{},]+?)\s*\bfrom\s*[\"'](?P<src>[^\"']+)[\"']",
    re.MULTILINE,
)
IMPORT_SIDE_EFFECT_RE = re.compile(r"\bimport\s*[\"'](?P<src>[^\"']+)[\"']", re.MULTILINE)

EXPORT_NAMED_FROM_RE = re.compile(
    r"\bexport\s+(?:type\s+)?\{(?P<names>[^}]*)\}\s*from\s*[\"'](?P<src>[^\"']+)[\"']",
    re.MULTILINE,
)
EXPORT_STAR_FROM_RE = re.compile(
    rf"\bexport\s+(?:type\s+)?\*(?:\s*as\s+{_IDENT})?\s*from\s*[\"'](?P<src>[^\"']+)[\"']",
    re.MULTILINE,
)
EXPORT_LOCAL_LIST_RE = re.compile(
    r"\bexport\s+(?:type\s+)?\{(?P<names>[^}]*)\}(?!\s*from\b)",
    re.MULTILINE,
)
EXPORT_DEFAULT_RE = re.compile(r"\bexport\s+default\b", re.MULTILINE)
EXPORT_DECL_RE = re.compile(
    r"\bexport\s+(?:declare\s+)?(?:(?:abstract|async)\s+)*"
    r"(?P<kind>function\s*\*?|class|interface|type|const\s+enum|enum|namespace|module)"
    rf"\s*(?P<name>{_IDENT})",
    re.MULTILINE,
)
EXPORT_VAR_RE = re.compile(r"\bexport\s+(?:declare\s+)?(?:const|let|var)\s+(?!enum\b)", re.MULTILINE)

DECLARATOR_RE = re.compile(rf"\s*(?P<name>{_IDENT})\s*(?:[!:=]|$)")
_WHITESPACE_RE = re.compile(r"\s*")

_OPENERS = {"(": ")", "[": "]", "{": "}"}
_CLOSERS = {")", "]", "}"}

# A line ending like this continues onto the next one.
_CONTINUES_AFTER = (",", "=", "+", "-", "*", "/", "?", ":", "&&", "||", "(", "=>")
_CONTINUES_BEFORE = (",", ".", "?", ":", "+", "-", "*", "/", "&&", "||", "=")

# Words that may be directly followed by a string literal.
_STRING_OPERAND_WORDS = frozenset(
    {
        "as", "await", "case", "declare", "default", "delete", "do", "else",
        "export", "extends", "from", "import", "in", "instanceof", "is", "keyof",
        "module", "new", "of", "return", "satisfies", "throw", "typeof", "void",
        "yield",
    }
)

VUE_SCRIPT_RE = re.compile(r"<script\b[^>]*>(?P<body>.*?)</script\s*>", re.IGNORECASE | re.DOTALL)


def _is_word_char(ch: str) -> bool:
    return ch.isalnum() or ch in "_$"


def _opens_string(chars: Sequence[str], i: int) -> bool:
    """Whether a `'` or `"` at offset `i`, after `chars[:i]`, starts a string literal.

    A quote right after a word, a closing bracket or a JSX `>` is JSX text
    (`<p>Don't</p>`, `{name}'s`), unless the word takes a string operand
    (`from 'x'`, `return 'x'`).
    """
    j = i - 1
    while j >= 0 and chars[j].isspace():
        j -= 1
    if j < 0:
        return True
    prev = chars[j]
    if prev == ">":
        return j > 0 and chars[j - 1] == "="
    if prev in ")]}":
        return False
    if not _is_word_char(prev):
        return True
    k = j
    while k >= 0 and _is_word_char(chars[k]):
        k -= 1
    return "".join(chars[k + 1 : j + 1]) in _STRING_OPERAND_WORDS


def strip_comments(text: str) -> str:
    """Drop `//` and `/* */` comments outside string literals.

    Newlines inside block comments are kept. Regex literals are not
    recognized; this is only meant to reduce regex overreach.
    """
    out: list[str] = []
    quote = ""
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if quote:
            out.append(ch)
            if ch == "\\" and i + 1 < n:
                out.append(text[i + 1])
                i += 2
                continue
            if ch == quote or (ch == "\n" and quote != "`"):
                quote = ""
            i += 1
            continue
        if ch in "\"'`" and (ch == "`" or _opens_string(out, len(out))):
            quote = ch
            out.append(ch)
            i += 1
        elif text.startswith("//", i):
            end = text.find("\n", i)
            i = n if end == -1 else end
        elif text.startswith("/*", i):
            end = text.find("*/", i + 2)
            end = n if end == -1 else end + 2
            out.append("\n" * text.count("\n", i, end) or " ")
            i = end
        else:
            out.append(ch)
            i += 1
    return "".join(out)


def _scan(text: str, start: int = 0) -> Iterator[tuple[int, str, bool]]:
    """Yield (offset, char, quoted) from `start`; quoted covers string literals.

    An unterminated '...' or "..." literal ends at the end of its line.
    """
    quote = ""
    i = start
    n = len(text)
    while i < n:
        ch = text[i]
        if quote:
            if ch == "\\" and i + 1 < n:
                yield i, ch, True
                yield i + 1, text[i + 1], True
                i += 2
                continue
            if ch == quote or (ch == "\n" and quote != "`"):
                quote = ""
            yield i, ch, True
        elif ch in "\"'`" and (ch == "`" or _opens_string(text, i)):
            quote = ch
            yield i, ch, True
        else:
            yield i, ch, False
        i += 1


def brace_depths(text: str) -> list[int]:
    """Curly-brace depth at every offset of `text`; -1 inside string literals."""
    depths = [0] * len(text)
    depth = 0
    for i, ch, quoted in _scan(text):
        if quoted:
            depths[i] = -1
        elif ch == "{":
            depths[i] = depth
            depth += 1
        elif ch == "}":
            depth = max(depth - 1, 0)
            depths[i] = depth
        else:
            depths[i] = depth
    return depths


def _split_top_level(text: str, sep: str = ",") -> list[str]:
    parts: list[str] = []
    depth = 0
    start = 0
    for i, ch, quoted in _scan(text):
        if quoted:
            continue
        if ch in _OPENERS:
            depth += 1
        elif ch in _CLOSERS:
            depth = max(depth - 1, 0)
        elif ch == sep and depth == 0:
            parts.append(text[start:i])
            start = i + 1
    parts.append(text[start:])
    return parts


def _matching_close(text: str) -> int:
    """Offset of the bracket closing `text[0]`, or len(text) if unbalanced."""
    depth = 0
    for i, ch, quoted in _scan(text):
        if quoted:
            continue
        if ch in _OPENERS:
            depth += 1
        elif ch in _CLOSERS:
            depth -= 1
            if depth == 0:
                return i
    return len(text)


def _specifier_names(names: str) -> list[tuple[str, str]]:
    """Split `a, b as c, type d` into (local, exported) pairs."""
    pairs: list[tuple[str, str]] = []
    for part in names.split(","):
        token = " ".join(part.split())
        if not token:
            continue
        token = re.sub(r"^type\s+", "", token)
        if " as " in token:
            left, right = token.split(" as ", 1)
            pairs.append((left.strip().strip("\"'"), right.strip().strip("\"'")))
        else:
            name = token.strip("\"'")
            pairs.append((name, name))
    return pairs


def parse_import_clause(clause: str) -> tuple[frozenset[str], bool, bool]:
    """Return (specifiers, has_namespace, has_default) for an import clause.

    Specifiers are the names as exported by the target: `{ a as b }` yields
    `a`, `{ default as X }` yields `default`.
    """
    specifiers: set[str] = set()
    has_namespace = False
    has_default = False

    for part in _split_top_level(clause.strip()):
        token = part.strip()
        if not token:
            continue
        if token.startswith("*"):
            has_namespace = True
        elif token.startswith("{"):
            inner = token[1 : _matching_close(token)]
            for imported, _local in _specifier_names(inner):
                specifiers.add(imported)
        else:
            has_default = True

    return frozenset(specifiers), has_namespace, has_default


def _binding_names(pattern: str) -> list[str]:
    """Names bound by a declaration target: `a`, `{ a, b: c, ...d }`, `[e, f = 1]`."""
    pattern = pattern.strip()
    if not pattern:
        return []
    if pattern[0] not in "{[":
        m = re.match(_IDENT, pattern)
        return [m.group(0)] if m else []

    is_object = pattern[0] == "{"
    names: list[str] = []
    for element in _split_top_level(pattern[1 : _matching_close(pattern)]):
        element = _split_top_level(element, "=")[0].strip()
        if element.startswith("..."):
            element = element[3:]
        elif is_object and ":" in element:
            element = _split_top_level(element, ":")[-1]
        names.extend(_binding_names(element))
    return names


def _declaration_extent(text: str, start: int) -> str:
    """Text of a `const/let/var` declaration list starting at `start`.

    Ends at a top-level `;`, an unmatched closing bracket, or a top-level
    newline that does not continue the expression (ASI).
    """
    depth = 0
    end = len(text)
    for i, ch, quoted in _scan(text, start):
        if quoted:
            continue
        if ch in _OPENERS:
            depth += 1
        elif ch in _CLOSERS:
            if depth == 0:
                end = i
                break
            depth -= 1
        elif depth == 0 and ch == ";":
            end = i
            break
        elif depth == 0 and ch == "\n":
            before = text[start:i].rstrip()
            after = text[_WHITESPACE_RE.match(text, i).end() :]
            if not before.endswith(_CONTINUES_AFTER) and not after.startswith(_CONTINUES_BEFORE):
                end = i
                break
    return text[start:end]


def _declared_variables(text: str, start: int) -> list[str]:
    names: list[str] = []
    for declarator in _split_top_level(_declaration_extent(text, start)):
        target = declarator.strip()
        if not target:
            continue
        if target[0] in "{[":
            names.extend(_binding_names(target[: _matching_close(target) + 1]))
            continue
        # `a`, `a = 1`, `a: T = 1`, `a!: T`; anything else is a split generic
        # argument like `number> = new Map()`.
        m = DECLARATOR_RE.match(target)
        if m:
            names.append(m.group("name"))
    return names


def parse_source(text: str) -> ParsedFile:
    """Extract the top-level import and export records of one module."""
    code = strip_comments(text)
    depths = brace_depths(code)

    def top_level(m: re.Match) -> bool:
        return depths[m.start()] == 0

    imports: list[tuple[int, ImportRecord]] = []
    exports: list[tuple[int, ExportItem]] = []

    for m in IMPORT_FROM_RE.finditer(code):
        if not top_level(m):
            continue
        specifiers, has_namespace, has_default = parse_import_clause(m.group("clause"))
        record = ImportRecord(
            source=m.group("src"),
            specifiers=specifiers,
            has_namespace=has_namespace,
            has_default=has_default,
        )
        imports.append((m.start(), record))

    for m in IMPORT_SIDE_EFFECT_RE.finditer(code):
        if top_level(m):
            imports.append((m.start(), ImportRecord(source=m.group("src"))))

    for m in EXPORT_NAMED_FROM_RE.finditer(code):
        if not top_level(m):
            continue
        for _local, exported in _specifier_names(m.group("names")):
            exports.append((m.start(), NamedExport(name=exported, source=m.group("src"))))

    for m in EXPORT_STAR_FROM_RE.finditer(code):
        if top_level(m):
            exports.append((m.start(), AllExport(source=m.group("src"))))

    for m in EXPORT_LOCAL_LIST_RE.finditer(code):
        if not top_level(m):
            continue
        for _local, exported in _specifier_names(m.group("names")):
            exports.append((m.start(), NamedExport(name=exported)))

    for m in EXPORT_DEFAULT_RE.finditer(code):
        if top_level(m):
            exports.append((m.start(), NamedExport(name="default")))

    for m in EXPORT_DECL_RE.finditer(code):
        if top_level(m):
            exports.append((m.start(), NamedExport(name=m.group("name"))))

    for m in EXPORT_VAR_RE.finditer(code):
        if not top_level(m):
            continue
        for name in _declared_variables(code, m.end()):
            exports.append((m.start(), NamedExport(name=name)))

    # Source order; stable within one statement.
    imports.sort(key=lambda pair: pair[0])
    exports.sort(key=lambda pair: pair[0])
    return ParsedFile(
        imports=tuple(record for _pos, record in imports),
        exports=tuple(item for _pos, item in exports),
    )


def vue_script_blocks(text: str) -> list[str]:
    """Bodies of the `<script>` / `<script setup>` blocks of a Vue SFC, in order."""
    return [m.group("body") for m in VUE_SCRIPT_RE.finditer(text)]


def parse_module(path: str, text: str) -> ParsedFile:
    """Like parse_source, but only the script blocks of a `.vue` file count."""
    if not path.lower().endswith(".vue"):
        return parse_source(text)
    blocks = [parse_source(body) for body in vue_script_blocks(text)]
    return ParsedFile(
        imports=tuple(record for parsed in blocks for record in parsed.imports),
        exports=tuple(item for parsed in blocks for item in parsed.exports),
    )
