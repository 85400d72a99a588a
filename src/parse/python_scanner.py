"""Line-oriented import, export and complexity scanner for Python sources.

No grammar is involved. Physical lines are first assembled into logical
lines (backslash continuations, open brackets and triple-quoted strings are
joined), string contents are blanked and comments dropped, and then a small
set of anchored regexes is matched against each logical line.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from models.metrics import FunctionComplexity
from models.modules import ImportRecord, ModuleInfo
from parse.base import (
    ExtractionResult,
    count_code_lines,
    count_lines,
    dedupe,
    read_source,
)
from utils import strip_extension

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

_IMPORT_RE = re.compile(r"^import\s+(.+)$")
_FROM_IMPORT_RE = re.compile(r"^from\s+(\.+[\w.]*|[\w.]+)\s+import\s+(.+)$")
_DEF_RE = re.compile(r"^(?:async\s+)?def\s+(\w+)\s*\(")
_CLASS_RE = re.compile(r"^class\s+(\w+)")
_CONSTANT_RE = re.compile(r"^([A-Z][A-Z0-9_]*)\s*(?::[^=]+)?=(?!=)")
_ALL_RE = re.compile(r"^__all__\s*(?::[^=]+)?\+?=\s*[\[(](.*)[\])]", re.S)
_QUOTED_NAME_RE = re.compile(r"""['"](\w+)['"]""")

_BRANCH_RE = re.compile(r"^(?:if|elif|while|for|async\s+for|except)\b")
_TERNARY_RE = re.compile(r"\s+if\s+.+?\s+else\b")
_BOOLEAN_RE = re.compile(r"\b(?:and|or)\b")
_BLOCK_RE = re.compile(
    r"^(?:if|elif|else|for|async\s+for|while|try|except|finally|with|async\s+with)\b"
)
_SOFT_BLOCK_RE = re.compile(r"^(?:match|case)\b.*:$")

_COMMENT_PREFIXES = ("#",)

_OPENERS = "([{"
_CLOSERS = ")]}"


@dataclass(frozen=True)
class _LogicalLine:
    start: int
    end: int
    indent: int
    raw: str
    code: str


def _strip_line(text: str, quote: str | None) -> tuple[str, str | None, int]:
    """Blank string contents and drop a trailing comment.

    ``quote`` is the string delimiter still open from a previous physical
    line, if any. Returns the cleaned text, the delimiter left open at the end
    of this line, and the net bracket depth change.
    """
    out: list[str] = []
    depth = 0
    i = 0
    n = len(text)
    while i < n:
        if quote is not None:
            if text.startswith(quote, i):
                out.append(quote)
                i += len(quote)
                quote = None
            elif text[i] == "\\":
                i += 2
            else:
                i += 1
            continue

        ch = text[i]
        if ch == "#":
            break
        if ch in "\"'":
            quote = text[i : i + 3] if text[i : i + 3] in ('"""', "'''") else ch
            out.append(quote)
            i += len(quote)
            continue
        if ch in _OPENERS:
            depth += 1
        elif ch in _CLOSERS:
            depth -= 1
        out.append(ch)
        i += 1

    if quote is not None and len(quote) == 1:
        # Single-quoted strings cannot span lines.
        quote = None
    return "".join(out), quote, depth


def _logical_lines(source: str) -> Iterator[_LogicalLine]:
    physical = source.splitlines()
    i = 0
    while i < len(physical):
        raw_line = physical[i]
        stripped = raw_line.strip()
        if not stripped or stripped.startswith("#"):
            i += 1
            continue

        start = i
        indent = len(raw_line) - len(raw_line.lstrip())
        code, quote, depth = _strip_line(stripped, None)
        raw_parts = [stripped]
        code_parts = [code.rstrip()]

        while (
            quote is not None or depth > 0 or code_parts[-1].endswith("\\")
        ) and i + 1 < len(physical):
            if code_parts[-1].endswith("\\"):
                code_parts[-1] = code_parts[-1][:-1].rstrip()
                raw_parts[-1] = raw_parts[-1].rstrip("\\").rstrip()
            i += 1
            nxt = physical[i].strip()
            piece, quote, delta = _strip_line(nxt, quote)
            depth += delta
            raw_parts.append(nxt)
            code_parts.append(piece.rstrip())

        yield _LogicalLine(
            start=start + 1,
            end=i + 1,
            indent=indent,
            raw=" ".join(raw_parts),
            code=" ".join(part for part in code_parts if part),
        )
        i += 1


def _split_names(text: str) -> list[str]:
    """Split ``a, b as c, (d)`` into the imported names ``[a, b, d]``."""
    names: list[str] = []
    for part in text.strip().strip("()").split(","):
        name = part.strip().split(" as ")[0].strip()
        if name:
            names.append(name)
    return names


def _parse_import(line: _LogicalLine) -> list[ImportRecord]:
    from_match = _FROM_IMPORT_RE.match(line.code)
    if from_match:
        module, imported = from_match.groups()
        return [
            ImportRecord(
                specifier=module,
                kind="import",
                names=_split_names(imported),
                line=line.start,
            )
        ]

    import_match = _IMPORT_RE.match(line.code)
    if import_match:
        return [
            ImportRecord(specifier=module, kind="import", names=[module], line=line.start)
            for module in _split_names(import_match.group(1))
        ]
    return []


def _parse_exports(line: _LogicalLine) -> list[str]:
    """Exports declared by a top-level logical line."""
    all_match = _ALL_RE.match(line.raw)
    if all_match:
        return _QUOTED_NAME_RE.findall(all_match.group(1))

    for pattern in (_DEF_RE, _CLASS_RE):
        match = pattern.match(line.code)
        if match:
            name = match.group(1)
            return [] if name.startswith("_") else [name]

    constant = _CONSTANT_RE.match(line.code)
    if constant:
        return [constant.group(1)]
    return []


def _count_parameters(code: str, open_index: int) -> int:
    """Count parameters in the parenthesized list starting at ``open_index``.

    ``self``/``cls`` and the bare ``*`` and ``/`` separators are not counted.
    """
    params: list[str] = []
    current: list[str] = []
    depth = 0
    for ch in code[open_index:]:
        if ch in _OPENERS:
            depth += 1
            if depth == 1:
                continue
        elif ch in _CLOSERS:
            depth -= 1
            if depth == 0:
                break
        if depth == 1 and ch == ",":
            params.append("".join(current))
            current = []
            continue
        current.append(ch)
    params.append("".join(current))

    count = 0
    for param in params:
        name = param.split(":")[0].split("=")[0].strip()
        if name and name not in ("*", "/", "self", "cls"):
            count += 1
    return count


def _decision_points(code: str) -> int:
    points = len(_BOOLEAN_RE.findall(code))
    if _BRANCH_RE.match(code):
        points += 1
    if _TERNARY_RE.search(code):
        points += 1
    return points


def _opens_block(code: str) -> bool:
    return bool(_BLOCK_RE.match(code) or _SOFT_BLOCK_RE.match(code))


@dataclass
class _OpenFunction:
    name: str
    start_line: int
    indent: int
    parameter_count: int
    complexity: int = 1
    max_nesting_depth: int = 0
    blocks: list[int] = field(default_factory=list)

    def observe(self, line: _LogicalLine) -> None:
        while self.blocks and line.indent <= self.blocks[-1]:
            self.blocks.pop()
        if _opens_block(line.code):
            self.blocks.append(line.indent)
            self.max_nesting_depth = max(self.max_nesting_depth, len(self.blocks))
        self.complexity += _decision_points(line.code)

    def close(self, end_line: int) -> FunctionComplexity:
        return FunctionComplexity(
            name=self.name,
            start_line=self.start_line,
            end_line=max(end_line, self.start_line),
            complexity=self.complexity,
            parameter_count=self.parameter_count,
            max_nesting_depth=self.max_nesting_depth,
        )


def scan_python_source(
    source: str,
) -> tuple[list[ImportRecord], list[str], list[FunctionComplexity]]:
    """Scan Python source text.

    Returns:
        The import records, the exported names, and one
        :class:`FunctionComplexity` per ``def``/``async def`` ordered by
        start line.
    """
    imports: list[ImportRecord] = []
    exports: list[str] = []
    finished: list[FunctionComplexity] = []
    open_functions: list[_OpenFunction] = []
    last_end = 0

    for line in _logical_lines(source):
        while open_functions and line.indent <= open_functions[-1].indent:
            finished.append(open_functions.pop().close(last_end))

        imports.extend(_parse_import(line))
        if line.indent == 0:
            exports.extend(_parse_exports(line))

        def_match = _DEF_RE.match(line.code)
        if def_match:
            open_functions.append(
                _OpenFunction(
                    name=def_match.group(1),
                    start_line=line.start,
                    indent=line.indent,
                    parameter_count=_count_parameters(line.code, def_match.end() - 1),
                )
            )
        elif open_functions:
            open_functions[-1].observe(line)
        last_end = line.end

    while open_functions:
        finished.append(open_functions.pop().close(last_end))

    finished.sort(key=lambda fn: fn.start_line)
    return imports, exports, finished


def extract_python(path: Path, rel_path: str) -> ExtractionResult:
    """Extract module info, imports and function complexity from a .py file.

    Raises:
        FileParseError: If the file cannot be read or decoded.
    """
    raw, text = read_source(path)
    imports, exports, functions = scan_python_source(text)

    module = ModuleInfo(
        path=rel_path,
        name=strip_extension(path.name),
        language="python",
        imports=dedupe(record.specifier for record in imports),
        exports=dedupe(exports),
        size=len(raw),
        lines=count_lines(text),
    )
    return ExtractionResult(
        module=module,
        imports=imports,
        functions=functions,
        lines_of_code=count_code_lines(text, _COMMENT_PREFIXES),
    )


__all__ = ["extract_python", "scan_python_source"]
