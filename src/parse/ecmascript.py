"""Tree-sitter based extraction for TypeScript and JavaScript sources.

A single pass over the syntax tree collects imports, exports and per-function
cyclomatic complexity. The tree is walked with an explicit stack and every
node type of interest is mapped onto :class:`NodeKind`; anything else is only
descended into.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

import structlog
import tree_sitter_javascript as tsjs
import tree_sitter_typescript as tsts
from tree_sitter import Language, Node, Parser

from models.metrics import FunctionComplexity
from models.modules import ImportKind, ImportRecord, ModuleInfo
from parse.base import (
    ExtractionResult,
    count_code_lines,
    count_lines,
    dedupe,
    read_source,
)
from scan.languages import module_language
from utils import strip_extension

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

logger = structlog.get_logger(__name__)

_PARSERS: dict[str, Parser] = {}

_GRAMMAR_BY_SUFFIX = {
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".tsx": "tsx",
}

_COMMENT_PREFIXES = ("//", "/*", "*")


def _load_language(grammar: str) -> Language:
    if grammar == "typescript":
        return Language(tsts.language_typescript())
    if grammar == "tsx":
        return Language(tsts.language_tsx())
    return Language(tsjs.language())


def _get_parser(grammar: str) -> Parser:
    """Return a cached Tree-sitter parser for the given grammar."""
    parser = _PARSERS.get(grammar)
    if parser is None:
        parser = Parser(_load_language(grammar))
        _PARSERS[grammar] = parser
    return parser


class NodeKind(str, Enum):
    """Syntax node types the visitor reacts to."""

    IMPORT = "import_statement"
    EXPORT = "export_statement"
    CALL = "call_expression"
    ASSIGNMENT = "assignment_expression"
    FUNCTION_DECLARATION = "function_declaration"
    GENERATOR_DECLARATION = "generator_function_declaration"
    FUNCTION_EXPRESSION = "function_expression"
    FUNCTION = "function"
    GENERATOR_FUNCTION = "generator_function"
    ARROW_FUNCTION = "arrow_function"
    METHOD = "method_definition"
    IF = "if_statement"
    TERNARY = "ternary_expression"
    FOR = "for_statement"
    FOR_IN = "for_in_statement"
    WHILE = "while_statement"
    DO = "do_statement"
    SWITCH_CASE = "switch_case"
    CATCH = "catch_clause"
    BINARY = "binary_expression"
    TRY = "try_statement"
    SWITCH = "switch_statement"


_KINDS: dict[str, NodeKind] = {kind.value: kind for kind in NodeKind}

_NAMED_FUNCTION_KINDS = frozenset(
    {NodeKind.FUNCTION_DECLARATION, NodeKind.GENERATOR_DECLARATION, NodeKind.METHOD}
)

_FUNCTION_KINDS = _NAMED_FUNCTION_KINDS | {
    NodeKind.FUNCTION_EXPRESSION,
    NodeKind.FUNCTION,
    NodeKind.GENERATOR_FUNCTION,
    NodeKind.ARROW_FUNCTION,
}

_BRANCH_KINDS = frozenset(
    {
        NodeKind.IF,
        NodeKind.TERNARY,
        NodeKind.FOR,
        NodeKind.FOR_IN,
        NodeKind.WHILE,
        NodeKind.DO,
        NodeKind.SWITCH_CASE,
        NodeKind.CATCH,
    }
)

_NESTING_KINDS = frozenset(
    {
        NodeKind.IF,
        NodeKind.FOR,
        NodeKind.FOR_IN,
        NodeKind.WHILE,
        NodeKind.DO,
        NodeKind.TRY,
        NodeKind.SWITCH,
    }
)

_LOGICAL_OPERATORS = frozenset({"&&", "||", "??"})

_NAME_NODE_TYPES = frozenset(
    {
        "identifier",
        "property_identifier",
        "private_property_identifier",
        "shorthand_property_identifier",
        "type_identifier",
        "string",
    }
)


def _text(node: Node | None) -> str:
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8", errors="replace")


def _name_text(node: Node | None) -> str | None:
    """Text of an identifier-like node; quotes are stripped from strings."""
    if node is None or node.type not in _NAME_NODE_TYPES:
        return None
    text = _text(node)
    if node.type == "string":
        text = text[1:-1]
    return text or None


def _string_value(node: Node | None) -> str | None:
    """Literal value of a string or substitution-free template string."""
    if node is None:
        return None
    if node.type == "string":
        return _text(node)[1:-1]
    if node.type == "template_string" and not any(
        child.type == "template_substitution" for child in node.named_children
    ):
        return _text(node)[1:-1]
    return None


def _binding_names(pattern: Node | None) -> list[str]:
    """Names bound by a declarator target (identifier or destructuring)."""
    names: list[str] = []
    stack = [pattern]
    while stack:
        current = stack.pop()
        if current is None:
            continue
        if current.type in ("identifier", "shorthand_property_identifier_pattern"):
            names.append(_text(current))
        elif current.type == "pair_pattern":
            stack.append(current.child_by_field_name("value"))
        elif current.type in ("assignment_pattern", "object_assignment_pattern"):
            stack.append(current.child_by_field_name("left"))
        elif current.type in ("object_pattern", "array_pattern", "rest_pattern"):
            stack.extend(reversed(current.named_children))
    return names


def _declaration_names(declaration: Node) -> list[str]:
    if declaration.type == "ambient_declaration" and declaration.named_children:
        declaration = declaration.named_children[0]
    if declaration.type in ("lexical_declaration", "variable_declaration"):
        names: list[str] = []
        for declarator in declaration.named_children:
            if declarator.type == "variable_declarator":
                names.extend(_binding_names(declarator.child_by_field_name("name")))
        return names
    name = _name_text(declaration.child_by_field_name("name"))
    return [name] if name else []


def _import_clause_names(clause: Node) -> list[str]:
    names: list[str] = []
    for child in clause.named_children:
        if child.type == "identifier":
            names.append("default")
        elif child.type == "namespace_import":
            names.append("*")
        elif child.type == "named_imports":
            for specifier in child.named_children:
                if specifier.type != "import_specifier":
                    continue
                name = _name_text(specifier.child_by_field_name("name"))
                if name:
                    names.append(name)
    return names


def _count_parameters(node: Node) -> int:
    params = node.child_by_field_name("parameters")
    if params is None:
        # Arrow functions with a single bare parameter: ``x => x``.
        return 1 if node.child_by_field_name("parameter") is not None else 0
    return sum(1 for child in params.named_children if child.type != "comment")


@dataclass
class _FunctionFrame:
    name: str
    start_line: int
    end_line: int
    parameter_count: int
    complexity: int = 1
    max_nesting_depth: int = 0

    def to_model(self) -> FunctionComplexity:
        return FunctionComplexity(
            name=self.name,
            start_line=self.start_line,
            end_line=self.end_line,
            complexity=self.complexity,
            parameter_count=self.parameter_count,
            max_nesting_depth=self.max_nesting_depth,
        )


class _EcmaScriptVisitor:
    """Collects imports, exports and function complexity from one tree."""

    def __init__(self) -> None:
        self.imports: list[ImportRecord] = []
        self.exports: list[str] = []
        self.functions: list[_FunctionFrame] = []
        self._handlers: dict[NodeKind, Callable[[Node], None]] = {
            NodeKind.IMPORT: self._visit_import,
            NodeKind.EXPORT: self._visit_export,
            NodeKind.CALL: self._visit_call,
            NodeKind.ASSIGNMENT: self._visit_assignment,
        }

    def walk(self, root: Node) -> None:
        stack: list[tuple[Node, _FunctionFrame | None, int]] = [(root, None, 0)]
        while stack:
            node, frame, depth = stack.pop()
            kind = _KINDS.get(node.type) if node.is_named else None
            if kind is not None:
                frame, depth = self._visit(kind, node, frame, depth)
            stack.extend((child, frame, depth) for child in reversed(node.children))

    def _visit(
        self,
        kind: NodeKind,
        node: Node,
        frame: _FunctionFrame | None,
        depth: int,
    ) -> tuple[_FunctionFrame | None, int]:
        handler = self._handlers.get(kind)
        if handler is not None:
            handler(node)
            return frame, depth

        if kind in _FUNCTION_KINDS:
            opened = self._open_function(kind, node)
            if opened is not None:
                return opened, 0
            # Anonymous callbacks count toward the enclosing function.
            return frame, depth

        if frame is None:
            return frame, depth

        if kind in _BRANCH_KINDS:
            frame.complexity += 1
        elif kind is NodeKind.BINARY:
            operator = node.child_by_field_name("operator")
            if operator is not None and operator.type in _LOGICAL_OPERATORS:
                frame.complexity += 1

        if kind in _NESTING_KINDS:
            depth += 1
            frame.max_nesting_depth = max(frame.max_nesting_depth, depth)
        return frame, depth

    def _open_function(self, kind: NodeKind, node: Node) -> _FunctionFrame | None:
        name = self._function_name(kind, node)
        if name is None:
            return None
        frame = _FunctionFrame(
            name=name,
            start_line=node.start_point[0] + 1,
            end_line=node.end_point[0] + 1,
            parameter_count=_count_parameters(node),
        )
        self.functions.append(frame)
        return frame

    @staticmethod
    def _function_name(kind: NodeKind, node: Node) -> str | None:
        if kind in _NAMED_FUNCTION_KINDS:
            return _name_text(node.child_by_field_name("name"))

        parent = node.parent
        target: Node | None = None
        if parent is not None:
            if parent.type == "variable_declarator":
                target = parent.child_by_field_name("name")
            elif parent.type == "pair":
                target = parent.child_by_field_name("key")
            elif parent.type == "assignment_expression":
                target = parent.child_by_field_name("left")
                if target is not None and target.type == "member_expression":
                    target = target.child_by_field_name("property")
            elif parent.type in ("field_definition", "public_field_definition"):
                target = parent.child_by_field_name(
                    "property"
                ) or parent.child_by_field_name("name")

        name = _name_text(target)
        if name is None:
            # Named function expressions passed inline: ``on(function h() {})``.
            name = _name_text(node.child_by_field_name("name"))
        return name

    def _add_import(
        self,
        specifier: str | None,
        kind: ImportKind,
        names: list[str],
        node: Node,
    ) -> None:
        if not specifier:
            return
        self.imports.append(
            ImportRecord(
                specifier=specifier,
                kind=kind,
                names=names,
                line=node.start_point[0] + 1,
            )
        )

    def _visit_import(self, node: Node) -> None:
        source = node.child_by_field_name("source")
        kind: ImportKind = "import"
        names: list[str] = []
        for child in node.named_children:
            if child.type == "import_clause":
                names.extend(_import_clause_names(child))
            elif child.type == "import_require_clause" and source is None:
                # TypeScript: import fs = require("fs")
                source = child.child_by_field_name("source") or next(
                    (c for c in child.named_children if c.type == "string"), None
                )
                kind = "require"
                names.append("default")
        self._add_import(_string_value(source), kind, names, node)

    def _visit_export(self, node: Node) -> None:
        is_default = any(child.type == "default" for child in node.children)
        if is_default:
            self.exports.append("default")
        else:
            declaration = node.child_by_field_name("declaration")
            if declaration is not None:
                self.exports.extend(_declaration_names(declaration))

        reexported: list[str] = []
        for child in node.named_children:
            if child.type == "export_clause":
                for specifier in child.named_children:
                    if specifier.type != "export_specifier":
                        continue
                    local = _name_text(specifier.child_by_field_name("name"))
                    exported = (
                        _name_text(specifier.child_by_field_name("alias")) or local
                    )
                    if exported:
                        self.exports.append(exported)
                    if local:
                        reexported.append(local)
            elif child.type == "namespace_export":
                named = child.named_children
                namespace = _name_text(named[-1]) if named else None
                if namespace:
                    self.exports.append(namespace)
                reexported.append("*")

        source = node.child_by_field_name("source")
        if source is not None:
            self._add_import(
                _string_value(source), "re-export", reexported or ["*"], node
            )

    def _visit_call(self, node: Node) -> None:
        function = node.child_by_field_name("function")
        if function is None:
            return
        kind: ImportKind
        if function.type == "import":
            kind = "dynamic-import"
        elif function.type == "identifier" and _text(function) == "require":
            kind = "require"
        else:
            return
        arguments = node.child_by_field_name("arguments")
        first = (
            arguments.named_children[0]
            if arguments is not None and arguments.named_children
            else None
        )
        self._add_import(_string_value(first), kind, [], node)

    def _visit_assignment(self, node: Node) -> None:
        left = node.child_by_field_name("left")
        if left is None or left.type != "member_expression":
            return
        target = _text(left.child_by_field_name("object"))
        prop = _text(left.child_by_field_name("property"))
        if target == "module" and prop == "exports":
            self.exports.append("default")
        elif target in ("exports", "module.exports") and prop:
            self.exports.append(prop)


def extract_ecmascript(path: Path, rel_path: str) -> ExtractionResult:
    """Extract module info, imports and function complexity from a TS/JS file.

    Syntax errors never raise: Tree-sitter recovers and whatever it could
    parse is reported, with ``partial`` set on the result.

    Args:
        path: Absolute path to the source file.
        rel_path: The file's root-relative posix path, used as its id.

    Raises:
        FileParseError: If the file cannot be read or decoded.
    """
    raw, text = read_source(path)
    grammar = _GRAMMAR_BY_SUFFIX.get(path.suffix, "javascript")
    tree = _get_parser(grammar).parse(text.encode("utf-8"))

    visitor = _EcmaScriptVisitor()
    visitor.walk(tree.root_node)

    partial = tree.root_node.has_error
    if partial:
        logger.debug("parse.partial", path=rel_path, grammar=grammar)

    module = ModuleInfo(
        path=rel_path,
        name=strip_extension(path.name),
        language=module_language(path.suffix),
        imports=dedupe(record.specifier for record in visitor.imports),
        exports=dedupe(visitor.exports),
        size=len(raw),
        lines=count_lines(text),
    )
    return ExtractionResult(
        module=module,
        imports=visitor.imports,
        functions=[frame.to_model() for frame in visitor.functions],
        lines_of_code=count_code_lines(text, _COMMENT_PREFIXES),
        partial=partial,
    )


__all__ = ["NodeKind", "extract_ecmascript"]
