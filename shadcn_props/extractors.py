"""
Extraction strategy chain — find props-like type declarations in source text.

Tiers, tried in order until one yields a candidate:

  STRUCTURAL_PRIMARY    tree-sitter, TSX grammar
  STRUCTURAL_SECONDARY  tree-sitter, plain TypeScript grammar
                        (accepts ``<T>value`` assertions the TSX grammar rejects)
  PATTERN_MATCH         regular expressions with bracket matching

Every tier uses ``looks_like_props_type`` and ``reference_alias`` so the
result shape does not depend on which tier succeeded.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from typing import Callable, Optional

import tree_sitter_typescript
from tree_sitter import Language, Parser

from . import reporting
from .candidates import PropCandidate
from .errors import ExtractionFailure
from .naming import ComponentIdentity

PROPS_MARKER = "Props"
ATTRIBUTES_MARKER = "attributes"

COMPONENT_PROPS_TYPES = ("ComponentProps", "ComponentPropsWithRef", "ComponentPropsWithoutRef")

_DECLARATION_NODES = ("interface_declaration", "type_alias_declaration")
_TRAILING_MEMBER = re.compile(r"\.\s*([A-Z]\w*)\s*$")


class Strategy(Enum):
    STRUCTURAL_PRIMARY = "structural-primary"
    STRUCTURAL_SECONDARY = "structural-secondary"
    PATTERN_MATCH = "pattern-match"


@dataclass
class ExtractionResult:
    candidates: list = field(default_factory=list)
    strategy: Optional[Strategy] = None
    errors: list = field(default_factory=list)


# ─── shared classification ───────────────────────────────────────────────────

def looks_like_props_type(name: str, identity: ComponentIdentity) -> bool:
    """The single props-type predicate shared by every tier."""
    if not name:
        return False
    if name == PROPS_MARKER or PROPS_MARKER in name:
        return True
    lower = name.lower()
    if "props" not in lower and ATTRIBUTES_MARKER not in lower:
        return False
    return any(n in lower for n in identity.match_names)


def utility_kind(type_name: str) -> Optional[str]:
    """'component' for ComponentProps*, 'element' for *HTMLAttributes / *HTMLProps."""
    base = type_name.rsplit(".", 1)[-1].strip()
    if base in COMPONENT_PROPS_TYPES:
        return "component"
    if base.endswith("HTMLAttributes") or base.endswith("HTMLProps"):
        return "element"
    return None


def sub_component_from_argument(argument: str) -> Optional[str]:
    """``typeof AccordionPrimitive.Trigger`` → "Trigger"."""
    match = _TRAILING_MEMBER.search(argument or "")
    return match.group(1) if match else None


def reference_alias(reference: str, identity: ComponentIdentity, kind: str,
                    argument: str = "") -> PropCandidate:
    """Wrap a utility-type reference in a standalone type alias."""
    tag = sub_component_from_argument(argument) if kind == "component" else None
    name = identity.qualified_type_name(tag)
    origin = "React type reference" if kind == "component" else "HTML attributes"
    text = f"// From {origin}\ntype {name} = {reference};"
    return PropCandidate(text, tag)


def fix_hyphenated_names(text: str, identity: ComponentIdentity) -> str:
    """``not-foundProps`` is not an identifier; rewrite it to ``NotFoundProps``."""
    raw = identity.raw_name
    if re.fullmatch(r"[A-Za-z_$][\w$]*", raw):
        return text
    return re.sub(rf"(?<![\w$-]){re.escape(raw)}Props\b", identity.base_type_name, text)


def _collect(declared: list, references: list, identity: ComponentIdentity) -> list:
    """Declared types first, then reference aliases whose name is still free."""
    candidates = []
    names = set()
    seen_text = set()
    for text in declared:
        text = fix_hyphenated_names(text, identity)
        if text in seen_text:
            continue
        seen_text.add(text)
        candidate = PropCandidate(text)
        names.add(candidate.type_name)
        candidates.append(candidate)
    for candidate in references:
        if candidate.type_name in names:
            continue
        names.add(candidate.type_name)
        candidates.append(candidate)
    return candidates


# ─── tiers 1 & 2: tree-sitter ────────────────────────────────────────────────

@lru_cache(maxsize=None)
def _language(dialect: str) -> Language:
    if dialect == "tsx":
        return Language(tree_sitter_typescript.language_tsx())
    return Language(tree_sitter_typescript.language_typescript())


def _walk(node):
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def _node_text(source: bytes, node) -> str:
    return source[node.start_byte:node.end_byte].decode("utf-8", errors="replace")


def _structural_extract(text: str, identity: ComponentIdentity, dialect: str) -> list:
    source = text.encode("utf-8")
    # A parser per call: worker threads may extract different files concurrently.
    parser = Parser(_language(dialect))
    tree = parser.parse(source)
    root = tree.root_node

    declared = []
    spans = set()
    references = []
    for node in _walk(root):
        if node.type in _DECLARATION_NODES:
            if node.has_error:
                continue
            name_node = node.child_by_field_name("name")
            if name_node is None or not looks_like_props_type(_node_text(source, name_node), identity):
                continue
            target = node
            # "export interface X" / "export type X = ...": keep the modifier
            if node.parent is not None and node.parent.type == "export_statement":
                target = node.parent
            span = (target.start_byte, target.end_byte)
            if span not in spans:
                spans.add(span)
                declared.append(_node_text(source, target))
        elif node.type == "generic_type":
            if node.has_error:
                continue
            name_node = node.child_by_field_name("name")
            args_node = node.child_by_field_name("type_arguments")
            if name_node is None or args_node is None:
                continue
            kind = utility_kind(_node_text(source, name_node))
            if kind is None:
                continue
            first_arg = args_node.named_children[0] if args_node.named_children else None
            argument = _node_text(source, first_arg) if first_arg is not None else ""
            references.append(reference_alias(_node_text(source, node), identity, kind, argument))

    candidates = _collect(declared, references, identity)
    if not candidates and root.has_error:
        raise ExtractionFailure(f"{dialect} grammar could not parse the source")
    return candidates


def extract_structural_primary(text: str, identity: ComponentIdentity) -> list:
    return _structural_extract(text, identity, "tsx")


def extract_structural_secondary(text: str, identity: ComponentIdentity) -> list:
    return _structural_extract(text, identity, "typescript")


# ─── tier 3: regular expressions ─────────────────────────────────────────────

_INTERFACE_HEADER = re.compile(
    r"(?<![\w$.])(?:export\s+(?:default\s+)?)?(?:declare\s+)?interface\s+([A-Za-z_$][\w$]*)[^{;]*\{"
)
_TYPE_HEADER = re.compile(
    r"(?<![\w$.])(?:export\s+)?(?:declare\s+)?type\s+([A-Za-z_$][\w$]*)\s*(?:<[^=]*>)?\s*="
)
_COMPONENT_PROPS_CALL = re.compile(
    r"(?<![\w$.])(?:[A-Za-z_$][\w$]*\.)?ComponentProps(?:WithRef|WithoutRef)?\s*<"
)
_STATEMENT_START = re.compile(
    r"\s*(?:export|type|interface|const|let|var|function|import|declare|class|enum)\b"
)
_OPEN = {"(": ")", "[": "]", "{": "}"}
_CLOSE = {")", "]", "}"}


def _skip_string(text: str, i: int) -> int:
    quote = text[i]
    i += 1
    while i < len(text):
        if text[i] == "\\":
            i += 2
            continue
        if text[i] == quote:
            return i + 1
        i += 1
    return i


def _match_brace(text: str, open_pos: int) -> int:
    """Index just past the ``}`` closing the ``{`` at ``open_pos`` (or -1)."""
    depth = 0
    i = open_pos
    while i < len(text):
        ch = text[i]
        if ch in "\"'`":
            i = _skip_string(text, i)
            continue
        if text.startswith("//", i):
            nl = text.find("\n", i)
            i = len(text) if nl == -1 else nl
            continue
        if text.startswith("/*", i):
            close = text.find("*/", i + 2)
            i = len(text) if close == -1 else close + 2
            continue
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i + 1
        i += 1
    return -1


def _match_angle(text: str, open_pos: int) -> int:
    """Index just past the ``>`` closing the ``<`` at ``open_pos`` (or -1)."""
    depth = 0
    i = open_pos
    while i < len(text):
        ch = text[i]
        if ch in "\"'`":
            i = _skip_string(text, i)
            continue
        if ch == "<":
            depth += 1
        elif ch == ">" and text[i - 1] != "=":
            depth -= 1
            if depth == 0:
                return i + 1
        elif ch in ";{}":
            return -1
        i += 1
    return -1


def _statement_end(text: str, start: int) -> int:
    """End of a type alias body: ``;`` or a line break before the next statement."""
    stack = []
    angle = 0
    i = start
    while i < len(text):
        ch = text[i]
        if ch in "\"'`":
            i = _skip_string(text, i)
            continue
        if ch in _OPEN:
            stack.append(_OPEN[ch])
        elif ch in _CLOSE:
            if stack:
                stack.pop()
        elif ch == "<":
            angle += 1
        elif ch == ">" and text[i - 1] != "=" and angle:
            angle -= 1
        elif not stack and not angle:
            if ch == ";":
                return i + 1
            if ch == "\n" and (_STATEMENT_START.match(text, i) or not text[i:].strip()):
                return i
        i += 1
    return len(text)


def extract_pattern_match(text: str, identity: ComponentIdentity) -> list:
    declared = []
    for match in _INTERFACE_HEADER.finditer(text):
        if not looks_like_props_type(match.group(1), identity):
            continue
        end = _match_brace(text, match.end() - 1)
        if end != -1:
            declared.append(text[match.start():end])

    for match in _TYPE_HEADER.finditer(text):
        if not looks_like_props_type(match.group(1), identity):
            continue
        end = _statement_end(text, match.end())
        declaration = text[match.start():end].rstrip()
        if declaration[len(match.group(0)):].strip(" \t\n;"):
            declared.append(declaration)

    references = []
    for match in _COMPONENT_PROPS_CALL.finditer(text):
        end = _match_angle(text, match.end() - 1)
        if end == -1:
            continue
        reference = text[match.start():end]
        argument = text[match.end():end - 1]
        references.append(reference_alias(reference, identity, "component", argument))

    return _collect(declared, references, identity)


# ─── chain ───────────────────────────────────────────────────────────────────

STRATEGY_CHAIN: list = [
    (Strategy.STRUCTURAL_PRIMARY, extract_structural_primary),
    (Strategy.STRUCTURAL_SECONDARY, extract_structural_secondary),
    (Strategy.PATTERN_MATCH, extract_pattern_match),
]


def run_strategy_chain(text: str, identity: ComponentIdentity, chain: Optional[list] = None,
                       label: str = "") -> ExtractionResult:
    """Try each tier in order; stop at the first that yields ≥1 candidate.

    Tier failures never propagate; they count as zero candidates.
    """
    result = ExtractionResult()
    for strategy, extractor in chain or STRATEGY_CHAIN:
        extractor: Callable
        try:
            candidates = extractor(text, identity)
        except Exception as e:
            failure = e if isinstance(e, ExtractionFailure) else ExtractionFailure(str(e))
            result.errors.append((strategy, failure))
            reporting.debug("props", f"{label or 'source'}: {strategy.value} failed: {failure}")
            continue
        reporting.debug("props", f"{label or 'source'}: {strategy.value} → {len(candidates)} candidate(s)")
        if candidates:
            result.candidates = list(candidates)
            result.strategy = strategy
            break
    return result
