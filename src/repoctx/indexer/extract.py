"""Heuristic extraction of functions, classes, comments and tests from JS/TS text.

Everything here is regex + brace counting over raw text, not a parser.
Braces inside strings, template literals and comments are counted like any
other brace, and the three function passes overlap. The output is a
coverage-oriented index for ranking, not a symbol table.
"""

from __future__ import annotations

import logging
import re

logger = logging.getLogger("repoctx.indexer")

# Names that look like `name(...) {` but are control flow
CONTROL_FLOW_STOPLIST = frozenset({"if", "for", "while", "switch", "catch", "function"})

# Keywords that each add one to the complexity count
COMPLEXITY_KEYWORDS = ("if", "else", "for", "while", "case", "catch")

_FUNCTION_DECL_RE = re.compile(r"function\s+(\w+)\s*\(([^)]*)\)\s*\{")
_ARROW_RE = re.compile(
    r"(?:const|let|var)\s+(\w+)\s*=\s*(?:async\s+)?(?:\([^)]*\)|\w+)\s*=>"
)
_BARE_METHOD_RE = re.compile(r"(\w+)\s*\([^)]*\)\s*\{")
_FUNCTION_KW_BEFORE_RE = re.compile(r"\bfunction\s*\Z")
_DECLARATION_LOOKBEHIND = 64
_CLASS_RE = re.compile(r"class\s+(\w+)(?:\s+extends\s+(\w+))?\s*\{")
_PROPERTY_RE = re.compile(r"this\.(\w+)\s*=(?!=)")
_CALL_RE = re.compile(r"(\w+)\s*\(")
_TEST_RE = re.compile(r"\b(?:test|it|describe)\s*\(\s*['\"]([^'\"]+)['\"]")

# Comment kinds are scanned one after another; order here is output order
_COMMENT_PATTERNS: list[tuple[str, re.Pattern[str]]] = [
    ("TODO", re.compile(r"//\s*TODO:?\s*(.+)$", re.MULTILINE)),
    ("FIXME", re.compile(r"//\s*FIXME:?\s*(.+)$", re.MULTILINE)),
    ("NOTE", re.compile(r"//\s*NOTE:?\s*(.+)$", re.MULTILINE)),
    ("JSDoc", re.compile(r"/\*\*[\s\S]*?\*/")),
]

_OPERATOR_RE = re.compile(r"&&|\|\|")
_KEYWORD_RES = [re.compile(rf"\b{kw}\b") for kw in COMPLEXITY_KEYWORDS]


def extract_block(content: str, open_index: int) -> str:
    """Return the brace-balanced block starting at `open_index`.

    Scans forward from `open_index`, counting `{` up and `}` down, and stops
    when the count returns to zero after having gone positive. The returned
    text includes both outer braces. An unterminated block runs to the end
    of `content`.
    """
    depth = 0
    started = False
    for i in range(open_index, len(content)):
        ch = content[i]
        if ch == "{":
            depth += 1
            started = True
        elif ch == "}":
            depth -= 1
            if started and depth == 0:
                return content[open_index : i + 1]
    return content[open_index:] if started else ""


def _is_declaration(content: str, name_start: int) -> bool:
    """True when the name at `name_start` follows the `function` keyword."""
    window_start = max(0, name_start - _DECLARATION_LOOKBEHIND)
    return _FUNCTION_KW_BEFORE_RE.search(content, window_start, name_start) is not None


def _bare_method_names(text: str) -> list[str]:
    names = []
    for m in _BARE_METHOD_RE.finditer(text):
        name = m.group(1)
        if name in CONTROL_FLOW_STOPLIST or _is_declaration(text, m.start(1)):
            continue
        names.append(name)
    return names


def extract_functions(content: str) -> list[dict]:
    """Run the three function passes and return their hits in pass order.

    1. `function name(params) {` declarations, with params and body.
    2. `const|let|var name = (...) =>` arrow assignments, name only.
    3. bare `name(...) {` method signatures, name only.

    A name can show up in more than one pass; callers that key records by
    name let the later pass win.
    """
    functions: list[dict] = []

    for m in _FUNCTION_DECL_RE.finditer(content):
        params = [p.strip() for p in m.group(2).split(",") if p.strip()]
        functions.append({
            "name": m.group(1),
            "params": params,
            "body": extract_block(content, m.end() - 1),
        })

    for m in _ARROW_RE.finditer(content):
        functions.append({"name": m.group(1), "params": [], "body": ""})

    for name in _bare_method_names(content):
        functions.append({"name": name, "params": [], "body": ""})

    return functions


def extract_classes(content: str) -> list[dict]:
    """Find `class Name [extends Base] {` declarations with methods and properties."""
    classes: list[dict] = []
    for m in _CLASS_RE.finditer(content):
        body = extract_block(content, m.end() - 1)
        properties: list[str] = []
        for prop in _PROPERTY_RE.finditer(body):
            if prop.group(1) not in properties:
                properties.append(prop.group(1))
        classes.append({
            "name": m.group(1),
            "extends": m.group(2),
            "methods": _bare_method_names(body),
            "properties": properties,
            "body": body,
        })
    return classes


def extract_comments(content: str) -> list[dict]:
    """Collect TODO, FIXME, NOTE and JSDoc comments, grouped by kind."""
    comments: list[dict] = []
    for kind, pattern in _COMMENT_PATTERNS:
        for m in pattern.finditer(content):
            text = m.group(1) if pattern.groups else m.group(0)
            comments.append({
                "type": kind,
                "text": text.strip() if kind != "JSDoc" else text,
                "line": content.count("\n", 0, m.start()) + 1,
            })
    return comments


def extract_tests(content: str) -> list[dict]:
    """Collect Jest/Mocha style test names."""
    return [{"name": m.group(1), "type": "unit"} for m in _TEST_RE.finditer(content)]


def extract_calls(body: str) -> list[str]:
    """Unique call-shaped names in a code body, in first-seen order."""
    calls: list[str] = []
    for m in _CALL_RE.finditer(body):
        name = m.group(1)
        if name not in CONTROL_FLOW_STOPLIST and name not in calls:
            calls.append(name)
    return calls


def calculate_complexity(code: object) -> int:
    """Cyclomatic-complexity proxy for a code string.

    Starts at 1 and adds one per control-flow keyword, per `&&`/`||`, and
    per `?` (ternaries, but also optional chaining). Anything that is not a
    non-empty string scores 1, and so does a failed count.
    """
    complexity = 1
    if not code or not isinstance(code, str):
        return complexity

    try:
        for pattern in _KEYWORD_RES:
            complexity += len(pattern.findall(code))
        complexity += len(_OPERATOR_RE.findall(code))
        complexity += code.count("?")
    except Exception as e:
        logger.warning(f"Complexity computation failed, defaulting to 1: {e}")
        return 1

    return complexity
