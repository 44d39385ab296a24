# src/a11y_auditor/dom/dialects/jsx.py
import logging
from typing import Any, Iterable, List, Optional

from ..core import (
    AttributeEntry, AttributeValue, DialectAdapter, DialectDefinition, DYNAMIC, UNKNOWN,
    as_dict, as_list, position_from_loc
)
from ...model import SourcePosition

logger = logging.getLogger(__name__)

ELEMENT_TYPES = ("JSXElement", "JSXFragment")
LITERAL_TYPES = ("Literal", "StringLiteral", "NumericLiteral", "BooleanLiteral")

# Keys that never lead to rendered JSX (and may hold back-references)
SKIP_KEYS = frozenset({"loc", "range", "parent", "tokens", "comments", "start", "end"})


def is_jsx_element(raw: Any) -> bool:
    return isinstance(raw, dict) and raw.get("type") in ELEMENT_TYPES


def collect_outermost(raw: Any) -> List[dict]:
    """
    Walks an arbitrary ESTree value and returns the outermost JSX elements in
    source order. Never descends into a JSX element itself.
    """
    found = []
    seen = set()
    stack = [raw]
    while stack:
        current = stack.pop()
        if id(current) in seen:
            continue
        seen.add(id(current))

        if isinstance(current, dict):
            if is_jsx_element(current):
                found.append(current)
                continue
            values = [v for k, v in current.items() if k not in SKIP_KEYS]
        elif isinstance(current, list):
            values = current
        else:
            continue

        stack.extend(v for v in reversed(values) if isinstance(v, (dict, list)))
    return found


def _static_expression(expression: Any) -> Optional[AttributeValue]:
    """Static value of an expression container, or None when it is a real expression."""
    if not isinstance(expression, dict):
        return None

    expr_type = expression.get("type")
    if expr_type in LITERAL_TYPES:
        value = expression.get("value")
        if isinstance(value, bool):
            return AttributeValue.static("true" if value else "false")
        if isinstance(value, (str, int, float)):
            return AttributeValue.static(value)
        return None

    # `${}`-free template literal
    if expr_type == "TemplateLiteral" and not expression.get("expressions"):
        quasis = expression.get("quasis") or []
        if not isinstance(quasis, list):
            return None
        parts = []
        for quasi in quasis:
            value = quasi.get("value") if isinstance(quasi, dict) else None
            if not isinstance(value, dict):
                return None
            text = value.get("cooked") if value.get("cooked") is not None else value.get("raw", "")
            if not isinstance(text, str):
                return None
            parts.append(text)
        return AttributeValue.static("".join(parts))

    return None


def _name_segments(name: Any) -> List[Optional[str]]:
    """Resolves JSXIdentifier / JSXNamespacedName / JSXMemberExpression to path segments."""
    if not isinstance(name, dict):
        return [None]

    name_type = name.get("type")
    if name_type == "JSXIdentifier":
        value = name.get("name")
        return [value if isinstance(value, str) and value else None]

    if name_type == "JSXNamespacedName":
        namespace, local = (
            part.get("name") if isinstance(part, dict) else None
            for part in (name.get("namespace"), name.get("name"))
        )
        if isinstance(namespace, str) and namespace and isinstance(local, str) and local:
            return [f"{namespace}:{local}"]
        return [None]

    if name_type == "JSXMemberExpression":
        return _name_segments(name.get("object")) + _name_segments(name.get("property"))

    logger.debug("Unrecognized JSX name shape: %r", name_type)
    return [None]


def _attribute_name(name: Any) -> Optional[str]:
    segments = _name_segments(name)
    if len(segments) == 1:
        return segments[0]
    return None


class JSXAdapter(DialectAdapter):
    """Adapter for ESTree/Babel JSX nodes serialized as dictionaries."""
    name = "jsx"

    def accepts(self, raw: Any) -> bool:
        return is_jsx_element(raw)

    def element_name(self, raw: dict) -> List[Optional[str]]:
        if raw.get("type") == "JSXFragment":
            return []
        opening = as_dict(raw.get("openingElement"))
        return _name_segments(opening.get("name"))

    def attributes(self, raw: dict) -> List[AttributeEntry]:
        opening = as_dict(raw.get("openingElement"))
        entries = []
        for attr in as_list(opening.get("attributes")):
            if not isinstance(attr, dict):
                continue

            if attr.get("type") == "JSXSpreadAttribute":
                entries.append(AttributeEntry(value=UNKNOWN))
                continue

            name = _attribute_name(attr.get("name"))
            if name is None:
                # A prop we cannot name could be any prop
                entries.append(AttributeEntry(value=UNKNOWN))
                continue

            entries.append(AttributeEntry(name=name, value=self._classify(attr.get("value"))))
        return entries

    @staticmethod
    def _classify(value: Any) -> AttributeValue:
        # <input disabled />
        if value is None:
            return AttributeValue.static("")

        if not isinstance(value, dict):
            return DYNAMIC

        if value.get("type") in LITERAL_TYPES:
            raw_value = value.get("value")
            return AttributeValue.static(raw_value) if isinstance(raw_value, str) else DYNAMIC

        if value.get("type") == "JSXExpressionContainer":
            return _static_expression(value.get("expression")) or DYNAMIC

        # JSX element as a prop value, or an unknown shape
        return DYNAMIC

    def children(self, raw: dict) -> Iterable[Any]:
        for child in as_list(raw.get("children")):
            if not isinstance(child, dict):
                continue
            if is_jsx_element(child):
                yield child
            elif child.get("type") in ("JSXExpressionContainer", "JSXSpreadChild"):
                # {cond && <h2 />}, {items.map(i => <li />)}
                yield from collect_outermost(child.get("expression"))

    def text(self, raw: dict) -> str:
        parts = []
        for child in as_list(raw.get("children")):
            if isinstance(child, dict) and child.get("type") == "JSXText":
                value = child.get("value")
                parts.append(value if isinstance(value, str) else "")
        return " ".join("".join(parts).split())

    def position(self, raw: dict) -> SourcePosition:
        return position_from_loc(raw)

    def find_roots(self, raw: Any) -> Optional[List[Any]]:
        if not isinstance(raw, (dict, list)) or is_jsx_element(raw):
            return None
        return collect_outermost(raw) or None


DEFINITION = DialectDefinition(name="jsx", adapter=JSXAdapter(), priority=20)
