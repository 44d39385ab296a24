# src/a11y_auditor/dom/attributes.py
"""
Attribute accessor over canonical ElementNodes.

Values were classified once by the dialect adapter (STATIC / DYNAMIC / SPREAD);
everything here is a pure read. Absence is only reported when it is provable:
a spread entry may carry any attribute, so it answers every lookup.
"""
from typing import Iterable, Optional

from .core import AttributeValue, ElementNode, UNKNOWN


def _find(node: ElementNode, name: str) -> Optional[AttributeValue]:
    found = None
    for entry in node.attributes:
        # The last declared entry wins. Spreads are not ordered against named
        # entries: a declared value is used even when a spread follows it.
        if entry.name == name:
            found = entry.value
    return found


def has_spread(node: ElementNode) -> bool:
    return any(entry.is_spread for entry in node.attributes)


def has(node: ElementNode, name: str) -> bool:
    """True unless the attribute is provably missing."""
    return _find(node, name) is not None or has_spread(node)


def get(node: ElementNode, name: str) -> Optional[AttributeValue]:
    """
    Returns the classified value of ``name``.

    None means provably absent. A node without the attribute but with a spread
    returns the shared UNKNOWN sentinel.
    """
    value = _find(node, name)
    if value is not None:
        return value
    if has_spread(node):
        return UNKNOWN
    return None


def get_static(node: ElementNode, name: str) -> Optional[str]:
    """The string value if the attribute is present and static, else None."""
    value = _find(node, name)
    if value is not None and value.is_static:
        return value.value
    return None


def first_present(node: ElementNode, names: Iterable[str]) -> Optional[AttributeValue]:
    """Value of the first explicitly declared name among aliases (e.g. 'for' / 'htmlFor')."""
    for name in names:
        value = _find(node, name)
        if value is not None:
            return value
    return None
