# src/a11y_auditor/dom/dialects/html.py
from typing import Any, Iterable, List, Optional
from bs4 import Tag, NavigableString
from bs4.element import PreformattedString

from ..core import AttributeEntry, AttributeValue, DialectAdapter, DialectDefinition
from ...model import SourcePosition

# BeautifulSoup names the root object "[document]"
DOCUMENT_NAME = "[document]"


class HTMLAdapter(DialectAdapter):
    """
    Adapter for BeautifulSoup trees. Raw HTML has no bound values, so every
    attribute is static.
    """
    name = "html"

    def accepts(self, raw: Any) -> bool:
        return isinstance(raw, Tag)

    def element_name(self, raw: Tag) -> List[Optional[str]]:
        if raw.name == DOCUMENT_NAME:
            return []
        return [raw.name or None]

    def attributes(self, raw: Tag) -> List[AttributeEntry]:
        entries = []
        for name, value in (raw.attrs or {}).items():
            # Multi-valued attributes (class, rel, headers, ...) come back as lists
            if isinstance(value, (list, tuple)):
                value = " ".join(value)
            entries.append(AttributeEntry(name=name, value=AttributeValue.static(value)))
        return entries

    def children(self, raw: Tag) -> Iterable[Any]:
        for child in raw.children:
            if isinstance(child, Tag):
                yield child

    def text(self, raw: Tag) -> str:
        parts = [
            str(child) for child in raw.children
            if isinstance(child, NavigableString) and not isinstance(child, PreformattedString)
        ]
        return " ".join("".join(parts).split())

    def position(self, raw: Tag) -> SourcePosition:
        # sourceline/sourcepos are only filled in by html.parser and html5lib
        return SourcePosition(line=raw.sourceline or 0, column=raw.sourcepos or 0)


DEFINITION = DialectDefinition(name="html", adapter=HTMLAdapter(), priority=10)
