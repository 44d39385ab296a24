# src/a11y_auditor/dom/builder.py
import json
import logging
from pathlib import Path
from typing import Any, Optional, Union
from bs4 import BeautifulSoup

from .core import DialectAdapter, ElementNode
from .registry import DOMRegistry

logger = logging.getLogger(__name__)

DOCUMENT_DIALECT = "document"
HTML_SUFFIXES = (".html", ".htm", ".xhtml")


def parse_html(html: str) -> BeautifulSoup:
    """Parses raw HTML with the stdlib-backed parser, which records source positions."""
    # Basic cleanup of potentially dirty HTML (e.g., BOM)
    clean_html = (html or "").replace('\ufeff', '')
    return BeautifulSoup(clean_html, 'html.parser')


class DOMBuilder:
    """
    Builder responsible for turning a caller's parsed tree (JSX or Vue AST
    dictionaries, a BeautifulSoup tree, or an HTML string) into the canonical
    ElementNode tree. The caller's tree is only read.
    """

    def __init__(self):
        """Initializes the builder and ensures the DOMRegistry is populated."""
        DOMRegistry.discover()
        self.adapters = DOMRegistry.get_adapters()

    def build(self, raw: Any) -> ElementNode:
        """
        Builds the canonical tree for one document.

        Args:
            raw: An ElementNode (returned unchanged), a single element of any
                 registered dialect, a container holding elements (e.g. a
                 Program AST), or an HTML string.

        Returns:
            ElementNode: The document root. Containers and strings get a
                         synthetic 'document' root whose children are the
                         outermost elements found.
        """
        if isinstance(raw, ElementNode):
            return raw

        if isinstance(raw, str):
            raw = parse_html(raw)

        adapter = self._adapter_for(raw)
        if adapter is not None:
            return self._build_tree(raw, adapter)

        for adapter in self.adapters:
            roots = adapter.find_roots(raw)
            if roots:
                children = [self._build_tree(root, adapter) for root in roots]
                children.sort(key=lambda n: (n.position.line, n.position.column))
                return ElementNode(dialect=DOCUMENT_DIALECT, children=children, raw=raw)

        logger.debug("No markup found in input of type %s", type(raw).__name__)
        return ElementNode(dialect=DOCUMENT_DIALECT, raw=raw)

    def _adapter_for(self, raw: Any) -> Optional[DialectAdapter]:
        for adapter in self.adapters:
            if adapter.accepts(raw):
                return adapter
        return None

    def _build_tree(self, raw: Any, adapter: DialectAdapter) -> ElementNode:
        """
        Builds the element tree below ``raw`` without recursion, so deeply
        nested markup cannot exhaust the interpreter stack.
        """
        root = self._build_node(raw, adapter)
        stack = [(raw, root)]
        while stack:
            raw_node, node = stack.pop()
            for raw_child in adapter.children(raw_node):
                child = self._build_node(raw_child, adapter)
                node.children.append(child)
                stack.append((raw_child, child))
        return root

    @staticmethod
    def _build_node(raw: Any, adapter: DialectAdapter) -> ElementNode:
        segments = adapter.element_name(raw)
        resolvable = bool(segments) and all(segments)
        return ElementNode(
            dialect=adapter.name,
            name=".".join(segments) if resolvable else "",
            name_tail=segments[-1] if segments else None,
            attributes=adapter.attributes(raw),
            text=adapter.text(raw),
            position=adapter.position(raw),
            raw=raw
        )


def load_document(path: Union[str, Path]) -> Any:
    """
    Reads a document from disk in a form DOMBuilder.build accepts.

    HTML files are parsed with BeautifulSoup; JSON files are expected to hold a
    serialized JSX (ESTree) or Vue (vue-eslint-parser) AST.
    """
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() in HTML_SUFFIXES:
        return parse_html(text)
    if path.suffix.lower() == ".json":
        return json.loads(text)
    raise ValueError(f"Unsupported document type: {path.suffix or path.name}")
