# src/a11y_auditor/api.py
"""
Entry points offered to a host lint runtime or result formatter.

Every function accepts either a canonical ElementNode tree or anything the
DOMBuilder can read (JSX/Vue AST dictionaries, BeautifulSoup trees, HTML
strings). Nothing here keeps state between calls.
"""
from typing import Any, List, Optional

from .config import AnalysisConfig
from .model import Violation
from .dom.builder import DOMBuilder
from .dom.checks.heading_order import validate_heading_sequence as _validate_heading_sequence
from .dom.checks.references import validate_references as _validate_references
from .dom.core import ElementNode
from .dom.index import DocumentIndex, build_index as _build_index
from .dom.qngine import QNGINE
from .dom.resolver import CanonicalIdentity, resolve


def as_element(node: Any) -> ElementNode:
    if isinstance(node, ElementNode):
        return node
    return DOMBuilder().build(node)


def resolve_identity(node: Any, config: Optional[AnalysisConfig] = None) -> CanonicalIdentity:
    return resolve(as_element(node), config)


def build_index(document_root: Any, config: Optional[AnalysisConfig] = None) -> DocumentIndex:
    return _build_index(as_element(document_root), config)


def validate_references(
        document_root: Any,
        index: DocumentIndex,
        config: Optional[AnalysisConfig] = None
) -> List[Violation]:
    return _validate_references(as_element(document_root), index, config)


def validate_heading_sequence(index: DocumentIndex, config: Optional[AnalysisConfig] = None) -> List[Violation]:
    return _validate_heading_sequence(index, config)


def analyze(document: Any, config: Optional[AnalysisConfig] = None) -> List[Violation]:
    """Index the document once and run every registered check against it."""
    return QNGINE(config).run_audit(document)
