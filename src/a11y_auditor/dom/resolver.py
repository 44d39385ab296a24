# src/a11y_auditor/dom/resolver.py
import logging
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict

from ..config import AnalysisConfig
from .attributes import first_present
from .core import ElementNode

logger = logging.getLogger(__name__)

UNKNOWN_TAG = "unknown"

NATIVE_TAGS = frozenset({
    # Document & metadata
    "html", "head", "title", "base", "link", "meta", "style", "body",
    # Sections
    "address", "article", "aside", "footer", "header", "h1", "h2", "h3", "h4", "h5", "h6",
    "hgroup", "main", "nav", "section", "search",
    # Grouping
    "blockquote", "dd", "div", "dl", "dt", "figcaption", "figure", "hr", "li", "menu", "ol",
    "p", "pre", "ul",
    # Text-level
    "a", "abbr", "b", "bdi", "bdo", "br", "cite", "code", "data", "dfn", "em", "i", "kbd",
    "mark", "q", "rp", "rt", "ruby", "s", "samp", "small", "span", "strong", "sub", "sup",
    "time", "u", "var", "wbr", "del", "ins",
    # Embedded
    "area", "audio", "img", "map", "track", "video", "embed", "iframe", "object", "picture",
    "portal", "source", "svg", "math", "canvas",
    # Scripting
    "noscript", "script", "template", "slot",
    # Tables
    "caption", "col", "colgroup", "table", "tbody", "td", "tfoot", "th", "thead", "tr",
    # Forms
    "button", "datalist", "fieldset", "form", "input", "label", "legend", "meter", "optgroup",
    "option", "output", "progress", "select", "textarea",
    # Interactive
    "details", "dialog", "summary",
    # Obsolete but still parsed
    "marquee", "blink", "center", "font",
})


class ResolutionTier(str, Enum):
    NATIVE = "native"
    POLYMORPHIC = "polymorphic"
    MAPPED = "mapped"
    NONE = "none"


class CanonicalIdentity(BaseModel):
    """The semantic tag a node behaves as, and which precedence tier decided it."""
    model_config = ConfigDict(frozen=True)

    tag: str
    tier: ResolutionTier

    @property
    def is_known(self) -> bool:
        return self.tier is not ResolutionTier.NONE


UNRESOLVED = CanonicalIdentity(tag=UNKNOWN_TAG, tier=ResolutionTier.NONE)


def is_native_name(name: str) -> bool:
    """Intrinsic elements are written lowercase (JSX convention) and are real HTML tags."""
    return bool(name) and "." not in name and name == name.lower() and name in NATIVE_TAGS


def _polymorphic_tag(node: ElementNode, config: AnalysisConfig) -> Optional[str]:
    for prop_name in config.polymorphic_prop_names:
        value = first_present(node, (prop_name,))
        if value is None:
            continue
        if value.is_static and value.value and value.value.strip():
            return value.value.strip().lower()
        # Bound or blank: cannot know what it renders as, try the next prop name
        logger.debug("Polymorphic prop %r on <%s> is not static; skipping", prop_name, node.name)
    return None


def _mapped_tag(node: ElementNode, config: AnalysisConfig) -> Optional[str]:
    mapping = config.component_map
    if not mapping:
        return None
    if node.name and node.name in mapping:
        return mapping[node.name]
    if node.name_tail and node.name_tail in mapping:
        return mapping[node.name_tail]
    return None


def resolve(node: ElementNode, config: Optional[AnalysisConfig] = None) -> CanonicalIdentity:
    """
    Maps a node to its canonical tag.

    Resolution precedence, first match wins:
    1. Native HTML tag (can never be overridden by configuration)
    2. Polymorphic prop (e.g. ``as="button"``) with a static value
    3. ``componentMap`` entry for the full dotted name, then its rightmost segment
    4. Otherwise unknown
    """
    config = config or AnalysisConfig()

    if is_native_name(node.name):
        return CanonicalIdentity(tag=node.name, tier=ResolutionTier.NATIVE)

    tag = _polymorphic_tag(node, config)
    if tag:
        return CanonicalIdentity(tag=tag, tier=ResolutionTier.POLYMORPHIC)

    tag = _mapped_tag(node, config)
    if tag:
        return CanonicalIdentity(tag=tag, tier=ResolutionTier.MAPPED)

    return UNRESOLVED


def is_element_like(node: ElementNode, config: Optional[AnalysisConfig], target_tag: str) -> bool:
    """Checks whether a node should be treated as ``target_tag`` (e.g. 'img', 'a', 'button')."""
    return resolve(node, config).tag == target_tag.lower()
