# src/a11y_auditor/dom/index.py
import logging
from typing import FrozenSet, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from ..config import AnalysisConfig
from ..model import SourcePosition
from .attributes import get_static
from .core import ElementNode
from .resolver import resolve

logger = logging.getLogger(__name__)

HEADING_TAGS = {f"h{level}": level for level in range(1, 7)}
DEFAULT_ARIA_HEADING_LEVEL = 2
LABEL_FOR_ATTRIBUTES = ("for", "htmlFor")


class HeadingEntry(BaseModel):
    """One heading-equivalent element, in document order."""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    level: int = Field(ge=1, le=6)
    position: SourcePosition
    node: ElementNode = Field(exclude=True, repr=False)


class DocumentIndex(BaseModel):
    """
    Whole-document summary built once per analysis run.

    ``ids`` records presence only: duplicate ids collapse into one entry.
    """
    model_config = ConfigDict(frozen=True)

    ids: FrozenSet[str] = frozenset()
    headings: Tuple[HeadingEntry, ...] = ()
    label_targets: FrozenSet[str] = frozenset()

    @property
    def heading_levels(self) -> Tuple[int, ...]:
        return tuple(h.level for h in self.headings)


def _aria_level(node: ElementNode) -> int:
    raw_level = get_static(node, "aria-level")
    try:
        level = int(raw_level.strip()) if raw_level is not None else DEFAULT_ARIA_HEADING_LEVEL
    except ValueError:
        return DEFAULT_ARIA_HEADING_LEVEL
    return level if 1 <= level <= 6 else DEFAULT_ARIA_HEADING_LEVEL


def heading_level(node: ElementNode, tag: str) -> Optional[int]:
    """Level of a heading-equivalent node, or None when the node is not a heading."""
    if tag in HEADING_TAGS:
        return HEADING_TAGS[tag]
    role = get_static(node, "role")
    if role is not None and role.strip().lower() == "heading":
        return _aria_level(node)
    return None


def build_index(root: ElementNode, config: Optional[AnalysisConfig] = None) -> DocumentIndex:
    """
    Single depth-first pass over the document collecting static ids, label
    targets and the ordered heading sequence.

    Dynamic or spread ids are not indexable and are skipped.
    """
    config = config or AnalysisConfig()
    ids = set()
    label_targets = set()
    headings = []

    for node in root.iter_tree():
        node_id = get_static(node, "id")
        if node_id is not None and node_id.strip():
            ids.add(node_id.strip())

        tag = resolve(node, config).tag

        if tag == "label":
            for attr in LABEL_FOR_ATTRIBUTES:
                target = get_static(node, attr)
                if target is not None and target.strip():
                    label_targets.add(target.strip())

        level = heading_level(node, tag)
        if level is not None:
            headings.append(HeadingEntry(level=level, position=node.position, node=node))

    logger.debug("Indexed %d ids and %d headings", len(ids), len(headings))
    return DocumentIndex(
        ids=frozenset(ids),
        headings=tuple(headings),
        label_targets=frozenset(label_targets)
    )
