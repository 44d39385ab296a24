from enum import Enum
from typing import Dict, Any, List, Callable, Iterable, Optional, Set
from pydantic import BaseModel, ConfigDict, Field

from ..model import SourcePosition


def audit_spec(codes: List[str]):
    """
    Decorator to declare which message keys a specific check function emits.
    Facilitates auto-discovery by the DOMRegistry.
    """
    def decorator(func):
        func.defined_codes = codes
        return func
    return decorator


def _as_int(value: Any) -> int:
    # bool is an int subclass but never a line number
    return value if isinstance(value, int) and not isinstance(value, bool) else 0


def as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


def position_from_loc(raw: Any) -> SourcePosition:
    """Reads ``raw["loc"]["start"]`` (ESTree / vue-eslint-parser); anything unexpected gives 0:0."""
    loc = raw.get("loc") if isinstance(raw, dict) else None
    start = loc.get("start") if isinstance(loc, dict) else None
    if not isinstance(start, dict):
        return SourcePosition()
    return SourcePosition(line=_as_int(start.get("line")), column=_as_int(start.get("column")))


class AttributeKind(str, Enum):
    STATIC = "static"
    DYNAMIC = "dynamic"  # bound value, not known at analysis time
    SPREAD = "spread"  # unknown set of attributes


class AttributeValue(BaseModel):
    """Classified attribute value. ``value`` is only meaningful for STATIC."""
    model_config = ConfigDict(frozen=True)

    kind: AttributeKind
    value: Optional[str] = None

    @property
    def is_static(self) -> bool:
        return self.kind is AttributeKind.STATIC

    @classmethod
    def static(cls, value: Any) -> "AttributeValue":
        return cls(kind=AttributeKind.STATIC, value="" if value is None else str(value))


DYNAMIC = AttributeValue(kind=AttributeKind.DYNAMIC)
UNKNOWN = AttributeValue(kind=AttributeKind.SPREAD)


class AttributeEntry(BaseModel):
    """One raw attribute of a node. Spread entries carry no name."""
    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    value: AttributeValue

    @property
    def is_spread(self) -> bool:
        return self.value.kind is AttributeKind.SPREAD


class ElementNode(BaseModel):
    """
    Canonical, dialect-independent model of one markup element.

    Produced by the DOMBuilder from a JSX, Vue or HTML node. ``name`` is the
    component or tag name as written (full dotted path for member expressions,
    empty when it could not be resolved); ``name_tail`` is its rightmost
    resolvable segment. The caller's original node is kept in ``raw``.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    dialect: str
    name: str = ""
    name_tail: Optional[str] = None
    attributes: List[AttributeEntry] = Field(default_factory=list)
    text: Optional[str] = ""
    children: List['ElementNode'] = Field(default_factory=list)
    position: SourcePosition = Field(default_factory=SourcePosition)
    raw: Optional[Any] = Field(default=None, exclude=True, repr=False)

    def iter_tree(self) -> Iterable["ElementNode"]:
        """Depth-first pre-order walk (document order), without recursion."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def iter_with_ancestors(self):
        """Like iter_tree, but yields ``(node, ancestors)`` tuples; ancestors run root-first."""
        stack = [(self, ())]
        while stack:
            node, ancestors = stack.pop()
            yield node, ancestors
            lineage = ancestors + (node,)
            stack.extend((child, lineage) for child in reversed(node.children))


class DialectAdapter:
    """
    Capability set every source dialect implements.

    The builder only talks to adapters through these methods, so the rest of
    the package never branches on dialect. Implementations must not raise on
    unexpected shapes; they degrade to DYNAMIC/SPREAD values or empty names.
    """
    name: str = ""

    def accepts(self, raw: Any) -> bool:
        raise NotImplementedError

    def element_name(self, raw: Any) -> List[Optional[str]]:
        """Name segments as written; ``None`` marks a segment that could not be resolved."""
        raise NotImplementedError

    def attributes(self, raw: Any) -> List[AttributeEntry]:
        raise NotImplementedError

    def children(self, raw: Any) -> Iterable[Any]:
        raise NotImplementedError

    def text(self, raw: Any) -> str:
        return ""

    def position(self, raw: Any) -> SourcePosition:
        return SourcePosition()

    def find_roots(self, raw: Any) -> Optional[List[Any]]:
        """
        Returns the outermost elements of this dialect inside a container
        (e.g. a Program AST), or None when ``raw`` is not such a container.
        """
        return None


class DialectDefinition:
    """Configuration object binding a dialect name to its adapter."""

    def __init__(self, name: str, adapter: DialectAdapter, priority: int = 100):
        self.name = name
        self.adapter = adapter
        self.priority = priority


class CheckDefinition:
    """
    Configuration object binding a rule id to its document check and message templates.

    ``run`` receives ``(root, index, config)`` and returns Violations.
    """

    def __init__(
            self,
            rule_id: str,
            run: Callable[..., list],
            messages: Optional[Dict[str, str]] = None,
            order: int = 100
    ):
        self.rule_id = rule_id
        self.run = run
        self.messages = messages or {}
        self.order = order

        # --- Auto-Discovery of Message Keys ---
        final_codes: Set[str] = set(self.messages)
        if hasattr(run, 'defined_codes'):
            final_codes.update(run.defined_codes)

        self.codes = sorted(final_codes)
