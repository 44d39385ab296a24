# src/a11y_auditor/dom/dialects/vue.py
import logging
from typing import Any, Iterable, List, Optional

from ..core import (
    AttributeEntry, AttributeValue, DialectAdapter, DialectDefinition, DYNAMIC, UNKNOWN,
    as_dict, as_list, position_from_loc
)
from ...model import SourcePosition

logger = logging.getLogger(__name__)

BIND_PREFIXES = ("v-bind:", ":")


def _identifier(value: Any) -> Optional[str]:
    """vue-eslint-parser wraps names in VIdentifier nodes; simplified ASTs use plain strings."""
    if isinstance(value, str):
        return value or None
    if isinstance(value, dict):
        name = value.get("rawName") or value.get("name")
        return name if isinstance(name, str) and name else None
    return None


class VueAdapter(DialectAdapter):
    """Adapter for vue-eslint-parser template ASTs (VElement) serialized as dictionaries."""
    name = "vue"

    def accepts(self, raw: Any) -> bool:
        return isinstance(raw, dict) and raw.get("type") == "VElement"

    def element_name(self, raw: dict) -> List[Optional[str]]:
        # rawName keeps the author's casing, which decides native vs. component
        name = raw.get("rawName") or raw.get("name")
        if not isinstance(name, str) or not name:
            return [None]
        return [segment or None for segment in name.split(".")]

    def attributes(self, raw: dict) -> List[AttributeEntry]:
        start_tag = as_dict(raw.get("startTag"))
        entries = []
        for attr in as_list(start_tag.get("attributes")):
            if not isinstance(attr, dict):
                continue
            entry = self._classify(attr)
            if entry is not None:
                entries.append(entry)
        return entries

    def _classify(self, attr: dict) -> Optional[AttributeEntry]:
        key = attr.get("key") or {}
        value = attr.get("value")
        directive = attr.get("directive")
        if directive is None:
            directive = isinstance(key, dict) and key.get("type") == "VDirectiveKey"

        if not directive:
            name = _identifier(key)
            if name is None:
                # Simplified shape: {key: {argument: "aria-label"}, value: {expression: ...}}
                argument = _identifier(key.get("argument")) if isinstance(key, dict) else None
                if argument:
                    return AttributeEntry(name=argument, value=DYNAMIC)
                return AttributeEntry(value=UNKNOWN)

            for prefix in BIND_PREFIXES:
                if name.startswith(prefix):
                    return AttributeEntry(name=name[len(prefix):], value=DYNAMIC)

            if isinstance(value, dict):
                if value.get("expression") is not None:
                    return AttributeEntry(name=name, value=DYNAMIC)
                return AttributeEntry(name=name, value=AttributeValue.static(value.get("value")))
            # <input disabled>
            return AttributeEntry(name=name, value=AttributeValue.static(""))

        directive_name = _identifier(key.get("name")) if isinstance(key, dict) else None
        if directive_name in (":", "v-bind"):
            directive_name = "bind"
        if directive_name != "bind":
            # v-on, v-if, v-model, ... do not declare attributes
            return None

        argument = key.get("argument")
        if argument is None:
            # v-bind="attrs"
            return AttributeEntry(value=UNKNOWN)
        name = _identifier(argument)
        if name is None or (isinstance(argument, dict) and argument.get("type") == "VExpressionContainer"):
            # :[dynamicName]="value"
            logger.debug("Dynamic v-bind argument treated as spread")
            return AttributeEntry(value=UNKNOWN)
        return AttributeEntry(name=name, value=DYNAMIC)

    def children(self, raw: dict) -> Iterable[Any]:
        for child in as_list(raw.get("children")):
            if self.accepts(child):
                yield child

    def text(self, raw: dict) -> str:
        parts = [
            child["value"]
            for child in as_list(raw.get("children"))
            if isinstance(child, dict) and child.get("type") == "VText" and isinstance(child.get("value"), str)
        ]
        return " ".join("".join(parts).split())

    def position(self, raw: dict) -> SourcePosition:
        return position_from_loc(raw)

    def find_roots(self, raw: Any) -> Optional[List[Any]]:
        if isinstance(raw, dict) and self.accepts(raw.get("templateBody")):
            return [raw["templateBody"]]
        if isinstance(raw, list):
            roots = [item for item in raw if self.accepts(item)]
            return roots or None
        return None


DEFINITION = DialectDefinition(name="vue", adapter=VueAdapter(), priority=15)
