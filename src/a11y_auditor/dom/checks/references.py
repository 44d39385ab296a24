# src/a11y_auditor/dom/checks/references.py
"""
Referential integrity of ID-reference attributes.

Runs after the document index is complete, so forward references (a label
declared after the control pointing at it) resolve the same as back references.
"""
from typing import Dict, List, Optional

from ...config import AnalysisConfig
from ...model import Violation
from ..attributes import get
from ..core import CheckDefinition, ElementNode, audit_spec
from ..index import DocumentIndex

RULE_ID = "aria-reference"

# attribute -> True when the value is a whitespace-separated list of ids
REFERENCE_ATTRIBUTES: Dict[str, bool] = {
    "aria-labelledby": True,
    "aria-describedby": True,
    "aria-controls": True,
    "aria-owns": True,
    "aria-flowto": True,
    "aria-activedescendant": False,
    "aria-errormessage": False,
    "aria-details": False,
    "for": False,
    "htmlFor": False,
}


def reference_tokens(value: str, multiple: bool) -> List[str]:
    """Splits a reference value into ids; duplicates are reported once."""
    if multiple:
        return list(dict.fromkeys(value.split()))
    value = value.strip()
    return [value] if value else []


@audit_spec(codes=["missingReference"])
def validate_references(
        root: ElementNode,
        index: DocumentIndex,
        config: Optional[AnalysisConfig] = None
) -> List[Violation]:
    """
    Emits one violation per referenced id that is not in ``index.ids``.

    Only static values are checked: a bound value cannot be validated and is
    never flagged.
    """
    violations = []
    for node in root.iter_tree():
        for attribute, multiple in REFERENCE_ATTRIBUTES.items():
            value = get(node, attribute)
            if value is None or not value.is_static:
                continue

            for token in reference_tokens(value.value, multiple):
                if token in index.ids:
                    continue
                violations.append(Violation(
                    rule_id=RULE_ID,
                    message_key="missingReference",
                    position=node.position,
                    data={"attribute": attribute, "missingId": token},
                    node=node
                ))
    return violations


DEFINITION = CheckDefinition(
    rule_id=RULE_ID,
    run=validate_references,
    messages={
        "missingReference": '"{attribute}" references an id that does not exist in this document: "{missingId}"'
    },
    order=10
)
