# src/a11y_auditor/dom/checks/form_label.py
from typing import List, Optional

from ...config import AnalysisConfig
from ...model import Violation
from ..attributes import get, get_static, has
from ..core import CheckDefinition, ElementNode, audit_spec
from ..index import DocumentIndex
from ..resolver import resolve

RULE_ID = "form-label"

FORM_CONTROLS = ("input", "select", "textarea")

# Input types that are labelled by their value or need no label at all
UNLABELLED_INPUT_TYPES = ("hidden", "submit", "reset", "button", "image")


def _needs_label(node: ElementNode, tag: str) -> bool:
    if tag not in FORM_CONTROLS:
        return False
    if tag == "input":
        input_type = get_static(node, "type")
        if input_type is not None and input_type.strip().lower() in UNLABELLED_INPUT_TYPES:
            return False
    return True


def _has_label(node: ElementNode, ancestor_tags: List[str], index: DocumentIndex) -> bool:
    if has(node, "aria-label") or has(node, "aria-labelledby"):
        return True

    # <label>Email <input /></label>
    if "label" in ancestor_tags:
        return True

    node_id = get(node, "id")
    if node_id is None:
        return False
    if not node_id.is_static:
        # Generated id: a matching label cannot be ruled out
        return True
    return node_id.value.strip() in index.label_targets


@audit_spec(codes=["missingLabel"])
def validate_form_labels(
        root: ElementNode,
        index: DocumentIndex,
        config: Optional[AnalysisConfig] = None
) -> List[Violation]:
    """
    Rule: form controls must have an accessible label.

    Accepted: aria-label, aria-labelledby, a wrapping <label>, or an id that a
    <label for> anywhere in the document points at.
    """
    config = config or AnalysisConfig()
    violations = []

    for node, ancestors in root.iter_with_ancestors():
        tag = resolve(node, config).tag
        if not _needs_label(node, tag):
            continue

        ancestor_tags = [resolve(a, config).tag for a in ancestors]
        if _has_label(node, ancestor_tags, index):
            continue

        violations.append(Violation(
            rule_id=RULE_ID,
            message_key="missingLabel",
            position=node.position,
            data={"tag": tag},
            node=node
        ))

    return violations


DEFINITION = CheckDefinition(
    rule_id=RULE_ID,
    run=validate_form_labels,
    messages={
        "missingLabel": "Form control <{tag}> must have an associated label "
                        "(use id/for, aria-label, or aria-labelledby)"
    },
    order=30
)
