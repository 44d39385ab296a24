# src/a11y_auditor/dom/checks/heading_order.py
from typing import List, Optional

from ...config import AnalysisConfig
from ...model import Violation
from ..core import CheckDefinition, ElementNode, audit_spec
from ..index import DocumentIndex

RULE_ID = "heading-order"


@audit_spec(codes=["skippedLevel", "sameLevel"])
def validate_heading_sequence(index: DocumentIndex, config: Optional[AnalysisConfig] = None) -> List[Violation]:
    """
    Rule: heading levels may not jump down by more than ``max_skip``.

    The first heading sets the baseline whatever its level. Going back up
    (closing a subsection) is always fine. The baseline follows the level
    actually seen, whether or not it was reported.
    """
    config = config or AnalysisConfig()
    violations = []
    previous = 0

    for heading in index.headings:
        current = heading.level
        if previous:
            delta = current - previous
            if delta > 0 and delta > config.max_skip:
                message_key = "skippedLevel"
            elif delta == 0 and not config.allow_same_level:
                message_key = "sameLevel"
            else:
                message_key = None

            if message_key:
                violations.append(Violation(
                    rule_id=RULE_ID,
                    message_key=message_key,
                    position=heading.position,
                    data={"previous": previous, "current": current},
                    node=heading.node
                ))
        previous = current

    return violations


def _run(root: ElementNode, index: DocumentIndex, config: AnalysisConfig) -> List[Violation]:
    return validate_heading_sequence(index, config)


DEFINITION = CheckDefinition(
    rule_id=RULE_ID,
    run=_run,
    messages={
        "skippedLevel": "Heading level skipped from h{previous} to h{current}",
        "sameLevel": "Heading h{current} repeats the level of the previous heading"
    },
    order=20
)
