# src/a11y_auditor/dom/qngine.py
import logging
from typing import Any, List, Optional

from ..config import AnalysisConfig
from ..model import Violation
from .builder import DOMBuilder
from .index import build_index
from .registry import DOMRegistry

logger = logging.getLogger(__name__)


class QNGINE:
    """
    Quality Engine (QNGINE) for auditing documents.

    Runs in two phases that are never interleaved: the whole tree is indexed
    first, then every registered check validates against the finished index.
    Holds no per-document state, so one instance can serve many documents.
    """

    def __init__(self, config: Optional[AnalysisConfig] = None):
        """Initializes the engine by discovering and loading all available checks."""
        self.config = config or AnalysisConfig()
        self.builder = DOMBuilder()
        self.checks = [
            check for check in DOMRegistry.get_all_checks()
            if check.rule_id not in self.config.disabled_rules
        ]

    def run_audit(self, document: Any) -> List[Violation]:
        """
        Runs the full check suite on one document.

        Args:
            document: Anything DOMBuilder.build accepts.

        Returns:
            List[Violation]: Findings, grouped by check in registration order.
        """
        root = self.builder.build(document)
        index = build_index(root, self.config)

        findings = []
        for check in self.checks:
            results = check.run(root, index, self.config)
            if results:
                logger.debug("%s reported %d violation(s)", check.rule_id, len(results))
                findings.extend(results)

        return findings
