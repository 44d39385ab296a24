import json
import logging
from collections import Counter, defaultdict
from pathlib import Path
from typing import Dict, Any, Iterable, List, Optional, Union

from ..model import Violation
from ..dom.registry import DOMRegistry

logger = logging.getLogger(__name__)


class ReportManager:
    """
    Collects Violations from the checks and forwards them to a host.

    Violations only carry a message key and structured data; prose is rendered
    here, on demand, from the templates each check registers.
    """

    def __init__(self, source: Optional[str] = None):
        self.source = source
        self._violations: List[Violation] = []

    def collect(self, violations: Iterable[Violation]) -> int:
        """Adds violations to the report; returns how many were added."""
        added = list(violations)
        self._violations.extend(added)
        return len(added)

    @property
    def violations(self) -> List[Violation]:
        """All collected violations in document order."""
        return sorted(self._violations, key=lambda v: v.sort_key)

    def summary(self) -> Dict[str, Dict[str, int]]:
        """Violation counts per rule id and message key."""
        counts = defaultdict(Counter)
        for v in self._violations:
            counts[v.rule_id][v.message_key] += 1
        return {rule: dict(keys) for rule, keys in counts.items()}

    @staticmethod
    def render(violation: Violation) -> str:
        """Formats the message template registered for the violation's rule."""
        check = DOMRegistry.get_check(violation.rule_id)
        template = check.messages.get(violation.message_key) if check else None
        if not template:
            return f"{violation.rule_id}: {violation.message_key}"
        try:
            return template.format(**violation.data)
        except (KeyError, IndexError, ValueError) as e:
            logger.warning(f"Could not render message for {violation.rule_id}/{violation.message_key}: {e}")
            return template

    def to_records(self) -> List[Dict[str, Any]]:
        """Plain dictionaries for hosts and report files."""
        records = []
        for v in self.violations:
            record = v.model_dump(mode="json")
            record["message"] = self.render(v)
            if self.source:
                record["source"] = self.source
            records.append(record)
        return records

    def save_report(self, path: Union[str, Path]) -> Path:
        """Writes the records and summary as JSON."""
        path = Path(path)
        payload = {
            "source": self.source,
            "summary": self.summary(),
            "violations": self.to_records()
        }
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2)
        logger.info(f"Report with {len(self._violations)} violation(s) saved to {path}")
        return path

    def clear(self) -> None:
        self._violations = []
