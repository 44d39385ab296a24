from typing import Optional, Dict, Any
from pydantic import BaseModel, ConfigDict, Field, field_validator
import json


class SourcePosition(BaseModel):
    """Line/column of a node in its source file. Lines are 1-based, 0 means unknown."""
    model_config = ConfigDict(frozen=True)

    line: int = 0
    column: int = 0


class Violation(BaseModel):
    """
    Data model representing a single accessibility finding.

    The record carries a stable message key plus structured data; turning it
    into prose is left to the ReportManager or the host.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    rule_id: str  # e.g., 'aria-reference', 'heading-order'
    message_key: str  # e.g., 'missingReference', 'skippedLevel'
    position: SourcePosition = Field(default_factory=SourcePosition)
    data: Dict[str, Any] = Field(default_factory=dict)

    # The offending node; kept out of dumps
    node: Optional[Any] = Field(default=None, exclude=True, repr=False)

    @field_validator('data', mode='before')
    @classmethod
    def parse_data(cls, v: Any) -> Dict[str, Any]:
        """
        Ensures the 'data' field is a dictionary.
        Automatically parses JSON strings (e.g. records read back from a report file).
        """
        if isinstance(v, str):
            try:
                return json.loads(v)
            except (json.JSONDecodeError, TypeError):
                return {}
        return v or {}

    @property
    def sort_key(self):
        return (self.position.line, self.position.column, self.rule_id, self.message_key)
