"""
Step trace records produced while parsing.

Author: xwest
"""

from enum import Enum
from dataclasses import dataclass
from typing import Any, Dict


class StepKind(Enum):
    """What a logged step did."""
    ENTER = "enter"
    EXIT = "exit"
    MATCH = "match"
    EPSILON = "epsilon"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Step:
    """
    One parsing action.

    `token` and `token_type` describe the lookahead at the time the step was
    logged; `sequence_index` is the step's position in the trace.
    """
    rule: str
    action: str
    token: str
    token_type: str
    depth: int
    sequence_index: int
    kind: StepKind

    def __str__(self) -> str:
        indent = "  " * self.depth
        return f"#{self.sequence_index + 1} {indent}{self.rule}: {self.action} [lookahead: {self.token}]"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rule": self.rule,
            "action": self.action,
            "token": self.token,
            "tokenType": self.token_type,
            "depth": self.depth,
            "sequenceIndex": self.sequence_index,
            "kind": self.kind.value,
        }
