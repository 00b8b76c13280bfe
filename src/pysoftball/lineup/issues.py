"""Diagnostics reported during plan generation and loading."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pysoftball.models import Position


class IssueKind(str, Enum):
    INSUFFICIENT_PLAYERS = "insufficient_players"
    UNCOVERABLE_POSITION = "uncoverable_position"
    CONSTRAINT_VIOLATION = "constraint_violation"
    MALFORMED_SHARED_STATE = "malformed_shared_state"


@dataclass(frozen=True)
class PlanIssue:
    kind: IssueKind
    message: str
    inning: Optional[int] = None
    position: Optional[Position] = None

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "message": self.message,
            "inning": self.inning,
            "position": self.position.value if self.position else None,
        }
