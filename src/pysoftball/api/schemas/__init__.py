"""Pydantic models for API I/O."""

from .plan import (
    BattingMoveRequest,
    EditRequest,
    IssueResponse,
    PitchingRow,
    PlanPayload,
    PlanRequest,
    PlanResponse,
    PlayerStatResponse,
    ShareResponse,
    SharedStateResponse,
    SlotPayload,
    ValidationResponse,
)
from .roster import PlayerResponse, RosterResponse

__all__ = [
    "BattingMoveRequest",
    "EditRequest",
    "IssueResponse",
    "PitchingRow",
    "PlanPayload",
    "PlanRequest",
    "PlanResponse",
    "PlayerResponse",
    "PlayerStatResponse",
    "RosterResponse",
    "ShareResponse",
    "SharedStateResponse",
    "SlotPayload",
    "ValidationResponse",
]
