from __future__ import annotations

from typing import Any, Dict, List, Literal

from pydantic import BaseModel, ConfigDict, Field


class PlanRequest(BaseModel):
    attendance: List[str] | None = None
    seed: int | None = None
    min_women_on_field: int | None = Field(default=None, ge=0, le=9)


class PitchingRow(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    batting_position: int = Field(alias="battingPosition", ge=1)
    batter: str
    pitcher: str


class IssueResponse(BaseModel):
    kind: str
    message: str
    inning: int | None = None
    position: str | None = None


class PlanPayload(BaseModel):
    attendance: List[str]
    batting_order: List[str] = Field(default_factory=list)
    pitching: List[PitchingRow] = Field(default_factory=list)
    fielding: List[Dict[str, Any]] = Field(default_factory=list)
    issues: List[IssueResponse] = Field(default_factory=list)
    seed: int | None = None
    unknown_attendees: List[str] = Field(default_factory=list)


class PlayerStatResponse(BaseModel):
    name: str
    bench_turns: int
    playing_turns: int
    preferred_position_turns: int
    total_turns: int


class ValidationResponse(BaseModel):
    is_valid: bool
    issues: List[str]
    stats: List[PlayerStatResponse]
    gender_balance: Dict[str, Any] | None = None


class PlanResponse(BaseModel):
    plan: PlanPayload
    validation: ValidationResponse


class SlotPayload(BaseModel):
    inning: int = Field(ge=1)
    position: str
    player: str | None = None


class EditRequest(BaseModel):
    plan: PlanPayload
    source: SlotPayload
    target: SlotPayload


class BattingMoveRequest(BaseModel):
    plan: PlanPayload
    from_slot: int = Field(ge=1)
    to_slot: int = Field(ge=1)


class ShareResponse(BaseModel):
    query: str
    params: Dict[str, str]


class SharedStateResponse(BaseModel):
    source: Literal["shared", "default"]
    attendance: List[str]
    batting_order: List[str] = Field(default_factory=list)
    pitching: List[PitchingRow] = Field(default_factory=list)
    fielding: List[Dict[str, Any]] = Field(default_factory=list)
    issues: List[IssueResponse] = Field(default_factory=list)
