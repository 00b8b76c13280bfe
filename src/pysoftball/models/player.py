"""Canonical player models shared across ingestion and lineup layers."""

from __future__ import annotations

import re
from enum import Enum
from typing import FrozenSet, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict


class Gender(str, Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"


class Position(str, Enum):
    """Field positions, valued by their display label."""

    CATCHER = "Catcher"
    FIRST_BASE = "1B"
    SECOND_BASE = "2B"
    THIRD_BASE = "3B"
    ROVER = "Rover"
    SHORTSTOP = "SS"
    RIGHT_FIELD = "RF"
    CENTER_FIELD = "CF"
    LEFT_FIELD = "LF"


FIELD_POSITIONS: tuple[Position, ...] = tuple(Position)

_NO_POSITION_TOKENS = {"", "NONE", "NULL", "-"}

_POSITION_ALIASES: dict[str, Position] = {
    "C": Position.CATCHER,
    "FIRST": Position.FIRST_BASE,
    "SECOND": Position.SECOND_BASE,
    "THIRD": Position.THIRD_BASE,
    "SHORT": Position.SHORTSTOP,
    "LEFT": Position.LEFT_FIELD,
    "CENTER": Position.CENTER_FIELD,
    "RIGHT": Position.RIGHT_FIELD,
}


def _position_token(value: str) -> str:
    return re.sub(r"[\s\-]+", "_", value.strip().upper())


def _build_position_lookup() -> dict[str, Position]:
    lookup: dict[str, Position] = {}
    for position in Position:
        lookup[_position_token(position.name)] = position
        lookup[_position_token(position.value)] = position
    for alias, position in _POSITION_ALIASES.items():
        lookup.setdefault(alias, position)
    return lookup


_POSITION_LOOKUP = _build_position_lookup()


def normalize_position(value: "str | Position | None") -> Optional[Position]:
    """Map an enum tag (``FIRST_BASE``) or display label (``1B``) to a Position.

    ``None``, blanks and the literal ``"none"`` mean "no position". Anything
    else that is not recognised raises ValueError.
    """

    if value is None or isinstance(value, Position):
        return value
    token = _position_token(str(value))
    if token in _NO_POSITION_TOKENS:
        return None
    try:
        return _POSITION_LOOKUP[token]
    except KeyError:
        raise ValueError(f"Unknown field position {value!r}") from None


def normalize_gender(value: "str | Gender") -> Gender:
    if isinstance(value, Gender):
        return value
    token = str(value).strip().upper()
    if token in {"M", "MALE", "MAN"}:
        return Gender.MALE
    if token in {"F", "FEMALE", "W", "WOMAN"}:
        return Gender.FEMALE
    raise ValueError(f"Unknown gender {value!r}")


class Player(BaseModel):
    """Immutable reference data for one rostered player."""

    name: str = Field(..., min_length=1)
    gender: Gender
    preferred_position: Optional[Position] = None
    playable_positions: FrozenSet[Position] = Field(default_factory=frozenset)
    pitching_priority: int = Field(default=0, ge=0)

    model_config = ConfigDict(frozen=True)

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value

    @field_validator("gender", mode="before")
    @classmethod
    def _coerce_gender(cls, value: object) -> Gender:
        return normalize_gender(value)  # type: ignore[arg-type]

    @field_validator("preferred_position", mode="before")
    @classmethod
    def _coerce_preferred(cls, value: object) -> Optional[Position]:
        return normalize_position(value)  # type: ignore[arg-type]

    @field_validator("playable_positions", mode="before")
    @classmethod
    def _coerce_playable(cls, value: object) -> FrozenSet[Position]:
        if value is None:
            return frozenset()
        if isinstance(value, str):
            value = [part for part in re.split(r"[|/;,]", value)]
        positions = {normalize_position(item) for item in value}  # type: ignore[union-attr]
        positions.discard(None)
        return frozenset(positions)  # type: ignore[arg-type]

    @property
    def is_female(self) -> bool:
        return self.gender is Gender.FEMALE

    @property
    def is_pitcher(self) -> bool:
        return self.pitching_priority > 0
