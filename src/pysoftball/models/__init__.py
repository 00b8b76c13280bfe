"""Roster reference data: players, positions and attendance."""

from .player import (
    FIELD_POSITIONS,
    Gender,
    Player,
    Position,
    normalize_gender,
    normalize_position,
)
from .roster import AttendanceReport, Roster, RosterError, split_by_gender

__all__ = [
    "FIELD_POSITIONS",
    "Gender",
    "Player",
    "Position",
    "normalize_gender",
    "normalize_position",
    "AttendanceReport",
    "Roster",
    "RosterError",
    "split_by_gender",
]
