"""Input adapters that normalize raw roster data."""

from .roster import (
    DEFAULT_ROSTER_MAPPING,
    RosterRow,
    load_roster,
    load_roster_csv,
    load_roster_json,
    players_from_payload,
    rows_to_players,
)

__all__ = [
    "DEFAULT_ROSTER_MAPPING",
    "RosterRow",
    "load_roster",
    "load_roster_csv",
    "load_roster_json",
    "players_from_payload",
    "rows_to_players",
]
