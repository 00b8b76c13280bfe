"""Helpers to load roster files and emit canonical players."""

from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Any, List, Mapping, Optional, Sequence

from pydantic import BaseModel, ValidationError

from pysoftball.models import Player, Roster, RosterError


logger = logging.getLogger(__name__)

DEFAULT_ROSTER_MAPPING = {
    "name": "name",
    "gender": "gender",
    "preferred_position": "preferred_position",
    "playable_positions": "playable_positions",
    "pitching_priority": "pitching_priority",
}


class RosterRow(BaseModel):
    raw_name: str
    raw_gender: str
    raw_preferred_position: Optional[str] = None
    raw_playable_positions: Optional[str] = None
    raw_pitching_priority: Optional[str] = None

    @classmethod
    def from_mapping(cls, row: Mapping[str, str], mapping: Mapping[str, str]) -> "RosterRow":
        def extract(key: str, *, default: Optional[str] = None) -> Optional[str]:
            column = mapping.get(key, DEFAULT_ROSTER_MAPPING[key])
            value = row.get(column)
            return value.strip() if value is not None else default

        return cls(
            raw_name=extract("name", default="") or "",
            raw_gender=extract("gender", default="") or "",
            raw_preferred_position=extract("preferred_position"),
            raw_playable_positions=extract("playable_positions"),
            raw_pitching_priority=extract("pitching_priority"),
        )


def _parse_priority(raw: Optional[str]) -> int:
    text = (raw or "").strip()
    if not text:
        return 0
    try:
        return max(0, int(float(text)))
    except ValueError:
        raise RosterError(f"pitching priority '{raw}' is not numeric") from None


def rows_to_players(rows: Sequence[RosterRow]) -> List[Player]:
    players: List[Player] = []
    for index, row in enumerate(rows, start=1):
        if not row.raw_name:
            logger.warning("Skipping roster row %s without a name", index)
            continue
        try:
            players.append(
                Player(
                    name=row.raw_name,
                    gender=row.raw_gender,
                    preferred_position=row.raw_preferred_position,
                    playable_positions=row.raw_playable_positions,
                    pitching_priority=_parse_priority(row.raw_pitching_priority),
                )
            )
        except ValidationError as exc:
            raise RosterError(f"Invalid roster row {index} ({row.raw_name}): {exc}") from exc
    return players


def load_roster_csv(path: Path, *, mapping: Mapping[str, str] | None = None) -> Roster:
    mapping = mapping or DEFAULT_ROSTER_MAPPING
    with path.open(newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        rows = [RosterRow.from_mapping(row, mapping) for row in reader]
    roster = Roster.from_players(rows_to_players(rows))
    logger.info("Loaded %s players from %s", len(roster), path)
    return roster


def players_from_payload(payload: Any) -> List[Player]:
    """Validate a JSON-style list (or ``{"players": [...]}``) of player objects."""

    if isinstance(payload, Mapping):
        payload = payload.get("players", [])
    if not isinstance(payload, list):
        raise RosterError("roster JSON must be a list of players")
    players: List[Player] = []
    for index, item in enumerate(payload, start=1):
        try:
            players.append(Player.model_validate(item))
        except ValidationError as exc:
            raise RosterError(f"Invalid roster entry {index}: {exc}") from exc
    return players


def load_roster_json(path: Path) -> Roster:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise RosterError(f"Invalid roster JSON in {path}: {exc}") from exc
    roster = Roster.from_players(players_from_payload(payload))
    logger.info("Loaded %s players from %s", len(roster), path)
    return roster


def load_roster(path: Path, *, mapping: Mapping[str, str] | None = None) -> Roster:
    """Load a roster from CSV or JSON depending on the file suffix."""

    if path.suffix.lower() == ".json":
        return load_roster_json(path)
    return load_roster_csv(path, mapping=mapping)
