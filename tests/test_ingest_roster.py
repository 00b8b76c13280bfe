import json
from pathlib import Path

import pytest

from pysoftball.config_loader import RosterColumnProfile
from pysoftball.ingest import RosterRow, load_roster, load_roster_csv, players_from_payload, rows_to_players
from pysoftball.models import Gender, Position, RosterError


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def test_load_roster_csv_normalizes_labels(tmp_path: Path):
    roster_path = _write(
        tmp_path / "roster.csv",
        "name,gender,preferred_position,playable_positions,pitching_priority\n"
        "Avery,FEMALE,CATCHER,FIRST_BASE|THIRD_BASE,\n"
        "Gus,M,SS,2B/3B,1\n"
        "Carmen,F,none,Rover,0\n",
    )

    roster = load_roster_csv(roster_path)

    assert roster.names == ["Avery", "Gus", "Carmen"]
    avery = roster.get("Avery")
    assert avery.preferred_position is Position.CATCHER
    assert avery.playable_positions == frozenset({Position.FIRST_BASE, Position.THIRD_BASE})
    assert avery.pitching_priority == 0
    assert roster.get("Gus").pitching_priority == 1
    assert roster.get("Carmen").preferred_position is None
    assert roster.gender_of("Carmen") is Gender.FEMALE


def test_load_roster_csv_with_custom_mapping(tmp_path: Path):
    roster_path = _write(
        tmp_path / "team.csv",
        "Player,Sex,Pos,Also\nDana,W,RF,LF\n",
    )

    roster = load_roster(
        roster_path,
        mapping={"name": "Player", "gender": "Sex", "preferred_position": "Pos", "playable_positions": "Also"},
    )

    dana = roster.get("Dana")
    assert dana.gender is Gender.FEMALE
    assert dana.preferred_position is Position.RIGHT_FIELD
    assert dana.playable_positions == frozenset({Position.LEFT_FIELD})


def test_rows_without_names_are_skipped(caplog):
    mapping = {"name": "name", "gender": "gender"}
    rows = [
        RosterRow.from_mapping({"name": "", "gender": "M"}, mapping),
        RosterRow.from_mapping({"name": "Ivan", "gender": "M"}, mapping),
    ]

    players = rows_to_players(rows)

    assert [player.name for player in players] == ["Ivan"]
    assert "without a name" in caplog.text


def test_bad_priority_raises_roster_error(tmp_path: Path):
    roster_path = _write(
        tmp_path / "roster.csv",
        "name,gender,pitching_priority\nGus,M,ace\n",
    )

    with pytest.raises(RosterError):
        load_roster_csv(roster_path)


def test_bad_gender_raises_roster_error(tmp_path: Path):
    roster_path = _write(tmp_path / "roster.csv", "name,gender\nGus,Q\n")

    with pytest.raises(RosterError, match="Gus"):
        load_roster_csv(roster_path)


def test_duplicate_names_rejected(tmp_path: Path):
    roster_path = _write(tmp_path / "roster.csv", "name,gender\nGus,M\nGus,M\n")

    with pytest.raises(RosterError, match="Duplicate"):
        load_roster_csv(roster_path)


def test_load_roster_json(tmp_path: Path):
    payload = {
        "players": [
            {"name": "Elena", "gender": "FEMALE", "preferred_position": "2B", "playable_positions": ["SS"]},
            {"name": "Hector", "gender": "MALE", "pitching_priority": 2},
        ]
    }
    roster_path = _write(tmp_path / "roster.json", json.dumps(payload))

    roster = load_roster(roster_path)

    assert roster.names == ["Elena", "Hector"]
    assert roster.get("Hector").is_pitcher


def test_players_from_payload_rejects_non_list():
    with pytest.raises(RosterError):
        players_from_payload("not a roster")


def test_mapping_profile_roundtrip(tmp_path: Path):
    path = tmp_path / "profile.json"
    RosterColumnProfile({"name": "Player"}).save(path)

    assert RosterColumnProfile.load(path).roster_mapping == {"name": "Player"}
