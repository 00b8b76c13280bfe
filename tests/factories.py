"""Roster builders shared by the test modules."""

from __future__ import annotations

from pysoftball.models import FIELD_POSITIONS, Player, Roster

ANY_POSITION = "|".join(position.value for position in FIELD_POSITIONS)


def make_player(name, gender="M", preferred=None, playable=ANY_POSITION, priority=0) -> Player:
    return Player(
        name=name,
        gender=gender,
        preferred_position=preferred,
        playable_positions=playable,
        pitching_priority=priority,
    )


def flexible_players(males: int, females: int, pitchers: int = 0) -> list[Player]:
    """Players who can cover every position, preferred positions cycling."""

    players = []
    for index in range(males):
        players.append(
            make_player(
                f"M{index + 1}",
                "M",
                preferred=FIELD_POSITIONS[index % len(FIELD_POSITIONS)],
                priority=index + 1 if index < pitchers else 0,
            )
        )
    for index in range(females):
        players.append(
            make_player(
                f"F{index + 1}",
                "F",
                preferred=FIELD_POSITIONS[(index + males) % len(FIELD_POSITIONS)],
            )
        )
    return players


def flexible_roster(males: int, females: int, pitchers: int = 0) -> Roster:
    return Roster.from_players(flexible_players(males, females, pitchers))
