from __future__ import annotations

from typing import List

from pydantic import BaseModel

from pysoftball.lineup.pitching import priority_label
from pysoftball.models import FIELD_POSITIONS, Player


class PlayerResponse(BaseModel):
    name: str
    gender: str
    preferred_position: str | None
    playable_positions: List[str]
    pitching_priority: int
    pitching_role: str | None = None

    @classmethod
    def from_player(cls, player: Player) -> "PlayerResponse":
        return cls(
            name=player.name,
            gender=player.gender.value,
            preferred_position=player.preferred_position.value if player.preferred_position else None,
            playable_positions=[
                position.value for position in FIELD_POSITIONS if position in player.playable_positions
            ],
            pitching_priority=player.pitching_priority,
            pitching_role=priority_label(player.pitching_priority) if player.is_pitcher else None,
        )


class RosterResponse(BaseModel):
    players: List[PlayerResponse]
