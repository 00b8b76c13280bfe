"""Position eligibility checks."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence

from pysoftball.models import FIELD_POSITIONS, Player, Position


logger = logging.getLogger(__name__)


def is_preferred_position(player: Optional[Player], position: Position) -> bool:
    if player is None or player.preferred_position is None:
        return False
    return player.preferred_position is position


def can_play(player: Optional[Player], position: Position) -> bool:
    """A player may occupy a position that is preferred or listed as playable."""

    if player is None:
        logger.warning("Eligibility check for %s with no player; treating as ineligible", position.value)
        return False
    return is_preferred_position(player, position) or position in player.playable_positions


def eligible_players(players: Iterable[Player], position: Position) -> List[Player]:
    return [player for player in players if can_play(player, position)]


def uncoverable_positions(
    players: Sequence[Player],
    positions: Sequence[Position] = FIELD_POSITIONS,
) -> List[Position]:
    """Positions that no attending player is eligible for, in field order."""

    return [position for position in positions if not eligible_players(players, position)]
