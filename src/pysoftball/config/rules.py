"""Game rules that parameterize lineup generation."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from typing import Tuple

from pysoftball.models import FIELD_POSITIONS, Position


logger = logging.getLogger(__name__)

_MIN_WOMEN_ENV = "PYSOFTBALL_MIN_WOMEN_ON_FIELD"
_BATTING_ATTEMPTS_ENV = "PYSOFTBALL_BATTING_ATTEMPTS"
_PITCHER_WINDOW_ENV = "PYSOFTBALL_PITCHER_WINDOW"


@dataclass(frozen=True)
class GameRules:
    innings: int = 7
    field_positions: Tuple[Position, ...] = FIELD_POSITIONS
    min_women_on_field: int = 3
    # Slots after a pitcher's own at-bat during which they cannot pitch.
    pitcher_exclusion_window: int = 3
    batting_attempts: int = 100

    @property
    def players_on_field(self) -> int:
        return len(self.field_positions)

    def min_women_for(self, female_count: int) -> int:
        return max(0, min(self.min_women_on_field, female_count))


DEFAULT_RULES = GameRules()


def _env_int(name: str, default: int, *, min_value: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default
    if min_value is not None:
        value = max(min_value, value)
    return value


def rules_from_env(base: GameRules = DEFAULT_RULES) -> GameRules:
    """Return ``base`` with any PYSOFTBALL_* environment overrides applied."""

    return replace(
        base,
        min_women_on_field=_env_int(_MIN_WOMEN_ENV, base.min_women_on_field, min_value=0),
        batting_attempts=_env_int(_BATTING_ATTEMPTS_ENV, base.batting_attempts, min_value=1),
        pitcher_exclusion_window=_env_int(_PITCHER_WINDOW_ENV, base.pitcher_exclusion_window, min_value=0),
    )
