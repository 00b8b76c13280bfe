"""Softball lineup planner: batting order, pitching rotation and fielding."""

from pysoftball.lineup import GamePlan, build_game_plan
from pysoftball.models import Gender, Player, Position, Roster

__all__ = ["GamePlan", "Gender", "Player", "Position", "Roster", "build_game_plan"]

__version__ = "0.1.0"
