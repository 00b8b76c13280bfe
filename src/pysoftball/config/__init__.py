"""Configuration helpers for game rules."""

from .rules import DEFAULT_RULES, GameRules, rules_from_env

__all__ = [
    "DEFAULT_RULES",
    "GameRules",
    "rules_from_env",
]
