"""Fairness diagnostics and plan export."""

from .export import PlanExportError, export_batting_to_csv, export_plan_to_csv
from .fairness import (
    BenchGenderBalance,
    InningBenchBalance,
    PlayerStat,
    ValidationReport,
    analyze_bench_gender_balance,
    calculate_player_stats,
    validate_fielding,
    validate_game_plan,
)

__all__ = [
    "BenchGenderBalance",
    "InningBenchBalance",
    "PlanExportError",
    "PlayerStat",
    "ValidationReport",
    "analyze_bench_gender_balance",
    "calculate_player_stats",
    "export_batting_to_csv",
    "export_plan_to_csv",
    "validate_fielding",
    "validate_game_plan",
]
