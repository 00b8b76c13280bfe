import logging

from pysoftball.config import DEFAULT_RULES, GameRules, rules_from_env


def test_default_rules():
    assert DEFAULT_RULES.innings == 7
    assert DEFAULT_RULES.players_on_field == 9
    assert DEFAULT_RULES.min_women_on_field == 3
    assert DEFAULT_RULES.pitcher_exclusion_window == 3
    assert DEFAULT_RULES.batting_attempts == 100


def test_min_women_capped_by_attendance():
    rules = GameRules(min_women_on_field=3)

    assert rules.min_women_for(5) == 3
    assert rules.min_women_for(2) == 2
    assert rules.min_women_for(0) == 0


def test_rules_from_env_overrides(monkeypatch):
    monkeypatch.setenv("PYSOFTBALL_MIN_WOMEN_ON_FIELD", "4")
    monkeypatch.setenv("PYSOFTBALL_BATTING_ATTEMPTS", "25")
    monkeypatch.setenv("PYSOFTBALL_PITCHER_WINDOW", "2")

    rules = rules_from_env()

    assert rules.min_women_on_field == 4
    assert rules.batting_attempts == 25
    assert rules.pitcher_exclusion_window == 2


def test_rules_from_env_invalid_value_falls_back(monkeypatch, caplog):
    monkeypatch.setenv("PYSOFTBALL_BATTING_ATTEMPTS", "lots")
    monkeypatch.delenv("PYSOFTBALL_MIN_WOMEN_ON_FIELD", raising=False)

    with caplog.at_level(logging.WARNING):
        rules = rules_from_env()

    assert rules.batting_attempts == DEFAULT_RULES.batting_attempts
    assert rules.min_women_on_field == DEFAULT_RULES.min_women_on_field
    assert "PYSOFTBALL_BATTING_ATTEMPTS" in caplog.text


def test_rules_from_env_clamps_attempts(monkeypatch):
    monkeypatch.setenv("PYSOFTBALL_BATTING_ATTEMPTS", "0")

    assert rules_from_env().batting_attempts == 1
