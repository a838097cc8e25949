"""
Tests for environment-driven settings and the CLI.
"""

import pytest

from ..cli import main
from ..config import Settings, DifficultySettings
from ..engine_core.action import ActionKind


class TestSettings:

    def test_defaults(self, monkeypatch):
        for var in ("CCBALANCE_DIFFICULTY", "CCBALANCE_HEAT_COOLDOWN_MS", "CCBALANCE_ENV"):
            monkeypatch.delenv(var, raising=False)

        settings = Settings.from_env()

        assert settings.difficulty == 2
        assert settings.env == "development"
        assert settings.cooldowns_ms[ActionKind.ADD_SPECIES] == 3000
        assert settings.cooldowns_ms[ActionKind.HEAT] == 5000

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("CCBALANCE_DIFFICULTY", "4")
        monkeypatch.setenv("CCBALANCE_HEAT_COOLDOWN_MS", "1200")
        monkeypatch.setenv("CCBALANCE_ALLOWED_ORIGINS", "http://a,http://b")
        monkeypatch.setenv("CCBALANCE_LOG_LEVEL", "debug")

        settings = Settings.from_env()

        assert settings.difficulty == 4
        assert settings.cooldowns_ms[ActionKind.HEAT] == 1200
        assert settings.allowed_origins == ["http://a", "http://b"]
        assert settings.log_level == "DEBUG"

    def test_bad_integer(self, monkeypatch):
        monkeypatch.setenv("CCBALANCE_DIFFICULTY", "hard")
        with pytest.raises(ValueError, match="CCBALANCE_DIFFICULTY"):
            Settings.from_env()

    def test_difficulty_holder(self):
        holder = DifficultySettings()
        assert holder.get_difficulty() == 2
        holder.set_difficulty(3)
        assert holder.get_difficulty() == 3

    def test_zero_difficulty_reads_as_default(self, monkeypatch):
        monkeypatch.setenv("CCBALANCE_DIFFICULTY", "0")
        holder = DifficultySettings(Settings.from_env().difficulty)
        assert holder.get_difficulty() == 2

        holder.set_difficulty(4)
        holder.set_difficulty(0)
        assert holder.get_difficulty() == 2


class TestCLI:

    def test_levels(self, capsys):
        main(["levels"])
        out = capsys.readouterr().out
        assert "haber" in out
        assert "esterification" in out

    def test_simulate_shows_cooldown(self, capsys):
        main(["simulate", "haber", "heat", "heat", "add:N2"])
        out = capsys.readouterr().out
        assert "You heated to 420 K" in out
        assert "heat: cooling down" in out
        assert "You added N2" in out

    def test_simulate_unknown_level(self, capsys):
        with pytest.raises(SystemExit):
            main(["simulate", "nope", "heat"])

    def test_simulate_unknown_action(self, capsys):
        with pytest.raises(SystemExit):
            main(["simulate", "haber", "boil"])
