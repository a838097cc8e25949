"""
Tests for matches and the match manager.
"""

import pytest

from ..config import Settings
from ..engine_core.action import Action, ActionKind, Actor
from ..engine_core.events import StateUpdated
from ..engine_core.state import LevelConfig
from ..levels import UnknownLevelError, get_level, list_levels
from ..session import MatchManager, MatchStatus, MatchNotFoundError


@pytest.fixture
def manager(clock) -> MatchManager:
    return MatchManager(clock=clock)


class TestMatchLifecycle:
    """Tests for creating, finding and ending matches."""

    def test_create_from_preset(self, manager):
        match = manager.create_match(level_id="haber")

        assert match.is_active()
        assert match.level.level_id == "haber"
        assert match.state.concentrations == {"N2": 1.0, "H2": 3.0, "NH3": 0.5}
        assert match.state.temperature == 400.0
        # K/Q computed before the first action
        assert match.state.equilibrium_constant is not None
        assert match.state.reaction_quotient == pytest.approx(0.25 / 27.0)

    def test_unknown_level(self, manager):
        with pytest.raises(UnknownLevelError):
            manager.create_match(level_id="nope")

    def test_custom_level_without_solver(self, manager):
        level = LevelConfig.from_dict({
            "id": "custom",
            "hasGas": True,
            "gasSpecies": ["X"],
            "initialConcentrations": {"X": 2.0},
        })
        match = manager.create_match(level=level)

        assert match.execute(Action.pressurize()).success
        assert match.state.equilibrium_constant is None

    def test_get_and_end(self, manager):
        match = manager.create_match(level_id="esterification")
        assert manager.get_match(match.match_id) is match

        ended = manager.end_match(match.match_id)

        assert ended.status == MatchStatus.FINISHED
        with pytest.raises(MatchNotFoundError):
            manager.get_match(match.match_id)
        assert manager.list_active_matches() == []

    def test_end_unknown(self, manager):
        with pytest.raises(MatchNotFoundError):
            manager.end_match("missing")

    def test_difficulty_defaults_to_settings(self, clock):
        manager = MatchManager(settings=Settings(difficulty=4), clock=clock)
        match = manager.create_match(level_id="haber")
        assert match.difficulty.get_difficulty() == 4

    def test_cleanup_stale(self, manager):
        match = manager.create_match(level_id="haber")
        match.created_at -= 7200
        assert manager.cleanup_stale_matches(max_age_seconds=3600) == [match.match_id]


class TestMatchPlay:
    """Tests for actions inside a match."""

    def test_settings_cooldowns_used(self, clock):
        settings = Settings()
        settings.cooldowns_ms[ActionKind.HEAT] = 1000
        manager = MatchManager(settings=settings, clock=clock)
        match = manager.create_match(level_id="haber")

        match.execute(Action.heat())
        clock.advance(1000)
        assert match.execute(Action.heat()).success

    def test_reset_round_releases_both_actors(self, manager):
        match = manager.create_match(level_id="haber", difficulty=1)
        match.execute(Action.heat(), Actor.PLAYER)
        match.execute(Action.heat(), Actor.AI)

        match.reset_round()

        assert match.round_number == 2
        assert match.cooldowns(Actor.PLAYER) == {}
        assert match.cooldowns(Actor.AI) == {}
        assert match.execute(Action.heat(), Actor.AI).success

    def test_reset_does_not_roll_back(self, manager):
        match = manager.create_match(level_id="haber")
        match.execute(Action.heat())
        match.reset_round()
        assert match.state.temperature == 420.0

    def test_tick_releases_expired(self, manager, clock):
        match = manager.create_match(level_id="no2_dimerization")
        match.execute(Action.add_species("NO2"))
        clock.advance(3000)
        assert match.tick() == [Action.add_species("NO2")]

    def test_events_subscribable(self, manager):
        match = manager.create_match(level_id="esterification")
        seen = []
        match.events.subscribe(StateUpdated, seen.append)

        match.execute(Action.add_species("H2O"), Actor.AI)

        assert len(seen) == 1
        assert seen[0].actor == Actor.AI
        assert seen[0].snapshot.volume > 1.0


class TestLevels:
    """Tests for the shipped presets."""

    def test_presets_listed(self):
        assert {p.level_id for p in list_levels()} == {"haber", "esterification", "no2_dimerization"}

    def test_gas_levels_are_rigid(self):
        for preset in list_levels():
            if preset.config.has_gas:
                assert preset.config.container_type.value == "rigid"

    def test_reaction_species_have_concentrations(self):
        for preset in list_levels():
            for species in preset.reaction.species:
                assert species in preset.config.initial_concentrations

    def test_equation(self):
        assert get_level("haber").reaction.equation() == "N2 + 3H2 <=> 2NH3"

    def test_from_dict_container_defaults(self):
        assert LevelConfig.from_dict({"hasGas": True}).container_type.value == "rigid"
        assert LevelConfig.from_dict({}).container_type.value == "flexible"
        explicit = LevelConfig.from_dict({"hasGas": True, "containerType": "flexible"})
        assert explicit.container_type.value == "flexible"
