"""
Pytest fixtures for CCBalance tests.
"""

import pytest

from ..config import DifficultySettings
from ..engine_core.action import Actor
from ..engine_core.cooldown import CooldownScheduler
from ..engine_core.events import EventBus
from ..engine_core.executor import ActionExecutor
from ..engine_core.state import ChemicalState, LevelConfig, ContainerType


class FakeClock:
    """Manually advanced millisecond clock."""

    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float):
        self.now += ms


class Recorder:
    """Event listener that keeps everything it receives."""

    def __init__(self):
        self.events = []

    def __call__(self, event):
        self.events.append(event)

    def of_type(self, event_type):
        return [e for e in self.events if isinstance(e, event_type)]


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(now=10_000.0)


@pytest.fixture
def difficulty() -> DifficultySettings:
    return DifficultySettings(3)


@pytest.fixture
def events() -> EventBus:
    return EventBus()


@pytest.fixture
def recorder(events: EventBus) -> Recorder:
    rec = Recorder()
    events.subscribe(None, rec)
    return rec


@pytest.fixture
def scheduler(clock, difficulty, events) -> CooldownScheduler:
    return CooldownScheduler(get_difficulty=difficulty.get_difficulty, clock=clock, events=events)


@pytest.fixture
def rigid_gas_level() -> LevelConfig:
    """Rigid vessel, only A is a gas."""
    return LevelConfig(
        level_id="rigid_test",
        container_type=ContainerType.RIGID,
        has_gas=True,
        gas_species=frozenset({"A"}),
        initial_concentrations={"A": 1.0, "B": 0.0},
    )


@pytest.fixture
def flexible_liquid_level() -> LevelConfig:
    """Flexible vessel, everything liquid."""
    return LevelConfig(
        level_id="flexible_test",
        container_type=ContainerType.FLEXIBLE,
        has_gas=False,
        initial_concentrations={"A": 1.0},
    )


@pytest.fixture
def rigid_state() -> ChemicalState:
    return ChemicalState(concentrations={"A": 1.0, "B": 0.0}, pressure=101.325)


@pytest.fixture
def flexible_state() -> ChemicalState:
    return ChemicalState(concentrations={"A": 1.0, "B": 1.0}, volume=1.0)


@pytest.fixture
def make_executor(scheduler, events):
    """Build an executor over a given state and level."""
    def _make(state, level, chemistry=None):
        return ActionExecutor(
            state=state,
            level=level,
            scheduler=scheduler,
            chemistry=chemistry,
            events=events,
        )
    return _make


@pytest.fixture
def player() -> Actor:
    return Actor.PLAYER


@pytest.fixture
def ai() -> Actor:
    return Actor.AI
