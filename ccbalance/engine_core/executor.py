"""
Action Executor - Validates, rate-limits and applies actions.

The executor is the single point of chemical state mutation.
Every action follows the same sequence:

    a. cooldown check (reject cheaply, no state change)
    b. core state change (clamped to bounds)
    c. container physics side effects
    d. start the actor's cooldown
    e. recompute K and Q through the chemistry engine
    f. publish StateUpdated
    g. publish AIActed for AI actions
    h. request an audio cue for player pressure changes in gas levels

Steps a-e run under a lock so concurrent callers (UI thread, AI loop)
never interleave their read-modify-write on the state. Notifications are
published after the lock is released.
"""

from __future__ import annotations
from typing import Callable
import logging
import threading

from .action import Action, ActionKind, ActionResult, Actor, BASE_COOLDOWNS_MS
from .chemistry import ChemistryEngine
from .container import apply_container_effect, rescale_gases
from .cooldown import CooldownScheduler
from .events import EventBus, StateUpdated, AIActed, AudioCueRequested
from .state import (
    ChemicalState, LevelConfig, clamp,
    TEMPERATURE_MIN, TEMPERATURE_MAX, PRESSURE_MIN, PRESSURE_MAX, STANDARD_PRESSURE,
)


logger = logging.getLogger(__name__)

DOSE_FRACTION = 0.05  # dose = 5% of the species' baseline
FALLBACK_DOSE = 0.5  # mol/L, used when the computed dose is zero
TEMPERATURE_STEP = 20.0  # K
PRESSURE_STEP = 50.0  # kPa

PRESSURE_AUDIO_CUE = "steam_producing"


class ActionExecutor:
    """
    Applies actions for both actors to one shared ChemicalState.

    Usage:
        executor = ActionExecutor(state, level, scheduler, engine, events)
        result = executor.execute(Action.heat(), Actor.PLAYER)
        if not result.success:
            ...  # cooling down, try later
    """

    def __init__(
        self,
        state: ChemicalState,
        level: LevelConfig,
        scheduler: CooldownScheduler,
        chemistry: ChemistryEngine | None = None,
        events: EventBus | None = None,
        cooldowns_ms: dict[ActionKind, int] | None = None,
    ):
        self.state = state
        self.level = level
        self.scheduler = scheduler
        self.chemistry = chemistry
        self.events = events or EventBus()
        self.cooldowns_ms = dict(BASE_COOLDOWNS_MS)
        if cooldowns_ms:
            self.cooldowns_ms.update(cooldowns_ms)
        self._lock = threading.RLock()

    def execute(self, action: Action, actor: Actor = Actor.PLAYER) -> ActionResult:
        """
        Execute an action for an actor.

        Never raises for rejection; returns ActionResult.cooling_down().
        """
        with self._lock:
            if self.scheduler.is_on_cooldown(action, actor):
                return ActionResult.cooling_down()

            handler = self._get_handler(action.kind)
            changes = handler(action, actor)

            self.scheduler.start_cooldown(action, self.cooldowns_ms[action.kind], actor)
            self.recompute()
            snapshot = self.state.snapshot()

        logger.debug("%s executed %s: %s", actor.value, action, "; ".join(changes))

        self.events.publish(StateUpdated(action=action, actor=actor, snapshot=snapshot))
        if actor == Actor.AI:
            self.events.publish(AIActed(action=action, snapshot=snapshot))
        if (
            action.kind in (ActionKind.PRESSURIZE, ActionKind.DEPRESSURIZE)
            and actor == Actor.PLAYER
            and self.level.has_gas
        ):
            self.events.publish(AudioCueRequested(cue=PRESSURE_AUDIO_CUE, action=action))

        return ActionResult.ok(*changes)

    def recompute(self):
        """Refresh K and Q on the state from the chemistry engine."""
        if not self.chemistry:
            return
        reading = self.chemistry.recompute_equilibrium(
            dict(self.state.concentrations), self.state.temperature
        )
        self.state.equilibrium_constant = reading.K
        self.state.reaction_quotient = reading.Q

    def dose_for(self, species: str) -> float:
        """Concentration increment for one dose of a species."""
        base = self.state.base_concentrations.get(species)
        if base is None:
            base = self.level.initial_concentrations.get(species)
        if base is None:
            base = 1.0
        return max(0.0, base * DOSE_FRACTION)

    def _get_handler(self, kind: ActionKind) -> Callable[[Action, Actor], list[str]]:
        handlers = {
            ActionKind.ADD_SPECIES: self._handle_add_species,
            ActionKind.HEAT: self._handle_heat,
            ActionKind.COOL: self._handle_cool,
            ActionKind.PRESSURIZE: self._handle_pressurize,
            ActionKind.DEPRESSURIZE: self._handle_depressurize,
        }
        return handlers[kind]

    def _handle_add_species(self, action: Action, actor: Actor) -> list[str]:
        species = action.species
        delta = self.dose_for(species)

        # Set the dosed species first; dilution then applies to the others only
        current = self.state.concentrations.get(species, 0.0)
        self.state.concentrations[species] = current + (delta or FALLBACK_DOSE)

        effect = apply_container_effect(self.state, self.level, species, delta)

        changes = [f"{_who(actor)} added {species}"]
        if effect.volume_change > 0:
            changes.append(f"Volume rose to {self.state.volume:.4f} L")
        if effect.pressure_change > 0:
            changes.append(f"Pressure rose to {self.state.pressure:.3f} kPa")
        return changes

    def _handle_heat(self, action: Action, actor: Actor) -> list[str]:
        self.state.temperature = min(self.state.temperature + TEMPERATURE_STEP, TEMPERATURE_MAX)
        return [f"{_who(actor)} heated to {self.state.temperature:g} K"]

    def _handle_cool(self, action: Action, actor: Actor) -> list[str]:
        self.state.temperature = max(self.state.temperature - TEMPERATURE_STEP, TEMPERATURE_MIN)
        return [f"{_who(actor)} cooled to {self.state.temperature:g} K"]

    def _handle_pressurize(self, action: Action, actor: Actor) -> list[str]:
        self._change_pressure(PRESSURE_STEP)
        return [f"{_who(actor)} pressurized to {self.state.pressure:g} kPa"]

    def _handle_depressurize(self, action: Action, actor: Actor) -> list[str]:
        self._change_pressure(-PRESSURE_STEP)
        return [f"{_who(actor)} depressurized to {self.state.pressure:g} kPa"]

    def _change_pressure(self, step: float):
        old_pressure = self.state.pressure or STANDARD_PRESSURE
        new_pressure = clamp(old_pressure + step, PRESSURE_MIN, PRESSURE_MAX)
        self.state.pressure = new_pressure
        rescale_gases(self.state, self.level, old_pressure, new_pressure)


def _who(actor: Actor) -> str:
    return "AI" if actor == Actor.AI else "You"
