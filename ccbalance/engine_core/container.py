"""
Container Physics - Secondary effects of dosing and pressure changes.

Flexible vessel + liquid dose: the dose adds volume, diluting every
other species.
Rigid vessel + gas dose (gas-bearing level): the dose raises pressure.
Direct pressure changes rescale gas concentrations proportionally
(Boyle's law at constant temperature).
"""

from __future__ import annotations
from dataclasses import dataclass

from .state import ChemicalState, ContainerType, LevelConfig, PRESSURE_MIN, PRESSURE_MAX, clamp


MOLAR_VOLUME_WATER = 0.018  # L per mol/L of liquid dose
PRESSURE_PER_CONCENTRATION = 25.0  # kPa per mol/L of gas dose


@dataclass(frozen=True)
class ContainerEffect:
    volume_change: float = 0.0
    pressure_change: float = 0.0


NO_EFFECT = ContainerEffect()


def container_effect(level: LevelConfig, species: str, concentration_delta: float) -> ContainerEffect:
    """
    Compute the volume/pressure side effect of dosing a species.

    Pure: the caller applies the returned deltas (see apply_container_effect).
    """
    is_liquid = not level.is_gas(species)

    if level.container_type == ContainerType.FLEXIBLE and is_liquid:
        return ContainerEffect(volume_change=concentration_delta * MOLAR_VOLUME_WATER)

    if level.container_type == ContainerType.RIGID and level.has_gas:
        gas_effect = 1 if level.is_gas(species) else 0
        return ContainerEffect(
            pressure_change=gas_effect * concentration_delta * PRESSURE_PER_CONCENTRATION
        )

    return NO_EFFECT


def apply_container_effect(
    state: ChemicalState,
    level: LevelConfig,
    species: str,
    concentration_delta: float,
) -> ContainerEffect:
    """
    Apply the side effect of a dose that has already been added to state.

    The dosed species keeps the concentration it was just set to; only
    the other species are diluted.
    """
    effect = container_effect(level, species, concentration_delta)

    if effect.volume_change > 0:
        old_volume = state.volume or 1.0
        new_volume = old_volume + effect.volume_change
        dilute(state, old_volume / new_volume, exclude=species)
        state.volume = new_volume

    if effect.pressure_change > 0:
        state.pressure = clamp(
            (state.pressure or 101.0) + effect.pressure_change, PRESSURE_MIN, PRESSURE_MAX
        )

    return effect


def dilute(state: ChemicalState, factor: float, exclude: str | None = None):
    """Scale every concentration except `exclude` by `factor`."""
    for s, conc in state.concentrations.items():
        if s != exclude:
            state.concentrations[s] = conc * factor


def rescale_gases(state: ChemicalState, level: LevelConfig, old_pressure: float, new_pressure: float):
    """
    Scale gas concentrations by new/old pressure.

    Non-gas species and gases absent from the state are untouched.
    """
    if not level.has_gas or old_pressure <= 0:
        return
    ratio = new_pressure / old_pressure
    for s in level.gas_species:
        if s in state.concentrations:
            state.concentrations[s] *= ratio
