"""
Levels - Built-in equilibrium scenarios.

Each preset bundles:
- A LevelConfig (vessel type, gases, starting concentrations)
- The Reaction the default chemistry engine solves for that level
"""

from .presets import LevelPreset, UnknownLevelError, get_level, list_levels, PRESETS

__all__ = [
    "LevelPreset",
    "UnknownLevelError",
    "get_level",
    "list_levels",
    "PRESETS",
]
