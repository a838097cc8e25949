"""
Session Module - Manages ephemeral matches.

A match represents one play-through of a level:
- Created when the player picks a level
- Holds the chemical state, cooldowns and executor
- Accepts actions from the player and the AI
- Destroyed when the match ends

Matches are EPHEMERAL: nothing is persisted.
"""

from .manager import MatchManager, Match, MatchStatus, MatchNotFoundError

__all__ = [
    "MatchManager",
    "Match",
    "MatchStatus",
    "MatchNotFoundError",
]
