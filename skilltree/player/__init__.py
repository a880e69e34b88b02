"""
Player module - reference player used by the engine's tests and tools.
"""

from skilltree.player.stats import PlayerStats, PlayerModifiers
from skilltree.player.system import PlayerSystem

__all__ = [
    "PlayerStats",
    "PlayerModifiers",
    "PlayerSystem",
]
