"""
Player stat components - base stats and skill modifiers.
"""

from __future__ import annotations

from pydantic import Field

from skilltree.core.component import Component
from skilltree.effects.model import Stat


class PlayerStats(Component):
    """
    Base player stats and current state.

    Attributes:
        max_health: Base maximum health before modifiers
        health: Current health
        xp: Current experience points
        speed: Base movement speed
        attack_damage: Base damage per hit
        attack_range: Base attack range
        attack_rate: Base attacks per second
    """
    max_health: float = Field(default=100.0, gt=0)
    health: float = Field(default=100.0, ge=0)
    xp: int = Field(default=0, ge=0)
    speed: float = Field(default=5.0, ge=0)
    attack_damage: float = Field(default=25.0, ge=0)
    attack_range: float = Field(default=3.0, ge=0)
    attack_rate: float = Field(default=1.0, gt=0)


class PlayerModifiers(Component):
    """
    Accumulated skill modifiers.

    Additive fields start at 0, multiplier fields at 1. Modifiers only
    grow; undoing an unlock does not take them back.
    """
    max_health: float = 0.0
    health_regen: float = 0.0
    speed_multiplier: float = 1.0
    speed: float = 0.0
    damage: float = 0.0
    crit_chance: float = 0.0
    attack_speed_multiplier: float = 1.0
    range: float = 0.0
    damage_reduction: float = 0.0
    armor: float = 0.0
    immunity: float = 0.0
    xp_multiplier: float = 1.0
    xp_bonus: float = 0.0
    resource_multiplier: float = 1.0

    def apply(self, stat: Stat, value: float) -> float:
        """
        Fold one modifier in: multiply for multiplier stats, add otherwise.

        Returns:
            The new modifier value

        Raises:
            ValueError: for Stat.HEALTH, which is a heal, not a modifier
        """
        name = _MODIFIER_FIELDS.get(stat)
        if name is None:
            raise ValueError(f"{stat.name} is not a persistent modifier")

        current = getattr(self, name)
        updated = current * value if stat.is_multiplier else current + value
        setattr(self, name, updated)
        return updated


_MODIFIER_FIELDS: dict[Stat, str] = {
    Stat.MAX_HEALTH: "max_health",
    Stat.HEALTH_REGEN: "health_regen",
    Stat.SPEED_MULTIPLIER: "speed_multiplier",
    Stat.SPEED: "speed",
    Stat.DAMAGE: "damage",
    Stat.CRIT_CHANCE: "crit_chance",
    Stat.ATTACK_SPEED_MULTIPLIER: "attack_speed_multiplier",
    Stat.RANGE: "range",
    Stat.DAMAGE_REDUCTION: "damage_reduction",
    Stat.ARMOR: "armor",
    Stat.IMMUNITY: "immunity",
    Stat.XP_MULTIPLIER: "xp_multiplier",
    Stat.XP_BONUS: "xp_bonus",
    Stat.RESOURCE_MULTIPLIER: "resource_multiplier",
}
