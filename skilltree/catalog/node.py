"""
Skill node definitions - tiers, categories, the node model.
"""

from __future__ import annotations

from enum import Enum, IntEnum, auto
from collections.abc import Iterable
from typing import Any, Optional

from pydantic import Field, field_validator

from skilltree.core.component import Component
from skilltree.effects.model import SkillEffect


class SkillTier(IntEnum):
    """Skill tiers, ordered from entry level to capstone."""
    BASIC = 1
    INTERMEDIATE = 2
    ADVANCED = 3
    MASTER = 4
    LEGENDARY = 5


class SkillCategory(Enum):
    """Skill categories."""
    COMBAT = auto()
    DEFENSE = auto()
    UTILITY = auto()
    MOVEMENT = auto()
    SPECIAL = auto()


class SkillNode(Component):
    """
    A single unlockable skill.

    Every field except `unlocked` is frozen once the node is built.

    Attributes:
        id: Unique key
        name: Display name
        description: Flavour text
        cost: XP required to unlock (never deducted)
        tier: Ordinal tier 1-5
        category: Category for grouping and recommendations
        effect: What the skill does
        prerequisites: Ids that must be unlocked first (ordered, no duplicates)
        unlocked: Whether the player currently holds this skill
    """
    id: str = Field(frozen=True, min_length=1)
    name: str = Field(frozen=True)
    description: str = Field(default="", frozen=True)
    cost: int = Field(ge=0, frozen=True)
    tier: SkillTier = Field(default=SkillTier.BASIC, frozen=True)
    category: SkillCategory = Field(default=SkillCategory.UTILITY, frozen=True)
    effect: Optional[SkillEffect] = Field(default=None, frozen=True)
    prerequisites: tuple[str, ...] = Field(default=(), frozen=True)
    unlocked: bool = False

    @field_validator("prerequisites", mode="before")
    @classmethod
    def _collapse_duplicates(cls, value: Any) -> Any:
        if isinstance(value, str):
            return (value,)
        if isinstance(value, Iterable):
            return tuple(dict.fromkeys(value))
        return value

    def missing_prerequisites(self, unlocked: set[str] | frozenset[str]) -> list[str]:
        """Prerequisites not in the unlocked set, in declaration order."""
        return [p for p in self.prerequisites if p not in unlocked]

    def prerequisites_met(self, unlocked: set[str] | frozenset[str]) -> bool:
        return all(p in unlocked for p in self.prerequisites)

    def full_description(self) -> str:
        """Description including effect details and cost."""
        effect_desc = self.effect.describe() if self.effect is not None else "No effect"
        return f"{self.description}\n\nEffect: {effect_desc}\nCost: {self.cost} XP"
