"""
Aggregate progress snapshots returned by the engine.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from skilltree.catalog.node import SkillCategory, SkillNode, SkillTier


def percentage(part: int, total: int) -> float:
    """part / total * 100, or 0.0 for an empty total."""
    if total <= 0:
        return 0.0
    return part / total * 100.0


@dataclass
class CategoryProgress:
    total: int = 0
    unlocked: int = 0
    percentage: float = 0.0
    next_recommended: Optional[SkillNode] = None


@dataclass
class TierProgress:
    total: int = 0
    unlocked: int = 0
    percentage: float = 0.0


@dataclass
class SkillTreeStatistics:
    """
    Engine-wide counters.

    xp_spent is a tally of unlocked skill costs; XP is never actually
    deducted from the player.
    """
    total_skills: int = 0
    unlocked_skills: int = 0
    xp_spent: int = 0
    available_skills: int = 0
    affordable_skills: int = 0
    blocked_skills: int = 0
    completion_percentage: float = 0.0
    categories: dict[SkillCategory, CategoryProgress] = field(default_factory=dict)


@dataclass
class SkillTreeProgress:
    """Completion overview, per category (with recommendation) and per tier."""
    total_skills: int = 0
    unlocked_skills: int = 0
    completion_percentage: float = 0.0
    available_skills: int = 0
    player_xp: int = 0
    categories: dict[SkillCategory, CategoryProgress] = field(default_factory=dict)
    tiers: dict[SkillTier, TierProgress] = field(default_factory=dict)
