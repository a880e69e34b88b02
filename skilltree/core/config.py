"""
Progression engine configuration.
"""

from __future__ import annotations

from skilltree.catalog.node import SkillCategory


DEFAULT_HISTORY_CAPACITY = 10


class ProgressionConfig:
    """Configuration for the progression engine."""

    def __init__(
        self,
        history_capacity: int = DEFAULT_HISTORY_CAPACITY,
        default_priority_category: SkillCategory = SkillCategory.COMBAT,
        publish_events: bool = True,
    ):
        if history_capacity < 1:
            raise ValueError(f"history_capacity must be >= 1, got {history_capacity}")
        self.history_capacity = history_capacity
        self.default_priority_category = default_priority_category
        self.publish_events = publish_events

    def __repr__(self) -> str:
        return (
            f"ProgressionConfig(history_capacity={self.history_capacity}, "
            f"default_priority_category={self.default_priority_category.name}, "
            f"publish_events={self.publish_events})"
        )
