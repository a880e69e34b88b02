"""
Progression module - unlocking, undo and skill-tree queries.

Exports:
- ProgressionEngine: The stateful core
- SkillState, UnlockCheck, UnlockResult, UndoResult: Query/command results
- CommandLog, CommandRecord: Bounded unlock history
- SkillTreeStatistics, SkillTreeProgress, CategoryProgress, TierProgress: Aggregates
"""

from skilltree.progression.engine import (
    ProgressionEngine,
    SkillState,
    UnlockCheck,
    UnlockResult,
    UndoResult,
)
from skilltree.progression.history import CommandLog, CommandRecord
from skilltree.progression.stats import (
    SkillTreeStatistics,
    SkillTreeProgress,
    CategoryProgress,
    TierProgress,
)

__all__ = [
    # Engine
    "ProgressionEngine",
    "SkillState",
    "UnlockCheck",
    "UnlockResult",
    "UndoResult",
    # History
    "CommandLog",
    "CommandRecord",
    # Aggregates
    "SkillTreeStatistics",
    "SkillTreeProgress",
    "CategoryProgress",
    "TierProgress",
]
