"""
Skill Tree Survivor

Skill-tree progression for survivor-style games: a validated prerequisite
graph, unlock eligibility, reversible unlocks and derived queries.

Quick Start:
    from skilltree import EventBus, PlayerSystem, ProgressionEngine, default_catalog

    bus = EventBus()
    player = PlayerSystem(event_bus=bus)
    engine = ProgressionEngine(default_catalog(), player, bus)

    player.add_xp(50)
    engine.unlock("vitality_1")
    print(engine.get_unlock_path("fortress_defense"))
"""

__version__ = "0.1.0"
__author__ = "Developer"

# Order matters: core has no catalog dependency, config does
from skilltree.core import (
    Component,
    EventBus,
    Event,
    ProgressionEvent,
    PlayerEvent,
    SkillTreeError,
    CatalogIntegrityError,
    IntegrityErrorKind,
    UnlockRejection,
    UndoRejection,
)
from skilltree.effects import SkillEffect, EffectType, Stat, EffectContext
from skilltree.catalog import (
    SkillNode,
    SkillTier,
    SkillCategory,
    Catalog,
    SkillCatalogBuilder,
    default_catalog,
)
from skilltree.core.config import ProgressionConfig
from skilltree.progression import (
    ProgressionEngine,
    SkillState,
    UnlockCheck,
    UnlockResult,
    UndoResult,
)
from skilltree.player import PlayerSystem, PlayerStats

__all__ = [
    # Core
    "Component",
    "ProgressionConfig",
    # Events
    "EventBus",
    "Event",
    "ProgressionEvent",
    "PlayerEvent",
    # Errors
    "SkillTreeError",
    "CatalogIntegrityError",
    "IntegrityErrorKind",
    "UnlockRejection",
    "UndoRejection",
    # Effects
    "SkillEffect",
    "EffectType",
    "Stat",
    "EffectContext",
    # Catalog
    "SkillNode",
    "SkillTier",
    "SkillCategory",
    "Catalog",
    "SkillCatalogBuilder",
    "default_catalog",
    # Progression
    "ProgressionEngine",
    "SkillState",
    "UnlockCheck",
    "UnlockResult",
    "UndoResult",
    # Player
    "PlayerSystem",
    "PlayerStats",
]
