"""
Core module - shared building blocks.

Exports:
- Component: Validated data model base
- EventBus, Event, ProgressionEvent, PlayerEvent: Event system
- SkillTreeError, CatalogIntegrityError, IntegrityErrorKind: Errors
- UnlockRejection, UndoRejection: In-band rejection reasons

ProgressionConfig lives in skilltree.core.config; it depends on the
catalog enums and is imported from there directly.
"""

from skilltree.core.component import Component
from skilltree.core.events import EventBus, Event, ProgressionEvent, PlayerEvent
from skilltree.core.errors import (
    SkillTreeError,
    CatalogIntegrityError,
    IntegrityErrorKind,
    UnlockRejection,
    UndoRejection,
)

__all__ = [
    # Components
    "Component",
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
]
