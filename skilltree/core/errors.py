"""
Error taxonomy for the skill tree.

Catalog integrity problems are exceptions: they abort startup.
Eligibility and undo problems are plain enums returned in-band, so a
rejected unlock never throws and never changes engine state.
"""

from __future__ import annotations

from enum import Enum, auto
from typing import Optional


class SkillTreeError(Exception):
    """Base class for skill tree exceptions."""


class IntegrityErrorKind(Enum):
    """Ways a catalog can fail validation."""
    DANGLING_PREREQUISITE = auto()
    SELF_PREREQUISITE = auto()
    CYCLE = auto()
    DUPLICATE_ID = auto()


class CatalogIntegrityError(SkillTreeError):
    """
    Raised when skill definitions do not form a valid prerequisite graph.

    Attributes:
        kind: Which integrity rule was violated
        node_id: The skill the violation was detected at
        detail: Extra context (e.g. the missing prerequisite id)
    """

    def __init__(self, kind: IntegrityErrorKind, node_id: str, detail: Optional[str] = None):
        self.kind = kind
        self.node_id = node_id
        self.detail = detail
        super().__init__(self._format())

    def _format(self) -> str:
        if self.kind is IntegrityErrorKind.DANGLING_PREREQUISITE:
            return f"Skill '{self.node_id}' has invalid prerequisite '{self.detail}' - skill does not exist"
        if self.kind is IntegrityErrorKind.SELF_PREREQUISITE:
            return f"Skill '{self.node_id}' cannot be its own prerequisite"
        if self.kind is IntegrityErrorKind.CYCLE:
            return f"Circular dependency detected in skill tree involving skill '{self.node_id}'"
        return f"Duplicate skill id '{self.node_id}'"


class UnlockRejection(Enum):
    """Why an unlock was refused."""
    UNKNOWN_SKILL = auto()
    ALREADY_UNLOCKED = auto()
    INSUFFICIENT_XP = auto()
    PREREQUISITES_UNMET = auto()


class UndoRejection(Enum):
    """Why an undo did nothing."""
    NO_HISTORY = auto()
