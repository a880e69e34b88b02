"""
Component base class for validated data models.

Components are data containers validated by Pydantic. Skill nodes and
player stat blocks are both components, so malformed data (negative
costs, out-of-range tiers, wrong types) is rejected at construction
instead of surfacing later as a broken skill tree.

Usage:
    class PlayerStats(Component):
        max_health: float = 100.0
        speed: float = 5.0
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Component(BaseModel):
    """
    Base class for all components.

    Components use Pydantic for:
    - Automatic validation
    - Validation on assignment
    - Per-field immutability (Field(frozen=True))
    - Type hints
    - Default values
    """

    model_config = ConfigDict(
        # Effects are plain Python objects, not models
        arbitrary_types_allowed=True,
        # Validate on assignment
        validate_assignment=True,
        # Typos in definitions are errors
        extra='forbid',
    )

    def clone(self) -> Component:
        """Create a deep copy of this component."""
        return self.model_copy(deep=True)
