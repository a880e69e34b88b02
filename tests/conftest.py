import os
import sys
import pytest
from unittest.mock import MagicMock

# Ensure skilltree can be imported without installing
sys.path.append(os.getcwd())

from skilltree.catalog.builder import SkillCatalogBuilder
from skilltree.catalog.node import SkillCategory, SkillNode, SkillTier
from skilltree.core.events import EventBus
from skilltree.effects.model import damage_boost, health_boost, speed_boost
from skilltree.player.system import PlayerSystem
from skilltree.progression.engine import ProgressionEngine


def _node(skill_id, cost=10, prerequisites=(), **kwargs):
    kwargs.setdefault("name", skill_id.upper())
    kwargs.setdefault("effect", health_boost(5))
    return SkillNode(id=skill_id, cost=cost, prerequisites=prerequisites, **kwargs)


@pytest.fixture
def make_node():
    """Factory for one-line node definitions: make_node("A", cost=10, prerequisites=["B"])."""
    return _node


@pytest.fixture
def event_bus():
    """Fresh EventBus for each test."""
    return EventBus()


@pytest.fixture
def player(event_bus):
    """Reference player with 100 XP."""
    p = PlayerSystem(event_bus=event_bus)
    p.stats.xp = 100
    return p


@pytest.fixture
def mock_player():
    """Collaborator spy exposing only the capability surface."""
    p = MagicMock()
    p.xp = 100
    return p


@pytest.fixture
def abc_catalog():
    """A(10) with two children B(25) and C(25)."""
    return SkillCatalogBuilder().add_all([
        _node("A", cost=10, category=SkillCategory.COMBAT, effect=damage_boost(10)),
        _node("B", cost=25, prerequisites=["A"], tier=SkillTier.INTERMEDIATE,
              category=SkillCategory.DEFENSE),
        _node("C", cost=25, prerequisites=["A"], tier=SkillTier.INTERMEDIATE,
              category=SkillCategory.MOVEMENT, effect=speed_boost(1.2)),
    ]).build()


@pytest.fixture
def engine(abc_catalog, player, event_bus):
    """Engine over the A/B/C catalog with the reference player."""
    return ProgressionEngine(abc_catalog, player, event_bus)
