import pytest
from pydantic import ValidationError

from skilltree.catalog.node import SkillCategory, SkillNode, SkillTier
from skilltree.effects.model import health_boost

def test_defaults():
    node = SkillNode(id="a", name="A", cost=5)
    assert node.tier == SkillTier.BASIC
    assert node.category == SkillCategory.UTILITY
    assert node.prerequisites == ()
    assert node.unlocked is False
    assert node.effect is None

def test_prerequisites_collapse_duplicates_in_order():
    node = SkillNode(id="a", name="A", cost=5, prerequisites=["x", "y", "x", "z", "y"])
    assert node.prerequisites == ("x", "y", "z")

def test_single_prerequisite_string():
    node = SkillNode(id="a", name="A", cost=5, prerequisites="x")
    assert node.prerequisites == ("x",)

def test_negative_cost_rejected():
    with pytest.raises(ValidationError):
        SkillNode(id="a", name="A", cost=-1)

def test_tier_out_of_range_rejected():
    with pytest.raises(ValidationError):
        SkillNode(id="a", name="A", cost=1, tier=6)

def test_tier_from_int():
    assert SkillNode(id="a", name="A", cost=1, tier=3).tier == SkillTier.ADVANCED

def test_empty_id_rejected():
    with pytest.raises(ValidationError):
        SkillNode(id="", name="A", cost=1)

def test_effect_must_be_skill_effect():
    with pytest.raises(ValidationError):
        SkillNode(id="a", name="A", cost=1, effect="more damage")

def test_only_unlocked_is_mutable():
    node = SkillNode(id="a", name="A", cost=1)
    node.unlocked = True
    assert node.unlocked

    with pytest.raises(ValidationError):
        node.cost = 2
    with pytest.raises(ValidationError):
        node.prerequisites = ("b",)

def test_prerequisite_helpers():
    node = SkillNode(id="c", name="C", cost=1, prerequisites=["a", "b"])
    assert node.missing_prerequisites({"a"}) == ["b"]
    assert not node.prerequisites_met({"a"})
    assert node.prerequisites_met({"a", "b", "x"})

def test_full_description():
    node = SkillNode(id="v", name="Vitality", description="Live longer", cost=10, effect=health_boost(25))
    assert node.full_description() == "Live longer\n\nEffect: +25 Max Health\nCost: 10 XP"
