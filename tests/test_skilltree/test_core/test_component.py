import pytest
from pydantic import ValidationError
from skilltree.core.component import Component
from skilltree.catalog.node import SkillNode
from skilltree.player.stats import PlayerModifiers, PlayerStats

class Counter(Component):
    value: int = 0

def test_domain_models_are_components():
    assert issubclass(SkillNode, Component)
    assert issubclass(PlayerStats, Component)
    assert issubclass(PlayerModifiers, Component)

def test_component_validation():
    with pytest.raises(ValidationError):
        Counter(value={"invalid": "type"})

def test_validate_on_assignment():
    c = Counter()
    with pytest.raises(ValidationError):
        c.value = "not a number"

def test_extra_fields_rejected():
    with pytest.raises(ValidationError):
        Counter(value=1, typo=2)

def test_clone_is_independent():
    c = Counter(value=3)
    copy = c.clone()
    copy.value = 4
    assert c.value == 3
