import pytest
from skilltree.catalog.node import SkillCategory
from skilltree.core.config import ProgressionConfig, DEFAULT_HISTORY_CAPACITY

def test_defaults():
    config = ProgressionConfig()
    assert config.history_capacity == DEFAULT_HISTORY_CAPACITY == 10
    assert config.default_priority_category == SkillCategory.COMBAT
    assert config.publish_events is True

def test_invalid_capacity():
    with pytest.raises(ValueError):
        ProgressionConfig(history_capacity=0)

def test_repr_mentions_values():
    text = repr(ProgressionConfig(history_capacity=3, publish_events=False))
    assert "history_capacity=3" in text
    assert "publish_events=False" in text
