import pytest
from pydantic import ValidationError

from skilltree.core.events import PlayerEvent
from skilltree.effects.model import (
    CompositeEffect,
    ConditionalEffect,
    Stat,
    TemporaryEffect,
    armor,
    attack_speed,
    damage_boost,
    health_boost,
    health_regeneration,
    instant_heal,
    speed_boost,
    xp_boost,
)
from skilltree.catalog.builder import SkillCatalogBuilder
from skilltree.effects.conditions import critical_health
from skilltree.player.stats import PlayerModifiers, PlayerStats
from skilltree.player.system import PlayerSystem
from skilltree.progression.engine import ProgressionEngine

def record_events(bus, event_type):
    received = []
    bus.subscribe(event_type, lambda e: received.append(e), weak=False)
    return received

def test_defaults():
    player = PlayerSystem()
    assert player.health == 100
    assert player.max_health == 100
    assert player.xp == 0
    assert player.speed == 5
    assert player.attack_damage == 25
    assert player.attack_range == 3
    assert player.attack_rate == 1
    assert player.is_alive
    assert not player.is_critical_health

def test_stats_validation():
    with pytest.raises(ValidationError):
        PlayerStats(max_health=0)
    stats = PlayerStats()
    with pytest.raises(ValidationError):
        stats.xp = -1

def test_add_xp_uses_multiplier(event_bus):
    player = PlayerSystem(event_bus=event_bus)
    events = record_events(event_bus, PlayerEvent.XP_CHANGED)

    assert player.add_xp(10) == 10
    player.apply_effect(xp_boost(1.5))
    assert player.add_xp(10) == 15
    assert player.xp == 25
    assert player.add_xp(0) == 0

    assert events[-1].data == {"current_xp": 25, "previous_xp": 10}

def test_deduct_xp_floors_at_zero():
    player = PlayerSystem()
    player.add_xp(10)
    player.deduct_xp(25)
    assert player.xp == 0

def test_take_damage_with_reduction_and_armor():
    player = PlayerSystem()
    player.apply_modifier(Stat.DAMAGE_REDUCTION, 0.5)
    assert player.take_damage(20) == 10
    assert player.health == 90

    player.apply_modifier(Stat.ARMOR, 4)
    assert player.take_damage(20) == 6
    assert player.health == 84

def test_damage_reduction_is_clamped():
    player = PlayerSystem()
    player.apply_modifier(Stat.DAMAGE_REDUCTION, 1.5)
    assert player.damage_reduction == 1.0
    assert player.take_damage(50) == 0

def test_death_and_heal():
    player = PlayerSystem()
    player.take_damage(500)
    assert player.health == 0
    assert not player.is_alive
    assert player.heal(10) == 0

def test_heal_caps_at_max(event_bus):
    player = PlayerSystem(event_bus=event_bus)
    events = record_events(event_bus, PlayerEvent.HEALTH_CHANGED)

    player.take_damage(30)
    assert player.heal(50) == 30
    assert player.health == 100
    assert len(events) == 2

def test_health_boost_raises_cap_and_current():
    player = PlayerSystem()
    player.apply_effect(health_boost(25))
    assert player.max_health == 125
    assert player.health == 125

def test_instant_heal_effect():
    player = PlayerSystem()
    player.take_damage(50)
    player.apply_effect(instant_heal(30))
    assert player.health == 80
    assert player.modifiers.max_health == 0

def test_multipliers_stack_multiplicatively():
    player = PlayerSystem()
    player.apply_effect(speed_boost(1.2))
    player.apply_effect(speed_boost(1.5))
    player.apply_effect(attack_speed(2.0))
    assert player.speed == pytest.approx(5 * 1.2 * 1.5)
    assert player.attack_rate == pytest.approx(2.0)

def test_additive_modifiers():
    player = PlayerSystem()
    player.apply_effect(CompositeEffect((damage_boost(10), damage_boost(5), armor(0.1))))
    assert player.attack_damage == 40
    assert player.damage_reduction == pytest.approx(0.1)

def test_apply_effect_publishes(event_bus):
    player = PlayerSystem(event_bus=event_bus)
    events = record_events(event_bus, PlayerEvent.EFFECT_APPLIED)
    effect = damage_boost(1)

    player.apply_effect(effect)

    assert events[0]["effect"] is effect
    assert player.active_effects == [effect]

def test_conditional_effect_reads_player_state():
    player = PlayerSystem()
    effect = ConditionalEffect(damage_boost(20), critical_health())

    player.apply_effect(effect)
    assert player.attack_damage == 25

    player.take_damage(80)
    player.apply_effect(effect)
    assert player.attack_damage == 45

def test_update_ticks_temporary_effects(event_bus):
    player = PlayerSystem(event_bus=event_bus)
    expired = record_events(event_bus, PlayerEvent.EFFECT_EXPIRED)
    temporary = TemporaryEffect(damage_boost(5), duration=1.0)

    player.apply_effect(CompositeEffect((health_boost(1), temporary)))
    assert temporary.is_active

    player.update(0.5)
    assert temporary.is_active
    assert expired == []

    player.update(0.5)
    assert not temporary.is_active
    assert [e["effect"] for e in expired] == [temporary]

    player.update(1.0)
    assert len(expired) == 1

def test_reapplied_effect_is_tracked_once(make_node):
    player = PlayerSystem()
    player.stats.xp = 100
    temporary = TemporaryEffect(health_boost(5), duration=10.0)
    catalog = SkillCatalogBuilder().add(make_node("t", cost=10, effect=temporary)).build()
    engine = ProgressionEngine(catalog, player)

    engine.unlock("t")
    engine.undo()
    engine.unlock("t")
    player.update(1.0)

    assert temporary.remaining_time == pytest.approx(9.0)
    assert player.active_effects == [temporary]

def test_expired_temporary_is_dropped():
    player = PlayerSystem()
    temporary = TemporaryEffect(damage_boost(5), duration=1.0)
    lasting = damage_boost(1)

    player.apply_effect(temporary)
    player.apply_effect(lasting)
    player.update(0.5)
    assert player.active_effects == [temporary, lasting]

    player.update(0.5)
    assert player.active_effects == [lasting]

def test_update_regenerates_health():
    player = PlayerSystem()
    player.apply_effect(health_regeneration(5))
    player.take_damage(20)
    player.update(2.0)
    assert player.health == 90

def test_modifiers_reject_heal_stat():
    with pytest.raises(ValueError):
        PlayerModifiers().apply(Stat.HEALTH, 10)

def test_statistics_snapshot():
    player = PlayerSystem()
    stats = player.get_statistics()
    assert stats["health"] == "100.0/100.0"
    assert stats["active_effects"] == 0
    assert stats["is_alive"] is True
