import math

import pytest
from unittest.mock import MagicMock, call

from skilltree.effects.model import (
    EFFECT_VARIANTS,
    CompositeEffect,
    ConditionalEffect,
    EffectContext,
    EffectType,
    ScalingEffect,
    SkillEffect,
    Stat,
    StatEffect,
    SynergyEffect,
    TemporaryEffect,
    armor,
    critical_hit,
    damage_boost,
    health_boost,
    instant_heal,
    iter_effects,
    speed_boost,
    xp_boost,
)

def make_player(xp=0):
    player = MagicMock()
    player.xp = xp
    return player

def test_stat_effect_describe_and_magnitude():
    assert health_boost(25).describe() == "+25 Max Health"
    assert speed_boost(1.2).describe() == "+20% Movement Speed"
    assert armor(0.15).describe() == "-15% Damage Taken"
    assert instant_heal(30).describe() == "Restore 30 Health"
    assert critical_hit(0.15).describe() == "+15% Critical Hit Chance"
    assert damage_boost(10).magnitude() == 10
    assert str(damage_boost(10)) == "+10 Attack Damage"

def test_stat_effect_label_overrides_description():
    effect = StatEffect(Stat.DAMAGE, 5, label="Sharper")
    assert effect.describe() == "Sharper"

def test_stat_effect_types():
    assert health_boost(1).effect_type == EffectType.HEALTH
    assert speed_boost(1.1).effect_type == EffectType.SPEED
    assert damage_boost(1).effect_type == EffectType.DAMAGE
    assert armor(0.1).effect_type == EffectType.DEFENSE
    assert xp_boost(1.5).effect_type == EffectType.UTILITY

def test_stat_effect_apply_goes_through_player():
    player = make_player()
    damage_boost(10).apply(player)
    player.apply_modifier.assert_called_once_with(Stat.DAMAGE, 10)

def test_instant_heal_calls_heal():
    player = make_player()
    instant_heal(30).apply(player)
    player.heal.assert_called_once_with(30)
    player.apply_modifier.assert_not_called()

def test_every_stat_has_description_and_type():
    for stat in Stat:
        assert isinstance(stat.describe(1.5), str)
        assert isinstance(stat.effect_type, EffectType)

def test_composite_magnitude_is_sum():
    effect = CompositeEffect((damage_boost(30), damage_boost(20), health_boost(5)))
    assert effect.magnitude() == 55

def test_composite_applies_in_order():
    player = make_player()
    effect = CompositeEffect([damage_boost(1), health_boost(2), instant_heal(3)])

    effect.apply(player)

    assert player.mock_calls == [
        call.apply_modifier(Stat.DAMAGE, 1),
        call.apply_modifier(Stat.MAX_HEALTH, 2),
        call.heal(3),
    ]
    assert isinstance(effect.effects, tuple)

def test_composite_has_no_rollback():
    player = make_player()
    player.heal.side_effect = RuntimeError("player refused")
    effect = CompositeEffect((damage_boost(1), instant_heal(3), health_boost(2)))

    with pytest.raises(RuntimeError):
        effect.apply(player)

    player.apply_modifier.assert_called_once_with(Stat.DAMAGE, 1)

def test_composite_description_and_type():
    labelled = CompositeEffect((damage_boost(1),), label="Mode", primary_type=EffectType.UTILITY)
    assert labelled.describe() == "Mode"
    assert labelled.effect_type == EffectType.UTILITY

    plain = CompositeEffect((damage_boost(1), health_boost(2)))
    assert plain.describe() == "+1 Attack Damage, +2 Max Health"
    assert plain.effect_type == EffectType.DAMAGE
    assert CompositeEffect(()).effect_type == EffectType.UTILITY

def test_conditional_applies_only_when_true():
    player = make_player()
    effect = ConditionalEffect(damage_boost(5), lambda p: p.xp > 10)

    effect.apply(player)
    player.apply_modifier.assert_not_called()

    player.xp = 20
    effect.apply(player)
    player.apply_modifier.assert_called_once_with(Stat.DAMAGE, 5)

def test_conditional_magnitude_ignores_condition():
    effect = ConditionalEffect(damage_boost(5), lambda p: False)
    assert effect.magnitude() == 5
    assert effect.describe().endswith("(conditional)")

def test_temporary_lifecycle():
    player = make_player()
    effect = TemporaryEffect(speed_boost(1.5), duration=2.0)

    assert not effect.is_active
    assert effect.remaining_time == 0.0

    effect.apply(player)
    assert effect.is_active
    assert effect.remaining_time == 2.0
    player.apply_modifier.assert_called_once_with(Stat.SPEED_MULTIPLIER, 1.5)

    assert effect.tick(0.5) is False
    assert effect.remaining_time == pytest.approx(1.5)

    assert effect.tick(1.5) is True
    assert not effect.is_active
    assert effect.remaining_time == 0.0

    # Inactive effects ignore further ticks
    assert effect.tick(1.0) is False

def test_temporary_magnitude_passthrough():
    assert TemporaryEffect(damage_boost(7), duration=1).magnitude() == 7

def test_temporary_rejects_non_positive_duration():
    with pytest.raises(ValueError):
        TemporaryEffect(damage_boost(1), duration=0)

def test_scaling_effect():
    effect = ScalingEffect(Stat.DAMAGE, base=10, increment=2, step=100)

    assert effect.magnitude() == 10
    assert effect.magnitude(EffectContext(xp=99)) == 10
    assert effect.magnitude(EffectContext(xp=250)) == 14
    assert effect.scaled_value(1000) == 30

def test_scaling_apply_uses_player_xp():
    player = make_player(xp=300)
    ScalingEffect(Stat.DAMAGE, base=10, increment=2, step=100).apply(player)
    player.apply_modifier.assert_called_once_with(Stat.DAMAGE, 16)

def test_scaling_apply_prefers_context_xp():
    player = make_player(xp=300)
    effect = ScalingEffect(Stat.DAMAGE, base=10, increment=2, step=100)
    context = EffectContext(xp=500)

    effect.apply(player, context)

    player.apply_modifier.assert_called_once_with(Stat.DAMAGE, effect.magnitude(context))
    assert effect.magnitude(context) == 20

def test_scaling_rejects_bad_step():
    with pytest.raises(ValueError):
        ScalingEffect(Stat.DAMAGE, base=1, increment=1, step=0)

def test_synergy_effect():
    effect = SynergyEffect(Stat.DAMAGE, base=10, multiplier=1.5, companions=["a", "b", "c"])

    assert effect.magnitude() == 10
    assert effect.magnitude(EffectContext(unlocked=frozenset())) == 10
    assert effect.magnitude(EffectContext(unlocked=frozenset({"a", "c", "z"}))) == pytest.approx(22.5)
    assert effect.companions_unlocked({"a", "b", "c"}) == 3
    assert effect.synergy_value(3) == pytest.approx(10 * 1.5 ** 3)

def test_synergy_apply_uses_context():
    player = make_player()
    effect = SynergyEffect(Stat.DAMAGE, base=10, multiplier=2, companions=("a", "b"))

    effect.apply(player, EffectContext(unlocked=frozenset({"a", "b"})))

    player.apply_modifier.assert_called_once_with(Stat.DAMAGE, 40)

def test_variant_set_is_closed_and_complete():
    assert set(EFFECT_VARIANTS) == {
        StatEffect, CompositeEffect, ConditionalEffect,
        TemporaryEffect, ScalingEffect, SynergyEffect,
    }
    for variant in EFFECT_VARIANTS:
        assert issubclass(variant, SkillEffect)

def test_incomplete_variant_cannot_be_instantiated():
    class Half(SkillEffect):
        def describe(self):
            return "half"

    with pytest.raises(TypeError):
        Half()

def test_iter_effects_walks_nested_effects():
    inner = damage_boost(1)
    temp = TemporaryEffect(inner, duration=1)
    outer = CompositeEffect((health_boost(2), ConditionalEffect(temp, lambda p: True)))

    found = list(iter_effects(outer))

    assert found[0] is outer
    assert temp in found
    assert inner in found
    assert len(found) == 5

def test_effects_are_values():
    assert damage_boost(10) == damage_boost(10)
    assert hash(health_boost(5)) == hash(health_boost(5))
    with pytest.raises(Exception):
        damage_boost(1).value = 2
