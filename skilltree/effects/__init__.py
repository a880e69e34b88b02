"""
Effects module - what unlocked skills do to the player.

Provides:
- The closed set of effect variants
- Stat and EffectType enums
- Named constructors for common modifiers
- Predicates for conditional effects
"""

from skilltree.effects.model import (
    EffectType,
    Stat,
    EffectContext,
    SkillEffect,
    StatEffect,
    CompositeEffect,
    ConditionalEffect,
    TemporaryEffect,
    ScalingEffect,
    SynergyEffect,
    EFFECT_VARIANTS,
    iter_effects,
    health_boost,
    instant_heal,
    health_regeneration,
    speed_boost,
    flat_speed,
    damage_boost,
    critical_hit,
    attack_speed,
    range_boost,
    armor,
    flat_armor,
    immunity,
    xp_boost,
    flat_xp,
    resource_boost,
)
from skilltree.effects.conditions import (
    Condition,
    health_below,
    critical_health,
    xp_at_least,
    always,
)

__all__ = [
    # Types
    "EffectType",
    "Stat",
    "EffectContext",
    # Variants
    "SkillEffect",
    "StatEffect",
    "CompositeEffect",
    "ConditionalEffect",
    "TemporaryEffect",
    "ScalingEffect",
    "SynergyEffect",
    "EFFECT_VARIANTS",
    "iter_effects",
    # Constructors
    "health_boost",
    "instant_heal",
    "health_regeneration",
    "speed_boost",
    "flat_speed",
    "damage_boost",
    "critical_hit",
    "attack_speed",
    "range_boost",
    "armor",
    "flat_armor",
    "immunity",
    "xp_boost",
    "flat_xp",
    "resource_boost",
    # Conditions
    "Condition",
    "health_below",
    "critical_health",
    "xp_at_least",
    "always",
]
