"""
Default skill tree - the survivor game's four-tier catalog.

Tiers build on each other:
- Tier 1: foundation skills, no prerequisites
- Tier 2: intermediate, one tier 1 prerequisite each
- Tier 3: advanced, combine tier 2 branches
- Tier 4: master skills, require several tier 3 skills

Call default_catalog() once at startup and pass the result to the engine.
"""

from __future__ import annotations

from typing import Optional

from skilltree.catalog.builder import Catalog, SkillCatalogBuilder
from skilltree.catalog.node import SkillCategory, SkillNode, SkillTier
from skilltree.effects.model import (
    CompositeEffect,
    EffectType,
    armor,
    attack_speed,
    critical_hit,
    damage_boost,
    health_boost,
    health_regeneration,
    immunity,
    instant_heal,
    range_boost,
    speed_boost,
    xp_boost,
)

# Balancing
BASE_SKILL_COST = 10
TIER_COST_MULTIPLIER = 2.5
HEALTH_BASE_VALUE = 25.0
DAMAGE_BASE_VALUE = 10.0
SPEED_BASE_VALUE = 1.2

TIER2_COST = int(BASE_SKILL_COST * TIER_COST_MULTIPLIER)
TIER3_COST = int(BASE_SKILL_COST * TIER_COST_MULTIPLIER * TIER_COST_MULTIPLIER)
TIER4_COST = int(BASE_SKILL_COST * TIER_COST_MULTIPLIER * TIER_COST_MULTIPLIER * 2)


def tier1_skills() -> list[SkillNode]:
    return [
        SkillNode(
            id="vitality_1",
            name="Vitality",
            description="Increase your maximum health to survive longer",
            tier=SkillTier.BASIC,
            category=SkillCategory.DEFENSE,
            cost=BASE_SKILL_COST,
            effect=health_boost(HEALTH_BASE_VALUE),
        ),
        SkillNode(
            id="swift_feet_1",
            name="Swift Feet",
            description="Move faster across the battlefield",
            tier=SkillTier.BASIC,
            category=SkillCategory.MOVEMENT,
            cost=BASE_SKILL_COST + 2,
            effect=speed_boost(SPEED_BASE_VALUE),
        ),
        SkillNode(
            id="sharp_strike_1",
            name="Sharp Strike",
            description="Deal more damage to enemies",
            tier=SkillTier.BASIC,
            category=SkillCategory.COMBAT,
            cost=BASE_SKILL_COST,
            effect=damage_boost(DAMAGE_BASE_VALUE),
        ),
        SkillNode(
            id="quick_learner_1",
            name="Quick Learner",
            description="Gain experience faster from defeated enemies",
            tier=SkillTier.BASIC,
            category=SkillCategory.UTILITY,
            cost=BASE_SKILL_COST + 5,
            effect=xp_boost(1.25),
        ),
        SkillNode(
            id="reach_1",
            name="Extended Reach",
            description="Attack enemies from a greater distance",
            tier=SkillTier.BASIC,
            category=SkillCategory.COMBAT,
            cost=BASE_SKILL_COST,
            effect=range_boost(1.0),
        ),
    ]


def tier2_skills() -> list[SkillNode]:
    return [
        SkillNode(
            id="iron_constitution",
            name="Iron Constitution",
            description="Further increase your health reserves",
            tier=SkillTier.INTERMEDIATE,
            category=SkillCategory.DEFENSE,
            cost=TIER2_COST,
            effect=health_boost(HEALTH_BASE_VALUE * 2),
            prerequisites=["vitality_1"],
        ),
        SkillNode(
            id="tough_skin",
            name="Tough Skin",
            description="Reduce incoming damage",
            tier=SkillTier.INTERMEDIATE,
            category=SkillCategory.DEFENSE,
            cost=TIER2_COST + 5,
            effect=armor(0.15),
            prerequisites=["vitality_1"],
        ),
        SkillNode(
            id="combat_reflexes",
            name="Combat Reflexes",
            description="Attack more frequently",
            tier=SkillTier.INTERMEDIATE,
            category=SkillCategory.COMBAT,
            cost=TIER2_COST,
            effect=attack_speed(1.4),
            prerequisites=["sharp_strike_1"],
        ),
        SkillNode(
            id="agility_master",
            name="Agility Master",
            description="Significant speed improvement",
            tier=SkillTier.INTERMEDIATE,
            category=SkillCategory.MOVEMENT,
            cost=TIER2_COST,
            effect=speed_boost(1.4),
            prerequisites=["swift_feet_1"],
        ),
        SkillNode(
            id="scholar_focus",
            name="Scholar's Focus",
            description="Enhanced learning and quick recovery",
            tier=SkillTier.INTERMEDIATE,
            category=SkillCategory.UTILITY,
            cost=TIER2_COST,
            effect=CompositeEffect(
                (xp_boost(1.5), instant_heal(30)),
                label="Scholar Mode: +50% XP, Restore 30 Health",
                primary_type=EffectType.UTILITY,
            ),
            prerequisites=["quick_learner_1"],
        ),
    ]


def tier3_skills() -> list[SkillNode]:
    return [
        SkillNode(
            id="berserker_fury",
            name="Berserker's Fury",
            description="Unleash devastating combat prowess",
            tier=SkillTier.ADVANCED,
            category=SkillCategory.COMBAT,
            cost=TIER3_COST,
            effect=CompositeEffect(
                (damage_boost(30), attack_speed(1.6), speed_boost(1.2)),
                label="Berserker Mode: +30 Damage, +60% Attack Speed, +20% Speed",
                primary_type=EffectType.DAMAGE,
            ),
            prerequisites=["combat_reflexes", "agility_master"],
        ),
        SkillNode(
            id="fortress_defense",
            name="Fortress",
            description="Ultimate defensive stance",
            tier=SkillTier.ADVANCED,
            category=SkillCategory.DEFENSE,
            cost=TIER3_COST + 10,
            effect=CompositeEffect(
                (health_boost(100), armor(0.3)),
                label="Fortress Mode: +100 Health, -30% Damage Taken",
                primary_type=EffectType.DEFENSE,
            ),
            prerequisites=["iron_constitution", "tough_skin"],
        ),
        SkillNode(
            id="master_scholar",
            name="Master Scholar",
            description="Peak learning efficiency and self-restoration",
            tier=SkillTier.ADVANCED,
            category=SkillCategory.UTILITY,
            cost=TIER3_COST,
            effect=CompositeEffect(
                (xp_boost(2.0), instant_heal(75), health_regeneration(5)),
                label="Master Scholar: +100% XP, +75 Health, +5 HP/sec Regen",
                primary_type=EffectType.UTILITY,
            ),
            prerequisites=["scholar_focus"],
        ),
        SkillNode(
            id="weapon_mastery",
            name="Weapon Mastery",
            description="Master all aspects of combat",
            tier=SkillTier.ADVANCED,
            category=SkillCategory.COMBAT,
            cost=TIER3_COST,
            effect=CompositeEffect(
                (damage_boost(20), range_boost(2), critical_hit(0.15)),
                label="Weapon Master: +20 Damage, +2 Range, +15% Crit Chance",
                primary_type=EffectType.DAMAGE,
            ),
            prerequisites=["reach_1", "sharp_strike_1"],
        ),
    ]


def tier4_skills() -> list[SkillNode]:
    return [
        SkillNode(
            id="champion_ascension",
            name="Champion's Ascension",
            description="Transcend mortal limitations",
            tier=SkillTier.MASTER,
            category=SkillCategory.SPECIAL,
            cost=TIER4_COST,
            effect=CompositeEffect(
                (
                    health_boost(200),
                    damage_boost(50),
                    speed_boost(1.5),
                    armor(0.25),
                    attack_speed(1.8),
                    xp_boost(3.0),
                ),
                label="Champion: Massive boost to all capabilities",
                primary_type=EffectType.UTILITY,
            ),
            prerequisites=["berserker_fury", "fortress_defense", "master_scholar"],
        ),
        SkillNode(
            id="death_defiance",
            name="Death Defiance",
            description="Refuse to yield to death itself",
            tier=SkillTier.MASTER,
            category=SkillCategory.DEFENSE,
            cost=TIER4_COST - 20,
            effect=CompositeEffect(
                (immunity(3), health_regeneration(15), health_boost(150)),
                label="Death Defiance: Immunity on low health + massive regeneration",
                primary_type=EffectType.DEFENSE,
            ),
            prerequisites=["fortress_defense", "master_scholar"],
        ),
        SkillNode(
            id="perfect_warrior",
            name="Perfect Warrior",
            description="Achieve combat perfection",
            tier=SkillTier.MASTER,
            category=SkillCategory.COMBAT,
            cost=TIER4_COST - 10,
            effect=CompositeEffect(
                (damage_boost(75), attack_speed(2.5), range_boost(3), critical_hit(0.5)),
                label="Perfect Warrior: Ultimate combat mastery",
                primary_type=EffectType.DAMAGE,
            ),
            prerequisites=["berserker_fury", "weapon_mastery"],
        ),
    ]


def default_skills() -> list[SkillNode]:
    """Fresh node definitions for every tier, lowest tier first."""
    return tier1_skills() + tier2_skills() + tier3_skills() + tier4_skills()


def default_catalog() -> Catalog:
    """
    Build and validate the default tree.

    Each call returns a new catalog with every skill locked.

    Raises:
        CatalogIntegrityError: if the definitions above are inconsistent
    """
    return SkillCatalogBuilder().add_all(default_skills()).build()


def create_test_skill(name: Optional[str] = None) -> SkillNode:
    """Cheap skill for debugging: 1 XP, small health boost."""
    return SkillNode(
        id="test_skill",
        name=name or "Test Skill",
        description="A skill for testing purposes - grants small health boost",
        tier=SkillTier.BASIC,
        category=SkillCategory.UTILITY,
        cost=1,
        effect=health_boost(10),
    )


def skills_by_playstyle(catalog: Catalog) -> dict[str, list[SkillNode]]:
    """Group skills into the playstyles shown on the skill screen."""
    nodes = catalog.nodes()
    return {
        "Tank": [n for n in nodes if n.category == SkillCategory.DEFENSE],
        "DPS": [n for n in nodes if n.category == SkillCategory.COMBAT],
        "Speed": [n for n in nodes if n.category == SkillCategory.MOVEMENT],
        "Support": [n for n in nodes if n.category == SkillCategory.UTILITY],
        "Hybrid": [n for n in nodes if isinstance(n.effect, CompositeEffect)],
    }
