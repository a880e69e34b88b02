"""
Skill effects - what a skill does once unlocked.

Effects describe a gameplay modifier without knowing how player state
is stored. Applying an effect goes through the player's capability
surface:

    player.xp                          # current XP (int)
    player.apply_modifier(stat, value) # add/multiply a stat
    player.heal(amount)                # restore health

The variant set is closed (see EFFECT_VARIANTS):
- StatEffect: one scalar modifier on one stat
- CompositeEffect: ordered list of sub-effects
- ConditionalEffect: applies its inner effect only if a predicate holds
- TemporaryEffect: inner effect plus a caller-ticked countdown
- ScalingEffect: grows with player XP
- SynergyEffect: grows with the number of companion skills unlocked

Every variant implements describe(), magnitude() and apply(); a new
variant that forgets one cannot be instantiated.
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable, Iterator, Optional

logger = logging.getLogger(__name__)


class EffectType(Enum):
    """Broad effect families, used for grouping and display."""
    HEALTH = auto()
    SPEED = auto()
    DAMAGE = auto()
    RANGE = auto()
    ATTACK_SPEED = auto()
    DEFENSE = auto()
    UTILITY = auto()


class Stat(Enum):
    """Player stats an effect can modify."""
    MAX_HEALTH = auto()
    HEALTH = auto()               # instant heal
    HEALTH_REGEN = auto()         # HP per second
    SPEED_MULTIPLIER = auto()
    SPEED = auto()                # flat
    DAMAGE = auto()
    CRIT_CHANCE = auto()
    ATTACK_SPEED_MULTIPLIER = auto()
    RANGE = auto()
    DAMAGE_REDUCTION = auto()     # fraction (0.15 == 15%)
    ARMOR = auto()                # flat reduction
    IMMUNITY = auto()             # seconds
    XP_MULTIPLIER = auto()
    XP_BONUS = auto()             # flat XP per kill
    RESOURCE_MULTIPLIER = auto()

    @property
    def effect_type(self) -> EffectType:
        return _STAT_EFFECT_TYPES[self]

    @property
    def is_multiplier(self) -> bool:
        return self in _MULTIPLIER_STATS

    def describe(self, value: float) -> str:
        """Default display text for a modifier of this stat."""
        return _STAT_DESCRIPTIONS[self](value)


_STAT_EFFECT_TYPES: dict[Stat, EffectType] = {
    Stat.MAX_HEALTH: EffectType.HEALTH,
    Stat.HEALTH: EffectType.HEALTH,
    Stat.HEALTH_REGEN: EffectType.HEALTH,
    Stat.SPEED_MULTIPLIER: EffectType.SPEED,
    Stat.SPEED: EffectType.SPEED,
    Stat.DAMAGE: EffectType.DAMAGE,
    Stat.CRIT_CHANCE: EffectType.DAMAGE,
    Stat.ATTACK_SPEED_MULTIPLIER: EffectType.ATTACK_SPEED,
    Stat.RANGE: EffectType.RANGE,
    Stat.DAMAGE_REDUCTION: EffectType.DEFENSE,
    Stat.ARMOR: EffectType.DEFENSE,
    Stat.IMMUNITY: EffectType.DEFENSE,
    Stat.XP_MULTIPLIER: EffectType.UTILITY,
    Stat.XP_BONUS: EffectType.UTILITY,
    Stat.RESOURCE_MULTIPLIER: EffectType.UTILITY,
}

_MULTIPLIER_STATS = frozenset({
    Stat.SPEED_MULTIPLIER,
    Stat.ATTACK_SPEED_MULTIPLIER,
    Stat.XP_MULTIPLIER,
    Stat.RESOURCE_MULTIPLIER,
})


def _pct_over_one(value: float) -> str:
    return f"{(value - 1) * 100:.0f}%"


_STAT_DESCRIPTIONS: dict[Stat, Callable[[float], str]] = {
    Stat.MAX_HEALTH: lambda v: f"+{v:g} Max Health",
    Stat.HEALTH: lambda v: f"Restore {v:g} Health",
    Stat.HEALTH_REGEN: lambda v: f"+{v:g} HP/sec",
    Stat.SPEED_MULTIPLIER: lambda v: f"+{_pct_over_one(v)} Movement Speed",
    Stat.SPEED: lambda v: f"+{v:g} Movement Speed",
    Stat.DAMAGE: lambda v: f"+{v:g} Attack Damage",
    Stat.CRIT_CHANCE: lambda v: f"+{v * 100:.0f}% Critical Hit Chance",
    Stat.ATTACK_SPEED_MULTIPLIER: lambda v: f"+{_pct_over_one(v)} Attack Speed",
    Stat.RANGE: lambda v: f"+{v:g} Attack Range",
    Stat.DAMAGE_REDUCTION: lambda v: f"-{v * 100:.0f}% Damage Taken",
    Stat.ARMOR: lambda v: f"-{v:g} Damage Taken",
    Stat.IMMUNITY: lambda v: f"{v:g}s Damage Immunity",
    Stat.XP_MULTIPLIER: lambda v: f"+{_pct_over_one(v)} XP Gain",
    Stat.XP_BONUS: lambda v: f"+{v:g} XP per kill",
    Stat.RESOURCE_MULTIPLIER: lambda v: f"+{_pct_over_one(v)} Resource Collection",
}


@dataclass(frozen=True)
class EffectContext:
    """
    Snapshot used to compute effective magnitudes.

    Attributes:
        xp: Player XP at the time of evaluation
        unlocked: Skill ids unlocked at the time of evaluation
    """
    xp: int = 0
    unlocked: frozenset[str] = frozenset()


class SkillEffect(ABC):
    """
    Base class for all skill effects.

    Subclasses must implement describe, magnitude and apply.
    """

    @property
    @abstractmethod
    def effect_type(self) -> EffectType:
        """Effect family, for grouping."""

    @abstractmethod
    def describe(self) -> str:
        """Human-readable description."""

    @abstractmethod
    def magnitude(self, context: Optional[EffectContext] = None) -> float:
        """
        Numeric strength of the effect.

        Without a context, variants that depend on player state report
        their base value.
        """

    @abstractmethod
    def apply(self, player: Any, context: Optional[EffectContext] = None) -> None:
        """Apply the effect through the player's capability surface."""

    def __str__(self) -> str:
        return self.describe()


@dataclass(frozen=True)
class StatEffect(SkillEffect):
    """
    Scalar modifier on a single stat.

    Attributes:
        stat: Stat to modify
        value: Amount (a multiplier for *_MULTIPLIER stats)
        label: Optional display text overriding the default
    """
    stat: Stat
    value: float
    label: str = ""

    @property
    def effect_type(self) -> EffectType:
        return self.stat.effect_type

    def describe(self) -> str:
        return self.label or self.stat.describe(self.value)

    def magnitude(self, context: Optional[EffectContext] = None) -> float:
        return self.value

    def apply(self, player: Any, context: Optional[EffectContext] = None) -> None:
        if self.stat is Stat.HEALTH:
            player.heal(self.value)
        else:
            player.apply_modifier(self.stat, self.value)
        logger.debug(f"Applied {self.describe()}")


@dataclass(frozen=True)
class CompositeEffect(SkillEffect):
    """
    Several effects applied together, in order.

    There is no rollback: if a sub-effect fails, earlier sub-effects
    stay applied.
    """
    effects: tuple[SkillEffect, ...]
    label: str = ""
    primary_type: Optional[EffectType] = None

    def __post_init__(self):
        object.__setattr__(self, "effects", tuple(self.effects))

    @property
    def effect_type(self) -> EffectType:
        if self.primary_type is not None:
            return self.primary_type
        if self.effects:
            return self.effects[0].effect_type
        return EffectType.UTILITY

    def describe(self) -> str:
        if self.label:
            return self.label
        return ", ".join(e.describe() for e in self.effects)

    def magnitude(self, context: Optional[EffectContext] = None) -> float:
        return sum(e.magnitude(context) for e in self.effects)

    def apply(self, player: Any, context: Optional[EffectContext] = None) -> None:
        for effect in self.effects:
            effect.apply(player, context)
        logger.debug(f"Applied composite effect: {self.describe()}")


@dataclass(frozen=True)
class ConditionalEffect(SkillEffect):
    """
    Applies the wrapped effect only if the condition holds for the player.

    The condition is evaluated at apply time. Magnitude passes through
    regardless of the condition.
    """
    effect: SkillEffect
    condition: Callable[[Any], bool]
    label: str = ""

    @property
    def effect_type(self) -> EffectType:
        return self.effect.effect_type

    def describe(self) -> str:
        return self.label or f"{self.effect.describe()} (conditional)"

    def magnitude(self, context: Optional[EffectContext] = None) -> float:
        return self.effect.magnitude(context)

    def apply(self, player: Any, context: Optional[EffectContext] = None) -> None:
        if self.condition(player):
            self.effect.apply(player, context)
            logger.debug(f"Applied conditional effect: {self.describe()}")
        else:
            logger.debug(f"Conditional effect not triggered: {self.describe()}")


@dataclass(eq=False)
class TemporaryEffect(SkillEffect):
    """
    Wrapped effect that stays active for a limited time.

    Runtime state is either inactive or active with remaining time.
    Nothing advances the timer automatically: the owner calls tick(dt).
    """
    effect: SkillEffect
    duration: float
    label: str = ""
    _remaining: float = field(default=0.0, init=False, repr=False)
    _active: bool = field(default=False, init=False, repr=False)

    def __post_init__(self):
        if self.duration <= 0:
            raise ValueError(f"duration must be positive, got {self.duration}")

    @property
    def effect_type(self) -> EffectType:
        return self.effect.effect_type

    @property
    def is_active(self) -> bool:
        return self._active and self._remaining > 0

    @property
    def remaining_time(self) -> float:
        """Seconds left while active, 0.0 when inactive."""
        return self._remaining if self._active else 0.0

    def describe(self) -> str:
        return self.label or f"{self.effect.describe()} (for {self.duration:g}s)"

    def magnitude(self, context: Optional[EffectContext] = None) -> float:
        return self.effect.magnitude(context)

    def apply(self, player: Any, context: Optional[EffectContext] = None) -> None:
        self.effect.apply(player, context)
        self._active = True
        self._remaining = self.duration
        logger.debug(f"Applied temporary effect: {self.describe()}")

    def tick(self, dt: float) -> bool:
        """
        Advance the timer.

        Returns:
            True if the effect expired during this tick
        """
        if not self._active:
            return False

        self._remaining -= dt
        if self._remaining <= 0:
            self._remaining = 0.0
            self._active = False
            logger.debug(f"Temporary effect expired: {self.describe()}")
            return True
        return False


@dataclass(frozen=True)
class ScalingEffect(SkillEffect):
    """
    Grows with player XP: base + increment * floor(xp / step).
    """
    stat: Stat
    base: float
    increment: float
    step: int
    label: str = ""

    def __post_init__(self):
        if self.step <= 0:
            raise ValueError(f"step must be positive, got {self.step}")

    @property
    def effect_type(self) -> EffectType:
        return self.stat.effect_type

    def scaled_value(self, xp: int) -> float:
        return self.base + self.increment * math.floor(xp / self.step)

    def describe(self) -> str:
        if self.label:
            return self.label
        return f"{self.stat.describe(self.base)}, +{self.increment:g} per {self.step} XP"

    def magnitude(self, context: Optional[EffectContext] = None) -> float:
        if context is None:
            return self.base
        return self.scaled_value(context.xp)

    def apply(self, player: Any, context: Optional[EffectContext] = None) -> None:
        xp = context.xp if context is not None else player.xp
        value = self.scaled_value(xp)
        player.apply_modifier(self.stat, value)
        logger.debug(f"Applied scaling effect: {self.describe()} (scaled to {value:.1f})")


@dataclass(frozen=True)
class SynergyEffect(SkillEffect):
    """
    Stronger for every companion skill already unlocked:
    base * multiplier ** companions_unlocked.
    """
    stat: Stat
    base: float
    multiplier: float
    companions: tuple[str, ...]
    label: str = ""

    def __post_init__(self):
        object.__setattr__(self, "companions", tuple(self.companions))

    @property
    def effect_type(self) -> EffectType:
        return self.stat.effect_type

    def companions_unlocked(self, unlocked: frozenset[str] | set[str]) -> int:
        return sum(1 for skill_id in self.companions if skill_id in unlocked)

    def synergy_value(self, companions_unlocked: int) -> float:
        return self.base * self.multiplier ** companions_unlocked

    def describe(self) -> str:
        if self.label:
            return self.label
        return (
            f"{self.stat.describe(self.base)}, x{self.multiplier:g} per synergy "
            f"({', '.join(self.companions)})"
        )

    def magnitude(self, context: Optional[EffectContext] = None) -> float:
        if context is None:
            return self.base
        return self.synergy_value(self.companions_unlocked(context.unlocked))

    def apply(self, player: Any, context: Optional[EffectContext] = None) -> None:
        value = self.magnitude(context)
        player.apply_modifier(self.stat, value)
        logger.debug(f"Applied synergy effect: {self.describe()} ({value:.2f})")


EFFECT_VARIANTS: tuple[type[SkillEffect], ...] = (
    StatEffect,
    CompositeEffect,
    ConditionalEffect,
    TemporaryEffect,
    ScalingEffect,
    SynergyEffect,
)


def iter_effects(effect: SkillEffect) -> Iterator[SkillEffect]:
    """Yield an effect and every effect nested inside it, depth-first."""
    yield effect
    if isinstance(effect, CompositeEffect):
        for sub in effect.effects:
            yield from iter_effects(sub)
    elif isinstance(effect, (ConditionalEffect, TemporaryEffect)):
        yield from iter_effects(effect.effect)


# Named constructors for common modifiers

def health_boost(amount: float) -> StatEffect:
    return StatEffect(Stat.MAX_HEALTH, amount)


def instant_heal(amount: float) -> StatEffect:
    return StatEffect(Stat.HEALTH, amount)


def health_regeneration(per_second: float) -> StatEffect:
    return StatEffect(Stat.HEALTH_REGEN, per_second)


def speed_boost(multiplier: float) -> StatEffect:
    return StatEffect(Stat.SPEED_MULTIPLIER, multiplier)


def flat_speed(amount: float) -> StatEffect:
    return StatEffect(Stat.SPEED, amount)


def damage_boost(amount: float) -> StatEffect:
    return StatEffect(Stat.DAMAGE, amount)


def critical_hit(chance: float) -> StatEffect:
    return StatEffect(Stat.CRIT_CHANCE, chance)


def attack_speed(multiplier: float) -> StatEffect:
    return StatEffect(Stat.ATTACK_SPEED_MULTIPLIER, multiplier)


def range_boost(amount: float) -> StatEffect:
    return StatEffect(Stat.RANGE, amount)


def armor(reduction: float) -> StatEffect:
    return StatEffect(Stat.DAMAGE_REDUCTION, reduction)


def flat_armor(amount: float) -> StatEffect:
    return StatEffect(Stat.ARMOR, amount)


def immunity(seconds: float) -> StatEffect:
    return StatEffect(Stat.IMMUNITY, seconds)


def xp_boost(multiplier: float) -> StatEffect:
    return StatEffect(Stat.XP_MULTIPLIER, multiplier)


def flat_xp(amount: float) -> StatEffect:
    return StatEffect(Stat.XP_BONUS, amount)


def resource_boost(multiplier: float) -> StatEffect:
    return StatEffect(Stat.RESOURCE_MULTIPLIER, multiplier)
