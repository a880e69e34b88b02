"""
Player system - reference implementation of the player capability surface.

The progression engine only needs:

    player.xp                               # current XP (int)
    player.apply_effect(effect, context)    # apply a skill effect

Effects in turn call:

    player.apply_modifier(stat, value)      # fold in a stat modifier
    player.heal(amount)                     # restore health

and conditions read `health_percent` and `xp`. Any object with the same
surface can stand in for PlayerSystem.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from skilltree.core.events import EventBus, PlayerEvent
from skilltree.effects.conditions import CRITICAL_HEALTH_FRACTION
from skilltree.effects.model import EffectContext, SkillEffect, Stat, TemporaryEffect, iter_effects
from skilltree.player.stats import PlayerModifiers, PlayerStats

logger = logging.getLogger(__name__)


class PlayerSystem:
    """
    Player state: health, XP and the modifiers unlocked skills grant.

    Effective stats combine base stats with modifiers:
    - max_health = base + max health modifier
    - speed = (base + flat speed) * speed multiplier
    - attack_damage = base + damage modifier
    - attack_range = base + range modifier
    - attack_rate = base * attack speed multiplier

    Temporary effects received through apply_effect are ticked by
    update(dt); nothing else advances them.
    """

    def __init__(
        self,
        stats: Optional[PlayerStats] = None,
        event_bus: Optional[EventBus] = None,
    ):
        self.stats = stats if stats is not None else PlayerStats()
        self.modifiers = PlayerModifiers()
        self.event_bus = event_bus
        self._active_effects: list[SkillEffect] = []

        if self.stats.health > self.max_health:
            self.stats.health = self.max_health

    # Capability surface

    @property
    def xp(self) -> int:
        return self.stats.xp

    @property
    def health(self) -> float:
        return self.stats.health

    @property
    def max_health(self) -> float:
        return self.stats.max_health + self.modifiers.max_health

    @property
    def speed(self) -> float:
        return (self.stats.speed + self.modifiers.speed) * self.modifiers.speed_multiplier

    @property
    def attack_damage(self) -> float:
        return self.stats.attack_damage + self.modifiers.damage

    @property
    def attack_range(self) -> float:
        return self.stats.attack_range + self.modifiers.range

    @property
    def attack_rate(self) -> float:
        return self.stats.attack_rate * self.modifiers.attack_speed_multiplier

    @property
    def damage_reduction(self) -> float:
        """Fraction of incoming damage absorbed, clamped to [0, 1]."""
        return min(1.0, max(0.0, self.modifiers.damage_reduction))

    @property
    def health_percent(self) -> float:
        if self.max_health <= 0:
            return 0.0
        return self.stats.health / self.max_health

    @property
    def is_alive(self) -> bool:
        return self.stats.health > 0

    @property
    def is_critical_health(self) -> bool:
        return self.health_percent <= CRITICAL_HEALTH_FRACTION

    @property
    def active_effects(self) -> list[SkillEffect]:
        return list(self._active_effects)

    # XP

    def add_xp(self, amount: int) -> int:
        """
        Grant XP, scaled by the XP multiplier.

        Returns:
            XP actually gained
        """
        if amount <= 0:
            return 0

        gained = round(amount * self.modifiers.xp_multiplier)
        previous = self.stats.xp
        self.stats.xp = previous + gained
        self._publish(PlayerEvent.XP_CHANGED, current_xp=self.stats.xp, previous_xp=previous)
        return gained

    def deduct_xp(self, amount: int) -> None:
        """Remove XP, never going below zero."""
        if amount <= 0 or self.stats.xp <= 0:
            return

        previous = self.stats.xp
        self.stats.xp = max(0, previous - amount)
        self._publish(PlayerEvent.XP_CHANGED, current_xp=self.stats.xp, previous_xp=previous)

    # Health

    def take_damage(self, damage: float) -> float:
        """
        Apply incoming damage after reduction and armor.

        Returns:
            Damage actually taken
        """
        if not self.is_alive or damage <= 0:
            return 0.0

        actual = max(0.0, damage * (1.0 - self.damage_reduction) - self.modifiers.armor)
        self._set_health(self.stats.health - actual)
        return actual

    def heal(self, amount: float) -> float:
        """
        Restore health up to max. Dead players cannot be healed.

        Returns:
            Health actually restored
        """
        if not self.is_alive or amount <= 0:
            return 0.0

        previous = self.stats.health
        self._set_health(previous + amount)
        return self.stats.health - previous

    def _set_health(self, value: float) -> None:
        previous = self.stats.health
        self.stats.health = min(self.max_health, max(0.0, value))
        if self.stats.health != previous:
            self._publish(
                PlayerEvent.HEALTH_CHANGED,
                current_health=self.stats.health,
                max_health=self.max_health,
                previous_health=previous,
            )

    # Effects

    def apply_modifier(self, stat: Stat, value: float) -> None:
        """
        Fold a stat modifier into the player.

        Raising max health also raises current health by the same amount.
        """
        if stat is Stat.HEALTH:
            self.heal(value)
            return

        self.modifiers.apply(stat, value)
        if stat is Stat.MAX_HEALTH and value > 0:
            self._set_health(self.stats.health + value)

    def apply_effect(self, effect: SkillEffect, context: Optional[EffectContext] = None) -> None:
        """
        Apply a skill effect and track it as active.

        Effects are tracked by identity. Re-applying an instance that is
        already tracked (e.g. after undo and unlock of the same skill)
        applies it again but keeps a single entry, so its timers tick once.
        """
        effect.apply(self, context)
        if not any(e is effect for e in self._active_effects):
            self._active_effects.append(effect)
        logger.debug(f"Applied skill effect: {effect.describe()}. Total effects: {len(self._active_effects)}")
        self._publish(PlayerEvent.EFFECT_APPLIED, effect=effect)

    def update(self, dt: float) -> None:
        """
        Advance regeneration and temporary effect timers.

        Args:
            dt: Seconds since the last update
        """
        if self.modifiers.health_regen > 0 and self.is_alive:
            self.heal(self.modifiers.health_regen * dt)

        for effect in self._temporary_effects():
            if effect.tick(dt):
                self._publish(PlayerEvent.EFFECT_EXPIRED, effect=effect)

        # Expired top-level temporaries are no longer active
        self._active_effects = [
            e for e in self._active_effects
            if not isinstance(e, TemporaryEffect) or e.is_active
        ]

    def _temporary_effects(self) -> list[TemporaryEffect]:
        return [
            e for effect in self._active_effects
            for e in iter_effects(effect)
            if isinstance(e, TemporaryEffect)
        ]

    def get_statistics(self) -> dict[str, Any]:
        """Current effective stats, for debugging and display."""
        return {
            "health": f"{self.health:.1f}/{self.max_health:.1f}",
            "xp": self.xp,
            "speed": round(self.speed, 2),
            "attack_damage": round(self.attack_damage, 2),
            "attack_range": round(self.attack_range, 2),
            "attack_rate": round(self.attack_rate, 2),
            "damage_reduction": f"{self.damage_reduction * 100:.1f}%",
            "xp_multiplier": f"{self.modifiers.xp_multiplier:.2f}x",
            "active_effects": len(self._active_effects),
            "is_alive": self.is_alive,
            "is_critical_health": self.is_critical_health,
        }

    def _publish(self, event_type: PlayerEvent, **data: Any) -> None:
        if self.event_bus is not None:
            self.event_bus.publish(event_type, **data)
