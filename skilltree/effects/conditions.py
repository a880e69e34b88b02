"""
Reusable predicates for ConditionalEffect.

Each factory returns a callable taking the player. Predicates only read
player state (health_percent, xp); they never mutate it.
"""

from __future__ import annotations

from typing import Any, Callable

Condition = Callable[[Any], bool]

CRITICAL_HEALTH_FRACTION = 0.25


def health_below(fraction: float) -> Condition:
    """True while current health is strictly below fraction of max."""
    def check(player: Any) -> bool:
        return player.health_percent < fraction
    return check


def critical_health() -> Condition:
    """True at or below 25% health."""
    def check(player: Any) -> bool:
        return player.health_percent <= CRITICAL_HEALTH_FRACTION
    return check


def xp_at_least(amount: int) -> Condition:
    def check(player: Any) -> bool:
        return player.xp >= amount
    return check


def always() -> Condition:
    return lambda player: True
