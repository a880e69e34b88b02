"""
Progression engine - the authority on eligibility, unlocking and
derived skill-tree queries.

The engine owns the unlocked set and the command log. It holds the
catalog by reference and never changes its structure; only the nodes'
`unlocked` flags follow the unlocked set.

Player capability surface used here:

    player.xp                           # current XP (int)
    player.apply_effect(effect, ctx)    # apply a skill effect

Usage:
    engine = ProgressionEngine(default_catalog(), player, event_bus)
    if engine.can_unlock("vitality_1"):
        engine.unlock("vitality_1")
    engine.undo()
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import Any, Optional

from skilltree.catalog.builder import Catalog, collect_issues
from skilltree.catalog.node import SkillCategory, SkillNode, SkillTier
from skilltree.core.config import ProgressionConfig
from skilltree.core.errors import UndoRejection, UnlockRejection
from skilltree.core.events import EventBus, ProgressionEvent
from skilltree.effects.model import EffectContext
from skilltree.progression.history import CommandLog, CommandRecord
from skilltree.progression.stats import (
    CategoryProgress,
    SkillTreeProgress,
    SkillTreeStatistics,
    TierProgress,
    percentage,
)

logger = logging.getLogger(__name__)


class SkillState(Enum):
    """Per-node state, derived on every query."""
    UNLOCKED = auto()
    LOCKED = auto()
    CANNOT_AFFORD = auto()
    AVAILABLE = auto()


@dataclass(frozen=True)
class UnlockCheck:
    """Outcome of an eligibility check. Truthy iff the unlock is allowed."""
    skill_id: str
    rejection: Optional[UnlockRejection] = None

    @property
    def allowed(self) -> bool:
        return self.rejection is None

    def __bool__(self) -> bool:
        return self.allowed


@dataclass(frozen=True)
class UnlockResult:
    """
    Outcome of an unlock attempt.

    Attributes:
        skill_id: The requested skill
        rejection: Why nothing happened, or None on success
        record: The history record created on success
        evicted: History record dropped to make room, if any
        effect_error: Exception raised by the player while applying the
            effect; the unlock itself still stands
    """
    skill_id: str
    rejection: Optional[UnlockRejection] = None
    record: Optional[CommandRecord] = None
    evicted: Optional[CommandRecord] = None
    effect_error: Optional[Exception] = None

    @property
    def success(self) -> bool:
        return self.rejection is None

    def __bool__(self) -> bool:
        return self.success


@dataclass(frozen=True)
class UndoResult:
    """Outcome of an undo. `record` is the undone record (executed=False)."""
    record: Optional[CommandRecord] = None
    rejection: Optional[UndoRejection] = None

    @property
    def success(self) -> bool:
        return self.rejection is None

    def __bool__(self) -> bool:
        return self.success


class ProgressionEngine:
    """
    Stateful core of the skill tree.

    Eligibility gates run in order: unknown skill, already unlocked,
    insufficient XP, unmet prerequisites. Each check reads player XP
    once, so every gate sees the same snapshot.

    XP is never deducted on unlock, and undo neither refunds XP nor
    reverses the effect already applied to the player.
    """

    def __init__(
        self,
        catalog: Catalog,
        player: Any,
        event_bus: Optional[EventBus] = None,
        config: Optional[ProgressionConfig] = None,
    ):
        """
        Args:
            catalog: Validated catalog from SkillCatalogBuilder.build()
            player: Object exposing `xp` and `apply_effect(effect, context)`
            event_bus: Bus for progression events (a private one if None)
            config: Engine configuration (defaults if None)
        """
        self._catalog = catalog
        self._player = player
        self._event_bus = event_bus if event_bus is not None else EventBus()
        self._config = config if config is not None else ProgressionConfig()

        self._unlocked: set[str] = set()
        self._history = CommandLog(self._config.history_capacity)

        self._total_unlocked = 0
        self._xp_spent = 0
        self._per_category: dict[SkillCategory, int] = {c: 0 for c in SkillCategory}

        for node in self._catalog.values():
            node.unlocked = False

        logger.info(f"Progression engine initialized with {len(self._catalog)} skills")

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    @property
    def player(self) -> Any:
        return self._player

    @property
    def event_bus(self) -> EventBus:
        return self._event_bus

    @property
    def config(self) -> ProgressionConfig:
        return self._config

    @property
    def player_xp(self) -> int:
        return self._player.xp

    @property
    def unlocked_count(self) -> int:
        return self._total_unlocked

    @property
    def xp_spent(self) -> int:
        """Tally of unlocked skill costs (informational; nothing is deducted)."""
        return self._xp_spent

    @property
    def history(self) -> tuple[CommandRecord, ...]:
        """Unlock records, oldest to newest."""
        return tuple(self._history)

    def can_unlock(self, skill_id: str) -> UnlockCheck:
        """Check whether skill_id could be unlocked right now."""
        check = self._evaluate(skill_id, self._player.xp)
        if not check:
            logger.debug(f"Skill '{skill_id}' cannot be unlocked: {check.rejection.name}")
        return check

    def _evaluate(self, skill_id: str, xp: int) -> UnlockCheck:
        node = self._catalog.get(skill_id)
        if node is None:
            return UnlockCheck(skill_id, UnlockRejection.UNKNOWN_SKILL)
        if skill_id in self._unlocked:
            return UnlockCheck(skill_id, UnlockRejection.ALREADY_UNLOCKED)
        if xp < node.cost:
            return UnlockCheck(skill_id, UnlockRejection.INSUFFICIENT_XP)
        if not node.prerequisites_met(self._unlocked):
            return UnlockCheck(skill_id, UnlockRejection.PREREQUISITES_UNMET)
        return UnlockCheck(skill_id)

    def get_state(self, skill_id: str) -> SkillState:
        """
        Derived state of one skill.

        Raises:
            KeyError: if skill_id is not in the catalog
        """
        node = self._catalog[skill_id]
        if skill_id in self._unlocked:
            return SkillState.UNLOCKED
        if not node.prerequisites_met(self._unlocked):
            return SkillState.LOCKED
        if self._player.xp < node.cost:
            return SkillState.CANNOT_AFFORD
        return SkillState.AVAILABLE

    def is_unlocked(self, skill_id: str) -> bool:
        return skill_id in self._unlocked

    def unlock(self, skill_id: str) -> UnlockResult:
        """
        Unlock a skill.

        Eligibility is re-validated here; a previous can_unlock() result
        is not trusted. A rejected unlock changes nothing.

        On success the node is marked unlocked, counters are updated, a
        record is appended to the history, the effect is applied through
        the player and SKILL_UNLOCKED is published.
        """
        xp = self._player.xp
        check = self._evaluate(skill_id, xp)
        if not check:
            logger.warning(f"Cannot unlock skill '{skill_id}': {check.rejection.name}")
            return UnlockResult(skill_id, rejection=check.rejection)

        node = self._catalog[skill_id]
        node.unlocked = True
        self._unlocked.add(skill_id)
        self._total_unlocked += 1
        self._xp_spent += node.cost
        self._per_category[node.category] += 1

        record = CommandRecord(skill_id=skill_id, xp_before=xp, cost=node.cost)
        evicted = self._history.append(record)
        if evicted is not None:
            logger.debug(f"History full, dropped oldest record for '{evicted.skill_id}'")

        effect_error = None
        if node.effect is not None:
            context = EffectContext(xp=xp, unlocked=frozenset(self._unlocked))
            try:
                self._player.apply_effect(node.effect, context)
            except Exception as e:
                logger.exception(f"Failed to apply effect of skill '{skill_id}'")
                effect_error = e

        logger.info(f"Unlocked skill '{node.name}' for {node.cost} XP")

        if self._config.publish_events:
            self._event_bus.publish(
                ProgressionEvent.SKILL_UNLOCKED,
                skill_id=skill_id,
                xp_spent=node.cost,
                remaining_xp=self._player.xp - node.cost,
                total_unlocked=self._total_unlocked,
            )

        return UnlockResult(skill_id, record=record, evicted=evicted, effect_error=effect_error)

    def undo(self) -> UndoResult:
        """
        Revert the most recent unlock still in the history.

        Clears the unlocked flag and decrements the counters. The effect
        stays applied and XP is not refunded.
        """
        record = self._history.pop_latest()
        if record is None:
            logger.warning("No skill unlocks to undo")
            return UndoResult(rejection=UndoRejection.NO_HISTORY)

        node = self._catalog[record.skill_id]
        node.unlocked = False
        self._unlocked.discard(record.skill_id)
        self._total_unlocked -= 1
        self._xp_spent -= node.cost
        self._per_category[node.category] -= 1

        undone = replace(record, executed=False)
        logger.info(f"Undid unlock of skill '{node.name}'")

        if self._config.publish_events:
            self._event_bus.publish(
                ProgressionEvent.SKILL_UNLOCK_UNDONE,
                skill_id=record.skill_id,
                total_unlocked=self._total_unlocked,
            )

        return UndoResult(record=undone)

    def reset(self) -> None:
        """Lock every skill and clear counters and history."""
        for skill_id in self._unlocked:
            self._catalog[skill_id].unlocked = False
        self._unlocked.clear()
        self._history.clear()
        self._total_unlocked = 0
        self._xp_spent = 0
        for category in self._per_category:
            self._per_category[category] = 0

        logger.info("All skills reset")

        if self._config.publish_events:
            self._event_bus.publish(ProgressionEvent.SKILLS_RESET)

    def get_skill(self, skill_id: str) -> Optional[SkillNode]:
        return self._catalog.get(skill_id)

    def get_all(self) -> list[SkillNode]:
        return self._catalog.nodes()

    def get_unlocked(self) -> list[SkillNode]:
        return [n for n in self._catalog.values() if n.id in self._unlocked]

    def get_by_category(self, category: SkillCategory) -> list[SkillNode]:
        return self._catalog.by_category(category)

    def get_by_tier(self, tier: SkillTier) -> list[SkillNode]:
        return self._catalog.by_tier(tier)

    def get_available(self) -> list[SkillNode]:
        """Skills that pass every eligibility gate right now."""
        xp = self._player.xp
        return [n for n in self._catalog.values() if self._evaluate(n.id, xp)]

    def get_affordable(self) -> list[SkillNode]:
        """Locked skills within the player's XP, prerequisites ignored."""
        xp = self._player.xp
        return [
            n for n in self._catalog.values()
            if n.id not in self._unlocked and n.cost <= xp
        ]

    def get_blocked(self) -> list[SkillNode]:
        """Locked skills with at least one prerequisite still locked."""
        return [
            n for n in self._catalog.values()
            if n.id not in self._unlocked and not n.prerequisites_met(self._unlocked)
        ]

    def get_awaiting_prerequisites(self) -> list[SkillNode]:
        """Affordable skills held back only by prerequisites."""
        xp = self._player.xp
        return [
            n for n in self._catalog.values()
            if n.id not in self._unlocked
            and n.cost <= xp
            and not n.prerequisites_met(self._unlocked)
        ]

    def get_skills_unlocked_by(self, skill_id: str) -> list[SkillNode]:
        """Skills that list skill_id as a direct prerequisite."""
        return self._catalog.dependents(skill_id)

    def get_skills_by_status(self) -> dict[str, list[SkillNode]]:
        return {
            "unlocked": self.get_unlocked(),
            "available": self.get_available(),
            "affordable": self.get_affordable(),
            "blocked": self.get_blocked(),
            "awaiting_prerequisites": self.get_awaiting_prerequisites(),
        }

    def get_unlock_path(self, target_id: str) -> list[SkillNode]:
        """
        Locked skills needed to reach target_id, prerequisites first.

        Each skill appears once even when reachable through several
        branches. Unlocked skills end their branch. Unknown ids give [].
        """
        path: list[SkillNode] = []
        visited: set[str] = set()
        stack: list[tuple[SkillNode, Iterator[str]]] = []

        def enter(skill_id: str) -> None:
            visited.add(skill_id)
            node = self._catalog.get(skill_id)
            if node is not None and skill_id not in self._unlocked:
                stack.append((node, iter(node.prerequisites)))

        # Explicit stack so deep chains do not hit the recursion limit
        enter(target_id)
        while stack:
            node, prerequisites = stack[-1]
            for prerequisite in prerequisites:
                if prerequisite not in visited:
                    enter(prerequisite)
                    break
            else:
                stack.pop()
                path.append(node)

        return path

    def get_total_unlock_cost(self, target_id: str) -> int:
        return sum(n.cost for n in self.get_unlock_path(target_id))

    def can_eventually_unlock(self, target_id: str) -> bool:
        """Whether current XP covers the whole unlock path. False for unknown ids."""
        if target_id not in self._catalog:
            return False
        return self._player.xp >= self.get_total_unlock_cost(target_id)

    def get_recommended_skill(self, category: SkillCategory) -> Optional[SkillNode]:
        """Cheapest available skill in the category, lower tier on ties."""
        candidates = [n for n in self.get_available() if n.category == category]
        if not candidates:
            return None
        return min(candidates, key=lambda n: (n.cost, n.tier))

    def get_optimal_unlock_order(
        self,
        priority_category: Optional[SkillCategory] = None,
    ) -> list[SkillNode]:
        """
        Available skills, priority category first, then by cost and tier.

        Ties keep catalog order.
        """
        if priority_category is None:
            priority_category = self._config.default_priority_category
        return sorted(
            self.get_available(),
            key=lambda n: (n.category != priority_category, n.cost, n.tier),
        )

    def get_statistics(self) -> SkillTreeStatistics:
        total = len(self._catalog)
        stats = SkillTreeStatistics(
            total_skills=total,
            unlocked_skills=self._total_unlocked,
            xp_spent=self._xp_spent,
            available_skills=len(self.get_available()),
            affordable_skills=len(self.get_affordable()),
            blocked_skills=len(self.get_blocked()),
            completion_percentage=percentage(self._total_unlocked, total),
        )

        for category, unlocked in self._per_category.items():
            in_category = len(self._catalog.by_category(category))
            stats.categories[category] = CategoryProgress(
                total=in_category,
                unlocked=unlocked,
                percentage=percentage(unlocked, in_category),
            )

        return stats

    def get_progress(self) -> SkillTreeProgress:
        total = len(self._catalog)
        unlocked_nodes = self.get_unlocked()
        progress = SkillTreeProgress(
            total_skills=total,
            unlocked_skills=len(unlocked_nodes),
            completion_percentage=percentage(len(unlocked_nodes), total),
            available_skills=len(self.get_available()),
            player_xp=self._player.xp,
        )

        for category in SkillCategory:
            in_category = self._catalog.by_category(category)
            unlocked = sum(1 for n in in_category if n.id in self._unlocked)
            progress.categories[category] = CategoryProgress(
                total=len(in_category),
                unlocked=unlocked,
                percentage=percentage(unlocked, len(in_category)),
                next_recommended=self.get_recommended_skill(category),
            )

        for tier in SkillTier:
            in_tier = self._catalog.by_tier(tier)
            unlocked = sum(1 for n in in_tier if n.id in self._unlocked)
            progress.tiers[tier] = TierProgress(
                total=len(in_tier),
                unlocked=unlocked,
                percentage=percentage(unlocked, len(in_tier)),
            )

        return progress

    def validate_catalog(self) -> list[str]:
        """Re-run the catalog checks and return issues instead of raising."""
        issues = collect_issues(self._catalog.values())
        if issues:
            for issue in issues:
                logger.warning(issue)
        else:
            logger.info("Skill tree validation passed")
        return issues
