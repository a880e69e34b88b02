"""
Skill catalog - construction and graph validation.

The catalog is built once, validated, and then shared read-only.
Two passes run before a Catalog is handed out:

1. Referential: every prerequisite exists and is not the node itself.
2. Cycles: depth-first walk over the prerequisite graph with three
   marks (unvisited / visiting / visited). Reaching a node that is
   still being visited means the graph loops.

A failed build raises CatalogIntegrityError and returns nothing.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from enum import Enum, auto
from typing import Optional

from skilltree.catalog.node import SkillCategory, SkillNode, SkillTier
from skilltree.core.errors import CatalogIntegrityError, IntegrityErrorKind

logger = logging.getLogger(__name__)


class _Mark(Enum):
    UNVISITED = auto()
    VISITING = auto()
    VISITED = auto()


class Catalog(Mapping[str, SkillNode]):
    """
    Validated, structurally immutable mapping of skill id -> SkillNode.

    Iteration follows definition order. Only the nodes' `unlocked`
    flags change after construction, and only through the engine.
    """

    def __init__(self, nodes: dict[str, SkillNode]):
        self._nodes = dict(nodes)

    def __getitem__(self, skill_id: str) -> SkillNode:
        return self._nodes[skill_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def __repr__(self) -> str:
        return f"Catalog({len(self._nodes)} skills)"

    def nodes(self) -> list[SkillNode]:
        """All nodes in definition order."""
        return list(self._nodes.values())

    def by_category(self, category: SkillCategory) -> list[SkillNode]:
        return [n for n in self._nodes.values() if n.category == category]

    def by_tier(self, tier: SkillTier) -> list[SkillNode]:
        return [n for n in self._nodes.values() if n.tier == tier]

    def roots(self) -> list[SkillNode]:
        """Entry points: nodes with no prerequisites."""
        return [n for n in self._nodes.values() if not n.prerequisites]

    def dependents(self, skill_id: str) -> list[SkillNode]:
        """Nodes that list skill_id as a direct prerequisite."""
        return [n for n in self._nodes.values() if skill_id in n.prerequisites]

    def total_cost(self) -> int:
        """XP cost of every skill in the catalog."""
        return sum(n.cost for n in self._nodes.values())


class SkillCatalogBuilder:
    """
    Collects skill definitions and produces a validated Catalog.

    Usage:
        builder = SkillCatalogBuilder()
        builder.add(SkillNode(id="a", name="A", cost=10))
        builder.add(SkillNode(id="b", name="B", cost=25, prerequisites=["a"]))
        catalog = builder.build()
    """

    def __init__(self):
        self._nodes: dict[str, SkillNode] = {}

    def add(self, node: SkillNode) -> SkillCatalogBuilder:
        """
        Add a node definition.

        Raises:
            CatalogIntegrityError: if the id is already defined
        """
        if node.id in self._nodes:
            raise CatalogIntegrityError(IntegrityErrorKind.DUPLICATE_ID, node.id)
        self._nodes[node.id] = node
        return self

    def add_all(self, nodes: Iterable[SkillNode]) -> SkillCatalogBuilder:
        for node in nodes:
            self.add(node)
        return self

    def __len__(self) -> int:
        return len(self._nodes)

    def build(self) -> Catalog:
        """
        Validate the collected nodes and return the catalog.

        Raises:
            CatalogIntegrityError: on a dangling or self prerequisite,
                or a prerequisite cycle
        """
        check_references(self._nodes)
        check_cycles(self._nodes)

        for node in self._nodes.values():
            node.unlocked = False

        logger.info(f"Skill catalog built with {len(self._nodes)} skills")
        return Catalog(self._nodes)


def check_references(nodes: Mapping[str, SkillNode]) -> None:
    """
    Raise on the first prerequisite that is missing or self-referencing.
    """
    for node in nodes.values():
        for prerequisite in node.prerequisites:
            if prerequisite == node.id:
                raise CatalogIntegrityError(IntegrityErrorKind.SELF_PREREQUISITE, node.id)
            if prerequisite not in nodes:
                raise CatalogIntegrityError(
                    IntegrityErrorKind.DANGLING_PREREQUISITE, node.id, prerequisite
                )


def find_cycle(graph: Mapping[str, Iterable[str]]) -> Optional[str]:
    """
    Return the id of a node on a prerequisite cycle, or None.

    Args:
        graph: skill id -> prerequisite ids

    Prerequisites that do not exist are ignored here; they are the
    referential pass's concern. Self-references count as cycles.
    """
    marks: dict[str, _Mark] = {}

    for root in graph:
        if marks.get(root, _Mark.UNVISITED) is not _Mark.UNVISITED:
            continue

        marks[root] = _Mark.VISITING
        stack = [(root, iter(graph[root]))]

        while stack:
            node_id, prerequisites = stack[-1]
            for prerequisite in prerequisites:
                if prerequisite not in graph:
                    continue
                mark = marks.get(prerequisite, _Mark.UNVISITED)
                if mark is _Mark.VISITING:
                    return prerequisite
                if mark is _Mark.UNVISITED:
                    marks[prerequisite] = _Mark.VISITING
                    stack.append((prerequisite, iter(graph[prerequisite])))
                    break
            else:
                marks[node_id] = _Mark.VISITED
                stack.pop()

    return None


def check_cycles(nodes: Mapping[str, SkillNode]) -> None:
    """Raise if the prerequisite graph contains a cycle."""
    cycle_node = find_cycle({sid: node.prerequisites for sid, node in nodes.items()})
    if cycle_node is not None:
        raise CatalogIntegrityError(IntegrityErrorKind.CYCLE, cycle_node)


def collect_issues(nodes: Iterable[SkillNode]) -> list[str]:
    """
    Run every catalog check and report problems instead of raising.

    Covers the graph rules (dangling, self, cycle) plus data sanity
    (missing name, negative cost, missing effect).
    """
    issues: list[str] = []
    by_id: dict[str, SkillNode] = {}

    for node in nodes:
        if node.id in by_id:
            issues.append(str(CatalogIntegrityError(IntegrityErrorKind.DUPLICATE_ID, node.id)))
            continue
        by_id[node.id] = node

    for node in by_id.values():
        for prerequisite in node.prerequisites:
            if prerequisite == node.id:
                issues.append(str(CatalogIntegrityError(IntegrityErrorKind.SELF_PREREQUISITE, node.id)))
            elif prerequisite not in by_id:
                issues.append(str(CatalogIntegrityError(
                    IntegrityErrorKind.DANGLING_PREREQUISITE, node.id, prerequisite
                )))

        if not node.name.strip():
            issues.append(f"Skill '{node.id}' has no name")
        if node.cost < 0:
            issues.append(f"Skill '{node.id}' has negative cost")
        if node.effect is None:
            issues.append(f"Skill '{node.id}' has no effect")

    # Self-references were already reported above
    graph = {
        sid: [p for p in node.prerequisites if p != sid]
        for sid, node in by_id.items()
    }
    cycle_node = find_cycle(graph)
    if cycle_node is not None:
        issues.append(str(CatalogIntegrityError(IntegrityErrorKind.CYCLE, cycle_node)))

    return issues
