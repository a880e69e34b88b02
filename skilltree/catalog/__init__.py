"""
Catalog module - skill definitions and the validated skill graph.

Exports:
- SkillNode, SkillTier, SkillCategory: Node model and enums
- Catalog, SkillCatalogBuilder: Validated catalog and its builder
- collect_issues, find_cycle: Graph checks usable outside a build
- default_catalog: The game's four-tier skill tree
"""

from skilltree.catalog.node import SkillNode, SkillTier, SkillCategory
from skilltree.catalog.builder import (
    Catalog,
    SkillCatalogBuilder,
    check_references,
    check_cycles,
    find_cycle,
    collect_issues,
)
from skilltree.catalog.defaults import (
    default_catalog,
    default_skills,
    create_test_skill,
    skills_by_playstyle,
)

__all__ = [
    # Nodes
    "SkillNode",
    "SkillTier",
    "SkillCategory",
    # Catalog
    "Catalog",
    "SkillCatalogBuilder",
    "check_references",
    "check_cycles",
    "find_cycle",
    "collect_issues",
    # Default tree
    "default_catalog",
    "default_skills",
    "create_test_skill",
    "skills_by_playstyle",
]
