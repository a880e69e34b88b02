import sys
import logging
from pathlib import Path

# Add project root to path
sys.path.append(str(Path(__file__).parent))

from skilltree.catalog.defaults import default_catalog
from skilltree.core.events import EventBus, ProgressionEvent
from skilltree.player.system import PlayerSystem
from skilltree.progression.engine import ProgressionEngine

def main():
    logging.basicConfig(level=logging.INFO)
    logger = logging.getLogger("CatalogVerification")

    try:
        # Build and validate the default tree
        logger.info("Building skill catalog...")
        catalog = default_catalog()
        assert len(catalog) == 17, f"Expected 17 skills, got {len(catalog)}"

        bus = EventBus()
        player = PlayerSystem(event_bus=bus)
        engine = ProgressionEngine(catalog, player, bus)

        issues = engine.validate_catalog()
        assert not issues, f"Catalog issues: {issues}"

        unlocked = []
        bus.subscribe(ProgressionEvent.SKILL_UNLOCKED, lambda e: unlocked.append(e["skill_id"]), weak=False)

        # Walk the full path to a master skill
        player.add_xp(engine.get_total_unlock_cost("champion_ascension"))
        path = engine.get_unlock_path("champion_ascension")
        logger.info(f"Unlock path: {' -> '.join(n.id for n in path)}")
        for node in path:
            result = engine.unlock(node.id)
            assert result.success, f"Failed to unlock {node.id}: {result.rejection}"

        assert unlocked == [n.id for n in path]
        assert engine.is_unlocked("champion_ascension")

        # Undo reverts the most recent unlock only
        undone = engine.undo()
        assert undone.record.skill_id == "champion_ascension"
        assert not engine.is_unlocked("champion_ascension")

        stats = engine.get_statistics()
        logger.info(
            f"Unlocked {stats.unlocked_skills}/{stats.total_skills} "
            f"({stats.completion_percentage:.1f}%), XP spent {stats.xp_spent}"
        )
        for category, progress in stats.categories.items():
            logger.info(f"  {category.name}: {progress.unlocked}/{progress.total} ({progress.percentage:.1f}%)")
        logger.info(f"Player: {player.get_statistics()}")

        logger.info("VERIFICATION SUCCESSFUL: Skill catalog built and exercised.")

    except Exception as e:
        logger.error(f"VERIFICATION FAILED: {e}")
        sys.exit(1)

if __name__ == "__main__":
    main()
