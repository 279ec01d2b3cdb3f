import sys
import logging
from pathlib import Path

# Add project root to path
sys.path.append(str(Path(__file__).parent))

from turtle_engine.resources.database import Database
from turtle_hero.battle.enemies import EnemyDatabase
from turtle_hero.data import BUNDLED_DATA_PATH
from turtle_hero.dialog import ScenarioError, ScenarioLoader
from turtle_hero.inventory.items import ItemDatabase

def main():
    logging.basicConfig(level=logging.INFO)
    logger = logging.getLogger("DataVerification")

    data_path = Path(sys.argv[1]) if len(sys.argv) > 1 else BUNDLED_DATA_PATH

    try:
        # Initialize Database
        db = Database(data_path)

        # Load all data
        logger.info(f"Loading database from {data_path}...")
        db.load_all()

        items = ItemDatabase.from_database(db)
        enemies = EnemyDatabase.from_database(db)

        # Every raw record must have become a catalog entry
        assert len(items) == len(db.items), "Some items failed to load"
        assert len(enemies) == len(db.enemies), "Some enemies failed to load"

        # Verify drops point at real items
        for template in enemies:
            for reward in template.item_rewards:
                assert reward.item_id in items, f"{template.id} drops unknown item {reward.item_id}"

        # Verify Dialog
        scenarios = ScenarioLoader().load_directory(data_path / "dialog")
        for scenario in scenarios.values():
            for node in scenario.nodes.values():
                for option in node.options:
                    if option.action == "battle":
                        assert option.action_parameter in enemies, (
                            f"{scenario.id}/{node.id} fights unknown enemy {option.action_parameter}"
                        )
                    if option.reward and option.reward.item_id:
                        assert option.reward.item_id in items, (
                            f"{scenario.id}/{node.id} rewards unknown item {option.reward.item_id}"
                        )

        logger.info(
            f"VERIFICATION SUCCESSFUL: {len(items)} items, {len(enemies)} enemies, "
            f"{len(scenarios)} scenarios loaded and validated."
        )

    except (AssertionError, ScenarioError) as e:
        logger.error(f"VERIFICATION FAILED: {e}")
        sys.exit(1)

if __name__ == "__main__":
    main()
