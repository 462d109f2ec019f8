"""Script to seed coin symbols, coins and charts from Upbit into the database."""
import sys
import logging
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from cryptory.core.database import get_db, init_db
from cryptory.core.logging_config import setup_logging
from cryptory.services.coin_sync import run_initial_load

logger = logging.getLogger("sync_coins")


def main():
    """Main function to sync coins."""
    setup_logging()
    init_db()
    logger.info("Starting coin synchronization...")

    db = next(get_db())

    try:
        stats = run_initial_load(db)

        coin_stats = stats["coins"]
        logger.info("=== Coin Sync Results ===")
        logger.info(f"Symbols: {stats['symbols']}")
        logger.info(f"Added: {coin_stats['added']} coins, skipped: {coin_stats['skipped']}")
        logger.info(f"Displayed by default: {stats['displayed']}")
        for code, count in stats["charts"].items():
            logger.info(f"Charts for {code}: {count} rows added")
        logger.info("Sync completed successfully!")

    except Exception as e:
        logger.exception(f"Error during sync: {e}")
        sys.exit(1)
    finally:
        db.close()


if __name__ == "__main__":
    main()
