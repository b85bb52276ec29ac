"""Startup achievement check against the PostgreSQL catch log"""
import logging
import asyncio
from fishflow.config import validate_config, get_local_timezone, LOG_LEVEL
from fishflow.db.connection import db
from fishflow.db import queries
from fishflow.services.container import build_postgres_container

# Configure logging
logging.basicConfig(
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    level=getattr(logging, LOG_LEVEL)
)

logger = logging.getLogger(__name__)


async def main() -> None:
    """Run one login-triggered evaluation and deliver its notifications"""
    try:
        # Validate configuration
        logger.info("Validating configuration...")
        validate_config(require_database=True)

        # Initialize database
        logger.info("Initializing database connection pool...")
        await db.init_pool()
        await queries.ensure_schema()

        container = build_postgres_container(local_tz=get_local_timezone())
        await queries.seed_achievements(container.catalog)

        engine = container.achievement_engine
        unlocks = await engine.check_on_login()
        logger.info(f"Login check finished with {len(unlocks)} unlock(s)")

        await container.notification_queue.wait_until_idle()

    except KeyboardInterrupt:
        logger.info("Shutting down...")
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
    finally:
        logger.info("Closing database connection...")
        await db.close_pool()

        logger.info("Shutdown complete")


def run() -> None:
    """Console entry point"""
    asyncio.run(main())


if __name__ == "__main__":
    run()
