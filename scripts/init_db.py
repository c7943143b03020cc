"""
Database initialization script - indexes for users, companies, memberships,
invitations and notifications

Run once (safe to re-run) to create indexes:
    python scripts/init_db.py
"""

import asyncio
import sys
from pathlib import Path
from dotenv import load_dotenv

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

# Load environment variables
load_dotenv()

from app.core.config import Settings
from app.core.logging import setup_logging, get_logger
from app.db import collections
from app.db.indexes import create_indexes
from app.db.mongo import connect_to_mongo, close_mongo_connection
from app.db.store import DocumentStore

logger = get_logger("scripts.init_db")


async def main():
    """Main initialization"""
    config = Settings()
    setup_logging(config)

    logger.info("=" * 60)
    logger.info("  NEXA Database Setup")
    logger.info("=" * 60)

    client = await connect_to_mongo(config)
    store = DocumentStore(client[config.MONGODB_DB_NAME])

    try:
        await create_indexes(store)

        logger.info("Verifying indexes...")
        for name in collections.ALL_COLLECTIONS:
            indexes = await store.collection(name).index_information()
            names = [idx for idx in indexes if idx != "_id_"]
            logger.info(f"  {name}: {', '.join(names) or '-'} ({await store.count(name)} documents)")

        logger.info("Database initialization complete!")

    finally:
        close_mongo_connection(client)


if __name__ == "__main__":
    asyncio.run(main())
