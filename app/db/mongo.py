"""
app/db/mongo.py

Purpose: MongoDB connection setup

- Builds the Motor client with connection pooling
- Retries the initial connection with backoff
- Health checks
- The client is owned by the caller (the app lifespan), never a module global
"""

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.errors import ConnectionFailure, ServerSelectionTimeoutError
import asyncio
from app.core.config import Settings
from app.core.logging import get_logger

logger = get_logger(__name__)


async def connect_to_mongo(config: Settings, max_retries: int = 3, retry_delay: float = 2) -> AsyncIOMotorClient:
    """
    Establishes connection to MongoDB with retry logic.
    Called during application startup.

    Returns:
        Connected AsyncIOMotorClient

    Raises:
        ConnectionError: If every attempt fails
    """
    for attempt in range(1, max_retries + 1):
        try:
            logger.info(
                f"Attempting to connect to MongoDB (attempt {attempt}/{max_retries})"
            )

            client = AsyncIOMotorClient(
                config.MONGODB_URL,
                maxPoolSize=50,
                minPoolSize=5,
                serverSelectionTimeoutMS=5000,
                connectTimeoutMS=10000,
                retryWrites=True,
                retryReads=True,
            )

            await client.admin.command("ping")

            logger.info(f"Connected to MongoDB: {config.MONGODB_DB_NAME}")
            return client

        except (ConnectionFailure, ServerSelectionTimeoutError) as e:
            logger.error(
                f"Failed to connect to MongoDB (attempt {attempt}/{max_retries}): {e}"
            )

            if attempt < max_retries:
                logger.info(f"Retrying in {retry_delay} seconds...")
                await asyncio.sleep(retry_delay)
                retry_delay *= 2
            else:
                logger.critical("Failed to connect to MongoDB after all retries")
                raise ConnectionError("Could not establish MongoDB connection") from e


def close_mongo_connection(client: AsyncIOMotorClient):
    """
    Closes the MongoDB connection.
    Called during application shutdown.
    """
    logger.info("Closing MongoDB connection")
    client.close()
    logger.info("MongoDB connection closed")
