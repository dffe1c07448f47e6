import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from groupsplit.core.config import settings

logger = logging.getLogger(__name__)


class MongoDatabase:
    """MongoDB connection manager."""

    client: AsyncIOMotorClient = None
    db: AsyncIOMotorDatabase = None

mongodb = MongoDatabase()

async def connect_to_mongo():
    """Connect to MongoDB."""
    mongodb.client = AsyncIOMotorClient(settings.MONGODB_URL)
    mongodb.db = mongodb.client[settings.DATABASE_NAME]

    await create_indexes()
    logger.info("Connected to MongoDB: %s", settings.DATABASE_NAME)

async def close_mongo_connection():
    """Disconnect from MongoDB."""
    if mongodb.client is not None:
        mongodb.client.close()
        mongodb.client = None
        mongodb.db = None
    logger.info("Disconnected from MongoDB")

async def create_indexes():
    """Create the indexes backing the stats aggregations."""
    # One membership per user per group; roster lookups in membership order
    await mongodb.db["group_members"].create_index([("group_id", 1), ("user_id", 1)], unique=True)
    await mongodb.db["group_members"].create_index([("group_id", 1), ("status", 1), ("joined_at", 1)])

    # Expense and share sums
    await mongodb.db["expenses"].create_index([("group_id", 1), ("paid_by_id", 1)])
    await mongodb.db["expense_shares"].create_index("expense_id")

    # Payment sums, both directions
    await mongodb.db["payments"].create_index([("group_id", 1), ("payer_id", 1)])
    await mongodb.db["payments"].create_index([("group_id", 1), ("receiver_id", 1)])

def get_db() -> AsyncIOMotorDatabase:
    """Get database instance."""
    return mongodb.db
