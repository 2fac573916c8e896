import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from spa_api.core.config import settings

logger = logging.getLogger(__name__)

class MongoDatabase:
    """MongoDB connection manager."""

    client: AsyncIOMotorClient = None
    db: AsyncIOMotorDatabase = None

mongodb = MongoDatabase()

async def connect_to_mongo():
    """Connect to MongoDB."""
    mongodb.client = AsyncIOMotorClient(settings.MONGODB_URI)
    mongodb.db = mongodb.client[settings.MONGODB_DB]

    # Create indexes
    await create_indexes()
    logger.info(f"Connected to MongoDB: {settings.MONGODB_DB}")

async def disconnect_from_mongo():
    """Disconnect from MongoDB."""
    if mongodb.client is not None:
        mongodb.client.close()
    logger.info("Disconnected from MongoDB")

async def create_indexes():
    """Create database indexes."""
    # Users
    await mongodb.db["users"].create_index("email", unique=True, sparse=True)
    await mongodb.db["users"].create_index("role")

    # Appointments: per-worker and business-wide period scans
    await mongodb.db["appointments"].create_index([("worker_id", 1), ("date", 1)])
    await mongodb.db["appointments"].create_index([("status", 1), ("date", 1)])

    # Loans
    await mongodb.db["loans"].create_index([("worker_id", 1), ("date", 1)])

    # Service catalog names are unique
    await mongodb.db["services"].create_index("name", unique=True)

def get_db() -> AsyncIOMotorDatabase:
    """Get database instance."""
    return mongodb.db
