from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ASCENDING, DESCENDING
from app.core.config import settings
import logging

logger = logging.getLogger(__name__)

# This client will be initialized once during application startup
# and closed during shutdown using FastAPI's lifespan events.
client: AsyncIOMotorClient = None # type: ignore

async def connect_to_mongo():
    """Connect to MongoDB, set the global client instance and ensure indexes."""
    global client
    client = AsyncIOMotorClient(settings.MONGO_URI)
    db = client[settings.DB_NAME]
    await db["users"].create_index("email", unique=True)
    await db["users"].create_index("status")
    await db["chats"].create_index([("user_id", ASCENDING), ("created_at", DESCENDING)])
    await db["messages"].create_index([("chat_id", ASCENDING), ("created_at", ASCENDING)])
    await db["payments"].create_index([("user_id", ASCENDING), ("status", ASCENDING)])
    logger.info("MongoDB connected")

async def close_mongo_connection():
    """Close the MongoDB connection."""
    global client
    if client:
        client.close()
        client = None
        logger.info("MongoDB disconnected")

def get_mongo_db():
    """
    Dependency function to get the MongoDB database object.
    This will be used in path operations.
    """
    if client is None:
        raise RuntimeError("MongoDB client is not initialized.")
    return client[settings.DB_NAME]
