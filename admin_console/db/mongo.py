# admin_console/db/mongo.py
import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ASCENDING, DESCENDING

from admin_console.core.config import settings

logger = logging.getLogger(__name__)

ADMINS = "admins"
OFFICE_USERS = "officeusers"
PINCODES = "pincodeareas"
ADDRESS_FORMS = "formdatas"

# projection that keeps credentials out of responses
NO_PASSWORD = {"password": 0, "password_hash": 0}

_client: Optional[AsyncIOMotorClient] = None

def init_client() -> None:
    global _client
    if _client is None:
        _client = AsyncIOMotorClient(settings.MONGO_URI)

def set_client(client) -> None:
    """Install an already-built client (an in-memory one in tests)."""
    global _client
    _client = client

def get_client() -> AsyncIOMotorClient:
    if _client is None:
        # not created yet, but prefer calling init_client in lifespan
        init_client()
    return _client

def close_client() -> None:
    global _client
    if _client is not None:
        _client.close()
        _client = None

def get_db():
    client = get_client()
    return client[settings.DATABASE_NAME]

async def ensure_indexes() -> None:
    db = get_db()
    await db[ADMINS].create_index([("email", ASCENDING)], unique=True)
    await db[ADMINS].create_index([("isActive", ASCENDING)])
    await db[ADMINS].create_index([("role", ASCENDING)])
    await db[OFFICE_USERS].create_index([("email", ASCENDING)], unique=True)
    # lookup index only; the (pincode, area, city) triple is checked at write time
    await db[PINCODES].create_index([("pincode", ASCENDING), ("areaname", ASCENDING), ("cityname", ASCENDING)])
    await db[ADDRESS_FORMS].create_index([("createdAt", DESCENDING)])
    logger.info("MongoDB indexes ensured")
