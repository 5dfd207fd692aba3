from typing import Callable

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.errors import DuplicateKeyError

from config import MONGODB_DB, MONGODB_URL
from database import seed_data
from utils.exceptions import ConflictError
from utils.logging_utils import setup_logger

logger = setup_logger(__name__)

# collection name -> seed documents inserted when the collection is empty
SEEDED_COLLECTIONS = {
    "hotels": seed_data.HOTELS,
    "agencies": seed_data.AGENCIES,
    "promo_codes": seed_data.PROMO_CODES,
    "settings": [seed_data.SETTINGS],
}

# collections whose `id` must be unique
UNIQUE_ID_COLLECTIONS = ("hotels", "customers", "agencies", "bulk_orders")

ID_ATTEMPTS = 5


def get_client(url: str = MONGODB_URL) -> AsyncIOMotorClient:
    return AsyncIOMotorClient(url)


def get_database(client: AsyncIOMotorClient, name: str = MONGODB_DB):
    return client[name]


async def ensure_indexes(db):
    for name in UNIQUE_ID_COLLECTIONS:
        await db[name].create_index("id", unique=True)


async def seed_database(db):
    """Create the unique indexes and re-hydrate empty collections from the bundled seed data."""
    await ensure_indexes(db)
    for name, documents in SEEDED_COLLECTIONS.items():
        if await db[name].count_documents({}) > 0:
            continue
        # insert copies so the seed lists never pick up an `_id`
        await db[name].insert_many([dict(doc) for doc in documents])
        logger.info("Seeded %d document(s) into '%s'", len(documents), name)


async def next_id(collection) -> int:
    last = await collection.find({}, {"_id": 0, "id": 1}).sort("id", -1).to_list(length=1)
    return last[0]["id"] + 1 if last else 1


async def insert_with_next_id(collection, build: Callable[[int], dict]) -> dict:
    """
    Insert ``build(new_id)`` under the next numeric id.

    Relies on the unique index on ``id``: when a concurrent insert took the
    id first, a fresh one is read and the insert retried.
    """
    for _ in range(ID_ATTEMPTS):
        doc = build(await next_id(collection))
        try:
            await collection.insert_one(doc)
        except DuplicateKeyError:
            logger.warning("Id %s in '%s' was taken, retrying", doc["id"], collection.name)
            continue
        doc.pop("_id", None)
        return doc
    raise ConflictError("Could not allocate a new id. Please retry.")
