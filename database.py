"""
MongoDB access for PawMart.

One Store is created at startup and shared by every request. It holds the
client and the two collections the API works with: "listings" and "orders".
"""
import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

from bson import ObjectId
from bson.errors import BSONError
from pydantic import BaseModel
from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.errors import PyMongoError

from config import Settings
from errors import StoreError

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_NAME = "pawmart"

# Newest first; documents created in the same millisecond keep insert order.
NEWEST_FIRST = [("createdAt", DESCENDING), ("_id", ASCENDING)]


def utcnow() -> datetime:
    # BSON dates hold milliseconds
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


@contextmanager
def store_errors(status_code: int = 500):
    try:
        yield
    # bson raises OverflowError for ints beyond 8 bytes
    except (PyMongoError, BSONError, OverflowError) as e:
        raise StoreError(str(e), status_code=status_code) from e


def serialize(doc: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Return a JSON-ready copy of a document: `_id` exposed as `id`, ObjectIds as strings."""
    if doc is None:
        return None
    d = {}
    for key, value in doc.items():
        if key == "_id":
            key = "id"
        if isinstance(value, ObjectId):
            value = str(value)
        d[key] = value
    return d


class Store:
    def __init__(self, client, database_name: Optional[str] = None):
        self.client = client
        if database_name:
            self.db = client[database_name]
        else:
            self.db = client.get_default_database(default=DEFAULT_DATABASE_NAME)
        self.listings = self.db["listings"]
        self.orders = self.db["orders"]

    @classmethod
    def connect(cls, settings: Settings) -> "Store":
        client = MongoClient(
            settings.database_url,
            serverSelectionTimeoutMS=settings.timeout_ms,
            timeoutMS=settings.timeout_ms,
            tz_aware=True,
        )
        store = cls(client, settings.database_name)
        try:
            store.ping()
        except PyMongoError:
            client.close()
            raise
        logger.info("MongoDB connected, database: %s", store.db.name)
        logger.info("Collections ready: listings, orders")
        return store

    def ping(self) -> None:
        self.client.admin.command("ping")

    def close(self) -> None:
        self.client.close()
        logger.info("MongoDB connection closed")

    def create_document(self, collection_name: str, data: Union[BaseModel, Dict[str, Any]]) -> Dict[str, Any]:
        doc = data.model_dump() if isinstance(data, BaseModel) else dict(data)
        result = self.db[collection_name].insert_one(doc)
        doc["_id"] = result.inserted_id
        return doc

    def get_documents(self, collection_name: str, filter_dict: Optional[Dict[str, Any]] = None, limit: int = 0) -> List[Dict[str, Any]]:
        cursor = self.db[collection_name].find(filter_dict or {}).sort(NEWEST_FIRST)
        if limit:
            cursor = cursor.limit(limit)
        return list(cursor)
