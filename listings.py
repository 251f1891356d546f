"""
Listing contract: validation and persistence for the "listings" collection.

Reads and deletes report store failures as 500, create and update as 400.
Updates merge whatever fields the client sends without re-checking the
creation rules.
"""
import re
from typing import Any, Callable, Dict, List

from bson import ObjectId
from pymongo import ReturnDocument

from database import Store, store_errors, utcnow
from errors import InvalidIdentifier, NotFound, ValidationError
from schemas import CATEGORIES, Listing
from validators import number, pickup_date, text

RECENT_LIMIT = 6

IMMUTABLE_FIELDS = ("_id", "id")


def _object_id(listing_id: str) -> ObjectId:
    if not ObjectId.is_valid(listing_id):
        raise InvalidIdentifier("Invalid listing ID")
    return ObjectId(listing_id)


class ListingContract:
    def __init__(self, store: Store, clock: Callable = utcnow):
        self.store = store
        self.collection = store.listings
        self.clock = clock

    def _find(self, filter_dict: Dict[str, Any] = None, limit: int = 0) -> List[Dict[str, Any]]:
        with store_errors(500):
            return self.store.get_documents("listings", filter_dict, limit)

    def list_all(self) -> List[Dict[str, Any]]:
        return self._find()

    def list_recent(self) -> List[Dict[str, Any]]:
        return self._find(limit=RECENT_LIMIT)

    def list_by_category(self, category: str) -> List[Dict[str, Any]]:
        return self._find({"category": category})

    def list_by_owner(self, email: str) -> List[Dict[str, Any]]:
        return self._find({"email": email})

    def search(self, substring: str) -> List[Dict[str, Any]]:
        # Case-insensitive substring match on name, never a client-supplied pattern
        return self._find({"name": {"$regex": re.escape(substring), "$options": "i"}})

    def get_by_id(self, listing_id: str) -> Dict[str, Any]:
        oid = _object_id(listing_id)
        with store_errors(500):
            doc = self.collection.find_one({"_id": oid})
        if not doc:
            raise NotFound("Listing not found")
        return doc

    def create(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        name = text(fields.get("name"))
        if not name:
            raise ValidationError("Product/Pet name is required")
        category = fields.get("category")
        if not isinstance(category, str) or category not in CATEGORIES:
            raise ValidationError("Valid category is required")
        price = number(fields.get("price"))
        if category == "Pets" and price is not None and price != 0:
            raise ValidationError("Pets must be free for adoption (price: 0)")
        if price is None or price < 0:
            raise ValidationError("Valid price is required")
        location = text(fields.get("location"))
        if not location:
            raise ValidationError("Location is required")
        if not text(fields.get("description")):
            raise ValidationError("Description is required")
        if not text(fields.get("image")):
            raise ValidationError("Image URL is required")
        if not text(fields.get("email")):
            raise ValidationError("Email is required")
        date = pickup_date(fields.get("date"))

        now = self.clock()
        listing = Listing(
            name=name,
            category=category,
            price=price,
            location=location,
            description=fields["description"],
            image=fields["image"],
            email=fields["email"],
            date=date,
            createdAt=now,
            updatedAt=now,
        )
        with store_errors(400):
            return self.store.create_document("listings", listing)

    def update(self, listing_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        oid = _object_id(listing_id)
        changes = {k: v for k, v in fields.items() if k not in IMMUTABLE_FIELDS}
        changes["updatedAt"] = self.clock()
        with store_errors(400):
            doc = self.collection.find_one_and_update(
                {"_id": oid},
                {"$set": changes},
                return_document=ReturnDocument.AFTER,
            )
        if not doc:
            raise NotFound("Listing not found")
        return doc

    def delete_by_id(self, listing_id: str) -> None:
        oid = _object_id(listing_id)
        with store_errors(500):
            result = self.collection.delete_one({"_id": oid})
        if result.deleted_count == 0:
            raise NotFound("Listing not found")
