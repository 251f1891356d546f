"""
Order contract: validation and persistence for the "orders" collection.

Orders are create-only. productId must look like a listing id but is not
checked against the listings collection.
"""
from typing import Any, Callable, Dict, List

from bson import ObjectId

from database import Store, store_errors, utcnow
from errors import InvalidIdentifier, ValidationError
from schemas import Order
from validators import number, pickup_date, text

# Largest integer BSON can store
INT64_MAX = 2 ** 63 - 1


class OrderContract:
    def __init__(self, store: Store, clock: Callable = utcnow):
        self.store = store
        self.clock = clock

    def list_all(self) -> List[Dict[str, Any]]:
        with store_errors(500):
            return self.store.get_documents("orders")

    def list_by_owner(self, email: str) -> List[Dict[str, Any]]:
        with store_errors(500):
            return self.store.get_documents("orders", {"email": email})

    def create(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        product_id = fields.get("productId")
        if product_id is None or product_id == "":
            raise ValidationError("Product ID is required")
        if not isinstance(product_id, str) or not ObjectId.is_valid(product_id):
            raise InvalidIdentifier("Invalid product ID")
        product_name = text(fields.get("productName"))
        if not product_name:
            raise ValidationError("Product name is required")
        buyer_name = text(fields.get("buyerName"))
        if not buyer_name:
            raise ValidationError("Buyer name is required")
        if not text(fields.get("email")):
            raise ValidationError("Email is required")

        category = fields.get("category")
        quantity = number(fields.get("quantity"))
        if category == "Pets" and quantity is not None and quantity != 1:
            raise ValidationError("Pet adoption quantity must be 1")
        if quantity is None or quantity < 1 or quantity > INT64_MAX or quantity != int(quantity):
            raise ValidationError("Valid quantity is required")

        price = number(fields.get("price"))
        if price is None or price < 0:
            raise ValidationError("Valid price is required")
        address = text(fields.get("address"))
        if not address:
            raise ValidationError("Address is required")
        if not text(fields.get("phone")):
            raise ValidationError("Phone number is required")
        date = pickup_date(fields.get("date"))

        notes = fields.get("additionalNotes")
        order = Order(
            productId=product_id,
            productName=product_name,
            category=category if isinstance(category, str) else "",
            buyerName=buyer_name,
            email=fields["email"],
            quantity=int(quantity),
            price=price,
            address=address,
            phone=fields["phone"],
            date=date,
            additionalNotes=notes if isinstance(notes, str) else "",
            createdAt=self.clock(),
        )
        doc = order.model_dump()
        doc["productId"] = ObjectId(product_id)
        with store_errors(400):
            return self.store.create_document("orders", doc)
