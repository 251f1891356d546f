"""
Database Schemas for PawMart (pet adoption and pet supplies)

Each Pydantic model maps to a MongoDB collection:
- Listing -> "listings"
- Order -> "orders"

Request bodies are checked field by field in listings.py and orders.py so
clients get one precise message per problem; these models describe the
document that is finally stored.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

CATEGORIES = ("Pets", "Food", "Accessories", "Care Products")

Category = Literal["Pets", "Food", "Accessories", "Care Products"]


# A product for sale or a pet up for adoption
class Listing(BaseModel):
    name: str = Field(..., min_length=1, description="Product or pet name")
    category: Category = Field(..., description="Listing category")
    price: float = Field(..., ge=0, description="Price, 0 for pets")
    location: str = Field(..., min_length=1, description="Pickup location")
    description: str
    image: str = Field(..., description="Image URL")
    email: str = Field(..., description="Owner email")
    date: datetime = Field(..., description="Pickup date")
    createdAt: datetime
    updatedAt: datetime


# A buyer's request to purchase or adopt a listing
class Order(BaseModel):
    productId: str = Field(..., description="Listing id")
    productName: str = Field(..., min_length=1)
    category: str = ""
    buyerName: str = Field(..., min_length=1)
    email: str = Field(..., description="Buyer email")
    quantity: int = Field(..., ge=1)
    price: float = Field(..., ge=0)
    address: str
    phone: str
    date: datetime = Field(..., description="Pickup date")
    additionalNotes: str = ""
    createdAt: datetime
