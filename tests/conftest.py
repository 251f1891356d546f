"""Pytest configuration and fixtures."""

from datetime import datetime, timedelta, timezone

import mongomock
import pytest
from fastapi.testclient import TestClient

from database import Store
from listings import ListingContract
from main import create_app
from orders import OrderContract


class TickingClock:
    """Returns a time one second later on every call."""

    def __init__(self, start=datetime(2024, 5, 1, tzinfo=timezone.utc), step=timedelta(seconds=1)):
        self.now = start
        self.step = step

    def __call__(self):
        current = self.now
        self.now = self.now + self.step
        return current


@pytest.fixture
def clock():
    return TickingClock()


@pytest.fixture
def store():
    return Store(mongomock.MongoClient(), "pawmart_test")


@pytest.fixture
def listings(store, clock):
    return ListingContract(store, clock=clock)


@pytest.fixture
def orders(store, clock):
    return OrderContract(store, clock=clock)


@pytest.fixture
def client(store, clock):
    app = create_app(store=store, clock=clock)
    return TestClient(app)


@pytest.fixture
def listing_payload():
    return {
        "name": "Bowl",
        "category": "Food",
        "price": 9.5,
        "location": "X",
        "description": "d",
        "image": "http://i",
        "email": "a@b.com",
        "date": "2024-01-01",
    }


@pytest.fixture
def order_payload():
    return {
        "productId": "65a1b2c3d4e5f60718293a4b",
        "productName": "Bowl",
        "category": "Food",
        "buyerName": "Sam",
        "email": "buyer@example.com",
        "quantity": 2,
        "price": 9.5,
        "address": "1 Main St",
        "phone": "555-0100",
        "date": "2024-01-05",
    }
