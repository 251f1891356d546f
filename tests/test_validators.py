from datetime import datetime, timezone

import pytest
from bson import ObjectId
from bson.errors import InvalidDocument
from pymongo.errors import PyMongoError

from database import serialize, store_errors, utcnow
from errors import StoreError, ValidationError
from validators import number, pickup_date, text


def test_text():
    assert text("  Rex ") == "Rex"
    assert text("   ") is None
    assert text(None) is None
    assert text(42) is None


def test_number():
    assert number(9.5) == 9.5
    assert number("7") == 7.0
    assert number(0) == 0
    assert number(True) is None
    assert number("nan") is None
    assert number([1]) is None


def test_pickup_date_formats():
    assert pickup_date("2024-01-01") == datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert pickup_date("2024-01-01T10:30:00Z") == datetime(2024, 1, 1, 10, 30, tzinfo=timezone.utc)
    assert pickup_date(1704067200000) == datetime(2024, 1, 1, tzinfo=timezone.utc)


def test_pickup_date_errors():
    with pytest.raises(ValidationError, match="Pickup date is required"):
        pickup_date("")
    with pytest.raises(ValidationError, match="Valid pickup date is required"):
        pickup_date({"day": 1})


def test_utcnow_has_millisecond_precision():
    assert utcnow().microsecond % 1000 == 0


def test_serialize_exposes_string_ids():
    oid, ref = ObjectId(), ObjectId()
    doc = serialize({"_id": oid, "productId": ref, "name": "Bowl"})
    assert doc == {"id": str(oid), "productId": str(ref), "name": "Bowl"}
    assert serialize(None) is None


def test_store_errors_carry_status():
    with pytest.raises(StoreError) as exc:
        with store_errors(400):
            raise PyMongoError("boom")
    assert exc.value.status_code == 400
    assert exc.value.message == "boom"


@pytest.mark.parametrize("error", [OverflowError("MongoDB can only handle up to 8-byte ints"), InvalidDocument("bad key")])
def test_store_errors_wrap_encoding_failures(error):
    with pytest.raises(StoreError) as exc:
        with store_errors(400):
            raise error
    assert exc.value.status_code == 400
