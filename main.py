import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

from fastapi import APIRouter, Body, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError
from starlette.concurrency import run_in_threadpool

from config import Settings
from database import Store, serialize, utcnow
from errors import PawMartError, StoreError
from listings import ListingContract
from orders import OrderContract

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

router = APIRouter()


# Dependencies
def get_listings(request: Request) -> ListingContract:
    contract = getattr(request.app.state, "listings", None)
    if contract is None:
        raise StoreError("Database not connected")
    return contract


def get_orders(request: Request) -> OrderContract:
    contract = getattr(request.app.state, "orders", None)
    if contract is None:
        raise StoreError("Database not connected")
    return contract


def _many(docs):
    return {"success": True, "data": [serialize(d) for d in docs]}


# Listings Endpoints
@router.get("/api/listings")
def list_listings(listings: ListingContract = Depends(get_listings)):
    return _many(listings.list_all())


@router.get("/api/listings/recent")
def recent_listings(listings: ListingContract = Depends(get_listings)):
    return _many(listings.list_recent())


@router.get("/api/listings/category/{category}")
def listings_by_category(category: str, listings: ListingContract = Depends(get_listings)):
    return _many(listings.list_by_category(category))


@router.get("/api/listings/user/{email}")
def listings_by_owner(email: str, listings: ListingContract = Depends(get_listings)):
    return _many(listings.list_by_owner(email))


@router.get("/api/listings/search/{query}")
def search_listings(query: str, listings: ListingContract = Depends(get_listings)):
    return _many(listings.search(query))


@router.get("/api/listings/{listing_id}")
def get_listing(listing_id: str, listings: ListingContract = Depends(get_listings)):
    return {"success": True, "data": serialize(listings.get_by_id(listing_id))}


@router.post("/api/listings", status_code=201)
def create_listing(payload: Dict[str, Any] = Body(...), listings: ListingContract = Depends(get_listings)):
    doc = listings.create(payload)
    return {"success": True, "data": serialize(doc), "message": "Listing created successfully"}


@router.put("/api/listings/{listing_id}")
def update_listing(listing_id: str, payload: Dict[str, Any] = Body(...), listings: ListingContract = Depends(get_listings)):
    doc = listings.update(listing_id, payload)
    return {"success": True, "data": serialize(doc), "message": "Listing updated successfully"}


@router.delete("/api/listings/{listing_id}")
def delete_listing(listing_id: str, listings: ListingContract = Depends(get_listings)):
    listings.delete_by_id(listing_id)
    return {"success": True, "message": "Listing deleted successfully"}


# Orders Endpoints
@router.get("/api/orders")
def list_orders(orders: OrderContract = Depends(get_orders)):
    return _many(orders.list_all())


@router.get("/api/orders/user/{email}")
def orders_by_owner(email: str, orders: OrderContract = Depends(get_orders)):
    return _many(orders.list_by_owner(email))


@router.post("/api/orders", status_code=201)
def create_order(payload: Dict[str, Any] = Body(...), orders: OrderContract = Depends(get_orders)):
    doc = orders.create(payload)
    return {"success": True, "data": serialize(doc), "message": "Order placed successfully"}


@router.get("/")
def read_root():
    return {
        "message": "PawMart API running",
        "status": "Active",
        "api": {
            "listings": {
                "getAll": "GET /api/listings",
                "getRecent": "GET /api/listings/recent",
                "getByCategory": "GET /api/listings/category/:category",
                "getByUser": "GET /api/listings/user/:email",
                "search": "GET /api/listings/search/:query",
                "getSingle": "GET /api/listings/:id",
                "create": "POST /api/listings",
                "update": "PUT /api/listings/:id",
                "delete": "DELETE /api/listings/:id",
            },
            "orders": {
                "getAll": "GET /api/orders",
                "getByUser": "GET /api/orders/user/:email",
                "create": "POST /api/orders",
            },
        },
    }


@router.get("/health")
def health(request: Request):
    timestamp = datetime.now(timezone.utc).isoformat()
    store = getattr(request.app.state, "store", None)
    if store is not None:
        try:
            store.ping()
            return {"status": "OK", "database": "Connected", "timestamp": timestamp}
        except PyMongoError:
            pass
    return JSONResponse(
        status_code=500,
        content={"status": "Error", "database": "Disconnected", "timestamp": timestamp},
    )


def _attach(app: FastAPI, store: Store, clock: Callable) -> None:
    app.state.store = store
    app.state.listings = ListingContract(store, clock=clock)
    app.state.orders = OrderContract(store, clock=clock)


def create_app(store: Optional[Store] = None, settings: Optional[Settings] = None, clock: Callable = utcnow) -> FastAPI:
    settings = settings or Settings.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = app.state.store is None
        if owned:
            try:
                connected = await run_in_threadpool(Store.connect, settings)
            except PyMongoError as e:
                logger.error("MongoDB connection failed: %s", e)
                raise
            _attach(app, connected, clock)
        yield
        if owned:
            app.state.store.close()

    app = FastAPI(title="PawMart API", version="1.0.0", lifespan=lifespan)
    app.state.store = None
    if store is not None:
        _attach(app, store, clock)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(PawMartError)
    async def pawmart_error_handler(request: Request, exc: PawMartError):
        return JSONResponse(status_code=exc.status_code, content={"success": False, "message": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"success": False, "message": "Invalid request body"})

    app.include_router(router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=Settings.from_env().port)
