import copy
import json
from unittest.mock import patch

import httpx
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from agencies.ledger import AgencyService, WalletLedger
from auth.jwt_handler import create_access_token
from bookings.gateway import BookingApiClient
from bookings.service import BookingService
from bulk_orders.service import BulkOrderService
from database import seed_data
from database.connection import seed_database
from discounts.promo_codes import PromoCodeRepository
from hotels.catalog import HotelCatalog
from notifications.notifier import Notifier

API_URL = "http://booking-api.test/api.php"


class FakeBookingApi:
    """In-memory stand-in for the remote booking API, served through httpx.MockTransport."""

    def __init__(self, rows=None):
        self.rows = {row["id"]: row for row in copy.deepcopy(rows or [])}
        self.calls = []
        # endpoint/method pairs that answer with a server error, e.g. {("update_booking_status", "POST")}
        self.failing = set()

    def fail(self, endpoint, method):
        self.failing.add((endpoint, method))

    def recover(self):
        self.failing.clear()

    def handler(self, request: httpx.Request) -> httpx.Response:
        endpoint = request.url.params.get("endpoint")
        self.calls.append((request.method, endpoint))
        if (endpoint, request.method) in self.failing:
            return httpx.Response(500, json={"error": "Database error"})

        body = json.loads(request.content) if request.content else None
        if endpoint == "bookings" and request.method == "GET":
            return httpx.Response(200, json=list(self.rows.values()))
        if endpoint == "bookings" and request.method in ("POST", "PUT"):
            self.rows[body["id"]] = body
            return httpx.Response(200, json={"message": "ok"})
        if endpoint == "bookings" and request.method == "DELETE":
            self.rows.pop(request.url.params.get("id"), None)
            return httpx.Response(200, json={"message": "deleted"})
        if endpoint == "update_booking_status":
            self.rows[body["id"]]["status"] = body["status"]
            return httpx.Response(200, json={"message": "updated"})
        return httpx.Response(404, json={"error": "Unknown endpoint"})

    def client(self) -> BookingApiClient:
        return BookingApiClient(base_url=API_URL, transport=httpx.MockTransport(self.handler))


@pytest.fixture
def fake_api():
    return FakeBookingApi(seed_data.BOOKINGS)


@pytest_asyncio.fixture
async def db():
    database = AsyncMongoMockClient()["umrah-test"]
    await seed_database(database)
    return database


@pytest_asyncio.fixture
async def services(db, fake_api):
    """The service graph main.py builds at startup, over mongomock and the fake API."""
    catalog = HotelCatalog(db)
    promo_codes = PromoCodeRepository(db)
    notifier = Notifier(db)
    ledger = WalletLedger(db)
    agencies = AgencyService(db, ledger)
    bookings = BookingService(fake_api.client(), catalog, promo_codes, notifier)
    await bookings.load()
    bulk_orders = BulkOrderService(db, catalog, agencies, ledger, bookings)
    return {
        "db": db,
        "catalog": catalog,
        "promo_codes": promo_codes,
        "notifier": notifier,
        "ledger": ledger,
        "agencies": agencies,
        "bookings": bookings,
        "bulk_orders": bulk_orders,
    }


@pytest.fixture
def client(fake_api):
    from main import app

    with patch("main.get_client", return_value=AsyncMongoMockClient()), \
            patch("main.BookingApiClient", new=fake_api.client):
        with TestClient(app) as test_client:
            yield test_client


def auth_header(subject: str, user_type: str) -> dict:
    return {"Authorization": f"Bearer {create_access_token(subject, user_type)}"}


@pytest.fixture
def admin_headers():
    return auth_header("admin", "admin")


@pytest.fixture
def agent_headers():
    return auth_header("AHT-001", "agent")
