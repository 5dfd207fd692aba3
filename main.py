# main.py

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import CORS_ORIGINS
from database.connection import get_client, get_database, seed_database
from utils.exceptions import BookingPortalError
from utils.logging_utils import setup_logger

# Services
from agencies.ledger import AgencyService, WalletLedger
from bookings.gateway import BookingApiClient
from bookings.service import BookingService
from bulk_orders.service import BulkOrderService
from discounts.promo_codes import PromoCodeRepository
from hotels.catalog import HotelCatalog
from notifications.notifier import Notifier
from site_settings.site_settings import SiteSettingsStore

# Import routers
from agencies.agencies import router as agencies_router
from bookings.bookings import router as bookings_router
from bulk_orders.bulk_orders import router as bulk_orders_router
from discounts.discounts import router as discounts_router
from hotels.hotels import router as hotels_router
from invoices.invoices import router as invoices_router
from notifications.notifications import router as notifications_router
from reports.reports import router as reports_router
from site_settings.site_settings import router as settings_router
from users.users import router as users_router

logger = setup_logger(__name__)

app = FastAPI(title="Umrah Hotels Portal API", version="1.0.0")

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(BookingPortalError)
async def portal_error_handler(request: Request, exc: BookingPortalError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.on_event("startup")
async def startup_db_client():
    app.mongodb_client = get_client()
    app.mongodb = get_database(app.mongodb_client)
    await seed_database(app.mongodb)

    app.catalog = HotelCatalog(app.mongodb)
    app.promo_codes = PromoCodeRepository(app.mongodb)
    app.notifier = Notifier(app.mongodb)
    app.ledger = WalletLedger(app.mongodb)
    app.agencies = AgencyService(app.mongodb, app.ledger)
    app.site_settings = SiteSettingsStore(app.mongodb)

    app.booking_api = BookingApiClient()
    app.bookings = BookingService(app.booking_api, app.catalog, app.promo_codes, app.notifier)
    await app.bookings.load()
    app.bulk_orders = BulkOrderService(app.mongodb, app.catalog, app.agencies, app.ledger, app.bookings)
    logger.info("Portal started")


@app.on_event("shutdown")
async def shutdown_db_client():
    await app.booking_api.close()
    app.mongodb_client.close()


# Include all routers
app.include_router(users_router)
app.include_router(hotels_router)
app.include_router(bookings_router)
app.include_router(agencies_router)
app.include_router(invoices_router)
app.include_router(bulk_orders_router)
app.include_router(discounts_router)
app.include_router(notifications_router)
app.include_router(settings_router)
app.include_router(reports_router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
