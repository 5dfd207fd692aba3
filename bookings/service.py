"""
Booking lifecycle.

``BookingService`` keeps the process-wide list of bookings and mirrors every
change to the remote booking API. Changes are applied to the local list first
and rolled back to the previous value if the remote call fails; the error is
then re-raised for the caller to report.

Status transitions::

    Pending                -> Confirmed | Cancelled
    Confirmed              -> Cancellation Requested | Date Change Requested
    Cancellation Requested -> Confirmed (reject) | Cancelled (approve)
    Date Change Requested  -> Confirmed (approve or reject)
"""

import math
import random
from datetime import date, datetime
from typing import Awaitable, Callable, Dict, List, Optional

from bookings.gateway import BookingApiClient
from database import seed_data
from discounts.promo_codes import PromoCodeRepository
from hotels.catalog import HotelCatalog
from models.booking import Booking, BookingBase, BookingQuote, CustomerBookingCreate
from models.hotel import Hotel
from notifications.notifier import Notifier
from pricing.pricing import (
    apply_promo,
    calculate_nights,
    cancellation_quote,
    date_change_quote,
    format_price,
    promo_message,
)
from utils.exceptions import (
    BookingConfirmationError,
    BookingNotFoundError,
    BookingSyncError,
    ConflictError,
    InvalidStatusTransitionError,
    QuoteMismatchError,
    RemoteApiError,
    ValidationError,
)
from utils.logging_utils import setup_logger

logger = setup_logger(__name__)

ALLOWED_TRANSITIONS = {
    "Pending": {"Confirmed", "Cancelled"},
    "Confirmed": {"Cancellation Requested", "Date Change Requested"},
    "Cancellation Requested": {"Confirmed", "Cancelled"},
    "Date Change Requested": {"Confirmed"},
    "Cancelled": set(),
}
REQUESTED_STATUSES = ("Cancellation Requested", "Date Change Requested")
GUEST_FIELDS = ("guest_name", "guest_email", "contact_number")
CLEARED_REQUEST = {
    "requested_check_in_date": None,
    "requested_check_out_date": None,
    "requested_total_price": None,
}


def booking_to_row(booking: Booking) -> dict:
    """Serialize a booking for the remote API (keeps the denormalized hotel/room)."""
    row = booking.model_dump(mode="json")
    row["hotel_id"] = booking.hotel.id
    row["room_id"] = booking.room.id
    return row


def row_to_booking(row: dict, hotels: Dict[int, Hotel]) -> Optional[Booking]:
    """
    Build a booking from a remote row.

    Rows that carry no hotel/room copy are mapped through the catalog; rows
    whose hotel or room is unknown are skipped.
    """
    data = {key: value for key, value in row.items() if value is not None}
    hotel_id = data.pop("hotel_id", None)
    room_id = data.pop("room_id", None)
    if "hotel" not in data or "room" not in data:
        hotel = hotels.get(int(hotel_id)) if hotel_id is not None else None
        room = hotel.get_room(str(room_id)) if hotel else None
        if not hotel or not room:
            logger.warning("Skipping booking %s: hotel %s / room %s not in catalog", data.get("id"), hotel_id, room_id)
            return None
        data["hotel"] = hotel
        data["room"] = room
    return Booking(**data)


def _same_amount(a: float, b: float) -> bool:
    return math.isclose(a, b, rel_tol=1e-9, abs_tol=0.01)


class BookingService:
    def __init__(self, api: BookingApiClient, catalog: HotelCatalog, promo_codes: PromoCodeRepository,
                 notifier: Notifier):
        self.api = api
        self.catalog = catalog
        self.promo_codes = promo_codes
        self.notifier = notifier
        self.bookings: List[Booking] = []

    async def load(self):
        """Fetch the bookings from the remote API, falling back to the bundled seed bookings."""
        try:
            rows = await self.api.list_bookings()
        except RemoteApiError:
            logger.warning("Booking API unavailable at startup, using seed bookings")
            rows = seed_data.BOOKINGS
        hotels = {hotel.id: hotel for hotel in await self.catalog.list_hotels()}
        loaded = (row_to_booking(row, hotels) for row in rows)
        self.bookings = [booking for booking in loaded if booking]
        logger.info("Loaded %d booking(s)", len(self.bookings))

    # --- Queries ---

    def get_booking(self, booking_id: str) -> Booking:
        for booking in self.bookings:
            if booking.id == booking_id:
                return booking
        raise BookingNotFoundError()

    def find_booking(self, booking_id: str) -> Booking:
        """Lookup used by guests typing a booking reference: trimmed and case-insensitive."""
        wanted = booking_id.strip().upper()
        for booking in self.bookings:
            if booking.id.upper() == wanted:
                return booking
        raise BookingNotFoundError()

    def list_bookings(self, agency_id: Optional[str] = None) -> List[Booking]:
        """Admin view. Agent-assigned bookings only appear when filtering by agency."""
        if agency_id:
            return self.bookings_for_agency(agency_id)
        return [b for b in self.bookings if b.booking_type != "agent-assigned"]

    def bookings_for_agency(self, agency_id: str) -> List[Booking]:
        return [b for b in self.bookings if b.agent_details and b.agent_details.agency_id == agency_id]

    def bookings_for_customer(self, customer_id: str, email: Optional[str] = None) -> List[Booking]:
        email = email.lower() if email else None
        return [
            b for b in self.bookings
            if b.customer_id == customer_id or (email and str(b.guest_email).lower() == email)
        ]

    def change_requests(self) -> List[Booking]:
        return [b for b in self.bookings if b.status in REQUESTED_STATUSES]

    # --- Pricing ---

    async def quote_stay(self, hotel_id: int, room_id: str, check_in: date, check_out: date,
                         promo_code: Optional[str] = None) -> BookingQuote:
        """Customer price for a stay, re-derived from scratch so earlier promos never carry over."""
        _, room = await self.catalog.get_room(hotel_id, room_id)
        nights = calculate_nights(check_in, check_out)
        base_price = nights * room.customer_price_per_night

        promo = await self.promo_codes.find(promo_code) if promo_code else None
        total = apply_promo(base_price, promo)
        return BookingQuote(
            nights=nights,
            price_per_night=room.customer_price_per_night,
            base_price=base_price,
            total_price=total,
            promo_code_applied=promo.code if promo else None,
            promo_message=promo_message(promo) if promo_code else None,
            display_total=format_price(total),
        )

    def cancellation_quote(self, booking: Booking, now: Optional[datetime] = None) -> dict:
        quote = cancellation_quote(booking.total_price, booking.check_in_date, now)
        quote["message"] = (
            f"A cancellation fee of {quote['fee_percentage']}% ({format_price(quote['fee'])}) will apply. "
            f"Estimated refund: {format_price(quote['refund'])}."
        )
        return quote

    def date_change_quote(self, booking: Booking, new_check_in: date, new_check_out: date,
                          now: Optional[datetime] = None) -> dict:
        quote = date_change_quote(
            booking.total_price,
            booking.check_in_date,
            booking.check_out_date,
            booking.room.customer_price_per_night,
            new_check_in,
            new_check_out,
            now,
        )
        quote["message"] = (
            f"Date change fee of {quote['fee_percentage']}% ({format_price(quote['fee'])}) applies. "
            f"New estimated total: {format_price(quote['final_price'])}."
        )
        return quote

    # --- Creation ---

    def _new_booking_id(self) -> str:
        existing = {b.id for b in self.bookings}
        while True:
            booking_id = f"BK{random.randint(10000, 99999)}"
            if booking_id not in existing:
                return booking_id

    async def create_customer_booking(self, request: CustomerBookingCreate,
                                      customer_id: Optional[str] = None) -> Booking:
        if request.check_out_date <= request.check_in_date:
            raise ValidationError("Check-out date must be after check-in date.")
        hotel, room = await self.catalog.get_room(request.hotel_id, request.room_id)
        if not room.available:
            raise ValidationError(f"The {room.type} room at {hotel.name} is sold out.")

        quote = await self.quote_stay(hotel.id, room.id, request.check_in_date, request.check_out_date,
                                      request.promo_code)
        if request.promo_code and not quote.promo_code_applied:
            raise ValidationError("Invalid promo code.")

        data = BookingBase(
            hotel=hotel,
            room=room,
            guest_name=request.guest_name,
            guest_email=request.guest_email,
            contact_number=request.contact_number,
            check_in_date=request.check_in_date,
            check_out_date=request.check_out_date,
            total_price=quote.total_price,
            payment_method=request.payment_method,
            promo_code_applied=quote.promo_code_applied,
            customer_id=customer_id,
        )
        return await self.add_booking(data, "customer")

    async def add_booking(self, data: BookingBase, booking_type: str = "customer") -> Booking:
        """
        Create a booking remotely as Pending.

        Agent-assigned bookings are confirmed by a second call right away. If
        that second call fails the booking stays Pending and
        ``BookingConfirmationError`` is raised; nothing is undone.
        """
        if data.check_out_date <= data.check_in_date:
            raise ValidationError("Check-out date must be after check-in date.")

        booking = Booking(
            **data.model_dump(),
            id=self._new_booking_id(),
            status="Pending",
            booking_type=booking_type,
        )
        await self.api.create_booking(booking_to_row(booking))
        self.bookings.insert(0, booking)
        logger.info("Created %s booking %s for %s", booking_type, booking.id, booking.guest_email)

        if booking_type == "agent-assigned":
            try:
                booking = await self.update_booking_status(booking.id, "Confirmed")
            except RemoteApiError as e:
                logger.error("Booking %s was created but could not be confirmed; it remains Pending", booking.id)
                raise BookingConfirmationError(
                    booking.id,
                    f"Booking {booking.id} was created but could not be confirmed. Please retry the confirmation.",
                ) from e
        return booking

    # --- Mutations ---

    async def _apply(self, updated: Booking, send: Callable[[], Awaitable]) -> Booking:
        """Replace a booking locally, push it remotely, and restore the previous value on failure."""
        previous = self.get_booking(updated.id)
        self._replace(updated)
        try:
            await send()
        except RemoteApiError as e:
            self._replace(previous)
            logger.warning("Rolled back booking %s after remote failure: %s", updated.id, e.message)
            raise BookingSyncError(e.message) from e
        except Exception:
            self._replace(previous)
            logger.exception("Rolled back booking %s", updated.id)
            raise
        return updated

    def _replace(self, booking: Booking):
        self.bookings = [booking if b.id == booking.id else b for b in self.bookings]

    async def _notify(self, booking: Booking):
        await self.notifier.notify_booking_status(booking)

    async def update_booking_status(self, booking_id: str, status: str) -> Booking:
        current = self.get_booking(booking_id)
        if status == current.status:
            return current
        if status not in ALLOWED_TRANSITIONS.get(current.status, set()):
            raise InvalidStatusTransitionError(current.status, status)

        updated = current.model_copy(update={"status": status})
        updated = await self._apply(updated, lambda: self.api.update_booking_status(booking_id, status))
        logger.info("Booking %s: %s -> %s", booking_id, current.status, status)
        await self._notify(updated)
        return updated

    async def update_booking(self, booking_id: str, changes: dict) -> Booking:
        """Admin edit. Once a booking is confirmed only the guest details may change."""
        current = self.get_booking(booking_id)
        changes = {key: value for key, value in changes.items() if value is not None}
        if current.status == "Confirmed":
            locked = set(changes) - set(GUEST_FIELDS)
            if locked:
                raise ValidationError("This booking is confirmed. Only guest details can be edited.")

        updated = current.model_copy(update=changes)
        if updated.check_out_date <= updated.check_in_date:
            raise ValidationError("Check-out date must be after check-in date.")
        updated = await self._apply(updated, lambda: self.api.update_booking(booking_to_row(updated)))
        logger.info("Booking %s edited: %s", booking_id, ", ".join(sorted(changes)))
        return updated

    async def delete_bookings(self, booking_ids: List[str]) -> List[str]:
        deleted = []
        for booking_id in booking_ids:
            booking = self.get_booking(booking_id)
            position = self.bookings.index(booking)
            self.bookings.remove(booking)
            try:
                await self.api.delete_booking(booking_id)
            except RemoteApiError as e:
                self.bookings.insert(position, booking)
                logger.warning("Could not delete booking %s, restored: %s", booking_id, e.message)
                raise BookingSyncError(e.message) from e
            deleted.append(booking_id)
            logger.info("Deleted booking %s", booking_id)
        return deleted

    # --- Customer self-service requests ---

    def _require_confirmed(self, booking: Booking, requested: str):
        if booking.status != "Confirmed":
            raise InvalidStatusTransitionError(booking.status, requested)

    async def request_cancellation(self, booking_id: str, accepted_fee: float,
                                   now: Optional[datetime] = None) -> Booking:
        booking = self.find_booking(booking_id)
        self._require_confirmed(booking, "Cancellation Requested")
        quote = self.cancellation_quote(booking, now)
        if not _same_amount(accepted_fee, quote["fee"]):
            raise QuoteMismatchError(
                f"The cancellation fee is now {format_price(quote['fee'])}. Please review and confirm again."
            )
        return await self.update_booking_status(booking.id, "Cancellation Requested")

    async def request_date_change(self, booking_id: str, new_check_in: date, new_check_out: date,
                                  accepted_price: float, now: Optional[datetime] = None) -> Booking:
        """Store the proposed dates and price beside the confirmed ones until an admin decides."""
        booking = self.find_booking(booking_id)
        self._require_confirmed(booking, "Date Change Requested")
        quote = self.date_change_quote(booking, new_check_in, new_check_out, now)
        if not _same_amount(accepted_price, quote["final_price"]):
            raise QuoteMismatchError(
                f"The new total is now {format_price(quote['final_price'])}. Please review and confirm again."
            )

        updated = booking.model_copy(update={
            "status": "Date Change Requested",
            "requested_check_in_date": new_check_in,
            "requested_check_out_date": new_check_out,
            "requested_total_price": quote["final_price"],
        })
        updated = await self._apply(updated, lambda: self.api.update_booking(booking_to_row(updated)))
        logger.info("Booking %s: date change requested (%s to %s)", booking.id, new_check_in, new_check_out)
        return updated

    # --- Admin decisions ---

    def _require_request(self, booking: Booking):
        if booking.status not in REQUESTED_STATUSES:
            raise ConflictError(f"Booking {booking.id} has no pending change request.")

    async def approve_change_request(self, booking_id: str) -> Booking:
        booking = self.get_booking(booking_id)
        self._require_request(booking)

        if booking.status == "Cancellation Requested":
            return await self.update_booking_status(booking_id, "Cancelled")

        if not booking.requested_check_in_date or not booking.requested_check_out_date:
            raise ValidationError(f"Booking {booking_id} has no requested dates to apply.")
        updated = booking.model_copy(update={
            "status": "Confirmed",
            "check_in_date": booking.requested_check_in_date,
            "check_out_date": booking.requested_check_out_date,
            "total_price": booking.requested_total_price
            if booking.requested_total_price is not None else booking.total_price,
            **CLEARED_REQUEST,
        })
        updated = await self._apply(updated, lambda: self.api.update_booking(booking_to_row(updated)))
        logger.info("Booking %s: date change approved", booking_id)
        await self._notify(updated)
        return updated

    async def reject_change_request(self, booking_id: str) -> Booking:
        """Discard the request; the confirmed dates and price were never touched."""
        booking = self.get_booking(booking_id)
        self._require_request(booking)

        updated = booking.model_copy(update={"status": "Confirmed", **CLEARED_REQUEST})
        updated = await self._apply(updated, lambda: self.api.update_booking(booking_to_row(updated)))
        logger.info("Booking %s: %s rejected", booking_id, booking.status.lower())
        await self._notify(updated)
        return updated
