# bookings/bookings.py

from fastapi import APIRouter, Depends, Request
from typing import List, Optional

from auth.dependencies import get_current_admin, get_current_customer, get_optional_customer
from models.booking import (
    Booking,
    BookingEdit,
    BookingIds,
    BookingQuote,
    BookingStatusUpdate,
    CancellationQuote,
    CancellationRequest,
    CustomerBookingCreate,
    DateChangeDates,
    DateChangeQuote,
    DateChangeRequest,
    StayRequest,
)

router = APIRouter(prefix="/api/bookings", tags=["bookings"])


# --- Customer Endpoints ---

@router.post("/quote", response_model=BookingQuote)
async def quote_booking(stay: StayRequest, request: Request):
    """Price a stay before booking. An unknown promo code is reported in `promo_message`."""
    return await request.app.bookings.quote_stay(
        stay.hotel_id, stay.room_id, stay.check_in_date, stay.check_out_date, stay.promo_code
    )


@router.post("/", response_model=Booking, status_code=201)
async def create_booking(
    booking: CustomerBookingCreate,
    request: Request,
    customer: Optional[dict] = Depends(get_optional_customer),
):
    customer_id = str(customer["id"]) if customer else None
    return await request.app.bookings.create_customer_booking(booking, customer_id)


@router.get("/my-bookings", response_model=List[Booking])
async def get_my_bookings(request: Request, customer: dict = Depends(get_current_customer)):
    return request.app.bookings.bookings_for_customer(str(customer["id"]), customer.get("email"))


@router.get("/track/{booking_id}", response_model=Booking)
async def track_booking(booking_id: str, request: Request):
    return request.app.bookings.find_booking(booking_id)


@router.get("/{booking_id}/cancellation-quote", response_model=CancellationQuote)
async def get_cancellation_quote(booking_id: str, request: Request):
    service = request.app.bookings
    booking = service.find_booking(booking_id)
    return CancellationQuote(booking_id=booking.id, **service.cancellation_quote(booking))


@router.post("/{booking_id}/request-cancellation", response_model=Booking)
async def request_cancellation(booking_id: str, body: CancellationRequest, request: Request):
    """Ask for a cancellation after accepting the quoted fee."""
    return await request.app.bookings.request_cancellation(booking_id, body.accepted_fee)


@router.post("/{booking_id}/date-change-quote", response_model=DateChangeQuote)
async def get_date_change_quote(booking_id: str, dates: DateChangeDates, request: Request):
    service = request.app.bookings
    booking = service.find_booking(booking_id)
    quote = service.date_change_quote(booking, dates.check_in_date, dates.check_out_date)
    return DateChangeQuote(booking_id=booking.id, **quote)


@router.post("/{booking_id}/request-date-change", response_model=Booking)
async def request_date_change(booking_id: str, body: DateChangeRequest, request: Request):
    return await request.app.bookings.request_date_change(
        booking_id, body.check_in_date, body.check_out_date, body.accepted_price
    )


# --- Admin Endpoints ---

@router.get("/", response_model=List[Booking])
async def list_bookings(request: Request, agency_id: Optional[str] = None, admin: dict = Depends(get_current_admin)):
    return request.app.bookings.list_bookings(agency_id)


@router.get("/requests", response_model=List[Booking])
async def list_change_requests(request: Request, admin: dict = Depends(get_current_admin)):
    return request.app.bookings.change_requests()


@router.patch("/{booking_id}/status", response_model=Booking)
async def update_booking_status(
    booking_id: str,
    body: BookingStatusUpdate,
    request: Request,
    admin: dict = Depends(get_current_admin),
):
    return await request.app.bookings.update_booking_status(booking_id, body.status)


@router.put("/{booking_id}", response_model=Booking)
async def update_booking(booking_id: str, changes: BookingEdit, request: Request, admin: dict = Depends(get_current_admin)):
    return await request.app.bookings.update_booking(booking_id, changes.model_dump(exclude_unset=True))


@router.post("/delete")
async def delete_bookings(body: BookingIds, request: Request, admin: dict = Depends(get_current_admin)):
    deleted = await request.app.bookings.delete_bookings(body.ids)
    return {"deleted": deleted}


@router.post("/{booking_id}/approve", response_model=Booking)
async def approve_request(booking_id: str, request: Request, admin: dict = Depends(get_current_admin)):
    return await request.app.bookings.approve_change_request(booking_id)


@router.post("/{booking_id}/reject", response_model=Booking)
async def reject_request(booking_id: str, request: Request, admin: dict = Depends(get_current_admin)):
    return await request.app.bookings.reject_change_request(booking_id)
