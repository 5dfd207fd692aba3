from pydantic import BaseModel, EmailStr, Field
from typing import List, Literal, Optional
from datetime import date

from models.agency import AgentProfile
from models.hotel import Hotel, Room

BookingStatus = Literal[
    "Confirmed",
    "Pending",
    "Cancelled",
    "Cancellation Requested",
    "Date Change Requested",
]
BookingType = Literal["customer", "agent-assigned"]
PaymentMethod = Literal["Online", "Cash"]


class GuestDetails(BaseModel):
    guest_name: str = Field(min_length=1)
    guest_email: EmailStr
    contact_number: str = Field(min_length=1)


class BookingBase(GuestDetails):
    hotel: Hotel
    room: Room
    check_in_date: date
    check_out_date: date
    total_price: float
    payment_method: PaymentMethod = "Online"
    promo_code_applied: Optional[str] = None
    agent_details: Optional[AgentProfile] = None
    show_price_on_voucher: bool = True
    customer_id: Optional[str] = None


class Booking(BookingBase):
    id: str
    status: BookingStatus
    booking_type: BookingType = "customer"
    requested_check_in_date: Optional[date] = None
    requested_check_out_date: Optional[date] = None
    requested_total_price: Optional[float] = None


# --- Request payloads ---

class StayRequest(BaseModel):
    hotel_id: int
    room_id: str
    check_in_date: date
    check_out_date: date
    promo_code: Optional[str] = None


class CustomerBookingCreate(GuestDetails, StayRequest):
    payment_method: PaymentMethod = "Online"


class BookingQuote(BaseModel):
    nights: int
    price_per_night: float
    base_price: float
    total_price: float
    promo_code_applied: Optional[str] = None
    promo_message: Optional[str] = None
    display_total: str


class BookingStatusUpdate(BaseModel):
    status: BookingStatus


class BookingEdit(BaseModel):
    guest_name: Optional[str] = None
    guest_email: Optional[EmailStr] = None
    contact_number: Optional[str] = None
    check_in_date: Optional[date] = None
    check_out_date: Optional[date] = None
    total_price: Optional[float] = None


class BookingIds(BaseModel):
    ids: List[str]


class CancellationQuote(BaseModel):
    booking_id: str
    fee_percentage: int
    fee: float
    refund: float
    message: str


class CancellationRequest(BaseModel):
    accepted_fee: float


class DateChangeDates(BaseModel):
    check_in_date: date
    check_out_date: date


class DateChangeQuote(BaseModel):
    booking_id: str
    nights: int
    price_per_night: float
    new_subtotal: float
    fee_percentage: int
    fee: float
    final_price: float
    message: str


class DateChangeRequest(DateChangeDates):
    accepted_price: float
