from pydantic import BaseModel, EmailStr, Field
from typing import List, Literal
from datetime import date, datetime

from models.hotel import Hotel, Room

BulkOrderStatus = Literal["Pending", "Confirmed", "Rejected"]


class BulkOrderItemRequest(BaseModel):
    hotel_id: int
    room_id: str
    quantity: int = 1
    check_in_date: date
    check_out_date: date


class BulkOrderItem(BaseModel):
    id: str
    hotel_id: int
    hotel_name: str
    room_id: str
    room_type: str
    quantity: int
    price_per_night: float
    subtotal: float
    hotel: Hotel
    room: Room
    check_in_date: date
    check_out_date: date
    assigned: int = 0


class BulkOrderCreate(BaseModel):
    items: List[BulkOrderItemRequest] = Field(min_length=1)


class BulkOrder(BaseModel):
    id: str
    agent_id: str
    agent_name: str
    items: List[BulkOrderItem]
    total_price: float
    status: BulkOrderStatus = "Pending"
    created_at: datetime


class BulkOrderStatusUpdate(BaseModel):
    status: BulkOrderStatus


class ItemAssignment(BaseModel):
    guest_name: str = Field(min_length=1)
    guest_email: EmailStr
    contact_number: str = Field(min_length=1)
    check_in_date: date
    check_out_date: date
    show_price_on_voucher: bool = True
