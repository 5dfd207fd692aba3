from pydantic import BaseModel, Field
from typing import List, Literal, Optional
from datetime import date

RoomType = Literal["Single", "Double", "Suite", "Quad"]
City = Literal["Makkah", "Madina"]


class Room(BaseModel):
    id: str
    type: RoomType
    purchase_price_per_night: float  # price paid to the hotel
    agent_price_per_night: float
    customer_price_per_night: float
    available: bool = True


class HotelBase(BaseModel):
    name: str
    city: City
    address: str
    available_from: date
    available_to: date
    distance_to_haram: int  # meters
    rating: float = Field(ge=1, le=5)
    price_start: float
    image_url: Optional[str] = None
    description: str = ""
    amenities: List[str] = []
    rooms: List[Room] = []


class HotelCreate(HotelBase):
    pass


class Hotel(HotelBase):
    id: int

    def get_room(self, room_id: str) -> Optional[Room]:
        return next((room for room in self.rooms if room.id == room_id), None)
