from datetime import date
from typing import List, Optional, Tuple

from database.connection import insert_with_next_id
from models.hotel import Hotel, HotelCreate, Room
from utils.exceptions import HotelNotFoundError, ValidationError
from utils.logging_utils import setup_logger

logger = setup_logger(__name__)

SORT_KEYS = {
    "price-asc": (lambda h: h.price_start, False),
    "price-desc": (lambda h: h.price_start, True),
    "distance-asc": (lambda h: h.distance_to_haram, False),
}


class HotelCatalog:
    """Hotel and room catalog backed by the `hotels` collection."""

    def __init__(self, db):
        self.collection = db["hotels"]

    async def list_hotels(self) -> List[Hotel]:
        docs = await self.collection.find({}, {"_id": 0}).sort("id", 1).to_list(length=None)
        return [Hotel(**doc) for doc in docs]

    async def find_hotel(self, hotel_id: int) -> Optional[Hotel]:
        doc = await self.collection.find_one({"id": hotel_id}, {"_id": 0})
        return Hotel(**doc) if doc else None

    async def get_hotel(self, hotel_id: int) -> Hotel:
        hotel = await self.find_hotel(hotel_id)
        if not hotel:
            raise HotelNotFoundError(f"Hotel {hotel_id} not found.")
        return hotel

    async def get_room(self, hotel_id: int, room_id: str) -> Tuple[Hotel, Room]:
        hotel = await self.get_hotel(hotel_id)
        room = hotel.get_room(room_id)
        if not room:
            raise HotelNotFoundError(f"Room {room_id} not found in {hotel.name}.")
        return hotel, room

    async def search(
        self,
        city: str,
        check_in: date,
        check_out: date,
        max_price: Optional[float] = None,
        max_distance: Optional[int] = None,
        stars: int = 0,
        sort_by: Optional[str] = None,
    ) -> List[Hotel]:
        """Hotels in ``city`` whose availability window covers the whole stay."""
        if check_in >= check_out:
            raise ValidationError("Check-out date must be after the check-in date.")
        if sort_by and sort_by not in SORT_KEYS:
            raise ValidationError(f"Unknown sort option '{sort_by}'.")

        results = [
            hotel for hotel in await self.list_hotels()
            if hotel.city == city and hotel.available_from <= check_in and check_out <= hotel.available_to
        ]
        if max_price is not None:
            results = [h for h in results if h.price_start <= max_price]
        if max_distance is not None:
            results = [h for h in results if h.distance_to_haram <= max_distance]
        if stars > 0:
            results = [h for h in results if round(h.rating) == stars]
        if sort_by:
            key, reverse = SORT_KEYS[sort_by]
            results.sort(key=key, reverse=reverse)
        return results

    async def add_hotel(self, hotel: HotelCreate) -> Hotel:
        doc = await insert_with_next_id(
            self.collection,
            lambda new_id: Hotel(id=new_id, **hotel.model_dump()).model_dump(mode="json"),
        )
        new_hotel = Hotel(**doc)
        logger.info("Added hotel %d (%s)", new_hotel.id, new_hotel.name)
        return new_hotel

    async def update_hotel(self, hotel_id: int, hotel: HotelCreate) -> Hotel:
        updated = Hotel(id=hotel_id, **hotel.model_dump())
        result = await self.collection.replace_one({"id": hotel_id}, updated.model_dump(mode="json"))
        if result.matched_count == 0:
            raise HotelNotFoundError(f"Hotel {hotel_id} not found.")
        logger.info("Updated hotel %d", hotel_id)
        return updated

    async def delete_hotel(self, hotel_id: int):
        result = await self.collection.delete_one({"id": hotel_id})
        if result.deleted_count == 0:
            raise HotelNotFoundError(f"Hotel {hotel_id} not found.")
        logger.info("Deleted hotel %d", hotel_id)
