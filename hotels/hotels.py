# hotels/hotels.py

from fastapi import APIRouter, Depends, Query, Request
from datetime import date
from typing import List, Optional

from auth.dependencies import get_current_admin
from models.hotel import City, Hotel, HotelCreate

router = APIRouter(prefix="/api/hotels", tags=["hotels"])


@router.get("/", response_model=List[Hotel])
async def list_hotels(request: Request):
    return await request.app.catalog.list_hotels()


@router.get("/search", response_model=List[Hotel])
async def search_hotels(
    request: Request,
    city: City,
    check_in: date,
    check_out: date,
    max_price: Optional[float] = None,
    max_distance: Optional[int] = None,
    stars: int = Query(0, ge=0, le=5),
    sort_by: Optional[str] = None,
):
    """Hotels in a city that are open for the whole stay, filtered and sorted."""
    return await request.app.catalog.search(city, check_in, check_out, max_price, max_distance, stars, sort_by)


@router.get("/{hotel_id}", response_model=Hotel)
async def get_hotel(hotel_id: int, request: Request):
    return await request.app.catalog.get_hotel(hotel_id)


@router.post("/", response_model=Hotel, status_code=201)
async def add_hotel(hotel: HotelCreate, request: Request, admin: dict = Depends(get_current_admin)):
    return await request.app.catalog.add_hotel(hotel)


@router.put("/{hotel_id}", response_model=Hotel)
async def update_hotel(hotel_id: int, hotel: HotelCreate, request: Request, admin: dict = Depends(get_current_admin)):
    return await request.app.catalog.update_hotel(hotel_id, hotel)


@router.delete("/{hotel_id}")
async def delete_hotel(hotel_id: int, request: Request, admin: dict = Depends(get_current_admin)):
    await request.app.catalog.delete_hotel(hotel_id)
    return {"message": "Hotel deleted successfully"}
