# discounts/discounts.py

from fastapi import APIRouter, Depends, HTTPException, Request
from typing import List

from auth.dependencies import get_current_admin
from models.promo_code import PromoCode

router = APIRouter(prefix="/api/discounts", tags=["discounts"])


@router.get("/validate/{code}", response_model=PromoCode)
async def validate_promo_code(code: str, request: Request):
    """Look a promo code up, ignoring case."""
    promo = await request.app.promo_codes.find(code)
    if not promo:
        raise HTTPException(status_code=404, detail="Invalid promo code.")
    return promo


@router.get("/", response_model=List[PromoCode])
async def list_promo_codes(request: Request, admin: dict = Depends(get_current_admin)):
    return await request.app.promo_codes.list_codes()


@router.post("/", response_model=PromoCode, status_code=201)
async def add_promo_code(promo: PromoCode, request: Request, admin: dict = Depends(get_current_admin)):
    return await request.app.promo_codes.add(promo)


@router.delete("/{code}")
async def delete_promo_code(code: str, request: Request, admin: dict = Depends(get_current_admin)):
    await request.app.promo_codes.delete(code)
    return {"message": "Promo code deleted"}
