from fastapi import APIRouter, Depends, Query, Request

from auth.dependencies import get_current_admin
from pricing.pricing import financial_summary

router = APIRouter(prefix="/api/reports", tags=["reports"])


@router.get("/financials")
async def get_financials(
    request: Request,
    period: str = Query("month", pattern="^(today|week|month|year)$"),
    admin: dict = Depends(get_current_admin),
):
    """Sales, cost and profit over confirmed bookings checking in since the start of the period."""
    return financial_summary(request.app.bookings.bookings, period)
