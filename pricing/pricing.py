"""
Booking pricing rules
=====================
Nightly totals, promo discounts, the lead-time fee schedule used for
cancellations and date changes, currency display and the admin financial
summary.

All prices are stored in PKR, the base currency. Conversion to SAR / USD
only happens for display.
"""

from datetime import date, datetime, time, timedelta, timezone
from typing import Dict, Iterable, Optional, Union

from utils.exceptions import ValidationError

DateLike = Union[date, str]

HOURS_PER_DAY = 24

# (minimum lead time in hours, fee percentage), checked top to bottom
FEE_SCHEDULE = [
    (5 * HOURS_PER_DAY, 10),
    (2 * HOURS_PER_DAY, 20),
    (1 * HOURS_PER_DAY, 30),
]
LATE_FEE_PERCENTAGE = 40

# Conversion rates relative to PKR
CONVERSION_RATES_FROM_PKR = {
    "PKR": 1.0,
    "SAR": 1 / 74.1,
    "USD": 1 / 278.4,
}
CURRENCY_PREFIX = {"PKR": "PKR ", "SAR": "SAR ", "USD": "$"}


def _as_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


# =====================================================
# NIGHTS / TOTALS
# =====================================================

def days_between(check_in: DateLike, check_out: DateLike) -> int:
    """Raw day difference; may be zero or negative."""
    return (_as_date(check_out) - _as_date(check_in)).days


def calculate_nights(check_in: DateLike, check_out: DateLike) -> int:
    """Billable nights: never less than one, even for same-day or inverted ranges."""
    return max(1, days_between(check_in, check_out))


def calculate_total(check_in: DateLike, check_out: DateLike, rate_per_night: float) -> float:
    return calculate_nights(check_in, check_out) * rate_per_night


# =====================================================
# PROMO CODES
# =====================================================

def apply_promo(base_price: float, promo) -> float:
    """
    Apply a promo code to a base price.

    ``promo`` is anything with ``discount`` and ``type`` attributes, or None.
    Percentage codes take ``discount`` percent off; fixed codes subtract
    ``discount`` and never go below zero.
    """
    if promo is None:
        return base_price
    if promo.type == "percentage":
        return max(0.0, base_price - base_price * promo.discount / 100)
    return max(0.0, base_price - promo.discount)


def promo_message(promo) -> str:
    if promo is None:
        return "Invalid promo code."
    if promo.type == "percentage":
        return f"Success! {promo.discount:g}% discount applied."
    return f"Success! {format_price(promo.discount)} discount applied."


# =====================================================
# CANCELLATION / DATE CHANGE FEES
# =====================================================

def lead_time_hours(check_in: DateLike, now: Optional[datetime] = None) -> float:
    """Hours from ``now`` until midnight UTC of the check-in date."""
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    check_in_at = datetime.combine(_as_date(check_in), time.min, tzinfo=timezone.utc)
    return (check_in_at - now).total_seconds() / 3600


def fee_percentage(check_in: DateLike, now: Optional[datetime] = None) -> int:
    hours = lead_time_hours(check_in, now)
    for min_hours, percentage in FEE_SCHEDULE:
        if hours >= min_hours:
            return percentage
    return LATE_FEE_PERCENTAGE


def cancellation_quote(total_price: float, check_in: DateLike, now: Optional[datetime] = None) -> Dict[str, float]:
    percentage = fee_percentage(check_in, now)
    fee = total_price * percentage / 100
    return {
        "fee_percentage": percentage,
        "fee": fee,
        "refund": total_price - fee,
    }


def date_change_quote(
    original_total: float,
    original_check_in: DateLike,
    original_check_out: DateLike,
    fallback_rate: float,
    new_check_in: DateLike,
    new_check_out: DateLike,
    now: Optional[datetime] = None,
) -> Dict[str, float]:
    """
    Price a date change.

    The nightly rate is re-derived from the original booking
    (``original_total / original_nights``), falling back to the room's listed
    customer rate when the original range has no nights. The fee is taken off
    the original total and added on top of the new subtotal.
    """
    new_nights = days_between(new_check_in, new_check_out)
    if new_nights <= 0:
        raise ValidationError("Check-out must be after check-in.")

    old_nights = days_between(original_check_in, original_check_out)
    rate = original_total / old_nights if old_nights > 0 else fallback_rate
    new_subtotal = new_nights * rate

    percentage = fee_percentage(original_check_in, now)
    fee = original_total * percentage / 100
    return {
        "nights": new_nights,
        "price_per_night": rate,
        "new_subtotal": new_subtotal,
        "fee_percentage": percentage,
        "fee": fee,
        "final_price": new_subtotal + fee,
    }


# =====================================================
# DISPLAY
# =====================================================

def convert_price(price_pkr: float, currency: str = "PKR") -> float:
    try:
        rate = CONVERSION_RATES_FROM_PKR[currency]
    except KeyError:
        raise ValidationError(f"Unsupported currency '{currency}'.")
    return price_pkr * rate


def format_price(price_pkr: float, currency: str = "PKR") -> str:
    """Converted price with no fractional digits, e.g. ``PKR 264,500`` or ``$950``."""
    converted = convert_price(price_pkr, currency)
    sign = "-" if converted < 0 else ""
    return f"{sign}{CURRENCY_PREFIX[currency]}{abs(converted):,.0f}"


# =====================================================
# FINANCIAL SUMMARY
# =====================================================

def period_start(period: str, today: Optional[date] = None) -> date:
    today = today or date.today()
    if period == "today":
        return today
    if period == "week":
        # weeks start on Sunday
        return today - timedelta(days=(today.weekday() + 1) % 7)
    if period == "month":
        return today.replace(day=1)
    if period == "year":
        return today.replace(month=1, day=1)
    raise ValidationError(f"Unknown period '{period}'.")


def financial_summary(bookings: Iterable, period: str = "month", today: Optional[date] = None) -> Dict[str, float]:
    """Sales, purchase cost and profit of confirmed bookings checking in within the period."""
    start = period_start(period, today)
    total_sales = 0.0
    total_cost = 0.0
    count = 0
    for booking in bookings:
        if booking.status != "Confirmed" or booking.check_in_date < start:
            continue
        nights = days_between(booking.check_in_date, booking.check_out_date)
        total_sales += booking.total_price
        total_cost += nights * booking.room.purchase_price_per_night
        count += 1
    return {
        "period": period,
        "since": start.isoformat(),
        "bookings": count,
        "total_sales": total_sales,
        "total_cost": total_cost,
        "total_profit": total_sales - total_cost,
    }
