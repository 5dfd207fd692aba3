from datetime import date, datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from models.promo_code import PromoCode
from pricing.pricing import (
    apply_promo,
    calculate_nights,
    cancellation_quote,
    date_change_quote,
    fee_percentage,
    financial_summary,
    format_price,
    period_start,
    promo_message,
)
from utils.exceptions import ValidationError

CHECK_IN = date(2026, 12, 10)
MIDNIGHT = datetime(2026, 12, 10, tzinfo=timezone.utc)


def hours_before_check_in(hours):
    return MIDNIGHT - timedelta(hours=hours)


class TestNights:

    def test_counts_days_between_dates(self):
        assert calculate_nights(date(2026, 8, 10), date(2026, 8, 15)) == 5

    def test_same_day_and_inverted_ranges_bill_one_night(self):
        assert calculate_nights(date(2026, 8, 10), date(2026, 8, 10)) == 1
        assert calculate_nights(date(2026, 8, 15), date(2026, 8, 10)) == 1

    def test_accepts_iso_strings(self):
        assert calculate_nights("2026-08-10", "2026-08-12") == 2


class TestPromo:

    def test_percentage_discount(self):
        promo = PromoCode(code="UMRAH2024", discount=10, type="percentage")
        assert apply_promo(1000, promo) == 900

    def test_fixed_discount_never_goes_negative(self):
        promo = PromoCode(code="SAVE100", discount=100, type="fixed")
        assert apply_promo(1000, promo) == 900
        assert apply_promo(50, promo) == 0

    def test_no_promo_keeps_base_price(self):
        assert apply_promo(1000, None) == 1000
        assert promo_message(None) == "Invalid promo code."

    def test_success_messages(self):
        assert promo_message(PromoCode(code="A", discount=10, type="percentage")) == "Success! 10% discount applied."
        assert promo_message(PromoCode(code="B", discount=100, type="fixed")) == "Success! PKR 100 discount applied."


class TestFeeSchedule:

    @pytest.mark.parametrize("hours, expected", [
        (200, 10),
        (120, 10),
        (119, 20),
        (48, 20),
        (47.5, 30),
        (24, 30),
        (23, 40),
        (-5, 40),
    ])
    def test_breakpoints(self, hours, expected):
        assert fee_percentage(CHECK_IN, hours_before_check_in(hours)) == expected

    def test_naive_now_is_treated_as_utc(self):
        naive = hours_before_check_in(130).replace(tzinfo=None)
        assert fee_percentage(CHECK_IN, naive) == 10

    def test_cancellation_refund(self):
        quote = cancellation_quote(100000, CHECK_IN, hours_before_check_in(30))
        assert quote == {"fee_percentage": 30, "fee": 30000, "refund": 70000}


class TestDateChange:

    def test_rate_comes_from_original_booking(self):
        # 4 nights for 1000 -> 250/night; 3 new nights plus a 10% fee on the original total
        quote = date_change_quote(
            1000, CHECK_IN, CHECK_IN + timedelta(days=4), 999,
            date(2026, 12, 20), date(2026, 12, 23),
            hours_before_check_in(150),
        )
        assert quote["nights"] == 3
        assert quote["price_per_night"] == 250
        assert quote["new_subtotal"] == 750
        assert quote["fee"] == 100
        assert quote["final_price"] == 850

    def test_falls_back_to_listed_rate_without_original_nights(self):
        quote = date_change_quote(
            1000, CHECK_IN, CHECK_IN, 300,
            date(2026, 12, 20), date(2026, 12, 22),
            hours_before_check_in(10),
        )
        assert quote["price_per_night"] == 300
        assert quote["final_price"] == 600 + 400

    def test_rejects_empty_new_range(self):
        with pytest.raises(ValidationError, match="Check-out must be after check-in."):
            date_change_quote(1000, CHECK_IN, CHECK_IN + timedelta(days=2), 500,
                              date(2026, 12, 20), date(2026, 12, 20))


class TestDisplay:

    def test_format_price(self):
        assert format_price(264500) == "PKR 264,500"
        assert format_price(278400, "USD") == "$1,000"
        assert format_price(741000, "SAR") == "SAR 10,000"

    def test_unknown_currency(self):
        with pytest.raises(ValidationError):
            format_price(100, "EUR")


class TestFinancialSummary:

    def booking(self, status, check_in, nights, total, purchase_rate):
        return SimpleNamespace(
            status=status,
            check_in_date=check_in,
            check_out_date=check_in + timedelta(days=nights),
            total_price=total,
            room=SimpleNamespace(purchase_price_per_night=purchase_rate),
        )

    def test_week_starts_on_sunday(self):
        # 2026-10-19 is a Monday
        assert period_start("week", date(2026, 10, 19)) == date(2026, 10, 18)
        assert period_start("week", date(2026, 10, 18)) == date(2026, 10, 18)

    def test_month_and_year(self):
        assert period_start("month", date(2026, 10, 19)) == date(2026, 10, 1)
        assert period_start("year", date(2026, 10, 19)) == date(2026, 1, 1)

    def test_only_confirmed_bookings_in_period_count(self):
        today = date(2026, 10, 19)
        bookings = [
            self.booking("Confirmed", date(2026, 10, 20), 2, 500, 200),
            self.booking("Pending", date(2026, 10, 20), 2, 500, 200),
            self.booking("Confirmed", date(2026, 9, 30), 2, 500, 200),
        ]
        summary = financial_summary(bookings, "month", today)
        assert summary["bookings"] == 1
        assert summary["total_sales"] == 500
        assert summary["total_cost"] == 400
        assert summary["total_profit"] == 100

    def test_unknown_period(self):
        with pytest.raises(ValidationError):
            period_start("decade")
