from datetime import date, datetime, timezone

import pytest

from models.booking import BookingBase, CustomerBookingCreate
from utils.exceptions import (
    BookingConfirmationError,
    BookingNotFoundError,
    BookingSyncError,
    ConflictError,
    InvalidStatusTransitionError,
    QuoteMismatchError,
    RemoteApiError,
    ValidationError,
)

# 216 hours before BK12345 checks in on 2026-08-10
EARLY = datetime(2026, 8, 1, tzinfo=timezone.utc)


def customer_request(**overrides):
    data = {
        "hotel_id": 1,
        "room_id": "1-1",
        "check_in_date": date(2026, 12, 1),
        "check_out_date": date(2026, 12, 4),
        "guest_name": "Bilal Ahmed",
        "guest_email": "bilal@example.com",
        "contact_number": "+92 300 7654321",
    }
    data.update(overrides)
    return CustomerBookingCreate(**data)


async def sent_emails(db):
    return await db["notifications"].find({}, {"_id": 0}).to_list(length=None)


class TestLoading:

    @pytest.mark.asyncio
    async def test_loads_remote_bookings(self, services):
        ids = {b.id for b in services["bookings"].bookings}
        assert ids == {"BK12345", "BK12346", "BK12347", "BK12348"}
        booking = services["bookings"].get_booking("BK12345")
        assert booking.hotel.id == 1 and booking.room.id == "1-1"

    @pytest.mark.asyncio
    async def test_falls_back_to_seed_bookings(self, services, fake_api):
        fake_api.fail("bookings", "GET")
        service = services["bookings"]
        service.bookings = []
        await service.load()
        assert len(service.bookings) == 4

    @pytest.mark.asyncio
    async def test_lookup_ignores_case_and_whitespace(self, services):
        assert services["bookings"].find_booking("  bk12346 ").id == "BK12346"
        with pytest.raises(BookingNotFoundError, match="Booking ID not found"):
            services["bookings"].find_booking("BK00000")

    @pytest.mark.asyncio
    async def test_admin_list_hides_agent_assigned_bookings(self, services):
        service = services["bookings"]
        assert {b.id for b in service.list_bookings()} == {"BK12345", "BK12346"}
        assert [b.id for b in service.list_bookings("AHT-001")] == ["BK12347"]


class TestCustomerBooking:

    @pytest.mark.asyncio
    async def test_new_booking_is_pending_and_synced(self, services, fake_api):
        booking = await services["bookings"].create_customer_booking(
            customer_request(promo_code="umrah2024"), customer_id="7"
        )
        assert booking.status == "Pending"
        assert booking.total_price == pytest.approx(3 * 264500 * 0.9)
        assert booking.promo_code_applied == "UMRAH2024"
        assert booking.customer_id == "7"
        assert services["bookings"].bookings[0].id == booking.id
        assert fake_api.rows[booking.id]["hotel_id"] == 1

    @pytest.mark.asyncio
    async def test_invalid_promo_code_is_rejected(self, services, fake_api):
        with pytest.raises(ValidationError, match="Invalid promo code."):
            await services["bookings"].create_customer_booking(customer_request(promo_code="NOPE"))
        assert len(fake_api.rows) == 4

    @pytest.mark.asyncio
    async def test_sold_out_room_is_rejected(self, services):
        with pytest.raises(ValidationError, match="sold out"):
            await services["bookings"].create_customer_booking(customer_request(room_id="1-3"))

    @pytest.mark.asyncio
    async def test_quote_reports_unknown_promo(self, services):
        quote = await services["bookings"].quote_stay(1, "1-1", date(2026, 12, 1), date(2026, 12, 4), "NOPE")
        assert quote.total_price == 3 * 264500
        assert quote.promo_code_applied is None
        assert quote.promo_message == "Invalid promo code."

    @pytest.mark.asyncio
    async def test_failed_create_adds_nothing(self, services, fake_api):
        fake_api.fail("bookings", "POST")
        with pytest.raises(RemoteApiError):
            await services["bookings"].create_customer_booking(customer_request())
        assert len(services["bookings"].bookings) == 4


class TestStatusChanges:

    @pytest.mark.asyncio
    async def test_confirm_sends_voucher_email(self, services, fake_api):
        booking = await services["bookings"].update_booking_status("BK12347", "Confirmed")
        assert booking.status == "Confirmed"
        assert fake_api.rows["BK12347"]["status"] == "Confirmed"

        emails = await sent_emails(services["db"])
        assert len(emails) == 1
        assert emails[0]["to"] == "yusuf.ali@example.com"
        assert emails[0]["attachment_url"] == "/voucher/BK12347"

    @pytest.mark.asyncio
    async def test_remote_failure_rolls_back(self, services, fake_api):
        fake_api.fail("update_booking_status", "POST")
        with pytest.raises(BookingSyncError, match="Database error"):
            await services["bookings"].update_booking_status("BK12347", "Confirmed")

        assert services["bookings"].get_booking("BK12347").status == "Pending"
        assert await sent_emails(services["db"]) == []

    @pytest.mark.asyncio
    async def test_disallowed_transition(self, services, fake_api):
        with pytest.raises(InvalidStatusTransitionError):
            await services["bookings"].update_booking_status("BK12345", "Pending")
        assert ("POST", "update_booking_status") not in fake_api.calls

    @pytest.mark.asyncio
    async def test_same_status_is_a_no_op(self, services, fake_api):
        booking = await services["bookings"].update_booking_status("BK12345", "Confirmed")
        assert booking.status == "Confirmed"
        assert ("POST", "update_booking_status") not in fake_api.calls

    @pytest.mark.asyncio
    async def test_confirmed_booking_only_allows_guest_edits(self, services):
        service = services["bookings"]
        edited = await service.update_booking("BK12345", {"guest_name": "Ahmad R. Khan"})
        assert edited.guest_name == "Ahmad R. Khan"
        with pytest.raises(ValidationError):
            await service.update_booking("BK12345", {"total_price": 1})

    @pytest.mark.asyncio
    async def test_delete_failure_restores_booking(self, services, fake_api):
        fake_api.fail("bookings", "DELETE")
        service = services["bookings"]
        before = [b.id for b in service.bookings]
        with pytest.raises(BookingSyncError):
            await service.delete_bookings(["BK12346"])
        assert [b.id for b in service.bookings] == before


class TestAgentAssigned:

    async def agent_booking(self, services):
        _, room = await services["catalog"].get_room(2, "2-1")
        agent = await services["agencies"].get_agency("AHT-001")
        return BookingBase(
            hotel=await services["catalog"].get_hotel(2),
            room=room,
            guest_name="Maryam Siddiqui",
            guest_email="maryam@example.com",
            contact_number="+92 333 1112223",
            check_in_date=date(2026, 12, 1),
            check_out_date=date(2026, 12, 3),
            total_price=2 * room.agent_price_per_night,
            agent_details=agent.profile,
        )

    @pytest.mark.asyncio
    async def test_created_then_confirmed(self, services, fake_api):
        booking = await services["bookings"].add_booking(await self.agent_booking(services), "agent-assigned")
        assert booking.status == "Confirmed"
        assert fake_api.calls[-2:] == [("POST", "bookings"), ("POST", "update_booking_status")]

    @pytest.mark.asyncio
    async def test_confirm_failure_leaves_booking_pending(self, services, fake_api):
        fake_api.fail("update_booking_status", "POST")
        with pytest.raises(BookingConfirmationError) as excinfo:
            await services["bookings"].add_booking(await self.agent_booking(services), "agent-assigned")

        booking_id = excinfo.value.booking_id
        assert services["bookings"].get_booking(booking_id).status == "Pending"
        assert fake_api.rows[booking_id]["status"] == "Pending"


class TestChangeRequests:

    @pytest.mark.asyncio
    async def test_cancellation_request_and_approval(self, services):
        service = services["bookings"]
        quote = service.cancellation_quote(service.get_booking("BK12345"), EARLY)
        assert quote["fee_percentage"] == 10

        requested = await service.request_cancellation("BK12345", quote["fee"], EARLY)
        assert requested.status == "Cancellation Requested"
        assert [b.id for b in service.change_requests()] == ["BK12345"]

        cancelled = await service.approve_change_request("BK12345")
        assert cancelled.status == "Cancelled"
        emails = await sent_emails(services["db"])
        assert [e["subject"] for e in emails] == ["Your booking BK12345 has been cancelled"]

    @pytest.mark.asyncio
    async def test_stale_fee_is_refused(self, services):
        service = services["bookings"]
        with pytest.raises(QuoteMismatchError):
            await service.request_cancellation("BK12345", 1, EARLY)
        assert service.get_booking("BK12345").status == "Confirmed"

    @pytest.mark.asyncio
    async def test_only_confirmed_bookings_can_request(self, services):
        with pytest.raises(InvalidStatusTransitionError):
            await services["bookings"].request_cancellation("BK12347", 0, EARLY)

    @pytest.mark.asyncio
    async def test_date_change_approval_applies_requested_values(self, services):
        service = services["bookings"]
        # 5 nights for 1,322,500 -> 264,500/night; 10% fee on the original total
        quote = service.date_change_quote(service.get_booking("BK12345"), date(2026, 8, 20), date(2026, 8, 23), EARLY)
        assert quote["final_price"] == pytest.approx(3 * 264500 + 132250)

        requested = await service.request_date_change(
            "BK12345", date(2026, 8, 20), date(2026, 8, 23), quote["final_price"], EARLY
        )
        assert requested.status == "Date Change Requested"
        assert requested.check_in_date == date(2026, 8, 10)
        assert requested.requested_total_price == pytest.approx(925750)

        approved = await service.approve_change_request("BK12345")
        assert approved.status == "Confirmed"
        assert approved.check_in_date == date(2026, 8, 20)
        assert approved.check_out_date == date(2026, 8, 23)
        assert approved.total_price == pytest.approx(925750)
        assert approved.requested_check_in_date is None
        assert approved.requested_total_price is None

    @pytest.mark.asyncio
    async def test_rejection_keeps_confirmed_values(self, services):
        service = services["bookings"]
        quote = service.date_change_quote(service.get_booking("BK12345"), date(2026, 8, 20), date(2026, 8, 23), EARLY)
        await service.request_date_change("BK12345", date(2026, 8, 20), date(2026, 8, 23), quote["final_price"], EARLY)

        rejected = await service.reject_change_request("BK12345")
        assert rejected.status == "Confirmed"
        assert rejected.check_in_date == date(2026, 8, 10)
        assert rejected.total_price == 1322500
        assert rejected.requested_check_out_date is None

    @pytest.mark.asyncio
    async def test_decision_without_request(self, services):
        with pytest.raises(ConflictError):
            await services["bookings"].approve_change_request("BK12345")
