import uuid
from datetime import datetime, timezone
from typing import List, Optional

from agencies.ledger import AgencyService, WalletLedger
from bookings.service import BookingService
from hotels.catalog import HotelCatalog
from models.booking import Booking, BookingBase
from models.bulk_order import BulkOrder, BulkOrderItem, BulkOrderItemRequest, ItemAssignment
from pricing.pricing import calculate_nights, days_between, format_price
from utils.exceptions import (
    BookingConfirmationError,
    BulkOrderNotFoundError,
    ConflictError,
    InsufficientBalanceError,
    NotFoundError,
    ValidationError,
)
from utils.logging_utils import setup_logger

logger = setup_logger(__name__)


class BulkOrderService:
    """
    Wholesale room purchases by agencies.

    The wallet is debited when the order is submitted. Admin status changes
    move money back and forth: entering ``Rejected`` refunds the order total,
    leaving ``Rejected`` debits it again. Rooms can only be handed to guests
    once the order is ``Confirmed``.
    """

    def __init__(self, db, catalog: HotelCatalog, agencies: AgencyService, ledger: WalletLedger,
                 bookings: BookingService):
        self.collection = db["bulk_orders"]
        self.catalog = catalog
        self.agencies = agencies
        self.ledger = ledger
        self.bookings = bookings

    async def build_item(self, request: BulkOrderItemRequest) -> BulkOrderItem:
        if request.quantity < 1:
            raise ValidationError("Please select a valid hotel, room, and quantity.")
        nights = days_between(request.check_in_date, request.check_out_date)
        if nights <= 0:
            raise ValidationError("Check-out date must be after check-in date.")
        hotel, room = await self.catalog.get_room(request.hotel_id, request.room_id)

        return BulkOrderItem(
            id=f"{room.id}-{uuid.uuid4().hex[:8]}",
            hotel_id=hotel.id,
            hotel_name=hotel.name,
            room_id=room.id,
            room_type=room.type,
            quantity=request.quantity,
            price_per_night=room.agent_price_per_night,
            subtotal=request.quantity * room.agent_price_per_night * nights,
            hotel=hotel,
            room=room,
            check_in_date=request.check_in_date,
            check_out_date=request.check_out_date,
        )

    async def list_orders(self, agent_id: Optional[str] = None) -> List[BulkOrder]:
        query = {"agent_id": agent_id} if agent_id else {}
        docs = await self.collection.find(query, {"_id": 0}).sort("created_at", -1).to_list(length=None)
        return [BulkOrder(**doc) for doc in docs]

    async def get_order(self, order_id: str) -> BulkOrder:
        doc = await self.collection.find_one({"id": order_id}, {"_id": 0})
        if not doc:
            raise BulkOrderNotFoundError(f"Bulk order {order_id} not found.")
        return BulkOrder(**doc)

    async def submit_order(self, agent_id: str, requests: List[BulkOrderItemRequest]) -> BulkOrder:
        if not requests:
            raise ValidationError("Your order is empty.")
        agent = await self.agencies.get_agency(agent_id)
        if agent.status != "Active":
            raise ValidationError("This agency account is inactive.")

        items = [await self.build_item(request) for request in requests]
        total = sum(item.subtotal for item in items)
        if total > agent.wallet_balance:
            raise InsufficientBalanceError("Insufficient wallet balance.")

        order = BulkOrder(
            id=f"BO-{uuid.uuid4().hex[:10].upper()}",
            agent_id=agent.id,
            agent_name=agent.profile.agency_name,
            items=items,
            total_price=total,
            status="Pending",
            created_at=datetime.now(timezone.utc),
        )
        await self.ledger.update_agent_wallet(agent.id, total, "Debit", f"Bulk Purchase - Order {order.id}")
        try:
            await self.collection.insert_one(order.model_dump(mode="json"))
        except Exception:
            # compensate the debit: the order does not exist
            logger.exception("Storing bulk order %s failed, refunding %s", order.id, agent.id)
            await self.ledger.update_agent_wallet(
                agent.id, total, "Credit", f"Refund - Bulk Purchase {order.id} could not be recorded"
            )
            raise

        logger.info("Bulk order %s submitted by %s for %s", order.id, agent.id, format_price(total))
        return order

    async def update_status(self, order_id: str, status: str) -> BulkOrder:
        order = await self.get_order(order_id)
        if status == order.status:
            return order

        # claim the transition before any money moves
        claimed = await self.collection.find_one_and_update(
            {"id": order_id, "status": order.status},
            {"$set": {"status": status}},
        )
        if not claimed:
            raise ConflictError(f"Bulk order {order_id} was changed by someone else. Please reload and retry.")

        try:
            if status == "Rejected":
                await self.ledger.update_agent_wallet(
                    order.agent_id, order.total_price, "Credit", f"Refund for Rejected Bulk Order {order.id}"
                )
            elif order.status == "Rejected":
                await self.ledger.update_agent_wallet(
                    order.agent_id, order.total_price, "Debit", f"Re-charge for Bulk Order {order.id} ({status})"
                )
        except Exception:
            await self.collection.update_one({"id": order_id, "status": status}, {"$set": {"status": order.status}})
            logger.exception("Wallet update for bulk order %s failed, status restored to %s", order_id, order.status)
            raise

        logger.info("Bulk order %s: %s -> %s", order_id, order.status, status)
        return order.model_copy(update={"status": status})

    async def delete_order(self, order_id: str, agent_id: Optional[str] = None):
        """Remove the record only; no refund is issued."""
        query = {"id": order_id}
        if agent_id:
            query["agent_id"] = agent_id
        result = await self.collection.delete_one(query)
        if result.deleted_count == 0:
            raise BulkOrderNotFoundError(f"Bulk order {order_id} not found.")
        logger.info("Bulk order record %s deleted", order_id)

    async def _reserve_room(self, order_id: str, index: int, quantity: int):
        reserved = await self.collection.find_one_and_update(
            {"id": order_id, "status": "Confirmed", f"items.{index}.assigned": {"$lt": quantity}},
            {"$inc": {f"items.{index}.assigned": 1}},
        )
        if not reserved:
            raise ConflictError("All rooms of this item have already been assigned.")

    async def _release_room(self, order_id: str, index: int):
        await self.collection.update_one(
            {"id": order_id, f"items.{index}.assigned": {"$gt": 0}},
            {"$inc": {f"items.{index}.assigned": -1}},
        )

    async def assign_item(self, order_id: str, item_id: str, assignment: ItemAssignment,
                          agent_id: Optional[str] = None) -> Booking:
        """Turn one purchased room into a confirmed guest booking."""
        order = await self.get_order(order_id)
        if agent_id and order.agent_id != agent_id:
            raise BulkOrderNotFoundError(f"Bulk order {order_id} not found.")
        if order.status != "Confirmed":
            raise ConflictError("Rooms can only be assigned once the bulk order is confirmed.")

        index = next((n for n, i in enumerate(order.items) if i.id == item_id), None)
        if index is None:
            raise NotFoundError(f"Item {item_id} not found in order {order_id}.")
        item = order.items[index]
        if item.assigned >= item.quantity:
            raise ConflictError("All rooms of this item have already been assigned.")

        agent = await self.agencies.get_agency(order.agent_id)
        nights = calculate_nights(assignment.check_in_date, assignment.check_out_date)
        data = BookingBase(
            hotel=item.hotel,
            room=item.room,
            guest_name=assignment.guest_name,
            guest_email=assignment.guest_email,
            contact_number=assignment.contact_number,
            check_in_date=assignment.check_in_date,
            check_out_date=assignment.check_out_date,
            total_price=nights * item.room.agent_price_per_night,
            payment_method="Online",
            agent_details=agent.profile,
            show_price_on_voucher=assignment.show_price_on_voucher,
        )

        await self._reserve_room(order_id, index, item.quantity)
        try:
            booking = await self.bookings.add_booking(data, "agent-assigned")
        except BookingConfirmationError:
            # the Pending booking still holds the room
            raise
        except Exception:
            await self._release_room(order_id, index)
            raise
        logger.info("Assigned a room from %s/%s to booking %s", order_id, item_id, booking.id)
        return booking
