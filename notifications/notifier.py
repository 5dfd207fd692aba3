import uuid
from datetime import datetime, timezone
from typing import List, Optional

from pymongo.errors import PyMongoError

from models.booking import Booking
from models.notification import EmailNotification
from pricing.pricing import format_price
from utils.logging_utils import setup_logger

logger = setup_logger(__name__)

NOTIFIED_STATUSES = ("Confirmed", "Cancelled")


class Notifier:
    """Simulated e-mail delivery: messages are logged and kept in `notifications`."""

    def __init__(self, db):
        self.collection = db["notifications"]

    async def send(self, to: str, subject: str, body: str, attachment_url: Optional[str] = None) -> EmailNotification:
        notification = EmailNotification(
            id=f"EMAIL-{uuid.uuid4().hex[:12].upper()}",
            to=to,
            subject=subject,
            body=body,
            attachment_url=attachment_url,
            sent_at=datetime.now(timezone.utc),
        )
        await self.collection.insert_one(notification.model_dump(mode="json"))
        logger.info("Simulated e-mail to %s: %s", to, subject)
        return notification

    async def notify_booking_status(self, booking: Booking) -> Optional[EmailNotification]:
        """Tell the guest their booking was confirmed or cancelled. Other statuses are silent."""
        if booking.status not in NOTIFIED_STATUSES:
            return None

        if booking.status == "Confirmed":
            subject = f"Your booking {booking.id} is confirmed"
            body = (
                f"<p>Dear {booking.guest_name},</p>"
                f"<p>Your stay at <b>{booking.hotel.name}</b> ({booking.room.type} room) from "
                f"{booking.check_in_date.isoformat()} to {booking.check_out_date.isoformat()} is confirmed.</p>"
            )
            if booking.show_price_on_voucher:
                body += f"<p>Total: {format_price(booking.total_price)}</p>"
            attachment_url = f"/voucher/{booking.id}"
        else:
            subject = f"Your booking {booking.id} has been cancelled"
            body = (
                f"<p>Dear {booking.guest_name},</p>"
                f"<p>Your booking at <b>{booking.hotel.name}</b> has been cancelled.</p>"
            )
            attachment_url = None

        # the status change is already committed at this point
        try:
            return await self.send(str(booking.guest_email), subject, body, attachment_url)
        except PyMongoError:
            logger.exception("Could not record notification for booking %s", booking.id)
            return None

    async def list_notifications(self, limit: int = 100) -> List[EmailNotification]:
        docs = await self.collection.find({}, {"_id": 0}).sort("sent_at", -1).to_list(length=limit)
        return [EmailNotification(**doc) for doc in docs]
