from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class EmailNotificationCreate(BaseModel):
    to: str
    subject: str
    body: str  # HTML content
    attachment_url: Optional[str] = None  # link to the voucher page


class EmailNotification(EmailNotificationCreate):
    id: str
    sent_at: datetime
