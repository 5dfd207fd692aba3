# notifications/notifications.py

from fastapi import APIRouter, Depends, Query, Request
from typing import List

from auth.dependencies import get_current_admin
from models.notification import EmailNotification

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


@router.get("/", response_model=List[EmailNotification])
async def list_sent_emails(
    request: Request,
    limit: int = Query(100, ge=1, le=500),
    admin: dict = Depends(get_current_admin),
):
    """Newest simulated e-mails first."""
    return await request.app.notifier.list_notifications(limit)
