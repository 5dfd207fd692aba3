from fastapi import APIRouter, Depends, Request

from auth.dependencies import get_current_admin
from models.settings import SiteSettings, SiteSettingsUpdate
from utils.logging_utils import setup_logger

logger = setup_logger(__name__)

SETTINGS_ID = "site"


class SiteSettingsStore:
    """Single settings document holding the site logo and announcement banner."""

    def __init__(self, db):
        self.collection = db["settings"]

    async def get(self) -> SiteSettings:
        doc = await self.collection.find_one({"id": SETTINGS_ID}, {"_id": 0, "id": 0})
        return SiteSettings(**doc) if doc else SiteSettings()

    async def update(self, changes: SiteSettingsUpdate) -> SiteSettings:
        update = changes.model_dump(exclude_unset=True)
        if update:
            await self.collection.update_one({"id": SETTINGS_ID}, {"$set": update}, upsert=True)
            logger.info("Site settings updated: %s", ", ".join(sorted(update)))
        return await self.get()


router = APIRouter(prefix="/api/settings", tags=["settings"])


@router.get("/", response_model=SiteSettings)
async def get_settings(request: Request):
    return await request.app.site_settings.get()


@router.put("/", response_model=SiteSettings)
async def update_settings(changes: SiteSettingsUpdate, request: Request, admin: dict = Depends(get_current_admin)):
    return await request.app.site_settings.update(changes)
