from pydantic import BaseModel
from typing import Optional


class SiteSettings(BaseModel):
    logo_url: Optional[str] = None
    announcement: str = ""


class SiteSettingsUpdate(BaseModel):
    logo_url: Optional[str] = None
    announcement: Optional[str] = None
