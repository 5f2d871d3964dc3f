from datetime import date, datetime
from typing import Optional
from zoneinfo import ZoneInfo

from pydantic import BaseModel, Field, field_validator

from wardrobe_cpw.core.config import settings


class ItemCreate(BaseModel):
    name: Optional[str] = None
    category: Optional[str] = None
    brand: Optional[str] = None
    purchase_price: float = Field(0.0, ge=0)
    purchase_date: Optional[date] = None
    photo_ref: Optional[str] = None

    @field_validator("name", "category", "brand")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        return v or None

    @field_validator("purchase_date")
    @classmethod
    def not_in_future(cls, v: Optional[date]) -> Optional[date]:
        if v is not None and v > datetime.now(ZoneInfo(settings.TIMEZONE)).date():
            raise ValueError("purchase_date_in_future")
        return v


class ItemUpdate(ItemCreate):
    """Edits replace every field, same rules as creation."""
    pass
