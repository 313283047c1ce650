"""Tenant (salon) data models."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class BusinessHours(BaseModel):
    """Free-text opening hours per weekday, e.g. "08:00 - 17:00".

    Stored for display only; availability does not consult it.
    """
    monday: Optional[str] = None
    tuesday: Optional[str] = None
    wednesday: Optional[str] = None
    thursday: Optional[str] = None
    friday: Optional[str] = None
    saturday: Optional[str] = None
    sunday: Optional[str] = None


class Tenant(BaseModel):
    """One salon business instance."""
    id: str
    name: str
    slug: str
    description: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    image_url: Optional[str] = None
    business_hours: Optional[BusinessHours] = None
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
