"""Salon service catalog model."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class Service(BaseModel):
    """A bookable offering. Price is in the salon's single local currency."""
    id: str
    tenant_id: Optional[str] = None
    name: str
    description: str = ""
    duration: Optional[int] = Field(default=None, gt=0)  # minutes
    price: float = 0
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
