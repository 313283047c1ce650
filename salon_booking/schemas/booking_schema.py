"""Booking and availability data models."""

from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class BookingStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


# Statuses that still hold a time range on the salon's calendar.
OCCUPYING_STATUSES: frozenset[BookingStatus] = frozenset(
    {BookingStatus.PENDING, BookingStatus.CONFIRMED}
)


class Booking(BaseModel):
    """A stored booking row."""
    id: str
    tenant_id: str
    service_id: str
    customer_name: str
    customer_email: Optional[str] = None
    customer_phone: str
    booking_date: date
    booking_time: str
    status: BookingStatus = BookingStatus.PENDING
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class BookingWithDetails(Booking):
    """Booking joined with its service and tenant."""
    service_name: str = "Unknown Service"
    service_price: float = 0
    service_duration: int = 0
    tenant_name: str = "Unknown Tenant"


class BookingRecord(BaseModel):
    """An occupying booking as seen by the availability engine."""
    start_time: str
    service_duration: int = Field(gt=0)
    customer_name: str
    service_name: str


class ConflictDetails(BaseModel):
    """The existing booking a candidate slot collides with."""
    customer_name: str
    service_name: str
    end_time: str


class TimeSlot(BaseModel):
    """One candidate start time on the day grid."""
    time: str
    available: bool
    conflict: Optional[ConflictDetails] = None


class CandidateResult(BaseModel):
    """Outcome of checking one explicit start time."""
    available: bool
    conflict: Optional[ConflictDetails] = None
    reason: Optional[str] = None
