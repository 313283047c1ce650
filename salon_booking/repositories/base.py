"""
Repository interfaces consumed by the availability service and booking flow.

Any store can sit behind these protocols. Methods are async because the
production stores are remote table APIs.
"""

from datetime import date, datetime
from typing import Any, Optional, Protocol

from salon_booking.schemas.analytics_schema import SiteVisit
from salon_booking.schemas.booking_schema import Booking, BookingRecord, BookingWithDetails
from salon_booking.schemas.service_schema import Service
from salon_booking.schemas.tenant_schema import Tenant


class RepositoryError(Exception):
    """Raised when the backing store cannot serve a request."""


class RecordNotFoundError(RepositoryError):
    """Raised when an update or status change targets a missing row."""


class SlotAlreadyTakenError(RepositoryError):
    """Raised when an active booking already holds the same tenant, date and time."""


class BookingRepository(Protocol):
    async def fetch_occupying(self, tenant_id: str, booking_date: date) -> list[BookingRecord]:
        """Bookings with status pending or confirmed, joined with service name and duration."""
        ...

    async def create(self, booking: dict[str, Any]) -> Booking: ...

    async def update(self, booking_id: str, **changes: Any) -> Booking: ...

    async def delete(self, booking_id: str) -> bool: ...

    async def get(self, booking_id: str) -> Optional[BookingWithDetails]: ...

    async def list_for_tenant(self, tenant_id: str) -> list[BookingWithDetails]: ...

    async def list_in_range(
        self, tenant_id: str, start: date, end: date
    ) -> list[BookingWithDetails]: ...

    async def cancel(self, booking_id: str) -> Booking: ...

    async def confirm(self, booking_id: str) -> Booking: ...

    async def complete(self, booking_id: str) -> Booking: ...


class ServiceRepository(Protocol):
    async def get_duration(self, service_id: str) -> Optional[int]:
        """Duration in minutes, or None when the service has no duration set.

        Raises:
            RecordNotFoundError: If no such service exists.
        """
        ...

    async def get(self, service_id: str) -> Optional[Service]: ...

    async def list_active(self) -> list[Service]: ...

    async def list_all(self) -> list[Service]: ...


class TenantRepository(Protocol):
    async def get(self, tenant_id: str) -> Optional[Tenant]: ...

    async def get_by_slug(self, slug: str) -> Optional[Tenant]: ...

    async def list_active(self) -> list[Tenant]: ...


class VisitRepository(Protocol):
    async def insert(self, visit: SiteVisit) -> SiteVisit: ...

    async def list_since(self, tenant_id: str, since: datetime) -> list[SiteVisit]: ...
