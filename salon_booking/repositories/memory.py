"""
In-memory repositories.

Used by tests and the console demo. In production these would be backed by
the hosted tables (tenants, services, bookings, site_visits). Setting
``fail_with`` on any repository makes every call raise, which is how the
fail-open paths are exercised.
"""

import logging
import uuid
from datetime import date, datetime, timezone
from typing import Any, Optional

from salon_booking.availability.engine import DEFAULT_SERVICE_DURATION, time_to_minutes
from salon_booking.repositories.base import (
    RecordNotFoundError,
    RepositoryError,
    SlotAlreadyTakenError,
)
from salon_booking.schemas.analytics_schema import SiteVisit
from salon_booking.schemas.booking_schema import (
    OCCUPYING_STATUSES,
    Booking,
    BookingRecord,
    BookingStatus,
    BookingWithDetails,
)
from salon_booking.schemas.service_schema import Service
from salon_booking.schemas.tenant_schema import Tenant

logger = logging.getLogger(__name__)

_REQUIRED_BOOKING_FIELDS = (
    "tenant_id", "service_id", "customer_name", "customer_phone",
    "booking_date", "booking_time",
)
_UPDATABLE_BOOKING_FIELDS = frozenset({
    "service_id", "customer_name", "customer_email", "customer_phone",
    "booking_date", "booking_time", "status", "notes",
})


class _FailureSwitch:
    """Mixin: raise ``fail_with`` on every call when set."""

    fail_with: Optional[Exception] = None

    def _check(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with


class InMemoryTenantRepository(_FailureSwitch):
    def __init__(self, tenants: Optional[list[Tenant]] = None) -> None:
        self._tenants: dict[str, Tenant] = {t.id: t for t in tenants or []}

    def add(self, tenant: Tenant) -> Tenant:
        self._tenants[tenant.id] = tenant
        return tenant

    async def get(self, tenant_id: str) -> Optional[Tenant]:
        self._check()
        return self._tenants.get(tenant_id)

    def lookup(self, tenant_id: str) -> Optional[Tenant]:
        """Synchronous join helper for the booking store."""
        return self._tenants.get(tenant_id)

    async def get_by_slug(self, slug: str) -> Optional[Tenant]:
        self._check()
        for tenant in self._tenants.values():
            if tenant.slug == slug and tenant.is_active:
                return tenant
        return None

    async def list_active(self) -> list[Tenant]:
        self._check()
        return sorted(
            (t for t in self._tenants.values() if t.is_active), key=lambda t: t.name
        )

    def reset(self) -> None:
        self._tenants.clear()
        self.fail_with = None


class InMemoryServiceRepository(_FailureSwitch):
    def __init__(self, services: Optional[list[Service]] = None) -> None:
        self._services: dict[str, Service] = {s.id: s for s in services or []}

    def add(self, service: Service) -> Service:
        self._services[service.id] = service
        return service

    async def get_duration(self, service_id: str) -> Optional[int]:
        self._check()
        service = self._services.get(service_id)
        if service is None:
            raise RecordNotFoundError(f"Service {service_id} not found")
        return service.duration

    async def get(self, service_id: str) -> Optional[Service]:
        self._check()
        return self._services.get(service_id)

    async def list_active(self) -> list[Service]:
        self._check()
        return sorted(
            (s for s in self._services.values() if s.is_active), key=lambda s: s.name
        )

    async def list_all(self) -> list[Service]:
        self._check()
        return sorted(self._services.values(), key=lambda s: s.name)

    def lookup(self, service_id: str) -> Optional[Service]:
        """Synchronous join helper for the booking store."""
        return self._services.get(service_id)

    def reset(self) -> None:
        self._services.clear()
        self.fail_with = None


class InMemoryBookingRepository(_FailureSwitch):
    """
    Booking store with a uniqueness guard.

    A second active (pending/confirmed) booking at the same tenant, date and
    start time is rejected with SlotAlreadyTakenError, the storage-level
    backstop for two customers submitting the same slot at once.
    """

    def __init__(
        self,
        services: InMemoryServiceRepository,
        tenants: Optional[InMemoryTenantRepository] = None,
    ) -> None:
        self._services = services
        self._tenants = tenants
        self._bookings: dict[str, Booking] = {}

    # ------------------------------------------------------------------ #
    # Reads
    # ------------------------------------------------------------------ #

    async def fetch_occupying(self, tenant_id: str, booking_date: date) -> list[BookingRecord]:
        self._check()
        records = []
        for booking in self._bookings.values():
            if (
                booking.tenant_id != tenant_id
                or booking.booking_date != booking_date
                or booking.status not in OCCUPYING_STATUSES
            ):
                continue
            service = self._services.lookup(booking.service_id)
            records.append(BookingRecord(
                start_time=booking.booking_time,
                service_duration=(service.duration if service else None)
                or DEFAULT_SERVICE_DURATION,
                customer_name=booking.customer_name,
                service_name=service.name if service else "Unknown Service",
            ))
        return records

    async def get(self, booking_id: str) -> Optional[BookingWithDetails]:
        self._check()
        booking = self._bookings.get(booking_id)
        return self._with_details(booking) if booking else None

    async def list_for_tenant(self, tenant_id: str) -> list[BookingWithDetails]:
        self._check()
        rows = [b for b in self._bookings.values() if b.tenant_id == tenant_id]
        return [self._with_details(b) for b in self._ordered(rows)]

    async def list_in_range(
        self, tenant_id: str, start: date, end: date
    ) -> list[BookingWithDetails]:
        self._check()
        rows = [
            b for b in self._bookings.values()
            if b.tenant_id == tenant_id and start <= b.booking_date <= end
        ]
        return [self._with_details(b) for b in self._ordered(rows)]

    # ------------------------------------------------------------------ #
    # Writes
    # ------------------------------------------------------------------ #

    async def create(self, booking: dict[str, Any]) -> Booking:
        self._check()
        missing = [name for name in _REQUIRED_BOOKING_FIELDS if not booking.get(name)]
        if missing:
            raise RepositoryError(f"Missing required booking fields: {', '.join(missing)}")

        now = datetime.now(timezone.utc)
        record = Booking(
            id=f"BK-{uuid.uuid4().hex[:8].upper()}",
            status=booking.get("status") or BookingStatus.PENDING,
            created_at=now,
            updated_at=now,
            **{k: v for k, v in booking.items() if k not in ("id", "status", "created_at", "updated_at")},
        )
        self._ensure_slot_free(record)
        self._bookings[record.id] = record
        logger.info(
            "Booking created: %s for %s on %s at %s",
            record.id, record.customer_name, record.booking_date, record.booking_time,
        )
        return record

    async def update(self, booking_id: str, **changes: Any) -> Booking:
        self._check()
        current = self._bookings.get(booking_id)
        if current is None:
            raise RecordNotFoundError(f"Booking {booking_id} not found")
        unknown = set(changes) - _UPDATABLE_BOOKING_FIELDS
        if unknown:
            raise RepositoryError(f"Cannot update fields: {', '.join(sorted(unknown))}")

        updated = Booking.model_validate({
            **current.model_dump(),
            **changes,
            "updated_at": datetime.now(timezone.utc),
        })
        self._ensure_slot_free(updated)
        self._bookings[booking_id] = updated
        logger.info("Booking updated: %s (%s)", booking_id, ", ".join(sorted(changes)))
        return updated

    async def delete(self, booking_id: str) -> bool:
        self._check()
        if self._bookings.pop(booking_id, None) is None:
            return False
        logger.info("Booking deleted: %s", booking_id)
        return True

    async def cancel(self, booking_id: str) -> Booking:
        return await self.update(booking_id, status=BookingStatus.CANCELLED)

    async def confirm(self, booking_id: str) -> Booking:
        return await self.update(booking_id, status=BookingStatus.CONFIRMED)

    async def complete(self, booking_id: str) -> Booking:
        return await self.update(booking_id, status=BookingStatus.COMPLETED)

    def reset(self) -> None:
        """Clear all bookings. Used by test fixtures for isolation."""
        self._bookings.clear()
        self.fail_with = None

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    def _ensure_slot_free(self, candidate: Booking) -> None:
        if candidate.status not in OCCUPYING_STATUSES:
            return
        start = time_to_minutes(candidate.booking_time)
        for other in self._bookings.values():
            if (
                other.id != candidate.id
                and other.tenant_id == candidate.tenant_id
                and other.booking_date == candidate.booking_date
                and other.status in OCCUPYING_STATUSES
                and time_to_minutes(other.booking_time) == start
            ):
                raise SlotAlreadyTakenError(
                    f"{candidate.booking_date} {candidate.booking_time} is already booked"
                )

    @staticmethod
    def _ordered(rows: list[Booking]) -> list[Booking]:
        return sorted(rows, key=lambda b: (b.booking_date, time_to_minutes(b.booking_time)))

    def _with_details(self, booking: Booking) -> BookingWithDetails:
        service = self._services.lookup(booking.service_id)
        tenant = self._tenants.lookup(booking.tenant_id) if self._tenants else None
        return BookingWithDetails(
            **booking.model_dump(),
            service_name=service.name if service else "Unknown Service",
            service_price=service.price if service else 0,
            service_duration=(service.duration or 0) if service else 0,
            tenant_name=tenant.name if tenant else "Unknown Tenant",
        )


class InMemoryVisitRepository(_FailureSwitch):
    def __init__(self) -> None:
        self._visits: list[SiteVisit] = []

    async def insert(self, visit: SiteVisit) -> SiteVisit:
        self._check()
        stored = visit.model_copy(update={"id": visit.id or uuid.uuid4().hex})
        self._visits.append(stored)
        return stored

    async def list_since(self, tenant_id: str, since: datetime) -> list[SiteVisit]:
        self._check()
        return sorted(
            (v for v in self._visits if v.tenant_id == tenant_id and v.created_at >= since),
            key=lambda v: v.created_at,
        )

    def reset(self) -> None:
        self._visits.clear()
        self.fail_with = None
