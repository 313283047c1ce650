"""
Availability service: fetches a day's data and runs the engine over it.

Every upstream failure collapses to "open": the whole grid available, or
the candidate available. The storage-level uniqueness guard still rejects
a second active booking at the same start time.
"""

import asyncio
from datetime import date
from typing import Optional

from salon_booking.availability.engine import (
    DEFAULT_SERVICE_DURATION,
    all_open_slots,
    check_candidate,
    compute_day_slots,
)
from salon_booking.config import settings
from salon_booking.logging_context import get_request_logger
from salon_booking.notifications.messages import format_conflict_reason
from salon_booking.repositories.base import BookingRepository, ServiceRepository
from salon_booking.schemas.booking_schema import BookingRecord, CandidateResult, TimeSlot

logger = get_request_logger(__name__)


class AvailabilityService:
    """Slot table and pre-submit checks for one salon's calendar."""

    def __init__(
        self,
        bookings: BookingRepository,
        services: ServiceRepository,
        fetch_timeout_sec: Optional[float] = None,
    ) -> None:
        self._bookings = bookings
        self._services = services
        self._timeout = fetch_timeout_sec or settings.booking.fetch_timeout_sec

    async def _fetch_day(
        self, tenant_id: str, service_id: str, booking_date: date
    ) -> tuple[int, list[BookingRecord]]:
        """Fetch the service duration and occupying bookings concurrently."""
        duration, existing = await asyncio.wait_for(
            asyncio.gather(
                self._services.get_duration(service_id),
                self._bookings.fetch_occupying(tenant_id, booking_date),
            ),
            timeout=self._timeout,
        )
        if duration is None:
            logger.warning(
                "No duration for service %s, assuming %d minutes",
                service_id, DEFAULT_SERVICE_DURATION,
            )
            duration = DEFAULT_SERVICE_DURATION
        return duration, existing

    async def get_available_time_slots(
        self, tenant_id: str, service_id: str, booking_date: date
    ) -> list[TimeSlot]:
        """Return the 20-slot table for a date; all open if anything fails."""
        try:
            duration, existing = await self._fetch_day(tenant_id, service_id, booking_date)
            slots = compute_day_slots(existing, duration)
        except Exception:
            logger.exception(
                "Availability lookup failed for tenant=%s service=%s date=%s; showing all slots open",
                tenant_id, service_id, booking_date,
            )
            return all_open_slots()

        logger.debug(
            "Availability for %s: duration=%d existing=%d open=%d",
            booking_date, duration, len(existing), sum(1 for s in slots if s.available),
        )
        return slots

    async def check_booking_availability(
        self, tenant_id: str, service_id: str, booking_date: date, time: str
    ) -> CandidateResult:
        """Re-check one start time immediately before a booking is persisted."""
        try:
            duration, existing = await self._fetch_day(tenant_id, service_id, booking_date)
            result = check_candidate(existing, duration, time)
        except Exception:
            logger.exception(
                "Candidate check failed for tenant=%s service=%s date=%s time=%s; failing open",
                tenant_id, service_id, booking_date, time,
            )
            return CandidateResult(available=True)

        if result.conflict is not None:
            result.reason = format_conflict_reason(result.conflict)
            logger.info("Candidate %s %s rejected: %s", booking_date, time, result.reason)
        return result
