"""
Appointment availability engine.

Given the occupying bookings for one tenant on one day, decides which start
times on a fixed grid can host a new booking of a given duration. Bookings
occupy half-open ranges ``[start, start + duration)`` so back-to-back
appointments never conflict.

Pure functions only: callers fetch data, handle upstream errors, and apply
the fail-open policy (``all_open_slots``) when inputs cannot be obtained.

Usage:
    slots = compute_day_slots(existing, requested_duration=45)
    result = check_candidate(existing, 45, "10:15")
"""

import re
from typing import Optional

from salon_booking.schemas.booking_schema import (
    BookingRecord,
    CandidateResult,
    ConflictDetails,
    TimeSlot,
)

# Grid of possible start times: 08:00 .. 17:30 in 30-minute steps.
# Tenant business hours are not consulted.
SLOT_GRID_START_HOUR = 8
SLOT_GRID_END_HOUR = 18
SLOT_INTERVAL_MINUTES = 30

DEFAULT_SERVICE_DURATION = 60
MINUTES_PER_DAY = 24 * 60

_TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})(?::\d{2})?$")


class InvalidTimeError(ValueError):
    """Raised when a time string is not a valid HH:MM value."""


class InvalidDurationError(ValueError):
    """Raised when a requested duration is not a positive number of minutes."""


def time_to_minutes(value: str) -> int:
    """Convert ``"HH:MM"`` to minutes since midnight.

    A trailing ``:SS`` component (as returned by SQL ``time`` columns) is
    accepted and ignored.
    """
    match = _TIME_PATTERN.match(value.strip()) if isinstance(value, str) else None
    if not match:
        raise InvalidTimeError(f"Invalid time {value!r}, expected HH:MM")
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours >= 24 or minutes >= 60:
        raise InvalidTimeError(f"Time out of range: {value!r}")
    return hours * 60 + minutes


def minutes_to_time(minutes: int) -> str:
    """Convert minutes since midnight to zero-padded ``"HH:MM"``.

    End times that run past midnight are not wrapped (1470 -> "24:30").
    """
    if minutes < 0:
        raise InvalidTimeError(f"Negative minutes: {minutes}")
    hours, mins = divmod(minutes, 60)
    return f"{hours:02d}:{mins:02d}"


def overlaps(a_start: int, a_end: int, b_start: int, b_end: int) -> bool:
    """Half-open interval overlap between ``[a_start, a_end)`` and ``[b_start, b_end)``.

    Written as the three cases the booking rules are stated in: A starts
    inside B, A ends inside B, or A contains B. For non-empty intervals this
    is the same as ``a_start < b_end and b_start < a_end``.
    """
    starts_inside = b_start <= a_start < b_end
    ends_inside = b_start < a_end <= b_end
    contains = a_start <= b_start and a_end >= b_end
    return starts_inside or ends_inside or contains


def generate_slot_grid() -> list[str]:
    """Return the 20 fixed start times, ``08:00`` through ``17:30``."""
    return [
        minutes_to_time(m)
        for m in range(
            SLOT_GRID_START_HOUR * 60,
            SLOT_GRID_END_HOUR * 60,
            SLOT_INTERVAL_MINUTES,
        )
    ]


def all_open_slots() -> list[TimeSlot]:
    """The whole grid marked available. Substitute used when inputs are unavailable."""
    return [TimeSlot(time=t, available=True) for t in generate_slot_grid()]


def _require_duration(requested_duration: int) -> None:
    if isinstance(requested_duration, bool) or not isinstance(requested_duration, int):
        raise InvalidDurationError(
            f"Duration must be an integer number of minutes, got {requested_duration!r}"
        )
    if requested_duration <= 0:
        raise InvalidDurationError(f"Duration must be > 0, got {requested_duration}")


def find_conflict(
    requested_start: int,
    requested_duration: int,
    existing_bookings: list[BookingRecord],
) -> Optional[ConflictDetails]:
    """Return the first booking (in list order) overlapping the requested range."""
    requested_end = requested_start + requested_duration
    for booking in existing_bookings:
        booking_start = time_to_minutes(booking.start_time)
        booking_end = booking_start + booking.service_duration
        if overlaps(requested_start, requested_end, booking_start, booking_end):
            return ConflictDetails(
                customer_name=booking.customer_name,
                service_name=booking.service_name,
                end_time=minutes_to_time(booking_end),
            )
    return None


def compute_day_slots(
    existing_bookings: list[BookingRecord], requested_duration: int
) -> list[TimeSlot]:
    """Mark every grid start time available or not for a booking of ``requested_duration``.

    ``existing_bookings`` must already be limited to one tenant, one date and
    occupying statuses.

    Raises:
        InvalidDurationError: If ``requested_duration`` is not a positive int.
        InvalidTimeError: If a booking carries a malformed start time.
    """
    _require_duration(requested_duration)
    slots = []
    for time in generate_slot_grid():
        conflict = find_conflict(time_to_minutes(time), requested_duration, existing_bookings)
        slots.append(TimeSlot(time=time, available=conflict is None, conflict=conflict))
    return slots


def check_candidate(
    existing_bookings: list[BookingRecord],
    requested_duration: Optional[int],
    requested_start: str,
) -> CandidateResult:
    """Check one explicit start time, which need not lie on the grid.

    A ``requested_duration`` of ``None`` means the service duration could not
    be resolved; the candidate is then reported available.
    """
    if requested_duration is None:
        return CandidateResult(available=True)
    _require_duration(requested_duration)
    conflict = find_conflict(
        time_to_minutes(requested_start), requested_duration, existing_bookings
    )
    return CandidateResult(available=conflict is None, conflict=conflict)
