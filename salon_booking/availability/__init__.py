from salon_booking.availability.engine import (
    DEFAULT_SERVICE_DURATION,
    InvalidDurationError,
    InvalidTimeError,
    all_open_slots,
    check_candidate,
    compute_day_slots,
    minutes_to_time,
    overlaps,
    time_to_minutes,
)
from salon_booking.availability.service import AvailabilityService

__all__ = [
    "AvailabilityService",
    "DEFAULT_SERVICE_DURATION",
    "InvalidDurationError",
    "InvalidTimeError",
    "all_open_slots",
    "check_candidate",
    "compute_day_slots",
    "minutes_to_time",
    "overlaps",
    "time_to_minutes",
]
