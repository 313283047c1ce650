"""
Customer booking form state and validation.

Validation reports the first problem only, in the order the fields appear
on the form, so the customer fixes one thing at a time.

Usage:
    form = BookingForm(service_id="svc-cut", customer_name="Thandi", ...)
    error = validate_booking_form(form, tenant, today=date.today())
    if error is None:
        ...  # submit
"""

import logging
from dataclasses import dataclass, fields
from datetime import date, datetime, timedelta
from typing import Optional

from salon_booking.availability.engine import InvalidTimeError, minutes_to_time, time_to_minutes
from salon_booking.config import settings
from salon_booking.schemas.tenant_schema import Tenant
from salon_booking.utils import is_valid_sa_phone

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d"


def parse_form_date(value: str) -> Optional[date]:
    """Parse a YYYY-MM-DD form value, returning None when malformed."""
    try:
        return datetime.strptime(value.strip(), DATE_FORMAT).date()
    except ValueError:
        return None


def _valid_time(value: str) -> bool:
    try:
        time_to_minutes(value)
    except InvalidTimeError:
        return False
    return True


def normalize_time(value: str) -> str:
    """Zero-padded ``HH:MM`` form of a valid time, e.g. ``"9:00"`` -> ``"09:00"``."""
    return minutes_to_time(time_to_minutes(value))


@dataclass
class BookingForm:
    """Fields the customer fills in. All values are raw form strings."""

    service_id: str = ""
    customer_name: str = ""
    customer_email: str = ""
    customer_phone: str = ""
    booking_date: str = ""
    booking_time: str = ""
    notes: str = ""

    def reset(self) -> None:
        for f in fields(self):
            setattr(self, f.name, "")

    def has_selection(self) -> bool:
        """True once a service and a date are chosen, i.e. slots can be computed."""
        return bool(self.service_id and parse_form_date(self.booking_date))


def booking_window(today: date) -> tuple[date, date]:
    """First and last bookable dates."""
    return today, today + timedelta(days=settings.booking.max_advance_days)


def validate_booking_form(
    form: BookingForm, tenant: Optional[Tenant], today: date
) -> Optional[str]:
    """Return the first validation error message, or None if the form is complete."""
    if tenant is None:
        return "Tenant information is missing."
    if not form.service_id:
        return "Please select a service."
    if not form.customer_name.strip():
        return "Please enter your name."
    if not form.customer_phone.strip():
        return "Please enter your phone number."
    if not is_valid_sa_phone(form.customer_phone):
        return "Please enter a valid South African phone number."
    if not form.booking_date:
        return "Please select a date."
    if not form.booking_time:
        return "Please select a time."

    selected = parse_form_date(form.booking_date)
    if selected is None:
        return "Please select a valid date."
    if not _valid_time(form.booking_time):
        return "Please select a valid time."

    first, last = booking_window(today)
    if selected < first:
        return "Please select a future date."
    if selected > last:
        return f"Bookings can be made at most {settings.booking.max_advance_days} days ahead."

    logger.debug("Booking form valid for %s on %s", form.customer_name, selected)
    return None
