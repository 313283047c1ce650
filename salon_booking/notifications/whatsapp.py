"""
WhatsApp deep-link notifications.

Messages are not sent server-side: each method returns a ``wa.me`` link
with the text pre-filled, which the front-end opens for the user.
"""

import logging
from typing import Optional
from urllib.parse import quote

from salon_booking.config import settings
from salon_booking.notifications.messages import (
    format_booking_cancellation,
    format_booking_confirmation,
    format_booking_reminder,
)
from salon_booking.schemas.booking_schema import BookingWithDetails
from salon_booking.utils import normalize_phone, to_international_phone

logger = logging.getLogger(__name__)


def clean_phone(phone: str) -> str:
    """International digits only, as wa.me expects: ``082 555 1234`` -> ``27825551234``."""
    return normalize_phone(to_international_phone(phone)).lstrip("+")


def build_whatsapp_url(phone: str, message: str, base_url: Optional[str] = None) -> str:
    base = (base_url or settings.notifications.whatsapp_base_url).rstrip("/")
    return f"{base}/{clean_phone(phone)}?text={quote(message, safe='')}"


class WhatsAppNotifier:
    """Builds pre-filled WhatsApp links for booking lifecycle messages."""

    def __init__(self, base_url: Optional[str] = None) -> None:
        self.base_url = base_url or settings.notifications.whatsapp_base_url

    def booking_confirmation_url(self, booking: BookingWithDetails) -> str:
        return self._link(booking.customer_phone, format_booking_confirmation(booking), "confirmation")

    def booking_reminder_url(self, booking: BookingWithDetails) -> str:
        return self._link(booking.customer_phone, format_booking_reminder(booking), "reminder")

    def booking_cancellation_url(self, booking: BookingWithDetails) -> str:
        return self._link(booking.customer_phone, format_booking_cancellation(booking), "cancellation")

    def custom_message_url(self, phone: str, message: str) -> str:
        return self._link(phone, message, "custom")

    def _link(self, phone: str, message: str, kind: str) -> str:
        url = build_whatsapp_url(phone, message, self.base_url)
        logger.debug("WhatsApp %s link built for %s", kind, clean_phone(phone))
        return url
