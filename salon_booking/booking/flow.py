"""
Booking submission flow: Select -> Validate -> Re-check -> Persist -> Notify.

The slot table shown to the customer can be stale by the time they submit,
so the chosen time is checked again immediately before the insert. That
narrows the check-then-act window without closing it; the booking store's
uniqueness guard rejects whatever slips through.
"""

from datetime import date
from typing import Optional, TypedDict

from salon_booking.availability.engine import all_open_slots
from salon_booking.availability.service import AvailabilityService
from salon_booking.booking.form import (
    BookingForm,
    normalize_time,
    parse_form_date,
    validate_booking_form,
)
from salon_booking.config import settings
from salon_booking.logging_context import get_request_logger, new_request_id
from salon_booking.notifications.whatsapp import WhatsAppNotifier
from salon_booking.repositories.base import (
    BookingRepository,
    ServiceRepository,
    SlotAlreadyTakenError,
)
from salon_booking.schemas.booking_schema import Booking, BookingWithDetails, TimeSlot
from salon_booking.schemas.tenant_schema import Tenant

logger = get_request_logger(__name__)

SLOT_NO_LONGER_AVAILABLE = (
    "Your selected time is no longer available. Please choose another time."
)
SLOT_JUST_TAKEN = (
    "Sorry, that time was just booked by someone else. Please choose another time."
)
GENERIC_FAILURE = "Failed to create booking. Please try again."


class SlotRefresh(TypedDict):
    """Result from on_selection_change."""

    slots: list[TimeSlot]
    message: Optional[str]


class BookingResult(TypedDict, total=False):
    """Result from submit."""

    success: bool
    message: str
    booking: BookingWithDetails
    whatsapp_url: Optional[str]


class BookingFlow:
    """Drives one customer's booking from slot selection to confirmation link."""

    def __init__(
        self,
        bookings: BookingRepository,
        services: ServiceRepository,
        availability: Optional[AvailabilityService] = None,
        notifier: Optional[WhatsAppNotifier] = None,
    ) -> None:
        self._bookings = bookings
        self._services = services
        self._availability = availability or AvailabilityService(bookings, services)
        self._notifier = notifier or WhatsAppNotifier()

    # ------------------------------------------------------------------ #
    # Slot selection
    # ------------------------------------------------------------------ #

    async def on_selection_change(
        self, tenant: Optional[Tenant], form: BookingForm
    ) -> SlotRefresh:
        """Recompute the slot table after the service or date changes.

        Clears the chosen time if it is no longer open.
        """
        if tenant is None or not form.has_selection():
            return {"slots": all_open_slots(), "message": None}

        booking_date = parse_form_date(form.booking_date)
        slots = await self._availability.get_available_time_slots(
            tenant.id, form.service_id, booking_date
        )

        message = None
        if form.booking_time:
            selected = next((s for s in slots if s.time == form.booking_time), None)
            if selected is not None and not selected.available:
                logger.info("Selected time %s no longer available", form.booking_time)
                form.booking_time = ""
                message = SLOT_NO_LONGER_AVAILABLE
        return {"slots": slots, "message": message}

    # ------------------------------------------------------------------ #
    # Submission
    # ------------------------------------------------------------------ #

    async def submit(
        self, tenant: Optional[Tenant], form: BookingForm, today: date
    ) -> BookingResult:
        """Validate, re-check, persist and prepare the confirmation link."""
        new_request_id()
        error = validate_booking_form(form, tenant, today)
        if error:
            return {"success": False, "message": error}

        booking_date = parse_form_date(form.booking_date)
        booking_time = normalize_time(form.booking_time)
        candidate = await self._availability.check_booking_availability(
            tenant.id, form.service_id, booking_date, booking_time
        )
        if not candidate.available:
            return {"success": False, "message": candidate.reason or SLOT_NO_LONGER_AVAILABLE}

        payload = {
            "tenant_id": tenant.id,
            "service_id": form.service_id,
            "customer_name": form.customer_name.strip(),
            "customer_email": form.customer_email.strip() or None,
            "customer_phone": form.customer_phone.strip(),
            "booking_date": booking_date,
            "booking_time": booking_time,
            "status": settings.booking.default_booking_status,
            "notes": form.notes.strip() or None,
        }
        try:
            created = await self._bookings.create(payload)
        except SlotAlreadyTakenError:
            logger.warning(
                "Slot taken between check and insert: %s %s %s",
                tenant.id, booking_date, booking_time,
            )
            return {"success": False, "message": SLOT_JUST_TAKEN}
        except Exception:
            logger.exception("Booking insert failed for %s on %s", tenant.id, booking_date)
            return {"success": False, "message": GENERIC_FAILURE}

        details = await self._with_details(created, tenant)
        whatsapp_url = None
        if tenant.phone and settings.notifications.notifications_enabled:
            whatsapp_url = self._notifier.booking_confirmation_url(details)

        logger.info("Booking %s submitted", created.id)
        form.reset()
        return {
            "success": True,
            "message": (
                f"Booking received. Reference: {created.id}. "
                f"{details.service_name} on {created.booking_date} at {created.booking_time}."
            ),
            "booking": details,
            "whatsapp_url": whatsapp_url,
        }

    async def _with_details(self, booking: Booking, tenant: Tenant) -> BookingWithDetails:
        """Join the new booking with its service for the confirmation message."""
        try:
            service = await self._services.get(booking.service_id)
        except Exception:
            logger.warning("Service lookup failed for confirmation of %s", booking.id, exc_info=True)
            service = None
        return BookingWithDetails(
            **booking.model_dump(),
            service_name=service.name if service else "Unknown Service",
            service_price=service.price if service else 0,
            service_duration=(service.duration or 0) if service else 0,
            tenant_name=tenant.name,
        )
