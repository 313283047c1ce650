"""Tests for message formatting and WhatsApp deep links."""

from datetime import date
from urllib.parse import parse_qs, urlparse

from salon_booking.notifications.messages import (
    format_booking_cancellation,
    format_booking_confirmation,
    format_booking_reminder,
    format_conflict_reason,
    format_display_date,
    format_price,
)
from salon_booking.notifications.whatsapp import WhatsAppNotifier, build_whatsapp_url, clean_phone
from salon_booking.schemas.booking_schema import BookingWithDetails, ConflictDetails


def _booking(**overrides) -> BookingWithDetails:
    values = dict(
        id="BK-TEST0001",
        tenant_id="tenant-1",
        service_id="svc-cut",
        customer_name="Thandi",
        customer_phone="082 555 1234",
        booking_date=date(2025, 3, 18),
        booking_time="10:00",
        service_name="Haircut",
        service_price=180,
        service_duration=30,
        tenant_name="Christelle Salon",
    )
    values.update(overrides)
    return BookingWithDetails(**values)


class TestMessages:
    def test_display_date(self):
        assert format_display_date(date(2025, 3, 18)) == "Tuesday, 18 March 2025"

    def test_price(self):
        assert format_price(180) == "R180"
        assert format_price(650.5) == "R650.50"

    def test_conflict_reason(self):
        conflict = ConflictDetails(customer_name="Lerato", service_name="Colour", end_time="11:30")
        assert format_conflict_reason(conflict) == (
            "This time slot conflicts with Lerato's Colour appointment (ends at 11:30)"
        )

    def test_confirmation_contains_details(self):
        text = format_booking_confirmation(_booking())
        assert text.startswith("Hi Thandi!")
        assert "*Christelle Salon*" in text
        assert "Tuesday, 18 March 2025" in text
        assert "30 minutes" in text
        assert "R180" in text

    def test_reminder_has_no_price(self):
        text = format_booking_reminder(_booking())
        assert "friendly reminder" in text
        assert "R180" not in text

    def test_cancellation(self):
        text = format_booking_cancellation(_booking())
        assert "has been cancelled" in text
        assert "10:00" in text


class TestWhatsApp:
    def test_clean_phone(self):
        assert clean_phone("+27 (82) 555-1234") == "27825551234"

    def test_clean_phone_converts_local_number(self):
        assert clean_phone("082 555 1234") == "27825551234"

    def test_clean_phone_keeps_foreign_number(self):
        assert clean_phone("+44 20 7946 0958") == "442079460958"

    def test_url_encodes_message(self):
        url = build_whatsapp_url("082 555 1234", "Hi & welcome!\nSee you", "https://wa.me/")
        parsed = urlparse(url)
        assert parsed.netloc == "wa.me"
        assert parsed.path == "/27825551234"
        assert parse_qs(parsed.query)["text"] == ["Hi & welcome!\nSee you"]

    def test_notifier_links_target_customer(self):
        notifier = WhatsAppNotifier(base_url="https://wa.example")
        booking = _booking()
        for url in (
            notifier.booking_confirmation_url(booking),
            notifier.booking_reminder_url(booking),
            notifier.booking_cancellation_url(booking),
        ):
            assert url.startswith("https://wa.example/27825551234?text=")

    def test_custom_message(self):
        url = WhatsAppNotifier(base_url="https://wa.me").custom_message_url("0821112222", "Hello")
        assert url == "https://wa.me/27821112222?text=Hello"
