"""Customer-facing message templates for booking notifications and conflicts."""

from datetime import date

from salon_booking.config import settings
from salon_booking.schemas.booking_schema import BookingWithDetails, ConflictDetails


def format_display_date(value: date) -> str:
    """Long-form date, e.g. ``Monday, 03 March 2025``."""
    return value.strftime("%A, %d %B %Y")


def format_price(amount: float) -> str:
    symbol = settings.notifications.currency_symbol
    if float(amount).is_integer():
        return f"{symbol}{int(amount)}"
    return f"{symbol}{amount:.2f}"


def format_conflict_reason(conflict: ConflictDetails) -> str:
    """Advisory text shown when a requested time overlaps an existing booking."""
    return (
        f"This time slot conflicts with {conflict.customer_name}'s "
        f"{conflict.service_name} appointment (ends at {conflict.end_time})"
    )


def format_booking_confirmation(booking: BookingWithDetails) -> str:
    return "\n".join([
        f"Hi {booking.customer_name}! 👋",
        "",
        f"Your booking at *{booking.tenant_name}* has been confirmed! ✅",
        "",
        f"📅 *Date:* {format_display_date(booking.booking_date)}",
        f"⏰ *Time:* {booking.booking_time}",
        f"💇 *Service:* {booking.service_name}",
        f"⏱️ *Duration:* {booking.service_duration} minutes",
        f"💰 *Price:* {format_price(booking.service_price)}",
        "",
        "We look forward to seeing you!",
        "",
        "If you need to reschedule or cancel, please let us know as soon as possible.",
        "",
        "Thank you! 🌟",
    ])


def format_booking_reminder(booking: BookingWithDetails) -> str:
    return "\n".join([
        f"Hi {booking.customer_name}! 👋",
        "",
        "This is a friendly reminder about your upcoming appointment at "
        f"*{booking.tenant_name}*:",
        "",
        f"📅 *Date:* {format_display_date(booking.booking_date)}",
        f"⏰ *Time:* {booking.booking_time}",
        f"💇 *Service:* {booking.service_name}",
        f"⏱️ *Duration:* {booking.service_duration} minutes",
        "",
        "We look forward to seeing you soon! 🌟",
        "",
        "If you need to reschedule, please let us know.",
    ])


def format_booking_cancellation(booking: BookingWithDetails) -> str:
    return "\n".join([
        f"Hi {booking.customer_name},",
        "",
        f"Your booking at *{booking.tenant_name}* has been cancelled:",
        "",
        f"📅 *Date:* {format_display_date(booking.booking_date)}",
        f"⏰ *Time:* {booking.booking_time}",
        f"💇 *Service:* {booking.service_name}",
        "",
        "If you'd like to reschedule, please let us know and we'll find a new time for you.",
        "",
        "Thank you for your understanding.",
    ])
