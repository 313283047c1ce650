from salon_booking.booking.flow import BookingFlow, BookingResult
from salon_booking.booking.form import BookingForm, validate_booking_form

__all__ = ["BookingFlow", "BookingResult", "BookingForm", "validate_booking_form"]
