from salon_booking.analytics.tracker import (
    VisitTracker,
    detect_browser,
    detect_device_type,
    detect_os,
    new_client_context,
)

__all__ = [
    "VisitTracker",
    "detect_browser",
    "detect_device_type",
    "detect_os",
    "new_client_context",
]
