"""
Command-line entry point.

Usage:
    Slot table:   python main.py slots 2025-03-18 [service_id]
    Console mode: python main.py console
"""

import asyncio
import logging
import sys

from salon_booking.config import settings

logger = logging.getLogger(__name__)

USAGE = "Usage: python main.py slots <YYYY-MM-DD> [service_id] | python main.py console"


def _run_slots(args: list[str]) -> int:
    """Print the demo salon's slot table for a date."""
    from console_demo import DEMO_TENANT, render_slots, seed_demo_data
    from salon_booking.availability.service import AvailabilityService
    from salon_booking.booking.form import parse_form_date

    if not args:
        print(USAGE)
        return 2
    day = parse_form_date(args[0])
    if day is None:
        print(f"Invalid date: {args[0]!r}, expected YYYY-MM-DD")
        return 2
    service_id = args[1] if len(args) > 1 else "svc-cut"

    _, services, bookings = seed_demo_data()
    availability = AvailabilityService(bookings, services)
    slots = asyncio.run(availability.get_available_time_slots(DEMO_TENANT.id, service_id, day))
    logger.info("%s: %d slots for %s on %s", settings.app_name, len(slots), service_id, day)
    for line in render_slots(slots):
        print(line)
    return 0


def _run_console_mode() -> int:
    """Start the offline console demo."""
    from console_demo import ConsoleSession

    session = ConsoleSession()
    session.run()
    return 0


if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1] == "slots":
        sys.exit(_run_slots(sys.argv[2:]))
    elif len(sys.argv) > 1 and sys.argv[1] == "console":
        sys.exit(_run_console_mode())
    else:
        print(USAGE)
        sys.exit(2)
