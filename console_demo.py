"""
Offline console demo: runs the customer booking flow without any backend.

Uses the real availability engine, booking flow, and WhatsApp link builder
over seeded in-memory repositories. No network calls.

Usage:
    python console_demo.py
    python console_demo.py --scenario conflict
    python console_demo.py --scenario outage
"""

import argparse
import asyncio
from datetime import date, timedelta
from typing import Optional

from salon_booking.availability.service import AvailabilityService
from salon_booking.booking.flow import BookingFlow
from salon_booking.booking.form import BookingForm
from salon_booking.config import settings
from salon_booking.notifications.messages import format_conflict_reason
from salon_booking.repositories.base import RepositoryError
from salon_booking.repositories.memory import (
    InMemoryBookingRepository,
    InMemoryServiceRepository,
    InMemoryTenantRepository,
)
from salon_booking.schemas.booking_schema import TimeSlot
from salon_booking.schemas.service_schema import Service
from salon_booking.schemas.tenant_schema import BusinessHours, Tenant

BLUE = "\033[94m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
RED = "\033[91m"
DIM = "\033[2m"
RESET = "\033[0m"
BOLD = "\033[1m"

DEMO_TENANT = Tenant(
    id="tenant-glamour",
    name="Glamour Hair Studio",
    slug="glamour-hair-studio",
    description="Cuts, colour and braids in the heart of Durban.",
    phone="031 555 0100",
    address="12 Florida Road, Morningside",
    business_hours=BusinessHours(
        monday="08:00 - 17:00",
        tuesday="08:00 - 17:00",
        wednesday="08:00 - 17:00",
        thursday="08:00 - 17:00",
        friday="08:00 - 18:00",
        saturday="08:00 - 13:00",
    ),
)

DEMO_SERVICES = [
    Service(id="svc-cut", tenant_id=DEMO_TENANT.id, name="Haircut", duration=30, price=180),
    Service(id="svc-blowdry", tenant_id=DEMO_TENANT.id, name="Blow-dry", duration=45, price=150),
    Service(id="svc-colour", tenant_id=DEMO_TENANT.id, name="Full Colour", duration=120, price=650),
    Service(id="svc-braids", tenant_id=DEMO_TENANT.id, name="Braids", price=450),
]


def seed_demo_data() -> tuple[
    InMemoryTenantRepository, InMemoryServiceRepository, InMemoryBookingRepository
]:
    """Build fresh repositories holding the demo salon and its services."""
    tenants = InMemoryTenantRepository([DEMO_TENANT])
    services = InMemoryServiceRepository(DEMO_SERVICES)
    bookings = InMemoryBookingRepository(services, tenants)
    return tenants, services, bookings


def render_slots(slots: list[TimeSlot]) -> list[str]:
    """One display line per slot, with the conflict advisory when taken."""
    lines = []
    for slot in slots:
        if slot.available:
            lines.append(f"{GREEN}{slot.time}  open{RESET}")
        elif slot.conflict is not None:
            lines.append(f"{RED}{slot.time}  {format_conflict_reason(slot.conflict)}{RESET}")
        else:
            lines.append(f"{RED}{slot.time}  unavailable{RESET}")
    return lines


class ConsoleSession:
    """Simulates a customer using the booking form in the terminal."""

    def __init__(self) -> None:
        self.tenants, self.services, self.bookings = seed_demo_data()
        self.availability = AvailabilityService(self.bookings, self.services)
        self.flow = BookingFlow(self.bookings, self.services, self.availability)
        self.tenant = DEMO_TENANT
        self.today = date.today()
        self.day = self.today + timedelta(days=1)

    def say(self, text: str) -> None:
        print(f"{GREEN}{BOLD}[{self.tenant.name}]{RESET} {GREEN}{text}{RESET}")

    def system_log(self, text: str) -> None:
        print(f"{DIM}  >> {text}{RESET}")

    def banner(self, title: str) -> None:
        print()
        print(f"{BOLD}{'=' * 60}{RESET}")
        print(f"{BOLD}  SALON BOOKING - {title}{RESET}")
        print(f"{BOLD}  App: {settings.app_name}  Salon: {self.tenant.name}{RESET}")
        print(f"{BOLD}{'=' * 60}{RESET}")
        print()

    async def _existing(self, service_id: str, time: str, name: str) -> None:
        await self.bookings.create({
            "tenant_id": self.tenant.id,
            "service_id": service_id,
            "customer_name": name,
            "customer_phone": "0821234567",
            "booking_date": self.day,
            "booking_time": time,
            "status": "confirmed",
        })
        self.system_log(f"Existing booking: {name} {service_id} at {time}")

    async def show_slots(self, form: BookingForm) -> None:
        refresh = await self.flow.on_selection_change(self.tenant, form)
        for line in render_slots(refresh["slots"]):
            print(f"    {line}")
        if refresh["message"]:
            self.say(refresh["message"])

    async def submit(self, form: BookingForm) -> None:
        print(f"\n{BLUE}[Customer] {RESET}Book {form.service_id} at {form.booking_time}")
        result = await self.flow.submit(self.tenant, form, self.today)
        if result["success"]:
            self.say(result["message"])
            if result.get("whatsapp_url"):
                self.system_log(f"WhatsApp: {result['whatsapp_url'][:90]}...")
        else:
            print(f"{YELLOW}  {result['message']}{RESET}")

    def _form(self, service_id: str, time: str = "", name: str = "Thandi Nkosi") -> BookingForm:
        return BookingForm(
            service_id=service_id,
            customer_name=name,
            customer_phone="082 555 1234",
            booking_date=self.day.isoformat(),
            booking_time=time,
        )

    # ------------------------------------------------------------------ #
    # Scenarios
    # ------------------------------------------------------------------ #

    async def scenario_booking(self) -> None:
        form = self._form("svc-blowdry")
        self.say(f"Slots for Blow-dry on {self.day}:")
        await self.show_slots(form)
        form.booking_time = "10:00"
        await self.submit(form)

    async def scenario_conflict(self) -> None:
        await self._existing("svc-colour", "09:00", "Lerato")
        await self._existing("svc-cut", "13:30", "Naledi")

        form = self._form("svc-blowdry", time="10:30")
        self.say(f"Slots for Blow-dry on {self.day}:")
        await self.show_slots(form)

        form.booking_time = "10:45"
        await self.submit(form)

        form.booking_time = "11:00"
        await self.submit(form)

        self.system_log("Two customers submit 15:00 at the same moment")
        first, second = self._form("svc-cut", "15:00", "Ayanda"), self._form("svc-cut", "15:00", "Sipho")
        await asyncio.gather(self.submit(first), self.submit(second))

    async def scenario_outage(self) -> None:
        await self._existing("svc-colour", "09:00", "Lerato")
        self.services.fail_with = RepositoryError("services table unreachable")
        self.system_log("Service lookups now failing; availability fails open")

        form = self._form("svc-cut")
        await self.show_slots(form)
        form.booking_time = "14:00"
        await self.submit(form)

    SCENARIOS = {
        "booking": scenario_booking,
        "conflict": scenario_conflict,
        "outage": scenario_outage,
    }

    def run_scenario(self, scenario: str) -> None:
        """Auto-play a pre-scripted scenario for demo purposes."""
        handler = self.SCENARIOS.get(scenario)
        if handler is None:
            print(f"{RED}Unknown scenario: {scenario}{RESET}")
            return
        self.banner(f"Scenario: {scenario}")
        asyncio.run(handler(self))
        print(f"\n{BOLD}  Scenario '{scenario}' complete.{RESET}")

    def run(self) -> None:
        self.banner("Console Demo (type 'quit' to exit)")
        asyncio.run(self._interactive())

    async def _interactive(self) -> None:
        services = await self.services.list_active()
        for svc in services:
            self.system_log(f"{svc.id}: {svc.name} ({svc.duration or '?'} min)")

        form = self._form("", name="")
        while True:
            service_id = self._ask("Service id")
            if service_id is None:
                return
            form.service_id = service_id
            day = self._ask(f"Date [{self.day.isoformat()}]")
            if day is None:
                return
            form.booking_date = day or self.day.isoformat()
            await self.show_slots(form)

            form.booking_time = self._ask("Time (HH:MM)") or ""
            form.customer_name = self._ask("Your name") or ""
            form.customer_phone = self._ask("Phone") or ""
            await self.submit(form)

    @staticmethod
    def _ask(prompt: str) -> Optional[str]:
        value = input(f"{BLUE}{prompt}: {RESET}").strip()
        if value.lower() in ("quit", "exit", "q"):
            print(f"\n{DIM}Session ended.{RESET}")
            return None
        return value


def main() -> None:
    parser = argparse.ArgumentParser(description="Offline console demo")
    parser.add_argument(
        "--scenario",
        choices=sorted(ConsoleSession.SCENARIOS),
        default=None,
        help="Auto-play a pre-scripted scenario instead of interactive mode",
    )
    args = parser.parse_args()

    session = ConsoleSession()
    if args.scenario:
        session.run_scenario(args.scenario)
    else:
        session.run()


if __name__ == "__main__":
    main()
