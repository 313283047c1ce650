"""Shared test fixtures and helpers."""

from datetime import date

import pytest

from salon_booking.availability.service import AvailabilityService
from salon_booking.booking.flow import BookingFlow
from salon_booking.booking.form import BookingForm
from salon_booking.notifications.whatsapp import WhatsAppNotifier
from salon_booking.repositories.memory import (
    InMemoryBookingRepository,
    InMemoryServiceRepository,
    InMemoryTenantRepository,
    InMemoryVisitRepository,
)
from salon_booking.schemas.booking_schema import BookingRecord
from salon_booking.schemas.service_schema import Service
from salon_booking.schemas.tenant_schema import Tenant

TODAY = date(2025, 3, 17)
BOOKING_DAY = date(2025, 3, 18)
TENANT_ID = "tenant-1"


@pytest.fixture
def tenant():
    return Tenant(id=TENANT_ID, name="Christelle Salon", slug="christelle-salon", phone="0215550100")


@pytest.fixture
def tenant_repo(tenant):
    return InMemoryTenantRepository([tenant])


@pytest.fixture
def service_repo():
    return InMemoryServiceRepository([
        Service(id="svc-cut", name="Haircut", duration=30, price=180),
        Service(id="svc-wash", name="Wash & Style", duration=60, price=250),
        Service(id="svc-colour", name="Full Colour", duration=90, price=650.5),
        Service(id="svc-mystery", name="Consultation"),
    ])


@pytest.fixture
def booking_repo(service_repo, tenant_repo):
    return InMemoryBookingRepository(service_repo, tenant_repo)


@pytest.fixture
def visit_repo():
    return InMemoryVisitRepository()


@pytest.fixture
def availability(booking_repo, service_repo):
    return AvailabilityService(booking_repo, service_repo)


@pytest.fixture
def flow(booking_repo, service_repo, availability):
    return BookingFlow(booking_repo, service_repo, availability, WhatsAppNotifier())


def make_record(
    start_time: str,
    duration: int = 60,
    customer_name: str = "Existing Customer",
    service_name: str = "Wash & Style",
) -> BookingRecord:
    """Helper to create an occupying BookingRecord."""
    return BookingRecord(
        start_time=start_time,
        service_duration=duration,
        customer_name=customer_name,
        service_name=service_name,
    )


def make_form(**overrides) -> BookingForm:
    """Helper to create a complete, valid BookingForm."""
    values = {
        "service_id": "svc-cut",
        "customer_name": "Thandi Nkosi",
        "customer_email": "",
        "customer_phone": "082 555 1234",
        "booking_date": BOOKING_DAY.isoformat(),
        "booking_time": "10:00",
        "notes": "",
    }
    values.update(overrides)
    return BookingForm(**values)


async def seed_booking(
    booking_repo: InMemoryBookingRepository,
    time: str,
    service_id: str = "svc-wash",
    status: str = "confirmed",
    customer_name: str = "Existing Customer",
    booking_date: date = BOOKING_DAY,
    tenant_id: str = TENANT_ID,
):
    """Insert a booking straight into the store."""
    return await booking_repo.create({
        "tenant_id": tenant_id,
        "service_id": service_id,
        "customer_name": customer_name,
        "customer_phone": "0821112222",
        "booking_date": booking_date,
        "booking_time": time,
        "status": status,
    })
