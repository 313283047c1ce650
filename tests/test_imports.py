"""Tests for import chains and module integrity.

Ensures all public modules can be imported without errors and
that re-exports from __init__.py files work correctly.
"""


class TestSchemaImports:
    def test_import_booking_schema(self):
        from salon_booking.schemas.booking_schema import (
            OCCUPYING_STATUSES, BookingStatus, TimeSlot,
        )
        assert BookingStatus.PENDING == "pending"
        assert OCCUPYING_STATUSES == {BookingStatus.PENDING, BookingStatus.CONFIRMED}
        assert TimeSlot(time="08:00", available=True).conflict is None

    def test_import_tenant_schema(self):
        from salon_booking.schemas.tenant_schema import Tenant
        tenant = Tenant(id="t", name="Salon", slug="salon")
        assert tenant.is_active
        assert tenant.business_hours is None


class TestPackageReExports:
    def test_availability_package(self):
        from salon_booking.availability import AvailabilityService, compute_day_slots
        assert callable(compute_day_slots)
        assert AvailabilityService is not None

    def test_booking_package(self):
        from salon_booking.booking import BookingFlow, BookingForm
        assert BookingForm().service_id == ""
        assert BookingFlow is not None

    def test_notifications_package(self):
        from salon_booking.notifications import WhatsAppNotifier, build_whatsapp_url
        assert callable(build_whatsapp_url)
        assert WhatsAppNotifier is not None

    def test_analytics_package(self):
        from salon_booking.analytics import VisitTracker, detect_device_type
        assert callable(detect_device_type)
        assert VisitTracker is not None


class TestDemoImports:
    def test_console_demo_seed(self):
        from console_demo import DEMO_SERVICES, seed_demo_data
        tenants, services, bookings = seed_demo_data()
        assert len(DEMO_SERVICES) == 4
        assert services.lookup("svc-cut").duration == 30
