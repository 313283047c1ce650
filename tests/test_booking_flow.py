"""Integration tests: form + availability + repository + notification together."""

import asyncio

import pytest

from salon_booking.booking.flow import (
    GENERIC_FAILURE,
    SLOT_JUST_TAKEN,
    SLOT_NO_LONGER_AVAILABLE,
    BookingFlow,
)
from salon_booking.repositories.base import RepositoryError
from salon_booking.schemas.booking_schema import BookingStatus
from tests.conftest import BOOKING_DAY, TENANT_ID, TODAY, make_form, seed_booking


class TestSelectionChange:
    @pytest.mark.asyncio
    async def test_incomplete_selection_shows_all_open(self, flow, tenant, booking_repo):
        await seed_booking(booking_repo, "10:00")
        refresh = await flow.on_selection_change(tenant, make_form(service_id=""))
        assert len(refresh["slots"]) == 20
        assert all(s.available for s in refresh["slots"])
        assert refresh["message"] is None

    @pytest.mark.asyncio
    async def test_missing_tenant_shows_all_open(self, flow):
        refresh = await flow.on_selection_change(None, make_form())
        assert all(s.available for s in refresh["slots"])

    @pytest.mark.asyncio
    async def test_taken_selection_is_cleared(self, flow, tenant, booking_repo):
        await seed_booking(booking_repo, "10:00")
        form = make_form(booking_time="10:30")
        refresh = await flow.on_selection_change(tenant, form)
        assert form.booking_time == ""
        assert refresh["message"] == SLOT_NO_LONGER_AVAILABLE

    @pytest.mark.asyncio
    async def test_open_selection_is_kept(self, flow, tenant, booking_repo):
        await seed_booking(booking_repo, "10:00")
        form = make_form(booking_time="11:00")
        refresh = await flow.on_selection_change(tenant, form)
        assert form.booking_time == "11:00"
        assert refresh["message"] is None


class TestSubmit:
    @pytest.mark.asyncio
    async def test_happy_path(self, flow, tenant, booking_repo):
        form = make_form(notes="First visit")
        result = await flow.submit(tenant, form, TODAY)

        assert result["success"]
        booking = result["booking"]
        assert booking.id.startswith("BK-")
        assert booking.status == BookingStatus.PENDING
        assert booking.service_name == "Haircut"
        assert booking.tenant_name == "Christelle Salon"
        assert booking.notes == "First visit"
        assert "Haircut" in result["message"]
        assert result["whatsapp_url"].startswith("https://wa.me/27825551234?text=")

        stored = await booking_repo.list_for_tenant(TENANT_ID)
        assert [b.id for b in stored] == [booking.id]
        assert form.customer_name == ""

    @pytest.mark.asyncio
    async def test_no_whatsapp_without_tenant_phone(self, flow, tenant):
        tenant = tenant.model_copy(update={"phone": None})
        result = await flow.submit(tenant, make_form(), TODAY)
        assert result["success"]
        assert result["whatsapp_url"] is None

    @pytest.mark.asyncio
    async def test_validation_error_stops_submission(self, flow, tenant, booking_repo):
        result = await flow.submit(tenant, make_form(customer_phone="123"), TODAY)
        assert result == {
            "success": False,
            "message": "Please enter a valid South African phone number.",
        }
        assert await booking_repo.list_for_tenant(TENANT_ID) == []

    @pytest.mark.asyncio
    async def test_unpadded_minutes_rejected(self, flow, tenant, booking_repo):
        result = await flow.submit(tenant, make_form(booking_time="10:5"), TODAY)
        assert result == {"success": False, "message": "Please select a valid time."}
        assert await booking_repo.list_for_tenant(TENANT_ID) == []

    @pytest.mark.asyncio
    async def test_single_digit_hour_stored_padded(self, flow, tenant):
        result = await flow.submit(tenant, make_form(booking_time="9:00"), TODAY)
        assert result["success"]
        assert result["booking"].booking_time == "09:00"

    @pytest.mark.asyncio
    async def test_conflict_detected_before_insert(self, flow, tenant, booking_repo):
        await seed_booking(booking_repo, "10:00", customer_name="Lerato")
        result = await flow.submit(tenant, make_form(booking_time="10:15"), TODAY)
        assert not result["success"]
        assert "Lerato's Wash & Style" in result["message"]
        assert len(await booking_repo.list_for_tenant(TENANT_ID)) == 1

    @pytest.mark.asyncio
    async def test_back_to_back_booking_allowed(self, flow, tenant, booking_repo):
        await seed_booking(booking_repo, "10:00")
        result = await flow.submit(tenant, make_form(booking_time="11:00"), TODAY)
        assert result["success"]

    @pytest.mark.asyncio
    async def test_cancelled_slot_can_be_rebooked(self, flow, tenant, booking_repo):
        existing = await seed_booking(booking_repo, "10:00")
        await booking_repo.cancel(existing.id)
        result = await flow.submit(tenant, make_form(booking_time="10:00"), TODAY)
        assert result["success"]

    @pytest.mark.asyncio
    async def test_availability_outage_still_books(self, flow, tenant, service_repo):
        service_repo.fail_with = RepositoryError("services down")
        result = await flow.submit(tenant, make_form(), TODAY)
        assert result["success"]
        assert result["booking"].service_name == "Unknown Service"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [RepositoryError("insert rejected"), ConnectionError("backend unreachable")],
    )
    async def test_insert_failure_reported(self, tenant, service_repo, error):
        class FailingBookings:
            async def fetch_occupying(self, tenant_id, booking_date):
                return []

            async def create(self, booking):
                raise error

        flow = BookingFlow(FailingBookings(), service_repo)
        result = await flow.submit(tenant, make_form(), TODAY)
        assert result == {"success": False, "message": GENERIC_FAILURE}

    @pytest.mark.asyncio
    async def test_concurrent_submissions_book_slot_once(self, flow, tenant, booking_repo):
        first = make_form(customer_name="Ayanda", booking_time="15:00")
        second = make_form(customer_name="Sipho", booking_time="15:00")
        results = await asyncio.gather(
            flow.submit(tenant, first, TODAY),
            flow.submit(tenant, second, TODAY),
        )
        assert sum(r["success"] for r in results) == 1
        failed = next(r for r in results if not r["success"])
        assert failed["message"] == SLOT_JUST_TAKEN or "conflicts with" in failed["message"]
        occupying = await booking_repo.fetch_occupying(TENANT_ID, BOOKING_DAY)
        assert len(occupying) == 1
