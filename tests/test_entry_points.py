"""Smoke tests for main.py and the console demo."""

import pytest

import main
from console_demo import ConsoleSession, render_slots
from salon_booking.availability.engine import all_open_slots
from salon_booking.schemas.booking_schema import ConflictDetails, TimeSlot


class TestRenderSlots:
    def test_open_and_taken_lines(self):
        conflict = ConflictDetails(customer_name="Lerato", service_name="Colour", end_time="11:00")
        lines = render_slots([
            TimeSlot(time="09:00", available=True),
            TimeSlot(time="09:30", available=False, conflict=conflict),
        ])
        assert "09:00  open" in lines[0]
        assert "Lerato's Colour appointment" in lines[1]

    def test_full_grid(self):
        assert len(render_slots(all_open_slots())) == 20


class TestMainSlots:
    def test_prints_slot_table(self, capsys):
        assert main._run_slots(["2025-03-18", "svc-colour"]) == 0
        out = capsys.readouterr().out
        assert "08:00" in out
        assert "17:30" in out

    def test_missing_date(self, capsys):
        assert main._run_slots([]) == 2
        assert "Usage" in capsys.readouterr().out

    def test_bad_date(self, capsys):
        assert main._run_slots(["18/03/2025"]) == 2
        assert "Invalid date" in capsys.readouterr().out


class TestScenarios:
    @pytest.mark.parametrize("scenario", sorted(ConsoleSession.SCENARIOS))
    def test_scenario_runs(self, scenario, capsys):
        ConsoleSession().run_scenario(scenario)
        assert f"Scenario '{scenario}' complete." in capsys.readouterr().out

    def test_conflict_scenario_books_contested_slot_once(self, capsys):
        ConsoleSession().run_scenario("conflict")
        out = capsys.readouterr().out
        # 11:00 plus exactly one of the two simultaneous 15:00 submissions
        assert out.count("Booking received") == 2
        assert "Lerato's Full Colour appointment (ends at 11:00)" in out
