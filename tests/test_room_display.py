"""Tests for the room board status resolution and filters."""

from datetime import date

import pytest

from helpers import make_booking, make_room, make_status
from innkeep.domain.room_display import (
    DisplayStatus,
    build_room_board,
    matches_filter,
    resolve_room,
    resolve_status,
    summarize_board,
)
from innkeep.domain.room_status import HousekeepingStatus, Room

DAY = date(2025, 6, 3)


class TestResolveStatus:
    def test_due_out_dirty(self):
        booking = make_booking(check_in="2025-06-01", check_out="2025-06-03", status="checked_in")
        result = resolve_status(booking, False, HousekeepingStatus.DIRTY, DAY)
        assert result.status == DisplayStatus.DUE_OUT
        assert result.label == "Due Out"
        assert result.dirty is True

    def test_departing_room_already_clean_stays_occupied(self):
        booking = make_booking(check_in="2025-06-01", check_out="2025-06-03", status="checked_in")
        result = resolve_status(booking, False, HousekeepingStatus.CLEAN, DAY)
        assert result.status == DisplayStatus.OCCUPIED
        assert result.dirty is False

    def test_due_out_inspected_is_not_flagged_dirty(self):
        booking = make_booking(check_out="2025-06-03", status="checked_in")
        result = resolve_status(booking, False, HousekeepingStatus.INSPECTED, DAY)
        assert result.status == DisplayStatus.DUE_OUT
        assert result.dirty is False

    def test_checked_in_mid_stay_is_occupied(self):
        booking = make_booking(check_in="2025-06-01", check_out="2025-06-05")
        result = resolve_status(booking, False, HousekeepingStatus.DIRTY, DAY)
        assert result.status == DisplayStatus.OCCUPIED
        assert result.dirty is False

    def test_stay_over(self):
        booking = make_booking(status="stay_over", check_out="2025-06-05")
        result = resolve_status(booking, False, None, DAY)
        assert result.status == DisplayStatus.OCCUPIED
        assert result.label == "Stay Over"

    @pytest.mark.parametrize("status", ["confirmed", "pending"])
    def test_future_guest_is_reserved(self, status):
        booking = make_booking(status=status, check_in="2025-06-03", check_out="2025-06-05")
        assert resolve_status(booking, False, None, DAY).status == DisplayStatus.RESERVED

    def test_block_booking_beats_everything(self):
        booking = make_booking(status="maintenance")
        result = resolve_status(booking, True, HousekeepingStatus.DIRTY, DAY)
        assert result.status == DisplayStatus.BLOCKED
        assert result.label == "Blocked"

    def test_booking_beats_maintenance_window(self):
        booking = make_booking(check_out="2025-06-05")
        assert resolve_status(booking, True, None, DAY).status == DisplayStatus.OCCUPIED

    def test_maintenance_without_booking(self):
        result = resolve_status(None, True, HousekeepingStatus.DIRTY, DAY)
        assert result.status == DisplayStatus.BLOCKED
        assert result.label == "Maintenance"
        assert result.dirty is False

    def test_vacant_dirty(self):
        result = resolve_status(None, False, HousekeepingStatus.DIRTY, DAY)
        assert result.status == DisplayStatus.VACANT
        assert result.label == "Dirty"
        assert result.dirty is True

    def test_vacant_clean(self):
        result = resolve_status(None, False, None, DAY)
        assert result.status == DisplayStatus.VACANT
        assert result.label == "Vacant"
        assert result.dirty is False


class TestResolveRoom:
    def test_open_ended_maintenance_blocks_far_future(self):
        display = resolve_room(make_room(), make_status(status="maintenance"), [], date(2099, 1, 1))
        assert display.status == DisplayStatus.BLOCKED

    def test_expired_maintenance_window_is_vacant(self):
        status = make_status(status="maintenance", start=date(2025, 5, 1), end=date(2025, 5, 10))
        display = resolve_room(make_room(), status, [], DAY)
        assert display.status == DisplayStatus.VACANT

    def test_missing_status_record_is_vacant_clean(self):
        display = resolve_room(make_room(), None, [], DAY)
        assert display.status == DisplayStatus.VACANT
        assert display.housekeeping == "clean"

    def test_booking_details_exposed(self):
        booking = make_booking("bk-7", check_in="2025-06-02", check_out="2025-06-06", guest_name="Mwangi")
        display = resolve_room(make_room(), make_status(), [booking], DAY)
        data = display.to_dict()
        assert data["status"] == "occupied"
        assert data["booking_id"] == "bk-7"
        assert data["guest_name"] == "Mwangi"
        assert data["check_in"] == "2025-06-02"
        assert data["check_out"] == "2025-06-06"

    def test_cancelled_booking_ignored(self):
        booking = make_booking(status="cancelled", check_out="2025-06-06")
        display = resolve_room(make_room(), make_status(housekeeping="dirty"), [booking], DAY)
        assert display.status == DisplayStatus.VACANT
        assert display.dirty is True

    def test_suite_type_falls_back_to_status_record(self):
        room = Room(room_name="DESERT ROSE")
        display = resolve_room(room, make_status(), [], DAY)
        assert display.suite_type == "Garden Suite"


def _board_fixture():
    rooms = [
        make_room("A", "Garden Suite"),
        make_room("B", "Garden Suite"),
        make_room("C", "Ocean Suite"),
        make_room("D", "Ocean Suite"),
        make_room("E", "Ocean Suite"),
        Room(room_name="F", suite_type="Ocean Suite", is_active=False),
    ]
    statuses = [
        make_status("A", housekeeping="dirty"),
        make_status("B", housekeeping="dirty"),
        make_status("C"),
        make_status("D", status="maintenance"),
        make_status("E"),
    ]
    bookings = [
        make_booking("bk-a", room="A", check_in="2025-06-01", check_out="2025-06-03"),
        make_booking("bk-c", room="C", check_in="2025-06-01", check_out="2025-06-05"),
        make_booking("bk-e", room="E", status="confirmed", check_in="2025-06-03", check_out="2025-06-04"),
    ]
    return rooms, statuses, bookings


class TestBuildRoomBoard:
    def test_every_active_room_gets_one_status(self):
        board = build_room_board(*_board_fixture(), DAY)
        by_name = {d.room_name: d.status for d in board}
        assert by_name == {
            "A": DisplayStatus.DUE_OUT,
            "B": DisplayStatus.VACANT,
            "C": DisplayStatus.OCCUPIED,
            "D": DisplayStatus.BLOCKED,
            "E": DisplayStatus.RESERVED,
        }

    def test_occupied_filter_includes_due_out(self):
        board = build_room_board(*_board_fixture(), DAY, status_filter="occupied")
        assert {d.room_name for d in board} == {"A", "C"}

    def test_dirty_filter_uses_display_flag(self):
        board = build_room_board(*_board_fixture(), DAY, status_filter="dirty")
        assert {d.room_name for d in board} == {"A", "B"}

    def test_suite_type_filter(self):
        board = build_room_board(*_board_fixture(), DAY, suite_type="Garden Suite")
        assert {d.room_name for d in board} == {"A", "B"}

    def test_unknown_filter_rejected(self):
        with pytest.raises(ValueError):
            build_room_board(*_board_fixture(), DAY, status_filter="haunted")

    def test_all_filter_keeps_everything(self):
        assert len(build_room_board(*_board_fixture(), DAY, status_filter="all")) == 5


class TestMatchesFilter:
    def test_none_matches(self):
        display = resolve_room(make_room(), None, [], DAY)
        assert matches_filter(display, None)

    def test_exact_status(self):
        display = resolve_room(make_room(), None, [], DAY)
        assert matches_filter(display, "vacant")
        assert not matches_filter(display, "reserved")


class TestSummarizeBoard:
    def test_counts_sum_to_total(self):
        summary = summarize_board(build_room_board(*_board_fixture(), DAY))
        assert summary == {
            "vacant": 1,
            "occupied": 1,
            "reserved": 1,
            "blocked": 1,
            "due_out": 1,
            "dirty": 2,
            "total": 5,
        }

    def test_empty_board(self):
        summary = summarize_board([])
        assert summary["total"] == 0
        assert summary["dirty"] == 0
