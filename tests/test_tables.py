"""Table occupancy tests."""

from datetime import datetime, timedelta, timezone

import pytest

from coffee_shop.domain import Table, TableStatus

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


class TestTableConstruction:
    @pytest.mark.parametrize("number, capacity", [(0, 2), (-1, 2), (1, 0)])
    def test_rejects_non_positive_values(self, number, capacity):
        with pytest.raises(ValueError):
            Table(number, capacity)

    def test_starts_available(self):
        table = Table(1, 4)
        assert table.status is TableStatus.AVAILABLE
        assert table.is_available()


class TestOccupy:
    def test_occupy_available_table(self):
        table = Table(1, 4)
        assert table.occupy(7, now=NOW)
        assert table.status is TableStatus.OCCUPIED
        assert table.customer_id == 7
        assert table.occupied_since == NOW

    def test_cannot_occupy_twice(self):
        table = Table(1, 4)
        table.occupy(7, now=NOW)
        assert not table.occupy(8, now=NOW)
        assert table.customer_id == 7

    def test_cannot_occupy_out_of_service(self):
        table = Table(1, 4)
        table.set_out_of_service()
        assert not table.occupy(7)
        assert table.notes == "Out of service"

    def test_occupied_minutes(self):
        table = Table(1, 4)
        table.occupy(None, now=NOW)
        assert table.occupied_minutes(NOW + timedelta(minutes=45, seconds=30)) == 45

    def test_make_available_clears_occupant(self):
        table = Table(1, 4)
        table.occupy(7, now=NOW)
        table.make_available()
        assert table.customer_id is None
        assert table.occupied_since is None
        assert table.occupied_minutes(NOW) == 0


class TestReservation:
    def test_reserve_for_future(self):
        table = Table(2, 2)
        assert table.reserve(NOW + timedelta(hours=1), now=NOW)
        assert table.current_status(NOW) is TableStatus.RESERVED
        assert not table.is_available(NOW)

    def test_reserve_in_past_rejected(self):
        table = Table(2, 2)
        assert not table.reserve(NOW - timedelta(minutes=1), now=NOW)
        assert table.reserve(None, now=NOW) is False

    def test_expired_reservation_reads_available(self):
        table = Table(2, 2)
        table.reserve(NOW + timedelta(minutes=30), now=NOW)
        later = NOW + timedelta(minutes=31)
        assert table.is_reservation_expired(later)
        assert table.is_available(later)
        assert table.reserved_until is None

    def test_expired_reservation_can_be_occupied(self):
        table = Table(2, 2)
        table.reserve(NOW + timedelta(minutes=30), now=NOW)
        assert table.occupy(5, now=NOW + timedelta(hours=1))


class TestService:
    def test_back_in_service_clears_notes(self):
        table = Table(3, 6)
        table.set_out_of_service("Wobbly leg")
        assert table.notes == "Wobbly leg"
        table.put_back_in_service()
        assert table.status is TableStatus.AVAILABLE
        assert table.notes == ""

    def test_set_capacity_ignores_non_positive(self):
        table = Table(3, 6)
        table.set_capacity(0)
        assert table.capacity == 6
        table.set_capacity(8)
        assert table.capacity == 8

    def test_notes_can_be_set_and_cleared(self):
        table = Table(3, 6)
        table.set_notes("By the window")
        assert table.notes == "By the window"
        table.set_notes(None)
        assert table.notes == ""
