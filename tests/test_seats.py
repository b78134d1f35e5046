import pytest

from bus_booking.bookings.seats import (
    TOTAL_SEATS, get_all_seats, get_seat_position, get_farthest_seat_position,
    is_valid_seat, parse_seat, seat_rows
)


def test_all_seats_row_major():
    seats = get_all_seats()
    assert len(seats) == TOTAL_SEATS == 60
    assert seats[:5] == ["A1", "A2", "A3", "A4", "B1"]
    assert seats[-1] == "O4"
    assert [get_seat_position(s) for s in seats] == list(range(60))


def test_seat_rows():
    rows = seat_rows()
    assert list(rows)[0] == "A"
    assert len(rows) == 15
    assert rows["C"] == ["C1", "C2", "C3", "C4"]


@pytest.mark.parametrize("seat_id, position", [("A1", 0), ("B3", 6), ("D4", 15), ("O4", 59)])
def test_seat_position(seat_id, position):
    assert get_seat_position(seat_id) == position


def test_farthest_seat_position():
    assert get_farthest_seat_position(["A1", "C2", "B4"]) == 9


@pytest.mark.parametrize("seat_id", ["P1", "A5", "A0", "a1", "A10", "", "AA1", " A1"])
def test_invalid_seat_ids(seat_id):
    assert not is_valid_seat(seat_id)
    with pytest.raises(ValueError):
        parse_seat(seat_id)


def test_parse_seat():
    assert parse_seat("K2") == (10, 2)
