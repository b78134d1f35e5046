from datetime import datetime

from bus_booking.bookings.schemas import Booking
from bus_booking.boarding.service import (
    BOARDING_TIME_PER_PASSENGER,
    calculate_optimal_boarding_sequence,
    calculate_total_boarding_time,
    calculate_sequential_boarding_time,
    calculate_time_saved,
    calculate_efficiency,
    calculate_boarding_progress,
    format_duration,
    build_boarding_summary,
)

from conftest import TRAVEL_DATE


def make_booking(booking_id, seats, is_boarded=False):
    stamp = datetime(2026, 10, 17, 9, 0)
    return Booking(
        booking_id=booking_id,
        travel_date=TRAVEL_DATE,
        mobile_number="9876543210",
        seats=seats,
        is_boarded=is_boarded,
        created_at=stamp,
        updated_at=stamp,
    )


def test_farthest_seat_boards_first():
    bookings = [make_booking("a1", ["A1"]), make_booking("b3", ["B3"]), make_booking("d4", ["D4"])]

    sequence = calculate_optimal_boarding_sequence(bookings)

    assert [entry.booking.booking_id for entry in sequence] == ["d4", "b3", "a1"]
    assert [entry.sequence for entry in sequence] == [1, 2, 3]
    assert [entry.seat_depth for entry in sequence] == [15, 6, 0]
    assert all(entry.estimated_boarding_time == 60 for entry in sequence)
    assert calculate_total_boarding_time(bookings) == 60
    assert calculate_sequential_boarding_time(bookings) == 180
    assert calculate_time_saved(bookings) == 120
    assert calculate_efficiency(bookings) == 67


def test_depth_uses_farthest_seat_of_group():
    bookings = [make_booking("front-and-back", ["A1", "O4"]), make_booking("middle", ["H2", "H3"])]
    sequence = calculate_optimal_boarding_sequence(bookings)
    assert [entry.booking.booking_id for entry in sequence] == ["front-and-back", "middle"]


def test_ties_keep_input_order():
    bookings = [
        make_booking("first", ["C2", "A1"]),
        make_booking("far", ["J1"]),
        make_booking("second", ["C2"]),
        make_booking("third", ["B1", "C2"]),
    ]
    sequence = calculate_optimal_boarding_sequence(bookings)
    assert [entry.booking.booking_id for entry in sequence] == ["far", "first", "second", "third"]


def test_sequence_is_deterministic():
    bookings = [make_booking(f"bk{i}", [seat]) for i, seat in enumerate(["B2", "A4", "B2", "K1", "A4"])]
    first = calculate_optimal_boarding_sequence(bookings)
    for _ in range(5):
        assert calculate_optimal_boarding_sequence(bookings) == first


def test_input_list_is_not_reordered():
    bookings = [make_booking("a1", ["A1"]), make_booking("d4", ["D4"])]
    calculate_optimal_boarding_sequence(bookings)
    assert [b.booking_id for b in bookings] == ["a1", "d4"]


def test_empty_list():
    assert calculate_optimal_boarding_sequence([]) == []
    assert calculate_total_boarding_time([]) == 0
    assert calculate_sequential_boarding_time([]) == 0
    assert calculate_efficiency([]) == 0


def test_single_booking():
    bookings = [make_booking("only", ["F3"])]
    sequence = calculate_optimal_boarding_sequence(bookings)
    assert len(sequence) == 1
    assert sequence[0].sequence == 1
    assert calculate_total_boarding_time(bookings) == BOARDING_TIME_PER_PASSENGER
    assert calculate_efficiency(bookings) == 0


def test_efficiency_rounds_half_up():
    # 7/8 saved -> 87.5%
    bookings = [make_booking(f"bk{i}", [f"A{i % 4 + 1}"]) for i in range(8)]
    assert calculate_efficiency(bookings) == 88


def test_boarding_progress():
    bookings = [
        make_booking("a", ["A1"], is_boarded=True),
        make_booking("b", ["A2"]),
        make_booking("c", ["A3"]),
        make_booking("d", ["A4"], is_boarded=True),
    ]
    progress = calculate_boarding_progress(bookings)
    assert progress.total_passengers == 4
    assert progress.boarded_passengers == 2
    assert progress.boarding_progress == 50.0
    assert calculate_boarding_progress([]).boarding_progress == 0.0


def test_format_duration():
    assert format_duration(0) == "0s"
    assert format_duration(45) == "45s"
    assert format_duration(60) == "1m"
    assert format_duration(150) == "2m 30s"


def test_boarding_summary():
    bookings = [make_booking("a1", ["A1"]), make_booking("b3", ["B3"]), make_booking("d4", ["D4"])]
    summary = build_boarding_summary(TRAVEL_DATE, bookings)

    assert summary.travel_date == TRAVEL_DATE
    assert [entry.booking.booking_id for entry in summary.sequence] == ["d4", "b3", "a1"]
    assert summary.total_boarding_time == 60
    assert summary.sequential_boarding_time == 180
    assert summary.time_saved == 120
    assert summary.efficiency == 67
    assert summary.total_boarding_time_display == "1m"
    assert summary.sequential_boarding_time_display == "3m"
    assert summary.time_saved_display == "2m"
    assert summary.progress.total_passengers == 3
