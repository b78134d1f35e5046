"""
Seat layout of the bus.

Seats are named by a row letter (A..O, front to back) followed by a column
number (1..4), e.g. "C3". The linear position of a seat is its row-major
index and is only used for ordering.
"""

import re
from typing import Dict, Iterable, List, Tuple

TOTAL_ROWS = 15
SEATS_PER_ROW = 4
TOTAL_SEATS = TOTAL_ROWS * SEATS_PER_ROW
MAX_SEATS_PER_BOOKING = 6

ROW_LABELS = "ABCDEFGHIJKLMNO"

_SEAT_PATTERN = re.compile(r"([A-O])([1-4])")

def get_all_seats() -> List[str]:
    """All seat ids in row-major order"""
    return [f"{row}{col}" for row in ROW_LABELS for col in range(1, SEATS_PER_ROW + 1)]

def seat_rows() -> Dict[str, List[str]]:
    """Seat ids grouped by row label, for rendering the seat grid"""
    return {row: [f"{row}{col}" for col in range(1, SEATS_PER_ROW + 1)] for row in ROW_LABELS}

def is_valid_seat(seat_id: str) -> bool:
    return isinstance(seat_id, str) and _SEAT_PATTERN.fullmatch(seat_id) is not None

def parse_seat(seat_id: str) -> Tuple[int, int]:
    """Return (row_index, column_number) for a seat id"""
    match = _SEAT_PATTERN.fullmatch(seat_id)
    if not match:
        raise ValueError(f"Invalid seat id: {seat_id!r}")
    return ROW_LABELS.index(match.group(1)), int(match.group(2))

def get_seat_position(seat_id: str) -> int:
    row_index, column = parse_seat(seat_id)
    return row_index * SEATS_PER_ROW + (column - 1)

def get_farthest_seat_position(seats: Iterable[str]) -> int:
    return max(get_seat_position(seat) for seat in seats)
