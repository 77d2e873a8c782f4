"""
Booking conflict resolution.

Pure functions over booking-like objects (anything with ``id``,
``start_date``, ``end_date`` and ``status``). No database access here;
services load the bookings and act on the results.

Ranges are half-open: a booking occupies ``[start_date, end_date)``,
so a stay ending on the 10th does not collide with one starting on
the 10th. Rejected bookings never block.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Iterable, List, Optional, Tuple


REJECTED = 'rejected'
CONFIRMED = 'confirmed'

UPCOMING_LIMIT = 3


@dataclass(frozen=True)
class DateRange:
    start: date
    end: date

    @property
    def nights(self) -> int:
        return (self.end - self.start).days

    def overlaps(self, other: 'DateRange') -> bool:
        return self.start < other.end and other.start < self.end


class CheckStatus(str, Enum):
    OK = 'ok'
    INVALID = 'invalid'
    CONFLICT = 'conflict'


@dataclass(frozen=True)
class CandidateCheck:
    """Outcome of checking a requested range against a property's bookings."""

    status: CheckStatus
    message: str = ''
    range: Optional[DateRange] = None
    conflicts: Tuple[Any, ...] = ()

    @property
    def accepted(self) -> bool:
        return self.status is CheckStatus.OK


@dataclass(frozen=True)
class BlockedCalendar:
    """Dates a calendar must render as unavailable."""

    before: Optional[date]
    ranges: List[DateRange] = field(default_factory=list)


@dataclass(frozen=True)
class HouseStatus:
    current: Any = None
    upcoming: List[Any] = field(default_factory=list)


def blocks_calendar(booking) -> bool:
    return booking.status != REJECTED


def booking_range(booking) -> DateRange:
    return DateRange(booking.start_date, booking.end_date)


def parse_range(start: Optional[date], end: Optional[date]) -> CandidateCheck:
    """Validate the shape of a requested range without looking at bookings."""
    if start is None or end is None:
        return CandidateCheck(CheckStatus.INVALID, "Both start and end dates are required")
    if start >= end:
        return CandidateCheck(CheckStatus.INVALID, "End date must be after start date")
    return CandidateCheck(CheckStatus.OK, range=DateRange(start, end))


def find_conflicts(
    bookings: Iterable[Any],
    candidate: DateRange,
    exclude_id: Any = None
) -> List[Any]:
    """Non-rejected bookings whose range overlaps ``candidate``, ordered by start."""
    conflicts = [
        booking for booking in bookings
        if blocks_calendar(booking)
        and (exclude_id is None or str(booking.id) != str(exclude_id))
        and booking_range(booking).overlaps(candidate)
    ]
    return sorted(conflicts, key=lambda b: (b.start_date, str(b.id)))


def check_candidate_range(
    bookings: Iterable[Any],
    start: Optional[date],
    end: Optional[date],
    today: Optional[date] = None,
    exclude_id: Any = None
) -> CandidateCheck:
    """
    Decide whether ``[start, end)`` may be requested.

    Args:
        bookings: Existing bookings of the property, any status
        start: First night
        end: Checkout day
        today: Ranges starting before this date are invalid (skipped if None)
        exclude_id: Booking being edited, ignored when looking for overlaps

    Returns:
        CandidateCheck with status OK, INVALID (malformed range or in
        the past) or CONFLICT (overlapping bookings attached)
    """
    parsed = parse_range(start, end)
    if not parsed.accepted:
        return parsed

    if today is not None and start < today:
        return CandidateCheck(CheckStatus.INVALID, "Bookings cannot start in the past", range=parsed.range)

    conflicts = find_conflicts(bookings, parsed.range, exclude_id=exclude_id)
    if conflicts:
        first = conflicts[0]
        return CandidateCheck(
            CheckStatus.CONFLICT,
            f"Dates overlap an existing booking from {first.start_date} to {first.end_date}",
            range=parsed.range,
            conflicts=tuple(conflicts),
        )

    return parsed


def blocked_calendar(bookings: Iterable[Any], today: Optional[date] = None) -> BlockedCalendar:
    """
    Everything before ``today`` plus the range of every non-rejected
    booking, merged where ranges touch or overlap.
    """
    ranges = sorted(
        (booking_range(b) for b in bookings if blocks_calendar(b)),
        key=lambda r: (r.start, r.end)
    )

    merged: List[DateRange] = []
    for current in ranges:
        if merged and current.start <= merged[-1].end:
            last = merged[-1]
            merged[-1] = DateRange(last.start, max(last.end, current.end))
        else:
            merged.append(current)

    return BlockedCalendar(before=today, ranges=merged)


def house_status(bookings: Iterable[Any], today: date) -> HouseStatus:
    """
    Who is in the house today, and the next confirmed stays.

    A confirmed booking is current when ``start <= today <= end``; the
    checkout day still counts. Upcoming stays start after today.
    """
    confirmed = sorted(
        (b for b in bookings if b.status == CONFIRMED),
        key=lambda b: (b.start_date, str(b.id))
    )

    current = next(
        (b for b in confirmed if b.start_date <= today <= b.end_date),
        None
    )
    upcoming = [b for b in confirmed if b.start_date > today][:UPCOMING_LIMIT]

    return HouseStatus(current=current, upcoming=upcoming)
