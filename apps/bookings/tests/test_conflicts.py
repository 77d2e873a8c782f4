"""
Tests for the booking conflict resolver.

Bookings are plain namespaces here; the resolver only reads
id/start_date/end_date/status.
"""

import itertools
from datetime import date
from types import SimpleNamespace

import pytest

from apps.bookings.conflicts import (
    CheckStatus,
    DateRange,
    blocked_calendar,
    check_candidate_range,
    find_conflicts,
    house_status,
    parse_range,
)


def booking(start, end, status='pending', id=None):
    return SimpleNamespace(
        id=id or f"{start}-{end}-{status}",
        start_date=start,
        end_date=end,
        status=status,
    )


class TestDateRange:

    def test_half_open_ranges_touching_do_not_overlap(self):
        first = DateRange(date(2025, 3, 1), date(2025, 3, 5))
        second = DateRange(date(2025, 3, 5), date(2025, 3, 8))

        assert not first.overlaps(second)
        assert not second.overlaps(first)

    def test_contained_range_overlaps(self):
        outer = DateRange(date(2025, 3, 1), date(2025, 3, 10))
        inner = DateRange(date(2025, 3, 3), date(2025, 3, 4))

        assert outer.overlaps(inner)
        assert inner.overlaps(outer)

    def test_nights(self):
        assert DateRange(date(2025, 3, 1), date(2025, 3, 4)).nights == 3


class TestParseRange:

    @pytest.mark.parametrize('start,end', [
        (None, date(2025, 3, 4)),
        (date(2025, 3, 4), None),
        (None, None),
        (date(2025, 3, 4), date(2025, 3, 4)),
        (date(2025, 3, 5), date(2025, 3, 4)),
    ])
    def test_malformed_ranges_are_invalid_not_raised(self, start, end):
        result = parse_range(start, end)

        assert result.status is CheckStatus.INVALID
        assert not result.accepted
        assert result.message


class TestCheckCandidateRange:

    def test_free_range_accepted(self):
        existing = [booking(date(2025, 3, 1), date(2025, 3, 5))]

        result = check_candidate_range(existing, date(2025, 3, 5), date(2025, 3, 7))

        assert result.accepted
        assert result.range == DateRange(date(2025, 3, 5), date(2025, 3, 7))

    def test_overlap_with_pending_conflicts(self):
        pending = booking(date(2025, 3, 1), date(2025, 3, 5))

        result = check_candidate_range([pending], date(2025, 3, 4), date(2025, 3, 6))

        assert result.status is CheckStatus.CONFLICT
        assert result.conflicts == (pending,)

    def test_overlap_with_confirmed_conflicts(self):
        confirmed = booking(date(2025, 3, 1), date(2025, 3, 5), status='confirmed')

        result = check_candidate_range([confirmed], date(2025, 2, 27), date(2025, 3, 2))

        assert result.status is CheckStatus.CONFLICT

    def test_rejected_booking_releases_dates(self):
        rejected = booking(date(2025, 3, 1), date(2025, 3, 5), status='rejected')

        result = check_candidate_range([rejected], date(2025, 3, 1), date(2025, 3, 5))

        assert result.accepted

    def test_edit_ignores_itself(self):
        own = booking(date(2025, 3, 1), date(2025, 3, 5), id='own')

        result = check_candidate_range([own], date(2025, 3, 2), date(2025, 3, 6), exclude_id='own')

        assert result.accepted

    def test_past_start_is_invalid(self):
        result = check_candidate_range([], date(2025, 3, 1), date(2025, 3, 3), today=date(2025, 3, 2))

        assert result.status is CheckStatus.INVALID

    def test_starting_today_is_allowed(self):
        result = check_candidate_range([], date(2025, 3, 2), date(2025, 3, 3), today=date(2025, 3, 2))

        assert result.accepted

    def test_malformed_input_short_circuits(self):
        result = check_candidate_range([booking(date(2025, 3, 1), date(2025, 3, 5))], None, None)

        assert result.status is CheckStatus.INVALID


class TestBookingExclusivity:
    """Accepting only non-conflicting candidates never yields overlapping bookings."""

    def test_greedy_acceptance_keeps_ranges_disjoint(self):
        base = date(2025, 1, 1)
        candidates = [
            (base.replace(day=s), base.replace(day=e))
            for s, e in itertools.product(range(1, 15, 2), range(2, 20, 3))
            if s < e
        ]

        accepted = []
        for start, end in candidates:
            if check_candidate_range(accepted, start, end).accepted:
                accepted.append(booking(start, end))

        assert accepted
        for first, second in itertools.combinations(accepted, 2):
            assert not (first.start_date < second.end_date and second.start_date < first.end_date)


class TestFindConflicts:

    def test_conflicts_sorted_by_start(self):
        late = booking(date(2025, 3, 8), date(2025, 3, 12))
        early = booking(date(2025, 3, 1), date(2025, 3, 4))

        result = find_conflicts([late, early], DateRange(date(2025, 3, 2), date(2025, 3, 9)))

        assert result == [early, late]


class TestBlockedCalendar:

    def test_rejected_range_absent(self):
        rejected = booking(date(2025, 3, 1), date(2025, 3, 5), status='rejected')
        confirmed = booking(date(2025, 3, 10), date(2025, 3, 12), status='confirmed')

        calendar = blocked_calendar([rejected, confirmed], today=date(2025, 2, 1))

        assert calendar.before == date(2025, 2, 1)
        assert calendar.ranges == [DateRange(date(2025, 3, 10), date(2025, 3, 12))]

    def test_touching_ranges_merge(self):
        bookings = [
            booking(date(2025, 3, 5), date(2025, 3, 8)),
            booking(date(2025, 3, 1), date(2025, 3, 5), status='confirmed'),
            booking(date(2025, 3, 20), date(2025, 3, 22)),
        ]

        calendar = blocked_calendar(bookings)

        assert calendar.ranges == [
            DateRange(date(2025, 3, 1), date(2025, 3, 8)),
            DateRange(date(2025, 3, 20), date(2025, 3, 22)),
        ]


class TestHouseStatus:

    def test_current_and_upcoming(self):
        today = date(2025, 3, 10)
        current = booking(date(2025, 3, 8), date(2025, 3, 10), status='confirmed')
        pending_now = booking(date(2025, 3, 9), date(2025, 3, 11))
        upcoming = [
            booking(date(2025, 4, d), date(2025, 4, d + 1), status='confirmed')
            for d in (20, 1, 10, 15)
        ]

        status = house_status([current, pending_now] + upcoming, today)

        # Checkout day still counts as occupied
        assert status.current is current
        assert [b.start_date.day for b in status.upcoming] == [1, 10, 15]

    def test_empty_house(self):
        status = house_status([booking(date(2025, 3, 1), date(2025, 3, 2), status='rejected')], date(2025, 3, 1))

        assert status.current is None
        assert status.upcoming == []
