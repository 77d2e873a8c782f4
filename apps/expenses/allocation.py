"""
Shared Expense Allocation
=========================

Pure computation of what each member owes for a property's shared
expenses in one calendar month. Nothing here touches the database:
callers pass expenses, tags, shares and the roster as plain objects
(model instances work, so do namespaces).

Algorithm:
    1. Windowing. A ``one-time`` expense counts only in the month it was
       created. Any other frequency counts in every month from its
       creation month on; ``quarterly`` and ``yearly`` are labels and
       do not change the monthly cadence.
    2. Roster restriction. Shares whose email is not on the roster are
       dropped.
    3. Cohort sizing. For each tag, the cohort is the set of distinct
       roster emails holding a share that references it.
    4. One decision per email, by allocation mode:

       - ``Override``: the custom amount, zero included
       - ``TagRef``: ``round(pool * pct / 100 / cohort) + fixed_fee``,
         or 0 when the tag no longer exists
       - ``DirectPercent``: ``round(pool * pct / 100)``
       - ``Unset``: 0

       Rounding is half-up to whole currency units, after the division.
    5. Roster emails with no share at all owe 0 and are reported as
       unassigned.

When an email has several shares (one per tag), the one with the
strongest mode wins; ties go to the most recently updated share, then
to the lowest id, so the result never depends on input order.

Example::

    result = allocate(
        expenses=expenses,
        shares=shares,
        tags=tags,
        active_emails=['ana@example.com', 'ben@example.com'],
        month=Month(2025, 3),
    )
    result.payments   # {'ana@example.com': Decimal('25000'), ...}
    result.unassigned # ['ben@example.com']
"""

import calendar
import logging
from dataclasses import dataclass, field
from datetime import MAXYEAR, MINYEAR, date, datetime, tzinfo
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Iterable, List, Optional, Union

from apps.accounts.emails import normalize_member_email

logger = logging.getLogger(__name__)

ONE_TIME = 'one-time'
WHOLE_UNITS = Decimal('1')
ZERO = Decimal('0')
HUNDRED = Decimal('100')


# =============================================================================
# Months
# =============================================================================

@dataclass(frozen=True, order=True)
class Month:
    """A calendar month, the allocation window."""

    year: int
    month: int

    def __post_init__(self):
        if not MINYEAR <= self.year <= MAXYEAR:
            raise ValueError(f"Invalid year: {self.year}")
        if not 1 <= self.month <= 12:
            raise ValueError(f"Invalid month: {self.month}")

    @classmethod
    def from_date(cls, value: date) -> 'Month':
        return cls(value.year, value.month)

    @classmethod
    def parse(cls, text: str) -> 'Month':
        """Parse ``YYYY-MM``. Raises ValueError on anything else."""
        try:
            year, month = text.split('-')
            return cls(int(year), int(month))
        except (AttributeError, TypeError, ValueError):
            raise ValueError(f"Invalid period '{text}'. Use YYYY-MM")

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def last_day(self) -> date:
        return date(self.year, self.month, calendar.monthrange(self.year, self.month)[1])

    def contains(self, value: date) -> bool:
        return self.first_day <= value <= self.last_day

    def __str__(self):
        return f"{self.year:04d}-{self.month:02d}"


def _as_date(value: Union[date, datetime], tz: Optional[tzinfo] = None) -> date:
    if isinstance(value, datetime):
        if tz is not None and value.tzinfo is not None:
            value = value.astimezone(tz)
        return value.date()
    return value


def _money(value: Any) -> Decimal:
    if value is None:
        return ZERO
    return value if isinstance(value, Decimal) else Decimal(str(value))


def _round_whole(value: Decimal) -> Decimal:
    return value.quantize(WHOLE_UNITS, rounding=ROUND_HALF_UP)


# =============================================================================
# Step 1: windowing
# =============================================================================

def expense_in_effect(expense, month: Month, tz: Optional[tzinfo] = None) -> bool:
    created = _as_date(expense.created_at, tz)
    if expense.frequency == ONE_TIME:
        return month.contains(created)
    return created <= month.last_day


def expenses_in_effect(
    expenses: Iterable[Any],
    month: Optional[Month],
    tz: Optional[tzinfo] = None
) -> List[Any]:
    """Expenses charged in ``month``. ``None`` means no windowing."""
    if month is None:
        return list(expenses)
    return [expense for expense in expenses if expense_in_effect(expense, month, tz)]


def pool_total(expenses: Iterable[Any]) -> Decimal:
    return sum((_money(expense.amount) for expense in expenses), ZERO)


# =============================================================================
# Allocation modes
# =============================================================================

@dataclass(frozen=True)
class Override:
    amount: Decimal


@dataclass(frozen=True)
class TagRef:
    tag_id: str


@dataclass(frozen=True)
class DirectPercent:
    percentage: Decimal


@dataclass(frozen=True)
class Unset:
    pass


AllocationMode = Union[Override, TagRef, DirectPercent, Unset]

_PRECEDENCE = {Override: 3, TagRef: 2, DirectPercent: 1, Unset: 0}


def allocation_mode(share) -> AllocationMode:
    """The single effective mode of a share record."""
    if share.custom_amount is not None:
        return Override(_money(share.custom_amount))
    if share.tag_id:
        return TagRef(str(share.tag_id))
    if share.share_percentage is not None:
        return DirectPercent(_money(share.share_percentage))
    return Unset()


def _share_rank(share):
    updated = getattr(share, 'updated_at', None)
    return (
        _PRECEDENCE[type(allocation_mode(share))],
        updated is not None,
        updated or datetime.min,
    )


def effective_shares(shares: Iterable[Any], active_emails: Iterable[str]) -> Dict[str, Any]:
    """
    One share per roster email (steps 2 and the per-email pick).

    Strongest mode first, then latest ``updated_at``, then lowest id.
    """
    active = {normalize_member_email(email) for email in active_emails}
    chosen: Dict[str, Any] = {}

    ordered = sorted(shares, key=lambda s: str(s.id))
    for share in ordered:
        email = normalize_member_email(share.member_email)
        if email not in active:
            continue
        current = chosen.get(email)
        if current is None or _share_rank(share) > _share_rank(current):
            chosen[email] = share

    return chosen


def cohort_sizes(shares: Iterable[Any], active_emails: Iterable[str]) -> Dict[str, int]:
    """Distinct roster emails per referenced tag id (step 3)."""
    active = {normalize_member_email(email) for email in active_emails}
    holders: Dict[str, set] = {}

    for share in shares:
        email = normalize_member_email(share.member_email)
        if email in active and share.tag_id:
            holders.setdefault(str(share.tag_id), set()).add(email)

    return {tag_id: len(emails) for tag_id, emails in holders.items()}


# =============================================================================
# Steps 4 and 5
# =============================================================================

def amount_for(
    mode: AllocationMode,
    total_pool: Decimal,
    tags_by_id: Dict[str, Any],
    cohorts: Dict[str, int]
) -> Decimal:
    """Owed amount for one member under ``mode``."""
    if isinstance(mode, Override):
        return mode.amount

    if isinstance(mode, TagRef):
        tag = tags_by_id.get(mode.tag_id)
        if tag is None:
            return ZERO
        cohort = cohorts.get(mode.tag_id) or 1
        variable = total_pool * _money(tag.share_percentage) / HUNDRED / cohort
        return _round_whole(variable) + _money(tag.fixed_fee)

    if isinstance(mode, DirectPercent):
        return _round_whole(total_pool * mode.percentage / HUNDRED)

    return ZERO


def compute_member_payments(
    total_pool: Decimal,
    shares: Iterable[Any],
    tags: Iterable[Any],
    active_emails: Iterable[str]
) -> Dict[str, Decimal]:
    """
    Map every roster email that has at least one share to its amount owed.

    Args:
        total_pool: Sum of the expenses in effect
        shares: MemberShare-like objects (member_email, tag_id,
            share_percentage, custom_amount, updated_at, id)
        tags: MemberTag-like objects (id, share_percentage, fixed_fee)
        active_emails: The property roster

    Returns:
        dict: email -> Decimal, keys sorted
    """
    shares = list(shares)
    active_emails = list(active_emails)
    tags_by_id = {str(tag.id): tag for tag in tags}
    cohorts = cohort_sizes(shares, active_emails)

    payments: Dict[str, Decimal] = {}
    for email, share in sorted(effective_shares(shares, active_emails).items()):
        mode = allocation_mode(share)
        payments[email] = amount_for(mode, total_pool, tags_by_id, cohorts)
        logger.debug("Allocation %s: %s -> %s", email, mode, payments[email])

    return payments


@dataclass(frozen=True)
class AllocationResult:
    month: Optional[Month]
    total_pool: Decimal
    payments: Dict[str, Decimal] = field(default_factory=dict)
    unassigned: List[str] = field(default_factory=list)

    @property
    def total_assigned(self) -> Decimal:
        return sum(self.payments.values(), ZERO)


def allocate(
    *,
    expenses: Iterable[Any],
    shares: Iterable[Any],
    tags: Iterable[Any],
    active_emails: Iterable[str],
    month: Optional[Month] = None,
    tz: Optional[tzinfo] = None
) -> AllocationResult:
    """
    Run the whole allocation for one property and month.

    ``payments`` covers the full roster; members without any share are
    listed in ``unassigned`` and owe 0.
    """
    roster = sorted({normalize_member_email(email) for email in active_emails if email})
    in_effect = expenses_in_effect(expenses, month, tz)
    total = pool_total(in_effect)

    assigned = compute_member_payments(total, shares, tags, roster)
    unassigned = [email for email in roster if email not in assigned]

    payments = {email: assigned.get(email, ZERO) for email in roster}

    return AllocationResult(
        month=month,
        total_pool=total,
        payments=payments,
        unassigned=unassigned,
    )
