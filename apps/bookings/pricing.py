"""
Booking price quotes.

A stay costs ``nights * (adults * adult_per_day + children * child_per_day)``
plus every mandatory fixed cost, plus the optional fixed costs the guest
selected. Fixed costs are charged once per booking. Unknown fee ids are
ignored.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional

CENTS = Decimal('0.01')


@dataclass(frozen=True)
class Quote:
    nights: int
    lodging: Decimal
    fixed_costs: Decimal
    optional_fees: Decimal
    total: Decimal
    currency: str
    items: List[dict] = field(default_factory=list)


def _money(value) -> Decimal:
    return Decimal(str(value or 0)).quantize(CENTS)


def quote_booking(
    settings: dict,
    start: date,
    end: date,
    adults: int = 1,
    children: int = 0,
    selected_optional_fees: Optional[Iterable[str]] = None
) -> Quote:
    """
    Price a stay from a normalized settings document.

    Args:
        settings: Output of ``normalize_settings``
        start: First night
        end: Checkout day
        adults: Adult guests
        children: Child guests
        selected_optional_fees: Fixed-cost ids the guest opted into

    Returns:
        Quote with the breakdown and line items
    """
    nights = max((end - start).days, 0)
    prices = settings['prices']
    selected = set(selected_optional_fees or [])

    adult_rate = _money(prices['adult_per_day'])
    child_rate = _money(prices['child_per_day'])
    lodging = (nights * (adults * adult_rate + children * child_rate)).quantize(CENTS)

    items = [{'id': 'lodging', 'name': 'Lodging', 'value': lodging, 'is_optional': False}]
    fixed_total = Decimal('0.00')
    optional_total = Decimal('0.00')

    for cost in settings['fixed_costs']:
        value = _money(cost['value'])
        if not cost['is_optional']:
            fixed_total += value
        elif cost['id'] in selected:
            optional_total += value
        else:
            continue
        items.append({
            'id': cost['id'],
            'name': cost['name'],
            'value': value,
            'is_optional': cost['is_optional'],
        })

    return Quote(
        nights=nights,
        lodging=lodging,
        fixed_costs=fixed_total,
        optional_fees=optional_total,
        total=lodging + fixed_total + optional_total,
        currency=prices['currency'],
        items=items,
    )
