"""
Property settings schema.

Property settings are stored as a JSON document. Older documents may lack
keys (``fixed_costs``, ``bank_details``) or use the camelCase names of the
first version of the app. Every read and every write goes through
``normalize_settings`` so the rest of the code can index the document
without defaulting at each call site.

Schema (version 1)::

    {
        "version": 1,
        "prices": {"adult_per_day": 3600, "child_per_day": 0, "currency": "CLP"},
        "limits": {"child_max_age": 6, "min_days_to_book": 1},
        "fixed_costs": [
            {"id": "fc-1", "name": "Cleaning", "value": 20000, "is_optional": False},
        ],
        "bank_details": {
            "account_name": "", "rut": "", "bank_name": "",
            "account_type": "", "account_number": "", "email": "",
        },
    }
"""

import copy
import uuid
from decimal import Decimal, InvalidOperation

from django.conf import settings as django_settings


SETTINGS_VERSION = 1

BANK_DETAIL_FIELDS = (
    'account_name',
    'rut',
    'bank_name',
    'account_type',
    'account_number',
    'email',
)

# camelCase keys written by the first version of the app
_LEGACY_KEYS = {
    'adultPerDay': 'adult_per_day',
    'childPerDay': 'child_per_day',
    'childMaxAge': 'child_max_age',
    'minDaysToBook': 'min_days_to_book',
    'fixedCosts': 'fixed_costs',
    'bankDetails': 'bank_details',
    'isOptional': 'is_optional',
    'accountName': 'account_name',
    'bankName': 'bank_name',
    'accountType': 'account_type',
    'accountNumber': 'account_number',
}


def default_property_settings():
    """Settings document given to newly created properties."""
    return {
        'version': SETTINGS_VERSION,
        'prices': {
            'adult_per_day': django_settings.HOUSEPOOL_DEFAULT_ADULT_PER_DAY,
            'child_per_day': django_settings.HOUSEPOOL_DEFAULT_CHILD_PER_DAY,
            'currency': django_settings.HOUSEPOOL_CURRENCY,
        },
        'limits': {
            'child_max_age': django_settings.HOUSEPOOL_CHILD_MAX_AGE,
            'min_days_to_book': django_settings.HOUSEPOOL_MIN_DAYS_TO_BOOK,
        },
        'fixed_costs': [],
        'bank_details': {field: '' for field in BANK_DETAIL_FIELDS},
    }


def _rename_legacy(data):
    if not isinstance(data, dict):
        return {}
    return {_LEGACY_KEYS.get(key, key): value for key, value in data.items()}


def _number(value, default):
    """Coerce to a JSON-friendly non-negative number, falling back to default."""
    try:
        number = Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        return default
    if not number.is_finite() or number < 0:
        return default
    if number == number.to_integral_value():
        return int(number)
    return float(number)


def _normalize_fixed_cost(raw):
    cost = _rename_legacy(raw)
    return {
        'id': str(cost.get('id') or f"fc-{uuid.uuid4().hex[:12]}"),
        'name': str(cost.get('name') or ''),
        'value': _number(cost.get('value'), 0),
        'is_optional': bool(cost.get('is_optional', False)),
    }


def normalize_settings(raw):
    """
    Return a complete, current-version settings document.

    Missing sections are filled from ``default_property_settings()``,
    legacy keys are renamed, numbers are coerced, and fixed costs
    without an id get one.
    """
    defaults = default_property_settings()
    data = _rename_legacy(copy.deepcopy(raw) if raw else {})

    prices_raw = _rename_legacy(data.get('prices'))
    limits_raw = _rename_legacy(data.get('limits'))
    bank_raw = _rename_legacy(data.get('bank_details'))

    prices = {
        'adult_per_day': _number(prices_raw.get('adult_per_day'), defaults['prices']['adult_per_day']),
        'child_per_day': _number(prices_raw.get('child_per_day'), defaults['prices']['child_per_day']),
        'currency': str(prices_raw.get('currency') or defaults['prices']['currency']),
    }
    limits = {
        'child_max_age': int(_number(limits_raw.get('child_max_age'), defaults['limits']['child_max_age'])),
        'min_days_to_book': int(_number(limits_raw.get('min_days_to_book'), defaults['limits']['min_days_to_book'])),
    }

    fixed_costs_raw = data.get('fixed_costs') or []
    if not isinstance(fixed_costs_raw, list):
        fixed_costs_raw = []

    return {
        'version': SETTINGS_VERSION,
        'prices': prices,
        'limits': limits,
        'fixed_costs': [_normalize_fixed_cost(cost) for cost in fixed_costs_raw],
        'bank_details': {field: str(bank_raw.get(field) or '') for field in BANK_DETAIL_FIELDS},
    }
