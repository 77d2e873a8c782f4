from apps.properties.settings_schema import (
    SETTINGS_VERSION,
    BANK_DETAIL_FIELDS,
    default_property_settings,
    normalize_settings,
)


class TestNormalizeSettings:
    """Tests for the settings document normalizer."""

    def test_empty_document_gets_defaults(self, settings):
        settings.HOUSEPOOL_DEFAULT_ADULT_PER_DAY = 3600
        settings.HOUSEPOOL_CURRENCY = 'CLP'

        result = normalize_settings(None)

        assert result['version'] == SETTINGS_VERSION
        assert result['prices']['adult_per_day'] == 3600
        assert result['prices']['currency'] == 'CLP'
        assert result['fixed_costs'] == []
        assert set(result['bank_details']) == set(BANK_DETAIL_FIELDS)

    def test_default_document_is_already_normal(self):
        defaults = default_property_settings()
        assert normalize_settings(defaults) == defaults

    def test_legacy_camel_case_keys(self):
        raw = {
            'prices': {'adultPerDay': 5000, 'childPerDay': 1000, 'currency': 'USD'},
            'limits': {'childMaxAge': 4, 'minDaysToBook': 2},
            'fixedCosts': [{'id': 'fc-1', 'name': 'Cleaning', 'value': 20000, 'isOptional': True}],
            'bankDetails': {'accountName': 'Jane', 'bankName': 'Bank'},
        }

        result = normalize_settings(raw)

        assert result['prices'] == {'adult_per_day': 5000, 'child_per_day': 1000, 'currency': 'USD'}
        assert result['limits'] == {'child_max_age': 4, 'min_days_to_book': 2}
        assert result['fixed_costs'] == [
            {'id': 'fc-1', 'name': 'Cleaning', 'value': 20000, 'is_optional': True}
        ]
        assert result['bank_details']['account_name'] == 'Jane'
        assert result['bank_details']['bank_name'] == 'Bank'
        assert result['bank_details']['rut'] == ''

    def test_fixed_cost_without_id_gets_one(self):
        result = normalize_settings({'fixed_costs': [{'name': 'Gas', 'value': '1500.50'}]})

        cost = result['fixed_costs'][0]
        assert cost['id'].startswith('fc-')
        assert cost['value'] == 1500.5
        assert cost['is_optional'] is False

    def test_negative_or_garbage_numbers_fall_back(self):
        defaults = default_property_settings()

        result = normalize_settings({'prices': {'adult_per_day': -1, 'child_per_day': 'abc'}})

        assert result['prices']['adult_per_day'] == defaults['prices']['adult_per_day']
        assert result['prices']['child_per_day'] == defaults['prices']['child_per_day']

    def test_input_is_not_mutated(self):
        raw = {'fixed_costs': [{'name': 'Gas', 'value': 10}]}
        normalize_settings(raw)
        assert 'id' not in raw['fixed_costs'][0]
