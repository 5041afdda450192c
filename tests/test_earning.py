from decimal import Decimal

import pytest

from realty_crm.exceptions import InvalidEarningRuleError
from realty_crm.services.earning import (EarningCalculator, EarningRule, EarningRuleResolver,
                                         parse_rule_map)


@pytest.fixture
def calculator():
    return EarningCalculator()


def test_commission_percentage_is_share_of_deal_value(calculator):
    rule = EarningRule.from_dict({'type': 'commission_percentage', 'value': 2})
    assert calculator.calculate(1000000, rule) == Decimal('20000')


def test_flat_amount_ignores_deal_value(calculator):
    rule = EarningRule.from_dict({'type': 'flat_amount', 'value': 5000})
    assert calculator.calculate(1000000, rule) == Decimal('5000')
    assert calculator.calculate(1, rule) == Decimal('5000')


def test_per_sq_ft_multiplies_by_total_area(calculator):
    rule = EarningRule.from_dict({'type': 'per_sq_ft', 'value': 12.5, 'totalSqFt': 1200})
    assert calculator.calculate(999, rule) == Decimal('15000')


def test_reward_points_carry_no_amount(calculator):
    rule = EarningRule.from_dict({'type': 'reward_points', 'value': 250})
    assert rule.is_points
    assert calculator.calculate(1000000, rule) == Decimal('0')


def test_amounts_round_half_up_to_paise(calculator):
    rule = EarningRule.from_dict({'type': 'commission_percentage', 'value': '1.5'})
    # 333 * 1.5% = 4.995
    assert calculator.calculate(333, rule) == Decimal('5.00')


def test_decimal_inputs_avoid_float_artefacts(calculator):
    rule = EarningRule.from_dict({'type': 'commission_percentage', 'value': 0.1})
    assert calculator.calculate(0.3, rule) == Decimal('0.00')
    assert calculator.calculate('1234567.89', rule) == Decimal('1234.57')


@pytest.mark.parametrize('sq_ft', [None, 0, -10, 'Infinity', 'NaN'])
def test_per_sq_ft_without_positive_area_is_rejected(sq_ft):
    data = {'type': 'per_sq_ft', 'value': 10}
    if sq_ft is not None:
        data['totalSqFt'] = sq_ft
    with pytest.raises(InvalidEarningRuleError) as exc_info:
        EarningRule.from_dict(data)
    assert exc_info.value.field == 'totalSqFt'


@pytest.mark.parametrize('data', [
    {'type': 'bonus', 'value': 10},
    {'type': 'flat_amount', 'value': -1},
    {'type': 'flat_amount', 'value': 'ten'},
    {'type': 'flat_amount'},
    'flat_amount',
])
def test_malformed_rules_are_rejected(data):
    with pytest.raises(InvalidEarningRuleError):
        EarningRule.from_dict(data)


def test_rule_round_trips_through_stored_form():
    rule = EarningRule.from_dict({'type': 'per_sq_ft', 'value': '7.5', 'total_sq_ft': '800'})
    assert rule.to_dict() == {'type': 'per_sq_ft', 'value': 7.5, 'totalSqFt': 800.0}
    assert EarningRule.from_dict(rule.to_dict()) == rule


def test_describe():
    assert EarningRule('commission_percentage', 2).describe() == '2%'
    assert EarningRule('flat_amount', 5000).describe() == '₹5,000.00'
    assert EarningRule('reward_points', 1500).describe() == '1,500 points'
    assert EarningRule('per_sq_ft', 10, 1200).describe() == \
        '₹10/sq.ft for 1200 sq.ft. (Total: ₹12,000.00)'


class TestResolver:

    defaults = {
        'affiliate': {'type': 'commission_percentage', 'value': 2},
        'channel': {'type': 'flat_amount', 'value': 10000},
    }

    def test_property_override_wins_over_default(self, calculator):
        resolver = EarningRuleResolver(self.defaults)
        rule = resolver.resolve('affiliate', {'affiliate': {'type': 'flat_amount', 'value': 5000}})

        assert rule == EarningRule('flat_amount', 5000)
        assert calculator.calculate(1000000, rule) == Decimal('5000')

    def test_falls_back_to_default(self):
        resolver = EarningRuleResolver(self.defaults)
        rule = resolver.resolve('channel', {'affiliate': {'type': 'flat_amount', 'value': 5000}})
        assert rule == EarningRule('flat_amount', 10000)

    def test_blank_override_falls_back_to_default(self):
        resolver = EarningRuleResolver(self.defaults)
        rule = resolver.resolve('affiliate', {'affiliate': {'type': '', 'value': ''}})
        assert rule == EarningRule('commission_percentage', 2)

    def test_none_when_no_rule_exists(self):
        resolver = EarningRuleResolver(self.defaults)
        assert resolver.resolve('franchisee', {}) is None
        assert EarningRuleResolver().resolve('affiliate') is None

    def test_invalid_chosen_rule_raises(self):
        resolver = EarningRuleResolver(self.defaults)
        with pytest.raises(InvalidEarningRuleError):
            resolver.resolve('affiliate', {'affiliate': {'type': 'per_sq_ft', 'value': 10}})


def test_parse_rule_map_skips_blank_roles_and_names_bad_role():
    parsed = parse_rule_map({
        'affiliate': {'type': 'flat_amount', 'value': 100},
        'channel': {'type': '', 'value': 0},
    })
    assert list(parsed) == ['affiliate']

    with pytest.raises(InvalidEarningRuleError) as exc_info:
        parse_rule_map({'associate': {'type': 'per_sq_ft', 'value': 5}})
    assert exc_info.value.field == 'associate.totalSqFt'
