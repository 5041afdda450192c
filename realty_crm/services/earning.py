"""
Partner earning rules: validation, resolution and amount calculation

A rule describes what a partner of a given role earns on a closed deal.
Rules live either on a property (an override keyed by partner role) or in
the global default rules setting; the property override always wins.
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Dict, Optional, Union

from realty_crm.exceptions import InvalidEarningRuleError
from realty_crm.utils import format_currency

REWARD_POINTS = 'reward_points'
COMMISSION_PERCENTAGE = 'commission_percentage'
FLAT_AMOUNT = 'flat_amount'
PER_SQ_FT = 'per_sq_ft'

RULE_TYPES = (REWARD_POINTS, COMMISSION_PERCENTAGE, FLAT_AMOUNT, PER_SQ_FT)

# Amounts are kept to paise
AMOUNT_QUANTUM = Decimal('0.01')

Number = Union[int, float, str, Decimal]


def to_decimal(value: Number, field: str = 'value') -> Decimal:
    """Convert user or database input to Decimal without float artefacts"""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool) or value is None:
        raise InvalidEarningRuleError(f"'{field}' must be a number", field, value)
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise InvalidEarningRuleError(f"'{field}' must be a number", field, value)


def quantize_amount(amount: Decimal) -> Decimal:
    return amount.quantize(AMOUNT_QUANTUM, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class EarningRule:
    """Validated earning rule.

    ``total_sq_ft`` is only meaningful for per-sq-ft rules, where it must be
    positive.
    """
    type: str
    value: Decimal
    total_sq_ft: Optional[Decimal] = None

    def __post_init__(self):
        object.__setattr__(self, 'value', to_decimal(self.value))
        if self.total_sq_ft is not None:
            object.__setattr__(self, 'total_sq_ft', to_decimal(self.total_sq_ft, 'totalSqFt'))

        if self.type not in RULE_TYPES:
            raise InvalidEarningRuleError(f"Unknown earning rule type: {self.type}", 'type', self.type)
        if not self.value.is_finite() or self.value < 0:
            raise InvalidEarningRuleError("Value must be a positive number.", 'value', self.value)
        if self.type == PER_SQ_FT and (self.total_sq_ft is None or not self.total_sq_ft.is_finite()
                                       or self.total_sq_ft <= 0):
            raise InvalidEarningRuleError(
                "Total Sq. Ft. is required for this earning type.", 'totalSqFt', self.total_sq_ft
            )

    @classmethod
    def from_dict(cls, data: Dict) -> 'EarningRule':
        """Build a rule from its stored form ({type, value, totalSqFt?})"""
        if isinstance(data, EarningRule):
            return data
        if not isinstance(data, dict):
            raise InvalidEarningRuleError("Earning rule must be an object", 'rule', data)

        rule_type = data.get('type')
        if 'value' not in data or data.get('value') in (None, ''):
            raise InvalidEarningRuleError("'value' is required", 'value')

        raw_sq_ft = data.get('totalSqFt', data.get('total_sq_ft'))
        total_sq_ft = None
        if raw_sq_ft not in (None, ''):
            total_sq_ft = to_decimal(raw_sq_ft, 'totalSqFt')

        return cls(type=rule_type, value=to_decimal(data['value']), total_sq_ft=total_sq_ft)

    @property
    def is_points(self) -> bool:
        return self.type == REWARD_POINTS

    def to_dict(self) -> Dict:
        """Stored form of the rule"""
        result = {'type': self.type, 'value': float(self.value)}
        if self.total_sq_ft is not None:
            result['totalSqFt'] = float(self.total_sq_ft)
        return result

    def describe(self, currency_symbol: str = '₹') -> str:
        """Human readable summary shown next to a rule"""
        if self.type == REWARD_POINTS:
            return f"{self.value.normalize():,f} points"
        if self.type == COMMISSION_PERCENTAGE:
            return f"{self.value.normalize():f}%"
        if self.type == FLAT_AMOUNT:
            return format_currency(self.value, currency_symbol)
        total = quantize_amount(self.value * self.total_sq_ft)
        return (f"{currency_symbol}{self.value.normalize():f}/sq.ft for "
                f"{self.total_sq_ft.normalize():f} sq.ft. (Total: {format_currency(total, currency_symbol)})")


def _is_set(rule) -> bool:
    """A rule left blank in the settings form has no type"""
    if isinstance(rule, EarningRule):
        return True
    return isinstance(rule, dict) and bool(rule.get('type'))


def parse_rule_map(rules: Optional[Dict]) -> Dict[str, EarningRule]:
    """Validate a {role: rule} map, dropping roles with no rule set"""
    parsed = {}
    for role, rule in (rules or {}).items():
        if not _is_set(rule):
            continue
        try:
            parsed[role] = EarningRule.from_dict(rule)
        except InvalidEarningRuleError as e:
            e.field = f"{role}.{e.field}" if e.field else role
            raise
    return parsed


class EarningRuleResolver:
    """Pick the rule that applies to a partner role.

    The global defaults are handed in once; callers pass the property's own
    overrides per lookup.
    """

    def __init__(self, default_rules: Optional[Dict] = None):
        self.default_rules = dict(default_rules or {})

    def resolve(self, role: str, property_rules: Optional[Dict] = None) -> Optional[EarningRule]:
        """Return the property override for ``role``, else the global default, else None.

        Raises InvalidEarningRuleError when the chosen rule is malformed.
        """
        raw_rule = None
        if property_rules and _is_set(property_rules.get(role)):
            raw_rule = property_rules[role]
        elif _is_set(self.default_rules.get(role)):
            raw_rule = self.default_rules[role]

        if raw_rule is None:
            return None
        return EarningRule.from_dict(raw_rule)


class EarningCalculator:
    """Compute what a rule pays on a deal"""

    def calculate(self, deal_value: Number, rule: EarningRule) -> Decimal:
        if rule.type == COMMISSION_PERCENTAGE:
            amount = to_decimal(deal_value, 'deal_value') * rule.value / Decimal('100')
        elif rule.type == FLAT_AMOUNT:
            amount = rule.value
        elif rule.type == PER_SQ_FT:
            amount = rule.value * rule.total_sq_ft
        else:
            # Reward points carry no monetary amount
            amount = Decimal('0')
        return quantize_amount(amount)
