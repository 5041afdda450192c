"""
Application settings stored in the app_settings table
"""

import logging
import math
from typing import Dict

from realty_crm.config import ROLE_CONFIG
from realty_crm.exceptions import DataValidationError
from realty_crm.models.app_setting import AppSetting
from realty_crm.services.earning import parse_rule_map

logger = logging.getLogger(__name__)

DEFAULT_EARNING_RULES_KEY = 'default_earning_rules'
REGISTRATION_FEES_KEY = 'registration_fees'
PAYMENT_SETTINGS_KEY = 'payment_settings'


class SettingsService:
    """Read and write named settings documents"""

    def get_default_earning_rules(self) -> Dict:
        """Global fallback rules keyed by partner role"""
        document = AppSetting.get_value(DEFAULT_EARNING_RULES_KEY, {}) or {}
        return dict(document.get('earningRules') or {})

    def set_default_earning_rules(self, rules: Dict) -> Dict:
        """Validate and merge rules into the global defaults.

        Roles absent from ``rules`` keep their current rule.
        """
        if not isinstance(rules, dict):
            raise DataValidationError("earningRules must be an object", 'earningRules', rules)

        unknown = [role for role in rules if not ROLE_CONFIG.is_partner_role(role)]
        if unknown:
            raise DataValidationError(f"Unknown partner role(s): {', '.join(unknown)}", 'earningRules', unknown)

        parsed = parse_rule_map(rules)

        merged = self.get_default_earning_rules()
        for role, rule in parsed.items():
            merged[role] = rule.to_dict()

        AppSetting.set_value(DEFAULT_EARNING_RULES_KEY, {'earningRules': merged})
        logger.info(f"Default earning rules updated for roles: {sorted(parsed)}")
        return merged

    def get_registration_fees(self) -> Dict[str, float]:
        return dict(AppSetting.get_value(REGISTRATION_FEES_KEY, {}) or {})

    def set_registration_fees(self, fees: Dict) -> Dict[str, float]:
        cleaned = {}
        for role, fee in (fees or {}).items():
            if not ROLE_CONFIG.is_partner_role(role):
                raise DataValidationError(f"Unknown partner role: {role}", 'role', role)
            try:
                fee = float(fee)
            except (TypeError, ValueError):
                raise DataValidationError("Fee must be a number", role, fee)
            if not math.isfinite(fee) or fee < 0:
                raise DataValidationError("Fee cannot be negative", role, fee)
            cleaned[role] = fee

        AppSetting.set_value(REGISTRATION_FEES_KEY, cleaned)
        return cleaned

    def is_payment_enabled(self) -> bool:
        settings = AppSetting.get_value(PAYMENT_SETTINGS_KEY, {}) or {}
        return bool(settings.get('enabled', False))

    def set_payment_enabled(self, enabled: bool) -> None:
        AppSetting.set_value(PAYMENT_SETTINGS_KEY, {'enabled': bool(enabled)})
