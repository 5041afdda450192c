"""
Payable ledger: what partners are owed for closed deals

The ledger is derived on every request from closed leads joined with their
partner and property; nothing here is persisted except the payout status
kept on the lead itself.
"""

import logging
import math
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional

from realty_crm.exceptions import DataValidationError, InvalidEarningRuleError, RecordNotFoundError
from realty_crm.models import db
from realty_crm.models.lead import Lead
from realty_crm.models.property import Property
from realty_crm.models.wallet import Payable
from realty_crm.models.user import User
from realty_crm.services.earning import (EarningCalculator, EarningRule, EarningRuleResolver,
                                         quantize_amount, to_decimal)

logger = logging.getLogger(__name__)


@dataclass
class PayableEntry:
    """One closed deal and the commission owed on it"""
    lead_id: int
    deal_date: Optional[datetime]
    property: Dict
    partner: Dict
    deal_value: Decimal
    earning_rule: EarningRule
    earning_amount: Decimal
    status: str

    def to_dict(self) -> Dict:
        return {
            'leadId': self.lead_id,
            'dealDate': self.deal_date.isoformat() if self.deal_date else None,
            'property': self.property,
            'partner': self.partner,
            'dealValue': float(self.deal_value),
            'earningRule': self.earning_rule.to_dict(),
            'earningRuleLabel': self.earning_rule.describe(),
            'earningAmount': float(self.earning_amount),
            'status': self.status,
        }


class PayableAggregator:
    """Join closed leads with partners and properties into payable entries"""

    def __init__(self, default_rules: Optional[Dict] = None,
                 resolver: EarningRuleResolver = None,
                 calculator: EarningCalculator = None):
        self.resolver = resolver or EarningRuleResolver(default_rules)
        self.calculator = calculator or EarningCalculator()

    def build_ledger(self, leads: Optional[List[Lead]] = None, partner_id: str = None) -> List[PayableEntry]:
        """Build entries for closed leads, keeping fetch order.

        Leads whose partner or property is gone, or whose rule is missing,
        invalid or points based, are left out.
        """
        if leads is None:
            leads = Lead.get_closed_leads()

        entries = []
        for lead in leads:
            if not lead.is_closed:
                continue
            if partner_id and lead.partner_id != partner_id:
                continue
            entry = self.build_entry(lead)
            if entry is not None:
                entries.append(entry)
        return entries

    def build_entry(self, lead: Lead) -> Optional[PayableEntry]:
        partner = db.session.get(User, lead.partner_id) if lead.partner_id else None
        prop = db.session.get(Property, lead.property_id) if lead.property_id is not None else None
        if partner is None or prop is None:
            return None

        try:
            rule = self.resolver.resolve(partner.role, prop.get_earning_rules())
        except InvalidEarningRuleError as e:
            logger.warning(f"Skipping lead {lead.id}: invalid earning rule for {partner.role} ({e.message})")
            return None

        if rule is None or rule.is_points:
            return None

        deal_value = to_decimal(lead.deal_value(prop.listing_price), 'deal_value')
        if not deal_value.is_finite():
            logger.warning(f"Skipping lead {lead.id}: deal value is not a finite amount")
            return None

        return PayableEntry(
            lead_id=lead.id,
            deal_date=lead.closed_at or lead.created_at,
            property=prop.to_summary(),
            partner=partner.to_summary(),
            deal_value=deal_value,
            earning_rule=rule,
            earning_amount=self.calculator.calculate(deal_value, rule),
            status=lead.payout_status or 'Pending',
        )

    @staticmethod
    def summarize(entries: List[PayableEntry]) -> Dict:
        """Ledger totals overall and per payout status"""
        totals = {'Pending': Decimal('0'), 'Paid': Decimal('0')}
        for entry in entries:
            totals[entry.status] = totals.get(entry.status, Decimal('0')) + entry.earning_amount

        return {
            'count': len(entries),
            'total': float(quantize_amount(sum(totals.values(), Decimal('0')))),
            'by_status': {status: float(quantize_amount(amount)) for status, amount in totals.items()},
        }


class PayableService:
    """Ledger queries plus manually entered payables"""

    def __init__(self, default_rules: Optional[Dict] = None):
        if default_rules is None:
            from realty_crm.services.settings_service import SettingsService
            default_rules = SettingsService().get_default_earning_rules()
        self.aggregator = PayableAggregator(default_rules)

    def get_ledger(self, partner_id: str = None) -> Dict:
        entries = self.aggregator.build_ledger(partner_id=partner_id)
        return {
            'entries': [entry.to_dict() for entry in entries],
            'summary': self.aggregator.summarize(entries),
        }

    def mark_paid(self, lead_id: int) -> Lead:
        """Record that the commission on a closed lead has been paid out"""
        lead = db.session.get(Lead, lead_id)
        if lead is None:
            raise RecordNotFoundError('Lead', lead_id)
        if not lead.is_closed:
            raise DataValidationError(f"Lead {lead_id} is not a closed deal", 'status', lead.status)

        lead.payout_status = 'Paid'
        lead.paid_at = datetime.utcnow()
        db.session.commit()
        logger.info(f"Marked payout for lead {lead_id} as paid")
        return lead

    def list_manual_payables(self) -> List[Payable]:
        return Payable.query.order_by(Payable.date.desc()).all()

    def add_manual_payable(self, user_id: str, amount: float, notes: str = None) -> Payable:
        if not user_id:
            raise DataValidationError("User is required.", 'user_id')
        if amount is None or not math.isfinite(amount) or amount < 1:
            raise DataValidationError("Amount must be at least 1.", 'amount', amount)

        user = db.session.get(User, user_id)
        payable = Payable(
            user_id=user_id,
            user_name=user.name if user else f"User {user_id}",
            amount=amount,
            notes=notes,
            status='Pending',
        )
        return payable.save()
