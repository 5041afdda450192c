"""
Dashboard metrics calculation service
"""

import math
from typing import Dict, Iterable

from realty_crm.models.lead import CLOSING_STATUSES, Lead
from realty_crm.models.property import Property
from realty_crm.models.user import User
from realty_crm.config import ROLE_CONFIG


def closed_deal_revenue(leads: Iterable[Lead]) -> float:
    """Total deal value of closed leads; the listing price stands in for a missing closing amount"""
    closed = [lead for lead in leads if lead.is_closed]
    property_ids = {lead.property_id for lead in closed if lead.closing_amount is None}
    prices = {}
    if property_ids:
        prices = {p.id: p.listing_price for p in Property.query.filter(Property.id.in_(property_ids)).all()}

    values = (lead.deal_value(prices.get(lead.property_id)) for lead in closed)
    return round(sum(value for value in values if math.isfinite(value)), 2)


class AnalyticsService:
    """Service for dashboard metrics"""

    def get_dashboard_stats(self, user: User) -> Dict:
        """Stats for the signed-in user's role"""
        if user.is_admin:
            return self.get_admin_stats()
        if user.role == 'seller':
            return self.get_seller_stats(user)
        if user.is_partner:
            return self.get_partner_stats(user)
        return {}

    def get_admin_stats(self) -> Dict:
        return {
            'totalProperties': Property.query.count(),
            'totalPartners': User.query.filter(User.role.in_(list(ROLE_CONFIG.partner_roles))).count(),
            'closedDeals': Lead.query.filter(Lead.status.in_(CLOSING_STATUSES)).count(),
        }

    def get_seller_stats(self, seller: User) -> Dict:
        """Lead and revenue totals over the seller's own listings"""
        property_ids = [p.id for p in Property.query.filter_by(owner_id=seller.id).all()]
        if not property_ids:
            return {'totalLeads': 0, 'newLeads': 0, 'propertiesSold': 0, 'totalRevenue': 0}

        leads = Lead.query.filter(Lead.property_id.in_(property_ids)).all()
        closed = [lead for lead in leads if lead.is_closed]

        return {
            'totalLeads': len(leads),
            'newLeads': len([lead for lead in leads if lead.status == 'New lead']),
            'propertiesSold': len({lead.property_id for lead in closed}),
            'totalRevenue': closed_deal_revenue(closed),
        }

    def get_partner_stats(self, partner: User) -> Dict:
        leads = Lead.query.filter_by(partner_id=partner.id).all()
        return {
            'totalLeads': len(leads),
            'newLeads': len([lead for lead in leads if lead.status == 'New lead']),
            'closedDeals': len([lead for lead in leads if lead.is_closed]),
            'walletBalance': partner.wallet_balance or 0,
            'rewardPoints': partner.reward_balance or 0,
            'teamSize': User.query.filter_by(team_lead_id=partner.id).count(),
        }
