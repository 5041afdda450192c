"""
Property listings
"""

import logging
from typing import Dict, List

from realty_crm.config import ROLE_CONFIG
from realty_crm.exceptions import DataValidationError, RecordNotFoundError
from realty_crm.models import db
from realty_crm.models.property import Property
from realty_crm.models.user import User
from realty_crm.services.earning import parse_rule_map
from realty_crm.utils import validate_currency

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = (
    'catalog_type', 'property_category', 'property_type_id', 'overview', 'feature_image_id',
    'built_up_area', 'carpet_area', 'super_built_up_area', 'unit_of_measurement',
    'bedrooms', 'bathrooms', 'amenities', 'locality', 'address_line', 'city', 'state',
    'country', 'pincode', 'price_type',
)


class PropertyService:
    """Service for property listings"""

    def create_property(self, data: Dict, owner: User) -> Property:
        """New listings wait for admin verification"""
        title = (data.get('catalog_title') or '').strip()
        if not title:
            raise DataValidationError("Catalog title is required.", 'catalog_title')

        is_valid, price = validate_currency(data.get('listing_price'))
        if not is_valid:
            raise DataValidationError("Listing price must be a positive number.", 'listing_price',
                                      data.get('listing_price'))

        prop = Property(
            catalog_title=title,
            listing_price=price,
            owner_id=owner.id,
            listed_by=owner.role,
            status='Pending Verification',
        )
        for field in EDITABLE_FIELDS:
            if data.get(field) is not None:
                setattr(prop, field, data[field])

        if data.get('earning_rules'):
            prop.earning_rules = self._validated_rules(data['earning_rules'])

        prop.save()
        logger.info(f"Property {prop.id} created by {owner.id}")
        return prop

    def list_properties(self, status: str = None, owner_id: str = None) -> List[Property]:
        query = Property.query
        if status:
            query = query.filter_by(status=status)
        if owner_id:
            query = query.filter_by(owner_id=owner_id)
        return query.order_by(Property.created_at.desc()).all()

    def get_property(self, property_id: int) -> Property:
        prop = db.session.get(Property, property_id)
        if prop is None:
            raise RecordNotFoundError('Property', property_id)
        return prop

    def approve(self, property_id: int) -> Property:
        return self.update_status(property_id, 'For Sale')

    def update_status(self, property_id: int, status: str, notes: str = None) -> Property:
        if status not in Property.STATUSES:
            raise DataValidationError(f"Unknown property status: {status}", 'status', status)

        prop = self.get_property(property_id)
        prop.status = status
        if notes:
            prop.modification_notes = notes
        db.session.commit()
        logger.info(f"Property {property_id} status set to {status}")
        return prop

    def set_earning_rules(self, property_id: int, rules: Dict) -> Property:
        """Replace the per-role overrides; blank roles fall back to the defaults"""
        prop = self.get_property(property_id)
        prop.earning_rules = self._validated_rules(rules)
        db.session.commit()
        logger.info(f"Earning rules updated for property {property_id}")
        return prop

    @staticmethod
    def _validated_rules(rules: Dict) -> Dict:
        if not isinstance(rules, dict):
            raise DataValidationError("earning_rules must be an object", 'earning_rules', rules)
        unknown = [role for role in rules if not ROLE_CONFIG.is_partner_role(role)]
        if unknown:
            raise DataValidationError(f"Unknown partner role(s): {', '.join(unknown)}", 'earning_rules', unknown)
        return {role: rule.to_dict() for role, rule in parse_rule_map(rules).items()}
