"""
Buyer requirements posted from the listings side of the app
"""

import logging
from typing import Dict, List

from realty_crm.exceptions import DataValidationError
from realty_crm.models.requirement import FURNISHING_OPTIONS, Requirement
from realty_crm.models.user import User
from realty_crm.utils import validate_currency

logger = logging.getLogger(__name__)


def _parse_range(data: Dict, low_field: str, high_field: str, label: str):
    values = []
    for field in (low_field, high_field):
        is_valid, value = validate_currency(data.get(field))
        if not is_valid:
            raise DataValidationError(f"{label} must be a positive number.", field, data.get(field))
        values.append(value)

    low, high = values
    if high < low:
        raise DataValidationError(f"Max {label.lower()} must be greater than or equal to min {label.lower()}.",
                                  high_field, data.get(high_field))
    return low, high


class RequirementService:
    """Service for buyer requirements"""

    def create_requirement(self, user: User, data: Dict) -> Requirement:
        property_type = (data.get('property_type') or '').strip()
        location = (data.get('preferred_location') or '').strip()
        if not property_type:
            raise DataValidationError("Please select a property type.", 'property_type')
        if len(location) < 3:
            raise DataValidationError("Please enter a preferred location.", 'preferred_location', location)

        min_budget, max_budget = _parse_range(data, 'min_budget', 'max_budget', 'Budget')
        min_size, max_size = _parse_range(data, 'min_size', 'max_size', 'Size')

        furnishing = data.get('furnishing') or 'unfurnished'
        if furnishing not in FURNISHING_OPTIONS:
            raise DataValidationError(f"Unknown furnishing option: {furnishing}", 'furnishing', furnishing)

        amenities = data.get('amenities') or []
        if not isinstance(amenities, list) or not all(isinstance(a, str) for a in amenities):
            raise DataValidationError("Amenities must be a list of names.", 'amenities', amenities)

        requirement = Requirement(
            user_id=user.id,
            user_name=user.name,
            user_email=user.email,
            user_phone=user.phone,
            property_type=property_type,
            preferred_location=location,
            min_budget=min_budget,
            max_budget=max_budget,
            min_size=min_size,
            max_size=max_size,
            furnishing=furnishing,
            amenities=amenities,
        )
        requirement.save()
        logger.info(f"Requirement {requirement.id} posted by {user.id}")
        return requirement

    def list_requirements(self, user: User) -> List[Requirement]:
        """Admins see every requirement, everyone else only their own"""
        query = Requirement.query
        if not user.is_admin:
            query = query.filter_by(user_id=user.id)
        return query.order_by(Requirement.created_at.desc(), Requirement.id.desc()).all()
