"""
Leads, deal progress and site visit appointments
"""

import logging
from datetime import datetime
from typing import Dict, List, Optional

from realty_crm.exceptions import DataValidationError, RecordNotFoundError
from realty_crm.models import db
from realty_crm.models.appointment import Appointment
from realty_crm.models.lead import DEAL_STATUS_OPTIONS, LEAD_STATUS_OPTIONS, Lead
from realty_crm.models.user import User
from realty_crm.utils import parse_iso_datetime, validate_currency

logger = logging.getLogger(__name__)

FORWARDED = 'Forwarded'
NEW_LEAD = 'New lead'
BOOKING_CANCELLED = 'booking cancelled'

# Columns carried over when a lead is forwarded to another partner
COPIED_FIELDS = ('name', 'email', 'phone', 'city', 'state', 'country', 'property_id',
                 'customer_id', 'deal_status')


class LeadService:
    """Service for leads and their deal lifecycle"""

    def create_lead(self, data: Dict, partner_id: str = None) -> Lead:
        name = (data.get('name') or '').strip()
        if not name:
            raise DataValidationError("Lead name is required.", 'name')

        lead = Lead(
            name=name,
            email=data.get('email'),
            phone=data.get('phone'),
            city=data.get('city'),
            state=data.get('state'),
            country=data.get('country'),
            property_id=data.get('property_id'),
            partner_id=data.get('partner_id') or partner_id,
            customer_id=data.get('customer_id'),
            status=NEW_LEAD,
            deal_status=NEW_LEAD,
        )
        lead.save()
        logger.info(f"Lead {lead.id} created for partner {lead.partner_id}")
        return lead

    def list_leads(self, status: str = None, partner_id: str = None) -> List[Lead]:
        query = Lead.query
        if status:
            query = query.filter_by(status=status)
        if partner_id:
            query = query.filter_by(partner_id=partner_id)
        return query.order_by(Lead.created_at.desc()).all()

    def get_lead(self, lead_id: int) -> Lead:
        lead = db.session.get(Lead, lead_id)
        if lead is None:
            raise RecordNotFoundError('Lead', lead_id)
        return lead

    def update_status(self, lead_id: int, status: str) -> Lead:
        if status not in LEAD_STATUS_OPTIONS and status != 'Completed':
            raise DataValidationError(f"Unknown lead status: {status}", 'status', status)

        lead = self.get_lead(lead_id)
        lead.status = status
        if lead.is_closed and lead.closed_at is None:
            lead.closed_at = datetime.utcnow()
        db.session.commit()
        return lead

    def update_deal_status(self, lead_id: int, deal_status: str) -> Lead:
        """Set the deal status; the linked customer is deactivated on cancellation"""
        if deal_status not in DEAL_STATUS_OPTIONS:
            raise DataValidationError(f"Unknown deal status: {deal_status}", 'deal_status', deal_status)

        lead = self.get_lead(lead_id)
        lead.deal_status = deal_status

        if lead.customer_id:
            customer = db.session.get(User, lead.customer_id)
            if customer is not None:
                customer.status = 'inactive' if deal_status == BOOKING_CANCELLED else 'active'

        db.session.commit()
        logger.info(f"Lead {lead_id} deal status set to {deal_status}")
        return lead

    def forward_lead(self, lead_id: int, partner_id: str) -> Lead:
        """Hand a copy of the lead to another partner; returns the copy"""
        lead = self.get_lead(lead_id)
        if lead.status == FORWARDED:
            raise DataValidationError("Lead has already been forwarded.", 'status', lead.status)

        partner = db.session.get(User, partner_id)
        if partner is None or not partner.is_partner:
            raise RecordNotFoundError('Partner', partner_id)
        if partner.id == lead.partner_id:
            raise DataValidationError("Lead is already assigned to this partner.", 'partner_id', partner_id)

        try:
            copy = Lead(partner_id=partner.id, is_copy=True, original_lead_id=lead.id, status=NEW_LEAD)
            for field in COPIED_FIELDS:
                setattr(copy, field, getattr(lead, field))
            db.session.add(copy)
            db.session.flush()

            lead.status = FORWARDED
            lead.forwarded_to = {
                'partnerId': partner.id,
                'partnerName': partner.name,
                'leadCopyId': copy.id,
            }
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        logger.info(f"Lead {lead_id} forwarded to {partner.id} as lead {copy.id}")
        return copy

    def retake_lead(self, lead_id: int) -> Lead:
        """Delete the forwarded copy and put the lead back to new"""
        lead = self.get_lead(lead_id)
        forwarded_to = lead.forwarded_to or {}
        if not forwarded_to.get('leadCopyId'):
            raise DataValidationError("Lead has not been forwarded.", 'status', lead.status)

        copy = db.session.get(Lead, forwarded_to['leadCopyId'])
        if copy is not None:
            db.session.delete(copy)

        lead.status = NEW_LEAD
        lead.forwarded_to = None
        db.session.commit()
        logger.info(f"Lead {lead_id} retaken from {forwarded_to.get('partnerId')}")
        return lead

    def close_deal(self, lead_id: int, closing_amount=None, closed_at: Optional[str] = None) -> Lead:
        """Mark the lead as a closed deal, making it payable"""
        lead = self.get_lead(lead_id)

        if closing_amount not in (None, ''):
            is_valid, value = validate_currency(closing_amount)
            if not is_valid:
                raise DataValidationError("Closing amount must be a positive number.", 'closing_amount',
                                          closing_amount)
            lead.closing_amount = value

        lead.status = 'Deal closed'
        lead.closed_at = parse_iso_datetime(closed_at) or datetime.utcnow()
        db.session.commit()
        logger.info(f"Lead {lead_id} closed")
        return lead


class AppointmentService:
    """Site visits scheduled against leads"""

    STATUSES = ('Scheduled', 'Completed', 'Cancelled')

    def schedule(self, lead_id: int, visit_date, notes: str = None) -> Appointment:
        lead = db.session.get(Lead, lead_id)
        if lead is None:
            raise RecordNotFoundError('Lead', lead_id)
        if lead.status == FORWARDED:
            raise DataValidationError("Forwarded leads cannot be scheduled.", 'status', lead.status)

        when = parse_iso_datetime(visit_date)
        if when is None:
            raise DataValidationError("A valid visit date is required.", 'visit_date', visit_date)

        appointment = Appointment(
            lead_id=lead.id,
            property_id=lead.property_id,
            partner_id=lead.partner_id,
            visit_date=when,
            status='Scheduled',
            notes=notes,
        )
        return appointment.save()

    def list_appointments(self, partner_id: str = None) -> List[Appointment]:
        query = Appointment.query
        if partner_id:
            query = query.filter_by(partner_id=partner_id)
        return query.order_by(Appointment.visit_date).all()

    def get_appointment(self, appointment_id: int) -> Appointment:
        appointment = db.session.get(Appointment, appointment_id)
        if appointment is None:
            raise RecordNotFoundError('Appointment', appointment_id)
        return appointment

    def update_status(self, appointment_id: int, status: str) -> Appointment:
        if status not in self.STATUSES:
            raise DataValidationError(f"Unknown appointment status: {status}", 'status', status)
        appointment = self.get_appointment(appointment_id)
        appointment.status = status
        db.session.commit()
        return appointment
