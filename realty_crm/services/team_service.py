"""
Partner teams: team leads recruit lower-tier partners through requests
"""

import logging
from typing import List

from realty_crm.config import ROLE_CONFIG
from realty_crm.exceptions import AuthorizationError, DataValidationError, RecordNotFoundError
from realty_crm.models import db
from realty_crm.models.team_request import TeamRequest
from realty_crm.models.user import User

logger = logging.getLogger(__name__)

PENDING = 'pending'
ACCEPTED = 'accepted'
REJECTED = 'rejected'


class TeamService:
    """Service for team membership"""

    def can_manage_team(self, user: User) -> bool:
        return bool(ROLE_CONFIG.get_addable_roles(user.role))

    def get_team_members(self, user: User) -> List[User]:
        return User.query.filter_by(team_lead_id=user.id).order_by(User.name).all()

    def get_available_partners(self, user: User) -> List[User]:
        """Partners without a team whose role this user may recruit"""
        addable = ROLE_CONFIG.get_addable_roles(user.role)
        if not addable:
            return []
        return (User.query
                .filter(User.role.in_(addable))
                .filter(User.team_lead_id.is_(None))
                .filter(User.id != user.id)
                .order_by(User.name)
                .all())

    def send_request(self, user: User, recipient_id: str) -> TeamRequest:
        if not self.can_manage_team(user):
            raise AuthorizationError("You do not have permission to manage a team.")

        recipient = db.session.get(User, recipient_id)
        if recipient is None:
            raise RecordNotFoundError('Partner', recipient_id)
        if recipient not in self.get_available_partners(user):
            raise DataValidationError("This partner cannot be added to your team.", 'recipient_id', recipient_id)

        existing = TeamRequest.query.filter_by(requester_id=user.id, recipient_id=recipient.id,
                                               status=PENDING).first()
        if existing:
            raise DataValidationError("A request to this partner is already pending.", 'recipient_id',
                                      recipient_id)

        request = TeamRequest(
            requester_id=user.id,
            requester_name=user.name,
            recipient_id=recipient.id,
            recipient_name=recipient.name,
            status=PENDING,
        )
        request.save()
        logger.info(f"Team request {request.id} from {user.id} to {recipient.id}")
        return request

    def list_requests(self, user: User, incoming: bool = True, status: str = PENDING) -> List[TeamRequest]:
        query = TeamRequest.query
        if incoming:
            query = query.filter_by(recipient_id=user.id)
        else:
            query = query.filter_by(requester_id=user.id)
        if status:
            query = query.filter_by(status=status)
        return query.order_by(TeamRequest.created_at.desc()).all()

    def respond(self, user: User, request_id: int, new_status: str) -> TeamRequest:
        """Accept or reject an incoming request; accepting joins the requester's team"""
        if new_status not in (ACCEPTED, REJECTED):
            raise DataValidationError("Status must be accepted or rejected.", 'status', new_status)

        request = db.session.get(TeamRequest, request_id)
        if request is None or request.recipient_id != user.id:
            raise RecordNotFoundError('Team request', request_id)
        if request.status != PENDING:
            raise DataValidationError(f"Request has already been {request.status}.", 'status', request.status)
        if new_status == ACCEPTED and user.team_lead_id:
            raise DataValidationError("You are already part of a team.", 'status', user.team_lead_id)

        request.status = new_status
        if new_status == ACCEPTED:
            user.team_lead_id = request.requester_id
        db.session.commit()
        logger.info(f"Team request {request_id} {new_status} by {user.id}")
        return request
