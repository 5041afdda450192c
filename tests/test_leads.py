from datetime import datetime

import pytest

from realty_crm.exceptions import DataValidationError
from realty_crm.models import db
from realty_crm.models.lead import Lead
from realty_crm.models.user import User
from realty_crm.services.lead_service import LeadService


@pytest.fixture
def service():
    return LeadService()


@pytest.fixture
def lead(app, make_user):
    partner = make_user('affiliate')
    return Lead(name='Asha Rao', phone='9000000001', city='Mumbai', property_id=7,
                partner_id=partner.id).save()


@pytest.fixture
def owner(lead, login):
    return login(db.session.get(User, lead.partner_id))


def test_create_lead_for_partner(make_user, login):
    partner = make_user('affiliate')

    response = login(partner).post('/api/leads', json={'name': 'Vikram Singh', 'phone': '9111111111'})

    assert response.status_code == 201
    created = response.get_json()['lead']
    assert created['partner_id'] == partner.id
    assert created['status'] == 'New lead'


def test_lead_name_is_required(make_user, login):
    response = login(make_user('affiliate')).post('/api/leads', json={'phone': '9111111111'})
    assert response.status_code == 400


def test_partners_only_list_their_leads(make_user, admin, login, service):
    me = make_user('affiliate')
    other = make_user('affiliate')
    service.create_lead({'name': 'Mine'}, partner_id=me.id)
    service.create_lead({'name': 'Theirs'}, partner_id=other.id)

    mine = login(me).get('/api/leads').get_json()['leads']
    assert [l['name'] for l in mine] == ['Mine']

    everything = login(admin).get('/api/leads').get_json()['leads']
    assert sorted(l['name'] for l in everything) == ['Mine', 'Theirs']


def test_status_options(make_user, login):
    body = login(make_user('seller')).get('/api/leads/status-options').get_json()
    assert 'Deal closed' in body['statuses']
    assert 'booking cancelled' in body['dealStatuses']


class TestStatusUpdates:

    def test_closing_status_stamps_closed_at(self, service, lead):
        updated = service.update_status(lead.id, 'Deal closed')
        assert updated.closed_at is not None

    def test_unknown_status_is_rejected(self, lead, owner):
        response = owner.put(f'/api/leads/{lead.id}/status', json={'status': 'Maybe'})
        assert response.status_code == 400

    def test_missing_lead(self, admin, login):
        response = login(admin).put('/api/leads/999/status', json={'status': 'Contacted'})
        assert response.status_code == 404

    def test_cancelled_booking_deactivates_customer(self, make_user, lead, owner):
        customer = make_user('customer')
        lead.customer_id = customer.id
        db.session.commit()
        client = owner

        response = client.put(f'/api/leads/{lead.id}/deal-status', json={'deal_status': 'booking cancelled'})
        assert response.status_code == 200
        assert db.session.get(User, customer.id).status == 'inactive'

        client.put(f'/api/leads/{lead.id}/deal-status', json={'deal_status': 'agreement signed'})
        assert db.session.get(User, customer.id).status == 'active'

    def test_close_deal_is_admin_only(self, admin, make_user, login, lead):
        body = {'closing_amount': '₹12,50,000', 'closed_at': '2026-05-01T09:00:00Z'}
        assert login(make_user('affiliate')).post(f'/api/leads/{lead.id}/close', json=body).status_code == 403

        response = login(admin).post(f'/api/leads/{lead.id}/close', json=body)

        assert response.status_code == 200
        closed = response.get_json()['lead']
        assert closed['status'] == 'Deal closed'
        assert closed['closing_amount'] == 1250000.0
        assert closed['closed_at'] == '2026-05-01T09:00:00'

    @pytest.mark.parametrize('amount', ['lots', 'inf', 'NaN'])
    def test_close_deal_rejects_bad_amount(self, admin, login, lead, amount):
        response = login(admin).post(f'/api/leads/{lead.id}/close', json={'closing_amount': amount})
        assert response.status_code == 400


class TestForwarding:

    def test_forward_creates_copy_for_partner(self, make_user, lead, owner):
        target = make_user('associate', name='Neha Joshi')

        response = owner.post(f'/api/leads/{lead.id}/forward', json={'partner_id': target.id})

        assert response.status_code == 201
        copy = response.get_json()['lead']
        assert copy['partner_id'] == target.id
        assert copy['is_copy'] is True
        assert copy['original_lead_id'] == lead.id
        assert copy['phone'] == '9000000001'
        assert copy['status'] == 'New lead'

        original = db.session.get(Lead, lead.id)
        assert original.status == 'Forwarded'
        assert original.forwarded_to == {
            'partnerId': target.id,
            'partnerName': 'Neha Joshi',
            'leadCopyId': copy['id'],
        }

    def test_forward_twice_is_rejected(self, service, make_user, lead):
        target = make_user('associate')
        service.forward_lead(lead.id, target.id)

        with pytest.raises(DataValidationError) as exc_info:
            service.forward_lead(lead.id, target.id)
        assert exc_info.value.field == 'status'

    def test_forward_to_non_partner(self, make_user, lead, owner):
        seller = make_user('seller')
        response = owner.post(f'/api/leads/{lead.id}/forward', json={'partner_id': seller.id})
        assert response.status_code == 404

    def test_retake_deletes_copy(self, service, make_user, lead, owner):
        copy = service.forward_lead(lead.id, make_user('channel').id)
        copy_id = copy.id

        response = owner.post(f'/api/leads/{lead.id}/retake')

        assert response.status_code == 200
        assert response.get_json()['lead']['status'] == 'New lead'
        assert response.get_json()['lead']['forwarded_to'] is None
        assert db.session.get(Lead, copy_id) is None

    def test_retake_without_forward(self, lead, owner):
        response = owner.post(f'/api/leads/{lead.id}/retake')
        assert response.status_code == 400


class TestLeadOwnership:

    @pytest.mark.parametrize('method, path, body', [
        ('put', 'status', {'status': 'Contacted'}),
        ('put', 'deal-status', {'deal_status': 'Interested'}),
        ('post', 'retake', {}),
        ('post', 'appointments', {'visit_date': '2026-11-01T10:00:00Z'}),
    ])
    def test_other_partners_cannot_change_lead(self, make_user, login, lead, method, path, body):
        client = login(make_user('affiliate'))

        response = getattr(client, method)(f'/api/leads/{lead.id}/{path}', json=body)

        assert response.status_code == 403
        assert db.session.get(Lead, lead.id).status == 'New lead'

    def test_other_partner_cannot_take_lead_by_forwarding(self, make_user, login, lead):
        intruder = make_user('affiliate')

        response = login(intruder).post(f'/api/leads/{lead.id}/forward', json={'partner_id': intruder.id})

        assert response.status_code == 403
        assert Lead.query.filter_by(partner_id=intruder.id).count() == 0

    def test_cannot_forward_to_current_partner(self, lead, owner):
        response = owner.post(f'/api/leads/{lead.id}/forward', json={'partner_id': lead.partner_id})

        assert response.status_code == 400
        assert response.get_json()['field'] == 'partner_id'

    @pytest.mark.parametrize('status', ['Deal closed', 'Completed'])
    def test_only_admin_sets_closing_status(self, admin, login, lead, owner, status):
        assert owner.put(f'/api/leads/{lead.id}/status', json={'status': status}).status_code == 403
        assert db.session.get(Lead, lead.id).closed_at is None

        response = login(admin).put(f'/api/leads/{lead.id}/status', json={'status': status})

        assert response.status_code == 200
        assert db.session.get(Lead, lead.id).closed_at is not None

    def test_owner_updates_status(self, lead, owner):
        response = owner.put(f'/api/leads/{lead.id}/status', json={'status': 'Contacted'})
        assert response.get_json()['lead']['status'] == 'Contacted'

    def test_other_partner_cannot_update_appointment(self, make_user, login, lead, owner):
        created = owner.post(f'/api/leads/{lead.id}/appointments',
                             json={'visit_date': '2026-11-01T10:00:00Z'}).get_json()
        appointment_id = created['appointment']['id']

        response = login(make_user('affiliate')).put(f'/api/appointments/{appointment_id}/status',
                                                      json={'status': 'Cancelled'})

        assert response.status_code == 403


class TestAppointments:

    def test_schedule_site_visit(self, make_user, login, lead):
        partner = db.session.get(User, lead.partner_id)
        client = login(partner)

        response = client.post(f'/api/leads/{lead.id}/appointments',
                               json={'visit_date': '2026-11-01T10:00:00Z', 'notes': 'Bring brochure'})

        assert response.status_code == 201
        appointment = response.get_json()['appointment']
        assert appointment['status'] == 'Scheduled'
        assert appointment['visit_date'] == '2026-11-01T10:00:00'
        assert appointment['partner_id'] == partner.id
        assert appointment['property_id'] == 7

        listed = client.get('/api/appointments').get_json()['appointments']
        assert [a['id'] for a in listed] == [appointment['id']]

    def test_invalid_visit_date(self, lead, owner):
        response = owner.post(f'/api/leads/{lead.id}/appointments', json={'visit_date': 'next tuesday'})
        assert response.status_code == 400

    def test_forwarded_lead_cannot_be_scheduled(self, service, make_user, lead, owner):
        service.forward_lead(lead.id, make_user('associate').id)

        response = owner.post(f'/api/leads/{lead.id}/appointments', json={'visit_date': '2026-11-01T10:00:00Z'})
        assert response.status_code == 400

    def test_update_appointment_status(self, lead, owner):
        client = owner
        created = client.post(f'/api/leads/{lead.id}/appointments',
                              json={'visit_date': datetime(2026, 11, 2, 15).isoformat()}).get_json()
        appointment_id = created['appointment']['id']

        done = client.put(f'/api/appointments/{appointment_id}/status', json={'status': 'Completed'})
        assert done.get_json()['appointment']['status'] == 'Completed'

        bad = client.put(f'/api/appointments/{appointment_id}/status', json={'status': 'Postponed'})
        assert bad.status_code == 400
