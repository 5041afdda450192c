import pytest

from realty_crm.config import config_manager
from realty_crm.models import db
from realty_crm.models.user import User
from realty_crm.services import payment_gateway
from realty_crm.services.settings_service import SettingsService


class FakeResponse:
    status_code = 200
    text = ''

    def json(self):
        return {'success': True, 'data': {'instrumentResponse': {'redirectInfo': {'url': 'https://pay.test/x'}}}}


def partner_form(**overrides):
    form = {
        'name': 'Sunil Mehta',
        'email': 'sunil@example.com',
        'password': 'sunil-pass-1',
        'role': 'channel',
    }
    form.update(overrides)
    return form


class TestPartnerOnboarding:

    def test_created_active_without_payment(self, admin, login):
        response = login(admin).post('/api/partners', json=partner_form())

        assert response.status_code == 201
        body = response.get_json()
        assert body['partner']['status'] == 'active'
        assert body['partner']['payment_status'] == 'not_required'
        assert body['partner']['id'].startswith('PCH')
        assert body['payment'] is None

    def test_zero_fee_needs_no_payment(self, admin, login):
        settings = SettingsService()
        settings.set_payment_enabled(True)
        settings.set_registration_fees({'affiliate': 999})

        response = login(admin).post('/api/partners', json=partner_form(role='channel'))

        assert response.get_json()['partner']['payment_status'] == 'not_required'

    def test_fee_starts_gateway_payment(self, admin, login, monkeypatch):
        monkeypatch.setitem(config_manager._app_config, 'PHONEPE_CLIENT_SECRET', 'salt-key')
        settings = SettingsService()
        settings.set_payment_enabled(True)
        settings.set_registration_fees({'channel': 2999})
        calls = []

        def fake_post(url, headers=None, json=None, timeout=None):
            calls.append(json)
            return FakeResponse()
        monkeypatch.setattr(payment_gateway.requests, 'post', fake_post)

        response = login(admin).post('/api/partners', json=partner_form())

        assert response.status_code == 201
        body = response.get_json()
        partner = db.session.get(User, body['partner']['id'])
        assert partner.payment_status == 'pending'
        assert partner.payment_transaction_id.startswith(f"TX_{partner.id}_")
        assert body['payment']['success'] is True
        assert len(calls) == 1

    def test_non_partner_role_is_rejected(self, admin, login):
        response = login(admin).post('/api/partners', json=partner_form(role='seller'))
        assert response.status_code == 400

    def test_partner_admin_routes_require_admin(self, make_user, login):
        client = login(make_user('franchisee'))
        assert client.get('/api/partners').status_code == 403
        assert client.post('/api/partners', json=partner_form()).status_code == 403


class TestPartnerStatus:

    def test_approve_pending_partner(self, admin, make_user, login):
        partner = make_user('affiliate', status='pending_approval')

        response = login(admin).post(f'/api/partners/{partner.id}/approve')

        assert response.get_json()['partner']['status'] == 'active'

    @pytest.mark.parametrize('action, status, reason_field', [
        ('reject', 'rejected', 'rejection_reason'),
        ('deactivate', 'inactive', 'deactivation_reason'),
        ('reactivate', 'active', 'reactivation_reason'),
    ])
    def test_transitions_record_reason(self, admin, make_user, login, action, status, reason_field):
        partner = make_user('associate')
        client = login(admin)

        response = client.post(f'/api/partners/{partner.id}/{action}', json={'reason': 'Documents checked'})

        assert response.status_code == 200
        data = response.get_json()['partner']
        assert data['status'] == status
        assert data[reason_field] == 'Documents checked'

    @pytest.mark.parametrize('action', ['reject', 'deactivate', 'reactivate'])
    def test_reason_is_required(self, admin, make_user, login, action):
        partner = make_user('associate')

        response = login(admin).post(f'/api/partners/{partner.id}/{action}', json={'reason': '  '})

        assert response.status_code == 400
        assert response.get_json()['field'] == 'reason'

    def test_suspend_without_reason(self, admin, make_user, login):
        partner = make_user('associate')
        response = login(admin).post(f'/api/partners/{partner.id}/suspend')
        assert response.get_json()['partner']['status'] == 'suspended'

    def test_sellers_are_not_partners(self, admin, make_user, login):
        seller = make_user('seller')
        assert login(admin).post(f'/api/partners/{seller.id}/approve').status_code == 404

    def test_list_partners_by_status(self, admin, make_user, login):
        waiting = make_user('affiliate', status='pending_approval')
        make_user('affiliate')
        make_user('seller', status='pending_approval')

        partners = login(admin).get('/api/partners?status=pending_approval').get_json()['partners']

        assert [p['id'] for p in partners] == [waiting.id]


class TestProperties:

    def listing(self, **overrides):
        data = {
            'catalog_title': 'Palm Grove 3BHK',
            'listing_price': '85,00,000',
            'city': 'Bengaluru',
            'bedrooms': 3,
        }
        data.update(overrides)
        return data

    def test_seller_lists_property_for_verification(self, make_user, login):
        seller = make_user('seller')

        response = login(seller).post('/api/properties', json=self.listing())

        assert response.status_code == 201
        prop = response.get_json()['property']
        assert prop['status'] == 'Pending Verification'
        assert prop['owner_id'] == seller.id
        assert prop['listing_price'] == 8500000.0

    def test_partners_cannot_list_properties(self, make_user, login):
        assert login(make_user('affiliate')).post('/api/properties', json=self.listing()).status_code == 403

    @pytest.mark.parametrize('price', ['inf', '-Infinity', 'nan', 'free'])
    def test_listing_price_must_be_a_finite_amount(self, make_user, login, price):
        response = login(make_user('seller')).post('/api/properties', json=self.listing(listing_price=price))
        assert response.status_code == 400

    def test_missing_title(self, make_user, login):
        response = login(make_user('seller')).post('/api/properties', json=self.listing(catalog_title=''))
        assert response.status_code == 400

    def test_admin_approves_listing(self, admin, make_user, login):
        prop_id = login(make_user('seller')).post('/api/properties', json=self.listing()).get_json()['property']['id']

        response = login(admin).post(f'/api/properties/{prop_id}/approve')

        assert response.get_json()['property']['status'] == 'For Sale'

    def test_sellers_see_only_their_listings(self, make_user, login):
        login(make_user('seller')).post('/api/properties', json=self.listing(catalog_title='Theirs'))
        me = make_user('seller')
        client = login(me)
        client.post('/api/properties', json=self.listing(catalog_title='Mine'))

        titles = [p['catalog_title'] for p in client.get('/api/properties').get_json()['properties']]

        assert titles == ['Mine']

    def test_unknown_status(self, admin, make_user, login):
        prop_id = login(make_user('seller')).post('/api/properties', json=self.listing()).get_json()['property']['id']
        response = login(admin).put(f'/api/properties/{prop_id}/status', json={'status': 'Demolished'})
        assert response.status_code == 400

    def test_set_earning_rule_overrides(self, admin, make_user, login):
        prop_id = login(make_user('seller')).post('/api/properties', json=self.listing()).get_json()['property']['id']

        response = login(admin).put(f'/api/properties/{prop_id}/earning-rules', json={'earningRules': {
            'affiliate': {'type': 'flat_amount', 'value': 5000},
            'channel': {'type': '', 'value': ''},
        }})

        assert response.status_code == 200
        assert response.get_json()['earningRules'] == {'affiliate': {'type': 'flat_amount', 'value': 5000.0}}

    @pytest.mark.parametrize('rules', [
        {'affiliate': {'type': 'per_sq_ft', 'value': 10}},
        {'affiliate': {'type': 'bonus', 'value': 10}},
        {'seller': {'type': 'flat_amount', 'value': 10}},
    ])
    def test_invalid_earning_rules(self, admin, make_user, login, rules):
        prop_id = login(make_user('seller')).post('/api/properties', json=self.listing()).get_json()['property']['id']

        response = login(admin).put(f'/api/properties/{prop_id}/earning-rules', json={'earningRules': rules})

        assert response.status_code == 400


class TestRegistrationFeeSettings:

    def test_fees_and_payment_toggle(self, admin, login):
        client = login(admin)

        response = client.put('/api/settings/registration-fees', json={
            'fees': {'channel': '2999', 'franchisee': 9999},
            'paymentEnabled': True,
        })
        assert response.status_code == 200

        body = client.get('/api/settings/registration-fees').get_json()
        assert body['fees'] == {'channel': 2999.0, 'franchisee': 9999.0}
        assert body['paymentEnabled'] is True

    @pytest.mark.parametrize('fees', [{'seller': 100}, {'channel': -1}, {'channel': 'free'}])
    def test_invalid_fees(self, admin, login, fees):
        response = login(admin).put('/api/settings/registration-fees', json={'fees': fees})
        assert response.status_code == 400
