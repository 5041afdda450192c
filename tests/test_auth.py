import pytest

from realty_crm.models import db
from realty_crm.models.user import User



def login_with(client, email, password='password123'):
    return client.post('/login', json={'email': email, 'password': password})


@pytest.mark.parametrize('role, redirect', [
    ('customer', '/listings/list'),
    ('user', '/listings'),
    ('seller', '/dashboard'),
    ('affiliate', '/dashboard'),
    ('admin', '/dashboard'),
])
def test_login_returns_role_redirect(client, make_user, role, redirect):
    user = make_user(role)

    response = login_with(client, user.email)

    assert response.status_code == 200
    body = response.get_json()
    assert body['redirect'] == redirect
    assert 'password_hash' not in body['user']
    with client.session_transaction() as sess:
        assert sess['user_id'] == user.id


def test_login_is_case_insensitive_on_email(client, make_user):
    user = make_user('seller', email='owner@example.com')
    assert login_with(client, 'Owner@Example.com ').status_code == 200
    assert user.id


def test_wrong_password_is_rejected(client, make_user):
    user = make_user('seller')

    response = login_with(client, user.email, 'not-the-password')

    assert response.status_code == 401
    assert response.get_json()['error'] == 'Invalid email or password.'


def test_unknown_email_is_rejected(client):
    assert login_with(client, 'nobody@example.com').status_code == 401


@pytest.mark.parametrize('status', ['inactive', 'rejected', 'suspended'])
def test_blocked_accounts_cannot_log_in(client, make_user, status):
    user = make_user('affiliate', status=status)

    response = login_with(client, user.email)

    assert response.status_code == 401
    assert status in response.get_json()['error']


def test_me_requires_login(client):
    assert client.get('/api/me').status_code == 401


def test_me_returns_user_and_menu(make_user, login):
    partner = make_user('channel')

    body = login(partner).get('/api/me').get_json()

    assert body['user']['id'] == partner.id
    assert body['user']['role_label'] == 'Channel Partner'
    labels = [item['label'] for item in body['menu']]
    assert 'Team Management' in labels
    assert 'Manage Partner' not in labels


def test_logout_clears_session(make_user, login):
    client = login(make_user('seller'))

    assert client.post('/logout').status_code == 200
    assert client.get('/api/me').status_code == 401


class TestRegistration:

    def partner_form(self, **overrides):
        form = {
            'name': 'Kiran Patel',
            'email': 'kiran@example.com',
            'password': 'secret-pass',
            'role': 'Super Affiliate',
            'phone': '9876543210',
            'city': 'Pune',
        }
        form.update(overrides)
        return form

    def test_partner_registration_waits_for_approval(self, client):
        response = client.post('/register/partner', json=self.partner_form())

        assert response.status_code == 201
        user = response.get_json()['user']
        assert user['role'] == 'super_affiliate'
        assert user['status'] == 'pending_approval'
        assert user['id'].startswith('PSU')
        assert user['first_name'] == 'Kiran'
        assert user['last_name'] == 'Patel'

        stored = db.session.get(User, user['id'])
        assert stored.check_password('secret-pass')

    def test_pending_partner_can_log_in(self, client):
        client.post('/register/partner', json=self.partner_form())
        assert login_with(client, 'kiran@example.com', 'secret-pass').status_code == 200

    def test_duplicate_email_is_rejected(self, client, make_user):
        make_user('seller', email='kiran@example.com')

        response = client.post('/register/partner', json=self.partner_form())

        assert response.status_code == 400
        assert response.get_json()['field'] == 'email'

    @pytest.mark.parametrize('overrides, field', [
        ({'role': 'seller'}, 'role'),
        ({'email': 'not-an-email'}, 'email'),
        ({'password': 'short'}, 'password'),
        ({'name': ''}, 'name'),
        ({'phone': '12345'}, 'phone'),
        ({'pincode': '0123'}, 'pincode'),
    ])
    def test_invalid_partner_registration(self, client, overrides, field):
        response = client.post('/register/partner', json=self.partner_form(**overrides))

        assert response.status_code == 400
        assert response.get_json()['field'] == field

    def test_seller_registration(self, client):
        response = client.post('/register/seller', json={
            'name': 'Lakshmi Builders',
            'email': 'sales@lakshmi.example.com',
            'password': 'builders-2026',
            'business_name': 'Lakshmi Builders Pvt Ltd',
        })

        assert response.status_code == 201
        user = response.get_json()['user']
        assert user['role'] == 'seller'
        assert user['id'].startswith('SEL')
        assert user['business_name'] == 'Lakshmi Builders Pvt Ltd'


class TestDashboard:

    def test_healthz(self, client):
        response = client.get('/healthz')
        assert response.status_code == 200
        assert response.get_json() == {'ok': True}

    def test_dashboard_requires_login(self, client):
        assert client.get('/api/dashboard').status_code == 401

    def test_admin_stats(self, admin, make_user, login):
        make_user('affiliate')
        make_user('channel')
        make_user('seller')

        stats = login(admin).get('/api/dashboard').get_json()['stats']

        assert stats['totalPartners'] == 2
        assert stats['totalProperties'] == 0

    def test_seller_stats_cover_own_listings(self, make_user, login):
        from realty_crm.models.lead import Lead
        from realty_crm.models.property import Property

        seller = make_user('seller')
        mine = Property(catalog_title='Mine', listing_price=100, owner_id=seller.id).save()
        theirs = Property(catalog_title='Theirs', listing_price=100, owner_id='SEL999999').save()
        Lead(name='A', property_id=mine.id, status='New lead').save()
        Lead(name='B', property_id=mine.id, status='Deal closed', closing_amount=4500000).save()
        Lead(name='C', property_id=theirs.id, status='Deal closed', closing_amount=100).save()

        stats = login(seller).get('/api/dashboard').get_json()['stats']

        assert stats == {'totalLeads': 2, 'newLeads': 1, 'propertiesSold': 1, 'totalRevenue': 4500000}

    def test_partner_stats(self, make_user, login):
        lead = make_user('channel', wallet_balance=250)
        make_user('affiliate', team_lead_id=lead.id)

        stats = login(lead).get('/api/dashboard').get_json()['stats']

        assert stats['teamSize'] == 1
        assert stats['walletBalance'] == 250

    def test_menu_for_seller(self, make_user, login):
        menu = login(make_user('seller')).get('/api/menu').get_json()['menu']
        assert [item['href'] for item in menu] == [
            '/dashboard', '/listings/my-properties', '/leads', '/wallet-billing/withdrawal'
        ]


def test_database_initialization_is_idempotent(app, monkeypatch):
    from realty_crm.services.database import DatabaseService
    from realty_crm.services.settings_service import SettingsService

    monkeypatch.setenv('ADMIN_EMAIL', 'ops@example.com')
    monkeypatch.setenv('ADMIN_PASSWORD', 'ops-password')
    service = DatabaseService()

    service.initialize()
    service.initialize()

    admins = User.query.filter_by(role='admin').all()
    assert [a.email for a in admins] == ['ops@example.com']
    assert admins[0].check_password('ops-password')
    assert SettingsService().get_default_earning_rules()['channel'] == {
        'type': 'commission_percentage', 'value': 2.5
    }
