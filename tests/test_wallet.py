import base64

import pytest

from realty_crm.models import db
from realty_crm.models.lead import Lead
from realty_crm.models.property import Property
from realty_crm.models.stored_file import StoredFile
from realty_crm.models.user import User
from realty_crm.models.wallet import WalletTransaction, WithdrawalRequest


def balance_of(user_id):
    return db.session.get(User, user_id).wallet_balance


class TestWithdrawals:

    def test_request_below_minimum_is_rejected(self, make_user, login):
        response = login(make_user('affiliate')).post('/api/withdrawals', json={'amount': 50})

        assert response.status_code == 400
        assert response.get_json()['field'] == 'amount'

    def test_request_is_pending(self, make_user, login):
        partner = make_user('affiliate', wallet_balance=1000)

        response = login(partner).post('/api/withdrawals', json={'amount': '₹500', 'notes': 'March payout'})

        assert response.status_code == 201
        withdrawal = response.get_json()['withdrawal']
        assert withdrawal['status'] == 'Pending'
        assert withdrawal['amount'] == 500.0
        assert withdrawal['user_name'] == partner.name
        assert balance_of(partner.id) == 1000

    def test_partner_only_sees_own_requests(self, make_user, login):
        me = make_user('affiliate')
        other = make_user('affiliate')
        login(other).post('/api/withdrawals', json={'amount': 200})
        client = login(me)
        client.post('/api/withdrawals', json={'amount': 300})

        withdrawals = client.get('/api/withdrawals').get_json()['withdrawals']

        assert [w['user_id'] for w in withdrawals] == [me.id]

    def test_approval_debits_wallet(self, admin, make_user, login):
        partner = make_user('affiliate', wallet_balance=1000)
        request_id = login(partner).post('/api/withdrawals', json={'amount': 400}).get_json()['withdrawal']['id']

        response = login(admin).put(f'/api/withdrawals/{request_id}', json={'status': 'Approved'})

        assert response.status_code == 200
        assert response.get_json()['withdrawal']['processed_by'] == admin.id
        assert balance_of(partner.id) == 600
        debit = WalletTransaction.query.filter_by(user_id=partner.id).one()
        assert debit.amount == -400
        assert debit.type == 'withdrawal'

    def test_approval_with_insufficient_balance(self, admin, make_user, login):
        partner = make_user('affiliate', wallet_balance=150)
        request_id = login(partner).post('/api/withdrawals', json={'amount': 400}).get_json()['withdrawal']['id']

        response = login(admin).put(f'/api/withdrawals/{request_id}', json={'status': 'Approved'})

        assert response.status_code == 409
        assert response.get_json()['error_code'] == 'INSUFFICIENT_FUNDS'
        assert balance_of(partner.id) == 150
        assert db.session.get(WithdrawalRequest, request_id).status == 'Pending'

    def test_rejection_leaves_balance(self, admin, make_user, login):
        partner = make_user('affiliate', wallet_balance=1000)
        request_id = login(partner).post('/api/withdrawals', json={'amount': 400}).get_json()['withdrawal']['id']
        client = login(admin)

        assert client.put(f'/api/withdrawals/{request_id}', json={'status': 'Rejected'}).status_code == 200
        assert balance_of(partner.id) == 1000

        again = client.put(f'/api/withdrawals/{request_id}', json={'status': 'Approved'})
        assert again.status_code == 400

    def test_processing_is_admin_only(self, make_user, login):
        partner = make_user('affiliate', wallet_balance=1000)
        client = login(partner)
        request_id = client.post('/api/withdrawals', json={'amount': 400}).get_json()['withdrawal']['id']

        assert client.put(f'/api/withdrawals/{request_id}', json={'status': 'Approved'}).status_code == 403


class TestTopUp:

    def test_wrong_admin_password(self, admin, login):
        response = login(admin).post('/api/wallet/top-up', json={'admin_password': 'guess', 'amount': 100})

        assert response.status_code == 403
        assert response.get_json()['error'] == 'Incorrect password.'
        assert balance_of(admin.id) == 0

    def test_top_up_credits_admin_wallet(self, admin, login):
        response = login(admin).post('/api/wallet/top-up', json={
            'admin_password': 'password123',
            'amount': '2500.50',
            'payment_method': 'UPI',
        })

        assert response.status_code == 201
        assert response.get_json()['transaction']['type'] == 'topup'
        assert balance_of(admin.id) == 2500.5

    def test_transfer_to_recipient(self, admin, make_user, login):
        partner = make_user('channel')

        response = login(admin).post('/api/wallet/top-up', json={
            'admin_password': 'password123',
            'amount': 750,
            'transaction_type': 'transfer',
            'recipient_id': partner.id,
        })

        assert response.status_code == 201
        assert balance_of(partner.id) == 750
        assert balance_of(admin.id) == 0

    def test_transfer_needs_recipient(self, admin, login):
        response = login(admin).post('/api/wallet/top-up', json={
            'admin_password': 'password123',
            'amount': 750,
            'transaction_type': 'transfer',
        })
        assert response.status_code == 400

    def test_wallet_summary(self, make_user, login):
        partner = make_user('affiliate', wallet_balance=1234.567, reward_balance=40)

        wallet = login(partner).get('/api/wallet').get_json()['wallet']

        assert wallet['balance'] == 1234.57
        assert wallet['reward_points'] == 40
        assert wallet['total_revenue'] == 0

    def test_revenue_falls_back_to_listing_price(self, make_user, login):
        partner = make_user('affiliate')
        prop = Property(catalog_title='Lake View', listing_price=3000000).save()
        Lead(name='A', partner_id=partner.id, property_id=prop.id, status='Completed').save()
        Lead(name='B', partner_id=partner.id, property_id=prop.id, status='Deal closed',
             closing_amount=2750000).save()
        Lead(name='C', partner_id=partner.id, property_id=prop.id, status='Contacted').save()

        wallet = login(partner).get('/api/wallet').get_json()['wallet']

        assert wallet['total_revenue'] == 5750000


class TestRewards:

    def test_send_and_claim_points(self, admin, make_user, login):
        partner = make_user('affiliate')

        sent = login(admin).post('/api/rewards/send', json={'partner_id': partner.id, 'points': 300})
        assert sent.status_code == 201
        assert db.session.get(User, partner.id).reward_balance == 300

        claimed = login(partner).post('/api/rewards/claim', json={'points': 120})
        assert claimed.status_code == 200
        body = claimed.get_json()
        assert body['reward_points'] == 180
        assert body['wallet_balance'] == 120.0

    def test_cannot_claim_more_than_held(self, make_user, login):
        partner = make_user('affiliate', reward_balance=10)

        response = login(partner).post('/api/rewards/claim', json={'points': 11})

        assert response.status_code == 409
        assert db.session.get(User, partner.id).reward_balance == 10

    @pytest.mark.parametrize('points', [0, -5, 'many', None])
    def test_points_must_be_positive_whole_numbers(self, admin, make_user, login, points):
        partner = make_user('affiliate')
        response = login(admin).post('/api/rewards/send', json={'partner_id': partner.id, 'points': points})
        assert response.status_code == 400

    def test_points_only_go_to_partners(self, admin, make_user, login):
        seller = make_user('seller')
        response = login(admin).post('/api/rewards/send', json={'partner_id': seller.id, 'points': 5})
        assert response.status_code == 404

    def test_history_filters_by_type(self, admin, make_user, login):
        partner = make_user('affiliate')
        login(admin).post('/api/rewards/send', json={'partner_id': partner.id, 'points': 50})
        client = login(partner)
        client.post('/api/rewards/claim', json={'points': 20})

        everything = client.get('/api/rewards/history').get_json()['transactions']
        claims = client.get('/api/rewards/history?type=Claimed').get_json()['transactions']

        assert sorted(t['type'] for t in everything) == ['Claimed', 'Sent']
        assert [t['points'] for t in claims] == [20]

    def test_create_offer_with_inline_image(self, admin, make_user, login):
        image = 'data:image/png;base64,' + base64.b64encode(b'\x89PNG fake').decode()

        response = login(admin).post('/api/rewards/offers', json={
            'title': 'Goa weekend', 'points': 5000, 'image': image,
        })

        assert response.status_code == 201
        offer = response.get_json()['offer']
        assert offer['image_file_id'].startswith('FILE')
        assert db.session.get(StoredFile, offer['image_file_id']).content_type == 'image/png'

        offers = login(make_user('affiliate')).get('/api/rewards/offers').get_json()['offers']
        assert [o['title'] for o in offers] == ['Goa weekend']


class TestReceivables:

    def test_admin_records_receivable(self, admin, make_user, login):
        seller = make_user('seller', name='Lakshmi Builders')
        client = login(admin)

        response = client.post('/api/receivables', json={'user_id': seller.id, 'amount': 25000,
                                                         'notes': 'Listing fee'})
        assert response.status_code == 201
        assert response.get_json()['receivable']['user_name'] == 'Lakshmi Builders'

        receivables = client.get('/api/receivables').get_json()['receivables']
        assert [r['amount'] for r in receivables] == [25000.0]
        assert client.get('/api/wallet').get_json()['wallet']['total_receivable'] == 25000.0

    def test_receivable_amount_minimum(self, admin, make_user, login):
        response = login(admin).post('/api/receivables', json={'user_id': make_user('seller').id, 'amount': 0.5})
        assert response.status_code == 400

    def test_receivables_are_admin_only(self, make_user, login):
        assert login(make_user('seller')).get('/api/receivables').status_code == 403
