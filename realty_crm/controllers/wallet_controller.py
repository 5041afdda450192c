"""
Wallet, withdrawal, receivable and reward point controller
"""

from flask import request, jsonify
from realty_crm.controllers.base import BaseController
from realty_crm.services.wallet_service import WalletService
from realty_crm.services.reward_service import RewardService

class WalletController(BaseController):
    """Handles wallet and billing routes"""

    def register_routes(self):
        """Register wallet routes"""
        self.wallet_service = WalletService()
        self.reward_service = RewardService()

        self.app.add_url_rule('/api/wallet', 'wallet.summary',
                              self.login_required(self.summary), methods=['GET'])
        self.app.add_url_rule('/api/wallet/transactions', 'wallet.transactions',
                              self.login_required(self.transactions), methods=['GET'])
        self.app.add_url_rule('/api/wallet/top-up', 'wallet.top_up',
                              self.admin_required(self.top_up), methods=['POST'])

        # Withdrawals
        self.app.add_url_rule('/api/withdrawals', 'wallet.list_withdrawals',
                              self.login_required(self.list_withdrawals), methods=['GET'])
        self.app.add_url_rule('/api/withdrawals', 'wallet.request_withdrawal',
                              self.login_required(self.request_withdrawal), methods=['POST'])
        self.app.add_url_rule('/api/withdrawals/<int:request_id>', 'wallet.process_withdrawal',
                              self.admin_required(self.process_withdrawal), methods=['PUT'])

        # Receivables
        self.app.add_url_rule('/api/receivables', 'wallet.list_receivables',
                              self.admin_required(self.list_receivables), methods=['GET'])
        self.app.add_url_rule('/api/receivables', 'wallet.add_receivable',
                              self.admin_required(self.add_receivable), methods=['POST'])

        # Reward points
        self.app.add_url_rule('/api/rewards/send', 'rewards.send',
                              self.admin_required(self.send_points), methods=['POST'])
        self.app.add_url_rule('/api/rewards/claim', 'rewards.claim',
                              self.login_required(self.claim_points), methods=['POST'])
        self.app.add_url_rule('/api/rewards/history', 'rewards.history',
                              self.login_required(self.reward_history), methods=['GET'])
        self.app.add_url_rule('/api/rewards/offers', 'rewards.list_offers',
                              self.login_required(self.list_offers), methods=['GET'])
        self.app.add_url_rule('/api/rewards/offers', 'rewards.create_offer',
                              self.admin_required(self.create_offer), methods=['POST'])

    def summary(self):
        user = self.get_current_user()
        return jsonify({'success': True, 'wallet': self.wallet_service.get_summary(user)})

    def transactions(self):
        user = self.get_current_user()
        transactions = self.wallet_service.list_transactions(user)
        return jsonify({'success': True, 'transactions': [t.to_dict() for t in transactions]})

    def top_up(self):
        """Requires the admin to re-enter their password"""
        data = self.get_json()
        transaction = self.wallet_service.top_up(
            self.get_current_user(),
            data.get('admin_password'),
            data.get('amount'),
            data.get('transaction_type', 'topup'),
            data.get('recipient_id'),
            data.get('payment_method')
        )
        return jsonify({'success': True, 'transaction': transaction.to_dict()}), 201

    def list_withdrawals(self):
        withdrawals = self.wallet_service.list_withdrawals(self.get_current_user())
        return jsonify({'success': True, 'withdrawals': [w.to_dict() for w in withdrawals]})

    def request_withdrawal(self):
        data = self.get_json()
        withdrawal = self.wallet_service.request_withdrawal(
            self.get_current_user(), data.get('amount'), data.get('notes'))
        return jsonify({
            'success': True,
            'message': 'Your withdrawal request has been sent for approval.',
            'withdrawal': withdrawal.to_dict()
        }), 201

    def process_withdrawal(self, request_id):
        withdrawal = self.wallet_service.process_withdrawal(
            self.get_current_user(), request_id, self.get_json().get('status'))
        return jsonify({'success': True, 'withdrawal': withdrawal.to_dict()})

    def list_receivables(self):
        receivables = self.wallet_service.list_receivables()
        return jsonify({'success': True, 'receivables': [r.to_dict() for r in receivables]})

    def add_receivable(self):
        data = self.get_json()
        receivable = self.wallet_service.add_receivable(data.get('user_id'), data.get('amount'), data.get('notes'))
        return jsonify({'success': True, 'receivable': receivable.to_dict()}), 201

    def send_points(self):
        data = self.get_json()
        transaction = self.reward_service.send_points(
            self.get_current_user(), data.get('partner_id'), data.get('points'))
        return jsonify({'success': True, 'transaction': transaction.to_dict()}), 201

    def claim_points(self):
        user = self.get_current_user()
        transaction = self.reward_service.claim_points(user, self.get_json().get('points'))
        return jsonify({
            'success': True,
            'transaction': transaction.to_dict(),
            'wallet_balance': user.wallet_balance,
            'reward_points': user.reward_balance
        })

    def reward_history(self):
        history = self.reward_service.history(self.get_current_user(), request.args.get('type'))
        return jsonify({'success': True, 'transactions': [t.to_dict() for t in history]})

    def list_offers(self):
        offers = self.reward_service.list_offers()
        return jsonify({'success': True, 'offers': [o.to_dict() for o in offers]})

    def create_offer(self):
        """Offer image arrives as a multipart file or a base64 data URL"""
        from realty_crm.services.file_service import FileService

        data = self.get_json()
        user = self.get_current_user()
        image_file_id = data.get('image_file_id')
        if 'image' in request.files:
            image_file_id = FileService().save_upload(request.files['image'], user.id).id
        elif data.get('image'):
            image_file_id = FileService().save_base64(data['image'], uploaded_by=user.id).id

        offer = self.reward_service.create_offer(
            data.get('title'), data.get('points'), data.get('description'), image_file_id)
        return jsonify({'success': True, 'offer': offer.to_dict()}), 201
