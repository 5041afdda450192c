"""
Database service for operations and initialization
"""

import os

from werkzeug.security import generate_password_hash

from realty_crm.models import db
from realty_crm.models.user import User
from realty_crm.services.settings_service import SettingsService

class DatabaseService:
    """Service for database operations and initialization"""

    def create_tables(self):
        """Create all database tables"""
        try:
            db.create_all()
            print(" Database tables created successfully")
        except Exception as e:
            print(f" Error creating database tables: {e}")
            raise

    def create_admin_user(self):
        """Create the admin account if it doesn't exist"""
        try:
            admin = User.query.filter_by(role='admin').first()
            if admin:
                print(f" Admin user already exists: {admin.email}")
                return admin

            # Use environment variables for the admin credentials in production
            admin_email = os.getenv('ADMIN_EMAIL', 'admin@realtycrm.local')
            admin_password = os.getenv('ADMIN_PASSWORD', 'admin12345')

            admin = User(
                id='ADM000001',
                name='Administrator',
                first_name='Administrator',
                email=admin_email,
                password_hash=generate_password_hash(admin_password),
                role='admin',
                status='active'
            )
            admin.save()
            print(" Admin user created successfully")

            # Only show password in development
            if os.getenv('FLASK_ENV') == 'development':
                print(f" Login: email='{admin_email}', password='{admin_password}'")
            else:
                print(" Admin user ready for production")

            return admin

        except Exception as e:
            db.session.rollback()
            print(f" Error creating admin user: {e}")
            raise

    def seed_default_settings(self):
        """Store starter earning rules when none have been configured"""
        settings = SettingsService()
        if settings.get_default_earning_rules():
            return

        settings.set_default_earning_rules({
            'affiliate': {'type': 'commission_percentage', 'value': 1},
            'super_affiliate': {'type': 'commission_percentage', 'value': 1.5},
            'associate': {'type': 'commission_percentage', 'value': 2},
            'channel': {'type': 'commission_percentage', 'value': 2.5},
            'franchisee': {'type': 'commission_percentage', 'value': 3},
        })
        print(" Default earning rules created")

    def initialize(self):
        """Create tables, the admin account and default settings"""
        self.create_tables()
        self.create_admin_user()
        self.seed_default_settings()
