"""
Shared fixtures: a testing app on in-memory SQLite and user helpers
"""

import itertools

import pytest
from werkzeug.security import generate_password_hash

from realty_crm import create_app
from realty_crm.models import db
from realty_crm.models.user import User

DEFAULT_PASSWORD = 'password123'

_ids = itertools.count(1)

PREFIXES = {
    'admin': 'ADM',
    'seller': 'SEL',
    'customer': 'CUS',
    'user': 'USR',
}


@pytest.fixture
def app():
    app = create_app('testing')
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    """Create a user directly in the database"""
    def _make_user(role='affiliate', name=None, email=None, password=DEFAULT_PASSWORD,
                   status='active', **fields):
        n = next(_ids)
        prefix = PREFIXES.get(role, 'P' + role[:2].upper())
        user = User(
            id=f"{prefix}{n:06d}",
            name=name or f"{role.title()} {n}",
            email=email or f"{role}{n}@example.com",
            password_hash=generate_password_hash(password, method='pbkdf2:sha256:1000'),
            role=role,
            status=status,
            **fields
        )
        db.session.add(user)
        db.session.commit()
        return user
    return _make_user


@pytest.fixture
def admin(make_user):
    return make_user('admin', name='Administrator')


@pytest.fixture
def login(client):
    """Put a user in the test client's session"""
    def _login(user):
        with client.session_transaction() as sess:
            sess['user_id'] = user.id
            sess['role'] = user.role
        return client
    return _login
