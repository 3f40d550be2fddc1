"""
Pytest fixtures for wallet backend tests.

Provides an in-memory database per test, a deterministic session token
factory, a test client and helpers for signing in.
"""

import itertools

import pytest
from wallet import create_app
from wallet.extensions import db
from wallet.services import get_services


PASSWORD = "s3cret-Passw0rd"


@pytest.fixture(scope='function')
def token_factory():
    """Deterministic tokens: test-token-1, test-token-2, ..."""
    counter = itertools.count(1)
    return lambda: f"test-token-{next(counter)}"


@pytest.fixture(scope='function')
def app(token_factory):
    """Create application for testing with a fresh in-memory database."""
    app = create_app(
        config_overrides={
            'TESTING': True,
            'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
            'BCRYPT_ROUNDS': 4,
        },
        token_factory=token_factory,
    )

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def services(app):
    return get_services()


@pytest.fixture(scope='function')
def db_session(app):
    return db.session


@pytest.fixture(scope='function')
def user_ana(services):
    """Account: Ana <ana@example.com>."""
    return services.accounts.sign_up(name="Ana", email="ana@example.com", password=PASSWORD)


@pytest.fixture(scope='function')
def user_bruno(services):
    """Account: Bruno <bruno@example.com>."""
    return services.accounts.sign_up(name="Bruno", email="bruno@example.com", password=PASSWORD)


@pytest.fixture(scope='function')
def ana_token(client, user_ana):
    return get_auth_token(client, "ana@example.com", PASSWORD)


@pytest.fixture(scope='function')
def ana_headers(ana_token):
    return auth_headers(ana_token)


def get_auth_token(client, email: str, password: str) -> str:
    """Helper to get auth token for a user."""
    response = client.post('/sign-in', json={
        'email': email,
        'password': password
    })
    if response.status_code == 200:
        return response.json.get('token')
    return None


def auth_headers(token: str) -> dict:
    """Helper to create Authorization headers."""
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture(scope='function')
def sign_in(client):
    """Sign in through the API and return the token (None on failure)."""
    return lambda email, password=PASSWORD: get_auth_token(client, email, password)
