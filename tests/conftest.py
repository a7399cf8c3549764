"""
Pytest configuration and shared fixtures for all tests.
"""
import json
import os
import sys
import pytest
from unittest.mock import Mock

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from walletpass import create_app
from walletpass.core import db as _db
from walletpass.init.wallet import init_wallet
from tests.helpers import FIXED_MILLIS, SERVICE_ACCOUNT_EMAIL, make_config


@pytest.fixture(scope='session')
def rsa_private_key():
    """RSA key standing in for the service account key."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope='session')
def rsa_public_key(rsa_private_key):
    return rsa_private_key.public_key()


@pytest.fixture(scope='session')
def private_key_pem(rsa_private_key):
    return rsa_private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode('utf-8')


@pytest.fixture(scope='session')
def service_account_info(private_key_pem):
    return {
        'type': 'service_account',
        'project_id': 'test-project',
        'private_key_id': 'test-key-id',
        'private_key': private_key_pem,
        'client_email': SERVICE_ACCOUNT_EMAIL,
        'client_id': '1234567890',
        'token_uri': 'https://oauth2.googleapis.com/token',
    }


@pytest.fixture
def service_account_file(tmp_path, service_account_info):
    """Service account key file on disk."""
    path = tmp_path / 'service-account.json'
    path.write_text(json.dumps(service_account_info))
    return str(path)


@pytest.fixture
def wallet_client():
    """Mock Wallet Objects API client that accepts every insert."""
    client = Mock(name='WalletObjectsClient')
    client.insert_generic_object.side_effect = lambda payload: {
        'id': payload['id'],
        'classId': payload['classId'],
    }
    client.get_generic_object.side_effect = AssertionError('get_generic_object should not be called')
    return client


@pytest.fixture
def app(service_account_file, wallet_client):
    """Create application for testing with a configured wallet issuer."""
    app = create_app(make_config(GOOGLE_APPLICATION_CREDENTIALS=service_account_file))

    # Swap the real API client for the mock and pin the object id clock
    init_wallet(app, client=wallet_client, clock=lambda: FIXED_MILLIS)

    ctx = app.app_context()
    ctx.push()
    _db.create_all()

    yield app

    _db.session.remove()
    _db.drop_all()
    ctx.pop()


@pytest.fixture
def db(app):
    return _db


@pytest.fixture
def client(app):
    """Create Flask test client."""
    return app.test_client()


@pytest.fixture
def runner(app):
    """Create Flask CLI runner."""
    return app.test_cli_runner()


@pytest.fixture
def user(db):
    """Create test user."""
    from tests.factories import UserFactory
    return UserFactory(id='u1', name='Jane Doe', email='jane@x.com', type='attendee')


@pytest.fixture
def auth_headers(app, user):
    """Bearer header carrying a session token for the test user."""
    from tests.helpers import session_headers
    return session_headers(user.id, user.email)
