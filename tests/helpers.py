"""
Test helpers for common testing operations.
"""
from typing import Optional

import jwt
from flask_jwt_extended import create_access_token

from walletpass.wallet_pass.signer import SAVE_URL_BASE
from web_config import TestingConfig

FIXED_MILLIS = 1700000000000
SERVICE_ACCOUNT_EMAIL = TestingConfig.WALLET_SERVICE_ACCOUNT_EMAIL


def make_config(**overrides):
    """Build a TestingConfig subclass with the given settings replaced."""
    return type('WalletTestConfig', (TestingConfig,), overrides)


def session_headers(subject: str, email: Optional[str] = None) -> dict:
    """Authorization header for a session token (requires an app context)."""
    claims = {'email': email} if email else {}
    token = create_access_token(identity=subject, additional_claims=claims)
    return {'Authorization': f'Bearer {token}'}


def decode_save_url(save_url: str, public_key) -> dict:
    """Verify and decode the claims inside an Add to Google Wallet URL."""
    assert save_url.startswith(SAVE_URL_BASE)
    token = save_url[len(SAVE_URL_BASE):]
    return jwt.decode(token, public_key, algorithms=['RS256'], audience='google')


def token_header(save_url: str) -> dict:
    return jwt.get_unverified_header(save_url[len(SAVE_URL_BASE):])
