# walletpass/wallet_pass/signer.py

"""
Save-to-Wallet Claims Signer

Builds the `savetowallet` claims that bind a created pass object to the
authorized origins and the issuing service account, and signs them as a
compact RS256 JWT. The Google Wallet client redeems the token from
https://pay.google.com/gp/v/save/<token>.
"""

import logging
import time
from typing import Callable, Iterable

import jwt
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from .errors import ConfigurationError, SigningFailed, SigningKeyUnavailable

logger = logging.getLogger(__name__)

SAVE_URL_BASE = 'https://pay.google.com/gp/v/save/'
CLAIMS_AUDIENCE = 'google'
CLAIMS_TYPE = 'savetowallet'
SIGNING_ALGORITHM = 'RS256'


def load_private_key(pem: str) -> rsa.RSAPrivateKey:
    """
    Parse the PEM private key from a service account key file.

    Keys copied through environment variables often carry literal "\\n"
    sequences instead of newlines; those are restored first.

    Raises:
        SigningKeyUnavailable: if the key is empty, unparsable or not RSA.
    """
    if not pem:
        raise SigningKeyUnavailable('Service account key has no private_key')

    pem = pem.replace('\\n', '\n')
    try:
        key = serialization.load_pem_private_key(pem.encode('utf-8'), password=None)
    except (ValueError, TypeError) as e:
        raise SigningKeyUnavailable(f'Unable to parse service account private key: {e}') from e

    if not isinstance(key, rsa.RSAPrivateKey):
        raise SigningKeyUnavailable('Service account private key is not an RSA key')
    return key


class ClaimsSigner:
    """Signs save-to-wallet claims for pass records."""

    def __init__(
        self,
        service_account_email: str,
        private_key: rsa.RSAPrivateKey,
        origins: Iterable[str],
        clock: Callable[[], float] = time.time,
    ):
        origins = tuple(origins)
        if not origins:
            raise ConfigurationError('At least one authorized origin is required for signing')
        if not service_account_email:
            raise ConfigurationError('Service account email is required for signing')
        if private_key is None:
            raise SigningKeyUnavailable('No signing key loaded')

        self.service_account_email = service_account_email
        self.origins = origins
        self._private_key = private_key
        self._clock = clock

    def build_claims(self, record) -> dict:
        return {
            'iss': self.service_account_email,
            'aud': CLAIMS_AUDIENCE,
            'typ': CLAIMS_TYPE,
            'iat': int(self._clock()),
            'origins': list(self.origins),
            'payload': {
                'genericObjects': [
                    {'id': record.id, 'classId': record.class_id},
                ],
            },
        }

    def sign(self, record) -> str:
        """
        Sign the claims for a pass record.

        Returns:
            The compact header.claims.signature token.

        Raises:
            SigningFailed: if the cryptographic operation fails.
        """
        claims = self.build_claims(record)
        try:
            return jwt.encode(claims, self._private_key, algorithm=SIGNING_ALGORITHM)
        except (jwt.PyJWTError, ValueError, TypeError) as e:
            logger.error(f"Failed to sign save-to-wallet claims for {record.id}: {e}")
            raise SigningFailed(detail=str(e)) from e

    def save_url(self, record) -> str:
        """Return the redeemable Add to Google Wallet URL for a pass record."""
        return f"{SAVE_URL_BASE}{self.sign(record)}"
