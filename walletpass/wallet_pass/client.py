# walletpass/wallet_pass/client.py

"""
Google Wallet Objects API Client

Thin synchronous wrapper over the Wallet Objects REST API
(https://walletobjects.googleapis.com/walletobjects/v1) using a google-auth
AuthorizedSession, which refreshes the service account access token as
needed. Failures are raised as WalletApiError carrying the raw status and
message; callers decide what they mean.
"""

import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import requests
from google.auth import exceptions as google_auth_exceptions
from google.auth.transport.requests import AuthorizedSession
from google.oauth2 import service_account

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

WALLET_OBJECTS_BASE = 'https://walletobjects.googleapis.com/walletobjects/v1'
WALLET_API_SCOPES = ['https://www.googleapis.com/auth/wallet_object.issuer']


class WalletApiError(Exception):
    """
    Raw failure from the Wallet Objects API or its transport.

    Attributes:
        kind: 'http' (the API answered with an error status), 'timeout',
            'connection', 'invalid_response' (unparsable success body) or 'auth'
            (access token could not be obtained).
        status_code: HTTP status for 'http' failures.
        reason: API error status string (e.g. ALREADY_EXISTS), if any.
    """

    def __init__(self, message: str, kind: str = 'http', status_code: Optional[int] = None,
                 reason: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.status_code = status_code
        self.reason = reason

    @property
    def is_conflict(self) -> bool:
        return self.kind == 'http' and self.status_code == 409

    def __repr__(self):
        return f"WalletApiError(kind={self.kind!r}, status_code={self.status_code!r}, message={self.message!r})"


def _error_from_response(response) -> WalletApiError:
    message = response.text or f"HTTP {response.status_code}"
    reason = None
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and isinstance(body.get('error'), dict):
        message = body['error'].get('message') or message
        reason = body['error'].get('status')
    return WalletApiError(message, kind='http', status_code=response.status_code, reason=reason)


class WalletObjectsClient:
    """Client for the generic class/object endpoints of the Wallet Objects API."""

    def __init__(self, session, base_url: str = WALLET_OBJECTS_BASE, timeout: float = 10.0):
        self.session = session
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings) -> 'WalletObjectsClient':
        """
        Build a client authenticated as the configured service account.

        Raises:
            ConfigurationError: if the key file lacks the fields google-auth needs.
        """
        try:
            credentials = service_account.Credentials.from_service_account_info(
                settings.service_account_info,
                scopes=WALLET_API_SCOPES,
            )
        except (ValueError, KeyError) as e:
            raise ConfigurationError(f'Invalid service account key file: {e}') from e
        return cls(AuthorizedSession(credentials), timeout=settings.api_timeout)

    # ==================== Generic objects ====================

    def insert_generic_object(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._request('POST', '/genericObject', json=payload)

    def get_generic_object(self, object_id: str) -> Dict[str, Any]:
        return self._request('GET', f"/genericObject/{quote(object_id, safe='')}")

    # ==================== Generic classes ====================

    def insert_generic_class(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._request('POST', '/genericClass', json=payload)

    def get_generic_class(self, class_id: str) -> Dict[str, Any]:
        return self._request('GET', f"/genericClass/{quote(class_id, safe='')}")

    # ==================== Transport ====================

    def _request(self, method: str, path: str, json: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(method, url, json=json, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            raise WalletApiError(f"Timed out after {self.timeout}s: {method} {path}", kind='timeout') from e
        except google_auth_exceptions.RefreshError as e:
            raise WalletApiError(f"Could not obtain access token: {e}", kind='auth') from e
        except (google_auth_exceptions.TransportError, requests.exceptions.RequestException) as e:
            raise WalletApiError(f"Connection error: {e}", kind='connection') from e

        if response.status_code >= 400:
            error = _error_from_response(response)
            logger.warning(f"Wallet API {method} {path} failed with {response.status_code}: {error.message}")
            raise error

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            raise WalletApiError(
                f"Invalid JSON in Wallet API response: {e}",
                kind='invalid_response',
                status_code=response.status_code,
            ) from e
