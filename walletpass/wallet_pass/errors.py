# walletpass/wallet_pass/errors.py

"""
Wallet Pass Issuance Errors

Closed set of failures the issuance flow can end in. Every error is terminal
for the request; each one carries the HTTP status and the user-facing message
the transport layer renders.
"""

from typing import Optional

from walletpass.services.base_service import ServiceError


class WalletIssuanceError(ServiceError):
    """Base class for every issuance failure."""

    code = 'WALLET_ERROR'
    http_status = 500
    public_message = 'Internal Server Error'
    # Whether `detail` may be shown to the caller
    expose_detail = False

    def __init__(self, message: Optional[str] = None, detail: Optional[str] = None):
        super().__init__(message or self.public_message, self.code)
        self.detail = detail
        # Set by the orchestrator to the stage that was running
        self.stage = None

    def to_dict(self) -> dict:
        body = {'error': self.public_message, 'code': self.error_code}
        if self.expose_detail and self.detail:
            body['message'] = self.detail
        return body


class Unauthenticated(WalletIssuanceError):
    """No session token, an invalid one, or one without subject/email claims."""
    code = 'UNAUTHENTICATED'
    http_status = 401
    public_message = 'Unauthorized: No session or missing user details.'


class ProfileNotFound(WalletIssuanceError):
    """The session is valid but no user record exists for its subject."""
    code = 'PROFILE_NOT_FOUND'
    http_status = 404
    public_message = 'User not found in database.'


class ConfigurationError(WalletIssuanceError):
    """Issuer settings are missing or invalid."""
    code = 'CONFIGURATION_ERROR'
    public_message = 'Server configuration error: Missing critical environment variables.'


class SigningKeyUnavailable(ConfigurationError):
    """The service account private key is missing or cannot be parsed."""
    code = 'SIGNING_KEY_UNAVAILABLE'
    public_message = 'Server configuration error: Signing key unavailable.'


class UpstreamError(WalletIssuanceError):
    """Base class for failures reported by the Wallet Objects API."""
    code = 'UPSTREAM_ERROR'
    public_message = 'Failed to create pass object.'
    expose_detail = True


class UpstreamRejected(UpstreamError):
    """The API refused the request (validation, permissions, credentials)."""
    code = 'UPSTREAM_REJECTED'


class UpstreamUnavailable(UpstreamError):
    """Network fault, rate limiting or a server-side error."""
    code = 'UPSTREAM_UNAVAILABLE'


class UpstreamTimeout(UpstreamError):
    """The API did not answer within the configured deadline."""
    code = 'UPSTREAM_TIMEOUT'


class ConflictResolutionFailed(UpstreamError):
    """The object already existed but fetching it failed too."""
    code = 'CONFLICT_RESOLUTION_FAILED'
    public_message = 'Failed to create or retrieve pass object.'


class SigningFailed(WalletIssuanceError):
    """Signing the save-to-wallet claims failed."""
    code = 'SIGNING_FAILED'
    public_message = 'Failed to sign wallet pass.'
