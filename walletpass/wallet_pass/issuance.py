# walletpass/wallet_pass/issuance.py

"""
Pass Issuance Orchestrator

Runs one issuance: resolve the caller, create the pass object, sign the
save-to-wallet claims. Stages only move forward:

    START -> RESOLVING -> UPSERTING -> SIGNING -> DONE

Any error ends the run in FAILED; the error records the stage that raised it.
Every run creates a new pass object, so calling it twice for the same user
yields two passes.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from flask import current_app

from walletpass.services.base_service import BaseService
from .client import WalletObjectsClient
from .errors import ConfigurationError, WalletIssuanceError
from .identity import IdentityResolver, SqlAlchemyProfileStore, read_session_claims
from .signer import ClaimsSigner
from .upsert import PassObjectUpsert, current_millis

logger = logging.getLogger(__name__)

EXTENSION_KEY = 'wallet_issuer'


class IssuanceStage(Enum):
    START = 'start'
    RESOLVING = 'resolving'
    UPSERTING = 'upserting'
    SIGNING = 'signing'
    DONE = 'done'
    FAILED = 'failed'


@dataclass(frozen=True)
class IssuanceResult:
    save_url: str
    object_id: str
    class_id: str
    recovered_from_conflict: bool = False


class IssuanceService(BaseService):
    """Issues one pass for the current caller."""

    def __init__(self, resolver: IdentityResolver, upsert: PassObjectUpsert, signer: ClaimsSigner):
        super().__init__()
        self.resolver = resolver
        self.upsert = upsert
        self.signer = signer
        self.stage = IssuanceStage.START

    def issue(self) -> IssuanceResult:
        self.set_operation_context()
        self._log_operation_start('issue_pass')

        try:
            self.stage = IssuanceStage.RESOLVING
            profile = self.resolver.resolve()

            self.stage = IssuanceStage.UPSERTING
            outcome = self.upsert.upsert(profile)

            self.stage = IssuanceStage.SIGNING
            save_url = self.signer.save_url(outcome.record)
        except WalletIssuanceError as e:
            e.stage = self.stage
            self.stage = IssuanceStage.FAILED
            # Client-side failures are expected traffic; no traceback needed
            self._log_operation_error(
                'issue_pass', e,
                exc_info=e.http_status >= 500,
                error_code=e.error_code,
                failed_stage=e.stage.value,
            )
            raise

        self.stage = IssuanceStage.DONE
        self._log_operation_success(
            'issue_pass',
            object_id=outcome.record.id,
            recovered_from_conflict=outcome.recovered_from_conflict,
        )
        return IssuanceResult(
            save_url=save_url,
            object_id=outcome.record.id,
            class_id=outcome.record.class_id,
            recovered_from_conflict=outcome.recovered_from_conflict,
        )


class WalletIssuer:
    """
    Process-wide issuer state built once at application start.

    Holds the immutable settings, the API client and the claims signer, or
    the ConfigurationError that prevented building them. Request handling
    builds a fresh IssuanceService from it for every call.
    """

    def __init__(self, settings=None, client=None, signer: Optional[ClaimsSigner] = None,
                 profile_store=None, clock=current_millis, error: Optional[ConfigurationError] = None):
        self.settings = settings
        self.client = client
        self.signer = signer
        self.profile_store = profile_store or SqlAlchemyProfileStore()
        self.clock = clock
        self.error = error

    @classmethod
    def from_settings(cls, settings, client=None, profile_store=None, clock=current_millis) -> 'WalletIssuer':
        """
        Raises:
            ConfigurationError: if the API client or the signer cannot be built.
        """
        signer = ClaimsSigner(
            service_account_email=settings.service_account_email,
            private_key=settings.private_key,
            origins=settings.origins,
        )
        if client is None:
            client = WalletObjectsClient.from_settings(settings)
        return cls(settings=settings, client=client, signer=signer,
                   profile_store=profile_store, clock=clock)

    @classmethod
    def unavailable(cls, error: ConfigurationError) -> 'WalletIssuer':
        return cls(error=error)

    @property
    def is_available(self) -> bool:
        return self.error is None

    def require_settings(self):
        """Return the settings, or raise the stored ConfigurationError."""
        if self.error is not None:
            raise type(self.error)(self.error.message) from self.error
        return self.settings

    def create_service(self, claims_loader=read_session_claims) -> IssuanceService:
        """
        Build the orchestrator for one request.

        Raises:
            ConfigurationError: if the issuer could not be configured at start.
        """
        settings = self.require_settings()
        return IssuanceService(
            resolver=IdentityResolver(self.profile_store, claims_loader),
            upsert=PassObjectUpsert(self.client, settings, clock=self.clock),
            signer=self.signer,
        )


def get_wallet_issuer() -> WalletIssuer:
    """Return the WalletIssuer registered on the current app."""
    return current_app.extensions[EXTENSION_KEY]
