# walletpass/wallet_pass/upsert.py

"""
Pass Object Upsert

Creates the attendee's generic pass object. When the API reports that the
object id already exists, the existing object is fetched once and used
instead; nothing is retried.

    CREATING -> RESOLVED
    CREATING -> CONFLICT_DETECTED -> FETCHING -> RESOLVED
    CREATING -> [CONFLICT_DETECTED -> FETCHING ->] FAILED

Raw client failures are translated here into the issuance error taxonomy.
"""

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List

from .client import WalletApiError
from .errors import (
    ConflictResolutionFailed,
    UpstreamError,
    UpstreamRejected,
    UpstreamTimeout,
    UpstreamUnavailable,
)
from .payloads import PassObjectRequest, build_object_id, build_pass_object

logger = logging.getLogger(__name__)


class UpsertState(Enum):
    CREATING = 'creating'
    CONFLICT_DETECTED = 'conflict_detected'
    FETCHING = 'fetching'
    RESOLVED = 'resolved'
    FAILED = 'failed'


@dataclass(frozen=True)
class PassRecord:
    """Reference to a pass object stored by the wallet provider."""
    id: str
    class_id: str

    @classmethod
    def from_api(cls, data: dict, request: PassObjectRequest) -> 'PassRecord':
        return cls(
            id=data.get('id') or request.object_id,
            class_id=data.get('classId') or request.class_id,
        )


@dataclass
class UpsertOutcome:
    record: PassRecord
    transitions: List[UpsertState] = field(default_factory=list)

    @property
    def recovered_from_conflict(self) -> bool:
        return UpsertState.CONFLICT_DETECTED in self.transitions


def translate_api_error(error: WalletApiError) -> UpstreamError:
    """Map a raw client failure onto the upstream error variants."""
    if error.kind == 'timeout':
        return UpstreamTimeout(detail=error.message)
    if error.kind in ('connection', 'invalid_response'):
        return UpstreamUnavailable(detail=error.message)
    if error.kind == 'auth':
        return UpstreamRejected(detail=error.message)
    if error.status_code == 429 or (error.status_code or 0) >= 500:
        return UpstreamUnavailable(detail=error.message)
    return UpstreamRejected(detail=error.message)


def current_millis() -> int:
    return int(time.time() * 1000)


class PassObjectUpsert:
    """Creates (or, on conflict, fetches) one pass object per call."""

    def __init__(self, client, settings, clock: Callable[[], int] = current_millis):
        self.client = client
        self.settings = settings
        self.clock = clock

    def upsert(self, profile) -> UpsertOutcome:
        object_id = build_object_id(self.settings.issuer_id, profile.id, self.clock())
        request = build_pass_object(profile, object_id, self.settings)
        transitions = [UpsertState.CREATING]

        try:
            created = self.client.insert_generic_object(request.to_payload())
        except WalletApiError as e:
            if not e.is_conflict:
                transitions.append(UpsertState.FAILED)
                logger.error(f"Google Wallet API error during object insertion for {object_id}: {e.message}")
                raise translate_api_error(e) from e
            conflict = e
            transitions.append(UpsertState.CONFLICT_DETECTED)
            logger.info(f"Object with ID {object_id} already exists. Attempting to retrieve it.")
        else:
            transitions.append(UpsertState.RESOLVED)
            record = PassRecord.from_api(created, request)
            logger.info(f"Generic object {record.id} created successfully.")
            return UpsertOutcome(record=record, transitions=transitions)

        transitions.append(UpsertState.FETCHING)
        try:
            existing = self.client.get_generic_object(object_id)
        except WalletApiError as e:
            transitions.append(UpsertState.FAILED)
            logger.error(f"Error retrieving existing object {object_id}: {e.message}")
            # The caller sees why the insert was refused, not why the fetch failed
            raise ConflictResolutionFailed(detail=conflict.message) from e

        transitions.append(UpsertState.RESOLVED)
        record = PassRecord.from_api(existing, request)
        logger.info(f"Retrieved existing object {record.id}.")
        return UpsertOutcome(record=record, transitions=transitions)
