"""
Pass object upsert tests.

These tests verify:
- A successful insert resolves without a fetch
- A conflict is resolved by exactly one fetch of the same id
- Every other failure is translated and never retried
"""
import pytest
from unittest.mock import Mock

from walletpass.wallet_pass.client import WalletApiError
from walletpass.wallet_pass.config import PassContent
from walletpass.wallet_pass.errors import (
    ConflictResolutionFailed,
    UpstreamRejected,
    UpstreamTimeout,
    UpstreamUnavailable,
)
from walletpass.wallet_pass.identity import Profile
from walletpass.wallet_pass.upsert import PassObjectUpsert, UpsertState, translate_api_error

OBJECT_ID = 'ISSUER123.u1-1700000000000'
CLASS_ID = 'ISSUER123.HackWesternUserPass'


@pytest.fixture
def settings():
    settings = Mock()
    settings.issuer_id = 'ISSUER123'
    settings.class_id = CLASS_ID
    settings.content = PassContent()
    return settings


@pytest.fixture
def profile():
    return Profile(id='u1', display_name='Jane Doe', email='jane@x.com', role='Attendee')


@pytest.fixture
def api():
    return Mock(name='WalletObjectsClient')


@pytest.fixture
def upsert(api, settings):
    return PassObjectUpsert(api, settings, clock=lambda: 1700000000000)


def conflict():
    return WalletApiError('Resource already exists', status_code=409, reason='ALREADY_EXISTS')


@pytest.mark.unit
class TestUpsert:

    def test_created(self, upsert, api, profile):
        api.insert_generic_object.return_value = {'id': OBJECT_ID, 'classId': CLASS_ID}

        outcome = upsert.upsert(profile)

        assert outcome.record.id == OBJECT_ID
        assert outcome.record.class_id == CLASS_ID
        assert outcome.transitions == [UpsertState.CREATING, UpsertState.RESOLVED]
        assert not outcome.recovered_from_conflict
        api.get_generic_object.assert_not_called()

        sent = api.insert_generic_object.call_args.args[0]
        assert sent['id'] == OBJECT_ID
        assert sent['cardTitle']['defaultValue']['value'] == 'Jane Doe'

    def test_created_with_sparse_response(self, upsert, api, profile):
        api.insert_generic_object.return_value = {}

        outcome = upsert.upsert(profile)

        assert outcome.record.id == OBJECT_ID
        assert outcome.record.class_id == CLASS_ID

    def test_conflict_fetches_existing_object(self, upsert, api, profile):
        api.insert_generic_object.side_effect = conflict()
        api.get_generic_object.return_value = {'id': OBJECT_ID, 'classId': CLASS_ID}

        outcome = upsert.upsert(profile)

        api.get_generic_object.assert_called_once_with(OBJECT_ID)
        assert outcome.record.id == OBJECT_ID
        assert outcome.recovered_from_conflict
        assert outcome.transitions == [
            UpsertState.CREATING,
            UpsertState.CONFLICT_DETECTED,
            UpsertState.FETCHING,
            UpsertState.RESOLVED,
        ]

    def test_conflict_then_fetch_failure(self, upsert, api, profile):
        api.insert_generic_object.side_effect = conflict()
        api.get_generic_object.side_effect = WalletApiError('Not found', status_code=404)

        with pytest.raises(ConflictResolutionFailed) as exc_info:
            upsert.upsert(profile)

        assert exc_info.value.to_dict() == {
            'error': 'Failed to create or retrieve pass object.',
            'code': 'CONFLICT_RESOLUTION_FAILED',
            'message': 'Resource already exists',
        }
        assert api.insert_generic_object.call_count == 1
        assert api.get_generic_object.call_count == 1

    @pytest.mark.parametrize('error, expected', [
        (WalletApiError('Invalid class', status_code=400), UpstreamRejected),
        (WalletApiError('Forbidden', status_code=403), UpstreamRejected),
        (WalletApiError('Slow down', status_code=429), UpstreamUnavailable),
        (WalletApiError('Backend error', status_code=503), UpstreamUnavailable),
        (WalletApiError('Timed out', kind='timeout'), UpstreamTimeout),
        (WalletApiError('Refused', kind='connection'), UpstreamUnavailable),
        (WalletApiError('Bad body', kind='invalid_response', status_code=200), UpstreamUnavailable),
        (WalletApiError('invalid_grant', kind='auth'), UpstreamRejected),
    ])
    def test_insert_failures_are_not_retried(self, upsert, api, profile, error, expected):
        api.insert_generic_object.side_effect = error

        with pytest.raises(expected) as exc_info:
            upsert.upsert(profile)

        assert exc_info.value.http_status == 500
        assert exc_info.value.to_dict()['message'] == error.message
        assert exc_info.value.to_dict()['error'] == 'Failed to create pass object.'
        assert api.insert_generic_object.call_count == 1
        api.get_generic_object.assert_not_called()

    def test_each_call_uses_a_fresh_object_id(self, api, settings, profile):
        ticks = iter([1, 2])
        upsert = PassObjectUpsert(api, settings, clock=lambda: next(ticks))
        api.insert_generic_object.side_effect = lambda payload: payload

        first = upsert.upsert(profile)
        second = upsert.upsert(profile)

        assert first.record.id == 'ISSUER123.u1-1'
        assert second.record.id == 'ISSUER123.u1-2'


@pytest.mark.unit
def test_translate_keeps_api_message():
    error = translate_api_error(WalletApiError('Class not approved', status_code=400))
    assert isinstance(error, UpstreamRejected)
    assert error.detail == 'Class not approved'
