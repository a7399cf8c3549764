"""
Wallet Objects API client tests.

The authorized session is mocked; no request leaves the process.
"""
import pytest
from unittest.mock import Mock

import requests
from google.auth import exceptions as google_auth_exceptions

from walletpass.wallet_pass.client import WALLET_OBJECTS_BASE, WalletApiError, WalletObjectsClient


def make_response(status_code=200, json_body=None, text=None):
    response = Mock()
    response.status_code = status_code
    if json_body is None and text is None:
        response.content = b''
        response.text = ''
        response.json.side_effect = ValueError('No JSON')
    elif json_body is not None:
        response.content = b'{...}'
        response.text = str(json_body)
        response.json.return_value = json_body
    else:
        response.content = text.encode('utf-8')
        response.text = text
        response.json.side_effect = ValueError('No JSON')
    return response


@pytest.fixture
def session():
    return Mock(name='AuthorizedSession')


@pytest.fixture
def api(session):
    return WalletObjectsClient(session, timeout=5.0)


@pytest.mark.unit
class TestRequests:

    def test_insert_object_posts_payload(self, api, session):
        session.request.return_value = make_response(200, {'id': 'I.u1-1', 'classId': 'I.C'})

        result = api.insert_generic_object({'id': 'I.u1-1', 'classId': 'I.C'})

        assert result == {'id': 'I.u1-1', 'classId': 'I.C'}
        session.request.assert_called_once_with(
            'POST', f'{WALLET_OBJECTS_BASE}/genericObject',
            json={'id': 'I.u1-1', 'classId': 'I.C'}, timeout=5.0,
        )

    def test_get_object_quotes_the_id(self, api, session):
        session.request.return_value = make_response(200, {'id': 'I.a b'})

        api.get_generic_object('I.a b')

        session.request.assert_called_once_with(
            'GET', f'{WALLET_OBJECTS_BASE}/genericObject/I.a%20b', json=None, timeout=5.0,
        )

    def test_class_endpoints(self, api, session):
        session.request.return_value = make_response(200, {'id': 'I.C'})

        api.insert_generic_class({'id': 'I.C'})
        api.get_generic_class('I.C')

        urls = [c.args[1] for c in session.request.call_args_list]
        assert urls == [f'{WALLET_OBJECTS_BASE}/genericClass', f'{WALLET_OBJECTS_BASE}/genericClass/I.C']

    def test_empty_success_body(self, api, session):
        session.request.return_value = make_response(204)
        assert api.get_generic_class('I.C') == {}


@pytest.mark.unit
class TestFailures:

    def test_conflict_is_flagged(self, api, session):
        session.request.return_value = make_response(409, {
            'error': {'code': 409, 'message': 'Resource already exists', 'status': 'ALREADY_EXISTS'},
        })

        with pytest.raises(WalletApiError) as exc_info:
            api.insert_generic_object({'id': 'x'})

        error = exc_info.value
        assert error.is_conflict
        assert error.kind == 'http'
        assert error.status_code == 409
        assert error.message == 'Resource already exists'
        assert error.reason == 'ALREADY_EXISTS'

    def test_non_json_error_body(self, api, session):
        session.request.return_value = make_response(502, text='Bad Gateway')

        with pytest.raises(WalletApiError) as exc_info:
            api.insert_generic_object({'id': 'x'})

        assert exc_info.value.status_code == 502
        assert exc_info.value.message == 'Bad Gateway'
        assert not exc_info.value.is_conflict

    def test_timeout(self, api, session):
        session.request.side_effect = requests.exceptions.ReadTimeout('slow')

        with pytest.raises(WalletApiError) as exc_info:
            api.insert_generic_object({'id': 'x'})

        assert exc_info.value.kind == 'timeout'

    def test_connection_error(self, api, session):
        session.request.side_effect = requests.exceptions.ConnectionError('refused')

        with pytest.raises(WalletApiError) as exc_info:
            api.insert_generic_object({'id': 'x'})

        assert exc_info.value.kind == 'connection'

    def test_token_refresh_failure(self, api, session):
        session.request.side_effect = google_auth_exceptions.RefreshError('invalid_grant')

        with pytest.raises(WalletApiError) as exc_info:
            api.insert_generic_object({'id': 'x'})

        assert exc_info.value.kind == 'auth'

    def test_invalid_success_body(self, api, session):
        session.request.return_value = make_response(200, text='<html>')

        with pytest.raises(WalletApiError) as exc_info:
            api.insert_generic_object({'id': 'x'})

        assert exc_info.value.kind == 'invalid_response'


@pytest.mark.unit
def test_from_settings_builds_authorized_session(service_account_info):
    settings = Mock(service_account_info=service_account_info, api_timeout=3.0)

    api = WalletObjectsClient.from_settings(settings)

    assert api.timeout == 3.0
    assert api.session.credentials.service_account_email == service_account_info['client_email']
