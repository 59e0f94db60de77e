import json

import httpx
import pytest

from jobboard.auth.identity import EMAIL_NOT_CONFIRMED, IdentityClient, IdentityProviderError


def _client(handler, **kwargs) -> IdentityClient:
    return IdentityClient(
        base_url='https://project.supabase.co',
        api_key='anon-key',
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


def test_sign_up_returns_bare_user_payload_and_sends_api_key() -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen['url'] = str(request.url)
        seen['apikey'] = request.headers.get('apikey')
        seen['body'] = json.loads(request.content)
        return httpx.Response(200, json={'id': 'user-1', 'email': 'a@x.com', 'email_confirmed_at': None})

    client = _client(handler, email_redirect_url='https://app.example.com/auth/callback')

    user = client.sign_up('a@x.com', 'pw123456')

    assert user.id == 'user-1'
    assert user.email == 'a@x.com'
    assert user.is_confirmed is False
    assert seen['url'].startswith('https://project.supabase.co/auth/v1/signup')
    assert 'redirect_to=' in seen['url']
    assert seen['apikey'] == 'anon-key'
    assert seen['body'] == {'email': 'a@x.com', 'password': 'pw123456'}


def test_sign_up_reads_user_from_session_payload_when_autoconfirmed() -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={
            'access_token': 'provider-token',
            'user': {'id': 'user-2', 'email': 'b@x.com', 'email_confirmed_at': '2026-01-05T09:00:00Z'},
        })

    user = _client(handler).sign_up('b@x.com', 'pw123456')

    assert user.id == 'user-2'
    assert user.is_confirmed is True


def test_sign_up_rejection_carries_provider_message() -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(422, json={'code': 422, 'error_code': 'weak_password', 'msg': 'Password should be at least 6 characters.'})

    with pytest.raises(IdentityProviderError) as exception_info:
        _client(handler).sign_up('a@x.com', 'pw')

    assert exception_info.value.status_code == 400
    assert exception_info.value.message == 'Password should be at least 6 characters.'
    assert exception_info.value.error_code == 'weak_password'


def test_sign_in_uses_password_grant() -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen['path'] = request.url.path
        seen['grant_type'] = request.url.params.get('grant_type')
        return httpx.Response(200, json={
            'access_token': 'provider-token',
            'token_type': 'bearer',
            'user': {'id': 'user-1', 'email': 'a@x.com', 'email_confirmed_at': '2026-01-05T09:00:00Z'},
        })

    session = _client(handler).sign_in_with_password('a@x.com', 'pw123456')

    assert seen == {'path': '/auth/v1/token', 'grant_type': 'password'}
    assert session.access_token == 'provider-token'
    assert session.user.id == 'user-1'


def test_sign_in_reports_unconfirmed_email_code() -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={'code': 400, 'error_code': EMAIL_NOT_CONFIRMED, 'msg': 'Email not confirmed'})

    with pytest.raises(IdentityProviderError) as exception_info:
        _client(handler).sign_in_with_password('a@x.com', 'pw123456')

    assert exception_info.value.error_code == EMAIL_NOT_CONFIRMED
    assert exception_info.value.message == 'Email not confirmed'


def test_provider_outage_maps_to_server_error() -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text='upstream down')

    with pytest.raises(IdentityProviderError) as exception_info:
        _client(handler).get_user('provider-token')

    assert exception_info.value.status_code == 500


def test_transport_failure_maps_to_server_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError('connection refused', request=request)

    with pytest.raises(IdentityProviderError) as exception_info:
        _client(handler).sign_in_with_password('a@x.com', 'pw123456')

    assert exception_info.value.status_code == 500
    assert exception_info.value.message == 'Identity provider unavailable'


def test_get_user_sends_provider_token() -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen['authorization'] = request.headers.get('authorization')
        return httpx.Response(200, json={'id': 'user-1', 'email': 'a@x.com'})

    user = _client(handler).get_user('provider-token')

    assert user.id == 'user-1'
    assert seen['authorization'] == 'Bearer provider-token'


def test_delete_user_uses_service_role_key() -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen['method'] = request.method
        seen['path'] = request.url.path
        seen['apikey'] = request.headers.get('apikey')
        seen['authorization'] = request.headers.get('authorization')
        return httpx.Response(200, json={})

    _client(handler, service_role_key='service-key').delete_user('user-1')

    assert seen == {
        'method': 'DELETE',
        'path': '/auth/v1/admin/users/user-1',
        'apikey': 'service-key',
        'authorization': 'Bearer service-key',
    }


def test_delete_user_requires_service_role_key() -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        raise AssertionError('no request expected')

    with pytest.raises(IdentityProviderError) as exception_info:
        _client(handler).delete_user('user-1')

    assert exception_info.value.status_code == 500
