import jwt
import pytest
from fastapi.security import HTTPAuthorizationCredentials

from jobboard.auth import jwt_handler
from jobboard.auth.dependencies import get_current_session, verify_token
from jobboard.core import config
from jobboard.core.errors import InvalidTokenError
from jobboard.core.roles import Role


def _flip_signature(token: str) -> str:
    header, payload, signature = token.split('.')
    first = 'A' if signature[0] != 'A' else 'B'
    return f'{header}.{payload}.{first}{signature[1:]}'


def test_issued_token_round_trips_user_and_role() -> None:
    token = jwt_handler.create_access_token(user_id='user-1', role='employer')

    claims = verify_token(token)

    assert claims.user_id == 'user-1'
    assert claims.role is Role.EMPLOYER


def test_token_expires_after_configured_minutes() -> None:
    token = jwt_handler.create_access_token(user_id='user-1', role='job_seeker')

    payload = jwt_handler.decode_access_token(token)

    assert payload['exp'] - payload['iat'] == config.JWT_EXPIRES_MINUTES * 60


def test_tampered_signature_is_rejected() -> None:
    token = jwt_handler.create_access_token(user_id='user-1', role='employer')

    with pytest.raises(InvalidTokenError):
        verify_token(_flip_signature(token))


def test_token_signed_with_other_secret_is_rejected() -> None:
    forged = jwt.encode(
        {'sub': 'user-1', 'role': 'employer', 'exp': 4102444800},
        'some-other-secret-that-is-long-enough-for-hs256',
        algorithm='HS256',
    )

    with pytest.raises(InvalidTokenError):
        verify_token(forged)


def test_expired_token_is_rejected() -> None:
    token = jwt_handler.create_access_token(user_id='user-1', role='employer', expires_minutes=-5)

    with pytest.raises(InvalidTokenError):
        verify_token(token)


def test_token_with_unknown_role_is_rejected() -> None:
    token = jwt_handler.create_access_token(user_id='user-1', role='admin')

    with pytest.raises(InvalidTokenError):
        verify_token(token)


def test_token_without_role_claim_is_rejected() -> None:
    token = jwt.encode(
        {'sub': 'user-1', 'exp': 4102444800},
        config.JWT_SECRET_KEY,
        algorithm=config.JWT_ALGORITHM,
    )

    with pytest.raises(InvalidTokenError):
        verify_token(token)


@pytest.mark.parametrize('credentials', [
    None,
    HTTPAuthorizationCredentials(scheme='Basic', credentials='dXNlcjpwYXNz'),
    HTTPAuthorizationCredentials(scheme='Bearer', credentials='not-a-jwt'),
])
def test_get_current_session_collapses_failures_to_one_error(credentials) -> None:
    with pytest.raises(InvalidTokenError) as exception_info:
        get_current_session(credentials)

    assert exception_info.value.status_code == 401
    assert exception_info.value.message == 'Invalid or expired token'
