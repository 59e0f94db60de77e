"""Client for the external identity provider (Supabase GoTrue REST API).

The provider is the service of record for credentials and email
confirmation. This module only forwards requests to it; passwords are never
stored locally.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from jobboard.core import config
from jobboard.core.errors import UpstreamError

logger = logging.getLogger(__name__)

EMAIL_NOT_CONFIRMED = 'email_not_confirmed'


class IdentityProviderError(UpstreamError):
    """The provider rejected a request (400) or could not be reached (500)."""

    def __init__(self, message: str, status_code: int = 400, error_code: Optional[str] = None):
        super().__init__(message, status_code)
        self.error_code = error_code


@dataclass(frozen=True)
class IdentityUser:
    id: str
    email: str
    email_confirmed_at: Optional[str] = None

    @property
    def is_confirmed(self) -> bool:
        return bool(self.email_confirmed_at)

    @classmethod
    def from_payload(cls, payload: dict) -> 'IdentityUser':
        return cls(
            id=str(payload['id']),
            email=payload.get('email') or '',
            email_confirmed_at=payload.get('email_confirmed_at') or payload.get('confirmed_at'),
        )


@dataclass(frozen=True)
class IdentitySession:
    access_token: str
    user: IdentityUser


def _error_message(payload: dict) -> str:
    for key in ('msg', 'error_description', 'message', 'error'):
        value = payload.get(key)
        if isinstance(value, str) and value:
            return value
    return 'Identity provider rejected the request'


class IdentityClient:
    def __init__(
        self,
        base_url: str,
        api_key: str,
        service_role_key: str = '',
        email_redirect_url: str = '',
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.api_key = api_key
        self.service_role_key = service_role_key
        self.email_redirect_url = email_redirect_url
        self._http = httpx.Client(
            base_url=f'{base_url}/auth/v1',
            headers={'apikey': api_key},
            transport=transport,
        )

    def close(self) -> None:
        self._http.close()

    def _request(self, method: str, path: str, **kwargs) -> dict:
        try:
            response = self._http.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning('Identity provider request failed: %s %s (%s)', method, path, exc.__class__.__name__)
            raise IdentityProviderError('Identity provider unavailable', status_code=500) from exc

        try:
            payload = response.json() if response.content else {}
        except ValueError:
            payload = {}

        if response.status_code >= 500:
            logger.warning('Identity provider error: %s %s -> %s', method, path, response.status_code)
            raise IdentityProviderError(_error_message(payload), status_code=500)
        if response.is_error:
            raise IdentityProviderError(
                _error_message(payload),
                status_code=400,
                error_code=payload.get('error_code') or payload.get('error'),
            )
        return payload

    def sign_up(self, email: str, password: str) -> IdentityUser:
        params = {'redirect_to': self.email_redirect_url} if self.email_redirect_url else None
        payload = self._request('POST', '/signup', json={'email': email, 'password': password}, params=params)
        # With email confirmation on, the provider returns the bare user object.
        return IdentityUser.from_payload(payload.get('user') or payload)

    def sign_in_with_password(self, email: str, password: str) -> IdentitySession:
        payload = self._request(
            'POST',
            '/token',
            params={'grant_type': 'password'},
            json={'email': email, 'password': password},
        )
        return IdentitySession(
            access_token=payload['access_token'],
            user=IdentityUser.from_payload(payload['user']),
        )

    def get_user(self, access_token: str) -> IdentityUser:
        payload = self._request('GET', '/user', headers={'Authorization': f'Bearer {access_token}'})
        return IdentityUser.from_payload(payload)

    def delete_user(self, user_id: str) -> None:
        if not self.service_role_key:
            raise IdentityProviderError('Service role key is not configured', status_code=500)
        self._request(
            'DELETE',
            f'/admin/users/{user_id}',
            headers={
                'apikey': self.service_role_key,
                'Authorization': f'Bearer {self.service_role_key}',
            },
        )


def build_identity_client() -> IdentityClient:
    return IdentityClient(
        base_url=config.SUPABASE_URL,
        api_key=config.SUPABASE_ANON_KEY,
        service_role_key=config.SUPABASE_SERVICE_ROLE_KEY,
        email_redirect_url=config.EMAIL_REDIRECT_URL,
    )
