import os
import uuid

import pytest
from sqlalchemy.pool import StaticPool

os.environ.setdefault('DATABASE_URL', 'sqlite://')
os.environ.setdefault('JWT_SECRET_KEY', 'test-secret-key-with-enough-length-for-hs256')
os.environ.setdefault('APP_ENV', 'test')

from jobboard.auth.identity import EMAIL_NOT_CONFIRMED, IdentityProviderError, IdentitySession, IdentityUser  # noqa: E402
from jobboard.database import Base, build_engine, build_session_factory  # noqa: E402
from jobboard.models import employer, job_posting, job_seeker, user  # noqa: E402,F401


class FakeIdentityClient:
    """In-memory stand-in for the identity provider."""

    def __init__(self):
        self.accounts: dict[str, dict] = {}
        self.access_tokens: dict[str, str] = {}
        self.sign_up_calls: list[str] = []
        self.deleted_ids: list[str] = []
        self.fail_delete = False

    def sign_up(self, email: str, password: str) -> IdentityUser:
        self.sign_up_calls.append(email)
        if email in self.accounts:
            raise IdentityProviderError('User already registered', status_code=400, error_code='user_already_exists')
        account = {'id': str(uuid.uuid4()), 'email': email, 'password': password, 'confirmed_at': None}
        self.accounts[email] = account
        return IdentityUser(id=account['id'], email=email)

    def confirm(self, email: str) -> str:
        account = self.accounts[email]
        account['confirmed_at'] = '2026-01-05T09:00:00Z'
        token = f'provider-token-{account["id"]}'
        self.access_tokens[token] = email
        return token

    def sign_in_with_password(self, email: str, password: str) -> IdentitySession:
        account = self.accounts.get(email)
        if account is None or account['password'] != password:
            raise IdentityProviderError('Invalid login credentials', status_code=400, error_code='invalid_credentials')
        if account['confirmed_at'] is None:
            raise IdentityProviderError('Email not confirmed', status_code=400, error_code=EMAIL_NOT_CONFIRMED)
        return IdentitySession(
            access_token=f'provider-token-{account["id"]}',
            user=IdentityUser(id=account['id'], email=email, email_confirmed_at=account['confirmed_at']),
        )

    def get_user(self, access_token: str) -> IdentityUser:
        email = self.access_tokens.get(access_token)
        if email is None:
            raise IdentityProviderError('Invalid JWT', status_code=400)
        account = self.accounts[email]
        return IdentityUser(id=account['id'], email=email, email_confirmed_at=account['confirmed_at'])

    def delete_user(self, user_id: str) -> None:
        if self.fail_delete:
            raise IdentityProviderError('Identity provider unavailable', status_code=500)
        self.deleted_ids.append(user_id)
        for email, account in list(self.accounts.items()):
            if account['id'] == user_id:
                del self.accounts[email]

    def close(self) -> None:
        return None


@pytest.fixture
def identity() -> FakeIdentityClient:
    return FakeIdentityClient()


@pytest.fixture
def session_factory():
    engine = build_engine('sqlite://', poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    try:
        yield build_session_factory(engine)
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory, identity):
    from fastapi.testclient import TestClient

    from jobboard.context import get_db, get_identity
    from jobboard.main import app

    def _get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_identity] = lambda: identity
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
