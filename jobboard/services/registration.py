"""Signup, signin and post-confirmation dashboard dispatch.

Signup spans two systems: the account is created at the identity provider
first, then the user row and the role's profile row are written in one
datastore transaction. If that transaction fails the provider account is
deleted again, so a failed signup does not leave an identity without a
profile. If even that deletion fails the orphan is logged for manual cleanup.
"""

import logging
from typing import Union

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from jobboard.auth import jwt_handler
from jobboard.auth.identity import EMAIL_NOT_CONFIRMED, IdentityClient, IdentityProviderError
from jobboard.core import config
from jobboard.core.errors import AuthError, JobBoardError, NotFoundError, UpstreamError, ValidationError
from jobboard.core.roles import parse_role, role_config
from jobboard.models.user import User
from jobboard.schemas import EmployerSignup, JobSeekerSignup, SigninRequest, UserSummary
from jobboard.services.profiles import (
    DATABASE_FAILURE_MESSAGE,
    build_profile,
    build_user_summary,
    check_required_fields,
)

logger = logging.getLogger(__name__)

SIGNUP_MESSAGE = 'Confirmation email sent!'
SIGNIN_MESSAGE = 'User signed in successfully'
CREDENTIAL_FIELDS = {'email', 'password', 'role'}


def find_user_by_email(db: Session, email: str) -> User | None:
    try:
        return db.query(User).filter(User.email == email).first()
    except SQLAlchemyError as exc:
        raise UpstreamError(DATABASE_FAILURE_MESSAGE) from exc


def _discard_identity(db: Session, identity: IdentityClient, user_id: str) -> None:
    try:
        existing = db.get(User, user_id)
    except SQLAlchemyError:
        existing = None
    # Never delete an identity that already backs a stored user.
    if existing is not None:
        logger.error('Signup failed for existing user %s; identity left in place', user_id)
        return
    try:
        identity.delete_user(user_id)
        logger.info('Removed identity %s after failed signup', user_id)
    except IdentityProviderError:
        logger.exception('Orphaned identity %s could not be removed after failed signup', user_id)


def signup(
    db: Session,
    identity: IdentityClient,
    payload: Union[EmployerSignup, JobSeekerSignup],
) -> UserSummary:
    role = parse_role(payload.role)
    settings = role_config(role)
    fields = payload.model_dump(exclude=CREDENTIAL_FIELDS)
    display_name = fields[settings.display_name_field]

    if find_user_by_email(db, payload.email) is not None:
        raise ValidationError('User already registered')

    # Reject incomplete profiles before anything is created upstream.
    check_required_fields(role, fields)

    identity_user = identity.sign_up(payload.email, payload.password)

    try:
        user = User(
            id=identity_user.id,
            email=payload.email,
            role=role.value,
            display_name=display_name,
        )
        db.add(user)
        db.flush()
        profile = build_profile(user.id, role, fields)
        db.add(profile)
        db.commit()
    except (SQLAlchemyError, JobBoardError) as exc:
        db.rollback()
        logger.warning('Profile creation failed for %s signup of %s', role.value, identity_user.id)
        _discard_identity(db, identity, identity_user.id)
        if isinstance(exc, JobBoardError):
            raise
        raise UpstreamError('Could not create user profile') from exc

    logger.info('Registered %s user %s', role.value, user.id)
    return build_user_summary(user, profile)


def signin(db: Session, identity: IdentityClient, payload: SigninRequest) -> dict:
    try:
        session = identity.sign_in_with_password(payload.email, payload.password)
    except IdentityProviderError as exc:
        if exc.status_code >= 500:
            raise
        if exc.error_code == EMAIL_NOT_CONFIRMED:
            raise AuthError('Email not confirmed') from exc
        raise AuthError(exc.message) from exc

    if not session.user.is_confirmed:
        raise AuthError('Email not confirmed')

    user = find_user_by_email(db, payload.email)
    if user is None:
        logger.warning('Identity %s has no stored user record', session.user.id)
        raise NotFoundError('User profile not found')

    role = parse_role(user.role)
    token = jwt_handler.create_access_token(user_id=user.id, role=role.value)
    logger.info('User %s signed in as %s', user.id, role.value)
    return {'message': SIGNIN_MESSAGE, 'role': role.value, 'token': token}


def resolve_dashboard(db: Session, identity: IdentityClient, access_token: str | None) -> str:
    """Pick the dashboard a freshly confirmed user should land on."""
    if not access_token:
        raise AuthError('User not authenticated')

    try:
        identity_user = identity.get_user(access_token)
    except IdentityProviderError as exc:
        if exc.status_code >= 500:
            raise
        raise AuthError('User not authenticated') from exc

    try:
        user = db.get(User, identity_user.id)
    except SQLAlchemyError as exc:
        raise UpstreamError(DATABASE_FAILURE_MESSAGE) from exc
    if user is None:
        raise NotFoundError('User not found')

    role = parse_role(user.role)
    return f'{config.DASHBOARD_BASE_URL}{role_config(role).dashboard_path}'
