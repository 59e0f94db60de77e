"""Role-specific profile storage, always scoped to the caller's own user id."""

import logging

from pydantic import BaseModel, ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from jobboard.core.errors import NotFoundError, UpstreamError, ValidationError
from jobboard.core.roles import Role, parse_role, role_config
from jobboard.models.job_seeker import RESUME_ATTACHED, RESUME_PENDING, JobSeekerProfile
from jobboard.models.user import User
from jobboard.schemas import (
    EmployerProfileResponse,
    EmployerProfileUpdate,
    JobSeekerProfileResponse,
    JobSeekerProfileUpdate,
    UserSummary,
)

logger = logging.getLogger(__name__)

DATABASE_FAILURE_MESSAGE = 'Database unavailable. Please try again later.'

PROFILE_UPDATE_SCHEMAS: dict[Role, type[BaseModel]] = {
    Role.EMPLOYER: EmployerProfileUpdate,
    Role.JOB_SEEKER: JobSeekerProfileUpdate,
}

PROFILE_RESPONSE_SCHEMAS: dict[Role, type[BaseModel]] = {
    Role.EMPLOYER: EmployerProfileResponse,
    Role.JOB_SEEKER: JobSeekerProfileResponse,
}


def validation_message(exc: PydanticValidationError) -> str:
    messages = []
    for error in exc.errors():
        location = '.'.join(str(part) for part in error.get('loc', ()) if part != 'body')
        message = error.get('msg', 'Invalid value')
        messages.append(f'{location}: {message}' if location else message)
    return '; '.join(messages) or 'Invalid request.'


def parse_profile_fields(role: Role, data: dict) -> dict:
    """Validate a raw profile body against the role's field set.

    Returns only the fields the caller supplied, so updates never blank out
    columns that were left out of the request.
    """
    schema = PROFILE_UPDATE_SCHEMAS[role]
    try:
        parsed = schema.model_validate(data or {})
    except PydanticValidationError as exc:
        raise ValidationError(validation_message(exc)) from exc
    return parsed.model_dump(exclude_unset=True)


def get_user(db: Session, user_id: str) -> User:
    try:
        user = db.get(User, user_id)
    except SQLAlchemyError as exc:
        raise UpstreamError(DATABASE_FAILURE_MESSAGE) from exc
    if user is None:
        raise NotFoundError('User not found')
    return user


def find_profile(db: Session, user_id: str, role: Role):
    model = role_config(role).profile_model
    try:
        return db.query(model).filter(model.user_id == user_id).first()
    except SQLAlchemyError as exc:
        raise UpstreamError(DATABASE_FAILURE_MESSAGE) from exc


def get_profile(db: Session, user_id: str, role: Role):
    profile = find_profile(db, user_id, role)
    if profile is None:
        raise NotFoundError('Profile not found')
    return profile


def check_required_fields(role: Role, fields: dict) -> None:
    missing = [name for name in role_config(role).required_profile_fields if not fields.get(name)]
    if missing:
        raise ValidationError(f'Missing required fields: {", ".join(missing)}')


def build_profile(user_id: str, role: Role, fields: dict):
    """Create an unsaved profile row for ``role`` from already validated fields."""
    config = role_config(role)
    check_required_fields(role, fields)
    profile_columns = _columns(config.profile_model)
    columns = {key: value for key, value in fields.items() if key in profile_columns}

    profile = config.profile_model(user_id=user_id, role=role.value, **columns)
    if role is Role.JOB_SEEKER:
        profile.resume_ref = None
        profile.resume_status = RESUME_PENDING
    return profile


def _columns(model) -> set[str]:
    return {column.name for column in model.__table__.columns}


def upsert_profile(db: Session, user_id: str, role: Role, fields: dict):
    """Insert or update the caller's profile; last write wins per field."""
    config = role_config(role)
    user = get_user(db, user_id)
    if parse_role(user.role) is not role:
        raise ValidationError('Profile type does not match the account role.')

    try:
        profile = find_profile(db, user_id, role)
        if profile is None:
            profile = build_profile(user_id, role, fields)
            db.add(profile)
        else:
            profile_columns = _columns(config.profile_model)
            for key, value in fields.items():
                if key in profile_columns and getattr(profile, key) != value:
                    setattr(profile, key, value)

        display_name = fields.get(config.display_name_field)
        if display_name and user.display_name != display_name:
            user.display_name = display_name

        db.commit()
        db.refresh(profile)
        return profile
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Profile upsert failed for user %s', user_id)
        raise UpstreamError(DATABASE_FAILURE_MESSAGE) from exc


def attach_resume(db: Session, user_id: str, resume_ref: str) -> JobSeekerProfile:
    profile = get_profile(db, user_id, Role.JOB_SEEKER)
    try:
        profile.resume_ref = resume_ref
        profile.resume_status = RESUME_ATTACHED
        db.commit()
        db.refresh(profile)
        return profile
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Resume attach failed for user %s', user_id)
        raise UpstreamError(DATABASE_FAILURE_MESSAGE) from exc


def serialize_profile(role: Role, profile):
    if profile is None:
        return None
    return PROFILE_RESPONSE_SCHEMAS[role].model_validate(profile)


def build_user_summary(user: User, profile=None) -> UserSummary:
    role = parse_role(user.role)
    return UserSummary(
        id=user.id,
        email=user.email,
        role=role.value,
        display_name=user.display_name,
        profile=serialize_profile(role, profile),
    )
