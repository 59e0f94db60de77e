from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from jobboard.auth.dependencies import SessionClaims, get_current_session
from jobboard.context import get_db
from jobboard.core.errors import ForbiddenError, NotFoundError
from jobboard.core.roles import Role, role_config, role_for_dashboard
from jobboard.schemas import ResumeAttachRequest
from jobboard.services import profiles

router = APIRouter(prefix='/dashboard', tags=['profiles'])


def resolve_dashboard_role(dashboard: str, current_session: SessionClaims) -> Role:
    role = role_for_dashboard(dashboard)
    if role is None:
        raise NotFoundError('Dashboard not found')
    if role is not current_session.role:
        raise ForbiddenError('This dashboard belongs to a different account type.')
    return role


@router.get('/{dashboard}/profile')
def read_profile(
    dashboard: str,
    current_session: SessionClaims = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    role = resolve_dashboard_role(dashboard, current_session)
    profile = profiles.get_profile(db, current_session.user_id, role)
    return {'profile': profiles.serialize_profile(role, profile).model_dump(mode='json')}


def _write_profile(dashboard: str, payload: dict, current_session: SessionClaims, db: Session) -> dict:
    role = resolve_dashboard_role(dashboard, current_session)
    fields = profiles.parse_profile_fields(role, payload)
    profile = profiles.upsert_profile(db, current_session.user_id, role, fields)
    return {
        'message': 'Profile saved successfully',
        'profile': profiles.serialize_profile(role, profile).model_dump(mode='json'),
    }


@router.post('/{dashboard}/profile')
def create_profile(
    dashboard: str,
    payload: dict = Body(...),
    current_session: SessionClaims = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    return _write_profile(dashboard, payload, current_session, db)


@router.put('/{dashboard}/profile')
def update_profile(
    dashboard: str,
    payload: dict = Body(...),
    current_session: SessionClaims = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    return _write_profile(dashboard, payload, current_session, db)


@router.put('/' + role_config(Role.JOB_SEEKER).dashboard_slug + '/profile/resume')
def attach_resume(
    data: ResumeAttachRequest,
    current_session: SessionClaims = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    if current_session.role is not Role.JOB_SEEKER:
        raise ForbiddenError('Only job seekers can attach a resume.')
    profile = profiles.attach_resume(db, current_session.user_id, data.resume_ref)
    return {
        'message': 'Resume attached successfully',
        'profile': profiles.serialize_profile(Role.JOB_SEEKER, profile).model_dump(mode='json'),
    }
