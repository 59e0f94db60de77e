from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import RedirectResponse
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from jobboard.auth.dependencies import SessionClaims, get_current_session, security
from jobboard.auth.identity import IdentityClient
from jobboard.context import get_db, get_identity
from jobboard.schemas import SigninRequest, SignupRequest
from jobboard.services import profiles, registration

router = APIRouter(tags=['auth'])


@router.post('/signup')
def signup(
    payload: SignupRequest,
    db: Session = Depends(get_db),
    identity: IdentityClient = Depends(get_identity),
):
    user = registration.signup(db, identity, payload)
    return {'message': registration.SIGNUP_MESSAGE, 'user': user.model_dump(mode='json')}


@router.post('/signin')
def signin(
    payload: SigninRequest,
    db: Session = Depends(get_db),
    identity: IdentityClient = Depends(get_identity),
):
    return registration.signin(db, identity, payload)


@router.get('/auth/callback')
def auth_callback(
    access_token: Optional[str] = Query(default=None),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
    identity: IdentityClient = Depends(get_identity),
):
    token = access_token or (credentials.credentials if credentials else None)
    redirect_url = registration.resolve_dashboard(db, identity, token)
    return RedirectResponse(url=redirect_url, status_code=302)


@router.get('/profile')
def me(
    current_session: SessionClaims = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    user = profiles.get_user(db, current_session.user_id)
    profile = profiles.find_profile(db, user.id, current_session.role)
    return {'user': profiles.build_user_summary(user, profile).model_dump(mode='json')}
