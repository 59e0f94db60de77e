from dataclasses import dataclass

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from jobboard.auth import jwt_handler
from jobboard.core.errors import InvalidRoleError, InvalidTokenError
from jobboard.core.roles import Role, parse_role

# auto_error=False so a missing or non-Bearer header takes the same path as a bad token.
security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class SessionClaims:
    user_id: str
    role: Role


def verify_token(token: str | None) -> SessionClaims:
    if not token:
        raise InvalidTokenError()
    try:
        payload = jwt_handler.decode_access_token(token)
        return SessionClaims(user_id=str(payload["sub"]), role=parse_role(payload["role"]))
    except (jwt.PyJWTError, InvalidRoleError, KeyError) as exc:
        raise InvalidTokenError() from exc


def get_current_session(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> SessionClaims:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise InvalidTokenError()
    return verify_token(credentials.credentials)
