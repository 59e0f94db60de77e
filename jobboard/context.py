"""Process-wide context built once at startup and injected into handlers."""

from dataclasses import dataclass

from fastapi import Depends, Request
from sqlalchemy.orm import Session, sessionmaker

from jobboard.auth.identity import IdentityClient, build_identity_client
from jobboard.database import SessionLocal


@dataclass
class AppContext:
    identity: IdentityClient
    session_factory: sessionmaker

    def close(self) -> None:
        self.identity.close()


def build_context() -> AppContext:
    return AppContext(identity=build_identity_client(), session_factory=SessionLocal)


def get_context(request: Request) -> AppContext:
    return request.app.state.context


def get_identity(context: AppContext = Depends(get_context)) -> IdentityClient:
    return context.identity


def get_db(context: AppContext = Depends(get_context)):
    db: Session = context.session_factory()
    try:
        yield db
    finally:
        db.close()
