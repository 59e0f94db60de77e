"""User model definitions."""

from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, Column, DateTime, String, UniqueConstraint
from jobboard.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """Links an identity-provider account to its role and display name."""
    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("role IN ('employer', 'job_seeker')", name="ck_users_role"),
        UniqueConstraint("id", "role", name="uq_users_id_role"),
    )

    id = Column(String(64), primary_key=True)  # issued by the identity provider
    email = Column(String, unique=True, index=True, nullable=False)
    role = Column(String(16), nullable=False)
    display_name = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
