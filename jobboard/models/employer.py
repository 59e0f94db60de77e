"""Employer profile model definitions."""

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKeyConstraint, Integer, String, Text
from jobboard.database import Base
from jobboard.models.user import utcnow


class EmployerProfile(Base):
    """Company details owned by an employer user."""
    __tablename__ = "employers"
    __table_args__ = (
        CheckConstraint("role = 'employer'", name="ck_employers_role"),
        ForeignKeyConstraint(
            ["user_id", "role"],
            ["users.id", "users.role"],
            ondelete="CASCADE",
        ),
    )

    id = Column(Integer, primary_key=True)
    user_id = Column(String(64), unique=True, index=True, nullable=False)
    role = Column(String(16), nullable=False, default="employer")
    company_name = Column(String, nullable=False)
    company_description = Column(Text)
    company_logo = Column(String)
    website_url = Column(String)
    contact_number = Column(String)
    location = Column(String)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
