"""Job seeker profile model definitions."""

from sqlalchemy import JSON, CheckConstraint, Column, DateTime, ForeignKeyConstraint, Integer, String, Text
from jobboard.database import Base
from jobboard.models.user import utcnow

RESUME_PENDING = "pending"
RESUME_ATTACHED = "attached"


class JobSeekerProfile(Base):
    """Candidate details owned by a job seeker user."""
    __tablename__ = "job_seekers"
    __table_args__ = (
        CheckConstraint("role = 'job_seeker'", name="ck_job_seekers_role"),
        CheckConstraint("resume_status IN ('pending', 'attached')", name="ck_job_seekers_resume_status"),
        ForeignKeyConstraint(
            ["user_id", "role"],
            ["users.id", "users.role"],
            ondelete="CASCADE",
        ),
    )

    id = Column(Integer, primary_key=True)
    user_id = Column(String(64), unique=True, index=True, nullable=False)
    role = Column(String(16), nullable=False, default="job_seeker")
    portfolio_url = Column(String)
    skills = Column(JSON, nullable=False, default=list)
    education = Column(Text)
    work_experience = Column(Text)
    linkedin_url = Column(String)
    contact_number = Column(String)
    location = Column(String)
    resume_ref = Column(String)  # external object reference, never an inline blob
    resume_status = Column(String(16), nullable=False, default=RESUME_PENDING)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
