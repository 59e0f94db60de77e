"""Job posting model definitions."""

from sqlalchemy import JSON, CheckConstraint, Column, DateTime, ForeignKey, Integer, String, Text
from jobboard.database import Base
from jobboard.models.user import utcnow

JOB_STATUS_OPEN = "open"
JOB_STATUS_CLOSED = "closed"


class JobPosting(Base):
    """A listing published by an employer."""
    __tablename__ = "job_postings"
    __table_args__ = (
        CheckConstraint("status IN ('open', 'closed')", name="ck_job_postings_status"),
    )

    id = Column(Integer, primary_key=True, index=True)
    employer_id = Column(String(64), ForeignKey("employers.user_id", ondelete="CASCADE"), index=True, nullable=False)
    title = Column(String)
    description = Column(Text)
    location = Column(String)
    employment_type = Column(String)
    salary_range = Column(String)
    requirements = Column(Text)
    details = Column(JSON, nullable=False, default=dict)
    application_deadline = Column(DateTime(timezone=True), nullable=False)
    status = Column(String(16), nullable=False, default=JOB_STATUS_OPEN)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
