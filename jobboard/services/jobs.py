import logging
from datetime import datetime, timezone

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from jobboard.auth.dependencies import SessionClaims
from jobboard.core.errors import ForbiddenError, NotFoundError, UpstreamError
from jobboard.core.roles import Role
from jobboard.models.employer import EmployerProfile
from jobboard.models.job_posting import JOB_STATUS_OPEN, JobPosting
from jobboard.schemas import JobPostingCreate
from jobboard.services.profiles import DATABASE_FAILURE_MESSAGE

logger = logging.getLogger(__name__)

DEFAULT_RECOMMENDATION_LIMIT = 50


def create_job_posting(db: Session, session: SessionClaims, data: JobPostingCreate) -> JobPosting:
    if session.role is not Role.EMPLOYER:
        raise ForbiddenError('Only employers can post jobs.')
    if session.user_id != data.em_id:
        raise ForbiddenError('Employers can only post jobs for their own company.')

    try:
        employer = db.query(EmployerProfile).filter(EmployerProfile.user_id == data.em_id).first()
        if employer is None:
            raise NotFoundError('Employer profile not found')

        job = JobPosting(
            employer_id=employer.user_id,
            title=data.title,
            description=data.description,
            location=data.location,
            employment_type=data.employment_type,
            salary_range=data.salary_range,
            requirements=data.requirements,
            details=data.extra_fields(),
            application_deadline=data.application_deadline,
            status=JOB_STATUS_OPEN,
        )
        db.add(job)
        db.commit()
        db.refresh(job)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Job posting insert failed for employer %s', data.em_id)
        raise UpstreamError(DATABASE_FAILURE_MESSAGE) from exc

    logger.info('Employer %s posted job %s', employer.user_id, job.id)
    return job


def list_open_jobs(db: Session, limit: int = DEFAULT_RECOMMENDATION_LIMIT, now: datetime | None = None) -> list[JobPosting]:
    current_time = now or datetime.now(timezone.utc)
    try:
        return db.query(JobPosting).filter(
            JobPosting.status == JOB_STATUS_OPEN,
            JobPosting.application_deadline > current_time,
        ).order_by(JobPosting.created_at.desc(), JobPosting.id.desc()).limit(limit).all()
    except SQLAlchemyError as exc:
        raise UpstreamError(DATABASE_FAILURE_MESSAGE) from exc
