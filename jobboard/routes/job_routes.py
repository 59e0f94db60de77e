from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from jobboard.auth.dependencies import SessionClaims, get_current_session
from jobboard.context import get_db
from jobboard.schemas import JobPostingCreate, JobPostingResponse
from jobboard.services import jobs

router = APIRouter(tags=['jobs'])


@router.get('/dashboard/seekerdashboard/jobs')
def list_job_recommendations(
    limit: int = Query(default=jobs.DEFAULT_RECOMMENDATION_LIMIT, ge=1, le=100),
    db: Session = Depends(get_db),
):
    postings = jobs.list_open_jobs(db, limit=limit)
    return {
        'jobRecommendations': [
            JobPostingResponse.model_validate(posting).model_dump(mode='json')
            for posting in postings
        ],
    }


@router.post('/employer/jobs')
def create_job(
    data: JobPostingCreate,
    current_session: SessionClaims = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    job = jobs.create_job_posting(db, current_session, data)
    return {
        'message': 'Job posted successfully',
        'job': JobPostingResponse.model_validate(job).model_dump(mode='json'),
    }
