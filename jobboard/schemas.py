"""Request and response bodies for the HTTP API."""

import re
from datetime import datetime, timezone
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

EMAIL_PATTERN = re.compile(r'^[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+$')
MIN_PASSWORD_LENGTH = 6
MAX_REFERENCE_LENGTH = 2048


def _normalize_email(value: str) -> str:
    normalized = value.strip().lower()
    if not EMAIL_PATTERN.match(normalized):
        raise ValueError('Invalid email format.')
    return normalized


def _required_text(value: str) -> str:
    normalized = value.strip()
    if not normalized:
        raise ValueError('Field cannot be blank.')
    return normalized


def _optional_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    normalized = value.strip()
    return normalized or None


def _normalize_skills(value: Optional[list[str]]) -> list[str]:
    if not value:
        return []
    skills: list[str] = []
    for skill in value:
        normalized = skill.strip()
        if normalized and normalized not in skills:
            skills.append(normalized)
    return skills


def as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


# ============== Auth ==============


class SignupBase(BaseModel):
    email: str
    password: str = Field(min_length=MIN_PASSWORD_LENGTH)
    contact_number: Optional[str] = None
    location: Optional[str] = None

    @field_validator('email')
    @classmethod
    def validate_email(cls, value: str) -> str:
        return _normalize_email(value)


class EmployerSignup(SignupBase):
    role: Literal['employer']
    company_name: str
    company_description: Optional[str] = None
    company_logo: Optional[str] = None
    website_url: Optional[str] = None

    @field_validator('company_name')
    @classmethod
    def validate_company_name(cls, value: str) -> str:
        return _required_text(value)


class JobSeekerSignup(SignupBase):
    role: Literal['job_seeker']
    name: str
    portfolio_url: Optional[str] = None
    skills: list[str] = Field(default_factory=list)
    work_experience: Optional[str] = None
    education: Optional[str] = None
    linkedin_url: Optional[str] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, value: str) -> str:
        return _required_text(value)

    @field_validator('skills')
    @classmethod
    def validate_skills(cls, value: list[str]) -> list[str]:
        return _normalize_skills(value)


SignupRequest = Annotated[Union[EmployerSignup, JobSeekerSignup], Field(discriminator='role')]


class SigninRequest(BaseModel):
    email: str
    password: str = Field(min_length=1)

    @field_validator('email')
    @classmethod
    def validate_email(cls, value: str) -> str:
        return _normalize_email(value)


# ============== Profiles ==============


class EmployerProfileUpdate(BaseModel):
    company_name: Optional[str] = None
    company_description: Optional[str] = None
    company_logo: Optional[str] = None
    website_url: Optional[str] = None
    contact_number: Optional[str] = None
    location: Optional[str] = None

    @field_validator('company_name')
    @classmethod
    def validate_company_name(cls, value: Optional[str]) -> str:
        if value is None:
            raise ValueError('Company name cannot be removed.')
        return _required_text(value)


class JobSeekerProfileUpdate(BaseModel):
    name: Optional[str] = None
    portfolio_url: Optional[str] = None
    skills: Optional[list[str]] = None
    work_experience: Optional[str] = None
    education: Optional[str] = None
    linkedin_url: Optional[str] = None
    contact_number: Optional[str] = None
    location: Optional[str] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, value: Optional[str]) -> str:
        if value is None:
            raise ValueError('Name cannot be removed.')
        return _required_text(value)

    @field_validator('skills')
    @classmethod
    def validate_skills(cls, value: Optional[list[str]]) -> list[str]:
        return _normalize_skills(value)


class ResumeAttachRequest(BaseModel):
    """Reference to a resume already uploaded to object storage."""

    resume_ref: str = Field(max_length=MAX_REFERENCE_LENGTH)

    @field_validator('resume_ref')
    @classmethod
    def validate_resume_ref(cls, value: str) -> str:
        normalized = _required_text(value)
        if normalized.lower().startswith('data:'):
            raise ValueError('Resume must be an uploaded file reference, not inline data.')
        return normalized


class EmployerProfileResponse(BaseModel):
    user_id: str
    company_name: str
    company_description: Optional[str] = None
    company_logo: Optional[str] = None
    website_url: Optional[str] = None
    contact_number: Optional[str] = None
    location: Optional[str] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class JobSeekerProfileResponse(BaseModel):
    user_id: str
    portfolio_url: Optional[str] = None
    skills: list[str] = Field(default_factory=list)
    education: Optional[str] = None
    work_experience: Optional[str] = None
    linkedin_url: Optional[str] = None
    contact_number: Optional[str] = None
    location: Optional[str] = None
    resume_ref: Optional[str] = None
    resume_status: str
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class UserSummary(BaseModel):
    id: str
    email: str
    role: str
    display_name: str
    profile: Optional[Union[EmployerProfileResponse, JobSeekerProfileResponse]] = None


# ============== Jobs ==============


class JobPostingCreate(BaseModel):
    """Employer job submission; unknown fields are kept as free-form details."""

    model_config = ConfigDict(extra='allow', populate_by_name=True)

    em_id: str
    application_deadline: datetime = Field(alias='applicationDeadline')
    title: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    employment_type: Optional[str] = None
    salary_range: Optional[str] = None
    requirements: Optional[str] = None

    @field_validator('em_id')
    @classmethod
    def validate_em_id(cls, value: str) -> str:
        return _required_text(value)

    @field_validator('application_deadline')
    @classmethod
    def validate_application_deadline(cls, value: datetime) -> datetime:
        deadline = as_utc(value)
        if deadline <= datetime.now(timezone.utc):
            raise ValueError('Application deadline must be in the future.')
        return deadline

    @field_validator('title', 'description', 'location', 'employment_type', 'salary_range', 'requirements')
    @classmethod
    def validate_text_fields(cls, value: Optional[str]) -> Optional[str]:
        return _optional_text(value)

    def extra_fields(self) -> dict:
        return dict(self.model_extra or {})


class JobPostingResponse(BaseModel):
    id: int
    employer_id: str
    title: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    employment_type: Optional[str] = None
    salary_range: Optional[str] = None
    requirements: Optional[str] = None
    details: dict = Field(default_factory=dict)
    application_deadline: datetime
    status: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
