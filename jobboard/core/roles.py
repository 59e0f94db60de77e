"""Closed set of account roles and the per-role settings every handler reads.

Raw role strings are parsed into ``Role`` once, at the request boundary or when
a stored row is read; everything downstream looks settings up in
``ROLE_CONFIG`` instead of comparing strings.
"""

from dataclasses import dataclass
from enum import Enum

from jobboard.core.errors import InvalidRoleError
from jobboard.models.employer import EmployerProfile
from jobboard.models.job_seeker import JobSeekerProfile


class Role(str, Enum):
    EMPLOYER = 'employer'
    JOB_SEEKER = 'job_seeker'


@dataclass(frozen=True)
class RoleConfig:
    role: Role
    profile_model: type
    display_name_field: str
    dashboard_path: str
    dashboard_slug: str
    required_profile_fields: tuple[str, ...] = ()


ROLE_CONFIG: dict[Role, RoleConfig] = {
    Role.EMPLOYER: RoleConfig(
        role=Role.EMPLOYER,
        profile_model=EmployerProfile,
        display_name_field='company_name',
        dashboard_path='/employer/dashboard',
        dashboard_slug='employerDashboard',
        required_profile_fields=('company_name',),
    ),
    Role.JOB_SEEKER: RoleConfig(
        role=Role.JOB_SEEKER,
        profile_model=JobSeekerProfile,
        display_name_field='name',
        dashboard_path='/job-seeker/dashboard',
        dashboard_slug='seekerDashboard',
    ),
}


def parse_role(value) -> Role:
    try:
        return Role(value)
    except ValueError as exc:
        raise InvalidRoleError() from exc


def role_config(role: Role) -> RoleConfig:
    return ROLE_CONFIG[role]


def role_for_dashboard(slug: str) -> Role | None:
    for config in ROLE_CONFIG.values():
        if config.dashboard_slug == slug:
            return config.role
    return None
