"""
API package.
"""
from jobnest.api.routes import api_router
from jobnest.api.deps import (
    get_current_user,
    get_admin_user,
    get_recruiter_or_admin,
    get_job_seeker,
    require_roles,
)
from jobnest.api.gate import IdentityGateMiddleware, RequestIdentityGate

__all__ = [
    "api_router",
    "get_current_user",
    "get_admin_user",
    "get_recruiter_or_admin",
    "get_job_seeker",
    "require_roles",
    "IdentityGateMiddleware",
    "RequestIdentityGate",
]
