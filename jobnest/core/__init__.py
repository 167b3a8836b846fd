"""Core module exports."""
from jobnest.core.config import settings, get_settings
from jobnest.core.database import Base, get_db, init_db, close_db, engine, async_session_maker
from jobnest.core.security import SecurityContext, TokenVerifier, VerifiedToken
from jobnest.core.exceptions import (
    APIException,
    UnauthorizedException,
    ForbiddenException,
    NotFoundException,
    ConflictException,
    ServiceUnavailableException,
    TokenExpiredException,
    InvalidTokenException,
    MalformedClaimsException,
    IdentityProviderUnavailableException,
    StoreUnavailableException,
    SubjectConflictException,
    UserNotFoundException,
    JobNotFoundException,
    CompanyNotFoundException,
    ReviewNotFoundException,
    ReviewAlreadyExistsException,
)

__all__ = [
    # Config
    "settings",
    "get_settings",
    # Database
    "Base",
    "get_db",
    "init_db",
    "close_db",
    "engine",
    "async_session_maker",
    # Security
    "SecurityContext",
    "TokenVerifier",
    "VerifiedToken",
    # Exceptions
    "APIException",
    "UnauthorizedException",
    "ForbiddenException",
    "NotFoundException",
    "ConflictException",
    "ServiceUnavailableException",
    "TokenExpiredException",
    "InvalidTokenException",
    "MalformedClaimsException",
    "IdentityProviderUnavailableException",
    "StoreUnavailableException",
    "SubjectConflictException",
    "UserNotFoundException",
    "JobNotFoundException",
    "CompanyNotFoundException",
    "ReviewNotFoundException",
    "ReviewAlreadyExistsException",
]
