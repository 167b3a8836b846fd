"""
Custom exceptions for the application.
All API exceptions should inherit from APIException for consistent error handling.
"""
from typing import Optional, Any


class APIException(Exception):
    """
    Base exception for all API errors.
    Provides consistent error response format.
    """

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        details: Optional[Any] = None,
    ):
        self.status_code = status_code
        self.code = code
        self.message = message
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class UnauthorizedException(APIException):
    """401 Unauthorized"""

    def __init__(self, message: str = "Unauthorized", code: str = "UNAUTHORIZED"):
        super().__init__(401, code, message)


class ForbiddenException(APIException):
    """403 Forbidden"""

    def __init__(self, message: str = "Forbidden", code: str = "FORBIDDEN"):
        super().__init__(403, code, message)


class NotFoundException(APIException):
    """404 Not Found"""

    def __init__(self, message: str = "Resource not found", code: str = "NOT_FOUND"):
        super().__init__(404, code, message)


class ConflictException(APIException):
    """409 Conflict"""

    def __init__(self, message: str = "Resource conflict", code: str = "CONFLICT"):
        super().__init__(409, code, message)


class ServiceUnavailableException(APIException):
    """503 Service Unavailable"""

    def __init__(
        self,
        message: str = "Service temporarily unavailable",
        code: str = "SERVICE_UNAVAILABLE",
    ):
        super().__init__(503, code, message)


# Authentication specific exceptions
class TokenExpiredException(UnauthorizedException):
    """Token has expired"""

    def __init__(self):
        super().__init__(
            message="Token has expired",
            code="TOKEN_EXPIRED",
        )


class InvalidTokenException(UnauthorizedException):
    """Token is invalid"""

    def __init__(self):
        super().__init__(
            message="Invalid token",
            code="INVALID_TOKEN",
        )


class MalformedClaimsException(UnauthorizedException):
    """Token verified but a required claim is missing or unusable"""

    def __init__(self, claim: str):
        super().__init__(
            message=f"Token is missing required claim '{claim}'",
            code="MALFORMED_CLAIMS",
        )
        self.details = {"claim": claim}


class IdentityProviderUnavailableException(ServiceUnavailableException):
    """Signing keys could not be fetched from the identity provider"""

    def __init__(self):
        super().__init__(
            message="Identity provider is unreachable",
            code="IDP_UNAVAILABLE",
        )


# Identity synchronization
class StoreUnavailableException(ServiceUnavailableException):
    """User store unreachable or timed out while synchronizing an identity"""

    def __init__(self):
        super().__init__(
            message="User store is unavailable",
            code="STORE_UNAVAILABLE",
        )


class SubjectConflictException(ConflictException):
    """
    A user with this subject id was created concurrently.

    Raised by the user store on create; the synchronizer recovers from it
    and it never reaches a client.
    """

    def __init__(self, subject_id: str):
        super().__init__(
            message="User already exists for subject",
            code="SUBJECT_CONFLICT",
        )
        self.subject_id = subject_id


# Resource specific exceptions
class UserNotFoundException(NotFoundException):
    """User not found"""

    def __init__(self):
        super().__init__(message="User not found", code="USER_NOT_FOUND")


class JobNotFoundException(NotFoundException):
    """Job not found"""

    def __init__(self):
        super().__init__(message="Job not found", code="JOB_NOT_FOUND")


class CompanyNotFoundException(NotFoundException):
    """Company not found"""

    def __init__(self):
        super().__init__(message="Company not found", code="COMPANY_NOT_FOUND")


class ReviewNotFoundException(NotFoundException):
    """Review not found"""

    def __init__(self):
        super().__init__(message="Review not found", code="REVIEW_NOT_FOUND")


class ReviewAlreadyExistsException(ConflictException):
    """User already reviewed this company"""

    def __init__(self):
        super().__init__(
            message="You have already reviewed this company",
            code="REVIEW_EXISTS",
        )
