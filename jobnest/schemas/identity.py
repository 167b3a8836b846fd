"""
Identity schemas - the bridge between provider claims and local users.
"""
from typing import Any, Iterable, Optional
from uuid import UUID
from pydantic import ConfigDict, Field

from jobnest.core.config import Settings
from jobnest.core.exceptions import MalformedClaimsException
from jobnest.core.security import VerifiedToken
from jobnest.models.user import (
    EMAIL_MAX_LENGTH,
    NAME_MAX_LENGTH,
    SUBJECT_ID_MAX_LENGTH,
    Role,
)
from jobnest.schemas.base import BaseSchema


def _claim_str(claims: dict[str, Any], name: str) -> Optional[str]:
    value = claims.get(name)
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _truncate(value: Optional[str], max_length: int) -> Optional[str]:
    if value is None:
        return None
    return value[:max_length].rstrip() or None


def resolve_role(value: Any) -> Optional[Role]:
    """
    Map a role claim value onto a Role.

    Accepts a string or a list of strings; the first entry naming a role wins.
    Matching ignores case and a leading "ROLE_" (Spring-style authorities).
    """
    if value is None:
        return None
    candidates: Iterable[Any] = [value] if isinstance(value, str) else value
    if not isinstance(candidates, (list, tuple, set)):
        return None
    for candidate in candidates:
        if not isinstance(candidate, str):
            continue
        name = candidate.strip().lower().replace("-", "_")
        if name.startswith("role_"):
            name = name[len("role_"):]
        for role in Role:
            if name == role.value:
                return role
    return None


class ExternalIdentity(BaseSchema):
    """
    Attributes the identity provider asserts about a user.

    Not persisted - it seeds the creation or update of a User. A None field
    means the claim was absent and must not overwrite the stored value.
    """

    model_config = ConfigDict(frozen=True)

    subject_id: str = Field(..., max_length=SUBJECT_ID_MAX_LENGTH)
    email: Optional[str] = Field(default=None, max_length=EMAIL_MAX_LENGTH)
    first_name: Optional[str] = Field(default=None, max_length=NAME_MAX_LENGTH)
    last_name: Optional[str] = Field(default=None, max_length=NAME_MAX_LENGTH)
    role: Optional[Role] = None

    @classmethod
    def from_token(cls, token: VerifiedToken, config: Settings) -> "ExternalIdentity":
        """
        Build from a verified token using the configured claim names.

        Names longer than the stored column are cut to fit. A subject id or
        email that doesn't fit can't be stored faithfully and is rejected.

        Raises:
            MalformedClaimsException: If the subject id is missing or too long,
                or the email is too long.
        """
        if not token.subject_id or len(token.subject_id) > SUBJECT_ID_MAX_LENGTH:
            raise MalformedClaimsException(config.idp_subject_claim)

        claims = token.claims
        email = _claim_str(claims, config.idp_email_claim)
        if email is not None and len(email) > EMAIL_MAX_LENGTH:
            raise MalformedClaimsException(config.idp_email_claim)

        return cls(
            subject_id=token.subject_id,
            email=email,
            first_name=_truncate(_claim_str(claims, config.idp_first_name_claim), NAME_MAX_LENGTH),
            last_name=_truncate(_claim_str(claims, config.idp_last_name_claim), NAME_MAX_LENGTH),
            role=resolve_role(claims.get(config.idp_role_claim)) if config.idp_role_claim else None,
        )

    def identity_fields(self) -> dict[str, str]:
        """Identity-derived fields that are actually asserted by the token."""
        asserted = {
            "email": self.email,
            "first_name": self.first_name,
            "last_name": self.last_name,
        }
        return {name: value for name, value in asserted.items() if value is not None}


class SyncedIdentity(BaseSchema):
    """What the identity gate hands to the rest of the request."""

    model_config = ConfigDict(frozen=True)

    user_id: UUID
    subject_id: str
    role: Role
