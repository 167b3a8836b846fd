"""Tests for mapping provider claims onto an ExternalIdentity."""

import pytest

from jobnest.core.config import settings
from jobnest.core.exceptions import MalformedClaimsException
from jobnest.models.user import Role
from jobnest.schemas.identity import ExternalIdentity, resolve_role
from tests.conftest import verified


class TestExternalIdentity:
    """ExternalIdentity.from_token."""

    def test_standard_claims(self):
        identity = ExternalIdentity.from_token(
            verified("abc", email="a@x.com", given_name="Ada", family_name="Byron"),
            settings,
        )

        assert identity.subject_id == "abc"
        assert identity.identity_fields() == {
            "email": "a@x.com",
            "first_name": "Ada",
            "last_name": "Byron",
        }
        assert identity.role is None

    def test_missing_subject(self):
        with pytest.raises(MalformedClaimsException) as exc_info:
            ExternalIdentity.from_token(verified(None, email="a@x.com"), settings)

        assert exc_info.value.status_code == 401
        assert exc_info.value.details == {"claim": "sub"}

    def test_absent_and_blank_claims_are_not_asserted(self):
        """Only claims the token carries may overwrite stored values."""
        identity = ExternalIdentity.from_token(verified("abc", email="   "), settings)
        assert identity.identity_fields() == {}

    def test_long_names_cut_to_column_width(self):
        identity = ExternalIdentity.from_token(
            verified("abc", given_name="x" * 101, family_name="y" * 300),
            settings,
        )

        assert identity.first_name == "x" * 100
        assert identity.last_name == "y" * 100

    def test_oversized_subject_rejected(self):
        with pytest.raises(MalformedClaimsException) as exc_info:
            ExternalIdentity.from_token(verified("s" * 256), settings)

        assert exc_info.value.details == {"claim": "sub"}

    def test_oversized_email_rejected(self):
        email = "a" * 250 + "@x.com"
        with pytest.raises(MalformedClaimsException) as exc_info:
            ExternalIdentity.from_token(verified("abc", email=email), settings)

        assert exc_info.value.details == {"claim": "email"}

    def test_custom_claim_names(self):
        config = settings.model_copy(update={
            "idp_email_claim": "mail",
            "idp_first_name_claim": "first",
        })
        identity = ExternalIdentity.from_token(
            verified("abc", mail="a@x.com", first="Ada", email="ignored@x.com"),
            config,
        )
        assert identity.email == "a@x.com"
        assert identity.first_name == "Ada"

    def test_role_claim_only_read_when_configured(self):
        token = verified("abc", roles=["recruiter"])

        assert ExternalIdentity.from_token(token, settings).role is None

        config = settings.model_copy(update={"idp_role_claim": "roles"})
        assert ExternalIdentity.from_token(token, config).role == Role.RECRUITER


class TestResolveRole:
    """Role claim values -> Role."""

    @pytest.mark.parametrize("value, expected", [
        ("admin", Role.ADMIN),
        ("RECRUITER", Role.RECRUITER),
        ("ROLE_JOB_SEEKER", Role.JOB_SEEKER),
        ("job-seeker", Role.JOB_SEEKER),
        (["offline_access", "recruiter", "admin"], Role.RECRUITER),
        (["offline_access"], None),
        ("superuser", None),
        (42, None),
        (None, None),
    ])
    def test_resolve(self, value, expected):
        assert resolve_role(value) == expected
