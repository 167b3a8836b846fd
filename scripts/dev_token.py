"""
Mint a development bearer token signed with IDP_SHARED_SECRET.

Usage:
    python -m scripts.dev_token <subject_id> [--email a@x.com] [--role recruiter]

Only for local development: production tokens come from the identity
provider and the app refuses shared secrets outside development.
"""
import argparse
import os
import sys
from datetime import datetime, timedelta, timezone

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from jose import jwt

from jobnest.core.config import settings


def mint(subject_id: str, email: str = None, role: str = None, minutes: int = 60) -> str:
    if not settings.idp_shared_secret:
        raise SystemExit("IDP_SHARED_SECRET is not set")

    claims = {
        settings.idp_subject_claim: subject_id,
        "exp": datetime.now(timezone.utc) + timedelta(minutes=minutes),
    }
    if email:
        claims[settings.idp_email_claim] = email
    if role and settings.idp_role_claim:
        claims[settings.idp_role_claim] = role
    if settings.idp_issuer:
        claims["iss"] = settings.idp_issuer
    if settings.idp_audience:
        claims["aud"] = settings.idp_audience

    return jwt.encode(claims, settings.idp_shared_secret, algorithm=settings.idp_algorithms[0])


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("subject_id")
    parser.add_argument("--email")
    parser.add_argument("--role")
    parser.add_argument("--minutes", type=int, default=60)
    args = parser.parse_args()
    print(mint(args.subject_id, args.email, args.role, args.minutes))
