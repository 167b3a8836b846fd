"""
Security utilities for authentication.

Tokens are issued by the external identity provider. This module only
verifies them and turns the result into a request-scoped SecurityContext.
"""
import asyncio
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, List, Optional

import httpx
from jose import ExpiredSignatureError, JWTError, jwt

from jobnest.core.config import Settings, settings
from jobnest.core.exceptions import (
    IdentityProviderUnavailableException,
    InvalidTokenException,
    TokenExpiredException,
)
from jobnest.core.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class VerifiedToken:
    """A token whose signature and expiry have already been checked."""

    subject_id: Optional[str]
    claims: dict[str, Any]
    expires_at: Optional[datetime] = None
    raw: str = field(default="", repr=False)


@dataclass(frozen=True)
class SecurityContext:
    """
    Identity of the current request.

    Created once per request by the identity gate and passed explicitly to
    whatever needs it (stored on request.state, never in a global).
    """

    token: Optional[VerifiedToken] = None

    @classmethod
    def anonymous(cls) -> "SecurityContext":
        return cls()

    @classmethod
    def authenticated(cls, token: VerifiedToken) -> "SecurityContext":
        return cls(token=token)

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    @property
    def subject_id(self) -> Optional[str]:
        return self.token.subject_id if self.token else None


class JWKSCache:
    """Fetches the provider's JSON Web Key Set and keeps it for a while."""

    def __init__(self, url: str, ttl_seconds: int, timeout: float):
        self.url = url
        self.ttl_seconds = ttl_seconds
        self.timeout = timeout
        self._keys: Optional[dict] = None
        self._fetched_at = 0.0
        self._lock = asyncio.Lock()

    async def get_keys(self, force_refresh: bool = False) -> dict:
        async with self._lock:
            fresh = time.monotonic() - self._fetched_at < self.ttl_seconds
            if self._keys is not None and fresh and not force_refresh:
                return self._keys

            try:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.get(self.url)
                    response.raise_for_status()
                    keys = response.json()
            except (httpx.HTTPError, ValueError) as exc:
                logger.error("jwks_fetch_failed", url=self.url, error=str(exc))
                raise IdentityProviderUnavailableException() from exc

            if "keys" not in keys:
                logger.error("jwks_malformed", url=self.url)
                raise IdentityProviderUnavailableException()

            self._keys = keys
            self._fetched_at = time.monotonic()
            logger.info("jwks_refreshed", url=self.url, key_count=len(keys["keys"]))
            return keys


class TokenVerifier:
    """
    Verifies bearer tokens issued by the identity provider.

    Key material comes from (in order): a JWKS endpoint, a static PEM public
    key, or a shared secret for HS* algorithms.
    """

    def __init__(self, config: Settings = settings):
        self.config = config
        self.algorithms: List[str] = list(config.idp_algorithms)
        self._jwks = (
            JWKSCache(
                config.idp_jwks_url,
                config.idp_jwks_cache_seconds,
                config.idp_http_timeout_seconds,
            )
            if config.idp_jwks_url
            else None
        )

    async def _signing_key(self, force_refresh: bool = False) -> Any:
        if self._jwks is not None:
            return await self._jwks.get_keys(force_refresh=force_refresh)
        if self.config.idp_public_key:
            return self.config.idp_public_key
        if self.config.idp_shared_secret:
            return self.config.idp_shared_secret
        logger.error("idp_key_not_configured")
        raise InvalidTokenException()

    def _decode(self, raw_token: str, key: Any) -> dict[str, Any]:
        return jwt.decode(
            raw_token,
            key,
            algorithms=self.algorithms,
            audience=self.config.idp_audience,
            issuer=self.config.idp_issuer,
            options={
                "verify_aud": self.config.idp_audience is not None,
                "require_exp": True,
            },
        )

    async def verify(self, raw_token: str) -> VerifiedToken:
        """
        Verify signature, expiry, issuer and audience.

        Raises:
            TokenExpiredException: If the token has expired
            InvalidTokenException: For any other verification failure
            IdentityProviderUnavailableException: If the JWKS can't be fetched
        """
        key = await self._signing_key()
        try:
            claims = self._decode(raw_token, key)
        except ExpiredSignatureError:
            raise TokenExpiredException()
        except JWTError as exc:
            if self._jwks is None:
                logger.info("token_rejected", reason=str(exc))
                raise InvalidTokenException()
            # Provider may have rotated keys since the last fetch
            key = await self._signing_key(force_refresh=True)
            try:
                claims = self._decode(raw_token, key)
            except ExpiredSignatureError:
                raise TokenExpiredException()
            except JWTError as retry_exc:
                logger.info("token_rejected", reason=str(retry_exc))
                raise InvalidTokenException()

        subject = claims.get(self.config.idp_subject_claim)
        exp = claims.get("exp")
        return VerifiedToken(
            subject_id=str(subject) if subject not in (None, "") else None,
            claims=claims,
            expires_at=datetime.fromtimestamp(exp, tz=timezone.utc) if exp else None,
            raw=raw_token,
        )

    async def authenticate(self, authorization: Optional[str]) -> SecurityContext:
        """
        Turn an Authorization header into a SecurityContext.

        No header, or a non-bearer scheme, is an anonymous request.
        A bearer token that fails verification raises.
        """
        if not authorization:
            return SecurityContext.anonymous()

        scheme, _, credentials = authorization.partition(" ")
        if scheme.lower() != "bearer":
            return SecurityContext.anonymous()

        credentials = credentials.strip()
        if not credentials:
            raise InvalidTokenException()

        return SecurityContext.authenticated(await self.verify(credentials))
