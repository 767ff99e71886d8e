"""Bearer-token authentication against an issuer's published signing keys.

Verification order:

1. decode the token
2. check algorithm, expiry, not-before and issuer
3. resolve the signing key by ``kid``; on a miss, refetch the key set once
4. verify the RS256 signature
5. check the subject

Every failure is a :class:`~bearer_auth.errors.TokenVerificationError`.
:meth:`Authenticator.authenticate_request` collapses them all into ``None``
so callers cannot leak verification details to clients.
"""

from __future__ import annotations

import math
import re
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Mapping

from . import crypto
from .cache import KeySetCache
from .claims import validate_claims, validate_subject
from .client import JwksClient
from .errors import (
    InvalidSignature,
    KeySetFetchFailed,
    SigningKeyNotFound,
    TokenVerificationError,
)
from .log import configure_logging, get_logger
from .token import decode_token

if TYPE_CHECKING:
    from .config import AuthSettings

logger = get_logger(__name__)

_BEARER_RE = re.compile(r"^Bearer\s+(.+)$", re.IGNORECASE)


@dataclass(frozen=True)
class VerifiedIdentity:
    """The authenticated end user behind a token."""

    user_id: str
    claims: dict[str, Any]


@dataclass(frozen=True)
class AuthOutcome:
    """Either a verified identity or the reason verification failed."""

    identity: VerifiedIdentity | None = None
    reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.identity is not None


def extract_bearer_token(auth_header: str | None) -> str | None:
    """Extract the token from an ``Authorization: Bearer <token>`` header value."""
    if not auth_header:
        return None
    m = _BEARER_RE.match(auth_header)
    return m.group(1) if m else None


def _authorization_header(headers: Mapping[str, str]) -> str | None:
    value = headers.get("Authorization")
    if value is not None:
        return value
    # Plain dicts are case-sensitive; header names are not.
    for name, value in headers.items():
        if name.lower() == "authorization":
            return value
    return None


class Authenticator:
    """Verifies bearer tokens issued by a single trusted issuer.

    Args:
        issuer_domain: The issuer's domain, e.g. ``example.com``.  Tokens
            must carry ``iss == "https://" + issuer_domain``.
        cache: Key-set cache to use.  Defaults to one backed by
            :class:`~bearer_auth.client.JwksClient`.
        clock: Returns the current time in seconds since the epoch; used
            for ``exp`` and ``nbf`` checks.
    """

    def __init__(
        self,
        issuer_domain: str,
        cache: KeySetCache | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if not issuer_domain:
            raise ValueError("issuer_domain is required")
        self._issuer_domain = issuer_domain
        self._cache = cache if cache is not None else KeySetCache(JwksClient().fetch_keys)
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: "AuthSettings") -> "Authenticator":
        """Build an authenticator wired from :class:`~bearer_auth.config.AuthSettings`.

        Also configures logging at ``settings.log_level``.
        """
        configure_logging(settings.log_level)
        client = JwksClient(timeout=settings.jwks_timeout)
        cache = KeySetCache(client.fetch_keys, ttl=settings.jwks_cache_ttl)
        return cls(settings.issuer_domain, cache=cache)

    @property
    def issuer_domain(self) -> str:
        return self._issuer_domain

    @property
    def cache(self) -> KeySetCache:
        return self._cache

    # ------------------------------------------------------------------
    # Verification
    # ------------------------------------------------------------------

    async def _resolve_key(self, kid: object) -> dict:
        if kid is None:
            raise SigningKeyNotFound("Token header has no key id")
        key = await self._cache.find_key(self._issuer_domain, kid)
        if key is not None:
            return key

        # Possibly a rotated key: refetch exactly once.
        logger.info("signing_key_rotation_refetch", issuer=self._issuer_domain, kid=kid)
        self._cache.invalidate(self._issuer_domain)
        try:
            key = await self._cache.find_key(self._issuer_domain, kid)
        except KeySetFetchFailed as exc:
            raise SigningKeyNotFound(f"Signing key {kid!r} not found: {exc}") from exc
        if key is None:
            raise SigningKeyNotFound(f"Signing key {kid!r} not found")
        return key

    async def verify_token(self, token: str) -> VerifiedIdentity:
        """Verify a bearer token and return the identity it asserts.

        Args:
            token: The compact token, without the ``Bearer`` prefix.

        Returns:
            The verified identity.

        Raises:
            TokenVerificationError: A subclass naming the first failed check.
        """
        decoded = decode_token(token)
        now = math.floor(self._clock())
        validate_claims(decoded.header, decoded.payload, self._issuer_domain, now)

        key = await self._resolve_key(decoded.kid)
        if not crypto.verify_signature(decoded.signed_input, decoded.signature, key):
            raise InvalidSignature("Token signature does not verify")

        user_id = validate_subject(decoded.payload)
        logger.debug("token_accepted", user_id=user_id)
        return VerifiedIdentity(user_id=user_id, claims=decoded.payload)

    async def check_token(self, token: str) -> AuthOutcome:
        """Verify a token, reporting failure as a reason instead of raising."""
        try:
            identity = await self.verify_token(token)
        except TokenVerificationError as exc:
            logger.warning("token_rejected", reason=exc.reason, detail=str(exc))
            return AuthOutcome(reason=exc.reason)
        return AuthOutcome(identity=identity)

    async def authenticate_request(
        self, headers: Mapping[str, str]
    ) -> VerifiedIdentity | None:
        """Authenticate a request from its headers.

        Returns:
            The verified identity, or None if the request carries no bearer
            token or the token fails any check.
        """
        token = extract_bearer_token(_authorization_header(headers))
        if token is None:
            return None
        outcome = await self.check_token(token)
        return outcome.identity
