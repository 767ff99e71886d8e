"""Static claim checks for decoded tokens.

These checks are pure: they look only at the header, the payload, the
configured issuer domain and the supplied current time.
"""

from __future__ import annotations

from typing import Any

from .crypto import RS256
from .errors import (
    InvalidIssuer,
    MalformedToken,
    MissingSubject,
    TokenExpired,
    TokenNotYetValid,
    UnsupportedAlgorithm,
)

SUPPORTED_ALGORITHM = RS256


def expected_issuer(issuer_domain: str) -> str:
    """Return the ``iss`` value tokens from ``issuer_domain`` must carry."""
    return f"https://{issuer_domain}"


def _numeric_claim(payload: dict[str, Any], name: str) -> float | None:
    value = payload.get(name)
    if value is None:
        return None
    # bool is an int subclass but never a valid NumericDate
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedToken(f"Claim '{name}' is not a number")
    return value


def validate_claims(
    header: dict[str, Any],
    payload: dict[str, Any],
    issuer_domain: str,
    now: int,
) -> None:
    """Check algorithm, expiry, not-before and issuer, in that order.

    The subject is checked separately by :func:`validate_subject`, after the
    signature has been verified.

    Args:
        header: Decoded token header.
        payload: Decoded token payload.
        issuer_domain: The trusted issuer's domain, e.g. ``example.com``.
        now: Current time in whole seconds since the epoch.

    Raises:
        UnsupportedAlgorithm, TokenExpired, TokenNotYetValid, InvalidIssuer:
            On the first failing rule.
    """
    alg = header.get("alg")
    if alg != SUPPORTED_ALGORITHM:
        raise UnsupportedAlgorithm(f"Unsupported algorithm: {alg!r}")

    exp = _numeric_claim(payload, "exp")
    if exp is not None and not exp > now:
        raise TokenExpired(f"Token expired at {exp}")

    nbf = _numeric_claim(payload, "nbf")
    if nbf is not None and not nbf <= now:
        raise TokenNotYetValid(f"Token not valid before {nbf}")

    iss = payload.get("iss")
    if iss != expected_issuer(issuer_domain):
        raise InvalidIssuer(f"Unexpected issuer: {iss!r}")


def validate_subject(payload: dict[str, Any]) -> str:
    """Return the ``sub`` claim, or raise MissingSubject if it is absent or empty."""
    sub = payload.get("sub")
    if not isinstance(sub, str) or not sub:
        raise MissingSubject("Token has no subject claim")
    return sub
