"""Token verification failures.

Every failure carries a stable ``reason`` string.  The reason is meant for
diagnostic logs and tests only; callers facing clients should collapse all
of these into a single "unauthenticated" outcome.
"""

from __future__ import annotations


class TokenVerificationError(Exception):
    """Base class for every bearer-token verification failure."""

    reason = "verification_failed"


class MalformedToken(TokenVerificationError):
    """Raised when a token cannot be split or decoded."""

    reason = "malformed_token"


class UnsupportedAlgorithm(TokenVerificationError):
    """Raised when the token header names an algorithm other than RS256."""

    reason = "unsupported_algorithm"


class TokenExpired(TokenVerificationError):
    """Raised when the token's ``exp`` is not after the current time."""

    reason = "token_expired"


class TokenNotYetValid(TokenVerificationError):
    """Raised when the token's ``nbf`` is still in the future."""

    reason = "token_not_yet_valid"


class InvalidIssuer(TokenVerificationError):
    """Raised when ``iss`` is not the trusted issuer's URL."""

    reason = "invalid_issuer"


class SigningKeyNotFound(TokenVerificationError):
    """Raised when no published key matches the token's ``kid``."""

    reason = "signing_key_not_found"


class InvalidSignature(TokenVerificationError):
    """Raised when the RS256 signature does not verify."""

    reason = "invalid_signature"


class MissingSubject(TokenVerificationError):
    """Raised when the token has no non-empty ``sub`` claim."""

    reason = "missing_subject"


class KeySetFetchFailed(TokenVerificationError):
    """Raised when the issuer's key set cannot be retrieved."""

    reason = "key_set_fetch_failed"


class InvalidKeyMaterial(TokenVerificationError):
    """Raised when a published key cannot be used for RS256 verification."""

    reason = "invalid_key_material"
