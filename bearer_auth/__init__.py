"""Bearer-token authentication for HTTP API handlers.

Verify RS256 identity tokens against an issuer's published JSON Web Key Set.
"""

from .authenticator import (
    AuthOutcome,
    Authenticator,
    VerifiedIdentity,
    extract_bearer_token,
)
from .cache import KeySetCache, KeySetEntry
from .claims import SUPPORTED_ALGORITHM, validate_claims, validate_subject
from .client import JwksClient, jwks_url
from .config import AuthSettings
from .crypto import base64url_decode, base64url_encode, import_public_key, verify_signature
from .errors import (
    InvalidIssuer,
    InvalidKeyMaterial,
    InvalidSignature,
    KeySetFetchFailed,
    MalformedToken,
    MissingSubject,
    SigningKeyNotFound,
    TokenExpired,
    TokenNotYetValid,
    TokenVerificationError,
    UnsupportedAlgorithm,
)
from .log import configure_logging
from .responses import CORS_HEADERS, unauthorized_response
from .token import DecodedToken, decode_token

__all__ = [
    "Authenticator",
    "AuthOutcome",
    "VerifiedIdentity",
    "extract_bearer_token",
    "KeySetCache",
    "KeySetEntry",
    "JwksClient",
    "jwks_url",
    "AuthSettings",
    "SUPPORTED_ALGORITHM",
    "validate_claims",
    "validate_subject",
    "DecodedToken",
    "decode_token",
    "import_public_key",
    "verify_signature",
    "base64url_encode",
    "base64url_decode",
    "TokenVerificationError",
    "MalformedToken",
    "UnsupportedAlgorithm",
    "TokenExpired",
    "TokenNotYetValid",
    "InvalidIssuer",
    "SigningKeyNotFound",
    "InvalidSignature",
    "MissingSubject",
    "KeySetFetchFailed",
    "InvalidKeyMaterial",
    "configure_logging",
    "CORS_HEADERS",
    "unauthorized_response",
]
__version__ = "0.1.0"
