"""RSA (RS256) signature verification and base64url utilities."""

from __future__ import annotations

import base64

from cryptography.exceptions import InvalidSignature as _CryptoInvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from .errors import InvalidKeyMaterial

RS256 = "RS256"


def base64url_encode(data: bytes) -> str:
    """Encode bytes to base64url with no padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def base64url_decode(s: str) -> bytes:
    """Decode a base64url string (with or without padding) to bytes.

    Raises:
        ValueError: If the input is not valid base64url.
    """
    # Add back padding
    padding_len = 4 - len(s) % 4
    if padding_len != 4:
        s += "=" * padding_len
    return base64.b64decode(s, altchars=b"-_", validate=True)


def _b64_to_int(value: object, name: str) -> int:
    if not isinstance(value, str) or not value:
        raise InvalidKeyMaterial(f"RSA key is missing '{name}'")
    try:
        return int.from_bytes(base64url_decode(value), "big")
    except ValueError as exc:
        raise InvalidKeyMaterial(f"RSA key has invalid '{name}'") from exc


def import_public_key(jwk: dict) -> rsa.RSAPublicKey:
    """Import a JSON Web Key as an RSA public key usable for verification only.

    The key must be an RSA key.  Optional ``use``, ``key_ops`` and ``alg``
    members, when present, must allow RS256 signature verification.

    Args:
        jwk: A JSON Web Key as published in the issuer's key set.

    Returns:
        An RSA public key handle.

    Raises:
        InvalidKeyMaterial: If the key is structurally unusable.
    """
    if jwk.get("kty") != "RSA":
        raise InvalidKeyMaterial(f"Unsupported key type: {jwk.get('kty')!r}")
    if "use" in jwk and jwk["use"] != "sig":
        raise InvalidKeyMaterial(f"Key is not a signing key: use={jwk['use']!r}")
    key_ops = jwk.get("key_ops")
    if key_ops is not None and (not isinstance(key_ops, list) or "verify" not in key_ops):
        raise InvalidKeyMaterial("Key operations do not permit verification")
    if "alg" in jwk and jwk["alg"] != RS256:
        raise InvalidKeyMaterial(f"Key is bound to another algorithm: {jwk['alg']!r}")

    n = _b64_to_int(jwk.get("n"), "n")
    e = _b64_to_int(jwk.get("e"), "e")
    try:
        return rsa.RSAPublicNumbers(e, n).public_key()
    except ValueError as exc:
        raise InvalidKeyMaterial(f"Invalid RSA public numbers: {exc}") from exc


def verify_signature(signed_input: str, signature: bytes, jwk: dict) -> bool:
    """Verify an RS256 (RSASSA-PKCS1-v1_5 with SHA-256) signature.

    Args:
        signed_input: The first two token segments joined by ``.``, exactly
            as transmitted.
        signature: The raw signature bytes.
        jwk: The issuer's public key as a JSON Web Key.

    Returns:
        True if valid, False otherwise.

    Raises:
        InvalidKeyMaterial: If the key cannot be imported.
    """
    key = import_public_key(jwk)
    try:
        key.verify(
            signature,
            signed_input.encode("utf-8"),
            padding.PKCS1v15(),
            hashes.SHA256(),
        )
        return True
    except _CryptoInvalidSignature:
        return False
