"""Shared fixtures: RSA keys, JWKs and a token minter."""

from __future__ import annotations

import json
from typing import Any, Callable

import pytest
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from bearer_auth.crypto import base64url_encode

ISSUER_DOMAIN = "example.com"
NOW = 1_700_000_000


def _int_to_b64(value: int) -> str:
    return base64url_encode(value.to_bytes((value.bit_length() + 7) // 8, "big"))


def make_jwk(private_key: rsa.RSAPrivateKey, kid: str, **extra: Any) -> dict:
    """Return the public half of ``private_key`` as an RS256 JWK."""
    numbers = private_key.public_key().public_numbers()
    jwk = {
        "kty": "RSA",
        "kid": kid,
        "use": "sig",
        "alg": "RS256",
        "n": _int_to_b64(numbers.n),
        "e": _int_to_b64(numbers.e),
    }
    jwk.update(extra)
    return jwk


def _segment(obj: dict) -> str:
    return base64url_encode(json.dumps(obj, separators=(",", ":")).encode("utf-8"))


def mint_token(
    private_key: rsa.RSAPrivateKey,
    payload: dict,
    header: dict | None = None,
) -> str:
    """Sign ``payload`` with RS256 and return a compact token."""
    if header is None:
        header = {"alg": "RS256", "typ": "JWT", "kid": "k1"}
    signed_input = f"{_segment(header)}.{_segment(payload)}"
    signature = private_key.sign(
        signed_input.encode("ascii"), padding.PKCS1v15(), hashes.SHA256()
    )
    return f"{signed_input}.{base64url_encode(signature)}"


@pytest.fixture(scope="session")
def rsa_key() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def other_rsa_key() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture()
def valid_payload() -> dict:
    return {
        "iss": f"https://{ISSUER_DOMAIN}",
        "sub": "user_42",
        "iat": NOW - 10,
        "exp": NOW + 3600,
    }


@pytest.fixture()
def token_factory(rsa_key: rsa.RSAPrivateKey) -> Callable[..., str]:
    def _make(payload: dict, header: dict | None = None, key: rsa.RSAPrivateKey | None = None) -> str:
        return mint_token(key or rsa_key, payload, header)

    return _make
