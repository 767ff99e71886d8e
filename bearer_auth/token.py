"""Decoding of compact three-segment bearer tokens (JWS compact form)."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from . import crypto
from .errors import MalformedToken

SEGMENT_DELIMITER = "."


@dataclass(frozen=True)
class DecodedToken:
    """A token split into its parts.  Nothing here has been verified yet."""

    header: dict[str, Any]
    payload: dict[str, Any]
    signed_input: str
    signature: bytes

    @property
    def alg(self) -> Any:
        return self.header.get("alg")

    @property
    def kid(self) -> Any:
        return self.header.get("kid")


def _decode_json_segment(segment: str, name: str) -> dict[str, Any]:
    try:
        text = crypto.base64url_decode(segment).decode("utf-8")
        value = json.loads(text)
    except (ValueError, UnicodeDecodeError, RecursionError) as exc:
        raise MalformedToken(f"Token {name} is not valid base64url JSON") from exc
    if not isinstance(value, dict):
        raise MalformedToken(f"Token {name} is not a JSON object")
    return value


def decode_token(token: str) -> DecodedToken:
    """Split and decode a token without verifying it.

    Args:
        token: The compact token, ``header.payload.signature``.

    Returns:
        The decoded header, payload, signed input and signature bytes.

    Raises:
        MalformedToken: If the token does not have exactly three segments
            or any segment fails to decode.
    """
    parts = token.split(SEGMENT_DELIMITER)
    if len(parts) != 3:
        raise MalformedToken(f"Expected 3 token segments, got {len(parts)}")

    header_b64, payload_b64, signature_b64 = parts
    header = _decode_json_segment(header_b64, "header")
    payload = _decode_json_segment(payload_b64, "payload")
    try:
        signature = crypto.base64url_decode(signature_b64)
    except ValueError as exc:
        raise MalformedToken("Token signature is not valid base64url") from exc

    return DecodedToken(
        header=header,
        payload=payload,
        signed_input=f"{header_b64}{SEGMENT_DELIMITER}{payload_b64}",
        signature=signature,
    )
