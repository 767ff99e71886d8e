"""Async HTTP client for an issuer's published JSON Web Key Set."""

from __future__ import annotations

import httpx

from .errors import KeySetFetchFailed
from .log import get_logger

JWKS_PATH = "/.well-known/jwks.json"

logger = get_logger(__name__)


def jwks_url(issuer_domain: str) -> str:
    """Return the key-set URL for an issuer domain."""
    return f"https://{issuer_domain}{JWKS_PATH}"


class JwksClient:
    """Fetches an issuer's signing keys over HTTPS."""

    def __init__(
        self,
        timeout: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._timeout = timeout
        self._transport = transport

    async def fetch_keys(self, issuer_domain: str) -> list[dict]:
        """Fetch the issuer's key set.

        Args:
            issuer_domain: Issuer domain, e.g. ``example.com``.

        Returns:
            The JSON Web Keys from the document's ``keys`` array.

        Raises:
            KeySetFetchFailed: On a network error, a non-success status, or
                a document without a ``keys`` array.
        """
        url = jwks_url(issuer_domain)
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                resp = await client.get(url)
                resp.raise_for_status()
                data = resp.json()
        except httpx.HTTPError as exc:
            logger.warning("jwks_fetch_failed", issuer=issuer_domain, error=str(exc))
            raise KeySetFetchFailed(f"Failed to fetch JWKS from {url}: {exc}") from exc
        except ValueError as exc:
            logger.warning("jwks_fetch_failed", issuer=issuer_domain, error="invalid json")
            raise KeySetFetchFailed(f"JWKS at {url} is not valid JSON") from exc

        keys = data.get("keys") if isinstance(data, dict) else None
        if not isinstance(keys, list):
            logger.warning("jwks_fetch_failed", issuer=issuer_domain, error="missing keys")
            raise KeySetFetchFailed(f"JWKS at {url} has no 'keys' array")

        keys = [k for k in keys if isinstance(k, dict)]
        logger.debug("jwks_fetched", issuer=issuer_domain, key_count=len(keys))
        return keys
