"""In-memory TTL cache for issuers' signing key sets."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Awaitable, Callable

KeyFetcher = Callable[[str], Awaitable[list[dict]]]

DEFAULT_TTL = 3600


@dataclass(frozen=True)
class KeySetEntry:
    """One issuer's key set as of ``fetched_at``."""

    keys: tuple[dict, ...]
    fetched_at: float
    ttl: float

    def is_stale(self, now: float) -> bool:
        return now - self.fetched_at >= self.ttl


class KeySetCache:
    """Holds at most one key set per issuer domain, refreshed after ``ttl`` seconds.

    Entries are replaced wholesale on refresh.  A failed fetch leaves the
    previous entry (if any) in place and propagates the error.  Concurrent
    refreshes of a stale entry are not serialized; the last one wins.
    """

    def __init__(
        self,
        fetcher: KeyFetcher,
        ttl: float = DEFAULT_TTL,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._fetcher = fetcher
        self._ttl = ttl
        self._clock = clock
        self._store: dict[str, KeySetEntry] = {}

    @property
    def ttl(self) -> float:
        return self._ttl

    def peek(self, issuer_domain: str) -> KeySetEntry | None:
        """Return the cached entry for an issuer without refreshing it."""
        return self._store.get(issuer_domain)

    async def get_keys(self, issuer_domain: str) -> list[dict]:
        """Get the issuer's keys, fetching them if absent or stale.

        Raises:
            KeySetFetchFailed: If a needed fetch fails.
        """
        now = self._clock()
        entry = self._store.get(issuer_domain)
        if entry is not None and not entry.is_stale(now):
            return list(entry.keys)

        keys = await self._fetcher(issuer_domain)
        self._store[issuer_domain] = KeySetEntry(
            keys=tuple(keys), fetched_at=now, ttl=self._ttl
        )
        return list(keys)

    async def find_key(self, issuer_domain: str, kid: object) -> dict | None:
        """Return the cached key whose ``kid`` matches, or None.

        A missing ``kid`` never matches, even a published key without one.
        """
        if kid is None:
            return None
        for key in await self.get_keys(issuer_domain):
            if key.get("kid") == kid:
                return key
        return None

    def invalidate(self, issuer_domain: str | None = None) -> None:
        """Force the next lookup to refetch, for one issuer or for all."""
        if issuer_domain is None:
            self._store.clear()
        else:
            self._store.pop(issuer_domain, None)

    def clear(self) -> None:
        """Clear all cached entries."""
        self._store.clear()
