"""Caller-owned cache for an external API access token.

The cache is a plain frozen value passed in and returned; there is no
module-level token state.
"""

import time
from collections.abc import Callable
from dataclasses import dataclass

import structlog

from .errors import ValidationError

log = structlog.stdlib.get_logger()

# Refresh this many seconds before the token actually expires
DEFAULT_EXPIRY_SKEW = 60.0

TokenFetcher = Callable[[], tuple[str, float]]


@dataclass(frozen=True)
class TokenCache:
    """An access token and the epoch time it stops being valid."""
    access_token: str
    expires_at: float

    def is_expired(self, now: float | None = None, skew: float = DEFAULT_EXPIRY_SKEW) -> bool:
        now = time.time() if now is None else now
        return now >= self.expires_at - skew


def ensure_token(
    cache: TokenCache | None,
    fetch: TokenFetcher,
    clock: Callable[[], float] = time.time,
    skew: float = DEFAULT_EXPIRY_SKEW,
) -> TokenCache:
    """Return ``cache`` if still valid, otherwise a freshly fetched one.

    Args:
        cache: Previously returned cache, or None on first use
        fetch: Returns ``(access_token, expires_in_seconds)``
        clock: Current epoch time
        skew: Seconds of early refresh

    Raises:
        ValidationError: If the fetcher returns an empty token or a
            non-positive lifetime
    """
    now = clock()
    if cache is not None and not cache.is_expired(now, skew):
        return cache

    access_token, expires_in = fetch()
    if not access_token:
        raise ValidationError("Token endpoint returned an empty access token", field="access_token")
    if expires_in <= 0:
        raise ValidationError("Token lifetime must be positive", field="expires_in", value=expires_in)

    log.info("Access token refreshed", expires_in=expires_in)
    return TokenCache(access_token=access_token, expires_at=now + expires_in)
