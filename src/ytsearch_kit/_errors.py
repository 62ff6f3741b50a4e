from __future__ import annotations

"""ytsearch_kit — **shared exception hierarchy** & HTTP‑error helper.

Validation failures are raised before any request leaves the machine;
HTTP failures are mapped from the response by :func:`raise_for_status`.
Callers can handle both families uniformly:

```python
from ytsearch_kit import InvalidDate, QuotaExceeded

try:
    yt.search("Barack Obama", published_after="yesterday")
except InvalidDate as e:
    logger.warning("bad date bound: %s", e)
except QuotaExceeded:
    sleep_until_midnight()
```"""

from typing import Final

__all__ = [
    "YTSearchError",
    "ValidationError",
    "MissingArgument",
    "InvalidRange",
    "InvalidEnum",
    "InvalidDate",
    "InvalidCombination",
    "AuthError",
    "TransportError",
    "QuotaExceeded",
    "RateLimited",
    "NotAuthorized",
    "Forbidden",
    "InvalidRequest",
    "raise_for_status",
]

# ---------------------------------------------------------------------------
# Base & specialised exceptions
# ---------------------------------------------------------------------------


class YTSearchError(Exception):
    """Base for *all* ytsearch_kit exceptions."""


# ── Argument validation ----------------------------------------------------
class ValidationError(YTSearchError, ValueError):
    """Search criteria rejected before any network call."""


class MissingArgument(ValidationError):
    """A required argument (the search term) was not supplied."""


class InvalidRange(ValidationError):
    """A numeric argument is outside its accepted range."""


class InvalidEnum(ValidationError):
    """A filter value is outside its fixed set of allowed values."""


class InvalidDate(ValidationError):
    """A publication-date bound is not an RFC‑3339 timestamp."""


class InvalidCombination(ValidationError):
    """Arguments that are individually valid but cannot be used together."""


# ── Auth ------------------------------------------------------------------
class AuthError(YTSearchError):
    """No usable credential: missing, expired without refresh, or revoked."""


# ── HTTP -----------------------------------------------------------------
class TransportError(YTSearchError):
    """Base for errors mapped from an HTTP response status."""


class QuotaExceeded(TransportError):
    """Daily project quota or per‑user quota exhausted (HTTP 403)."""


class RateLimited(TransportError):
    """Short‑term rate‑limit hit (HTTP 429 or 403 *userRateLimitExceeded*).

    The exception exposes ``retry_after`` seconds when available so callers can
    do their own back‑off.
    """

    def __init__(self, message: str, retry_after: int | None = None):
        super().__init__(message)
        self.retry_after = retry_after


class NotAuthorized(TransportError):
    """401 – invalid credentials or OAuth scope revoked."""


class Forbidden(TransportError):
    """403 – caller authenticated but not allowed to access the resource."""


class InvalidRequest(TransportError):
    """400 / 404 – malformed query parameters or unknown resource ID."""


# ---------------------------------------------------------------------------
# Helper – map HTTP response → exception class
# ---------------------------------------------------------------------------


_QUOTA_REASONS: Final[set[str]] = {
    "quotaExceeded",
    "dailyLimitExceeded",
    "userRateLimitExceeded",
    "rateLimitExceeded",
}

_RATE_REASONS: Final[set[str]] = {
    "userRateLimitExceeded",
    "rateLimitExceeded",
}


def _reason(resp) -> str:  # noqa: ANN001
    """Return the *reason* field from Google’s error payload or ``"unknown"``."""
    try:
        return resp.json()["error"]["errors"][0]["reason"]
    except (ValueError, KeyError, IndexError, TypeError):
        return "unknown"


def _retry_after(resp) -> int:  # noqa: ANN001
    try:
        return int(resp.headers.get("Retry-After", "0") or 0)
    except ValueError:
        # HTTP-date form; callers fall back to their own schedule
        return 0


def raise_for_status(resp) -> None:  # noqa: ANN001
    """Raise the appropriate *ytsearch_kit* exception for *resp*.

    Does **nothing** when the response code is < 400.
    """
    if resp.status_code < 400:
        return

    reason = _reason(resp)
    message = f"YouTube API error {resp.status_code}: {resp.text}"

    # 401 ––––––––––––––––––––––––––––––––––––––––––––––––––––––––––––––––
    if resp.status_code == 401:
        raise NotAuthorized(message)

    # 403 – distinguish quota vs. generic forbidden  ––––––––––––––––––––
    if resp.status_code == 403:
        if reason in _RATE_REASONS:
            raise RateLimited(message, _retry_after(resp))
        if reason in _QUOTA_REASONS:
            raise QuotaExceeded(message)
        raise Forbidden(message)

    # 429 – explicit rate limit –––––––––––––––––––––––––––––––––––––––––
    if resp.status_code == 429:
        raise RateLimited(message, _retry_after(resp))

    # 400 / 404 – client errors ––––––––––––––––––––––––––––––––––––––––
    if resp.status_code in (400, 404):
        raise InvalidRequest(message)

    # Fallback – unknown 4xx/5xx –––––––––––––––––––––––––––––––––––––––
    raise TransportError(message)
