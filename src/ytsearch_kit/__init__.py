"""
ytsearch_kit – paged YouTube Data API search flattened into a DataFrame.

Import the public surface like so:

    from ytsearch_kit import SearchClient, user_session

Everything else (modules whose names start with “_”) is internal and
subject to change without notice.
"""

import logging as _logging
from importlib import metadata as _metadata

# ─────────────────────────────────────────────────────────────────────────────
# Re-export PUBLIC objects from the internal implementation modules
# ─────────────────────────────────────────────────────────────────────────────
from ._auth import SearchSession, user_session, service_account_session
from ._criteria import REQUEST_LIMIT, SearchCriteria, VideoFilters, build_criteria
from ._flatten import ROW_COLUMNS, STATS_COLUMNS, flatten_results
from ._search import SearchClient
from ._errors import (YTSearchError, ValidationError, MissingArgument, InvalidRange,
                      InvalidEnum, InvalidDate, InvalidCombination, AuthError,
                      TransportError, QuotaExceeded, RateLimited, NotAuthorized,
                      Forbidden, InvalidRequest, raise_for_status)

__all__: list[str] = [
    "SearchSession",
    "user_session",
    "service_account_session",
    "SearchClient",
    "SearchCriteria",
    "VideoFilters",
    "build_criteria",
    "flatten_results",
    "REQUEST_LIMIT",
    "ROW_COLUMNS",
    "STATS_COLUMNS",
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
    "raise_for_status"
]

# Library logging: stay silent unless the application configures handlers
_logging.getLogger(__name__).addHandler(_logging.NullHandler())

# ─────────────────────────────────────────────────────────────────────────────
# Version handling
# ─────────────────────────────────────────────────────────────────────────────
try:
    # Normal installed case – read version from package metadata
    __version__: str = _metadata.version("ytsearch-kit")
except _metadata.PackageNotFoundError:
    # Editable/-e install while developing – fall back to __about__.py
    from .__about__ import __version__

# Clean up internal symbols so they don’t leak into dir(ytsearch_kit)
del _metadata, _logging
