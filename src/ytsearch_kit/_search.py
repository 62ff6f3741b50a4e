from __future__ import annotations

import logging
from datetime import datetime, date
from typing import Mapping
from urllib.parse import urlencode, quote
import pandas as pd

from ._criteria import SearchCriteria, build_criteria
from ._errors import raise_for_status
from ._flatten import flatten_results
from ._util import runtime_typecheck

__all__ = ["SearchClient"]

logger = logging.getLogger(__name__)


class SearchClient:
    """Search wrapper around the **YouTube Data API v3**.

    The client offers:

    * :py:meth:`search` – validate criteria, page past the 50-item cap of
      **search.list**, optionally join per-video statistics and return a
      single flat DataFrame.
    * :py:meth:`video_stats` – the **videos.list** statistics lookup used
      for that join.

    Args:
        session (ytsearch_kit.SearchSession):
            Pre-authenticated HTTP session exposing ``ensure_valid()``, as
            returned by :func:`user_session` or
            :func:`service_account_session`.
        base_url (str, optional):
            API root to use instead of the default
            ``"https://www.googleapis.com/youtube/v3"``.
        timeout (float, optional):
            Per-request timeout in seconds.

    Raises:
        requests.RequestException:
            Propagated from the underlying session if the network fails.
        ytsearch_kit.TransportError:
            Raised for any HTTP error status; see
            :pyfunc:`ytsearch_kit._errors.raise_for_status`.
        ytsearch_kit.ValidationError, TypeError:
            Argument-validation errors, raised before any request is sent.

    Examples:
         with SearchClient(user_session("client_secret.json")) as yt:
             df = yt.search("Barack Obama", max_results=120, get_stats=True)
         df[["id", "title", "viewCount"]].head()

    """

    def __init__(self, session, base_url: str = "https://www.googleapis.com/youtube/v3",
                 timeout: float = 60):
        self.session = session
        self.base_url = base_url
        self.timeout = timeout

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.session.close()

    def _data_request(
            self,
            method: str,
            path: str,
            params: Mapping[str, object] | None = None,
    ) -> dict:
        # "%" stays literal: the search term arrives pre-encoded
        query = urlencode(params or {}, safe="%,", quote_via=quote)
        url = f"{self.base_url}{path}?{query}" if query else f"{self.base_url}{path}"
        resp = self.session.request(method.upper(), url, timeout=self.timeout)

        raise_for_status(resp)

        return resp.json()

    def video_stats(self, video_id: str) -> dict[str, object]:
        """Return the raw ``statistics`` mapping of one video.

        Args:
            video_id (str):
                **Required.** ID of the video.

        Returns:
            dict: e.g. ``{"viewCount": "123", "likeCount": "4", ...}``;
            empty if the video does not exist.

        References:
            https://developers.google.com/youtube/v3/docs/videos/list
        """
        payload = self._data_request("GET", "/videos", {"part": "statistics", "id": video_id})
        items = payload.get("items") or []
        return dict(items[0].get("statistics", {})) if items else {}

    def _fetch_pages(self, criteria: SearchCriteria) -> tuple[int, list[dict]]:
        """Fetch ``criteria.page_count`` pages and concatenate their items.

        Stops early if the server runs out of continuation tokens.
        """
        params = criteria.to_params()
        logger.debug("search.list page 1/%d", criteria.page_count)
        res = self._data_request("GET", "/search", params)

        total = int(res.get("pageInfo", {}).get("totalResults", 0))
        items = list(res.get("items", []))
        next_page_token = res.get("nextPageToken")

        page_count = criteria.page_count
        while page_count > 1:
            if not next_page_token:
                logger.debug("no nextPageToken after %d items; stopping", len(items))
                break
            logger.debug("search.list page %d/%d",
                         criteria.page_count - page_count + 2, criteria.page_count)
            next_res = self._data_request("GET", "/search", {**params, "pageToken": next_page_token})
            items.extend(next_res.get("items", []))
            next_page_token = next_res.get("nextPageToken")
            page_count -= 1

        return total, items

    @runtime_typecheck
    def search(
            self,
            term: str | None = None,
            *,
            max_results: int = 5,
            type: str = "video",
            channel_id: str | None = None,
            channel_type: str | None = None,
            event_type: str | None = None,
            location: str | None = None,
            location_radius: str | None = None,
            published_after: datetime | date | str | None = None,
            published_before: datetime | date | str | None = None,
            order: str | None = None,
            region_code: str | None = None,
            relevance_language: str | None = None,
            safe_search: str | None = None,
            video_caption: str | None = None,
            video_definition: str | None = None,
            video_license: str | None = None,
            video_syndicated: str | None = None,
            video_type: str | None = None,
            get_stats: bool = False,
    ) -> pd.DataFrame | int:
        """Search for videos, channels or playlists.

        Args:
            term (str):
                **Required.** Query term. Spaces are sent as ``%20``.
            max_results (int):
                Number of results wanted (≥ 0). Above 50 the query is paged
                in requests of 50, so up to 49 extra rows may come back.
            type (str):
                Resource type to return. Acceptable values are:
                - "video" (default)
                - "channel"
                - "playlist"
            channel_id (str | None):
                Only return results from this channel.
            channel_type (str | None):
                - "any"
                - "show"
            event_type (str | None):
                - "completed"
                - "live"
                - "upcoming"
            location (str | None):
                Latitude/longitude of search centre (e.g. ``"37.42307,-122.08427"``).
                Requires *location_radius*.
            location_radius (str | None):
                Distance from *location* (e.g. ``"5km"``, ``"10000ft"``).
            published_after (datetime | date | str | None):
                RFC‑3339 lower bound, e.g. ``"1970-01-01T00:00:00Z"``.
            published_before (datetime | date | str | None):
                RFC‑3339 upper bound.
            order (str | None):
                - "date", "rating", "relevance", "title", "videoCount", "viewCount"
            region_code (str | None):
                Two-letter ISO 3166-1 alpha-2 region code.
            relevance_language (str | None):
                Two-letter ISO 639-1 language code.
            safe_search (str | None):
                - "moderate", "none", "strict"
            video_caption (str | None):
                - "any", "closedCaption", "none". Requires *type="video"*
            video_definition (str | None):
                - "any", "high", "standard". Requires *type="video"*
            video_license (str | None):
                - "any", "creativeCommon", "youtube". Requires *type="video"*
            video_syndicated (str | None):
                - "any", "true". Requires *type="video"*
            video_type (str | None):
                - "any", "episode", "movie". Requires *type="video"*
            get_stats (bool):
                Join view/like/favorite/comment counts, one **videos.list**
                call per result. Requires *type="video"*

        Returns:
            pandas.DataFrame | int:
                One row per result, or ``0`` when the API reports no results.

        Raises:
            MissingArgument: If *term* is not supplied.
            InvalidRange: If *max_results* is negative.
            InvalidEnum: If a filter holds a value outside its allowed set.
            InvalidDate: If a publication bound is not RFC‑3339.
            InvalidCombination: If video-only arguments are used with another *type*.
            AuthError: If the session has no usable credentials.
            TypeError: If an argument has an invalid type.

        References:
            https://developers.google.com/youtube/v3/docs/search/list
        """
        criteria = build_criteria(
            term,
            max_results=max_results,
            type=type,
            channel_id=channel_id,
            channel_type=channel_type,
            event_type=event_type,
            location=location,
            location_radius=location_radius,
            published_after=published_after,
            published_before=published_before,
            order=order,
            region_code=region_code,
            relevance_language=relevance_language,
            safe_search=safe_search,
            video_caption=video_caption,
            video_definition=video_definition,
            video_license=video_license,
            video_syndicated=video_syndicated,
            video_type=video_type,
            get_stats=get_stats,
        )

        self.session.ensure_valid()

        total, items = self._fetch_pages(criteria)
        logger.info("Total Results %d", total)

        if total == 0:
            return 0

        return flatten_results(items, self.video_stats if get_stats else None)
