from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, date
from typing import Final

from ._errors import MissingArgument, InvalidRange, InvalidCombination
from ._util import _validate_enum, _prune_none, _encode_term, _rfc3339

__all__ = ["REQUEST_LIMIT", "SearchCriteria", "VideoFilters", "build_criteria"]

# search.list refuses maxResults above this
REQUEST_LIMIT: Final[int] = 50

# Allowed values ---------------------------------------------------------------
TYPES = {"video", "channel", "playlist"}
CHANNEL_TYPES = {"any", "show"}
EVENT_TYPES = {"completed", "live", "upcoming"}
ORDERS = {"date", "rating", "relevance", "title", "videoCount", "viewCount"}
SAFE_SEARCHES = {"moderate", "none", "strict"}
VIDEO_CAPTIONS = {"any", "closedCaption", "none"}
VIDEO_DEFINITIONS = {"any", "high", "standard"}
VIDEO_LICENSES = {"any", "creativeCommon", "youtube"}
VIDEO_SYNDICATED = {"any", "true"}
VIDEO_TYPES = {"any", "episode", "movie"}


@dataclass(frozen=True)
class VideoFilters:
    """Filters that only apply when searching for ``type="video"``."""

    caption: str | None = None
    definition: str | None = None
    license: str | None = None
    syndicated: str | None = None
    video_type: str | None = None

    def to_params(self) -> dict[str, object]:
        return _prune_none({
            "videoCaption": self.caption,
            "videoDefinition": self.definition,
            "videoLicense": self.license,
            "videoSyndicated": self.syndicated,
            "videoType": self.video_type,
        })


@dataclass(frozen=True)
class SearchCriteria:
    """Validated, normalised arguments for one **search.list** query.

    ``video`` is only ever set when ``type == "video"``; for channel and
    playlist searches there is nowhere to put video-only filters.
    ``term`` is already %20-encoded.
    """

    term: str
    max_results: int = 5
    type: str = "video"
    channel_id: str | None = None
    channel_type: str | None = None
    event_type: str | None = None
    location: str | None = None
    location_radius: str | None = None
    published_after: str | None = None
    published_before: str | None = None
    order: str | None = None
    region_code: str | None = None
    relevance_language: str | None = None
    safe_search: str | None = None
    video: VideoFilters | None = None

    @property
    def page_size(self) -> int:
        return min(self.max_results, REQUEST_LIMIT)

    @property
    def page_count(self) -> int:
        """Number of requests needed to cover ``max_results``."""
        if self.max_results <= REQUEST_LIMIT:
            return 1
        return -(-self.max_results // REQUEST_LIMIT)

    def to_params(self) -> dict[str, object]:
        """Query mapping for the first **search.list** request."""
        params = _prune_none({
            "part": "id,snippet",
            "q": self.term,
            "maxResults": self.page_size,
            "type": self.type,
            "channelId": self.channel_id,
            "channelType": self.channel_type,
            "eventType": self.event_type,
            "location": self.location,
            "locationRadius": self.location_radius,
            "publishedAfter": self.published_after,
            "publishedBefore": self.published_before,
            "order": self.order,
            "regionCode": self.region_code,
            "relevanceLanguage": self.relevance_language,
            "safeSearch": self.safe_search,
        })
        if self.video is not None:
            params.update(self.video.to_params())
        return params


def _one_of(param_name: str, value: str | None, allowed: set[str]) -> str | None:
    if value is None:
        return None
    return _validate_enum(param_name, value, allowed)


def build_criteria(
        term: str | None,
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
) -> SearchCriteria:
    """Check and normalise user-supplied search arguments.

    Checks run in a fixed order (term, range, enums, dates, combinations)
    so the first problem found is the one reported.

    Raises:
        MissingArgument: If *term* is ``None`` or blank.
        InvalidRange: If *max_results* is negative.
        InvalidEnum: If a filter holds a value outside its allowed set.
        InvalidDate: If a publication bound is not RFC‑3339.
        InvalidCombination: If a video-only filter (or *get_stats*) is
            used with a non-video *type*, or *location* and
            *location_radius* are not supplied together.
    """
    if term is None or not term.strip():
        raise MissingArgument("Must specify a search term")

    if max_results < 0:
        raise InvalidRange(f"max_results={max_results} is invalid; only non-negative values are accepted")

    # Verify values passed ------------------------------------------------
    type = _one_of("type", type, TYPES)
    channel_type = _one_of("channel_type", channel_type, CHANNEL_TYPES)
    event_type = _one_of("event_type", event_type, EVENT_TYPES)
    order = _one_of("order", order, ORDERS)
    safe_search = _one_of("safe_search", safe_search, SAFE_SEARCHES)
    video = VideoFilters(
        caption=_one_of("video_caption", video_caption, VIDEO_CAPTIONS),
        definition=_one_of("video_definition", video_definition, VIDEO_DEFINITIONS),
        license=_one_of("video_license", video_license, VIDEO_LICENSES),
        syndicated=_one_of("video_syndicated", video_syndicated, VIDEO_SYNDICATED),
        video_type=_one_of("video_type", video_type, VIDEO_TYPES),
    )

    after = _rfc3339("published_after", published_after) if published_after is not None else None
    before = _rfc3339("published_before", published_before) if published_before is not None else None

    # Verify that type == video if video_ args passed ---------------------
    if type != "video":
        supplied = [name for name, value in (
            ("video_caption", video_caption),
            ("video_definition", video_definition),
            ("video_license", video_license),
            ("video_syndicated", video_syndicated),
            ("video_type", video_type),
        ) if value is not None]
        if supplied:
            raise InvalidCombination(
                f"{', '.join(supplied)} require type='video' (got type={type!r})"
            )
        if get_stats:
            raise InvalidCombination(f"get_stats requires type='video' (got type={type!r})")
        video = None

    if (location is None) != (location_radius is None):
        raise InvalidCombination("location and location_radius must be supplied together")

    return SearchCriteria(
        term=_encode_term(term),
        max_results=max_results,
        type=type,
        channel_id=channel_id,
        channel_type=channel_type,
        event_type=event_type,
        location=location,
        location_radius=location_radius,
        published_after=after,
        published_before=before,
        order=order,
        region_code=region_code,
        relevance_language=relevance_language,
        safe_search=safe_search,
        video=video,
    )
