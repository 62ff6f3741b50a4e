from __future__ import annotations

from typing import Callable, Final, Mapping, Sequence
import pandas as pd

__all__ = ["ROW_COLUMNS", "STATS_COLUMNS", "item_id", "flatten_results"]

# Every search row starts with these, in this order
ROW_COLUMNS: Final[tuple[str, ...]] = (
    "id",
    "publishedAt",
    "channelId",
    "title",
    "description",
    "thumbnails.default.url",
    "thumbnails.medium.url",
    "thumbnails.high.url",
    "channelTitle",
    "liveBroadcastContent",
)

# videos.list?part=statistics; dislikeCount is only returned to the owner
STATS_COLUMNS: Final[tuple[str, ...]] = (
    "viewCount",
    "likeCount",
    "favoriteCount",
    "commentCount",
)

_ID_KEYS: Final[tuple[str, ...]] = ("videoId", "channelId", "playlistId")

StatsLookup = Callable[[str], Mapping[str, object]]


def item_id(item: Mapping) -> str | None:
    """Return the type-specific id of a search result (video, channel or playlist)."""
    ident = item.get("id") or {}
    for key in _ID_KEYS:
        if ident.get(key):
            return ident[key]
    return None


def _row(item: Mapping, stats_lookup: StatsLookup | None) -> dict[str, object]:
    ident = item_id(item)
    row: dict[str, object] = {"id": ident, **(item.get("snippet") or {})}
    if stats_lookup is not None:
        stats = stats_lookup(ident)
        row.update({k: pd.to_numeric(v, errors="coerce") for k, v in stats.items()})
    return row


def flatten_results(
        items: Sequence[Mapping],
        stats_lookup: StatsLookup | None = None,
) -> pd.DataFrame:
    """Flatten **search.list** items into one row per result.

    Snippet fields are promoted to top-level columns (nested ones joined
    with ``.``).  When *stats_lookup* is given it is called once per item
    with the item's id and its values are coerced to numbers.

    The frame always carries :data:`ROW_COLUMNS` (plus :data:`STATS_COLUMNS`
    when statistics are joined) in that order; anything else the payload
    contains follows unchanged.  Missing values are ``NaN``.
    """
    schema = list(ROW_COLUMNS)
    if stats_lookup is not None:
        schema += STATS_COLUMNS

    rows = [_row(item, stats_lookup) for item in items]
    if not rows:
        return pd.DataFrame(columns=schema)

    df = pd.json_normalize(rows, sep=".")
    extras = [c for c in df.columns if c not in schema]
    return df.reindex(columns=schema + extras)
