"""Trailer resolution: pick one video key for a show.

Search order, first hit wins (no scoring):

    1. Primary locale listing, platform videos only:
       a. Trailer/Teaser whose title has a subtitled marker
       b. Trailer/Teaser whose title has a dubbed marker
       c. First type in VIDEO_TYPE_PRIORITY with any entry
    2. Fallback locale listing: type priority only

A failed listing fetch counts as an empty listing for that locale, so
resolution never raises.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

import requests

from topseries.errors import CatalogError
from topseries.fetchers.tmdb_client import TMDBClient
from topseries.models import Video
from topseries.resolvers.keywords import (
    DUBBED_MARKERS,
    MARKED_VIDEO_TYPES,
    SUBTITLED_MARKERS,
    VIDEO_SITE,
    VIDEO_TYPE_PRIORITY,
)

logger = logging.getLogger(__name__)

Pick = Callable[[tuple[Video, ...]], Optional[Video]]


def _marked(markers: tuple[str, ...]) -> Pick:
    def pick(videos: tuple[Video, ...]) -> Video | None:
        for video in videos:
            title = video.name.lower()
            if video.type in MARKED_VIDEO_TYPES and any(
                marker in title for marker in markers
            ):
                return video
        return None

    return pick


def pick_by_type(videos: tuple[Video, ...]) -> Video | None:
    """First video of the highest-priority type present in the listing."""
    for video_type in VIDEO_TYPE_PRIORITY:
        for video in videos:
            if video.type == video_type:
                return video
    return None


pick_subtitled = _marked(SUBTITLED_MARKERS)
pick_dubbed = _marked(DUBBED_MARKERS)

PRIMARY_PICKS: tuple[Pick, ...] = (pick_subtitled, pick_dubbed, pick_by_type)
FALLBACK_PICKS: tuple[Pick, ...] = (pick_by_type,)


def _platform_videos(
    client: TMDBClient, show_id: int, language: str
) -> tuple[Video, ...]:
    try:
        videos = client.fetch_videos(show_id, language)
    except (requests.RequestException, CatalogError) as exc:
        logger.debug("Video listing for %s (%s) failed: %s", show_id, language, exc)
        return ()
    return tuple(v for v in videos if v.site == VIDEO_SITE)


def _search_locale(
    client: TMDBClient,
    show_id: int,
    language: str,
    picks: tuple[Pick, ...],
) -> str | None:
    videos = _platform_videos(client, show_id, language)
    for pick in picks:
        video = pick(videos)
        if video is not None:
            return video.key
    return None


def resolve_trailer(client: TMDBClient, show_id: int) -> str | None:
    """Resolve a trailer key for a show, or None if nothing fits."""
    config = client.config
    attempts = (
        (config.language, PRIMARY_PICKS),
        (config.fallback_language, FALLBACK_PICKS),
    )
    for language, picks in attempts:
        key = _search_locale(client, show_id, language, picks)
        if key is not None:
            logger.debug("Trailer for %s found in %s: %s", show_id, language, key)
            return key

    logger.info("No trailer found for show %s", show_id)
    return None
