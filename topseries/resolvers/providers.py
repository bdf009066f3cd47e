"""Streaming provider resolution: a three-tier fallback cascade.

    1. official  - the catalog's watch-provider listing (flatrate tier)
    2. metadata  - keyword mining of the show's synopsis and networks,
                   then a direct network-name mapping
    3. video     - keyword mining of the trailer's platform metadata

Each tier runs only if the previous ones found nothing. A tier that
fails (network error, bad status, bad body) counts as "found nothing";
the cascade never raises. An empty result is reported as None.
"""

from __future__ import annotations

import logging
from functools import partial
from typing import Callable, Optional

import requests

from topseries.errors import CatalogError
from topseries.fetchers.tmdb_client import TMDBClient
from topseries.fetchers.youtube_client import YouTubeClient
from topseries.models import Provider
from topseries.resolvers.keywords import (
    SHOW_KEYWORDS,
    VIDEO_KEYWORDS,
    map_networks,
    match_keywords,
)
from topseries.resolvers.video import resolve_trailer

logger = logging.getLogger(__name__)

TrailerLookup = Callable[[], Optional[str]]
Tier = Callable[[], list[Provider]]


def official_providers(client: TMDBClient, show_id: int) -> list[Provider]:
    return list(client.fetch_flatrate_providers(show_id))


def metadata_providers(client: TMDBClient, show_id: int) -> list[Provider]:
    """Mine the show's synopsis and networks for provider names.

    Keyword matches take precedence; the network mapping is consulted
    only when no keyword matched at all.
    """
    details = client.fetch_show_details(show_id)
    providers = match_keywords(details.search_text(), SHOW_KEYWORDS)
    if providers:
        return providers
    return map_networks(details.networks)


def video_providers(
    youtube: YouTubeClient, trailer_lookup: TrailerLookup
) -> list[Provider]:
    trailer_key = trailer_lookup()
    if not trailer_key:
        return []
    snippet = youtube.fetch_snippet(trailer_key)
    if snippet is None:
        return []
    return match_keywords(snippet.search_text(), VIDEO_KEYWORDS)


def _run_tier(name: str, show_id: int, tier: Tier) -> list[Provider]:
    try:
        return tier()
    except (requests.RequestException, CatalogError) as exc:
        logger.debug("Provider tier '%s' failed for %s: %s", name, show_id, exc)
        return []


def resolve_providers(
    client: TMDBClient,
    youtube: YouTubeClient,
    show_id: int,
    trailer_lookup: TrailerLookup | None = None,
) -> tuple[Provider, ...] | None:
    """Resolve the streaming providers of a show.

    Args:
        client: Catalog API client.
        youtube: Video platform metadata client, used by the last tier.
        show_id: Catalog identifier of the show.
        trailer_lookup: Returns the show's trailer key for the last tier.
            Defaults to a fresh resolve_trailer() call.

    Returns:
        Non-empty tuple of providers from the first tier that found any,
        or None if no tier did.
    """
    if trailer_lookup is None:
        trailer_lookup = partial(resolve_trailer, client, show_id)

    tiers: tuple[tuple[str, Tier], ...] = (
        ("official", lambda: official_providers(client, show_id)),
        ("metadata", lambda: metadata_providers(client, show_id)),
        ("video", lambda: video_providers(youtube, trailer_lookup)),
    )
    for name, tier in tiers:
        providers = _run_tier(name, show_id, tier)
        if providers:
            logger.debug(
                "Provider tier '%s' found %d for show %s",
                name,
                len(providers),
                show_id,
            )
            return tuple(providers)

    logger.info("No providers found for show %s", show_id)
    return None
