"""Fetch cycle orchestrator: catalog query, then per-show enrichment.

One cycle runs:

    1. One catalog query (trending for day/week, discovery for month)
    2. Truncate to the first TOP_N results, in the API's order
    3. For each show, sequentially: resolve a trailer, then providers

Only step 1 can fail the cycle: InvalidResponse, DecodingError or a
requests exception propagate and no partial list is returned.
Enrichment is best-effort: a failing lookup leaves that field as None
and the cycle moves on to the next show.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date

from topseries.config import TOP_N
from topseries.fetchers.tmdb_client import TMDBClient
from topseries.fetchers.youtube_client import YouTubeClient
from topseries.models import Show, TimeWindow
from topseries.resolvers.providers import resolve_providers
from topseries.resolvers.video import resolve_trailer

logger = logging.getLogger(__name__)


def enrich_show(client: TMDBClient, youtube: YouTubeClient, show: Show) -> Show:
    """Return a copy of the show with its trailer and providers resolved.

    The trailer found here is handed to the provider cascade so its last
    tier does not look it up a second time.
    """
    try:
        trailer_key = resolve_trailer(client, show.id)
    except Exception as exc:
        logger.error("Trailer lookup crashed for show %s: %s", show.id, exc)
        trailer_key = None

    try:
        providers = resolve_providers(
            client,
            youtube,
            show.id,
            trailer_lookup=lambda: trailer_key,
        )
    except Exception as exc:
        logger.error("Provider lookup crashed for show %s: %s", show.id, exc)
        providers = None

    return replace(
        show,
        trailer_key=show.trailer_key or trailer_key,
        watch_providers=providers or None,
    )


def fetch_top_shows(
    client: TMDBClient,
    youtube: YouTubeClient,
    time_window: TimeWindow,
    today: date | None = None,
) -> tuple[Show, ...]:
    """Fetch and enrich the top shows for a time window.

    Args:
        client: Catalog API client.
        youtube: Video platform client for the last provider tier.
        time_window: day/week use the trending list, month uses discovery.
        today: Reference date for the discovery range (defaults to today).

    Returns:
        Up to TOP_N enriched shows in catalog order.

    Raises:
        InvalidResponse: The catalog answered with a non-2xx status.
        DecodingError: The catalog body did not match the envelope.
        requests.RequestException: The catalog request itself failed.
    """
    logger.info("Fetching top shows for window '%s'", time_window.value)
    shows = client.fetch_catalog(time_window, today=today)[:TOP_N]
    logger.info("Catalog returned %d shows, enriching", len(shows))

    enriched = tuple(enrich_show(client, youtube, show) for show in shows)

    logger.info(
        "Enriched %d shows: %d with trailers, %d with providers",
        len(enriched),
        sum(1 for s in enriched if s.trailer_key),
        sum(1 for s in enriched if s.watch_providers),
    )
    return enriched
