"""Configuration for the TopSeries catalog client.

Centralizes all configuration: catalog API settings, the video platform
API key, and the locale/region used for queries. Credentials are loaded
from environment variables at runtime (no hardcoded secrets).
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass

TOP_N = 5
DISCOVERY_WINDOW_DAYS = 60
MIN_VOTE_COUNT = 20

_REGION_RE = re.compile(r"^[A-Z]{2}$")


@dataclass(frozen=True)
class CatalogConfig:
    bearer_token: str = ""
    base_url: str = "https://api.themoviedb.org/3"
    language: str = "pt-BR"
    fallback_language: str = "en-US"
    region: str = "BR"
    user_agent: str = "TopSeries/1.0"
    request_timeout: int = 30


@dataclass(frozen=True)
class YouTubeConfig:
    api_key: str = ""
    api_url: str = "https://www.googleapis.com/youtube/v3/videos"
    watch_url: str = "https://www.youtube.com/watch"
    user_agent: str = "TopSeries/1.0"
    request_timeout: int = 30


def _parse_timeout(raw: str) -> int:
    try:
        timeout = int(raw)
    except ValueError:
        raise ValueError(f"TOPSERIES_TIMEOUT must be an integer, got '{raw}'")
    if timeout <= 0:
        raise ValueError("TOPSERIES_TIMEOUT must be positive")
    return timeout


def load_config() -> tuple[CatalogConfig, YouTubeConfig]:
    """Load and validate configuration from environment variables.

    Reads TMDB_BEARER_TOKEN (required) and YOUTUBE_API_KEY (optional),
    plus optional locale, region and timeout overrides, and returns
    frozen config objects for the catalog and video platform clients.

    Returns:
        Tuple of (CatalogConfig, YouTubeConfig) with validated settings.

    Raises:
        ValueError: If TMDB_BEARER_TOKEN is missing, or an override
            has an invalid value.
    """
    token = os.environ.get("TMDB_BEARER_TOKEN", "").strip()
    if not token:
        raise ValueError("TMDB_BEARER_TOKEN environment variable is required")

    region = os.environ.get("TOPSERIES_REGION", "BR").strip().upper()
    if not _REGION_RE.match(region):
        raise ValueError(
            f"Invalid region: '{region}'. Expected a two-letter country code."
        )

    timeout = _parse_timeout(os.environ.get("TOPSERIES_TIMEOUT", "30"))

    catalog = CatalogConfig(
        bearer_token=token,
        language=os.environ.get("TOPSERIES_LANGUAGE", "pt-BR"),
        fallback_language=os.environ.get("TOPSERIES_FALLBACK_LANGUAGE", "en-US"),
        region=region,
        request_timeout=timeout,
    )
    youtube = YouTubeConfig(
        api_key=os.environ.get("YOUTUBE_API_KEY", "").strip(),
        request_timeout=timeout,
    )
    return catalog, youtube
