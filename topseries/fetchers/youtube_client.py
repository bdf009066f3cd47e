"""Video platform metadata: Data API, or the watch page without a key.

The provider cascade mines a trailer's title, description and channel
name for streaming service names. Two sources can supply that text:

    1. The YouTube Data API (structured, needs YOUTUBE_API_KEY)
    2. The public watch page's <meta> tags (no key, fragile)

The page is only read when no API key is configured. With a key, an
API failure or an empty item list means "no snippet". Like the catalog
orchestrator this never raises: a failure returns None and is logged.
"""

from __future__ import annotations

import logging
from typing import Any

import requests
from bs4 import BeautifulSoup

from topseries.config import YouTubeConfig
from topseries.models import VideoSnippet

logger = logging.getLogger(__name__)


def _parse_api_response(data: dict[str, Any]) -> VideoSnippet | None:
    items = data["items"]
    if not items:
        return None
    snippet = items[0]["snippet"]
    return VideoSnippet(
        title=snippet["title"],
        description=snippet["description"],
        channel_title=snippet["channelTitle"],
    )


def _meta_content(soup: BeautifulSoup, **attrs: str) -> str:
    tag = soup.find("meta", attrs=attrs)
    if tag is None:
        return ""
    return (tag.get("content") or "").strip()


def _parse_watch_page(html: str) -> VideoSnippet | None:
    """Extract snippet text from a watch page.

    Reads og:title / og:description, falling back to the plain title
    and description meta tags, and the channel name from the author
    microdata. Returns None when the page has no title at all.
    """
    soup = BeautifulSoup(html, features="lxml")

    title = _meta_content(soup, property="og:title") or _meta_content(
        soup, name="title"
    )
    if not title:
        return None

    description = _meta_content(
        soup, property="og:description"
    ) or _meta_content(soup, name="description")

    channel = ""
    author = soup.select_one('span[itemprop="author"] link[itemprop="name"]')
    if author is not None:
        channel = (author.get("content") or "").strip()

    return VideoSnippet(
        title=title,
        description=description,
        channel_title=channel,
    )


class YouTubeClient:
    """Reads the public metadata of a single video."""

    def __init__(self, session: requests.Session, config: YouTubeConfig) -> None:
        self._session = session
        self._config = config

    def fetch_snippet(self, video_id: str) -> VideoSnippet | None:
        if self._config.api_key:
            try:
                snippet = self._fetch_from_api(video_id)
            except (requests.RequestException, ValueError, KeyError, TypeError) as exc:
                logger.warning("Video API lookup failed for %s: %s", video_id, exc)
                return None
            if snippet is None:
                logger.info("Video API has no item for %s", video_id)
            return snippet

        try:
            return self._fetch_from_watch_page(video_id)
        except requests.RequestException as exc:
            logger.warning("Watch page lookup failed for %s: %s", video_id, exc)
            return None

    def _fetch_from_api(self, video_id: str) -> VideoSnippet | None:
        response = self._session.get(
            self._config.api_url,
            params={
                "id": video_id,
                "part": "snippet",
                "key": self._config.api_key,
            },
            timeout=self._config.request_timeout,
        )
        response.raise_for_status()
        return _parse_api_response(response.json())

    def _fetch_from_watch_page(self, video_id: str) -> VideoSnippet | None:
        logger.debug("Reading watch page for %s", video_id)
        response = self._session.get(
            self._config.watch_url,
            params={"v": video_id},
            timeout=self._config.request_timeout,
        )
        response.raise_for_status()
        return _parse_watch_page(response.text)
