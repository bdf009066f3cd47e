"""Typed client for the TMDB catalog API.

Issues GET requests through an authenticated requests.Session and decodes
the JSON envelopes into the frozen models. There is no business logic
here: picking trailers and providers lives in topseries.resolvers.

Every method raises on failure:
    InvalidResponse - the API answered with a non-2xx status
    DecodingError   - the body is not JSON or does not match the envelope
    requests.RequestException - the request itself failed
"""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Any, Callable, TypeVar

import requests

from topseries.config import DISCOVERY_WINDOW_DAYS, MIN_VOTE_COUNT, CatalogConfig
from topseries.errors import DecodingError, InvalidResponse
from topseries.models import Provider, Show, ShowDetails, TimeWindow, Video

logger = logging.getLogger(__name__)

T = TypeVar("T")

DATE_FORMAT = "%Y-%m-%d"


def build_discover_params(config: CatalogConfig, today: date) -> dict[str, str]:
    """Query parameters for the month-mode discovery query.

    English-original shows with at least MIN_VOTE_COUNT votes, first aired
    within the trailing DISCOVERY_WINDOW_DAYS (inclusive of today), still
    in production or returning, sorted by popularity.

    Examples:
        today=2026-10-18 -> first_air_date.gte=2026-08-19,
                            first_air_date.lte=2026-10-18
    """
    start = today - timedelta(days=DISCOVERY_WINDOW_DAYS)
    return {
        "language": config.language,
        "sort_by": "popularity.desc",
        "with_original_language": "en",
        "vote_count.gte": str(MIN_VOTE_COUNT),
        "watch_region": config.region,
        "with_type": "2|4",
        "first_air_date.gte": start.strftime(DATE_FORMAT),
        "first_air_date.lte": today.strftime(DATE_FORMAT),
        "with_status": "0|3",
        "with_release_type": "2|4|6",
    }


def _error_message(response: requests.Response) -> str:
    """Extract status_message from an error body, or describe the status."""
    try:
        message = response.json()["status_message"]
    except (ValueError, KeyError, TypeError):
        message = None
    if isinstance(message, str) and message:
        return message
    return f"Status code: {response.status_code}"


def _decode_list(
    data: dict[str, Any],
    key: str,
    decoder: Callable[[dict[str, Any]], T],
) -> tuple[T, ...]:
    try:
        return tuple(decoder(item) for item in data[key])
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise DecodingError(f"invalid '{key}' envelope: {exc!r}") from exc


class TMDBClient:
    """Client for the catalog endpoints used by TopSeries."""

    def __init__(self, session: requests.Session, config: CatalogConfig) -> None:
        self._session = session
        self._config = config

    @property
    def config(self) -> CatalogConfig:
        return self._config

    def get_json(
        self, path: str, params: dict[str, str] | None = None
    ) -> dict[str, Any]:
        """GET a catalog path and return the decoded JSON object.

        Raises:
            InvalidResponse: On a non-2xx status, carrying the API's
                status_message when the body has one.
            DecodingError: If the body is not a JSON object.
        """
        url = f"{self._config.base_url}{path}"
        logger.debug("GET %s params=%s", url, params)
        response = self._session.get(
            url,
            params=params,
            timeout=self._config.request_timeout,
        )
        if not 200 <= response.status_code < 300:
            raise InvalidResponse(
                _error_message(response), status_code=response.status_code
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise DecodingError(f"body is not JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise DecodingError(
                f"expected a JSON object, got {type(data).__name__}"
            )
        return data

    def fetch_catalog(
        self, time_window: TimeWindow, today: date | None = None
    ) -> tuple[Show, ...]:
        """Fetch trending shows, or discovered shows in month mode.

        Results are returned in the API's own order, undecorated.
        """
        if time_window is TimeWindow.MONTH:
            params = build_discover_params(self._config, today or date.today())
            data = self.get_json("/discover/tv", params)
        else:
            data = self.get_json(
                f"/trending/tv/{time_window.value}",
                {"language": self._config.language, "region": self._config.region},
            )
        return _decode_list(data, "results", Show.from_dict)

    def fetch_videos(self, show_id: int, language: str) -> tuple[Video, ...]:
        data = self.get_json(f"/tv/{show_id}/videos", {"language": language})
        return _decode_list(data, "results", Video.from_dict)

    def fetch_flatrate_providers(self, show_id: int) -> tuple[Provider, ...]:
        """Subscription providers listed for the configured region.

        Returns an empty tuple when the region or its flatrate tier is
        absent from the listing.
        """
        data = self.get_json(f"/tv/{show_id}/watch/providers")
        try:
            region = data["results"].get(self._config.region) or {}
            flatrate = region.get("flatrate") or []
            return tuple(Provider.from_dict(p) for p in flatrate)
        except (KeyError, TypeError, AttributeError) as exc:
            raise DecodingError(f"invalid providers envelope: {exc!r}") from exc

    def fetch_show_details(self, show_id: int) -> ShowDetails:
        data = self.get_json(
            f"/tv/{show_id}",
            {
                "language": self._config.language,
                "append_to_response": "keywords,external_ids",
            },
        )
        try:
            return ShowDetails.from_dict(data)
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise DecodingError(f"invalid show details: {exc!r}") from exc
