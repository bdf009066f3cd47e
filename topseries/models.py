"""Immutable data models for catalog shows, videos and providers.

All dataclasses are frozen (immutable) to prevent accidental mutation.
Enrichment builds new Show records with dataclasses.replace instead of
mutating in place. Each wire model has from_dict() to decode a catalog
API payload and to_dict() to encode it back with the same field names.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any
from urllib.parse import urlencode

IMAGE_BASE_URL = "https://image.tmdb.org/t/p"
EMBED_BASE_URL = "https://www.youtube.com/embed"
EMBED_PARAMS = {
    "rel": "0",
    "showinfo": "0",
    "playsinline": "1",
    "hl": "pt",
    "cc_lang_pref": "pt",
    "cc_load_policy": "1",
    "modestbranding": "1",
    "iv_load_policy": "3",
}

MISSING_PROVIDER_LABEL = "Não disponível"
MISSING_DATE_LABEL = "Data não disponível"
MISSING_RATING_LABEL = "N/A"


class TimeWindow(str, Enum):
    """Scope of the catalog query selected by the user."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"

    @property
    def display_name(self) -> str:
        return {
            TimeWindow.DAY: "Hoje",
            TimeWindow.WEEK: "Esta Semana",
            TimeWindow.MONTH: "Este Mês",
        }[self]


def _image_url(size: str, path: str | None) -> str | None:
    if not path:
        return None
    return f"{IMAGE_BASE_URL}/{size}{path}"


def _require_str(data: dict[str, Any], key: str) -> str:
    value = data[key]
    if not isinstance(value, str):
        raise TypeError(f"'{key}' must be a string, got {type(value).__name__}")
    return value


def _optional_str(data: dict[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise TypeError(f"'{key}' must be a string, got {type(value).__name__}")
    return value


def _drop_none(doc: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in doc.items() if value is not None}


@dataclass(frozen=True)
class Provider:
    """A streaming service a show is available on.

    Attributes:
        provider_name: Display name; may be absent in catalog data.
        logo_path: Catalog image path of the provider logo.
    """

    provider_name: str | None = None
    logo_path: str | None = None
    _fallback_id: str = field(
        default_factory=lambda: str(uuid.uuid4()),
        repr=False,
        compare=False,
    )

    @property
    def display_id(self) -> str:
        """Identity for list rendering; synthetic when the name is absent."""
        return self.provider_name or self._fallback_id

    @property
    def display_name(self) -> str:
        return self.provider_name or MISSING_PROVIDER_LABEL

    @property
    def logo_url(self) -> str | None:
        return _image_url("original", self.logo_path)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Provider:
        return cls(
            provider_name=_optional_str(data, "provider_name"),
            logo_path=_optional_str(data, "logo_path"),
        )

    def to_dict(self) -> dict[str, Any]:
        return _drop_none({
            "logo_path": self.logo_path,
            "provider_name": self.provider_name,
        })


@dataclass(frozen=True)
class Video:
    """An entry of a show's video listing. Used only during resolution."""

    key: str
    site: str
    type: str
    name: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Video:
        return cls(
            key=_require_str(data, "key"),
            site=_require_str(data, "site"),
            type=_require_str(data, "type"),
            name=_require_str(data, "name"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "site": self.site,
            "type": self.type,
            "name": self.name,
        }


@dataclass(frozen=True)
class VideoSnippet:
    """Free text the video platform publishes about one video."""

    title: str = ""
    description: str = ""
    channel_title: str = ""

    def search_text(self) -> str:
        return " ".join(
            [self.title, self.description, self.channel_title]
        ).lower()


@dataclass(frozen=True)
class ShowDetails:
    """The subset of a show's detail record mined for provider names."""

    overview: str
    networks: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ShowDetails:
        networks = data.get("networks") or []
        return cls(
            overview=_require_str(data, "overview"),
            networks=tuple(_require_str(n, "name") for n in networks),
        )

    def search_text(self) -> str:
        names = " ".join(name.lower() for name in self.networks)
        return f"{self.overview.lower()} {names}"


@dataclass(frozen=True)
class Show:
    """A TV show from the catalog, optionally enriched.

    Attributes:
        id: Catalog identifier.
        name: Localized display name.
        overview: Localized synopsis.
        original_name: Name in the original language.
        poster_path: Catalog image path of the poster.
        backdrop_path: Catalog image path of the backdrop.
        first_air_date: ISO date string (e.g. "2026-09-01").
        vote_average: Average rating between 0 and 10.
        trailer_key: Video platform key of the resolved trailer.
        watch_providers: Resolved providers; None when nothing was found,
            never an empty tuple.
    """

    id: int
    name: str
    overview: str
    original_name: str | None = None
    poster_path: str | None = None
    backdrop_path: str | None = None
    first_air_date: str | None = None
    vote_average: float | None = None
    trailer_key: str | None = None
    watch_providers: tuple[Provider, ...] | None = None

    @property
    def poster_url(self) -> str | None:
        return _image_url("w500", self.poster_path)

    @property
    def backdrop_url(self) -> str | None:
        return _image_url("original", self.backdrop_path)

    @property
    def formatted_rating(self) -> str:
        if self.vote_average is None:
            return MISSING_RATING_LABEL
        return f"{self.vote_average:.1f}"

    @property
    def formatted_first_air_date(self) -> str:
        """First air date as dd/MM/yyyy, or a fallback label."""
        if not self.first_air_date:
            return MISSING_DATE_LABEL
        try:
            parsed = datetime.strptime(self.first_air_date, "%Y-%m-%d")
        except ValueError:
            return MISSING_DATE_LABEL
        return parsed.strftime("%d/%m/%Y")

    @property
    def trailer_embed_url(self) -> str | None:
        if not self.trailer_key:
            return None
        return f"{EMBED_BASE_URL}/{self.trailer_key}?{urlencode(EMBED_PARAMS)}"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Show:
        """Decode a catalog result entry.

        Raises:
            KeyError: If a required field is missing.
            TypeError: If a field has the wrong type.
        """
        show_id = data["id"]
        if isinstance(show_id, bool) or not isinstance(show_id, int):
            raise TypeError(f"'id' must be an integer, got {show_id!r}")

        vote_average = data.get("vote_average")
        if vote_average is not None:
            if isinstance(vote_average, bool) or not isinstance(
                vote_average, (int, float)
            ):
                raise TypeError(
                    f"'vote_average' must be a number, got {vote_average!r}"
                )
            vote_average = float(vote_average)

        providers = data.get("watchProviders")
        return cls(
            id=show_id,
            name=_require_str(data, "name"),
            overview=_require_str(data, "overview"),
            original_name=_optional_str(data, "original_name"),
            poster_path=_optional_str(data, "poster_path"),
            backdrop_path=_optional_str(data, "backdrop_path"),
            first_air_date=_optional_str(data, "first_air_date"),
            vote_average=vote_average,
            trailer_key=_optional_str(data, "trailerKey"),
            watch_providers=(
                tuple(Provider.from_dict(p) for p in providers)
                if providers
                else None
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        """Encode with the catalog wire field names. Omits absent values."""
        return _drop_none({
            "id": self.id,
            "name": self.name,
            "original_name": self.original_name,
            "overview": self.overview,
            "poster_path": self.poster_path,
            "backdrop_path": self.backdrop_path,
            "first_air_date": self.first_air_date,
            "vote_average": self.vote_average,
            "trailerKey": self.trailer_key,
            "watchProviders": (
                [p.to_dict() for p in self.watch_providers]
                if self.watch_providers
                else None
            ),
        })
