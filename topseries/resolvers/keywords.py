"""Keyword tables used to guess streaming providers from free text.

Tables are ordered tuples, not dicts: when several entries match the
same text, results come out in table order.
"""

from __future__ import annotations

from dataclasses import dataclass

from topseries.models import Provider

NETFLIX_LOGO = "/t2yyOv40HZeVlLjYsCsPHnWLk4W.jpg"
PRIME_VIDEO_LOGO = "/emthp39XA2YScoYL1p0sdbAH2WA.jpg"
DISNEY_PLUS_LOGO = "/7rwgEs15tFwyR9NPQ5vpzxTj19Q.jpg"
STAR_PLUS_LOGO = "/zqPiJW4AeFS4OQkJvNnxgJ0eFaV.jpg"
HBO_MAX_LOGO = "/aS2zvJWn9mwiCOeaaCkIh4wleZS.jpg"
APPLE_TV_PLUS_LOGO = "/6uhKBfmtzFqOcLousHwZuzcrScK.jpg"
PARAMOUNT_PLUS_LOGO = "/xbhHHa1YgtpwhC8lb1NQ3ACVcLd.jpg"
GLOBOPLAY_LOGO = "/jPXksH9rTFDgiU4ZBQkgPWUuKpi.jpg"
DISCOVERY_PLUS_LOGO = "/1D1bS3Dyw4ScYnFWTlBOvJXC3nb.jpg"
UNIVERSAL_PLUS_LOGO = "/oWPBXgmRxF6VUH1gsoI6bfKF4d.jpg"

SUBTITLED_MARKERS = ("legendado", "leg")
DUBBED_MARKERS = ("dublado", "dub")
MARKED_VIDEO_TYPES = ("Trailer", "Teaser")
VIDEO_TYPE_PRIORITY = ("Trailer", "Teaser", "Clip", "Featurette", "Behind the Scenes")
VIDEO_SITE = "YouTube"


@dataclass(frozen=True)
class ProviderKeywords:
    """Lowercase phrases that identify one provider in free text."""

    name: str
    keywords: tuple[str, ...]
    logo_path: str

    def matches(self, text: str) -> bool:
        return any(keyword in text for keyword in self.keywords)

    def to_provider(self) -> Provider:
        return Provider(provider_name=self.name, logo_path=self.logo_path)


SHOW_KEYWORDS: tuple[ProviderKeywords, ...] = (
    ProviderKeywords(
        "Netflix",
        ("netflix", "série original netflix", "netflix original"),
        NETFLIX_LOGO,
    ),
    ProviderKeywords(
        "Prime Video",
        ("prime video", "amazon prime", "amazon original"),
        PRIME_VIDEO_LOGO,
    ),
    ProviderKeywords(
        "Disney+",
        ("disney+", "disney plus", "série original disney"),
        DISNEY_PLUS_LOGO,
    ),
    ProviderKeywords("Star+", ("star+", "star plus"), STAR_PLUS_LOGO),
    ProviderKeywords("HBO Max", ("hbo max", "hbo", "max original"), HBO_MAX_LOGO),
    ProviderKeywords(
        "Apple TV+",
        ("apple tv+", "apple tv plus", "apple original"),
        APPLE_TV_PLUS_LOGO,
    ),
    ProviderKeywords(
        "Paramount+", ("paramount+", "paramount plus"), PARAMOUNT_PLUS_LOGO
    ),
    ProviderKeywords("Globoplay", ("globoplay",), GLOBOPLAY_LOGO),
    ProviderKeywords(
        "Discovery+", ("discovery+", "discovery plus"), DISCOVERY_PLUS_LOGO
    ),
    ProviderKeywords(
        "Universal+", ("universal+", "universal plus"), UNIVERSAL_PLUS_LOGO
    ),
)

# Trailer descriptions use more promotional phrasing than synopses.
VIDEO_KEYWORDS: tuple[ProviderKeywords, ...] = (
    ProviderKeywords(
        "Netflix",
        (
            "netflix",
            "série original netflix",
            "netflix original",
            "só na netflix",
            "exclusivo netflix",
        ),
        NETFLIX_LOGO,
    ),
    ProviderKeywords(
        "Prime Video",
        ("prime video", "amazon prime", "amazon original", "prime original"),
        PRIME_VIDEO_LOGO,
    ),
    ProviderKeywords(
        "Disney+",
        ("disney+", "disney plus", "série original disney", "disney original"),
        DISNEY_PLUS_LOGO,
    ),
    ProviderKeywords(
        "Star+", ("star+", "star plus", "série star original"), STAR_PLUS_LOGO
    ),
    ProviderKeywords(
        "HBO Max",
        ("hbo max", "hbo", "max original", "série hbo"),
        HBO_MAX_LOGO,
    ),
    ProviderKeywords(
        "Apple TV+",
        ("apple tv+", "apple tv plus", "apple original", "apple tv"),
        APPLE_TV_PLUS_LOGO,
    ),
    ProviderKeywords(
        "Paramount+",
        ("paramount+", "paramount plus", "série paramount"),
        PARAMOUNT_PLUS_LOGO,
    ),
    ProviderKeywords(
        "Globoplay", ("globoplay", "original globoplay"), GLOBOPLAY_LOGO
    ),
    ProviderKeywords(
        "Discovery+", ("discovery+", "discovery plus"), DISCOVERY_PLUS_LOGO
    ),
    ProviderKeywords(
        "Universal+", ("universal+", "universal plus"), UNIVERSAL_PLUS_LOGO
    ),
)

# (network name fragment, provider name, logo path)
NETWORK_PROVIDERS: tuple[tuple[str, str, str], ...] = (
    ("netflix", "Netflix", NETFLIX_LOGO),
    ("amazon", "Prime Video", PRIME_VIDEO_LOGO),
    ("disney+", "Disney Plus", DISNEY_PLUS_LOGO),
    ("star+", "Star Plus", STAR_PLUS_LOGO),
    ("hbo", "HBO Max", HBO_MAX_LOGO),
    ("apple tv+", "Apple TV Plus", APPLE_TV_PLUS_LOGO),
    ("paramount", "Paramount Plus", PARAMOUNT_PLUS_LOGO),
    ("globoplay", "Globoplay", GLOBOPLAY_LOGO),
    ("discovery", "Discovery+", DISCOVERY_PLUS_LOGO),
    ("universal", "Universal+", UNIVERSAL_PLUS_LOGO),
)


def match_keywords(
    text: str, table: tuple[ProviderKeywords, ...]
) -> list[Provider]:
    """Providers whose keywords appear in the lowercased text, in table order."""
    return [entry.to_provider() for entry in table if entry.matches(text)]


def map_network(network_name: str) -> Provider | None:
    """First provider whose fragment is contained in the network name."""
    lowered = network_name.lower()
    for fragment, provider_name, logo_path in NETWORK_PROVIDERS:
        if fragment in lowered:
            return Provider(provider_name=provider_name, logo_path=logo_path)
    return None


def map_networks(network_names: tuple[str, ...]) -> list[Provider]:
    """Map each network to a provider, keeping the first of each name."""
    providers: list[Provider] = []
    seen: set[str | None] = set()
    for network_name in network_names:
        provider = map_network(network_name)
        if provider is None or provider.provider_name in seen:
            continue
        seen.add(provider.provider_name)
        providers.append(provider)
    return providers
