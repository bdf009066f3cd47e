import json
import os

import pytest

from topseries.models import (
    MISSING_DATE_LABEL,
    MISSING_PROVIDER_LABEL,
    Provider,
    Show,
    ShowDetails,
    TimeWindow,
    Video,
    VideoSnippet,
)

FIXTURES_DIR = os.path.join(
    os.path.dirname(__file__), "..", "fixtures"
)


def _read_json(filename: str) -> dict:
    path = os.path.join(FIXTURES_DIR, filename)
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


class TestTimeWindow:
    def test_values(self):
        assert [w.value for w in TimeWindow] == ["day", "week", "month"]

    def test_display_names(self):
        assert TimeWindow.DAY.display_name == "Hoje"
        assert TimeWindow.WEEK.display_name == "Esta Semana"
        assert TimeWindow.MONTH.display_name == "Este Mês"

    def test_from_value(self):
        assert TimeWindow("month") is TimeWindow.MONTH


class TestProvider:
    def test_round_trip(self):
        payload = {"logo_path": "/logo.jpg", "provider_name": "Netflix"}
        assert Provider.from_dict(payload).to_dict() == payload

    def test_missing_name_uses_fallback_label(self):
        provider = Provider(logo_path="/logo.jpg")
        assert provider.display_name == MISSING_PROVIDER_LABEL

    def test_missing_name_gets_unique_display_id(self):
        first = Provider()
        second = Provider()
        assert first.display_id
        assert first.display_id != second.display_id

    def test_display_id_is_name_when_present(self):
        assert Provider(provider_name="Globoplay").display_id == "Globoplay"

    def test_equality_ignores_synthetic_id(self):
        assert Provider(provider_name="Netflix", logo_path="/n.jpg") == Provider(
            provider_name="Netflix", logo_path="/n.jpg"
        )

    def test_logo_url(self):
        assert (
            Provider(logo_path="/n.jpg").logo_url
            == "https://image.tmdb.org/t/p/original/n.jpg"
        )
        assert Provider(logo_path="").logo_url is None


class TestVideo:
    def test_round_trip(self):
        payload = {"key": "abc", "site": "YouTube", "type": "Teaser", "name": "Teaser"}
        assert Video.from_dict(payload).to_dict() == payload

    def test_missing_key_raises(self):
        with pytest.raises(KeyError):
            Video.from_dict({"site": "YouTube", "type": "Trailer", "name": "x"})


class TestShow:
    def test_round_trip_preserves_wire_fields(self):
        payload = {
            "id": 7,
            "name": "Ruptura",
            "original_name": "Severance",
            "overview": "Sinopse.",
            "poster_path": "/p.jpg",
            "backdrop_path": "/b.jpg",
            "first_air_date": "2022-02-17",
            "vote_average": 8.4,
            "trailerKey": "leg1",
            "watchProviders": [
                {"logo_path": "/a.jpg", "provider_name": "Apple TV+"},
            ],
        }
        assert Show.from_dict(payload).to_dict() == payload

    def test_decodes_fixture_and_ignores_unknown_fields(self):
        data = _read_json("trending_tv.json")
        shows = [Show.from_dict(item) for item in data["results"]]
        assert shows[0].id == 101
        assert shows[0].original_name == "Severance"
        assert shows[1].backdrop_path is None
        assert "popularity" not in shows[0].to_dict()

    def test_integer_rating_becomes_float(self):
        show = Show.from_dict({"id": 1, "name": "A", "overview": "", "vote_average": 8})
        assert show.vote_average == 8.0
        assert isinstance(show.vote_average, float)

    def test_empty_provider_list_decodes_to_none(self):
        show = Show.from_dict(
            {"id": 1, "name": "A", "overview": "", "watchProviders": []}
        )
        assert show.watch_providers is None

    def test_rejects_non_integer_id(self):
        with pytest.raises(TypeError):
            Show.from_dict({"id": "1", "name": "A", "overview": ""})

    def test_rejects_missing_name(self):
        with pytest.raises(KeyError):
            Show.from_dict({"id": 1, "overview": ""})

    def test_frozen(self):
        show = Show(id=1, name="A", overview="")
        with pytest.raises(AttributeError):
            show.name = "B"

    def test_image_urls(self):
        show = Show(id=1, name="A", overview="", poster_path="/p.jpg", backdrop_path="")
        assert show.poster_url == "https://image.tmdb.org/t/p/w500/p.jpg"
        assert show.backdrop_url is None

    def test_formatted_rating(self):
        assert Show(id=1, name="A", overview="", vote_average=8.46).formatted_rating == "8.5"
        assert Show(id=1, name="A", overview="").formatted_rating == "N/A"

    def test_formatted_first_air_date(self):
        show = Show(id=1, name="A", overview="", first_air_date="2026-09-01")
        assert show.formatted_first_air_date == "01/09/2026"

    @pytest.mark.parametrize("value", [None, "", "09/01/2026"])
    def test_formatted_first_air_date_fallback(self, value):
        show = Show(id=1, name="A", overview="", first_air_date=value)
        assert show.formatted_first_air_date == MISSING_DATE_LABEL

    def test_trailer_embed_url(self):
        show = Show(id=1, name="A", overview="", trailer_key="leg1")
        url = show.trailer_embed_url
        assert url.startswith("https://www.youtube.com/embed/leg1?")
        assert "rel=0" in url
        assert "cc_lang_pref=pt" in url
        assert Show(id=1, name="A", overview="").trailer_embed_url is None


class TestShowDetails:
    def test_search_text_lowercases_overview_and_networks(self):
        details = ShowDetails.from_dict(_read_json("show_details.json"))
        text = details.search_text()
        assert "netflix original" in text
        assert text.endswith(" netflix")
        assert details.networks == ("Netflix",)

    def test_missing_networks(self):
        details = ShowDetails.from_dict({"overview": "Nada."})
        assert details.networks == ()


class TestVideoSnippet:
    def test_search_text(self):
        snippet = VideoSnippet(title="Trailer", description="Só na NETFLIX", channel_title="Canal")
        assert snippet.search_text() == "trailer só na netflix canal"
