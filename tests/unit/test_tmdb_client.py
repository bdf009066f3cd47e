import json
import os
from datetime import date

import pytest
import requests
import responses
from responses import matchers

from topseries.config import CatalogConfig
from topseries.errors import DecodingError, InvalidResponse
from topseries.fetchers.http_client import create_session
from topseries.fetchers.tmdb_client import TMDBClient, build_discover_params
from topseries.models import TimeWindow

FIXTURES_DIR = os.path.join(
    os.path.dirname(__file__), "..", "fixtures"
)
BASE = "https://api.themoviedb.org/3"


def _read_json(filename: str) -> dict:
    path = os.path.join(FIXTURES_DIR, filename)
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _make_client() -> TMDBClient:
    config = CatalogConfig(bearer_token="test-token")
    return TMDBClient(create_session(config), config)


class TestBuildDiscoverParams:
    def test_date_range_is_trailing_sixty_days(self):
        params = build_discover_params(CatalogConfig(), date(2026, 10, 18))
        assert params["first_air_date.gte"] == "2026-08-19"
        assert params["first_air_date.lte"] == "2026-10-18"

    @pytest.mark.parametrize(
        "today, expected_start",
        [
            (date(2026, 1, 15), "2025-11-16"),
            (date(2024, 3, 1), "2024-01-01"),
            (date(2025, 3, 1), "2024-12-31"),
        ],
    )
    def test_date_range_across_boundaries(self, today, expected_start):
        params = build_discover_params(CatalogConfig(), today)
        assert params["first_air_date.gte"] == expected_start
        assert params["first_air_date.lte"] == today.strftime("%Y-%m-%d")

    def test_fixed_filters(self):
        params = build_discover_params(CatalogConfig(), date(2026, 10, 18))
        assert params["language"] == "pt-BR"
        assert params["sort_by"] == "popularity.desc"
        assert params["with_original_language"] == "en"
        assert params["vote_count.gte"] == "20"
        assert params["watch_region"] == "BR"
        assert params["with_type"] == "2|4"
        assert params["with_status"] == "0|3"
        assert params["with_release_type"] == "2|4|6"


class TestGetJson:
    @responses.activate
    def test_sends_bearer_token(self):
        responses.add(responses.GET, f"{BASE}/tv/1", json={"ok": True})
        _make_client().get_json("/tv/1")
        headers = responses.calls[0].request.headers
        assert headers["Authorization"] == "Bearer test-token"
        assert headers["Accept"] == "application/json"

    @responses.activate
    def test_error_uses_status_message(self):
        responses.add(
            responses.GET,
            f"{BASE}/tv/1",
            json={"status_code": 7, "status_message": "Invalid API key"},
            status=401,
        )
        with pytest.raises(InvalidResponse) as excinfo:
            _make_client().get_json("/tv/1")
        assert excinfo.value.message == "Invalid API key"
        assert excinfo.value.status_code == 401
        assert str(excinfo.value) == "Erro na resposta da API: Invalid API key"

    @responses.activate
    def test_error_without_body_uses_status_code(self):
        responses.add(responses.GET, f"{BASE}/tv/1", body="oops", status=503)
        with pytest.raises(InvalidResponse) as excinfo:
            _make_client().get_json("/tv/1")
        assert excinfo.value.message == "Status code: 503"

    @responses.activate
    def test_non_json_body(self):
        responses.add(responses.GET, f"{BASE}/tv/1", body="<html></html>")
        with pytest.raises(DecodingError):
            _make_client().get_json("/tv/1")

    @responses.activate
    def test_non_object_body(self):
        responses.add(responses.GET, f"{BASE}/tv/1", json=[1, 2])
        with pytest.raises(DecodingError):
            _make_client().get_json("/tv/1")

    @responses.activate
    def test_single_attempt_on_server_error(self):
        responses.add(responses.GET, f"{BASE}/tv/1", status=500)
        with pytest.raises(InvalidResponse):
            _make_client().get_json("/tv/1")
        assert len(responses.calls) == 1


class TestFetchCatalog:
    @responses.activate
    def test_trending_week(self):
        responses.add(
            responses.GET,
            f"{BASE}/trending/tv/week",
            json=_read_json("trending_tv.json"),
            match=[matchers.query_param_matcher({"language": "pt-BR", "region": "BR"})],
        )
        shows = _make_client().fetch_catalog(TimeWindow.WEEK)
        assert [s.id for s in shows] == [101, 102, 103, 104, 105, 106, 107]

    @responses.activate
    def test_trending_day(self):
        responses.add(
            responses.GET,
            f"{BASE}/trending/tv/day",
            json={"results": []},
        )
        assert _make_client().fetch_catalog(TimeWindow.DAY) == ()

    @responses.activate
    def test_month_uses_discovery(self):
        today = date(2026, 10, 18)
        responses.add(
            responses.GET,
            f"{BASE}/discover/tv",
            json=_read_json("trending_tv.json"),
            match=[
                matchers.query_param_matcher(
                    build_discover_params(CatalogConfig(), today)
                )
            ],
        )
        shows = _make_client().fetch_catalog(TimeWindow.MONTH, today=today)
        assert len(shows) == 7

    @responses.activate
    def test_missing_results_envelope(self):
        responses.add(responses.GET, f"{BASE}/trending/tv/week", json={"page": 1})
        with pytest.raises(DecodingError):
            _make_client().fetch_catalog(TimeWindow.WEEK)

    @responses.activate
    def test_malformed_show(self):
        responses.add(
            responses.GET,
            f"{BASE}/trending/tv/week",
            json={"results": [{"id": "x", "name": "A", "overview": ""}]},
        )
        with pytest.raises(DecodingError):
            _make_client().fetch_catalog(TimeWindow.WEEK)

    @responses.activate
    def test_non_object_provider_entry(self):
        responses.add(
            responses.GET,
            f"{BASE}/trending/tv/week",
            json={
                "results": [
                    {"id": 1, "name": "A", "overview": "", "watchProviders": [5]}
                ]
            },
        )
        with pytest.raises(DecodingError):
            _make_client().fetch_catalog(TimeWindow.WEEK)

    @responses.activate
    def test_non_object_show_entry(self):
        responses.add(
            responses.GET,
            f"{BASE}/trending/tv/week",
            json={"results": ["Wandinha"]},
        )
        with pytest.raises(DecodingError):
            _make_client().fetch_catalog(TimeWindow.WEEK)

    @responses.activate
    def test_connection_error_propagates(self):
        responses.add(
            responses.GET,
            f"{BASE}/trending/tv/week",
            body=requests.ConnectionError("offline"),
        )
        with pytest.raises(requests.ConnectionError):
            _make_client().fetch_catalog(TimeWindow.WEEK)


class TestEnrichmentEndpoints:
    @responses.activate
    def test_fetch_videos(self):
        responses.add(
            responses.GET,
            f"{BASE}/tv/101/videos",
            json=_read_json("videos_pt.json"),
            match=[matchers.query_param_matcher({"language": "pt-BR"})],
        )
        videos = _make_client().fetch_videos(101, "pt-BR")
        assert [v.key for v in videos] == ["vimeo1", "clip1", "dub1", "leg1"]

    @responses.activate
    def test_fetch_flatrate_for_configured_region(self):
        responses.add(
            responses.GET,
            f"{BASE}/tv/101/watch/providers",
            json=_read_json("watch_providers.json"),
        )
        providers = _make_client().fetch_flatrate_providers(101)
        assert len(providers) == 1
        assert providers[0].provider_name == "Apple TV Plus"
        assert providers[0].logo_path == "/6uhKBfmtzFqOcLousHwZuzcrScK.jpg"

    @responses.activate
    def test_fetch_flatrate_region_missing(self):
        responses.add(
            responses.GET,
            f"{BASE}/tv/101/watch/providers",
            json={"id": 101, "results": {"US": {"flatrate": []}}},
        )
        assert _make_client().fetch_flatrate_providers(101) == ()

    @responses.activate
    def test_fetch_flatrate_rent_only(self):
        responses.add(
            responses.GET,
            f"{BASE}/tv/101/watch/providers",
            json={"id": 101, "results": {"BR": {"rent": [{"provider_name": "X"}]}}},
        )
        assert _make_client().fetch_flatrate_providers(101) == ()

    @responses.activate
    def test_fetch_show_details(self):
        responses.add(
            responses.GET,
            f"{BASE}/tv/103",
            json=_read_json("show_details.json"),
            match=[
                matchers.query_param_matcher(
                    {"language": "pt-BR", "append_to_response": "keywords,external_ids"}
                )
            ],
        )
        details = _make_client().fetch_show_details(103)
        assert details.networks == ("Netflix",)
        assert "wandinha addams" in details.search_text()

    @responses.activate
    def test_fetch_show_details_malformed(self):
        responses.add(responses.GET, f"{BASE}/tv/103", json={"name": "x"})
        with pytest.raises(DecodingError):
            _make_client().fetch_show_details(103)

    @responses.activate
    def test_fetch_show_details_non_list_networks(self):
        responses.add(
            responses.GET,
            f"{BASE}/tv/103",
            json={"overview": "", "networks": {"name": "Netflix"}},
        )
        with pytest.raises(DecodingError):
            _make_client().fetch_show_details(103)
