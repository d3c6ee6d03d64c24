"""Tests for the catalog router and presenter."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from streamscout.application.use_cases import TitlePage
from streamscout.domain.entities import CatalogEntry, Episode, Slider, TitleDetail
from streamscout.infrastructure.config import SiteSettings
from streamscout.interfaces.api.catalog.presenter import present_detail
from streamscout.interfaces.api.catalog.router import _parse_title_ref, router

_ENTRY = CatalogEntry(name="Iron Man", id=1, slug="iron-man", poster_filename="p.jpg")
_DETAIL = TitleDetail(
    id=42,
    name="Il Trono",
    original_name="The Throne",
    main_actors=("Actor A",),
    directors=("Director B",),
    poster_filename="poster.jpg",
    play_url="https://sc.example/iframe/42",
)
_EPISODES = [
    Episode(id=7, name="Pilot", number=1, title_id=42),
    Episode(id=8, name="Second", number=2, title_id=42),
]


def _make_app(
    *,
    catalog_uc: AsyncMock | None = None,
    tracker: MagicMock | None = None,
    settings: SiteSettings | None = None,
) -> FastAPI:
    """Create a minimal FastAPI app with the catalog router."""
    app = FastAPI()
    app.include_router(router)
    app.state.settings = settings or SiteSettings(base_domain="sc.example")
    app.state.catalog_uc = catalog_uc or AsyncMock()
    app.state.progress_tracker = tracker or MagicMock()
    return app


@pytest.fixture()
def tracker() -> MagicMock:
    tracker = MagicMock()
    tracker.load_group = AsyncMock(return_value=0.25)
    tracker.episode_progress.return_value = {
        "https://sc.example/iframe/42?episode_id=7": 0.5,
    }
    return tracker


class TestParseTitleRef:
    def test_slug_with_dashes(self) -> None:
        assert _parse_title_ref("42-the-last-kingdom") == (42, "the-last-kingdom")

    @pytest.mark.parametrize("ref", ["42", "abc-slug", "-slug", "42-"])
    def test_invalid(self, ref: str) -> None:
        assert _parse_title_ref(ref) is None


class TestHome:
    def test_returns_sliders_with_urls(self) -> None:
        uc = AsyncMock()
        uc.home = AsyncMock(return_value=[Slider(name="trending", titles=(_ENTRY,))])
        client = TestClient(_make_app(catalog_uc=uc))

        resp = client.get("/catalog/home")

        assert resp.status_code == 200
        title = resp.json()["sliders"][0]["titles"][0]
        assert title["href"] == "https://sc.example/it/titles/1-iron-man"
        assert title["image_url"] == "https://cdn.sc.example/images/p.jpg"


class TestSearch:
    def test_returns_results(self) -> None:
        uc = AsyncMock()
        uc.search = AsyncMock(return_value=[_ENTRY])
        client = TestClient(_make_app(catalog_uc=uc))

        resp = client.get("/catalog/search", params={"q": "iron man"})

        assert resp.status_code == 200
        assert resp.json()["results"][0]["id"] == 1
        assert uc.search.await_args[0][0] == "iron man"

    def test_history(self) -> None:
        uc = AsyncMock()
        uc.search_history = AsyncMock(return_value=["a", "b"])
        client = TestClient(_make_app(catalog_uc=uc))
        assert client.get("/catalog/search/history").json() == {"queries": ["a", "b"]}

    def test_forget_known_query(self) -> None:
        uc = AsyncMock()
        uc.forget_search = AsyncMock(return_value=True)
        client = TestClient(_make_app(catalog_uc=uc))
        resp = client.delete("/catalog/search/history", params={"q": "a"})
        assert resp.status_code == 200

    def test_forget_unknown_query(self) -> None:
        uc = AsyncMock()
        uc.forget_search = AsyncMock(return_value=False)
        client = TestClient(_make_app(catalog_uc=uc))
        resp = client.delete("/catalog/search/history", params={"q": "zzz"})
        assert resp.status_code == 404


class TestTitlePage:
    def test_detail_with_episodes_and_progress(self, tracker: MagicMock) -> None:
        uc = AsyncMock()
        uc.title = AsyncMock(
            return_value=TitlePage(detail=_DETAIL, episodes=_EPISODES, season=1)
        )
        client = TestClient(_make_app(catalog_uc=uc, tracker=tracker))

        resp = client.get("/titles/42-the-throne", params={"season": 1})

        assert resp.status_code == 200
        body = resp.json()
        assert body["title"]["name"] == "Il Trono"
        assert body["season"] == 1
        assert body["overall_progress"] == 0.25
        assert [ep["progress"] for ep in body["episodes"]] == [0.5, 0.0]
        assert uc.title.await_args[0][0] == "https://sc.example/it/titles/42-the-throne"
        assert uc.title.await_args[1]["season"] == 1
        tracker.load_group.assert_awaited_once_with(
            "42",
            [
                "https://sc.example/iframe/42?episode_id=7",
                "https://sc.example/iframe/42?episode_id=8",
            ],
        )

    def test_unavailable_title(self, tracker: MagicMock) -> None:
        uc = AsyncMock()
        uc.title = AsyncMock(return_value=None)
        client = TestClient(_make_app(catalog_uc=uc, tracker=tracker))
        assert client.get("/titles/42-the-throne").status_code == 404

    def test_malformed_ref(self, tracker: MagicMock) -> None:
        client = TestClient(_make_app(tracker=tracker))
        assert client.get("/titles/not-a-title").status_code == 404


class TestPresentDetail:
    def test_display_toggles(self) -> None:
        settings = SiteSettings(
            base_domain="sc.example",
            show_original_title=True,
            show_cast=False,
            show_director=False,
        )
        payload = present_detail(_DETAIL, settings)
        assert payload["original_name"] == "The Throne"
        assert "main_actors" not in payload
        assert "directors" not in payload
        assert payload["image_url"] == "https://cdn.sc.example/images/poster.jpg"

    def test_default_toggles(self) -> None:
        payload = present_detail(_DETAIL, SiteSettings(base_domain="sc.example"))
        assert "original_name" not in payload
        assert payload["main_actors"] == ["Actor A"]
        assert payload["directors"] == ["Director B"]
