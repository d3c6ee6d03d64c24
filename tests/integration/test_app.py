"""Integration tests for the assembled FastAPI app (lifespan + routers)."""

from __future__ import annotations

from pathlib import Path

import pytest
import respx
from fastapi.testclient import TestClient

from streamscout.infrastructure.config import AppConfig
from streamscout.infrastructure.config.schema import CacheConfig, SiteSettings
from streamscout.interfaces.main import build_app

pytestmark = pytest.mark.integration

_BASE = "sc.example"
_PLAY_URL = f"https://{_BASE}/iframe/42"
_EMBED_URL = "https://vix.example/embed/42"


@pytest.fixture()
def config(tmp_path: Path) -> AppConfig:
    return AppConfig(
        environment="test",
        cache=CacheConfig(directory=tmp_path / "cache"),
        site=SiteSettings(base_domain=_BASE),
    )


class TestApp:
    def test_healthz(self, config: AppConfig) -> None:
        with TestClient(build_app(config)) as client:
            assert client.get("/healthz").json() == {"status": "ok"}

    def test_settings_start_from_config(self, config: AppConfig) -> None:
        with TestClient(build_app(config)) as client:
            assert client.get("/settings").json()["base_domain"] == _BASE

    @respx.mock
    def test_resolve_then_record_and_resume(self, config: AppConfig) -> None:
        respx.get(_PLAY_URL).respond(
            200, text=f'<iframe src="{_EMBED_URL}"></iframe>'
        )
        respx.get(_EMBED_URL).respond(
            200,
            text=(
                "window.masterPlaylist = {params: {'token': 't', 'expires': '9'},"
                " url: 'https://vix.example/playlist/42'}"
            ),
        )

        with TestClient(build_app(config)) as client:
            first = client.post("/playback/resolve", json={"url": _PLAY_URL})
            assert first.status_code == 200
            assert first.json()["stream_url"] == (
                "https://vix.example/playlist/42?token=t&expires=9"
            )
            assert first.json()["start_position"] is None

            recorded = client.post(
                "/playback/progress",
                json={"key": _PLAY_URL, "position_seconds": 50, "duration_seconds": 100},
            )
            assert recorded.json() == {"recorded": True}

            second = client.post("/playback/resolve", json={"url": _PLAY_URL})
            assert second.json()["start_position"] == 50.0

    @respx.mock
    def test_resolve_failure_reports_hop(self, config: AppConfig) -> None:
        respx.get(_PLAY_URL).respond(200, text="<html>no player</html>")

        with TestClient(build_app(config)) as client:
            resp = client.post("/playback/resolve", json={"url": _PLAY_URL})

        assert resp.status_code == 502
        assert resp.json()["hop"] == "embed"

    @respx.mock
    def test_patched_domain_used_for_next_search(self, config: AppConfig) -> None:
        route = respx.get("https://new.example/it/archive?search=hulk").respond(
            200, text="<div id='app' data-page='{\"props\": {\"titles\": []}}'></div>"
        )

        with TestClient(build_app(config)) as client:
            client.patch("/settings", json={"base_domain": "https://new.example/"})
            resp = client.get("/catalog/search", params={"q": "hulk"})

        assert resp.status_code == 200
        assert route.called
        assert resp.json()["results"] == []
