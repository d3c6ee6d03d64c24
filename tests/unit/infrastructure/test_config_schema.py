"""Tests for configuration models and base-domain normalization."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from streamscout.infrastructure.config import (
    AppConfig,
    EnvOverrides,
    SiteSettings,
    normalize_base_domain,
)
from streamscout.infrastructure.config.defaults import DEFAULT_USER_AGENTS


class TestNormalizeBaseDomain:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("streamingcommunity.computer", "streamingcommunity.computer"),
            ("https://sc.example", "sc.example"),
            ("HTTPS://Example.com/", "Example.com"),
            ("https://sc.example///", "sc.example"),
            ("  sc.example  ", "sc.example"),
        ],
    )
    def test_normalization(self, raw: str, expected: str) -> None:
        assert normalize_base_domain(raw) == expected

    def test_host_case_preserved(self) -> None:
        assert normalize_base_domain("https://StreamingCommunity.Computer") == (
            "StreamingCommunity.Computer"
        )


class TestSiteSettings:
    def test_defaults(self) -> None:
        settings = SiteSettings()
        assert settings.base_domain == "streamingcommunity.computer"
        assert settings.patch_stream is False
        assert settings.hold_speed == 0.5
        assert settings.show_original_title is False
        assert settings.force_landscape is False

    def test_base_domain_normalized_on_construction(self) -> None:
        assert SiteSettings(base_domain="https://sc.example/").base_domain == "sc.example"

    def test_base_domain_normalized_on_assignment(self) -> None:
        settings = SiteSettings()
        settings.base_domain = "HTTPS://Other.example/"
        assert settings.base_domain == "Other.example"

    def test_empty_domain_rejected(self) -> None:
        with pytest.raises(ValidationError):
            SiteSettings(base_domain="https:///")

    @pytest.mark.parametrize("speed", [0.25, 1.0, 2.0])
    def test_hold_speed_in_range(self, speed: float) -> None:
        assert SiteSettings(hold_speed=speed).hold_speed == speed

    @pytest.mark.parametrize("speed", [0.0, 0.2, 2.25])
    def test_hold_speed_out_of_range(self, speed: float) -> None:
        with pytest.raises(ValidationError):
            SiteSettings(hold_speed=speed)


class TestAppConfig:
    def test_log_format_derived_from_environment(self) -> None:
        assert AppConfig(environment="dev").log_format == "console"
        assert AppConfig(environment="prod").log_format == "json"

    def test_sectioned_input(self) -> None:
        config = AppConfig.model_validate(
            {
                "http": {"timeout_seconds": 5, "user_agent_mode": "per_call"},
                "logging": {"level": "DEBUG"},
                "progress": {"ttl_days": 2},
                "search_history": {"max_entries": 3},
            }
        )
        assert config.http_timeout_seconds == 5
        assert config.http_user_agent_mode == "per_call"
        assert config.log_level == "DEBUG"
        assert config.progress_ttl_seconds == 2 * 86_400
        assert config.search_history_max_entries == 3

    def test_fixed_mode_defaults_to_first_pool_agent(self) -> None:
        config = AppConfig(http_user_agent_mode="fixed")
        assert config.http_user_agent == DEFAULT_USER_AGENTS[0]

    def test_default_pool_has_two_agents(self) -> None:
        assert len(AppConfig().http_user_agents) == 2

    def test_empty_pool_rejected(self) -> None:
        with pytest.raises(ValidationError):
            AppConfig(http_user_agents=["", "  "])

    def test_non_positive_timeout_rejected(self) -> None:
        with pytest.raises(ValidationError):
            AppConfig(http_timeout_seconds=0)

    def test_negative_retention_rejected(self) -> None:
        with pytest.raises(ValidationError):
            AppConfig(progress_ttl_days=-1)

    def test_to_sectioned_dict_round_trips(self) -> None:
        config = AppConfig(site=SiteSettings(base_domain="sc.example"))
        again = AppConfig.model_validate(config.to_sectioned_dict())
        assert again.site.base_domain == "sc.example"
        assert again.cache.directory == config.cache.directory


class TestEnvOverrides:
    def test_reads_prefixed_vars(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("STREAMSCOUT_BASE_DOMAIN", "env.example")
        monkeypatch.setenv("STREAMSCOUT_PATCH_STREAM", "true")
        overrides = EnvOverrides().to_update_dict()
        assert overrides["base_domain"] == "env.example"
        assert overrides["patch_stream"] is True

    def test_unset_vars_are_omitted(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("STREAMSCOUT_LOG_LEVEL", raising=False)
        assert "log_level" not in EnvOverrides().to_update_dict()
