"""Testes para GraphSettings."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from opengraph.config.settings import DEFAULT_BATCH_LIMIT, GraphSettings, get_graph_settings
from opengraph.config.settings.graph import _load_from_env


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> Iterator[None]:
    get_graph_settings.cache_clear()
    yield
    get_graph_settings.cache_clear()


class TestGraphSettings:
    """Testes para carregamento e validação."""

    def test_defaults(self) -> None:
        settings = GraphSettings()
        assert settings.batch_limit == DEFAULT_BATCH_LIMIT == 50
        assert settings.is_beta is False
        assert settings.verify_ssl is True
        assert settings.validate() == []

    def test_secret_hidden_from_repr(self) -> None:
        settings = GraphSettings(app_id="1", app_secret="SEGREDO", access_token="TOKEN")
        assert "SEGREDO" not in repr(settings)
        assert "TOKEN" not in repr(settings)

    def test_load_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FACEBOOK_APP_ID", "123")
        monkeypatch.setenv("FACEBOOK_APP_SECRET", "s3cr3t")
        monkeypatch.setenv("FACEBOOK_NAMESPACE", "myapp")
        monkeypatch.setenv("FACEBOOK_API_VERSION", "v24.0")
        monkeypatch.setenv("FACEBOOK_IS_BETA", "true")
        monkeypatch.setenv("FACEBOOK_BATCH_LIMIT", "20")
        monkeypatch.setenv("FACEBOOK_REQUEST_TIMEOUT_SECONDS", "5.5")
        monkeypatch.setenv("FACEBOOK_VERIFY_SSL", "false")

        settings = _load_from_env()

        assert settings.app_id == "123"
        assert settings.app_secret == "s3cr3t"
        assert settings.namespace == "myapp"
        assert settings.api_version == "v24.0"
        assert settings.is_beta is True
        assert settings.batch_limit == 20
        assert settings.request_timeout_seconds == 5.5
        assert settings.verify_ssl is False

    def test_get_graph_settings_cached(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FACEBOOK_APP_ID", "abc")
        first = get_graph_settings()
        monkeypatch.setenv("FACEBOOK_APP_ID", "outro")
        assert get_graph_settings() is first
        assert first.app_id == "abc"

    def test_validate_errors(self) -> None:
        settings = GraphSettings(app_secret="s", batch_limit=0, request_timeout_seconds=0)
        errors = settings.validate()
        assert "FACEBOOK_BATCH_LIMIT deve ser > 0" in errors
        assert "FACEBOOK_REQUEST_TIMEOUT_SECONDS deve ser > 0" in errors
        assert "FACEBOOK_APP_ID não configurado" in errors
