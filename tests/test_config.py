"""Tests for configuration loading."""

import json
from pathlib import Path

import pytest

from openx_client import EndpointConfig, OpenXConfig

ENV_VARS = {
    "OAUTH_CONSUMER_KEY": "CK",
    "OAUTH_CONSUMER_SECRET": "CS",
    "OAUTH_REALM": "R",
    "OPENX_URL": "https://api.example.com",
}


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in [*ENV_VARS, "OPENX_TIMEOUT"]:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestEndpointConfig:
    """Tests for endpoint defaults and overrides."""

    def test_defaults(self) -> None:
        endpoints = EndpointConfig()

        assert endpoints.request_token_url == "https://sso.openx.com/api/index/initiate"
        assert endpoints.access_token_url == "https://sso.openx.com/api/index/token"
        assert endpoints.authorize_url == "https://sso.openx.com/login/login"
        assert endpoints.login_url == "https://sso.openx.com/login/process"
        assert endpoints.callback_url == "oob"

    def test_camel_case_overrides(self) -> None:
        endpoints = EndpointConfig.from_mapping(
            {"loginUrl": "https://sso.test/login", "callbackUrl": "https://cb.test"}
        )

        assert endpoints.login_url == "https://sso.test/login"
        assert endpoints.callback_url == "https://cb.test"
        assert endpoints.request_token_url == EndpointConfig().request_token_url

    def test_field_name_overrides(self) -> None:
        endpoints = EndpointConfig.from_mapping({"access_token_url": "https://sso.test/token"})

        assert endpoints.access_token_url == "https://sso.test/token"

    def test_unknown_key(self) -> None:
        with pytest.raises(ValueError, match="Unknown endpoint option: tokenUrl"):
            EndpointConfig.from_mapping({"tokenUrl": "x"})

    def test_immutable(self) -> None:
        with pytest.raises(AttributeError):
            EndpointConfig().login_url = "x"  # type: ignore[misc]


class TestOpenXConfig:
    """Tests for OpenXConfig."""

    def test_create_with_overrides(self) -> None:
        config = OpenXConfig.create(
            "CK", "CS", "R", "https://api.example.com", {"authorizeUrl": "https://a.test"}
        )

        assert config.endpoints.authorize_url == "https://a.test"
        assert config.timeout == 30.0

    def test_api_base_url_has_single_trailing_slash(self) -> None:
        config = OpenXConfig("CK", "CS", "R", "https://api.example.com/ox/4.0//")

        assert config.api_base_url == "https://api.example.com/ox/4.0/"

    def test_from_env(self, clean_env: pytest.MonkeyPatch) -> None:
        for name, value in ENV_VARS.items():
            clean_env.setenv(name, value)
        clean_env.setenv("OPENX_TIMEOUT", "5")

        config = OpenXConfig.from_env()

        assert config.consumer_key == "CK"
        assert config.consumer_secret == "CS"
        assert config.realm == "R"
        assert config.base_url == "https://api.example.com"
        assert config.timeout == 5.0

    def test_from_env_missing(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv("OAUTH_CONSUMER_KEY", "CK")

        with pytest.raises(ValueError, match="OAUTH_CONSUMER_SECRET, OAUTH_REALM, OPENX_URL"):
            OpenXConfig.from_env()

    def test_from_file(self, tmp_path: Path) -> None:
        path = tmp_path / "config.json"
        path.write_text(
            json.dumps(
                {
                    "consumer_key": "CK",
                    "consumer_secret": "CS",
                    "realm": "R",
                    "base_url": "https://api.example.com",
                    "endpoints": {"loginUrl": "https://sso.test/login"},
                }
            )
        )

        config = OpenXConfig.from_file(path)

        assert config.realm == "R"
        assert config.endpoints.login_url == "https://sso.test/login"

    def test_from_file_missing(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            OpenXConfig.from_file(tmp_path / "nope.json")

    def test_load_prefers_env(self, clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
        for name, value in ENV_VARS.items():
            clean_env.setenv(name, value)

        config = OpenXConfig.load(tmp_path / "nope.json")

        assert config.consumer_key == "CK"

    def test_load_falls_back_to_file(self, clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
        path = tmp_path / "config.json"
        path.write_text(
            json.dumps(
                {
                    "consumer_key": "FK",
                    "consumer_secret": "FS",
                    "realm": "FR",
                    "base_url": "https://file.example.com",
                }
            )
        )

        config = OpenXConfig.load(path)

        assert config.consumer_key == "FK"
        assert config.endpoints == EndpointConfig()

    def test_from_env_invalid_timeout(self, clean_env: pytest.MonkeyPatch) -> None:
        for name, value in ENV_VARS.items():
            clean_env.setenv(name, value)
        clean_env.setenv("OPENX_TIMEOUT", "soon")

        with pytest.raises(ValueError, match="Invalid OPENX_TIMEOUT"):
            OpenXConfig.from_env()

    def test_load_reports_invalid_timeout_instead_of_using_file(
        self, clean_env: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        for name, value in ENV_VARS.items():
            clean_env.setenv(name, value)
        clean_env.setenv("OPENX_TIMEOUT", "soon")
        path = tmp_path / "config.json"
        path.write_text(
            json.dumps(
                {
                    "consumer_key": "FK",
                    "consumer_secret": "FS",
                    "realm": "FR",
                    "base_url": "https://file.example.com",
                }
            )
        )

        with pytest.raises(ValueError, match="Invalid OPENX_TIMEOUT"):
            OpenXConfig.load(path)
