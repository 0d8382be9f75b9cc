"""Tests for configuration loading and API key lookup."""

from __future__ import annotations

import pytest

from pangram_annotator.core.config import DEFAULT_API_URL, ApiConfig, Config
from pangram_annotator.core.exceptions import PreconditionError
from pangram_annotator.core.security import SettingsSecretProvider, StaticSecretProvider, mask_secret


def test_api_config_reads_prefixed_environment(monkeypatch):
    monkeypatch.setenv("PANGRAM_URL", "https://staging.pangram.test/v3")
    monkeypatch.setenv("PANGRAM_API_KEY", "env-key")
    monkeypatch.setenv("PANGRAM_TIMEOUT_S", "15")

    api = ApiConfig()

    assert api.url == "https://staging.pangram.test/v3"
    assert api.api_key.get_secret_value() == "env-key"
    assert api.timeout_s == 15.0
    assert api.has_api_key


def test_api_config_defaults(monkeypatch):
    monkeypatch.delenv("PANGRAM_URL", raising=False)

    api = ApiConfig(api_key=None)

    assert api.url == DEFAULT_API_URL
    assert api.api_key_header == "x-api-key"
    assert not api.has_api_key


def test_settings_secret_provider_returns_key():
    provider = SettingsSecretProvider(Config(api=ApiConfig(api_key="  abc123  ")))
    assert provider.get_api_key() == "abc123"


@pytest.mark.parametrize("api_key", [None, "", "   "])
def test_settings_secret_provider_requires_key(api_key):
    provider = SettingsSecretProvider(Config(api=ApiConfig(api_key=api_key)))

    with pytest.raises(PreconditionError):
        provider.get_api_key()


def test_static_secret_provider():
    assert StaticSecretProvider("k-1").get_api_key() == "k-1"
    with pytest.raises(PreconditionError):
        StaticSecretProvider("").get_api_key()


def test_api_key_is_not_exposed_in_repr():
    config = Config(api=ApiConfig(api_key="super-secret"))
    assert "super-secret" not in repr(config)


@pytest.mark.parametrize(
    "value, expected",
    [("abcd", "****"), ("sk-live-9876", "********9876"), ("", "")],
)
def test_mask_secret(value, expected):
    assert mask_secret(value) == expected
