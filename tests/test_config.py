import pytest

from mmk_converter.core.config import Settings

from fakes import make_settings


def test_defaults():
    settings = make_settings()
    assert settings.base_currency == "MMK"
    assert settings.exchange_api_base_url == "https://v6.exchangerate-api.com/v6"


def test_blank_api_key_is_missing():
    assert make_settings(exchange_rate_api_key="   ").exchange_rate_api_key is None


def test_normalises_base_and_url():
    settings = make_settings(base_currency="mmk", exchange_api_base_url="https://x.test/v6/")
    assert settings.base_currency == "MMK"
    assert settings.exchange_api_base_url == "https://x.test/v6"


def test_unknown_provider_rejected():
    with pytest.raises(ValueError, match="Unsupported exchange_rate_provider"):
        make_settings(exchange_rate_provider="carrier-pigeon")


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("EXCHANGE_RATE_API_KEY", "from-env")
    monkeypatch.setenv("EXCHANGE_RATE_PROVIDER", "static")
    settings = Settings(_env_file=None)
    settings.init_post_load()
    assert settings.exchange_rate_api_key == "from-env"
    assert settings.exchange_rate_provider == "static"
