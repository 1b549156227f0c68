import pytest

from mmk_converter.services.http_client import HttpError, InvalidJsonError
from mmk_converter.services.rates import providers
from mmk_converter.services.rates.base import (
    MalformedResponse,
    MissingCredential,
    ProviderError,
    TransportFailure,
)
from mmk_converter.services.rates.providers import (
    ExternalHTTPRateProvider,
    StaticRateProvider,
    make_rate_provider,
    parse_latest_payload,
)

from fakes import make_settings

SUCCESS = {
    "result": "success",
    "base_code": "MMK",
    "conversion_rates": {"MMK": 1, "USD": 0.00048, "CNY": 0.0034},
}


class TestParseLatestPayload:
    def test_success(self):
        assert parse_latest_payload(SUCCESS, "MMK") == {
            "MMK": 1.0,
            "USD": 0.00048,
            "CNY": 0.0034,
        }

    def test_provider_reported_error(self):
        with pytest.raises(ProviderError, match="quota-reached"):
            parse_latest_payload({"result": "error", "error-type": "quota-reached"}, "MMK")

    def test_provider_error_without_reason(self):
        with pytest.raises(ProviderError, match="unknown error"):
            parse_latest_payload({"result": "error"}, "MMK")

    @pytest.mark.parametrize(
        "payload",
        [
            [],
            "success",
            {},
            {"result": "success"},
            {"result": "success", "conversion_rates": {}},
            {"result": "success", "conversion_rates": [1, 2]},
            {"result": "success", "conversion_rates": {"USD": "0.1"}},
            {"result": "success", "conversion_rates": {"USD": None}},
            {"result": "success", "conversion_rates": {"USD": True}},
            {"result": "success", "conversion_rates": {"USD": -0.1}},
            {"result": "success", "conversion_rates": {"USD": float("nan")}},
        ],
    )
    def test_malformed(self, payload):
        with pytest.raises(MalformedResponse):
            parse_latest_payload(payload, "MMK")

    def test_base_mismatch_is_malformed(self):
        payload = dict(SUCCESS, base_code="USD")
        with pytest.raises(MalformedResponse, match="expected MMK"):
            parse_latest_payload(payload, "MMK")


class TestExternalHTTPRateProvider:
    def test_missing_key_makes_no_request(self, monkeypatch):
        def boom(*args, **kwargs):
            raise AssertionError("network must not be touched")

        monkeypatch.setattr(providers, "get_json", boom)
        provider = ExternalHTTPRateProvider(None, "https://example.test/v6")
        with pytest.raises(MissingCredential, match="EXCHANGE_RATE_API_KEY"):
            provider.fetch_rates("MMK")

    def test_requests_latest_for_base(self, monkeypatch):
        seen = {}

        def fake_get_json(url, *, timeout, log_url=None):
            seen.update(url=url, timeout=timeout, log_url=log_url)
            return SUCCESS

        monkeypatch.setattr(providers, "get_json", fake_get_json)
        provider = ExternalHTTPRateProvider("secret-key", "https://example.test/v6/", timeout=3)
        assert provider.fetch_rates("mmk")["USD"] == 0.00048
        assert seen["url"] == "https://example.test/v6/secret-key/latest/MMK"
        assert seen["timeout"] == 3
        assert "secret-key" not in seen["log_url"]

    def test_error_body_on_http_error_is_provider_error(self, monkeypatch):
        def fake_get_json(url, **kwargs):
            raise HttpError(
                "HTTP 403", status=403, payload={"result": "error", "error-type": "invalid-key"}
            )

        monkeypatch.setattr(providers, "get_json", fake_get_json)
        with pytest.raises(ProviderError, match="invalid-key"):
            ExternalHTTPRateProvider("k", "https://example.test/v6").fetch_rates("MMK")

    def test_network_failure_is_transport_failure(self, monkeypatch):
        def fake_get_json(url, **kwargs):
            raise HttpError("Failed to reach host: timed out")

        monkeypatch.setattr(providers, "get_json", fake_get_json)
        with pytest.raises(TransportFailure, match="timed out"):
            ExternalHTTPRateProvider("k", "https://example.test/v6").fetch_rates("MMK")

    def test_http_error_without_json_is_transport_failure(self, monkeypatch):
        def fake_get_json(url, **kwargs):
            raise HttpError("HTTP 502", status=502, payload=None)

        monkeypatch.setattr(providers, "get_json", fake_get_json)
        with pytest.raises(TransportFailure):
            ExternalHTTPRateProvider("k", "https://example.test/v6").fetch_rates("MMK")

    def test_invalid_json_is_malformed(self, monkeypatch):
        def fake_get_json(url, **kwargs):
            raise InvalidJsonError("Invalid JSON")

        monkeypatch.setattr(providers, "get_json", fake_get_json)
        with pytest.raises(MalformedResponse):
            ExternalHTTPRateProvider("k", "https://example.test/v6").fetch_rates("MMK")


def test_static_provider_serves_kyat_rates():
    rates = StaticRateProvider().fetch_rates("MMK")
    assert rates["MMK"] == 1.0
    assert rates["USD"] > 0


def test_static_provider_rejects_other_base():
    with pytest.raises(ProviderError):
        StaticRateProvider().fetch_rates("USD")


def test_make_rate_provider_from_settings():
    assert isinstance(make_rate_provider(make_settings()), StaticRateProvider)
    http = make_rate_provider(
        make_settings(exchange_rate_provider="external-http", exchange_rate_api_key="k")
    )
    assert isinstance(http, ExternalHTTPRateProvider)
