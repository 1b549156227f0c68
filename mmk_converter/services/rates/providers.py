from __future__ import annotations

"""Concrete rate providers and factory.

'external-http' talks to exchangerate-api.com v6; 'static' serves fixed
placeholder rates so the app can run offline.
"""
import logging
import math
from typing import Any, Dict, Optional

from mmk_converter.core.config import Settings
from mmk_converter.core.logging import mask_secret
from mmk_converter.services.http_client import HttpError, InvalidJsonError, get_json
from .base import (
    MalformedResponse,
    MissingCredential,
    ProviderError,
    RateProvider,
    TransportFailure,
)

logger = logging.getLogger("mmk_converter.rates.providers")

# Approximate MMK-based placeholders (units per 1 MMK)
_STATIC_RATES: Dict[str, float] = {
    "MMK": 1.0,
    "CNY": 0.0034,
    "JPY": 0.071,
    "USD": 0.00048,
    "EUR": 0.00044,
    "GBP": 0.00037,
    "THB": 0.0155,
    "SGD": 0.00062,
    "KRW": 0.66,
}


class StaticRateProvider(RateProvider):
    name = "static"
    base_currency = "MMK"

    def __init__(self, rates: Optional[Dict[str, float]] = None):
        self._rates = dict(rates if rates is not None else _STATIC_RATES)

    def fetch_rates(self, base_currency: str) -> Dict[str, float]:  # type: ignore[override]
        if base_currency.upper() != self.base_currency:
            raise ProviderError(
                f"unsupported-code: static rates only cover base {self.base_currency}"
            )
        return dict(self._rates)


def provider_error(data: Dict[str, Any]) -> ProviderError:
    reason = data.get("error-type") or data.get("error") or "unknown error"
    return ProviderError(f"Rate provider reported an error: {reason}")


def parse_latest_payload(data: Any, base_currency: str) -> Dict[str, float]:
    """Validate an exchangerate-api 'latest' body and return its rate mapping."""
    if not isinstance(data, dict):
        raise MalformedResponse("Rate provider returned a non-object JSON body")
    result = data.get("result")
    if result == "error":
        raise provider_error(data)
    if result != "success":
        raise MalformedResponse(f"Unexpected result field in provider response: {result!r}")
    base_code = data.get("base_code")
    if base_code is not None and str(base_code).upper() != base_currency.upper():
        raise MalformedResponse(
            f"Provider answered for base {base_code}, expected {base_currency}"
        )
    raw = data.get("conversion_rates")
    if not isinstance(raw, dict) or not raw:
        raise MalformedResponse("Provider response has no conversion_rates mapping")
    rates: Dict[str, float] = {}
    for code, value in raw.items():
        if (
            not isinstance(code, str)
            or isinstance(value, bool)
            or not isinstance(value, (int, float))
        ):
            raise MalformedResponse(f"Invalid rate entry {code!r}: {value!r}")
        value = float(value)
        if not math.isfinite(value) or value < 0:
            raise MalformedResponse(f"Invalid rate entry {code!r}: {value!r}")
        rates[code.upper()] = value
    return rates


class ExternalHTTPRateProvider(RateProvider):
    """exchangerate-api.com v6 'latest' endpoint keyed by an API key."""

    name = "external-http"

    def __init__(self, api_key: Optional[str], base_url: str, timeout: float = 10.0):
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    def _url(self, base_currency: str, key: str) -> str:
        return f"{self._base_url}/{key}/latest/{base_currency.upper()}"

    def fetch_rates(self, base_currency: str) -> Dict[str, float]:  # type: ignore[override]
        if not self._api_key:
            raise MissingCredential(
                "Exchange rate API key not configured. Set EXCHANGE_RATE_API_KEY in the environment or .env file."
            )
        logger.debug("fetching rates, api key %s", mask_secret(self._api_key))
        try:
            data = get_json(
                self._url(base_currency, self._api_key),
                timeout=self._timeout,
                log_url=self._url(base_currency, "***"),
            )
        except InvalidJsonError as e:
            raise MalformedResponse(str(e)) from e
        except HttpError as e:
            # exchangerate-api reports key/quota problems with 4xx + JSON body
            if isinstance(e.payload, dict) and e.payload.get("result") == "error":
                raise provider_error(e.payload) from e
            raise TransportFailure(f"Failed to load exchange rates: {e}") from e
        return parse_latest_payload(data, base_currency)


_PROVIDER_REGISTRY = {
    "static": lambda settings: StaticRateProvider(),
    "external-http": lambda settings: ExternalHTTPRateProvider(
        api_key=settings.exchange_rate_api_key,
        base_url=settings.exchange_api_base_url,
        timeout=settings.http_timeout_seconds,
    ),
}


def make_rate_provider(settings: Settings) -> RateProvider:
    factory = _PROVIDER_REGISTRY.get(settings.exchange_rate_provider)
    if not factory:
        raise ValueError(f"Unknown rate provider kind '{settings.exchange_rate_provider}'")
    return factory(settings)
