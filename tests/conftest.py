import pytest
from fastapi.testclient import TestClient

from mmk_converter.core.config import Settings
from mmk_converter.main import create_app
from mmk_converter.services.rates.table import RateTable

from fakes import FakeProvider, SAMPLE_RATES, make_settings


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider(dict(SAMPLE_RATES))


@pytest.fixture
def app(settings, provider):
    return create_app(settings_override=settings, provider_override=provider)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def table() -> RateTable:
    return RateTable({"MMK": 1.0, "CNY": 0.0034, "USD": 0.00048, "JPY": 0.0}, "MMK")
