"""Rate table, providers and conversion engine."""

from .base import (
    MalformedResponse,
    MissingCredential,
    ProviderError,
    RateProvider,
    RateRefreshError,
    TransportFailure,
)
from .conversion import ConversionRequest, ConversionResult, convert, parse_amount
from .manager import RateState, RateTableManager, RefreshStatus
from .table import RateTable

__all__ = [
    "MalformedResponse",
    "MissingCredential",
    "ProviderError",
    "RateProvider",
    "RateRefreshError",
    "TransportFailure",
    "ConversionRequest",
    "ConversionResult",
    "convert",
    "parse_amount",
    "RateState",
    "RateTableManager",
    "RefreshStatus",
    "RateTable",
]
