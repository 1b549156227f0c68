from __future__ import annotations

"""Rate provider abstraction and the refresh error taxonomy.

Every failure a provider can hit while fetching a rate table is reported as
one of the ``RateRefreshError`` subclasses below. They are caught at the
RateTableManager boundary and never reach presentation code.
"""
from abc import ABC, abstractmethod
from typing import Dict


class RateRefreshError(Exception):
    kind: str = "refresh_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingCredential(RateRefreshError):
    kind = "missing_credential"


class TransportFailure(RateRefreshError):
    kind = "transport_failure"


class ProviderError(RateRefreshError):
    kind = "provider_error"


class MalformedResponse(RateRefreshError):
    kind = "malformed_response"


class RateProvider(ABC):
    name: str = "abstract"

    @abstractmethod
    def fetch_rates(self, base_currency: str) -> Dict[str, float]:
        """Return units of each currency per 1 unit of base_currency.

        Blocking; raises a RateRefreshError subclass on failure.
        """
        raise NotImplementedError
