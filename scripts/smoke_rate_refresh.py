"""Smoke script for the rate table refresh lifecycle.

Demonstrates:
 1. Fresh manager serves the unloaded table (every quote at the 0 sentinel).
 2. A refresh against the configured provider fills the table (or records an error).
 3. Conversions read the table that is current at call time.

Uses the real provider from settings, so with EXCHANGE_RATE_PROVIDER=external-http
it needs EXCHANGE_RATE_API_KEY and network access.

NOTE: This is a lightweight diagnostic and not a formal test.
"""

import asyncio
from pprint import pprint

from mmk_converter.core.config import get_settings
from mmk_converter.services.money import format_amount
from mmk_converter.services.rates.conversion import convert
from mmk_converter.services.rates.manager import RateTableManager
from mmk_converter.services.rates.providers import make_rate_provider


async def run():
    settings = get_settings()
    manager = RateTableManager(make_rate_provider(settings), settings.base_currency)
    out = {"before": {}, "refresh": {}, "after": {}}

    out["before"] = {
        "status": manager.status.value,
        "1000 MMK -> USD": format_amount(convert(manager.table, 1000, "MMK", "USD").converted),
    }

    state = await manager.refresh()
    out["refresh"] = {
        "status": state.status.value,
        "last_updated_at": state.last_updated_at.isoformat() if state.last_updated_at else None,
        "error": state.error_message,
        "currencies": len(state.table),
    }

    for src, dst, amount in (("MMK", "USD", 1000), ("USD", "MMK", 100), ("CNY", "USD", 100)):
        result = convert(state.table, amount, src, dst)
        out["after"][f"{amount} {src} -> {dst}"] = format_amount(result.converted)

    pprint(out)


if __name__ == "__main__":
    asyncio.run(run())
