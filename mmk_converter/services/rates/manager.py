from __future__ import annotations

import asyncio
import enum
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable, Optional

from fastapi import Request
from starlette.concurrency import run_in_threadpool

from mmk_converter.models.constants import CURRENCY_CODES
from .base import MalformedResponse, RateProvider, RateRefreshError, TransportFailure
from .table import RateTable

"""Rate table manager.

Purpose:
    Own the single RateTable + refresh status pair for the process and be
    the only writer of it. Everything else reads immutable snapshots.

Design:
    - ``refresh()`` makes exactly one provider call, run in the threadpool so
      the event loop keeps serving conversions from the previous table.
    - Successful responses replace the table wholesale; failures leave it
      untouched and flip status to ERROR with a readable message.
    - Each refresh takes a sequence number. A response is applied only when
      it belongs to the latest refresh issued; older ones are dropped.
    - ``start()`` fires the one automatic refresh. There is no retry.
"""

logger = logging.getLogger("mmk_converter.rates.manager")


class RefreshStatus(str, enum.Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


@dataclass(frozen=True)
class RateState:
    table: RateTable
    status: RefreshStatus
    last_updated_at: Optional[datetime] = None
    error_kind: Optional[str] = None
    error_message: Optional[str] = None

    @property
    def stale(self) -> bool:
        """True when the served table is not the result of a finished refresh."""
        return self.status is not RefreshStatus.READY


class RateTableManager:
    def __init__(
        self,
        provider: RateProvider,
        base_currency: str,
        codes: Iterable[str] = CURRENCY_CODES,
    ):
        self._provider = provider
        self._base = base_currency.upper()
        self._table = RateTable.initial(self._base, codes)
        self._status = RefreshStatus.IDLE
        self._last_updated_at: Optional[datetime] = None
        self._error: Optional[RateRefreshError] = None
        self._seq = 0
        self._startup_task: Optional[asyncio.Task] = None

    @property
    def base_currency(self) -> str:
        return self._base

    @property
    def table(self) -> RateTable:
        return self._table

    @property
    def status(self) -> RefreshStatus:
        return self._status

    def snapshot(self) -> RateState:
        return RateState(
            table=self._table,
            status=self._status,
            last_updated_at=self._last_updated_at,
            error_kind=self._error.kind if self._error else None,
            error_message=self._error.message if self._error else None,
        )

    # Refresh ---------------------------------------------------
    async def refresh(self) -> RateState:
        self._seq += 1
        seq = self._seq
        self._status = RefreshStatus.LOADING
        logger.info("rate refresh #%d started (provider=%s, base=%s)", seq, self._provider.name, self._base)
        try:
            rates = await run_in_threadpool(self._provider.fetch_rates, self._base)
        except RateRefreshError as e:
            self._apply_failure(seq, e)
            return self.snapshot()
        except Exception as e:
            # nothing escapes the manager; status must leave LOADING
            logger.exception("rate refresh #%d raised unexpectedly", seq)
            self._apply_failure(
                seq, TransportFailure(f"Failed to load exchange rates: {type(e).__name__}: {e}")
            )
            return self.snapshot()
        try:
            table = RateTable(rates, self._base)
        except (TypeError, ValueError, AttributeError) as e:
            # provider handed back a mapping RateTable rejects
            self._apply_failure(seq, MalformedResponse(str(e)))
        else:
            self._apply_success(seq, table)
        return self.snapshot()

    def _is_latest(self, seq: int) -> bool:
        if seq != self._seq:
            logger.info("discarding stale rate response #%d (latest is #%d)", seq, self._seq)
            return False
        return True

    def _apply_success(self, seq: int, table: RateTable) -> None:
        if not self._is_latest(seq):
            return
        self._table = table
        self._status = RefreshStatus.READY
        self._last_updated_at = datetime.now(timezone.utc)
        self._error = None
        logger.info("rate refresh #%d succeeded: %d currencies", seq, len(table))

    def _apply_failure(self, seq: int, error: RateRefreshError) -> None:
        if not self._is_latest(seq):
            return
        self._status = RefreshStatus.ERROR
        self._error = error
        logger.warning("rate refresh #%d failed (%s): %s", seq, error.kind, error.message)

    # Lifecycle -------------------------------------------------
    def start(self) -> Optional[asyncio.Task]:
        """Kick off the automatic refresh; later calls do nothing."""
        if self._startup_task is not None:
            return None
        self._status = RefreshStatus.LOADING
        self._startup_task = asyncio.create_task(self.refresh())
        return self._startup_task

    async def wait_started(self) -> None:
        if self._startup_task is not None:
            await self._startup_task


# Dependency helper used by FastAPI DI
def get_rate_manager(request: Request) -> RateTableManager:
    return request.app.state.rate_manager
