"""Fetch executor: runs one search, tracks busy/error state, drops stale responses.

Every dispatched fetch gets a sequence number. Only the response of the most
recently dispatched fetch is handed back; anything older is discarded when it
arrives, whether it succeeded or failed. Outstanding fetches are never
cancelled, and a superseded fetch that is still running does not hold the
busy flag.
"""

import logging
from enum import Enum
from typing import Any, Generic, NamedTuple

from src.core.errors import TransportFailure
from src.core.schemas import Page
from src.services.base import E, F, SearchService
from src.services.notifier import Notifier

logger = logging.getLogger(__name__)

DEFAULT_FALLBACK_MESSAGE = "Có lỗi xảy ra"


class FetchOutcome(str, Enum):
    APPLIED = "applied"
    FAILED = "failed"
    STALE = "stale"


class FetchResult(NamedTuple):
    """What one ``execute`` call produced. ``page`` is set only when applied."""

    outcome: FetchOutcome
    page: Page[Any] | None = None


class FetchExecutor(Generic[E, F]):
    """Calls a SearchService and recovers every TransportFailure locally.

    Usage::

        executor = FetchExecutor(service, notifier)
        result = await executor.execute(filters)
        if result.outcome is FetchOutcome.APPLIED:
            show(result.page)
    """

    def __init__(
        self,
        service: SearchService[E, F],
        notifier: Notifier,
        fallback_message: str = DEFAULT_FALLBACK_MESSAGE,
    ) -> None:
        self._service = service
        self._notifier = notifier
        self._fallback_message = fallback_message
        self._latest_seq = 0
        self._pending_seq: int | None = None
        self._error: str | None = None

    @property
    def loading(self) -> bool:
        """Busy flag: true while the latest dispatched fetch is outstanding."""
        return self._pending_seq is not None

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def latest_seq(self) -> int:
        return self._latest_seq

    async def execute(self, filters: F) -> FetchResult:
        """Run one fetch and report whether it applied, failed or went stale."""
        self._latest_seq += 1
        seq = self._latest_seq
        self._pending_seq = seq
        self._error = None
        logger.info("Fetch #%d on %s: page %d", seq, self._service.service_id, filters.page)

        try:
            page = await self._service.search(filters)
        except TransportFailure as e:
            if seq != self._latest_seq:
                logger.debug("Discarding failure of superseded fetch #%d", seq)
                return FetchResult(FetchOutcome.STALE)
            message = e.message or self._fallback_message
            self._error = message
            logger.warning("Fetch #%d failed (status=%s): %s", seq, e.status, message)
            self._notifier.notify(message)
            return FetchResult(FetchOutcome.FAILED)
        finally:
            if self._pending_seq == seq:
                self._pending_seq = None

        if seq != self._latest_seq:
            logger.debug(
                "Discarding superseded fetch #%d (latest is #%d)", seq, self._latest_seq,
            )
            return FetchResult(FetchOutcome.STALE)
        return FetchResult(FetchOutcome.APPLIED, page)
