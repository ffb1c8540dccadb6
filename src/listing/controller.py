"""Generic list search controller.

Wires the filter store, fetch executor, result assembler and selection
tracker into one object that a presentation layer drives:

  1. A filter operation computes the new filter-set (FilterStore)
  2. Exactly one fetch is dispatched for it (FetchExecutor)
  3. On success the page replaces or extends the visible list (assemble)
  4. The selected entity is re-derived from the new list (SelectionTracker)

The controller knows nothing about entity-specific filter fields; those live
in the filter model and the thin subclasses in ``candidates``/``jobs``.
"""

import logging
from collections.abc import Callable, Mapping
from operator import attrgetter
from typing import Any, Generic

from src.core.filters import ListFilters
from src.core.schemas import PaginationMeta
from src.listing.assembler import FetchMode, assemble
from src.listing.executor import DEFAULT_FALLBACK_MESSAGE, FetchExecutor, FetchOutcome
from src.listing.filter_store import FilterStore
from src.listing.selection import SelectionTracker
from src.services.base import E, F, SearchService
from src.services.notifier import Notifier

logger = logging.getLogger(__name__)


class ListController(Generic[E, F]):
    """Owns filter state, the visible list, pagination and selection.

    Callers must treat every attribute as read-only and mutate only through
    the operations below. Each mutating operation dispatches exactly one
    fetch; debouncing free-text input is the caller's job.
    """

    def __init__(
        self,
        service: SearchService[E, F],
        notifier: Notifier,
        defaults: F,
        *,
        initial: Mapping[str, Any] | None = None,
        key: Callable[[E], str] = attrgetter("id"),
        fallback_message: str = DEFAULT_FALLBACK_MESSAGE,
        auto_load: bool = True,
    ) -> None:
        self._store: FilterStore[F] = FilterStore(defaults, initial)
        self._executor: FetchExecutor[E, F] = FetchExecutor(
            service, notifier, fallback_message,
        )
        self._selection: SelectionTracker[E] = SelectionTracker(key)
        self._items: list[E] = []
        self._pagination: PaginationMeta | None = None
        self._shown_filters: F | None = None
        self._auto_load = auto_load
        self._started = False

    # --- read-only state ---

    @property
    def items(self) -> list[E]:
        return list(self._items)

    @property
    def pagination(self) -> PaginationMeta | None:
        return self._pagination

    @property
    def filters(self) -> F:
        return self._store.current

    @property
    def loading(self) -> bool:
        return self._executor.loading

    @property
    def error(self) -> str | None:
        return self._executor.error

    @property
    def selected_id(self) -> str | None:
        return self._selection.selected_id

    @property
    def selected(self) -> E | None:
        return self._selection.resolve(self._items)

    @property
    def has_active_filters(self) -> bool:
        return self._store.current.has_active_filters

    @property
    def has_next_page(self) -> bool:
        return self._pagination.has_next_page if self._pagination is not None else False

    # --- operations ---

    async def start(self) -> None:
        """Initial load. Runs at most once per controller, however often called."""
        if self._started:
            return
        self._started = True
        if self._auto_load:
            await self._fetch(self._store.current, FetchMode.REPLACE)

    async def update_filters(self, **patch: Any) -> None:
        """Merge any subset of filter fields and reload from page 1."""
        await self._apply_filter_change(patch, reset_page=True)

    async def search(self, query: str, location: str | None = None) -> None:
        """Set the free-text query. ``location=None`` keeps the current location."""
        patch: dict[str, Any] = {"query": query}
        if location is not None:
            patch["location"] = location
        await self._apply_filter_change(patch, reset_page=True)

    async def change_sort(self, sort_by: str, sort_order: str) -> None:
        await self._apply_filter_change(
            {"sort_by": sort_by, "sort_order": sort_order}, reset_page=True,
        )

    async def reset_filters(self) -> None:
        await self._fetch(self._store.reset(), FetchMode.REPLACE)

    async def go_to_page(self, page: int) -> None:
        """Jump to ``page`` and show only that page's items."""
        await self._fetch(self._store.with_page(page), FetchMode.REPLACE)

    async def refetch(self) -> None:
        """Reload the current filter-set, e.g. after a failure."""
        await self._fetch(self._store.current, FetchMode.REPLACE)

    async def load_more(self) -> None:
        """Append the page after the last one shown. No-op without a next page or when busy.

        Also a no-op when the filters changed since the visible list was
        loaded (a failed search leaves the old list on screen); refetch first.
        If the fetch fails, the page number goes back to the last loaded page
        so the next attempt asks for the same page again.
        """
        if not self.has_next_page or self.loading:
            logger.debug(
                "load_more ignored (has_next_page=%s, loading=%s)",
                self.has_next_page, self.loading,
            )
            return
        shown = self._shown_filters
        if shown is None or not _same_query(shown, self._store.current):
            logger.debug("load_more ignored: filters changed since the list was loaded")
            return
        filters = self._store.with_page(shown.page + 1)
        outcome = await self._fetch(filters, FetchMode.APPEND)
        if outcome is FetchOutcome.FAILED and self._store.current == filters:
            self._store.with_page(shown.page)
            logger.debug("load_more failed; page rolled back to %d", shown.page)

    def select(self, selected_id: str | None) -> None:
        self._selection.select(selected_id)

    # --- internals ---

    async def _apply_filter_change(self, patch: Mapping[str, Any], *, reset_page: bool) -> None:
        filters = self._store.apply(patch, reset_page=reset_page)
        await self._fetch(filters, FetchMode.REPLACE)

    async def _fetch(self, filters: F, mode: FetchMode) -> FetchOutcome:
        """Dispatch one fetch and apply its page if it is still the latest."""
        result = await self._executor.execute(filters)
        page = result.page
        if page is None:
            return result.outcome
        self._items = assemble(self._items, page, mode)
        self._pagination = page.pagination
        self._shown_filters = filters
        logger.info(
            "%s page %d/%d: %d items visible (%d total)",
            mode.value.capitalize(),
            page.pagination.current_page,
            page.pagination.total_pages,
            len(self._items),
            page.pagination.total_items,
        )
        if self._selection.selected_id is not None and self.selected is None:
            logger.debug("Selected id %s not in current list", self._selection.selected_id)
        return result.outcome


def _same_query(a: ListFilters, b: ListFilters) -> bool:
    """True if two filter-sets differ at most in their page number."""
    return a.model_dump(exclude={"page"}) == b.model_dump(exclude={"page"})
