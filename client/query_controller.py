"""Transactions view controller: filters, pagination and debounced search."""

from __future__ import annotations

import logging
from typing import Any

from client.catalog_client import CatalogGateway
from client.result_store import ResultStore
from client.scheduling import Debouncer, Scheduler
from client.sequencing import SequencedController
from shared.config import (
    DEFAULT_FETCH_TIMEOUT_SECONDS,
    DEFAULT_MONTH,
    DEFAULT_PAGE_SIZE,
    DEFAULT_SEARCH_DEBOUNCE_MS,
)
from shared.models import FilterState, PageResult, TransactionsView


logger = logging.getLogger(__name__)


class TransactionsController(SequencedController):
    """Keep the displayed page of records consistent with the current filters.

    Month, page size and page changes fetch immediately. Search text changes
    are debounced: only the last keystroke of a burst leads to a fetch, once
    the text has been quiet for the configured period. Any change other than
    page navigation resets the page to 1 before the next fetch is issued.
    """

    name = "transactions"

    def __init__(
        self,
        gateway: CatalogGateway,
        *,
        store: ResultStore | None = None,
        month: int = DEFAULT_MONTH,
        page_size: int = DEFAULT_PAGE_SIZE,
        search_debounce_ms: int = DEFAULT_SEARCH_DEBOUNCE_MS,
        fetch_timeout_seconds: float = DEFAULT_FETCH_TIMEOUT_SECONDS,
        scheduler: Scheduler | None = None,
    ) -> None:
        super().__init__(fetch_timeout_seconds=fetch_timeout_seconds)
        self._gateway = gateway
        self._store = store if store is not None else ResultStore()
        self._filters = FilterState(month=month, page_size=page_size)
        self._search_debouncer = Debouncer(
            self._on_search_quiet,
            delay_seconds=search_debounce_ms / 1000,
            scheduler=scheduler,
        )

    @property
    def filters(self) -> FilterState:
        return self._filters

    @property
    def store(self) -> ResultStore:
        return self._store

    @property
    def result(self) -> PageResult | None:
        return self._store.result

    @property
    def total_pages(self) -> int:
        return self._store.total_pages(self._filters.page_size)

    @property
    def can_go_previous(self) -> bool:
        return self._filters.page > 1

    @property
    def can_go_next(self) -> bool:
        return self._filters.page < self.total_pages

    @property
    def search_pending(self) -> bool:
        return self._search_debouncer.pending

    def view(self) -> TransactionsView:
        return TransactionsView(
            filters=self._filters,
            result=self._store.result,
            total_pages=self.total_pages,
            is_loading=self.is_loading,
            last_error=self.last_error,
        )

    def start(self) -> int:
        """Fetch the first page for the initial filters."""
        return self._fetch_now()

    def set_search_text(self, text: str) -> None:
        filters = self._with(search_text=text, page=1)
        self._search_debouncer.trigger()
        self._filters = filters
        self._notify()

    def set_month(self, month: int) -> int:
        self._filters = self._with(month=month, page=1)
        return self._fetch_now()

    def set_page_size(self, page_size: int) -> int:
        self._filters = self._with(page_size=page_size, page=1)
        return self._fetch_now()

    def next_page(self) -> bool:
        if not self.can_go_next:
            logger.debug("next_page_ignored page=%s total_pages=%s", self._filters.page, self.total_pages)
            return False
        self._filters = self._with(page=self._filters.page + 1)
        self._fetch_now()
        return True

    def previous_page(self) -> bool:
        if not self.can_go_previous:
            logger.debug("previous_page_ignored page=%s", self._filters.page)
            return False
        self._filters = self._with(page=self._filters.page - 1)
        self._fetch_now()
        return True

    def refresh(self) -> int:
        """Re-fetch the current filters without moving the page."""
        return self._fetch_now()

    def close(self) -> None:
        self._search_debouncer.cancel()
        super().close()

    def _with(self, **changes: Any) -> FilterState:
        return FilterState(**{**self._filters.model_dump(), **changes})

    def _on_search_quiet(self) -> None:
        self._issue_fetch()

    def _fetch_now(self) -> int:
        # The snapshot taken below already carries the latest search text.
        self._search_debouncer.cancel()
        return self._issue_fetch()

    def _issue_fetch(self) -> int:
        query = self._filters.to_query()
        return self._issue(
            lambda: self._gateway.fetch_transactions(query),
            self._apply,
            description=(
                f"search={query.search!r} month={query.month} page={query.page} limit={query.limit}"
            ),
        )

    def _apply(self, result: PageResult) -> None:
        self._store.replace(result.records, result.total_count)
        total_pages = self.total_pages
        if self._filters.page > total_pages:
            logger.info("page_clamped page=%s total_pages=%s", self._filters.page, total_pages)
            self._filters = self._with(page=total_pages)
            self._issue_fetch()
