"""Holder of the latest successfully fetched page of records."""

from __future__ import annotations

from typing import Iterable

from shared.models import PageResult, Record, compute_total_pages


class ResultStore:
    """Passive snapshot holder; only the transactions controller writes to it."""

    def __init__(self) -> None:
        self._result: PageResult | None = None

    @property
    def result(self) -> PageResult | None:
        return self._result

    @property
    def records(self) -> tuple[Record, ...]:
        return self._result.records if self._result is not None else ()

    @property
    def total_count(self) -> int:
        return self._result.total_count if self._result is not None else 0

    @property
    def is_empty(self) -> bool:
        """True only when a fetch succeeded and matched nothing."""
        return self._result is not None and not self._result.records

    def replace(self, records: Iterable[Record], total_count: int) -> PageResult:
        self._result = PageResult(records=tuple(records), total_count=total_count)
        return self._result

    def total_pages(self, page_size: int) -> int:
        return compute_total_pages(self.total_count, page_size)
