"""Statistics view controller keyed on a single month filter."""

from __future__ import annotations

from client.catalog_client import CatalogGateway
from client.sequencing import SequencedController
from shared.config import DEFAULT_FETCH_TIMEOUT_SECONDS, DEFAULT_MONTH
from shared.models import ALL_MONTHS, AggregationSnapshot, StatisticsView


class StatisticsController(SequencedController):
    """Fetch aggregation snapshots for the selected month; latest request wins."""

    name = "statistics"

    def __init__(
        self,
        gateway: CatalogGateway,
        *,
        month: int = DEFAULT_MONTH,
        fetch_timeout_seconds: float = DEFAULT_FETCH_TIMEOUT_SECONDS,
    ) -> None:
        super().__init__(fetch_timeout_seconds=fetch_timeout_seconds)
        self._gateway = gateway
        self._month = self._validate_month(month)
        self._snapshot: AggregationSnapshot | None = None

    @property
    def month(self) -> int:
        return self._month

    @property
    def snapshot(self) -> AggregationSnapshot | None:
        return self._snapshot

    def view(self) -> StatisticsView:
        return StatisticsView(
            month=self._month,
            snapshot=self._snapshot,
            is_loading=self.is_loading,
            last_error=self.last_error,
        )

    def start(self) -> int:
        return self._issue_fetch()

    def set_month(self, month: int) -> int:
        self._month = self._validate_month(month)
        return self._issue_fetch()

    def refresh(self) -> int:
        return self._issue_fetch()

    @staticmethod
    def _validate_month(month: int) -> int:
        if isinstance(month, bool) or not isinstance(month, int) or not ALL_MONTHS <= month <= 12:
            raise ValueError(f"month must be an integer between 0 and 12, got {month!r}")
        return month

    def _issue_fetch(self) -> int:
        month = self._month
        return self._issue(
            lambda: self._gateway.fetch_statistics(month),
            self._apply,
            description=f"month={month}",
        )

    def _apply(self, snapshot: AggregationSnapshot) -> None:
        self._snapshot = snapshot
