"""Transaction search service over the sales repository."""

from __future__ import annotations

from dataclasses import dataclass

from backend.repositories.sales_repository import SalesRepository
from shared.models import PageResult, TransactionsQuery


@dataclass(slots=True)
class TransactionService:
    """Offset/limit pagination over filtered sale records."""

    repository: SalesRepository

    def search_transactions(self, query: TransactionsQuery) -> PageResult:
        rows = self.repository.filter_records(month=query.month, search=query.search)
        offset = (query.page - 1) * query.limit
        return PageResult(records=tuple(rows[offset : offset + query.limit]), total_count=len(rows))
