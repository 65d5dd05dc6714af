"""Monthly sales statistics computed over the sales repository."""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal

from backend.repositories.sales_repository import SalesRepository
from shared.models import AggregationSnapshot, CategoryCount, PriceRangeCount


PRICE_BUCKET_WIDTH = 100
PRICE_BUCKET_COUNT = 10


def price_range_labels() -> list[str]:
    labels = ["0-100"]
    for index in range(1, PRICE_BUCKET_COUNT - 1):
        lower = index * PRICE_BUCKET_WIDTH + 1
        labels.append(f"{lower}-{lower + PRICE_BUCKET_WIDTH - 1}")
    labels.append(f"{(PRICE_BUCKET_COUNT - 1) * PRICE_BUCKET_WIDTH + 1}-above")
    return labels


def price_bucket_index(price: Decimal) -> int:
    """Return the bucket of `price`; upper bounds are inclusive (100 -> 0-100, 100.01 -> 101-200)."""
    if price <= PRICE_BUCKET_WIDTH:
        return 0
    index = math.ceil(price / PRICE_BUCKET_WIDTH) - 1
    return min(index, PRICE_BUCKET_COUNT - 1)


@dataclass(slots=True)
class StatisticsService:
    repository: SalesRepository

    def monthly_statistics(self, month: int) -> AggregationSnapshot:
        rows = self.repository.filter_records(month=month)

        sold_rows = [row for row in rows if row.sold]
        total_sale_amount = sum((row.price for row in sold_rows), Decimal("0"))

        category_counts: dict[str, int] = {}
        for row in rows:
            category_counts[row.category] = category_counts.get(row.category, 0) + 1

        bucket_counts = [0] * PRICE_BUCKET_COUNT
        for row in rows:
            bucket_counts[price_bucket_index(row.price)] += 1

        return AggregationSnapshot(
            total_sale_amount=total_sale_amount,
            total_sold_items=len(sold_rows),
            total_not_sold_items=len(rows) - len(sold_rows),
            category_statistics=tuple(
                CategoryCount(category=category, count=count)
                for category, count in category_counts.items()
            ),
            price_range_statistics=tuple(
                PriceRangeCount(range=label, count=count)
                for label, count in zip(price_range_labels(), bucket_counts)
            ),
        )
