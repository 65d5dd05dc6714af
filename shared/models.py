"""Pydantic contracts shared across the catalog client and the development service."""

from __future__ import annotations

import calendar
import math
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from shared.config import PAGE_SIZE_OPTIONS


ALL_MONTHS = 0

MONTH_OPTIONS: tuple[tuple[int, str], ...] = ((ALL_MONTHS, "All"),) + tuple(
    (month, calendar.month_name[month]) for month in range(1, 13)
)


def month_label(month: int) -> str:
    """Return the display label for a month filter value."""
    if not 0 <= month <= 12:
        raise ValueError(f"month must be between 0 and 12, got {month}")
    return MONTH_OPTIONS[month][1]


def compute_total_pages(total_count: int, page_size: int) -> int:
    """Return the number of pages for a total, never less than one."""
    if page_size < 1:
        raise ValueError(f"page_size must be positive, got {page_size}")
    return max(1, math.ceil(total_count / page_size))


class FilterState(BaseModel):
    """Filters driving a transactions query."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    search_text: str = ""
    month: int = Field(default=3, ge=0, le=12, strict=True)
    page: int = Field(default=1, ge=1, strict=True)
    page_size: int = Field(default=10, strict=True)

    @field_validator("page_size")
    @classmethod
    def validate_page_size(cls, value: int) -> int:
        if value not in PAGE_SIZE_OPTIONS:
            allowed = ", ".join(str(option) for option in PAGE_SIZE_OPTIONS)
            raise ValueError(f"page_size must be one of {allowed}")
        return value

    def to_query(self) -> TransactionsQuery:
        return TransactionsQuery(
            search=self.search_text,
            month=self.month,
            page=self.page,
            limit=self.page_size,
        )


class TransactionsQuery(BaseModel):
    """Outbound parameters of the transactions query interface."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    search: str = ""
    month: int = Field(default=0, ge=0, le=12)
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1)

    def as_params(self) -> dict[str, str | int]:
        return {
            "search": self.search,
            "month": self.month,
            "page": self.page,
            "limit": self.limit,
        }


class Record(BaseModel):
    """A single sale record as served by the catalog."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    id: str = Field(alias="_id")
    title: str
    description: str = ""
    category: str
    price: Decimal
    sold: bool
    image_ref: str = Field(default="", alias="image")
    date_of_sale: datetime | None = Field(default=None, alias="dateOfSale")

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value: object) -> object:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class PageResult(BaseModel):
    """One page of records plus the total matching the filters."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    records: tuple[Record, ...] = Field(default=(), alias="transactions")
    total_count: int = Field(default=0, ge=0, alias="totalCount")

    def total_pages(self, page_size: int) -> int:
        return compute_total_pages(self.total_count, page_size)


class CategoryCount(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    category: str
    count: int = Field(ge=0)


class PriceRangeCount(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    range: str
    count: int = Field(ge=0)


class AggregationSnapshot(BaseModel):
    """Precomputed statistics for a month filter."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    total_sale_amount: Decimal = Field(alias="totalSaleAmount")
    total_sold_items: int = Field(ge=0, alias="totalSoldItems")
    total_not_sold_items: int = Field(ge=0, alias="totalNotSoldItems")
    category_statistics: tuple[CategoryCount, ...] = Field(default=(), alias="categoryStatistics")
    price_range_statistics: tuple[PriceRangeCount, ...] = Field(default=(), alias="priceRangeStatistics")


class TransactionsView(BaseModel):
    """Read-only state handed to transactions listeners."""

    model_config = ConfigDict(frozen=True)

    filters: FilterState
    result: PageResult | None = None
    total_pages: int = 1
    is_loading: bool = False
    last_error: str | None = None


class StatisticsView(BaseModel):
    """Read-only state handed to statistics listeners."""

    model_config = ConfigDict(frozen=True)

    month: int
    snapshot: AggregationSnapshot | None = None
    is_loading: bool = False
    last_error: str | None = None
