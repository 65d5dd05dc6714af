"""Sale record repository adapters for the development catalog service."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path
from typing import Iterable, Protocol

from pydantic import ValidationError

from shared.models import ALL_MONTHS, Record


logger = logging.getLogger(__name__)


class SalesRepository(Protocol):
    def filter_records(self, *, month: int, search: str = "") -> list[Record]:
        """Return records of `month` (0 = all) whose title or description contains `search`."""


def _record(
    record_id: str,
    title: str,
    description: str,
    category: str,
    price: str,
    sold: bool,
    date_of_sale: str,
) -> Record:
    return Record(
        id=record_id,
        title=title,
        description=description,
        category=category,
        price=Decimal(price),
        sold=sold,
        image_ref=f"https://images.example.com/{record_id}.jpg",
        date_of_sale=datetime.fromisoformat(date_of_sale).replace(tzinfo=timezone.utc),
    )


_SEED_RECORDS: tuple[Record, ...] = (
    _record("1", "Fjallraven Foldsack Backpack", "Fits 15 inch laptops", "men's clothing", "109.95", False, "2021-03-27T20:29:54"),
    _record("2", "Mens Casual Premium Slim Fit T-Shirts", "Slim-fitting style, contrast raglan sleeve", "men's clothing", "22.30", True, "2021-03-27T20:29:54"),
    _record("3", "Mens Cotton Jacket", "Great outerwear jacket for spring, autumn and winter", "men's clothing", "55.99", True, "2021-04-27T20:29:54"),
    _record("4", "Solid Gold Petite Micropave", "Satisfaction guaranteed, return or exchange within 30 days", "jewelery", "168.00", False, "2021-03-27T20:29:54"),
    _record("5", "WD 2TB Elements Portable External Hard Drive", "USB 3.0 and USB 2.0 compatibility", "electronics", "64.00", True, "2022-03-10T20:29:54"),
    _record("6", "Samsung 49-Inch Gaming Monitor", "49 inch super ultrawide 32:9 curved gaming monitor", "electronics", "999.99", True, "2021-11-27T20:29:54"),
    _record("7", "Rain Jacket Women Windbreaker", "Lightweight, hooded, striped lining", "women's clothing", "39.99", False, "2021-03-02T20:29:54"),
    _record("8", "Acer SB220Q 21.5 inch Full HD Monitor", "IPS display, ultra-thin zero frame design", "electronics", "599.00", False, "2022-07-27T20:29:54"),
)


class InMemorySalesRepository:
    """In-memory sale records, in insertion order."""

    def __init__(self, records: Iterable[Record] | None = None) -> None:
        self._records: list[Record] = list(_SEED_RECORDS if records is None else records)

    @classmethod
    def from_json_file(cls, path: str | Path) -> InMemorySalesRepository:
        """Load records stored in the wire format (`_id`, `image`, `dateOfSale`, ...)."""

        raw_rows = json.loads(Path(path).read_text(encoding="utf-8"))
        if not isinstance(raw_rows, list):
            raise ValueError(f"Seed file {path} must contain a JSON array")

        records: list[Record] = []
        for index, raw_row in enumerate(raw_rows):
            try:
                records.append(Record.model_validate(raw_row))
            except ValidationError as exc:
                raise ValueError(f"Invalid seed record at index {index} in {path}") from exc
        logger.info("sales_seed_loaded path=%s count=%s", path, len(records))
        return cls(records)

    def filter_records(self, *, month: int, search: str = "") -> list[Record]:
        rows = list(self._records)
        if month != ALL_MONTHS:
            rows = [
                row
                for row in rows
                if row.date_of_sale is not None and row.date_of_sale.month == month
            ]
        if search:
            needle = search.lower()
            rows = [
                row
                for row in rows
                if needle in row.title.lower() or needle in row.description.lower()
            ]
        return rows
