"""Composition root for the development catalog service."""

from __future__ import annotations

from dataclasses import dataclass

from backend.repositories.sales_repository import InMemorySalesRepository, SalesRepository
from backend.services.statistics_service import StatisticsService
from backend.services.transaction_service import TransactionService
from shared import config


@dataclass(slots=True)
class CatalogServices:
    transaction_service: TransactionService
    statistics_service: StatisticsService


def build_sales_repository() -> SalesRepository:
    """Load the JSON seed when `CATALOG_SEED_PATH` is set, else use the built-in rows."""

    seed_path = config.catalog_seed_path()
    if seed_path:
        return InMemorySalesRepository.from_json_file(seed_path)
    return InMemorySalesRepository()


def build_catalog_services(repository: SalesRepository | None = None) -> CatalogServices:
    repository = repository if repository is not None else build_sales_repository()
    return CatalogServices(
        transaction_service=TransactionService(repository=repository),
        statistics_service=StatisticsService(repository=repository),
    )
