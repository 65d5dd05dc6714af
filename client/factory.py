"""Composition root for the catalog client controllers."""

from __future__ import annotations

from dataclasses import dataclass

from client.aggregation_controller import StatisticsController
from client.catalog_client import CatalogClient, CatalogGateway
from client.query_controller import TransactionsController
from client.scheduling import Scheduler
from shared import config


@dataclass(slots=True)
class CatalogControllers:
    transactions: TransactionsController
    statistics: StatisticsController

    def start(self) -> None:
        self.transactions.start()
        self.statistics.start()

    async def wait_idle(self) -> None:
        await self.transactions.wait_idle()
        await self.statistics.wait_idle()

    def close(self) -> None:
        self.transactions.close()
        self.statistics.close()


def build_catalog_client() -> CatalogClient:
    return CatalogClient(
        base_url=config.catalog_backend_url(),
        timeout_seconds=config.fetch_timeout_seconds(),
    )


def build_controllers(
    gateway: CatalogGateway | None = None,
    *,
    scheduler: Scheduler | None = None,
) -> CatalogControllers:
    """Build both controllers over one gateway using environment configuration.

    The HTTP `CatalogClient` is used when no gateway is given.
    """

    gateway = gateway if gateway is not None else build_catalog_client()
    timeout_seconds = config.fetch_timeout_seconds()
    month = config.default_month()

    return CatalogControllers(
        transactions=TransactionsController(
            gateway,
            month=month,
            page_size=config.default_page_size(),
            search_debounce_ms=config.search_debounce_ms(),
            fetch_timeout_seconds=timeout_seconds,
            scheduler=scheduler,
        ),
        statistics=StatisticsController(
            gateway,
            month=month,
            fetch_timeout_seconds=timeout_seconds,
        ),
    )
