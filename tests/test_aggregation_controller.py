"""Tests for the statistics controller."""

from __future__ import annotations

import asyncio
from decimal import Decimal

import pytest

from client.aggregation_controller import StatisticsController
from client.errors import TransportError
from tests.fakes import ScriptedCatalogGateway, drain, make_snapshot


def test_start_fetches_default_month() -> None:
    async def scenario() -> None:
        gateway = ScriptedCatalogGateway()
        controller = StatisticsController(gateway)

        assert controller.month == 3
        assert controller.snapshot is None

        controller.start()
        assert gateway.months == [3]
        assert controller.view().is_loading is True

        gateway.statistics_calls[0].resolve(make_snapshot("120.50", sold=2, not_sold=1))
        await controller.wait_idle()

        assert controller.snapshot.total_sale_amount == Decimal("120.50")
        assert controller.snapshot.total_sold_items == 2
        assert controller.view().is_loading is False

    asyncio.run(scenario())


def test_set_month_fetches_immediately() -> None:
    async def scenario() -> None:
        gateway = ScriptedCatalogGateway()
        controller = StatisticsController(gateway)

        controller.set_month(0)
        controller.set_month(11)

        assert gateway.months == [0, 11]
        assert controller.month == 11
        for call in gateway.statistics_calls:
            call.resolve(make_snapshot())
        await controller.wait_idle()

    asyncio.run(scenario())


def test_rapid_month_changes_apply_only_latest_snapshot() -> None:
    async def scenario() -> None:
        gateway = ScriptedCatalogGateway()
        controller = StatisticsController(gateway)

        controller.set_month(1)
        controller.set_month(2)
        january, february = gateway.statistics_calls

        february.resolve(make_snapshot("20"))
        await drain()
        january.resolve(make_snapshot("10"))
        await controller.wait_idle()

        assert controller.snapshot.total_sale_amount == Decimal("20")

    asyncio.run(scenario())


def test_failure_keeps_previous_snapshot() -> None:
    async def scenario() -> None:
        gateway = ScriptedCatalogGateway()
        controller = StatisticsController(gateway)
        controller.start()
        gateway.statistics_calls[0].resolve(make_snapshot("5", sold=1))
        await controller.wait_idle()
        previous = controller.snapshot

        controller.set_month(4)
        gateway.statistics_calls[1].fail(TransportError("unreachable"))
        await controller.wait_idle()

        assert controller.snapshot is previous
        assert controller.is_loading is False
        assert controller.view().last_error == "unreachable"
        assert controller.view().month == 4

    asyncio.run(scenario())


@pytest.mark.parametrize("month", [-1, 13, True, "3"])
def test_invalid_month_is_rejected(month) -> None:
    async def scenario() -> None:
        gateway = ScriptedCatalogGateway()
        controller = StatisticsController(gateway)

        with pytest.raises(ValueError):
            controller.set_month(month)

        assert controller.month == 3
        assert gateway.statistics_calls == []

    asyncio.run(scenario())
