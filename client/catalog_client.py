"""HTTP adapter for the catalog query and aggregation endpoints."""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any, Protocol
from urllib.error import HTTPError, URLError
from urllib.parse import urlencode
from urllib.request import Request, urlopen

from pydantic import ValidationError

from client.errors import DecodeError, TransportError
from shared.config import DEFAULT_FETCH_TIMEOUT_SECONDS
from shared.models import AggregationSnapshot, PageResult, TransactionsQuery


logger = logging.getLogger(__name__)


class CatalogGateway(Protocol):
    async def fetch_transactions(self, query: TransactionsQuery) -> PageResult:
        """Return one page of records matching `query`."""

    async def fetch_statistics(self, month: int) -> AggregationSnapshot:
        """Return the aggregation snapshot for `month` (0 means all months)."""


@dataclass(slots=True)
class CatalogClient:
    base_url: str
    timeout_seconds: float = DEFAULT_FETCH_TIMEOUT_SECONDS

    async def fetch_transactions(self, query: TransactionsQuery) -> PageResult:
        payload = await asyncio.to_thread(self.get_json, "/transactions", query.as_params())
        return self._validate(PageResult, payload, path="/transactions")

    async def fetch_statistics(self, month: int) -> AggregationSnapshot:
        payload = await asyncio.to_thread(self.get_json, "/stats", {"month": month})
        return self._validate(AggregationSnapshot, payload, path="/stats")

    def build_url(self, path: str, params: dict[str, str | int]) -> str:
        return f"{self.base_url.rstrip('/')}{path}?{urlencode(params)}"

    def get_json(self, path: str, params: dict[str, str | int]) -> Any:
        """Issue a blocking GET and decode the JSON body."""

        url = self.build_url(path, params)
        request = Request(url=url, headers={"Accept": "application/json"}, method="GET")
        try:
            with urlopen(request, timeout=self.timeout_seconds) as response:  # noqa: S310 - URL comes from trusted env config
                raw_body = response.read()
        except HTTPError as exc:
            body = exc.read().decode("utf-8", errors="replace")[:500]
            raise TransportError(
                f"Catalog request failed with status {exc.code}: {body}",
                status_code=exc.code,
            ) from exc
        except URLError as exc:
            raise TransportError(f"Catalog endpoint unreachable: {exc.reason}") from exc
        except TimeoutError as exc:
            raise TransportError(f"Catalog request timed out after {self.timeout_seconds}s") from exc
        except OSError as exc:
            raise TransportError(f"Catalog request failed: {exc}") from exc

        try:
            return json.loads(raw_body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise DecodeError(f"Catalog response from {path} is not valid JSON") from exc

    @staticmethod
    def _validate(model: type[Any], payload: Any, *, path: str) -> Any:
        if not isinstance(payload, dict):
            raise DecodeError(f"Catalog response from {path} must be a JSON object")
        try:
            return model.model_validate(payload)
        except ValidationError as exc:
            logger.debug("catalog_payload_invalid path=%s errors=%s", path, exc.errors())
            raise DecodeError(f"Catalog response from {path} does not match {model.__name__}") from exc
