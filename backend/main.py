"""FastAPI entrypoint for the development catalog service.

Serves the transactions and statistics endpoints consumed by the catalog
client. Run locally with `uvicorn backend.main:app --port 3000`.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Query
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.requests import Request
from fastapi.responses import JSONResponse

from backend.factory import CatalogServices, build_catalog_services
from shared import config as _config
from shared.models import TransactionsQuery


logger = logging.getLogger(__name__)


MAX_PAGE_LIMIT = 100


def _wire_payload(model: Any) -> Any:
    return jsonable_encoder(model.model_dump(by_alias=True))


def create_app(services: CatalogServices | None = None) -> FastAPI:
    """Build the catalog app over the given services (environment defaults otherwise)."""

    services = services if services is not None else build_catalog_services()
    app = FastAPI(title="Sales catalog")

    @app.middleware("http")
    async def log_http_requests(request: Request, call_next):
        """Log incoming requests, HTTP status codes and unexpected errors."""

        logger.info("http_request_received method=%s path=%s", request.method, request.url.path)
        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "http_request_failed method=%s path=%s",
                request.method,
                request.url.path,
            )
            raise

        logger.info(
            "http_response_sent method=%s path=%s status_code=%s",
            request.method,
            request.url.path,
            response.status_code,
        )
        return response

    allow_origins = _config.cors_allow_origins()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    logger.info("cors_allow_origins=%s", allow_origins)

    @app.exception_handler(Exception)
    async def handle_unexpected_exception(request: Request, exc: Exception) -> JSONResponse:
        """Return a JSON 500 response for unhandled exceptions."""

        logger.exception(
            "unhandled_exception method=%s path=%s exception_type=%s message=%s",
            request.method,
            request.url.path,
            type(exc).__name__,
            str(exc),
            exc_info=exc,
        )
        return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})

    @app.get("/health")
    def health() -> dict[str, str]:
        """Healthcheck endpoint."""

        return {"status": "ok"}

    @app.get("/transactions")
    def list_transactions(
        search: str = "",
        month: int = Query(default=0, ge=0, le=12),
        page: int = Query(default=1, ge=1),
        limit: int = Query(default=10, ge=1, le=MAX_PAGE_LIMIT),
    ) -> JSONResponse:
        query = TransactionsQuery(search=search, month=month, page=page, limit=limit)
        result = services.transaction_service.search_transactions(query)
        return JSONResponse(content=_wire_payload(result))

    @app.get("/stats")
    def monthly_statistics(month: int = Query(default=0, ge=0, le=12)) -> JSONResponse:
        snapshot = services.statistics_service.monthly_statistics(month)
        return JSONResponse(content=_wire_payload(snapshot))

    return app


app = create_app()
