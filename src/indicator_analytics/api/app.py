"""
FastAPI application for the indicator dashboard.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from indicator_analytics import __version__
from indicator_analytics.api.routes import router
from indicator_analytics.config import configure_logging, settings
from indicator_analytics.core.exceptions import AnalyticsError
from indicator_analytics.graph.connection import GraphStoreError, close_driver

log = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    configure_logging(settings.log_level)
    log.info("Indicator Analytics API %s starting", __version__)
    try:
        yield
    finally:
        close_driver()


async def analytics_error_handler(request: Request, exc: AnalyticsError) -> JSONResponse:
    log.warning("%s %s rejected: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=400, content=exc.to_dict())


async def graph_error_handler(request: Request, exc: GraphStoreError) -> JSONResponse:
    log.error("%s %s graph store failure: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=503,
        content={"error": "graph_store_unavailable", "message": str(exc)},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    log.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def create_app() -> FastAPI:
    app = FastAPI(
        title="Indicator Analytics",
        version=__version__,
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(AnalyticsError, analytics_error_handler)
    app.add_exception_handler(GraphStoreError, graph_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
    app.include_router(router)
    return app


app = create_app()
