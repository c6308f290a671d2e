"""
HTTP routes for the dashboard API.

Route handlers stay thin: they validate the request body, call the
AnalyticsService and return its payload. Errors are translated to responses
by the handlers registered in ``indicator_analytics.api.app``.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from indicator_analytics.api.requests import (
    AskRequest,
    CompareRequest,
    ForecastRequest,
    MultiGeoRequest,
)
from indicator_analytics.core.timeseries import TimeSeries
from indicator_analytics.graph.repository import GraphRepository, SeriesRepository
from indicator_analytics.service import AnalyticsService

log = logging.getLogger(__name__)

router = APIRouter()


def get_repository() -> SeriesRepository:
    return GraphRepository()


def get_service(repository: SeriesRepository = Depends(get_repository)) -> AnalyticsService:
    return AnalyticsService(repository)


@router.get("/health")
def health() -> Dict[str, Any]:
    return {"ok": True, "timestamp": datetime.now(timezone.utc).isoformat()}


@router.get("/geography")
def geography(service: AnalyticsService = Depends(get_service)) -> Dict[str, Any]:
    return service.geography().to_dict()


@router.get("/indicators")
def indicators(service: AnalyticsService = Depends(get_service)) -> List[Dict[str, Any]]:
    return [i.to_dict() for i in service.indicators()]


@router.post("/ask")
def ask(req: AskRequest, service: AnalyticsService = Depends(get_service)) -> Dict[str, Any]:
    start, end = req.year_bounds()
    return service.ask(req.question, req.geoCode, start, end)


@router.post("/compare")
def compare(req: CompareRequest, service: AnalyticsService = Depends(get_service)) -> Dict[str, Any]:
    return service.compare(req.indicators, req.geoCode)


@router.post("/compare-series")
def compare_series(
    req: CompareRequest, service: AnalyticsService = Depends(get_service)
) -> Dict[str, Any]:
    return service.compare_series(req.indicators, req.geoCode)


@router.post("/forecast")
def forecast(req: ForecastRequest, service: AnalyticsService = Depends(get_service)) -> Dict[str, Any]:
    series = TimeSeries.from_pairs((p.year, p.value) for p in req.series)
    return service.forecast(series, req.forecastYears).to_dict()


@router.post("/multi-geo")
def multi_geo(req: MultiGeoRequest, service: AnalyticsService = Depends(get_service)) -> Dict[str, Any]:
    start, end = req.year_bounds()
    return service.multi_geo(req.indicator, req.geoCodes, start, end)
