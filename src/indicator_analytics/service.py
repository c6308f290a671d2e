"""
Analytics service.

Fetches series from a repository and runs the core over them, producing the
payloads served by the API, CLI and dashboard.
"""

import logging
from typing import Any, Iterable, Mapping

from indicator_analytics.config import settings
from indicator_analytics.core.alignment import SeriesAligner
from indicator_analytics.core.catalog import (
    GeographyTree,
    IndicatorInfo,
    select_indicators,
    static_geography,
    static_indicators,
)
from indicator_analytics.core.exceptions import InvalidParameterError
from indicator_analytics.core.forecast import ForecastEngine, ForecastSeries
from indicator_analytics.core.statistics import CorrelationResult, StatisticalAnalyzer
from indicator_analytics.core.summary import SummaryOrchestrator
from indicator_analytics.core.timeseries import TimeSeries
from indicator_analytics.graph.repository import SeriesRepository

logger = logging.getLogger(__name__)


def _require_pair(indicators: list[str]) -> list[str]:
    if not isinstance(indicators, list) or len(indicators) != 2:
        raise InvalidParameterError("indicators", "please provide exactly 2 indicators")
    if indicators[0] == indicators[1]:
        raise InvalidParameterError("indicators", "the two indicators must differ")
    return indicators


def _geo(geo_code: str | None) -> str:
    return (geo_code or settings.default_geo_code).strip().upper()


class AnalyticsService:
    """
    High-level analysis operations over a SeriesRepository.

    Example:
        service = AnalyticsService(GraphRepository())
        payload = service.ask("How did GDP change?", geo_code="KA")
    """

    def __init__(
        self,
        repository: SeriesRepository,
        summarizer: SummaryOrchestrator | None = None,
    ):
        self.repository = repository
        self.summarizer = summarizer or SummaryOrchestrator()

    def indicators(self) -> list[IndicatorInfo]:
        """Indicators in the graph, or the built-in catalog when it has none."""
        found = self.repository.list_indicators()
        if not found:
            logger.info("No indicators in the graph, using the built-in catalog")
            return static_indicators()
        return found

    def geography(self) -> GeographyTree:
        """Geography hierarchy from the graph, or the built-in table when it has no country."""
        tree = self.repository.get_geography()
        if tree.country is None:
            logger.info("No geographies in the graph, using the built-in table")
            return static_geography()
        return tree

    def _series_for(
        self,
        indicators: Iterable[str],
        geo_code: str,
        start_year: int | None = None,
        end_year: int | None = None,
    ) -> dict[str, TimeSeries]:
        return {
            indicator: self.repository.get_series(indicator, geo_code, start_year, end_year)
            for indicator in indicators
        }

    def ask(
        self,
        question: str,
        geo_code: str | None = None,
        start_year: int | None = None,
        end_year: int | None = None,
    ) -> dict[str, Any]:
        """
        Summarize the indicators a question mentions.

        Returns:
            Dict with question, geoCode, indicators, summary and series.
        """
        geo_code = _geo(geo_code)
        indicators = select_indicators(question)
        series = self._series_for(indicators, geo_code, start_year, end_year)
        summaries = self.summarizer.summarize_many(series, geography=geo_code)

        logger.info("ask: %s in %s -> %s", question, geo_code, ", ".join(indicators))
        return {
            "question": question,
            "geoCode": geo_code,
            "indicators": indicators,
            "summary": {k: v.to_dict() for k, v in summaries.items()},
            "series": {k: v.present().to_records() for k, v in series.items()},
        }

    def correlate(self, indicators: list[str], geo_code: str | None = None) -> CorrelationResult:
        """Pearson correlation of two indicators over their common years."""
        first, second = _require_pair(indicators)
        geo_code = _geo(geo_code)
        aligned = SeriesAligner.align_intersection(self._series_for(indicators, geo_code))
        return StatisticalAnalyzer.correlation(
            aligned.column(first),
            aligned.column(second),
            indicator1=first,
            indicator2=second,
        )

    def compare(self, indicators: list[str], geo_code: str | None = None) -> dict[str, Any]:
        """
        Correlate two indicators for one geography.

        Returns:
            Dict with indicators, geoCode, correlation, strength and dataPoints.
        """
        geo_code = _geo(geo_code)
        result = self.correlate(indicators, geo_code)
        return {
            "indicators": indicators,
            "geoCode": geo_code,
            "correlation": result.correlation,
            "strength": result.strength,
            "dataPoints": result.n_observations,
        }

    def compare_series(self, indicators: list[str], geo_code: str | None = None) -> dict[str, Any]:
        """Two indicators side by side on their common years."""
        _require_pair(indicators)
        geo_code = _geo(geo_code)
        aligned = SeriesAligner.align_intersection(self._series_for(indicators, geo_code))
        return {
            "indicators": indicators,
            "geoCode": geo_code,
            "series": aligned.to_records(),
            "dataPoints": len(aligned),
        }

    def forecast(
        self,
        series: TimeSeries | Iterable[Mapping[str, Any]],
        forecast_years: int | None = None,
    ) -> ForecastSeries:
        """Linear forecast of a series given directly or as year/value records."""
        if not isinstance(series, TimeSeries):
            series = TimeSeries.from_records(series)
        horizon = settings.default_forecast_years if forecast_years is None else forecast_years
        return ForecastEngine.forecast(series, horizon)

    def forecast_indicator(
        self,
        indicator: str,
        geo_code: str | None = None,
        forecast_years: int | None = None,
        start_year: int | None = None,
        end_year: int | None = None,
    ) -> ForecastSeries:
        """Fetch a stored series and forecast it."""
        geo_code = _geo(geo_code)
        series = self.repository.get_series(indicator, geo_code, start_year, end_year)
        return self.forecast(series, forecast_years)

    def multi_geo(
        self,
        indicator: str,
        geo_codes: list[str],
        start_year: int | None = None,
        end_year: int | None = None,
    ) -> dict[str, Any]:
        """
        One indicator across several geographies.

        Returns:
            Dict with the raw per-geography series, the union-aligned chart
            rows and per-geography summaries.
        """
        if not indicator:
            raise InvalidParameterError("indicator", "must not be empty")
        if not geo_codes:
            raise InvalidParameterError("geoCodes", "at least one geography is required")

        by_geo = {
            geo: self.repository.get_series(indicator, geo, start_year, end_year)
            for geo in dict.fromkeys(g.strip().upper() for g in geo_codes)
        }
        aligned = SeriesAligner.align_union(by_geo)

        data = {}
        for geo, ts in by_geo.items():
            geo_name = ts.meta.get("geo_name") or self.repository.geography_name(geo)
            data[geo] = [
                {**record, "geoName": geo_name} for record in ts.present().to_records()
            ]

        summaries = {
            geo: self.summarizer.summarize(ts, indicator=indicator, geography=geo).to_dict()
            for geo, ts in by_geo.items()
        }
        return {
            "indicator": indicator,
            "geoCodes": list(by_geo),
            "data": data,
            "merged": aligned.to_records(),
            "summary": summaries,
        }
