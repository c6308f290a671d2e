"""
Linear trend forecasting.

Extends a series past its last observation along the least-squares slope
fitted over observation order.
"""

import logging
from dataclasses import dataclass
from typing import Any

from indicator_analytics.core.exceptions import (
    InsufficientDataError,
    InvalidParameterError,
)
from indicator_analytics.core.statistics import StatisticalAnalyzer
from indicator_analytics.core.timeseries import TimeSeries

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ForecastPoint:
    """A historical or projected point on the extended series."""
    year: int
    value: float | None
    forecast_value: float | None
    is_forecast: bool

    def to_dict(self) -> dict[str, Any]:
        # "isForcast" is the key the dashboard charts read
        return {
            "year": self.year,
            "value": self.value,
            "forecastValue": self.forecast_value,
            "isForcast": self.is_forecast,
        }


@dataclass(frozen=True)
class ForecastSeries:
    """Historical points followed by the projected continuation."""
    points: tuple[ForecastPoint, ...]
    slope: float
    base_value: float
    base_year: int
    horizon_years: int
    label: str | None = None

    @property
    def historical(self) -> list[ForecastPoint]:
        return [p for p in self.points if not p.is_forecast]

    @property
    def projected(self) -> list[ForecastPoint]:
        return [p for p in self.points if p.is_forecast]

    def to_dict(self) -> dict[str, Any]:
        return {
            "series": [p.to_dict() for p in self.points],
            "slope": self.slope,
            "baseValue": self.base_value,
            "baseYear": self.base_year,
            "forecastYears": self.horizon_years,
        }


def _validate_horizon(horizon_years: Any) -> int:
    if isinstance(horizon_years, bool) or not isinstance(horizon_years, int):
        raise InvalidParameterError(
            "horizon_years", f"must be a positive integer, got {horizon_years!r}"
        )
    if horizon_years <= 0:
        raise InvalidParameterError(
            "horizon_years", f"must be a positive integer, got {horizon_years}"
        )
    return horizon_years


class ForecastEngine:
    """
    Linear extrapolation of a time series.
    """

    @staticmethod
    def forecast(series: TimeSeries, horizon_years: int) -> ForecastSeries:
        """
        Project a series forward along its linear trend.

        Absent observations are skipped when fitting but kept in the output
        as historical points without values. The projection starts
        from the last retained (year, value) pair: the point ``k`` years ahead
        is ``last_value + slope * k``.

        Args:
            series: Historical observations.
            horizon_years: Number of years to project. Must be positive; the
                core never clamps it.

        Returns:
            ForecastSeries with historical points tagged and projected points
            appended.

        Raises:
            InvalidParameterError: Non-positive or non-integer horizon.
            InsufficientDataError: Fewer than 2 non-absent observations.
        """
        horizon = _validate_horizon(horizon_years)

        fitted = series.present()
        if len(fitted) < 2:
            raise InsufficientDataError(2, len(fitted), "forecast")

        fitted_slope = StatisticalAnalyzer.slope(fitted.present_values())
        last = fitted.observations[-1]

        projected = {
            last.year + k: ForecastPoint(last.year + k, None, last.value + fitted_slope * k, True)
            for k in range(1, horizon + 1)
        }
        # a trailing absent year inside the horizon is filled by its projection
        historical = [
            ForecastPoint(o.year, o.value, o.value, False)
            for o in series
            if o.year not in projected
        ]
        points = sorted(historical + list(projected.values()), key=lambda p: p.year)

        logger.debug(
            "Forecast %s: slope=%.6g from %d=%.6g over %d years",
            series.label or "series", fitted_slope, last.year, last.value, horizon,
        )

        return ForecastSeries(
            points=tuple(points),
            slope=fitted_slope,
            base_value=last.value,
            base_year=last.year,
            horizon_years=horizon,
            label=series.label,
        )


forecast = ForecastEngine.forecast
