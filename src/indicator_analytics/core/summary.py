"""
Per-series summary statistics.

A series is classified by how many non-absent points it has, and the class
picks the computation from POLICY_TABLE.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

import numpy as np

from indicator_analytics.core.exceptions import (
    DegenerateInputError,
    InsufficientDataError,
)
from indicator_analytics.core.statistics import StatisticalAnalyzer
from indicator_analytics.core.timeseries import TimeSeries

logger = logging.getLogger(__name__)


class SizeClass(str, Enum):
    """Series size buckets used to select a summary policy."""
    EMPTY = "empty"
    SINGLE = "single"
    MULTIPLE = "multiple"

    @classmethod
    def of(cls, count: int) -> "SizeClass":
        if count == 0:
            return cls.EMPTY
        if count == 1:
            return cls.SINGLE
        return cls.MULTIPLE


@dataclass(frozen=True)
class SummaryStats:
    """Summary figures for one indicator/geography series. None means not available."""
    mean: float | None
    pct_change: float | None
    slope: float | None
    count: int
    earliest: float | None
    latest: float | None
    indicator: str | None = None
    geography: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "mean": self.mean,
            "pct_change": self.pct_change,
            "slope": self.slope,
            "count": self.count,
            "latest": self.latest,
            "earliest": self.earliest,
        }


# (mean, pct_change, slope) for a vector of non-absent values
Figures = tuple[float | None, float | None, float | None]


def _empty_policy(values: np.ndarray) -> Figures:
    return None, None, None


def _single_policy(values: np.ndarray) -> Figures:
    return float(values[0]), 0.0, 0.0


def _guarded(func: Callable[[np.ndarray], float], values: np.ndarray) -> float | None:
    try:
        return func(values)
    except (InsufficientDataError, DegenerateInputError) as exc:
        logger.debug("%s not available: %s", func.__name__, exc)
        return None


def _multiple_policy(values: np.ndarray) -> Figures:
    return (
        _guarded(StatisticalAnalyzer.mean, values),
        _guarded(StatisticalAnalyzer.pct_change, values),
        _guarded(StatisticalAnalyzer.slope, values),
    )


POLICY_TABLE: dict[SizeClass, Callable[[np.ndarray], Figures]] = {
    SizeClass.EMPTY: _empty_policy,
    SizeClass.SINGLE: _single_policy,
    SizeClass.MULTIPLE: _multiple_policy,
}


class SummaryOrchestrator:
    """
    Summarize series with the count-based policy table.
    """

    def __init__(self, policies: dict[SizeClass, Callable[[np.ndarray], Figures]] | None = None):
        self.policies = policies or POLICY_TABLE

    def summarize(
        self,
        series: TimeSeries,
        indicator: str | None = None,
        geography: str | None = None,
    ) -> SummaryStats:
        """
        Summarize one series.

        Absent observations are removed first, so ``count`` is the number of
        points the statistics were computed over.
        """
        values = series.present_values()
        size = SizeClass.of(len(values))
        mean_, pct, slope_ = self.policies[size](values)

        return SummaryStats(
            mean=mean_,
            pct_change=pct,
            slope=slope_,
            count=len(values),
            earliest=float(values[0]) if len(values) else None,
            latest=float(values[-1]) if len(values) else None,
            indicator=indicator or series.label,
            geography=geography,
        )

    def summarize_many(
        self,
        series_by_label: dict[str, TimeSeries],
        geography: str | None = None,
    ) -> dict[str, SummaryStats]:
        return {
            label: self.summarize(ts, indicator=label, geography=geography)
            for label, ts in series_by_label.items()
        }


_default = SummaryOrchestrator()


def summarize_series(
    series: TimeSeries,
    indicator: str | None = None,
    geography: str | None = None,
) -> SummaryStats:
    """Summarize a series with the default policy table."""
    return _default.summarize(series, indicator=indicator, geography=geography)
