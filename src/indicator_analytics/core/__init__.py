"""
Core analysis module for Indicator Analytics.

Provides:
- Time series value types
- Descriptive statistics and correlation
- Series alignment
- Linear forecasting
- Per-series summaries
- Indicator and geography catalog
"""

from indicator_analytics.core.alignment import (
    IntersectionAlignment,
    SeriesAligner,
    UnionAlignment,
    align_intersection,
    align_union,
)
from indicator_analytics.core.catalog import (
    GeographyTree,
    GeoNode,
    IndicatorInfo,
    node_label_for,
    select_indicators,
)
from indicator_analytics.core.exceptions import (
    AnalyticsError,
    DegenerateInputError,
    InsufficientDataError,
    InvalidParameterError,
    LengthMismatchError,
)
from indicator_analytics.core.forecast import (
    ForecastEngine,
    ForecastPoint,
    ForecastSeries,
    forecast,
)
from indicator_analytics.core.statistics import (
    CorrelationResult,
    StatisticalAnalyzer,
    mean,
    pct_change,
    pearson,
    slope,
)
from indicator_analytics.core.summary import (
    POLICY_TABLE,
    SizeClass,
    SummaryOrchestrator,
    SummaryStats,
    summarize_series,
)
from indicator_analytics.core.timeseries import Observation, TimeSeries

__all__ = [
    # Time series
    "Observation",
    "TimeSeries",
    # Errors
    "AnalyticsError",
    "InsufficientDataError",
    "DegenerateInputError",
    "LengthMismatchError",
    "InvalidParameterError",
    # Statistics
    "StatisticalAnalyzer",
    "CorrelationResult",
    "mean",
    "pct_change",
    "slope",
    "pearson",
    # Alignment
    "SeriesAligner",
    "IntersectionAlignment",
    "UnionAlignment",
    "align_intersection",
    "align_union",
    # Forecast
    "ForecastEngine",
    "ForecastPoint",
    "ForecastSeries",
    "forecast",
    # Summary
    "SummaryOrchestrator",
    "SummaryStats",
    "SizeClass",
    "POLICY_TABLE",
    "summarize_series",
    # Catalog
    "IndicatorInfo",
    "GeoNode",
    "GeographyTree",
    "node_label_for",
    "select_indicators",
]
