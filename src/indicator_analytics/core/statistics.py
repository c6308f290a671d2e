"""
Statistical Analysis Module.

Provides the numeric kernels used by the dashboard:
- Arithmetic mean
- Percentage change between first and last observation
- Linear trend slope against observation order
- Pearson correlation between two aligned series

All functions take plain numeric sequences (absent values must already be
filtered out) and raise an AnalyticsError instead of returning NaN.
"""

from dataclasses import dataclass
from typing import Any, Sequence

import numpy as np
import pandas as pd
from scipy import stats

from indicator_analytics.core.exceptions import (
    DegenerateInputError,
    InsufficientDataError,
    InvalidParameterError,
    LengthMismatchError,
)

ArrayLike = Sequence[float] | np.ndarray | pd.Series


@dataclass(frozen=True)
class CorrelationResult:
    """Result of correlation analysis."""
    indicator1: str
    indicator2: str
    correlation: float
    n_observations: int
    method: str = "pearson"

    @property
    def strength(self) -> str:
        r = abs(self.correlation)
        if r < 0.2:
            return "negligible"
        elif r < 0.4:
            return "weak"
        elif r < 0.6:
            return "moderate"
        elif r < 0.8:
            return "strong"
        else:
            return "very strong"

    @property
    def direction(self) -> str:
        if self.correlation > 0:
            return "positive"
        elif self.correlation < 0:
            return "negative"
        return "none"

    def to_dict(self) -> dict[str, Any]:
        return {
            "indicator1": self.indicator1,
            "indicator2": self.indicator2,
            "correlation": self.correlation,
            "n_observations": self.n_observations,
            "strength": self.strength,
            "direction": self.direction,
            "method": self.method,
        }


def _as_array(values: ArrayLike, operation: str) -> np.ndarray:
    arr = np.asarray(values, dtype=np.float64)
    if arr.ndim != 1:
        raise InvalidParameterError(operation, "expected a one-dimensional sequence")
    if not np.all(np.isfinite(arr)):
        raise InvalidParameterError(
            operation, "sequence contains missing or non-finite values"
        )
    return arr


def _require(arr: np.ndarray, minimum: int, operation: str) -> None:
    if len(arr) < minimum:
        raise InsufficientDataError(minimum, len(arr), operation)


class StatisticalAnalyzer:
    """
    Pure statistics over positional numeric sequences.
    """

    @staticmethod
    def mean(values: ArrayLike) -> float:
        """
        Arithmetic mean.

        Raises:
            InsufficientDataError: If ``values`` is empty.
        """
        arr = _as_array(values, "mean")
        _require(arr, 1, "mean")
        return float(np.mean(arr))

    @staticmethod
    def pct_change(values: ArrayLike) -> float:
        """
        Percent change from the first to the last element.

        Raises:
            InsufficientDataError: Fewer than 2 values.
            DegenerateInputError: First value is zero.
        """
        arr = _as_array(values, "pct_change")
        _require(arr, 2, "pct_change")
        first, last = arr[0], arr[-1]
        if first == 0:
            raise DegenerateInputError(
                "pct_change is undefined when the first value is zero"
            )
        return float((last - first) / first * 100)

    @staticmethod
    def slope(values: ArrayLike) -> float:
        """
        Least-squares slope of value against position 0..n-1.

        The index, not the calendar year, is the regressor, so a series with
        gaps is fitted as if its points were evenly spaced.

        Raises:
            InsufficientDataError: Fewer than 2 values.
        """
        arr = _as_array(values, "slope")
        _require(arr, 2, "slope")
        if np.ptp(arr) == 0:
            return 0.0
        index = np.arange(len(arr), dtype=np.float64)
        return float(stats.linregress(index, arr).slope)

    @staticmethod
    def pearson(x: ArrayLike, y: ArrayLike) -> float:
        """
        Pearson correlation coefficient of two equal-length sequences.

        Raises:
            LengthMismatchError: Sequences differ in length.
            InsufficientDataError: Fewer than 2 pairs.
            DegenerateInputError: Either sequence is constant.
        """
        a = _as_array(x, "pearson")
        b = _as_array(y, "pearson")
        if len(a) != len(b):
            raise LengthMismatchError({"x": len(a), "y": len(b)})
        _require(a, 2, "pearson")
        if np.ptp(a) == 0 or np.ptp(b) == 0:
            raise DegenerateInputError(
                "correlation is undefined when a series has zero variance"
            )
        r = stats.pearsonr(a, b)[0]
        return float(np.clip(r, -1.0, 1.0))

    @staticmethod
    def correlation(
        x: ArrayLike,
        y: ArrayLike,
        indicator1: str = "x",
        indicator2: str = "y",
    ) -> CorrelationResult:
        """Pearson correlation wrapped with labels and a strength rating."""
        r = StatisticalAnalyzer.pearson(x, y)
        return CorrelationResult(
            indicator1=indicator1,
            indicator2=indicator2,
            correlation=r,
            n_observations=len(x),
        )


mean = StatisticalAnalyzer.mean
pct_change = StatisticalAnalyzer.pct_change
slope = StatisticalAnalyzer.slope
pearson = StatisticalAnalyzer.pearson
