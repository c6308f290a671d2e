"""
Series alignment.

Merges several labelled time series on year:
- intersection: only years every series observed, fully populated
- union: every year any series observed, with gaps left as None
"""

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Sequence

import numpy as np
import pandas as pd

from indicator_analytics.core.exceptions import (
    InsufficientDataError,
    InvalidParameterError,
    LengthMismatchError,
)
from indicator_analytics.core.timeseries import TimeSeries

logger = logging.getLogger(__name__)

SeriesInput = Mapping[str, TimeSeries] | Sequence[TimeSeries]


@dataclass(frozen=True)
class IntersectionAlignment:
    """Years observed in every series, each with one value per label."""
    labels: tuple[str, ...]
    years: tuple[int, ...]
    rows: tuple[tuple[float, ...], ...]

    def __len__(self) -> int:
        return len(self.years)

    def column(self, label: str) -> list[float]:
        """All aligned values of one series, in year order."""
        idx = self.labels.index(label)
        return [row[idx] for row in self.rows]

    def columns(self) -> dict[str, list[float]]:
        return {label: self.column(label) for label in self.labels}

    def to_records(self) -> list[dict[str, Any]]:
        return [
            {"year": year, **dict(zip(self.labels, row))}
            for year, row in zip(self.years, self.rows)
        ]

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame(
            list(self.rows),
            index=pd.Index(list(self.years), name="year", dtype="int64"),
            columns=list(self.labels),
            dtype="float64",
        )


@dataclass(frozen=True)
class UnionAlignment:
    """Every year observed in any series; missing values are None."""
    labels: tuple[str, ...]
    years: tuple[int, ...]
    rows: tuple[tuple[float | None, ...], ...]

    def __len__(self) -> int:
        return len(self.years)

    @property
    def is_empty(self) -> bool:
        return not self.years

    def value(self, year: int, label: str) -> float | None:
        return self.rows[self.years.index(year)][self.labels.index(label)]

    def to_records(self) -> list[dict[str, Any]]:
        return [
            {"year": year, **dict(zip(self.labels, row))}
            for year, row in zip(self.years, self.rows)
        ]

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame(
            [[np.nan if v is None else v for v in row] for row in self.rows],
            index=pd.Index(list(self.years), name="year", dtype="int64"),
            columns=list(self.labels),
            dtype="float64",
        )


def _label_series(series: SeriesInput) -> dict[str, TimeSeries]:
    if isinstance(series, Mapping):
        labelled = dict(series)
    else:
        labelled = {}
        for i, ts in enumerate(series):
            label = ts.label or f"series_{i}"
            if label in labelled:
                raise InvalidParameterError("series", f"duplicate label '{label}'")
            labelled[label] = ts

    if not labelled:
        raise InvalidParameterError("series", "at least one series is required")
    return labelled


def _frame(labelled: dict[str, TimeSeries]) -> pd.DataFrame:
    """Outer-join the series on year; absent values become NaN."""
    columns = {label: ts.to_pandas() for label, ts in labelled.items()}
    df = pd.concat(columns, axis=1, join="outer", sort=True)
    # concat of all-empty inputs loses the int dtype
    df.index = df.index.astype("int64")
    return df


class SeriesAligner:
    """
    Align labelled time series on year.
    """

    @staticmethod
    def align_intersection(
        series: SeriesInput,
        min_points: int = 2,
    ) -> IntersectionAlignment:
        """
        Keep only years where every series has a value.

        Args:
            series: Mapping of label to series, or a sequence of labelled series.
            min_points: Fewest common years acceptable for a comparison.

        Returns:
            IntersectionAlignment sorted by year.

        Raises:
            InvalidParameterError: No series given.
            InsufficientDataError: The intersection is empty.
            LengthMismatchError: Fewer than ``min_points`` common years remain.
        """
        labelled = _label_series(series)
        labels = tuple(labelled)

        df = _frame(labelled).dropna(how="any")
        if df.empty:
            raise InsufficientDataError(max(min_points, 1), 0, "intersection alignment")

        if len(df) < min_points:
            counts = {label: len(ts.present()) for label, ts in labelled.items()}
            raise LengthMismatchError(
                counts,
                f"Only {len(df)} common year(s) across {', '.join(labels)}; "
                f"need at least {min_points}",
            )

        logger.debug("Aligned %d series on %d common years", len(labels), len(df))
        return IntersectionAlignment(
            labels=labels,
            years=tuple(int(y) for y in df.index),
            rows=tuple(tuple(float(v) for v in row) for row in df.itertuples(index=False)),
        )

    @staticmethod
    def align_union(series: SeriesInput) -> UnionAlignment:
        """
        Keep every year any series observed.

        An observation recorded as absent counts as a year with no value, so
        a year absent in every series still appears once with all-None values.
        """
        labelled = _label_series(series)
        labels = tuple(labelled)

        df = _frame(labelled)
        rows = tuple(
            tuple(None if pd.isna(v) else float(v) for v in row)
            for row in df.itertuples(index=False)
        )
        return UnionAlignment(
            labels=labels,
            years=tuple(int(y) for y in df.index),
            rows=rows,
        )


align_intersection = SeriesAligner.align_intersection
align_union = SeriesAligner.align_union
