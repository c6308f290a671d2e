"""
Time series value types.

A TimeSeries is an immutable, year-ascending sequence of observations for one
indicator and one geography. Values may be absent (None), which is distinct
from a measured zero.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, Mapping

import numpy as np
import pandas as pd

from indicator_analytics.core.exceptions import InvalidParameterError


@dataclass(frozen=True)
class Observation:
    """One yearly measurement."""
    year: int
    value: float | None = None

    @property
    def is_absent(self) -> bool:
        return self.value is None

    def to_dict(self) -> dict[str, Any]:
        return {"year": self.year, "value": self.value}


def _clean_value(raw: Any) -> float | None:
    if raw is None:
        return None
    try:
        value = float(raw)
    except (TypeError, ValueError) as exc:
        raise InvalidParameterError("value", f"not numeric: {raw!r}") from exc
    if math.isnan(value):
        return None
    if math.isinf(value):
        raise InvalidParameterError("value", "infinite values are not allowed")
    return value


def _clean_year(raw: Any) -> int:
    # neo4j Integer values expose to_native(); plain ints pass through
    if hasattr(raw, "to_native"):
        raw = raw.to_native()
    if isinstance(raw, bool):
        raise InvalidParameterError("year", f"not an integer: {raw!r}")
    try:
        year = int(raw)
    except (TypeError, ValueError) as exc:
        raise InvalidParameterError("year", f"not an integer: {raw!r}") from exc
    if year != raw and not isinstance(raw, str):
        raise InvalidParameterError("year", f"not an integer: {raw!r}")
    return year


@dataclass(frozen=True)
class TimeSeries:
    """
    Ordered year -> value observations.

    Years are unique and ascending. Use the ``from_*`` constructors to build
    a series from unordered input; they sort and validate.
    """
    observations: tuple[Observation, ...] = ()
    label: str | None = None
    meta: Mapping[str, Any] = field(default_factory=dict, compare=False)

    def __post_init__(self) -> None:
        years = [o.year for o in self.observations]
        if len(set(years)) != len(years):
            dupes = sorted({y for y in years if years.count(y) > 1})
            raise InvalidParameterError("series", f"duplicate years {dupes}")
        if years != sorted(years):
            raise InvalidParameterError("series", "years must be ascending")

    # -------------------------------------------------------------------------
    # Constructors
    # -------------------------------------------------------------------------

    @classmethod
    def from_pairs(
        cls,
        pairs: Iterable[tuple[Any, Any]],
        label: str | None = None,
        **meta: Any,
    ) -> "TimeSeries":
        """Build from ``(year, value)`` pairs in any order."""
        observations = sorted(
            (Observation(_clean_year(y), _clean_value(v)) for y, v in pairs),
            key=lambda o: o.year,
        )
        return cls(tuple(observations), label=label, meta=meta)

    @classmethod
    def from_mapping(
        cls,
        data: Mapping[Any, Any],
        label: str | None = None,
        **meta: Any,
    ) -> "TimeSeries":
        """Build from a ``{year: value}`` mapping."""
        return cls.from_pairs(data.items(), label=label, **meta)

    @classmethod
    def from_records(
        cls,
        records: Iterable[Mapping[str, Any]],
        label: str | None = None,
        year_key: str = "year",
        value_key: str = "value",
        **meta: Any,
    ) -> "TimeSeries":
        """Build from ``[{"year": ..., "value": ...}, ...]`` records."""
        pairs = []
        for record in records:
            if year_key not in record:
                raise InvalidParameterError("series", f"record missing '{year_key}'")
            pairs.append((record[year_key], record.get(value_key)))
        return cls.from_pairs(pairs, label=label, **meta)

    # -------------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self.observations)

    def __iter__(self) -> Iterator[Observation]:
        return iter(self.observations)

    @property
    def years(self) -> list[int]:
        return [o.year for o in self.observations]

    @property
    def values(self) -> list[float | None]:
        return [o.value for o in self.observations]

    @property
    def is_empty(self) -> bool:
        return not self.observations

    def present(self) -> "TimeSeries":
        """Return a copy with absent observations removed."""
        return TimeSeries(
            tuple(o for o in self.observations if not o.is_absent),
            label=self.label,
            meta=self.meta,
        )

    def present_values(self) -> np.ndarray:
        """Non-absent values in year order as a float64 array."""
        return np.array(
            [o.value for o in self.observations if not o.is_absent],
            dtype=np.float64,
        )

    def between(self, start_year: int | None = None, end_year: int | None = None) -> "TimeSeries":
        """Restrict to an inclusive year range."""
        if start_year is not None and end_year is not None and start_year > end_year:
            raise InvalidParameterError(
                "year range", f"start year {start_year} is after end year {end_year}"
            )
        return TimeSeries(
            tuple(
                o for o in self.observations
                if (start_year is None or o.year >= start_year)
                and (end_year is None or o.year <= end_year)
            ),
            label=self.label,
            meta=self.meta,
        )

    def to_records(self) -> list[dict[str, Any]]:
        return [o.to_dict() for o in self.observations]

    def to_pandas(self) -> pd.Series:
        """Values indexed by year; absent values become NaN."""
        return pd.Series(
            [np.nan if v is None else v for v in self.values],
            index=pd.Index(self.years, name="year", dtype="int64"),
            dtype="float64",
            name=self.label,
        )
