from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from indicator_analytics.config import settings


class YearRangeMixin(BaseModel):
    startYear: Optional[int] = None
    endYear: Optional[int] = None

    @model_validator(mode="after")
    def _check_range(self):
        if (
            self.startYear is not None
            and self.endYear is not None
            and self.startYear > self.endYear
        ):
            raise ValueError("startYear must not be after endYear")
        return self

    def year_bounds(self) -> tuple[Optional[int], Optional[int]]:
        # a single bound is ignored, matching the query layer
        if self.startYear is None or self.endYear is None:
            return None, None
        return self.startYear, self.endYear


class AskRequest(YearRangeMixin):
    question: str = Field(min_length=1)
    geoCode: str = Field(default_factory=lambda: settings.default_geo_code)


class CompareRequest(BaseModel):
    indicators: List[str] = Field(min_length=2, max_length=2)
    geoCode: str = Field(default_factory=lambda: settings.default_geo_code)


class SeriesPoint(BaseModel):
    model_config = ConfigDict(extra="ignore")

    year: int
    value: Optional[float] = None


class ForecastRequest(BaseModel):
    series: List[SeriesPoint] = Field(min_length=2)
    forecastYears: int = Field(
        default_factory=lambda: settings.default_forecast_years,
        ge=1,
        le=settings.max_forecast_horizon,
    )


class MultiGeoRequest(YearRangeMixin):
    indicator: str = Field(min_length=1)
    geoCodes: List[str] = Field(min_length=1)
