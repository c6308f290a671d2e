import pytest

from indicator_analytics.core.catalog import GeographyTree, GeoNode, IndicatorInfo
from indicator_analytics.core.timeseries import TimeSeries


class FakeRepository:
    """In-memory SeriesRepository keyed by (indicator, geo_code)."""

    def __init__(self, data: dict[tuple[str, str], dict[int, float | None]] | None = None):
        self.data = data or {}
        self.calls: list[tuple] = []

    def get_series(self, indicator, geo_code, start_year=None, end_year=None):
        self.calls.append((indicator, geo_code, start_year, end_year))
        ts = TimeSeries.from_mapping(
            self.data.get((indicator, geo_code), {}),
            label=indicator,
            geo_name=f"Geo {geo_code}",
        )
        if start_year is not None and end_year is not None:
            ts = ts.between(start_year, end_year)
        return ts

    def get_geography(self):
        return GeographyTree(
            country=GeoNode("IN", "India"),
            states=[GeoNode("KA", "Karnataka")],
            districts=[GeoNode("BLR", "Bengaluru", "KA")],
        )

    def list_indicators(self):
        return [
            IndicatorInfo("gdp_per_capita", "GDP per capita", "INR"),
            IndicatorInfo("rural_literacy_rate", "Rural literacy rate", "%"),
        ]

    def geography_name(self, geo_code):
        return {"IN": "India", "KA": "Karnataka"}.get(geo_code)


@pytest.fixture
def repository():
    return FakeRepository({
        ("gdp_per_capita", "IN"): {2020: 10.0, 2021: 20.0, 2022: 30.0},
        ("rural_literacy_rate", "IN"): {2019: 1.0, 2020: 5.0, 2021: 10.0, 2022: 15.0},
        ("clean_water_access", "IN"): {2020: 50.0, 2021: None, 2022: 70.0},
        ("employment_rate", "IN"): {2020: 60.0, 2021: 60.0, 2022: 60.0},
        ("gdp_per_capita", "KA"): {2021: 12.0, 2023: 18.0},
        ("rural_literacy_rate", "KA"): {2023: 40.0, 2024: 45.0},
        ("infant_mortality_rate", "IN"): {2015: 40.0},
    })
