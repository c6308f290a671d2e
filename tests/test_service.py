import pytest

from indicator_analytics.core.exceptions import (
    DegenerateInputError,
    InsufficientDataError,
    InvalidParameterError,
    LengthMismatchError,
)
from indicator_analytics.core.catalog import GeographyTree
from indicator_analytics.core.timeseries import TimeSeries
from indicator_analytics.service import AnalyticsService


@pytest.fixture
def service(repository):
    return AnalyticsService(repository)


def test_ask_summarizes_selected_indicators(service, repository):
    payload = service.ask("GDP and clean water", geo_code="IN")

    assert payload["indicators"] == ["gdp_per_capita", "clean_water_access"]
    assert payload["summary"]["gdp_per_capita"]["mean"] == pytest.approx(20.0)
    assert payload["summary"]["gdp_per_capita"]["pct_change"] == pytest.approx(200.0)

    water = payload["summary"]["clean_water_access"]
    assert water["count"] == 2
    assert water["mean"] == pytest.approx(60.0)
    assert payload["series"]["clean_water_access"] == [
        {"year": 2020, "value": 50.0},
        {"year": 2022, "value": 70.0},
    ]


def test_ask_passes_year_range(service, repository):
    service.ask("gdp", "IN", 2021, 2022)
    assert repository.calls[-1] == ("gdp_per_capita", "IN", 2021, 2022)


def test_ask_default_geo_and_indicator(service):
    payload = service.ask("anything at all")
    assert payload["geoCode"] == "IN"
    assert payload["indicators"] == ["gdp_per_capita"]


def test_ask_missing_series_reports_not_available(service):
    payload = service.ask("female", geo_code="KA")
    for summary in payload["summary"].values():
        assert summary["count"] == 0
        assert summary["mean"] is None


def test_compare(service):
    result = service.compare(["gdp_per_capita", "rural_literacy_rate"], "IN")
    assert result["correlation"] == pytest.approx(1.0)
    assert result["dataPoints"] == 3
    assert result["strength"] == "very strong"


def test_compare_requires_two_distinct(service):
    with pytest.raises(InvalidParameterError):
        service.compare(["gdp_per_capita"], "IN")
    with pytest.raises(InvalidParameterError):
        service.compare(["gdp_per_capita", "gdp_per_capita"], "IN")


def test_compare_constant_series_is_degenerate(service):
    with pytest.raises(DegenerateInputError):
        service.compare(["gdp_per_capita", "employment_rate"], "IN")


def test_compare_without_overlap(service):
    with pytest.raises(InsufficientDataError):
        service.compare(["gdp_per_capita", "infant_mortality_rate"], "IN")


def test_compare_too_little_overlap(service):
    with pytest.raises(LengthMismatchError):
        service.compare(["gdp_per_capita", "rural_literacy_rate"], "KA")


def test_compare_series_records(service):
    payload = service.compare_series(["gdp_per_capita", "rural_literacy_rate"], "IN")
    assert payload["dataPoints"] == 3
    assert payload["series"][0] == {"year": 2020, "gdp_per_capita": 10.0, "rural_literacy_rate": 5.0}


def test_forecast_from_records(service):
    result = service.forecast([{"year": 2020, "value": 1.0}, {"year": 2021, "value": 2.0}], 2)
    assert [p.forecast_value for p in result.projected] == pytest.approx([3.0, 4.0])


def test_forecast_default_horizon(service):
    ts = TimeSeries.from_mapping({2020: 1.0, 2021: 2.0})
    assert service.forecast(ts).horizon_years == 5


def test_forecast_indicator(service):
    result = service.forecast_indicator("gdp_per_capita", "IN", 1)
    assert result.base_year == 2022
    assert result.projected[0].forecast_value == pytest.approx(40.0)


def test_multi_geo_union(service):
    payload = service.multi_geo("gdp_per_capita", ["IN", "KA", "IN"])

    assert payload["geoCodes"] == ["IN", "KA"]
    assert [row["year"] for row in payload["merged"]] == [2020, 2021, 2022, 2023]
    assert payload["merged"][0] == {"year": 2020, "IN": 10.0, "KA": None}
    assert payload["data"]["KA"][0] == {"year": 2021, "value": 12.0, "geoName": "Geo KA"}
    assert payload["summary"]["KA"]["count"] == 2


def test_multi_geo_validation(service):
    with pytest.raises(InvalidParameterError):
        service.multi_geo("gdp_per_capita", [])
    with pytest.raises(InvalidParameterError):
        service.multi_geo("", ["IN"])


def test_multi_geo_nothing_to_plot(service):
    payload = service.multi_geo("female_literacy_rate", ["IN", "KA"])
    assert payload["merged"] == []
    assert payload["data"] == {"IN": [], "KA": []}


class EmptyGraph:
    def list_indicators(self):
        return []

    def get_geography(self):
        return GeographyTree()


def test_catalog_falls_back_to_builtin_tables():
    service = AnalyticsService(EmptyGraph())

    ids = [i.id for i in service.indicators()]
    assert "gdp_per_capita" in ids
    tree = service.geography()
    assert tree.country.code == "IN"
    assert any(d.code == "BLR" and d.parent == "KA" for d in tree.districts)


def test_catalog_prefers_graph_contents(service):
    assert [i.id for i in service.indicators()] == ["gdp_per_capita", "rural_literacy_rate"]
    assert [s.code for s in service.geography().states] == ["KA"]


def test_geo_codes_are_normalized(service, repository):
    payload = service.ask("gdp", geo_code=" ka ")
    assert payload["geoCode"] == "KA"
    assert repository.calls[-1] == ("gdp_per_capita", "KA", None, None)

    payload = service.multi_geo("gdp_per_capita", ["in", "IN", "ka"])
    assert payload["geoCodes"] == ["IN", "KA"]
