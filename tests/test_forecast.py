import pytest

from indicator_analytics.core.exceptions import (
    InsufficientDataError,
    InvalidParameterError,
)
from indicator_analytics.core.forecast import ForecastEngine, ForecastSeries, forecast
from indicator_analytics.core.timeseries import TimeSeries


@pytest.fixture
def history():
    return TimeSeries.from_mapping({2018: 100.0, 2019: 110.0, 2020: 125.0, 2021: 130.0}, label="gdp")


def test_forecast_extends_from_last_point(history):
    result = forecast(history, 3)

    assert isinstance(result, ForecastSeries)
    assert result.base_year == 2021
    assert result.base_value == 130.0
    assert result.slope == pytest.approx(10.5)

    projected = result.projected
    assert [p.year for p in projected] == [2022, 2023, 2024]
    for k, point in enumerate(projected, start=1):
        assert point.forecast_value == pytest.approx(130.0 + result.slope * k)
        assert point.value is None
        assert point.is_forecast


def test_historical_points_are_unchanged(history):
    result = forecast(history, 2)

    historical = result.historical
    assert [(p.year, p.value) for p in historical] == [(o.year, o.value) for o in history]
    assert all(p.forecast_value == p.value for p in historical)
    assert not any(p.is_forecast for p in historical)
    assert len(result.points) == len(history) + 2


def test_absent_points_are_skipped_when_fitting_but_kept():
    ts = TimeSeries.from_mapping({2010: 1.0, 2011: None, 2012: 3.0, 2013: 5.0})
    result = forecast(ts, 1)

    # fitted positionally over [1.0, 3.0, 5.0]
    assert result.slope == pytest.approx(2.0)
    assert result.base_year == 2013
    assert [p.year for p in result.points] == [2010, 2011, 2012, 2013, 2014]
    gap = result.points[1]
    assert (gap.value, gap.forecast_value, gap.is_forecast) == (None, None, False)
    assert result.points[-1].forecast_value == pytest.approx(7.0)


def test_every_observation_is_tagged_historical():
    ts = TimeSeries.from_mapping({2020: 10.0, 2021: None, 2022: 30.0})
    result = forecast(ts, 1)

    assert [p.year for p in result.historical] == [2020, 2021, 2022]
    assert [p.year for p in result.projected] == [2023]


def test_trailing_absent_year_is_filled_by_projection():
    ts = TimeSeries.from_mapping({2010: 1.0, 2011: 2.0, 2012: None, 2013: None})
    result = forecast(ts, 1)

    assert [(p.year, p.is_forecast) for p in result.points] == [
        (2010, False), (2011, False), (2012, True), (2013, False),
    ]
    assert result.points[2].forecast_value == pytest.approx(3.0)


def test_flat_series_projects_flat():
    ts = TimeSeries.from_mapping({2000: 7.0, 2001: 7.0, 2002: 7.0})
    result = forecast(ts, 2)
    assert result.slope == 0.0
    assert [p.forecast_value for p in result.projected] == [7.0, 7.0]


def test_single_point_is_insufficient():
    ts = TimeSeries.from_mapping({2020: 5.0})
    with pytest.raises(InsufficientDataError):
        forecast(ts, 3)


def test_single_present_point_is_insufficient():
    ts = TimeSeries.from_mapping({2020: 5.0, 2021: None})
    with pytest.raises(InsufficientDataError):
        forecast(ts, 3)


@pytest.mark.parametrize("horizon", [0, -2, 1.5, True, "3", None])
def test_bad_horizon_rejected(history, horizon):
    with pytest.raises(InvalidParameterError):
        ForecastEngine.forecast(history, horizon)


def test_to_dict_wire_shape(history):
    payload = forecast(history, 1).to_dict()

    assert payload["slope"] == pytest.approx(10.5)
    assert payload["baseValue"] == 130.0
    assert payload["forecastYears"] == 1
    assert payload["series"][0] == {
        "year": 2018, "value": 100.0, "forecastValue": 100.0, "isForcast": False,
    }
    assert payload["series"][-1]["isForcast"] is True
    assert payload["series"][-1]["value"] is None
