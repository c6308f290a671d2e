import math

import pytest

from indicator_analytics.core.exceptions import InvalidParameterError
from indicator_analytics.core.timeseries import Observation, TimeSeries


def test_from_mapping_sorts_by_year():
    ts = TimeSeries.from_mapping({2022: 3, 2020: 1, 2021: 2}, label="x")
    assert ts.years == [2020, 2021, 2022]
    assert ts.values == [1.0, 2.0, 3.0]
    assert ts.label == "x"


def test_duplicate_years_rejected():
    with pytest.raises(InvalidParameterError):
        TimeSeries.from_pairs([(2020, 1), (2020, 2)])


def test_unsorted_direct_construction_rejected():
    with pytest.raises(InvalidParameterError):
        TimeSeries((Observation(2021, 1.0), Observation(2020, 2.0)))


def test_absent_is_not_zero():
    ts = TimeSeries.from_mapping({2020: 0.0, 2021: None, 2022: math.nan})
    assert ts.values == [0.0, None, None]
    assert ts.present().years == [2020]
    assert list(ts.present_values()) == [0.0]


def test_from_records():
    ts = TimeSeries.from_records([
        {"year": 2001, "value": "4.5"},
        {"year": "2000", "value": 3},
        {"year": 2002},
    ])
    assert ts.years == [2000, 2001, 2002]
    assert ts.values == [3.0, 4.5, None]


def test_from_records_requires_year():
    with pytest.raises(InvalidParameterError):
        TimeSeries.from_records([{"value": 1}])


@pytest.mark.parametrize("year", [2020.5, "abc", None, True])
def test_bad_year_rejected(year):
    with pytest.raises(InvalidParameterError):
        TimeSeries.from_pairs([(year, 1.0)])


def test_non_numeric_and_infinite_values_rejected():
    with pytest.raises(InvalidParameterError):
        TimeSeries.from_pairs([(2020, "lots")])
    with pytest.raises(InvalidParameterError):
        TimeSeries.from_pairs([(2020, math.inf)])


def test_between():
    ts = TimeSeries.from_mapping({y: float(y) for y in range(2010, 2020)})
    assert ts.between(2012, 2014).years == [2012, 2013, 2014]
    assert ts.between(start_year=2018).years == [2018, 2019]
    with pytest.raises(InvalidParameterError):
        ts.between(2015, 2012)


def test_to_pandas():
    ts = TimeSeries.from_mapping({2020: 1.0, 2021: None}, label="gdp")
    s = ts.to_pandas()
    assert s.name == "gdp"
    assert s.index.tolist() == [2020, 2021]
    assert math.isnan(s.loc[2021])


def test_value_semantics():
    a = TimeSeries.from_mapping({2020: 1.0}, label="x", source="a")
    b = TimeSeries.from_mapping({2020: 1.0}, label="x", source="b")
    assert a == b
    assert a.to_records() == [{"year": 2020, "value": 1.0}]
