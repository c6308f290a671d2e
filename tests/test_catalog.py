import pytest

from indicator_analytics.config import settings
from indicator_analytics.core.catalog import (
    GeographyTree,
    GeoNode,
    indicator_name,
    node_label_for,
    select_indicators,
    static_geography,
    static_indicators,
)
from indicator_analytics.core.exceptions import InvalidParameterError


@pytest.mark.parametrize("code,label", [
    ("IN", "Country"),
    ("KA", "State"),
    ("tn", "State"),
    ("BLR", "District"),
    ("CHE", "District"),
    ("XX", "Country"),
])
def test_node_label_for(code, label):
    assert node_label_for(code) == label


def test_select_indicators_by_keyword():
    assert select_indicators("How did GDP change?") == ["gdp_per_capita"]
    assert select_indicators("Rural LITERACY vs clean water") == [
        "rural_literacy_rate",
        "clean_water_access",
    ]


def test_select_indicators_keeps_first_match_order_without_duplicates():
    # "unemployment" contains "employment", both indicators are picked
    assert select_indicators("unemployment and gdp per capita") == [
        "employment_rate",
        "gdp_per_capita",
        "unemployment_rate",
    ]


def test_select_indicators_default():
    assert select_indicators("what about tourism?") == [settings.default_indicator]
    assert select_indicators("nothing here", default="employment_rate") == ["employment_rate"]


def test_select_indicators_empty_question():
    with pytest.raises(InvalidParameterError):
        select_indicators("   ")


def test_static_catalog():
    names = [i.name for i in static_indicators()]
    assert names == sorted(names)
    assert indicator_name("gdp_per_capita") == "GDP per capita"
    assert indicator_name("unknown") == "unknown"


def test_geography_tree():
    tree = static_geography()
    assert tree.country.code == "IN"

    district = next(d for d in tree.to_dict()["districts"] if d["code"] == "MUM")
    assert district["stateCode"] == "MH"


def test_empty_geography_tree():
    assert GeographyTree().to_dict() == {"country": None, "states": [], "districts": []}
    assert GeoNode("KA", "Karnataka").to_dict() == {"code": "KA", "name": "Karnataka"}
