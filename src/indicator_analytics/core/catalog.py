"""
Indicator Catalog - indicator metadata, geography hierarchy and keyword lookup.

Catalog entries only label outputs; they never change a computation.
"""

from dataclasses import dataclass, field
from typing import Any

from indicator_analytics.config import (
    GEOGRAPHIES,
    INDICATOR_KEYWORDS,
    INDICATORS,
    GeoLevel,
    settings,
)
from indicator_analytics.core.exceptions import InvalidParameterError


@dataclass(frozen=True)
class IndicatorInfo:
    """Indicator metadata."""
    id: str
    name: str
    unit: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "unit": self.unit}


@dataclass(frozen=True)
class GeoNode:
    """A geography entry in the hierarchy."""
    code: str
    name: str
    parent: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"code": self.code, "name": self.name}
        if self.parent is not None:
            data["stateCode"] = self.parent
        return data


@dataclass
class GeographyTree:
    """Country with its states and districts."""
    country: GeoNode | None = None
    states: list[GeoNode] = field(default_factory=list)
    districts: list[GeoNode] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "country": self.country.to_dict() if self.country else None,
            "states": [s.to_dict() for s in self.states],
            "districts": [d.to_dict() for d in self.districts],
        }


def node_label_for(geo_code: str) -> str:
    """
    Graph node label for a geography code.

    Unknown codes fall back to Country.
    """
    geo = GEOGRAPHIES.get(geo_code.upper())
    return (geo.level if geo else GeoLevel.COUNTRY).value


def select_indicators(question: str, default: str | None = None) -> list[str]:
    """
    Pick indicators mentioned in a free-text question by keyword.

    Matching is case-insensitive substring containment. Duplicates keep the
    position of their first match. Returns ``[default]`` when nothing matches.
    """
    if not question or not question.strip():
        raise InvalidParameterError("question", "must not be empty")

    lowered = question.lower()
    selected: list[str] = []
    for keyword, indicator in INDICATOR_KEYWORDS.items():
        if keyword in lowered and indicator not in selected:
            selected.append(indicator)

    return selected or [default or settings.default_indicator]


def static_indicators() -> list[IndicatorInfo]:
    """Indicators known to the application, ordered by name."""
    infos = [IndicatorInfo(code, name, unit) for code, (name, unit) in INDICATORS.items()]
    return sorted(infos, key=lambda i: i.name)


def indicator_name(indicator: str) -> str:
    entry = INDICATORS.get(indicator)
    return entry[0] if entry else indicator


def static_geography() -> GeographyTree:
    """Geography hierarchy from the built-in table."""
    tree = GeographyTree()
    for geo in GEOGRAPHIES.values():
        if geo.level == GeoLevel.COUNTRY and tree.country is None:
            tree.country = GeoNode(geo.code, geo.name)
        elif geo.level == GeoLevel.STATE:
            tree.states.append(GeoNode(geo.code, geo.name))
        elif geo.level == GeoLevel.DISTRICT:
            tree.districts.append(GeoNode(geo.code, geo.name, geo.parent))
    return tree
