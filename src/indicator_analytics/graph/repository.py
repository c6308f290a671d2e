"""
Graph-backed observation repository.

Runs the fixed set of Cypher queries the dashboard needs and returns core
value types. The schema is:

    (:Series {indicator, year, value})-[:MEASURED_IN]->(:Country|:State|:District)
    (:State)-[:IN_COUNTRY]->(:Country)
    (:District)-[:IN_STATE]->(:State)
    (:Indicator {id, name, unit})
"""

import logging
from typing import Any, Protocol

from neo4j import Driver
from neo4j.exceptions import DriverError, Neo4jError

from indicator_analytics.core.catalog import (
    GeographyTree,
    GeoNode,
    IndicatorInfo,
    node_label_for,
)
from indicator_analytics.core.exceptions import InvalidParameterError
from indicator_analytics.core.timeseries import TimeSeries
from indicator_analytics.graph.connection import GraphStoreError, session_scope

logger = logging.getLogger(__name__)


SERIES_QUERY = """
MATCH (g:{label} {{code: $geoCode}})<-[:MEASURED_IN]-(s:Series {{indicator: $indicator}})
WHERE s.value IS NOT NULL {year_filter}
RETURN s.year AS year, s.value AS value, g.name AS geoName
ORDER BY year
"""

YEAR_FILTER = "AND s.year >= $startYear AND s.year <= $endYear"

GEOGRAPHY_QUERY = """
MATCH (c:Country)
OPTIONAL MATCH (c)<-[:IN_COUNTRY]-(s:State)
OPTIONAL MATCH (s)<-[:IN_STATE]-(d:District)
RETURN
  c.code AS countryCode, c.name AS countryName,
  collect(DISTINCT {code: s.code, name: s.name}) AS states,
  collect(DISTINCT {code: d.code, name: d.name, stateCode: s.code}) AS districts
"""

INDICATORS_QUERY = """
MATCH (i:Indicator)
RETURN i.id AS id, i.name AS name, i.unit AS unit
ORDER BY i.name
"""

GEO_NAME_QUERY = """
MATCH (g:{label} {{code: $geoCode}})
RETURN g.name AS name
LIMIT 1
"""


class SeriesRepository(Protocol):
    """Source of observations and catalog data."""

    def get_series(
        self,
        indicator: str,
        geo_code: str,
        start_year: int | None = None,
        end_year: int | None = None,
    ) -> TimeSeries: ...

    def get_geography(self) -> GeographyTree: ...

    def list_indicators(self) -> list[IndicatorInfo]: ...

    def geography_name(self, geo_code: str) -> str | None: ...


class GraphRepository:
    """
    SeriesRepository backed by Neo4j.
    """

    def __init__(self, driver: Driver | None = None):
        self._driver = driver

    def _run(self, query: str, **params: Any) -> list[dict[str, Any]]:
        try:
            with session_scope(self._driver) as session:
                result = session.run(query, params)
                return [record.data() for record in result]
        except (DriverError, Neo4jError) as exc:
            logger.error("Graph query failed: %s", exc)
            raise GraphStoreError(str(exc)) from exc

    def get_series(
        self,
        indicator: str,
        geo_code: str,
        start_year: int | None = None,
        end_year: int | None = None,
    ) -> TimeSeries:
        """
        Fetch the observations of one indicator for one geography.

        The year range is applied only when both bounds are given.
        """
        params: dict[str, Any] = {"indicator": indicator, "geoCode": geo_code}
        year_filter = ""
        if start_year is not None and end_year is not None:
            if start_year > end_year:
                raise InvalidParameterError(
                    "year range", f"start year {start_year} is after end year {end_year}"
                )
            year_filter = YEAR_FILTER
            params["startYear"] = int(start_year)
            params["endYear"] = int(end_year)

        query = SERIES_QUERY.format(label=node_label_for(geo_code), year_filter=year_filter)
        rows = self._run(query, **params)

        geo_name = rows[0].get("geoName") if rows else None
        logger.debug("Fetched %d observations for %s/%s", len(rows), indicator, geo_code)
        return TimeSeries.from_records(
            rows,
            label=indicator,
            indicator=indicator,
            geo_code=geo_code,
            geo_name=geo_name,
        )

    def get_geography(self) -> GeographyTree:
        """Country with its states and districts."""
        rows = self._run(GEOGRAPHY_QUERY)
        if not rows:
            return GeographyTree()

        row = rows[0]
        return GeographyTree(
            country=GeoNode(row["countryCode"], row["countryName"]),
            states=[
                GeoNode(s["code"], s["name"])
                for s in row.get("states") or []
                if s.get("code") is not None
            ],
            districts=[
                GeoNode(d["code"], d["name"], d.get("stateCode"))
                for d in row.get("districts") or []
                if d.get("code") is not None
            ],
        )

    def list_indicators(self) -> list[IndicatorInfo]:
        """All indicators ordered by name."""
        return [
            IndicatorInfo(row["id"], row["name"], row.get("unit") or "")
            for row in self._run(INDICATORS_QUERY)
        ]

    def geography_name(self, geo_code: str) -> str | None:
        rows = self._run(
            GEO_NAME_QUERY.format(label=node_label_for(geo_code)), geoCode=geo_code
        )
        return rows[0]["name"] if rows else None
