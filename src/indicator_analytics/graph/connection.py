"""
Graph database connection management for Indicator Analytics.
"""

import logging
from contextlib import contextmanager
from typing import Generator

from neo4j import Driver, GraphDatabase, Session
from neo4j.exceptions import DriverError, Neo4jError

from indicator_analytics.config import settings

logger = logging.getLogger(__name__)

# Global driver instance
_driver: Driver | None = None


class GraphStoreError(RuntimeError):
    """The graph database could not answer a query."""


def get_driver() -> Driver:
    """
    Get or create the Neo4j driver.

    Returns:
        Neo4j Driver instance shared by the process.
    """
    global _driver
    if _driver is None:
        logger.info("Connecting to graph database at %s", settings.neo4j_uri)
        _driver = GraphDatabase.driver(
            settings.neo4j_uri,
            auth=settings.neo4j_auth,
            connection_timeout=settings.neo4j_connection_timeout,
        )
    return _driver


def close_driver() -> None:
    """Close the shared driver, if one was created."""
    global _driver
    if _driver is not None:
        _driver.close()
        _driver = None


@contextmanager
def session_scope(driver: Driver | None = None) -> Generator[Session, None, None]:
    """
    Provide a session that is always closed.

    Usage:
        with session_scope() as session:
            session.run("MATCH (n) RETURN count(n)")
    """
    session = (driver or get_driver()).session(database=settings.neo4j_database)
    try:
        yield session
    finally:
        session.close()


def check_connection(driver: Driver | None = None) -> bool:
    """
    Check if the graph database is reachable.

    Returns:
        True if connection is successful, False otherwise.
    """
    try:
        (driver or get_driver()).verify_connectivity()
        return True
    except (DriverError, Neo4jError, OSError) as exc:
        logger.warning("Graph database unreachable: %s", exc)
        return False


def get_node_counts(driver: Driver | None = None) -> dict[str, int]:
    """
    Get node counts for the main labels.

    Returns:
        Dictionary mapping node labels to counts.
    """
    labels = ["Country", "State", "District", "Indicator", "Series"]
    counts = {}

    try:
        with session_scope(driver) as session:
            for label in labels:
                record = session.run(f"MATCH (n:{label}) RETURN count(n) AS n").single()
                counts[label] = record["n"] if record else 0
    except (DriverError, Neo4jError) as exc:
        logger.error("Node count query failed: %s", exc)
        raise GraphStoreError(str(exc)) from exc

    return counts
