"""
Graph database package for Indicator Analytics.
"""

from indicator_analytics.graph.connection import (
    GraphStoreError,
    check_connection,
    close_driver,
    get_driver,
    session_scope,
)
from indicator_analytics.graph.repository import GraphRepository, SeriesRepository

__all__ = [
    "GraphRepository",
    "SeriesRepository",
    "GraphStoreError",
    "get_driver",
    "close_driver",
    "session_scope",
    "check_connection",
]
