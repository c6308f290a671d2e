"""
HTTP API package for Indicator Analytics.
"""

from indicator_analytics.api.app import app, create_app

__all__ = ["app", "create_app"]
