import pytest
from neo4j.exceptions import ServiceUnavailable
from rich.console import Console
from typer.testing import CliRunner

from indicator_analytics import __version__
from indicator_analytics.cli import main as cli
from indicator_analytics.graph import connection
from indicator_analytics.service import AnalyticsService

runner = CliRunner()


@pytest.fixture(autouse=True)
def fake_service(monkeypatch, repository):
    monkeypatch.setattr(cli, "get_service", lambda: AnalyticsService(repository))
    monkeypatch.setattr(cli, "console", Console(width=200))


def test_version():
    result = runner.invoke(cli.app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_catalog_match():
    result = runner.invoke(cli.app, ["catalog", "match", "rural water"])
    assert result.exit_code == 0
    assert "rural_literacy_rate" in result.stdout
    assert "clean_water_access" in result.stdout


def test_catalog_indicators():
    result = runner.invoke(cli.app, ["catalog", "indicators"])
    assert result.exit_code == 0
    assert "gdp_per_capita" in result.stdout


def test_catalog_geography():
    result = runner.invoke(cli.app, ["catalog", "geography"])
    assert result.exit_code == 0
    assert "Bengaluru" in result.stdout


def test_analyze_summary():
    result = runner.invoke(cli.app, ["analyze", "summary", "clean water"])
    assert result.exit_code == 0
    assert "clean_water_access" in result.stdout
    assert "60.00" in result.stdout


def test_analyze_compare():
    result = runner.invoke(cli.app, ["analyze", "compare", "gdp_per_capita", "rural_literacy_rate"])
    assert result.exit_code == 0
    assert "+1.0000" in result.stdout


def test_analyze_compare_degenerate_exits_nonzero():
    result = runner.invoke(cli.app, ["analyze", "compare", "gdp_per_capita", "employment_rate"])
    assert result.exit_code == 1
    assert "zero variance" in result.stdout


def test_analyze_forecast():
    result = runner.invoke(cli.app, ["analyze", "forecast", "gdp_per_capita", "-p", "2"])
    assert result.exit_code == 0
    assert "2024" in result.stdout
    assert "50.00" in result.stdout


def test_analyze_forecast_clamps_horizon():
    result = runner.invoke(cli.app, ["analyze", "forecast", "gdp_per_capita", "-p", "0"])
    assert result.exit_code == 0
    assert "clamped to 1" in result.stdout


def test_analyze_forecast_insufficient():
    result = runner.invoke(cli.app, ["analyze", "forecast", "infant_mortality_rate"])
    assert result.exit_code == 1
    assert "at least 2" in result.stdout


def test_analyze_multi_geo():
    result = runner.invoke(cli.app, ["analyze", "multi-geo", "gdp_per_capita", "in,ka"])
    assert result.exit_code == 0
    assert "2023" in result.stdout
    assert "n/a" in result.stdout


class DroppedSession:
    def run(self, query, params=None):
        raise ServiceUnavailable("gone")

    def close(self):
        pass


class DroppedDriver:
    def session(self, database=None):
        return DroppedSession()


def test_graph_status_reports_lost_connection(monkeypatch):
    monkeypatch.setattr(connection, "check_connection", lambda driver=None: True)
    monkeypatch.setattr(connection, "get_driver", lambda: DroppedDriver())

    result = runner.invoke(cli.app, ["graph", "status"])
    assert result.exit_code == 0
    assert "Could not get node counts: gone" in result.stdout
