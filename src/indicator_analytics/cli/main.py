"""
CLI for Indicator Analytics.

Usage:
    indicator-analytics graph status          # Check graph database connection
    indicator-analytics catalog indicators    # List indicators
    indicator-analytics analyze summary ...   # Summarize indicators
    indicator-analytics serve                 # Start the HTTP API
    indicator-analytics web                   # Start web dashboard
"""

from typing import Annotated, Optional

import typer
from rich import print as rprint
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from indicator_analytics import __version__
from indicator_analytics.config import WEB_DIR, configure_logging, settings
from indicator_analytics.core.exceptions import AnalyticsError
from indicator_analytics.graph.connection import GraphStoreError

# Initialize Typer app
app = typer.Typer(
    name="indicator-analytics",
    help="Indicator Analytics - socio-economic indicator time series",
    add_completion=False,
)

# Sub-commands
graph_app = typer.Typer(help="Graph database commands")
catalog_app = typer.Typer(help="Browse indicators and geographies")
analyze_app = typer.Typer(help="Statistical analysis and forecasting")

app.add_typer(graph_app, name="graph")
app.add_typer(catalog_app, name="catalog")
app.add_typer(analyze_app, name="analyze")

console = Console()


def get_service():
    """Service bound to the graph repository."""
    from indicator_analytics.graph.repository import GraphRepository
    from indicator_analytics.service import AnalyticsService

    return AnalyticsService(GraphRepository())


def _fmt(value: float | None, spec: str = ",.2f") -> str:
    return "n/a" if value is None else format(value, spec)


def _fail(exc: Exception) -> None:
    rprint(f"[red]Error: {exc}[/red]")
    raise typer.Exit(1)


def _split(values: str) -> list[str]:
    return [v.strip() for v in values.split(",") if v.strip()]


# =============================================================================
# VERSION CALLBACK
# =============================================================================


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        rprint(f"[bold blue]Indicator Analytics[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option("--version", "-v", callback=version_callback, is_eager=True),
    ] = None,
    log_level: Annotated[
        Optional[str],
        typer.Option("--log-level", help="Logging level"),
    ] = None,
) -> None:
    """Indicator Analytics - query, compare and project indicators."""
    configure_logging(log_level)


# =============================================================================
# GRAPH COMMANDS
# =============================================================================


@graph_app.command("status")
def graph_status() -> None:
    """Check graph database connection and show node counts."""
    from indicator_analytics.graph.connection import check_connection, get_node_counts

    with console.status("[bold green]Checking connection..."):
        connected = check_connection()

    if not connected:
        rprint("[red]Error: Cannot connect to graph database![/red]")
        rprint(f"\nNeo4j URI: {settings.neo4j_uri}")
        raise typer.Exit(1)

    rprint("[green]Graph database connection OK[/green]\n")

    try:
        counts = get_node_counts()
    except GraphStoreError as e:
        rprint(f"[yellow]Could not get node counts: {e}[/yellow]")
        return

    table = Table(title="Node Counts")
    table.add_column("Label", style="cyan")
    table.add_column("Nodes", justify="right", style="green")
    for label, count in counts.items():
        table.add_row(label, f"{count:,}")
    console.print(table)


@graph_app.command("uri")
def graph_uri() -> None:
    """Show graph database connection URI."""
    rprint(f"[cyan]Neo4j URI:[/cyan] {settings.neo4j_uri}")


# =============================================================================
# CATALOG COMMANDS
# =============================================================================


@catalog_app.command("indicators")
def catalog_indicators() -> None:
    """List indicators stored in the graph."""
    service = get_service()
    try:
        indicators = service.indicators()
    except GraphStoreError as e:
        _fail(e)

    table = Table(title=f"Indicators ({len(indicators)})")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Unit", style="dim")
    for info in indicators:
        table.add_row(info.id, info.name, info.unit)
    console.print(table)


@catalog_app.command("geography")
def catalog_geography() -> None:
    """Show the geography hierarchy."""
    service = get_service()
    try:
        tree = service.geography()
    except GraphStoreError as e:
        _fail(e)

    table = Table(title=f"{tree.country.name} ({tree.country.code})")
    table.add_column("Level", style="cyan")
    table.add_column("Code", style="green")
    table.add_column("Name")
    table.add_column("Parent", style="dim")
    for state in tree.states:
        table.add_row("State", state.code, state.name, tree.country.code)
    for district in tree.districts:
        table.add_row("District", district.code, district.name, district.parent or "")
    console.print(table)


@catalog_app.command("match")
def catalog_match(
    question: Annotated[str, typer.Argument(help="Free-text question")],
) -> None:
    """Show which indicators a question selects."""
    from indicator_analytics.core.catalog import indicator_name, select_indicators

    try:
        selected = select_indicators(question)
    except AnalyticsError as e:
        _fail(e)

    for indicator in selected:
        rprint(f"  [cyan]{indicator}[/cyan] - {indicator_name(indicator)}")


# =============================================================================
# ANALYSIS COMMANDS
# =============================================================================


@analyze_app.command("summary")
def analyze_summary(
    question: Annotated[str, typer.Argument(help="Question naming the indicators")],
    geo_code: Annotated[str, typer.Option("--geo", "-g")] = settings.default_geo_code,
    start_year: Annotated[Optional[int], typer.Option("--start", "-s")] = None,
    end_year: Annotated[Optional[int], typer.Option("--end", "-e")] = None,
) -> None:
    """
    Summarize the indicators a question mentions.

    Example:
        indicator-analytics analyze summary "literacy and gdp" -g KA
    """
    with console.status("Summarizing..."):
        try:
            payload = get_service().ask(question, geo_code.upper(), start_year, end_year)
        except (AnalyticsError, GraphStoreError) as e:
            _fail(e)

    table = Table(title=f"Summary ({payload['geoCode']})")
    table.add_column("Indicator", style="cyan")
    table.add_column("Points", justify="right")
    table.add_column("Mean", justify="right", style="green")
    table.add_column("% Change", justify="right")
    table.add_column("Slope", justify="right")
    table.add_column("Earliest", justify="right", style="dim")
    table.add_column("Latest", justify="right", style="dim")

    for indicator, summary in payload["summary"].items():
        table.add_row(
            indicator,
            str(summary["count"]),
            _fmt(summary["mean"]),
            _fmt(summary["pct_change"], "+.1f"),
            _fmt(summary["slope"], ".4f"),
            _fmt(summary["earliest"]),
            _fmt(summary["latest"]),
        )

    console.print(table)


@analyze_app.command("compare")
def analyze_compare(
    indicator1: Annotated[str, typer.Argument(help="First indicator id")],
    indicator2: Annotated[str, typer.Argument(help="Second indicator id")],
    geo_code: Annotated[str, typer.Option("--geo", "-g")] = settings.default_geo_code,
) -> None:
    """
    Correlate two indicators over their common years.

    Example:
        indicator-analytics analyze compare gdp_per_capita rural_literacy_rate
    """
    with console.status("Calculating correlation..."):
        try:
            result = get_service().correlate([indicator1, indicator2], geo_code.upper())
        except (AnalyticsError, GraphStoreError) as e:
            _fail(e)

    r = result.correlation
    if abs(r) > 0.7:
        color = "green" if r > 0 else "red"
    elif abs(r) > 0.4:
        color = "yellow"
    else:
        color = "dim"

    panel = Panel.fit(
        f"""[bold]Correlation Analysis[/bold]

Indicator 1: {indicator1}
Indicator 2: {indicator2}
Geography: {geo_code.upper()}

[{color}]Pearson r: {r:+.4f}[/{color}]
Strength: {result.strength} ({result.direction})
Common years: {result.n_observations}
""",
        title="Correlation",
        border_style=color,
    )
    console.print(panel)


@analyze_app.command("forecast")
def analyze_forecast(
    indicator: Annotated[str, typer.Argument(help="Indicator id")],
    geo_code: Annotated[str, typer.Option("--geo", "-g")] = settings.default_geo_code,
    periods: Annotated[int, typer.Option("--periods", "-p")] = settings.default_forecast_years,
    start_year: Annotated[Optional[int], typer.Option("--start", "-s")] = None,
    end_year: Annotated[Optional[int], typer.Option("--end", "-e")] = None,
) -> None:
    """
    Forecast an indicator along its linear trend.

    Example:
        indicator-analytics analyze forecast gdp_per_capita -g MH -p 5
    """
    horizon = max(1, min(periods, settings.max_forecast_horizon))
    if horizon != periods:
        rprint(f"[yellow]Forecast horizon clamped to {horizon} years[/yellow]")

    with console.status("Generating forecast..."):
        try:
            result = get_service().forecast_indicator(
                indicator, geo_code.upper(), horizon, start_year, end_year
            )
        except (AnalyticsError, GraphStoreError) as e:
            _fail(e)

    table = Table(title=f"Forecast: {indicator} ({geo_code.upper()})")
    table.add_column("Year", style="cyan", justify="right")
    table.add_column("Value", justify="right")
    table.add_column("Projected", justify="right", style="green")

    for point in result.historical:
        table.add_row(str(point.year), _fmt(point.value), _fmt(point.forecast_value))
    table.add_section()
    for point in result.projected:
        table.add_row(str(point.year), "", _fmt(point.forecast_value))

    console.print(table)
    rprint(f"\n[cyan]Slope:[/cyan] {result.slope:.4f} per period")
    rprint(f"[cyan]Base:[/cyan] {result.base_value:,.2f} ({result.base_year})")


@analyze_app.command("multi-geo")
def analyze_multi_geo(
    indicator: Annotated[str, typer.Argument(help="Indicator id")],
    geo_codes: Annotated[str, typer.Argument(help="Comma-separated geography codes")],
    start_year: Annotated[Optional[int], typer.Option("--start", "-s")] = None,
    end_year: Annotated[Optional[int], typer.Option("--end", "-e")] = None,
) -> None:
    """
    Compare one indicator across geographies.

    Example:
        indicator-analytics analyze multi-geo rural_literacy_rate IN,KA,TN
    """
    codes = [c.upper() for c in _split(geo_codes)]

    with console.status("Fetching series..."):
        try:
            payload = get_service().multi_geo(indicator, codes, start_year, end_year)
        except (AnalyticsError, GraphStoreError) as e:
            _fail(e)

    if not payload["merged"]:
        rprint("[yellow]No data to show.[/yellow]")
        return

    table = Table(title=f"{indicator} by geography")
    table.add_column("Year", style="cyan", justify="right")
    for geo in payload["geoCodes"]:
        table.add_column(geo, justify="right")

    for row in payload["merged"]:
        table.add_row(str(row["year"]), *(_fmt(row[geo]) for geo in payload["geoCodes"]))

    console.print(table)


# =============================================================================
# SERVERS
# =============================================================================


@app.command("serve")
def serve(
    host: Annotated[str, typer.Option("--host")] = settings.api_host,
    port: Annotated[int, typer.Option("--port", "-p")] = settings.api_port,
    reload: Annotated[bool, typer.Option("--reload")] = False,
) -> None:
    """Start the HTTP API."""
    import uvicorn

    rprint(f"[green]API listening on http://{host}:{port}[/green]")
    uvicorn.run("indicator_analytics.api.app:app", host=host, port=port, reload=reload)


@app.command("web")
def start_web(
    port: Annotated[int, typer.Option("--port", "-p", help="Port number")] = 8501,
    host: Annotated[str, typer.Option("--host", "-h", help="Host address")] = "localhost",
) -> None:
    """Start the Streamlit web dashboard."""
    import subprocess
    import sys

    web_app = WEB_DIR / "app.py"

    rprint("\n[bold blue]Starting Indicator Dashboard[/bold blue]")
    rprint(f"  URL: http://{host}:{port}\n")

    try:
        subprocess.run(
            [
                sys.executable,
                "-m",
                "streamlit",
                "run",
                str(web_app),
                "--server.port",
                str(port),
                "--server.address",
                host,
            ],
            check=True,
        )
    except subprocess.CalledProcessError as e:
        rprint(f"[red]Error starting web server: {e}[/red]")
        raise typer.Exit(1)
    except FileNotFoundError:
        rprint("[red]Streamlit not found. Install with: pip install streamlit[/red]")
        raise typer.Exit(1)


# =============================================================================
# INFO COMMAND
# =============================================================================


@app.command("info")
def show_info() -> None:
    """Show configuration information."""
    from indicator_analytics.config import GEO_CODES, INDICATORS

    panel = Panel.fit(
        f"""[bold]Indicator Analytics[/bold] v{__version__}

[cyan]Graph database:[/cyan]
  URI: {settings.neo4j_uri}
  Database: {settings.neo4j_database}

[cyan]API:[/cyan]
  Listen: {settings.api_host}:{settings.api_port}

[cyan]Configuration:[/cyan]
  Geographies: {len(GEO_CODES)}
  Known indicators: {len(INDICATORS)}
  Default geography: {settings.default_geo_code}
  Forecast horizon: {settings.default_forecast_years} (max {settings.max_forecast_horizon})
""",
        title="Configuration",
        border_style="blue",
    )
    console.print(panel)


if __name__ == "__main__":
    app()
