"""Indicators - summary figures, trend and forecast for a question."""
import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from indicator_analytics.config import GEOGRAPHIES, settings
from indicator_analytics.core.catalog import indicator_name
from indicator_analytics.core.exceptions import AnalyticsError
from indicator_analytics.graph.connection import GraphStoreError
from indicator_analytics.graph.repository import GraphRepository
from indicator_analytics.service import AnalyticsService

st.set_page_config(page_title="Indicators | Indicator Analytics", page_icon="📈", layout="wide")
st.title("📈 Indicator Summary")

service = AnalyticsService(GraphRepository())

st.sidebar.header("Configuration")

geo_codes = list(GEOGRAPHIES.keys())
geo = st.sidebar.selectbox(
    "Geography", geo_codes,
    index=geo_codes.index(settings.default_geo_code),
    format_func=lambda c: f"{GEOGRAPHIES[c].name} ({c})",
)
yr = st.sidebar.slider("Years", 1990, 2030, (2015, 2025))
horizon = st.sidebar.number_input(
    "Forecast years", min_value=1, max_value=settings.max_forecast_horizon,
    value=settings.default_forecast_years,
)

question = st.text_input("Question", "How did GDP change over the last decade?")

if not question.strip():
    st.info("Type a question mentioning an indicator, e.g. literacy, water or GDP.")
    st.stop()

try:
    payload = service.ask(question, geo, yr[0], yr[1])
except (AnalyticsError, GraphStoreError) as e:
    st.error(str(e))
    st.stop()

for indicator in payload["indicators"]:
    summary = payload["summary"][indicator]
    records = payload["series"][indicator]

    st.markdown(f"### {indicator_name(indicator)}")

    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Mean", "n/a" if summary["mean"] is None else f"{summary['mean']:,.2f}")
    c2.metric("% Change", "n/a" if summary["pct_change"] is None else f"{summary['pct_change']:+.1f}%")
    c3.metric("Trend Slope", "n/a" if summary["slope"] is None else f"{summary['slope']:.4f}")
    c4.metric("Data Points", summary["count"])

    if not records:
        st.warning("No data found for this indicator and geography.")
        continue

    fig = go.Figure()
    df = pd.DataFrame(records)
    fig.add_trace(go.Scatter(x=df["year"], y=df["value"], mode="lines+markers", name="Historical"))

    if st.checkbox("Show forecast", key=f"fc_{indicator}") and summary["count"] >= 2:
        try:
            result = service.forecast(records, int(horizon))
        except AnalyticsError as e:
            st.warning(str(e))
        else:
            fdf = pd.DataFrame([p.to_dict() for p in result.points])
            # connect the projection to the last historical point
            fdf = fdf[fdf["isForcast"] | (fdf["year"] == result.base_year)]
            fig.add_trace(go.Scatter(
                x=fdf["year"], y=fdf["forecastValue"], mode="lines+markers",
                name="Forecast", line=dict(dash="dash"),
            ))
            st.caption(f"Slope {result.slope:.4f} per period from {result.base_value:,.2f} ({result.base_year})")

    fig.update_layout(xaxis_title="Year", yaxis_title="Value", hovermode="x unified", height=420)
    st.plotly_chart(fig, use_container_width=True)
