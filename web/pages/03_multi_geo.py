"""Multi-Geography - one indicator across geographies."""
import plotly.graph_objects as go
import streamlit as st

from indicator_analytics.config import GEOGRAPHIES, INDICATORS, settings
from indicator_analytics.core.catalog import indicator_name
from indicator_analytics.core.exceptions import AnalyticsError
from indicator_analytics.graph.connection import GraphStoreError
from indicator_analytics.graph.repository import GraphRepository
from indicator_analytics.service import AnalyticsService

st.set_page_config(page_title="Multi-Geography | Indicator Analytics", page_icon="🗺️", layout="wide")
st.title("🗺️ Multi-Geography Analysis")

service = AnalyticsService(GraphRepository())

st.sidebar.header("Configuration")

indicators = list(INDICATORS.keys())
indicator = st.sidebar.selectbox(
    "Indicator", indicators,
    index=indicators.index(settings.default_indicator),
    format_func=indicator_name,
)
sel_geos = st.sidebar.multiselect(
    "Geographies", list(GEOGRAPHIES.keys()),
    default=[settings.default_geo_code],
    format_func=lambda c: f"{GEOGRAPHIES[c].name} ({c})",
)
yr = st.sidebar.slider("Years", 1990, 2030, (2015, 2025))

if not sel_geos:
    st.info("👈 Select at least one **Geography**.")
    st.stop()

try:
    payload = service.multi_geo(indicator, sel_geos, yr[0], yr[1])
except (AnalyticsError, GraphStoreError) as e:
    st.error(str(e))
    st.stop()

if not payload["merged"]:
    st.warning("No data found for the selected filters.")
    st.stop()

years = [row["year"] for row in payload["merged"]]
fig = go.Figure()
for geo in payload["geoCodes"]:
    fig.add_trace(go.Scatter(
        x=years,
        y=[row[geo] for row in payload["merged"]],
        mode="lines+markers",
        name=GEOGRAPHIES[geo].name if geo in GEOGRAPHIES else geo,
        connectgaps=False,
    ))
fig.update_layout(xaxis_title="Year", yaxis_title=indicator_name(indicator),
                  hovermode="x unified", height=500)
st.plotly_chart(fig, use_container_width=True)

st.markdown("### Summary")
st.dataframe(
    [{"Geography": geo, **summary} for geo, summary in payload["summary"].items()],
    use_container_width=True,
    hide_index=True,
)
