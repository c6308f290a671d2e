"""Compare - correlation of two indicators."""
import pandas as pd
import plotly.graph_objects as go
import streamlit as st
from plotly.subplots import make_subplots

from indicator_analytics.config import GEOGRAPHIES, INDICATORS, settings
from indicator_analytics.core.catalog import indicator_name
from indicator_analytics.core.exceptions import AnalyticsError
from indicator_analytics.graph.connection import GraphStoreError
from indicator_analytics.graph.repository import GraphRepository
from indicator_analytics.service import AnalyticsService

st.set_page_config(page_title="Compare | Indicator Analytics", page_icon="🔗", layout="wide")
st.title("🔗 Compare Indicators")

service = AnalyticsService(GraphRepository())

st.sidebar.header("Configuration")

geo_codes = list(GEOGRAPHIES.keys())
geo = st.sidebar.selectbox(
    "Geography", geo_codes,
    index=geo_codes.index(settings.default_geo_code),
    format_func=lambda c: f"{GEOGRAPHIES[c].name} ({c})",
)

sel_inds = st.sidebar.multiselect(
    "Indicators (select 2)", list(INDICATORS.keys()),
    format_func=indicator_name, max_selections=2,
)

if len(sel_inds) != 2:
    st.info("👈 Select exactly two **Indicators** to compare.")
    st.stop()

try:
    result = service.compare(sel_inds, geo)
    merged = service.compare_series(sel_inds, geo)
except (AnalyticsError, GraphStoreError) as e:
    st.error(str(e))
    st.stop()

c1, c2, c3 = st.columns(3)
c1.metric("Pearson Coefficient", f"{result['correlation']:+.4f}")
c2.metric("Strength", result["strength"])
c3.metric("Data Points", result["dataPoints"])

df = pd.DataFrame(merged["series"])
first, second = sel_inds

fig = make_subplots(specs=[[{"secondary_y": True}]])
fig.add_trace(go.Scatter(x=df["year"], y=df[first], mode="lines+markers",
    name=indicator_name(first)), secondary_y=False)
fig.add_trace(go.Scatter(x=df["year"], y=df[second], mode="lines+markers",
    name=indicator_name(second)), secondary_y=True)
fig.update_layout(xaxis_title="Year", hovermode="x unified", height=500)
fig.update_yaxes(title_text=indicator_name(first), secondary_y=False)
fig.update_yaxes(title_text=indicator_name(second), secondary_y=True)
st.plotly_chart(fig, use_container_width=True)

st.dataframe(df, use_container_width=True, hide_index=True)
st.download_button("📥 CSV", df.to_csv(index=False), "comparison.csv", "text/csv")
