"""Indicator Analytics - Home Page."""
import streamlit as st

from indicator_analytics.config import settings
from indicator_analytics.graph.connection import GraphStoreError, check_connection
from indicator_analytics.graph.repository import GraphRepository
from indicator_analytics.service import AnalyticsService

st.set_page_config(page_title="Indicator Analytics", page_icon="📊", layout="wide")

st.title("📊 Indicator Analytics")
st.markdown("### Socio-economic indicators by country, state and district")

st.markdown("""
Query indicator time series, compare two indicators and project them forward:

- **Indicators** - summary figures, trend and linear forecast for the indicators a question mentions
- **Compare** - Pearson correlation of two indicators over their common years
- **Multi-Geography** - one indicator across several geographies

Use the sidebar to navigate between pages.
""")

st.markdown("---")

col1, col2 = st.columns(2)

with col1:
    st.markdown("### 🔌 Data Status")
    if check_connection():
        st.success("✅ Graph database connected")
        st.caption(settings.neo4j_uri)
    else:
        st.error(f"Cannot reach graph database at {settings.neo4j_uri}")

with col2:
    st.markdown("### 📚 Indicators")
    try:
        indicators = AnalyticsService(GraphRepository()).indicators()
        st.dataframe(
            [{"ID": i.id, "Name": i.name, "Unit": i.unit} for i in indicators],
            use_container_width=True,
            hide_index=True,
        )
    except GraphStoreError as e:
        st.error(f"Query error: {e}")

st.markdown("---")
st.caption("Built with Streamlit | Data from the indicator graph")
