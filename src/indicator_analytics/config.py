"""
Configuration settings and constants for Indicator Analytics.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import NamedTuple

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# =============================================================================
# PATHS
# =============================================================================

PROJECT_ROOT = Path(__file__).parent.parent.parent
WEB_DIR = PROJECT_ROOT / "web"


# =============================================================================
# SETTINGS
# =============================================================================


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Graph database
    neo4j_uri: str = Field(default="bolt://localhost:7687")
    neo4j_user: str = Field(default="neo4j")
    neo4j_password: str = Field(default="password")
    neo4j_database: str = Field(default="neo4j")
    neo4j_connection_timeout: float = Field(default=15.0)

    # API Settings
    api_host: str = Field(default="0.0.0.0")
    api_port: int = Field(default=3000)
    cors_origins: list[str] = Field(default=["*"])

    # Analysis defaults
    default_geo_code: str = Field(default="IN")
    default_indicator: str = Field(default="gdp_per_capita")
    default_forecast_years: int = Field(default=5)
    max_forecast_horizon: int = Field(default=50)

    log_level: str = Field(default="INFO")

    @property
    def neo4j_auth(self) -> tuple[str, str]:
        """Basic auth tuple for the Neo4j driver."""
        return (self.neo4j_user, self.neo4j_password)


settings = Settings()


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for the API and CLI entry points."""
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


# =============================================================================
# ENUMS
# =============================================================================


class GeoLevel(str, Enum):
    """Geography hierarchy levels, named after their graph node labels."""

    COUNTRY = "Country"
    STATE = "State"
    DISTRICT = "District"


# =============================================================================
# GEOGRAPHY DATA
# =============================================================================


class Geography(NamedTuple):
    """Geography information."""

    code: str
    name: str
    level: GeoLevel
    parent: str | None


GEOGRAPHIES: dict[str, Geography] = {
    # Country
    "IN": Geography("IN", "India", GeoLevel.COUNTRY, None),
    # States
    "TN": Geography("TN", "Tamil Nadu", GeoLevel.STATE, "IN"),
    "MH": Geography("MH", "Maharashtra", GeoLevel.STATE, "IN"),
    "KA": Geography("KA", "Karnataka", GeoLevel.STATE, "IN"),
    "UP": Geography("UP", "Uttar Pradesh", GeoLevel.STATE, "IN"),
    "GJ": Geography("GJ", "Gujarat", GeoLevel.STATE, "IN"),
    "KL": Geography("KL", "Kerala", GeoLevel.STATE, "IN"),
    # Districts
    "BLR": Geography("BLR", "Bengaluru", GeoLevel.DISTRICT, "KA"),
    "LKO": Geography("LKO", "Lucknow", GeoLevel.DISTRICT, "UP"),
    "MUM": Geography("MUM", "Mumbai", GeoLevel.DISTRICT, "MH"),
    "CHE": Geography("CHE", "Chennai", GeoLevel.DISTRICT, "TN"),
}

GEO_CODES = list(GEOGRAPHIES.keys())


# =============================================================================
# INDICATORS
# =============================================================================

INDICATORS = {
    "gdp_per_capita": ("GDP per capita", "INR"),
    "employment_rate": ("Employment rate", "%"),
    "unemployment_rate": ("Unemployment rate", "%"),
    "rural_literacy_rate": ("Rural literacy rate", "%"),
    "female_literacy_rate": ("Female literacy rate", "%"),
    "infant_mortality_rate": ("Infant mortality rate", "per 1,000 live births"),
    "clean_water_access": ("Access to clean water", "% of households"),
}

# Question keyword -> indicator id. Order matters for selection output.
INDICATOR_KEYWORDS = {
    "literacy": "rural_literacy_rate",
    "employment": "employment_rate",
    "gdp": "gdp_per_capita",
    "mortality": "infant_mortality_rate",
    "water": "clean_water_access",
    "female": "female_literacy_rate",
    "unemployment": "unemployment_rate",
    "rural": "rural_literacy_rate",
    "clean": "clean_water_access",
    "infant": "infant_mortality_rate",
    "capita": "gdp_per_capita",
}
