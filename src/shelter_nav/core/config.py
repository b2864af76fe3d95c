"""Application configuration via Pydantic Settings.

All configuration is loaded from environment variables (or a local ``.env``
file) following 12-factor principles.  Every field has a working default so
the CLI runs without any environment set up.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Reverse geocoding (OpenStreetMap Nominatim)
    reverse_geocoder_url: str = Field(
        default="https://nominatim.openstreetmap.org/reverse",
        description="Nominatim reverse geocoding endpoint",
    )
    reverse_geocoder_timeout: float = Field(
        default=10.0,
        description="Reverse geocoding request timeout in seconds",
        gt=0,
    )
    reverse_geocoder_email: str = Field(
        default="",
        description="Email for Nominatim usage policy compliance",
    )
    http_user_agent: str = Field(
        default="ShelterNavigationApp/1.0",
        description="User-Agent header sent to every external provider",
    )

    # Shelter dataset provider
    shelter_api_base_url: str = Field(
        default="https://motohasystem.github.io/jp-shelter-api/api/v0",
        description="Base URL of the shelter dataset and region-code catalog",
    )
    region_catalog_path: str = Field(
        default="city-to-code.json",
        description="Path of the region name to code catalog, relative to the base URL",
    )
    shelter_categories: str = Field(
        default="emergency,evacuation",
        description="Comma-separated shelter category keys, tried in order",
    )
    shelter_api_timeout: float = Field(
        default=10.0,
        description="Shelter dataset request timeout in seconds",
        gt=0,
    )

    @field_validator("shelter_api_base_url")
    @classmethod
    def validate_shelter_api_base_url(cls, v: str) -> str:
        if not v.startswith("https://"):
            msg = "shelter_api_base_url must use HTTPS"
            raise ValueError(msg)
        return v.rstrip("/")

    @property
    def shelter_category_list(self) -> list[str]:
        """Parse the category string into an ordered list of keys.

        Returns:
            Category keys in fetch order.
        """
        if not self.shelter_categories.strip():
            return []
        return [c.strip() for c in self.shelter_categories.split(",") if c.strip()]

    @property
    def region_catalog_url(self) -> str:
        """Full URL of the region name to code catalog."""
        return f"{self.shelter_api_base_url}/{self.region_catalog_path.lstrip('/')}"

    # Navigation
    nearest_shelter_count: int = Field(
        default=3,
        description="Number of nearest shelters tracked with arrows",
        gt=0,
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_dir: str | None = Field(
        default=None,
        description="Directory for log files (enables file logging with 24h rotation when set)",
    )


def get_settings() -> Settings:
    """Create and return application settings."""
    return Settings()
