"""Engine configuration.

Loads settings from environment variables (``CATALOG_`` prefix) with
sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Catalog engine settings loaded from environment variables."""

    # Remote catalog
    api_url: str = Field(
        default="https://dummyjson.com",
        description="Remote catalog API base URL",
    )
    api_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Request timeout in seconds",
    )

    # Listing
    page_size: int = Field(default=10, ge=1, description="Products per listing page")
    search_debounce_seconds: float = Field(
        default=0.5,
        ge=0,
        description="Quiet window before a query change is fetched",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_json: bool = Field(default=True, description="Render logs as JSON")

    model_config = {
        "env_prefix": "CATALOG_",
        "env_file": ".env",
        "extra": "ignore",
    }


settings = Settings()
