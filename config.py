"""Application configuration via pydantic-settings.

Values are read from ``TOOLPHI_``-prefixed environment variables or a ``.env``
file in the working directory.
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Site-wide settings.

    Usage:
        from config import settings
        settings.related_limit
        settings.tax_year
    """

    model_config = SettingsConfigDict(env_prefix="TOOLPHI_", env_file=".env", extra="ignore")

    # Site
    site_name: str = Field(default="ToolPhi", description="Name shown in the page title and exports")
    site_url: str = Field(default="https://toolphi.com", description="Public base URL used in tool links")
    environment: str = Field(default="development")

    # Logging
    log_level: Optional[str] = Field(default=None, description="Defaults to WARNING in production and INFO elsewhere")
    log_file: Optional[str] = Field(default=None, description="Optional path for a log file")

    # Tools
    related_limit: int = Field(default=4, ge=0, description="Related tools shown under each calculator")
    tax_year: int = Field(default=2024, description="Year of the tax tables used by the tax tools")
    schedule_preview_rows: int = Field(default=24, ge=1, description="Schedule rows shown before expanding")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: Optional[str]) -> Optional[str]:
        """Ensure log level is valid."""
        if v is None:
            return None
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid:
            msg = f"Invalid log level: {v}. Must be one of {valid}"
            raise ValueError(msg)
        return upper

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def effective_log_level(self) -> str:
        if self.log_level:
            return self.log_level
        return "WARNING" if self.is_production else "INFO"

    def tool_url(self, slug: str) -> str:
        """Link to a tool page, the ``?tool=`` form the app reads on load."""
        return f"{self.site_url.rstrip('/')}/?tool={slug}"


# Module-level singleton; import this wherever settings are needed.
settings = Settings()
