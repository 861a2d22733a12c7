from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration using pydantic-settings."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False
    )

    # Database
    database_url: str = Field(
        default="sqlite+aiosqlite:///./deli.db",
        description="Database connection URL",
    )

    # Address lookup (Mapbox geocoding)
    mapbox_token: str = Field(default="", description="Mapbox access token")
    mapbox_base_url: str = Field(
        default="https://api.mapbox.com/geocoding/v5/mapbox.places",
        description="Mapbox forward geocoding endpoint",
    )
    address_country: str = Field(
        default="US", description="Country filter for address suggestions"
    )

    # Account emails (log only when smtp_host is empty)
    smtp_host: str = Field(default="", description="SMTP relay host")
    smtp_port: int = Field(default=25, description="SMTP relay port")
    smtp_user: str = Field(default="", description="SMTP login user")
    smtp_password: str = Field(default="", description="SMTP login password")
    smtp_from: str = Field(
        default="noreply@example.com", description="Sender address for account emails"
    )

    # Cart
    max_special_instructions: int = Field(
        default=140, ge=1, description="Max characters of special instructions per add"
    )

    # Application
    app_env: str = Field(
        default="development", description="Environment (development, production)"
    )
    debug: bool = Field(default=False, description="Debug mode")
    allowed_origins: str = Field(
        default="http://localhost:8000,http://127.0.0.1:8000",
        description="Comma-separated CORS allowed origins",
    )

    @property
    def cors_origins(self) -> list[str]:
        """Parse allowed origins into a list."""
        return [origin.strip() for origin in self.allowed_origins.split(",")]


# Global settings instance
settings = Settings()
