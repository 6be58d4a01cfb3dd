"""Application configuration."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    app_name: str = "GuardianSOS"
    debug: bool = False
    api_prefix: str = "/api"

    # Base URL used when building live-tracking links sent to contacts
    public_base_url: str = "http://localhost:5000"
    cors_origins: list[str] = ["*"]

    live_link_ttl_hours: int = 6

    # Twilio (SMS disabled when sid/token/from are empty)
    twilio_account_sid: str = ""
    twilio_auth_token: str = ""
    twilio_from_number: str = ""
    twilio_api_base: str = "https://api.twilio.com"
    sms_timeout_seconds: float = 10.0


settings = Settings()
