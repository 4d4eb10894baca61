"""Configuration management using pydantic-settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from .models import Endpoint


class Settings(BaseSettings):
    """OAuth1 consumer settings."""

    model_config = SettingsConfigDict(
        env_prefix="OAUTH1_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        frozen=True,
    )

    # Consumer credentials
    consumer_key: str
    consumer_secret: str

    # "oob" tells the provider to show the verifier instead of redirecting
    callback_url: str = "oob"

    # Provider endpoints, e.g. OAUTH1_ENDPOINT__REQUEST_TOKEN_URL
    endpoint: Endpoint = Endpoint()


def get_settings() -> Settings:
    """Get application settings."""
    return Settings()
