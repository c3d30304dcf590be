"""Application configuration."""

import os

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    api_token: str
    environment: str = _ENVIRONMENT
    feed_limit: int = Field(default=8, gt=0)
    trending_limit: int = Field(default=5, gt=0)
    challenge_limit: int = Field(default=3, gt=0)
    bar_limit: int = Field(default=6, gt=0)
    price_seed: int | None = None
    recipes_table: str = "recipes"
    profiles_table: str = "user_profiles"
    inventory_table: str = "bar_ingredients"
    shopping_lists_table: str = "shopping_lists"

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
