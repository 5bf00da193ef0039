"""Backend settings, read from the environment (and a ``.env`` file)."""
import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()


class Settings(BaseModel):
    """Field aliases are the environment variable names."""

    database_url: str = Field(default="sqlite+aiosqlite:///./staffdesk.db", alias="DATABASE_URL")
    secret_key: str = Field(default="change-me", alias="SECRET_KEY")
    access_token_expires_minutes: int = Field(default=60 * 24, gt=0, alias="ACCESS_TOKEN_EXPIRES_MINUTES")

    model_config = {"populate_by_name": True, "extra": "ignore"}


@lru_cache
def get_settings() -> Settings:
    env_names = [field.alias for field in Settings.model_fields.values()]
    return Settings.model_validate({name: os.environ[name] for name in env_names if name in os.environ})
