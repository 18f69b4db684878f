from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    log_level: str = "INFO"
    cors_allow_origins: list[str] = ["*"]
    scenario_store: Literal["memory", "supabase"] = "memory"
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_timeout: float = 10.0
    report_brand: str = "ROI Simulator"

    model_config = SettingsConfigDict(env_prefix="ROI_", env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    return Settings()
