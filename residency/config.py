"""Engine configuration from environment."""
from pathlib import Path

from dotenv import load_dotenv
from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings
from functools import lru_cache

# Load .env from project root (parent of residency/) so overrides apply to every caller
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=_env_path)


class Settings(BaseSettings):
    # "Today" is pinned to this clock so callers in different timezones agree
    reference_timezone: str = "UTC"

    @field_validator("reference_timezone", mode="before")
    @classmethod
    def strip_tz(cls, v: str) -> str:
        return (v or "").strip()

    default_yellow_threshold: int = 60
    default_red_threshold: int = 80

    @model_validator(mode="after")
    def check_thresholds(self):
        if not 0 <= self.default_yellow_threshold < self.default_red_threshold:
            raise ValueError("default thresholds must satisfy 0 <= yellow < red")
        return self

    planning_search_days: int = 365

    alert_cooldown_days: int = 7
    urgent_margin_days: int = 5

    class Config:
        env_file = str(_env_path)
        env_prefix = "RESIDENCY_"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    return Settings()
