from __future__ import annotations

from decimal import Decimal
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False)

    epsilon: Decimal = Field(Decimal("0.01"), alias="LEDGER_EPSILON", gt=0)
    max_participants: int = Field(3, alias="LEDGER_MAX_PARTICIPANTS", ge=0)
    default_category: str = Field("Other", alias="LEDGER_DEFAULT_CATEGORY")
    log_level: str = Field("INFO", alias="LOG_LEVEL")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
