# src/dealcheck/adapters/config.py
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    # App & logging
    ENV: str = Field(default="dev")
    LOG_LEVEL: str = Field(default="INFO")

    # Evaluator default assumptions (plain percentages, 25 == 25%)
    DEFAULT_DEPOSIT_PERCENT: float = Field(default=25.0)
    DEFAULT_INTEREST_RATE_PERCENT: float = Field(default=5.5)
    DEFAULT_EXPENSE_PERCENT: float = Field(default=15.0)

    # Derive SDLT from the band calculator when the caller leaves it blank
    AUTO_SDLT: bool = Field(default=True)

    # -----------------------------
    # Narrative service (OpenAI-compatible chat completions)
    # -----------------------------
    NARRATIVE_API_KEY: str | None = Field(default=None)
    NARRATIVE_BASE_URL: str = Field(default="https://api.openai.com/v1")
    NARRATIVE_MODEL: str = Field(default="gpt-4o-mini")
    NARRATIVE_TIMEOUT_S: float = Field(default=15.0)

    model_config = SettingsConfigDict(
        env_prefix="DEALCHECK_",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator(
        "DEFAULT_DEPOSIT_PERCENT",
        "DEFAULT_INTEREST_RATE_PERCENT",
        "DEFAULT_EXPENSE_PERCENT",
        mode="before",
    )
    @classmethod
    def _to_positive_percent(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip().replace("%", "")
        try:
            f = float(v)
        except Exception as err:
            raise ValueError("default must be numeric or percent-like") from err
        if f <= 0:
            raise ValueError("default percentages must be > 0")
        return f

    @field_validator("NARRATIVE_TIMEOUT_S", mode="before")
    @classmethod
    def _timeout_positive(cls, v: Any) -> Any:
        f = float(v)
        if f <= 0:
            raise ValueError("NARRATIVE_TIMEOUT_S must be > 0")
        return f


config = AppConfig()
