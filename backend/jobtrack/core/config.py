from datetime import time
from typing import Annotated, Any, Literal

from pydantic import BeforeValidator, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing_extensions import Self


def parse_list(v: Any) -> list[str] | Any:
    if isinstance(v, str) and not v.startswith("["):
        return [i.strip() for i in v.split(",") if i.strip()]
    return v


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )
    PROJECT_NAME: str = "jobtrack"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"

    # Observability Configuration
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "console"  # "json" or "console"

    # Working calendar
    WORKDAY_START: time = time(8, 0)
    WORKING_WEEKDAYS: Annotated[list[int] | str, BeforeValidator(parse_list)] = [
        0,
        1,
        2,
        3,
        4,
        5,
        6,
    ]

    # Scheduling horizon and due dates
    SCHEDULING_HORIZON_DAYS: int = Field(default=90, gt=0)
    DEFAULT_DUE_DAYS: int = Field(default=14, ge=0)

    # Confidence scoring
    PENALTY_INFO: int = 2
    PENALTY_WARNING: int = 10
    PENALTY_CRITICAL: int = 25
    OVERRUN_PENALTY_PER_DAY: int = 5
    DUE_DATE_SLACK_DAYS: int = 2

    # Advisory notes
    TIGHT_DEADLINE_DAYS: int = 7
    HIGH_PRIORITY_LEVEL: int = 4

    # Feature flags
    FEATURE_SMART_SCHEDULING_SUGGESTIONS: bool = False
    FEATURE_SMART_SCHEDULING_SUGGESTIONS_ROLLOUT: int = Field(default=0, ge=0, le=100)
    FEATURE_SMART_SCHEDULING_SUGGESTIONS_ENABLED_FOR: Annotated[
        list[str] | str, BeforeValidator(parse_list)
    ] = []

    @model_validator(mode="after")
    def _check_working_weekdays(self) -> Self:
        if isinstance(self.WORKING_WEEKDAYS, str):
            raise ValueError(f"Unparseable WORKING_WEEKDAYS: {self.WORKING_WEEKDAYS!r}")
        invalid = [d for d in self.WORKING_WEEKDAYS if not 0 <= d <= 6]
        if invalid:
            raise ValueError(
                f"Invalid weekdays {invalid}. Must be 0-6 (Monday=0, Sunday=6)"
            )
        if not self.WORKING_WEEKDAYS:
            raise ValueError("At least one working weekday is required")
        return self

    @model_validator(mode="after")
    def _check_penalties(self) -> Self:
        # Worse severities must cost strictly more
        if not (0 < self.PENALTY_INFO < self.PENALTY_WARNING < self.PENALTY_CRITICAL):
            raise ValueError(
                "Penalties must satisfy 0 < PENALTY_INFO < PENALTY_WARNING < PENALTY_CRITICAL"
            )
        return self


settings = Settings()  # type: ignore
