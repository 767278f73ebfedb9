"""
Core configuration using Pydantic Settings.
Loads from environment variables.
"""

from typing import Literal
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # App
    app_name: str = Field(default="talentscope", alias="APP_NAME")
    app_env: Literal["development", "staging", "production"] = Field(
        default="development", alias="APP_ENV"
    )
    debug: bool = Field(default=False, alias="DEBUG")

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", alias="LOG_LEVEL"
    )
    json_logs: bool = Field(default=True, alias="JSON_LOGS")

    # Visibility
    leave_scope_policy: Literal["designation", "structural"] = Field(
        default="designation", alias="LEAVE_SCOPE_POLICY"
    )
    skip_malformed_records: bool = Field(default=True, alias="SKIP_MALFORMED_RECORDS")
    candidate_search_fields: list[str] = Field(
        default=["name", "email", "phone", "skills"],
        alias="CANDIDATE_SEARCH_FIELDS",
    )


# Global settings instance
settings = Settings()
