"""Runtime settings for the program tree engine.

Values come from the environment or a local .env file.
"""

from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_file: str | None = Field(default=None, validation_alias="LOG_FILE")
    log_json: bool = Field(default=False, validation_alias="LOG_JSON")
    temp_id_prefix: str = Field(default="temp_", validation_alias="TEMP_ID_PREFIX")
    copy_name_suffix: str = Field(default=" (Copy)", validation_alias="COPY_NAME_SUFFIX")
    # Re-validate the whole tree after every structural edit
    strict_invariants: bool = Field(default=True, validation_alias="STRICT_INVARIANTS")

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    @field_validator("temp_id_prefix")
    @classmethod
    def validate_temp_id_prefix(cls, value: str) -> str:
        if not value:
            raise ValueError("TEMP_ID_PREFIX must not be empty; temporary ids would be indistinguishable")
        return value

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}:
            logger.warning(f"Unknown LOG_LEVEL={value!r}, falling back to INFO")
            return "INFO"
        return level


settings = Settings()
