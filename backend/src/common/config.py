"""Configuration management using Pydantic Settings"""
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_UNIT_TABLES_PATH = Path(__file__).parent.parent / "criteria" / "data" / "unit_tables.json"


class CriteriaConfig(BaseSettings):
    """Criteria registry and normalizer configuration"""
    unit_tables_path: Path = Field(
        default=DEFAULT_UNIT_TABLES_PATH,
        alias="CRITERIA_UNIT_TABLES_PATH"
    )
    fail_fast: bool = Field(default=False, alias="CRITERIA_FAIL_FAST")

    @field_validator("unit_tables_path")
    @classmethod
    def validate_unit_tables_path(cls, v: Path) -> Path:
        if v.suffix != ".json":
            raise ValueError("CRITERIA_UNIT_TABLES_PATH must point to a .json file")
        return v

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


class AppConfig(BaseSettings):
    """Application configuration"""
    name: str = Field(default="field-criteria", alias="APP_NAME")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}")
        return v.upper()

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


class Settings(BaseSettings):
    """Global settings"""
    criteria: CriteriaConfig = Field(default_factory=CriteriaConfig)
    app: AppConfig = Field(default_factory=AppConfig)

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


# Global settings instance
settings = Settings()
