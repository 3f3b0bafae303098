from pathlib import Path
from dotenv import load_dotenv
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings

from app.constants.report_actions import (
    CONSECUTIVE_ACTION_WINDOW_MS,
    LAST_MESSAGE_TEXT_MAX_LENGTH,
)

DEFAULT_ENVIRONMENT_URL = "https://new.expensify.com"

# Project root (parent of app/) - used so .env is found regardless of cwd
_PROJECT_ROOT = Path(__file__).resolve().parent.parent

# Explicitly load .env into os.environ so it works in tests and subprocesses
load_dotenv(_PROJECT_ROOT / ".env")


class Settings(BaseSettings):
    app_name: str = "report-actions-api"
    environment: str = Field(
        default="development",
        validation_alias=AliasChoices("ENV", "ENVIRONMENT"),
    )
    log_level: str = Field(default="INFO", json_schema_extra={"env": "LOG_LEVEL"})
    port: int = Field(default=8000, json_schema_extra={"env": "PORT"})

    # Base url substituted into workspace change log links and room references
    environment_url: str = Field(
        default=DEFAULT_ENVIRONMENT_URL,
        json_schema_extra={"env": "ENVIRONMENT_URL"},
    )
    last_message_text_max_length: int = Field(
        default=LAST_MESSAGE_TEXT_MAX_LENGTH,
        gt=0,
        json_schema_extra={"env": "LAST_MESSAGE_TEXT_MAX_LENGTH"},
    )
    consecutive_action_window_ms: int = Field(
        default=CONSECUTIVE_ACTION_WINDOW_MS,
        ge=0,
        json_schema_extra={"env": "CONSECUTIVE_ACTION_WINDOW_MS"},
    )

    @property
    def is_production(self) -> bool:
        """Check if the current environment is production."""
        return self.environment.lower() == "production"

    @property
    def is_test(self) -> bool:
        """Check if the current environment is test."""
        return self.environment.lower() == "test"

    class ConfigDict:
        env_file = str(_PROJECT_ROOT / ".env")
        env_file_encoding = "utf-8"
        extra = "allow"  # Allow extra environment variables


def get_settings() -> Settings:
    """Get application settings."""
    return Settings()
