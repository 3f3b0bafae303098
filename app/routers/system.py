from fastapi import APIRouter
from pydantic import BaseModel

from app.config import get_settings

router = APIRouter(
    prefix="/system",
    tags=["system"],
    responses={404: {"description": "Not found"}},
)


class SystemSettingsRead(BaseModel):
    """Non-sensitive configuration, for troubleshooting."""

    name: str
    environment: str
    log_level: str
    is_production: bool
    environment_url: str
    last_message_text_max_length: int
    consecutive_action_window_ms: int


@router.get("/settings", response_model=SystemSettingsRead)
def get_system_settings() -> SystemSettingsRead:
    """Return non-sensitive configuration settings."""
    s = get_settings()
    return SystemSettingsRead(
        name=s.app_name,
        environment=s.environment,
        log_level=s.log_level,
        is_production=s.is_production,
        environment_url=s.environment_url,
        last_message_text_max_length=s.last_message_text_max_length,
        consecutive_action_window_ms=s.consecutive_action_window_ms,
    )
