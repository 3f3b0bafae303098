import logging

from app.config import get_settings
from app.infra.logging_config import LoggingConfig, get_logger


def test_get_logger_uses_application_namespace():
    """Loggers live under the application namespace."""
    assert get_logger("visibility").name == "report_actions.visibility"
    assert get_logger().name == "report_actions"


def test_logging_config_applies_level():
    """The configured level reaches the application logger."""
    config = LoggingConfig("DEBUG")
    assert config.level == logging.DEBUG
    assert logging.getLogger("report_actions").level == logging.DEBUG
    assert LoggingConfig.is_configured() is True


def test_settings_from_environment(monkeypatch):
    """Settings are read from the environment."""
    monkeypatch.setenv("ENV", "production")
    monkeypatch.setenv("LAST_MESSAGE_TEXT_MAX_LENGTH", "80")
    settings = get_settings()
    assert settings.is_production is True
    assert settings.is_test is False
    assert settings.last_message_text_max_length == 80
