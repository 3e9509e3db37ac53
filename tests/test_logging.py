"""로깅 설정 테스트."""

import logging

from app.core.logger import get_logger
from app.core.logging_config import LOG_FORMAT, build_logging_config, resolve_log_level


def test_resolve_log_level_prefers_argument(monkeypatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "warning")

    assert resolve_log_level("debug") == "DEBUG"
    assert resolve_log_level() == "WARNING"


def test_build_logging_config_adds_app_logger() -> None:
    config = build_logging_config("DEBUG")

    assert config["formatters"]["app"]["format"] == LOG_FORMAT
    assert config["loggers"]["app"] == {"handlers": ["app"], "level": "DEBUG", "propagate": False}
    assert config["loggers"]["uvicorn.access"]["level"] == "DEBUG"


def test_app_loggers_rely_on_dict_config() -> None:
    logger = get_logger("app.services.routing_service")

    assert logger.handlers == []


def test_external_loggers_get_stdout_handler() -> None:
    logger = get_logger("gatebuddy-script")

    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0], logging.StreamHandler)
    assert get_logger("gatebuddy-script").handlers == logger.handlers
