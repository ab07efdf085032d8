"""Tests for logging configuration."""

import logging

from testosterone_suite.app_logging import LOGGER_NAME, configure_logging


def test_configure_logging_idempotent() -> None:
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()

    configure_logging()
    first_count = len(logger.handlers)

    configure_logging()
    second_count = len(logger.handlers)

    assert first_count == 1
    assert second_count == 1


def test_service_loggers_use_package_handler() -> None:
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()

    configure_logging(logging.DEBUG)

    child = logging.getLogger("testosterone_suite.services.meal_plans")
    assert child.getEffectiveLevel() == logging.DEBUG
    assert logger.propagate is False
