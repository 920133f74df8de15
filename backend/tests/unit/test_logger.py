"""Unit tests for the logging utility."""

from __future__ import annotations

import json
import logging

import pytest

from mediahub.core.logger import JSONFormatter, configure_logging


@pytest.fixture()
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_configure_logging_sets_level(restore_root_logger) -> None:
    """``configure_logging`` should set the root logger level."""

    # Act
    configure_logging("DEBUG")

    # Assert
    assert restore_root_logger.level == logging.DEBUG
    assert len(restore_root_logger.handlers) == 1


def test_json_formatter_includes_extra_fields() -> None:
    record = logging.LogRecord(
        "mediahub.test", logging.INFO, __file__, 1, "subscription.created", None, None
    )
    record.user_id = 7
    record.channel_id = 9

    payload = json.loads(JSONFormatter().format(record))

    assert payload["message"] == "subscription.created"
    assert payload["level"] == "INFO"
    assert (payload["user_id"], payload["channel_id"]) == (7, 9)
