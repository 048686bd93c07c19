"""
Tests for the logging module.

Tests verify:
- LogContext binds and unbinds context vars (sync and async)
- configure_from_settings honours level and format
"""

import logging

import pytest
import structlog

from contentshape.core.config import DisplaySettings
from contentshape.core.logging import (
    LogContext,
    bind_context,
    clear_context,
    configure_from_settings,
    configure_logging,
    get_logger,
    unbind_context,
)


def _bound() -> dict:
    return structlog.contextvars.get_contextvars()


class TestContextManagement:
    def setup_method(self):
        clear_context()

    def teardown_method(self):
        clear_context()
        structlog.reset_defaults()

    def test_bind_and_unbind(self):
        bind_context(content_type="BlogPost", display_type="Summary")
        assert _bound() == {"content_type": "BlogPost", "display_type": "Summary"}
        unbind_context("display_type")
        assert _bound() == {"content_type": "BlogPost"}

    def test_log_context_scopes_keys(self):
        bind_context(request="r1")
        with LogContext(content_type="BlogPost"):
            assert _bound() == {"request": "r1", "content_type": "BlogPost"}
        assert _bound() == {"request": "r1"}

    @pytest.mark.asyncio
    async def test_async_log_context(self):
        async with LogContext(part_name="Features"):
            assert _bound()["part_name"] == "Features"
        assert "part_name" not in _bound()


class TestConfigure:
    def teardown_method(self):
        structlog.reset_defaults()

    def test_json_output(self, caplog):
        configure_logging(level="INFO", log_format="json", add_timestamp=False)
        with caplog.at_level(logging.DEBUG):
            get_logger("contentshape.test").info("shape_created", shape_type="BodyPart")
        message = caplog.records[-1].getMessage()
        assert '"shape_type": "BodyPart"' in message
        assert '"service.name": "contentshape"' in message

    def test_debug_suppressed_at_info(self, caplog):
        configure_from_settings(DisplaySettings(_env_file=None, log_level="INFO", log_format="json"))
        with caplog.at_level(logging.DEBUG):
            get_logger("contentshape.test").debug("hidden_event")
        assert "hidden_event" not in caplog.text

    def test_service_name_override(self, caplog):
        configure_logging(log_format="json", service="cms-frontend", add_timestamp=False)
        with caplog.at_level(logging.DEBUG):
            get_logger("contentshape.test").warning("shape_template_missing")
        assert '"service.name": "cms-frontend"' in caplog.records[-1].getMessage()

    def test_console_output(self, caplog):
        configure_logging(level="DEBUG", log_format="console", add_timestamp=False)
        with caplog.at_level(logging.DEBUG):
            get_logger("contentshape.test").debug("part_driver_skipped", part_type="BodyPart")
        message = caplog.records[-1].getMessage()
        assert "part_driver_skipped" in message
        assert "part_type=BodyPart" in message
