"""Tests for process-wide logging setup."""

import logging

import pytest
import structlog

from ridebook.logging import setup_logging


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()


class TestSetupLogging:
    """Tests for the structlog processor chain."""

    def test_production_renders_json(self):
        setup_logging(debug=False)
        processors = structlog.get_config()["processors"]

        assert processors[0] is structlog.contextvars.merge_contextvars
        assert structlog.processors.dict_tracebacks in processors
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_debug_renders_console(self):
        setup_logging(debug=True)
        processors = structlog.get_config()["processors"]

        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)
        assert structlog.processors.dict_tracebacks not in processors

    def test_driver_loggers_quieted(self):
        setup_logging(debug=True)

        assert logging.getLogger("pymongo").level == logging.WARNING
        assert logging.getLogger("pymongo.command").getEffectiveLevel() == logging.WARNING

    def test_bound_context_reaches_events(self):
        """Test that values bound to the context appear in every event dict."""
        structlog.contextvars.bind_contextvars(request_id="abc123")

        event = structlog.contextvars.merge_contextvars(None, "info", {"event": "identifier_allocated"})

        assert event == {"event": "identifier_allocated", "request_id": "abc123"}
