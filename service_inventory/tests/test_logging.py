"""
Unit tests for the structured logging pipeline.
"""

import json
import logging
from datetime import datetime

import pytest
import structlog

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))

from shared.logging import clear_context, configure_logging, set_request_id, set_user_context


class TestLoggingPipeline:
    """Processor chain installed by configure_logging."""

    @pytest.fixture(autouse=True)
    def configured(self):
        configure_logging("inventory", "debug")
        yield
        clear_context()
        logging.getLogger("inventory").setLevel(logging.NOTSET)
        structlog.reset_defaults()

    def render(self, event: str, **kwargs) -> dict:
        """Run an event through the configured processors and decode the JSON line."""
        logger = logging.getLogger("inventory.backend_client")
        event_dict = dict(kwargs, event=event)
        for processor in structlog.get_config()["processors"]:
            event_dict = processor(logger, "info", event_dict)
        return json.loads(event_dict)

    def test_timestamp_is_iso_8601(self):
        line = self.render("Backend request succeeded")

        timestamp = line["timestamp"]
        assert isinstance(timestamp, str)
        assert datetime.fromisoformat(timestamp.replace("Z", "+00:00")).year >= 2024

    def test_adds_service_and_correlation_context(self):
        request_id = set_request_id()
        set_user_context("alice")

        line = self.render("Cache miss", key="getCases")

        assert line["service"] == "inventory"
        assert line["logger"] == "inventory.backend_client"
        assert line["level"] == "info"
        assert line["request_id"] == request_id
        assert line["user_id"] == "alice"
        assert line["key"] == "getCases"

    def test_clear_context_drops_correlation_ids(self):
        set_request_id("req-1")
        set_user_context("alice")
        clear_context()

        line = self.render("Cache hit")

        assert "request_id" not in line
        assert "user_id" not in line
