"""
Tests for structured logging setup and event helpers.
"""
import io
import json
import logging

import pytest

from upload_gateway.utils.logging import (
    ServiceFilter,
    configure_logging,
    log_upload_failed,
)


@pytest.fixture
def root_logger():
    """Restore root handlers and level after each test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers = handlers
    root.setLevel(level)


class TestConfigureLogging:
    """Tests for configure_logging."""
    
    def test_repeated_configuration_keeps_one_handler(self, root_logger):
        configure_logging("upload-gateway", "INFO")
        configure_logging("upload-gateway", "DEBUG")
        
        ours = [
            h for h in root_logger.handlers
            if any(isinstance(f, ServiceFilter) for f in h.filters)
        ]
        assert len(ours) == 1
        assert root_logger.level == logging.DEBUG
    
    def test_lines_are_json_with_service_and_event(self, root_logger):
        handler = configure_logging("upload-gateway", "INFO")
        stream = io.StringIO()
        handler.setStream(stream)
        
        log_upload_failed(
            logging.getLogger("upload_gateway.test"),
            variant="batch",
            directory="uploads",
            key="uploads/a.png",
            error="boom"
        )
        
        record = json.loads(stream.getvalue().strip().splitlines()[-1])
        assert record["service"] == "upload-gateway"
        assert record["event"] == "upload_failed"
        assert record["key"] == "uploads/a.png"
        assert record["error"] == "boom"
