"""Tests for logging setup"""

import gc
import json
import logging
import warnings

import pytest
import structlog

from tether.config import settings
from tether.logging_config import HANDLER_NAME, get_logger, setup_logging


def tether_handlers(logger):
    return [h for h in logger.handlers if h.get_name() == HANDLER_NAME]


@pytest.fixture
def root_logger():
    """Root logger without a tether handler; the original one is put back afterwards"""
    root = logging.getLogger()
    saved_level = root.level
    saved = tether_handlers(root)
    for handler in saved:
        root.removeHandler(handler)

    yield root

    for handler in tether_handlers(root):
        root.removeHandler(handler)
        handler.close()
    for handler in saved:
        root.addHandler(handler)
    root.setLevel(saved_level)
    structlog.reset_defaults()


@pytest.fixture
def log_file(tmp_path, monkeypatch):
    path = tmp_path / "tether.log"
    monkeypatch.setattr(settings.logging, "output", str(path))
    monkeypatch.setattr(settings.logging, "format", "json")
    monkeypatch.setattr(settings.logging, "level", "INFO")
    return path


def last_entry(root, path):
    tether_handlers(root)[0].flush()
    return json.loads(path.read_text().splitlines()[-1])


class TestSetupLogging:

    def test_repeated_setup_opens_one_file_handler(self, root_logger, log_file):
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            setup_logging()
            setup_logging()
            gc.collect()

        assert not [w for w in caught if issubclass(w.category, ResourceWarning)]
        handlers = tether_handlers(root_logger)
        assert len(handlers) == 1
        assert isinstance(handlers[0], logging.FileHandler)
        assert handlers[0].baseFilename == str(log_file)

    def test_other_handlers_left_in_place(self, root_logger, log_file):
        other = logging.NullHandler()
        root_logger.addHandler(other)
        try:
            setup_logging()

            assert other in root_logger.handlers
            assert len(tether_handlers(root_logger)) == 1
        finally:
            root_logger.removeHandler(other)

    def test_level_from_settings(self, root_logger, log_file, monkeypatch):
        monkeypatch.setattr(settings.logging, "level", "warning")

        setup_logging()

        assert root_logger.level == logging.WARNING

    def test_stdlib_records_rendered_as_json(self, root_logger, log_file):
        setup_logging()

        logging.getLogger("tether.matching.engine").info(
            "Matched candidates", extra={"request_id": "req-1"}
        )

        entry = last_entry(root_logger, log_file)
        assert entry["event"] == "Matched candidates"
        assert entry["service"] == "tether"
        assert entry["logger"] == "tether.matching.engine"
        assert entry["request_id"] == "req-1"

    def test_structlog_logger_rendered_as_json(self, root_logger, log_file):
        setup_logging()

        get_logger("tether.main").info("application_starting", debug=False)

        entry = last_entry(root_logger, log_file)
        assert entry["event"] == "application_starting"
        assert entry["level"] == "info"
        assert entry["debug"] is False
