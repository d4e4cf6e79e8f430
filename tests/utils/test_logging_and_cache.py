"""
Tests for logging configuration and the metadata cache.
"""

import logging
import logging.handlers

import pytest
from rich.logging import RichHandler

from docx_flow.utils.cache import MetadataCache
from docx_flow.utils.logger import configure_logging, get_logger, set_log_level


class TestConfigureLogging:
    """Test cases for configure_logging."""

    def test_rich_handler_by_default(self):
        logger = configure_logging("DEBUG")
        assert logger.name == "docx_flow"
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], RichHandler)

    def test_plain_stream_handler(self):
        logger = configure_logging("WARNING", use_rich=False)
        handler = logger.handlers[0]
        assert isinstance(handler, logging.StreamHandler)
        assert not isinstance(handler, RichHandler)
        assert handler.level == logging.WARNING

    def test_rotating_file_handler(self, temp_dir):
        """Test that a log file adds a rotating file handler."""
        log_file = temp_dir / "flow.log"
        logger = configure_logging("INFO", log_file=str(log_file), use_rich=False)
        file_handlers = [h for h in logger.handlers if isinstance(h, logging.handlers.RotatingFileHandler)]
        assert len(file_handlers) == 1

        get_logger("docx_flow.test").info("hello")
        for handler in logger.handlers:
            handler.flush()
        assert "hello" in log_file.read_text(encoding="utf-8")

        for handler in file_handlers:
            handler.close()

    def test_reconfigure_replaces_handlers(self):
        configure_logging("INFO", use_rich=False)
        logger = configure_logging("INFO", use_rich=False)
        assert len(logger.handlers) == 1

    def test_invalid_level(self):
        with pytest.raises(ValueError):
            configure_logging("LOUD")

    def test_set_log_level(self):
        logger = configure_logging("INFO", use_rich=False)
        set_log_level("error")
        assert logger.level == logging.ERROR
        assert all(handler.level == logging.ERROR for handler in logger.handlers)

    def test_get_logger_requires_name(self):
        with pytest.raises(ValueError):
            get_logger("")


class TestMetadataCache:
    """Test cases for MetadataCache class."""

    def test_get_and_set(self):
        cache = MetadataCache()
        assert cache.get("missing") is None
        cache.set("a", {"x": 1})
        assert cache.get("a") == {"x": 1}
        assert "a" in cache
        assert cache.hits == 1
        assert cache.misses == 1

    def test_eviction_is_least_recently_used(self):
        cache = MetadataCache(max_size=2)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.get("a")
        cache.set("c", 3)
        assert "a" in cache
        assert "b" not in cache
        assert len(cache) == 2

    def test_get_or_set_calls_factory_once(self):
        cache = MetadataCache()
        calls = []

        def factory():
            calls.append(1)
            return "value"

        assert cache.get_or_set("k", factory) == "value"
        assert cache.get_or_set("k", factory) == "value"
        assert len(calls) == 1

    def test_get_or_set_counts_like_get(self):
        cache = MetadataCache()
        assert cache.get_or_set("k", lambda: None) is None
        assert (cache.hits, cache.misses) == (0, 1)
        assert cache.get_or_set("k", lambda: "other") is None
        assert (cache.hits, cache.misses) == (1, 1)

    def test_clear(self):
        cache = MetadataCache()
        cache.set("a", 1)
        cache.delete("missing")
        cache.clear()
        assert len(cache) == 0
        assert cache.hits == 0
