"""Tests for settings and logging configuration."""

import json
import logging

from recipekit.config import Settings
from recipekit.logging_config import (
    ContextualFormatter,
    LoggingContext,
    StructuredJsonFormatter,
    current_context,
    get_logger,
)


def _record(message: str) -> logging.LogRecord:
    return logging.LogRecord(
        name="recipekit.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=message,
        args=(),
        exc_info=None,
    )


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self):
        """Test default values."""
        settings = Settings(_env_file=None)
        assert settings.default_original_servings == 4
        assert settings.max_ingredient_lines == 200
        assert settings.is_development

    def test_environment_override(self, monkeypatch):
        """Test that environment variables override defaults."""
        monkeypatch.setenv("DEFAULT_ORIGINAL_SERVINGS", "6")
        monkeypatch.setenv("ENVIRONMENT", "production")
        settings = Settings(_env_file=None)
        assert settings.default_original_servings == 6
        assert not settings.is_development

    def test_allowed_origin_list(self):
        """Test splitting the CORS origin string."""
        settings = Settings(_env_file=None, allowed_origins="http://a.test, http://b.test,")
        assert settings.allowed_origin_list == ["http://a.test", "http://b.test"]


class TestLoggingContext:
    """Tests for logging context propagation."""

    def test_context_set_and_reset(self):
        """Test that context only lives inside the block."""
        assert current_context() == {}
        with LoggingContext(request_id="abc123", recipe="pancakes"):
            assert current_context() == {"request_id": "abc123", "recipe": "pancakes"}
        assert current_context() == {}

    def test_unset_values_skipped(self):
        """Test that None values are not added to the context."""
        with LoggingContext(request_id="abc123"):
            assert current_context() == {"request_id": "abc123"}

    def test_json_formatter_includes_context(self):
        """Test the production formatter."""
        with LoggingContext(request_id="abc123", recipe="pancakes"):
            data = json.loads(StructuredJsonFormatter().format(_record("scaled")))
        assert data["message"] == "scaled"
        assert data["level"] == "INFO"
        assert data["request_id"] == "abc123"
        assert data["recipe"] == "pancakes"

    def test_text_formatter_includes_context(self):
        """Test the development formatter."""
        with LoggingContext(request_id="abcdef123456", recipe="pancakes"):
            line = ContextualFormatter().format(_record("scaled"))
        assert "[req=abcdef12, recipe=pancakes]" in line
        assert line.endswith("| scaled")

    def test_adapter_adds_context(self):
        """Test that the adapter passes context as extra fields."""
        logger = get_logger("recipekit.test")
        with LoggingContext(recipe="pancakes"):
            _, kwargs = logger.process("msg", {})
        assert kwargs["extra"] == {"recipe": "pancakes"}
