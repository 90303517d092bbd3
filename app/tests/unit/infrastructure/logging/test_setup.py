"""Unit tests for infrastructure.logging.setup module.

Tests cover:
- configure_logging function
- get_module_logger function
- Test logging suppression in test environment
"""

import logging

import pytest
import structlog

from infrastructure.i18n import service
from infrastructure.logging.setup import (
    _is_test_environment,
    configure_logging,
    get_module_logger,
)


@pytest.mark.unit
class TestIsTestEnvironment:
    """Test suite for _is_test_environment helper."""

    def test_detects_pytest_in_sys_modules(self):
        """Returns True when pytest is in sys.modules."""
        assert _is_test_environment() is True


@pytest.mark.unit
class TestConfigureLogging:
    """Test suite for configure_logging function."""

    def test_returns_bound_logger(self, mock_settings):
        """configure_logging returns a logger with the standard methods."""
        result = configure_logging(settings=mock_settings)

        assert hasattr(result, "info")
        assert hasattr(result, "debug")
        assert hasattr(result, "warning")
        assert hasattr(result, "error")

    def test_accepts_overrides(self, mock_settings):
        """configure_logging accepts log_level and is_production overrides."""
        assert configure_logging(settings=mock_settings, log_level="DEBUG") is not None
        assert configure_logging(settings=mock_settings, is_production=True) is not None

    def test_without_settings(self):
        """configure_logging works without a settings instance."""
        assert configure_logging() is not None

    def test_suppresses_in_test_env(self, mock_settings):
        """In test environment, root logger level is set high to suppress output."""
        configure_logging(settings=mock_settings)
        assert logging.getLogger().level >= logging.CRITICAL


@pytest.mark.unit
class TestGetModuleLogger:
    """Test suite for get_module_logger."""

    def test_binds_calling_module(self):
        """Module loggers carry the module path and component name."""
        context = structlog.get_context(service.logger)
        assert context["module_path"] == "infrastructure.i18n.service"
        assert context["component"] == "service"

    def test_logging_methods_dont_raise(self, mock_settings):
        """Logging methods execute without raising exceptions."""
        configure_logging(settings=mock_settings)
        log = get_module_logger()

        log.debug("locale_resolved", locale="fr")
        log.info("message_service_bound")
        log.warning("invalid_message_format", code="a.b")
        log.error("message_lookup_failed", code="a.b", error="boom")
