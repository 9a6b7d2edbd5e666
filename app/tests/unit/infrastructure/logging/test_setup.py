"""Unit tests for infrastructure.logging.setup module.

Tests cover:
- configure_logging function
- get_module_logger function
- Test logging suppression in test environment
"""

import logging

import pytest
import structlog

from infrastructure.logging.setup import (
    _build_processors,
    _is_test_environment,
    configure_logging,
    get_module_logger,
)


@pytest.mark.unit
class TestIsTestEnvironment:
    def test_detects_pytest_in_sys_modules(self):
        assert _is_test_environment() is True


@pytest.mark.unit
class TestConfigureLogging:
    def test_configure_logging_returns_bound_logger(self):
        result = configure_logging()

        assert hasattr(result, "info")
        assert hasattr(result, "warning")

    def test_logs_are_suppressed_under_pytest(self):
        configure_logging(log_level="DEBUG", is_production=True)

        assert logging.root.level > logging.CRITICAL


@pytest.mark.unit
class TestBuildProcessors:
    def test_production_renders_json(self):
        processors = _build_processors(prod_mode=True)

        assert isinstance(processors[-1], structlog.processors.JSONRenderer)
        assert processors[0] is structlog.contextvars.merge_contextvars

    def test_development_renders_console(self):
        assert isinstance(_build_processors(prod_mode=False)[-1], structlog.dev.ConsoleRenderer)


@pytest.mark.unit
class TestGetModuleLogger:
    def test_binds_calling_module(self):
        logger = get_module_logger()

        context = structlog.get_context(logger)
        assert context["module_path"] == __name__
        assert context["component"] == __name__.split(".")[-1]
