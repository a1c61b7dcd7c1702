"""Tests for structlog configuration."""

from unittest.mock import patch

import structlog

from nedc_dashboard import observability


@patch("nedc_dashboard.observability.structlog.configure")
def test_configures_once(mock_configure, monkeypatch):
    monkeypatch.setattr(observability, "_configured", False)

    observability.configure_logging("DEBUG", "json")
    observability.configure_logging("INFO", "console")

    mock_configure.assert_called_once()
    processors = mock_configure.call_args.kwargs["processors"]
    assert isinstance(processors[-1], structlog.processors.JSONRenderer)


@patch("nedc_dashboard.observability.structlog.configure")
def test_console_renderer_by_default(mock_configure, monkeypatch):
    monkeypatch.setattr(observability, "_configured", False)

    observability.configure_logging()

    processors = mock_configure.call_args.kwargs["processors"]
    assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)
