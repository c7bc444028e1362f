"""Test Sentry error filtering for user vs system errors."""

import os
import unittest
from importlib import import_module
from unittest.mock import patch

from image_versions.exceptions import (
    ConfigurationError,
    VersionFetchError,
    VersionNotFoundError,
    VersionValidationError,
)

cli_main_module = import_module("image_versions.cli.main")

DSN = "https://public@sentry.example.com/1"


class TestSentryInitialization(unittest.TestCase):
    @patch.dict(os.environ, {"TELEMETRY": "true"}, clear=False)
    def test_not_initialized_without_dsn(self):
        os.environ.pop("SENTRY_DSN", None)
        with patch.object(cli_main_module.sentry_sdk, "init") as mock_init:
            cli_main_module.initialize_sentry()
        mock_init.assert_not_called()

    @patch.dict(os.environ, {"SENTRY_DSN": DSN, "TELEMETRY": "false"}, clear=False)
    def test_not_initialized_when_telemetry_disabled(self):
        with patch.object(cli_main_module.sentry_sdk, "init") as mock_init:
            cli_main_module.initialize_sentry()
        mock_init.assert_not_called()

    @patch.dict(os.environ, {"SENTRY_DSN": DSN, "TELEMETRY": "true"}, clear=False)
    def test_initialized_with_dsn(self):
        with patch.object(cli_main_module.sentry_sdk, "init") as mock_init:
            cli_main_module.initialize_sentry()
        mock_init.assert_called_once()
        self.assertEqual(mock_init.call_args.kwargs["dsn"], DSN)


@patch.dict(os.environ, {"SENTRY_DSN": DSN, "TELEMETRY": "true"}, clear=False)
class TestSentryFiltering(unittest.TestCase):
    def _before_send(self):
        with patch.object(cli_main_module.sentry_sdk, "init") as mock_init:
            cli_main_module.initialize_sentry()
        return mock_init.call_args.kwargs["before_send"]

    def _send(self, error):
        event = {"exception": {"values": [{"type": type(error).__name__}]}}
        hint = {"exc_info": (type(error), error, None)}
        return event, self._before_send()(event, hint)

    def test_filters_configuration_errors(self):
        """ConfigurationError represents user configuration errors."""
        _, result = self._send(ConfigurationError("Unsupported version flavor: 'ubuntu'"))
        self.assertIsNone(result)

    def test_filters_not_found_errors(self):
        """VersionNotFoundError represents user input errors."""
        _, result = self._send(VersionNotFoundError("Version 16.0.0 is not a valid Node.js LTS version."))
        self.assertIsNone(result)

    def test_allows_fetch_errors(self):
        event, result = self._send(VersionFetchError("Failed to connect"))
        self.assertEqual(result, event)

    def test_allows_validation_errors(self):
        """A validation failure means upstream data or formatting is broken and should be tracked."""
        event, result = self._send(VersionValidationError("Missing latest version object."))
        self.assertEqual(result, event)

    def test_allows_events_without_exception(self):
        event = {"message": "hello"}
        self.assertEqual(self._before_send()(event, {}), event)
