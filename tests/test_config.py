"""Tests for settings and logging setup."""

from __future__ import annotations

import logging
import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from gradle_to_json.config import ParserSettings
from gradle_to_json.core.logging import setup_logging


class TestParserSettings:
    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            settings = ParserSettings.from_env()
        assert settings.eval_dependencies_only is True
        assert settings.log_level == "WARNING"
        assert settings.log_format == "console"

    def test_from_env(self):
        env = {
            "GRADLE_TO_JSON_EVAL_DEPENDENCIES_ONLY": "false",
            "GRADLE_TO_JSON_LOG_LEVEL": "debug",
            "GRADLE_TO_JSON_LOG_FORMAT": "JSON",
        }
        with patch.dict(os.environ, env, clear=True):
            settings = ParserSettings.from_env()
        assert settings.eval_dependencies_only is False
        assert settings.log_level == "DEBUG"
        assert settings.log_format == "json"

    def test_invalid_format(self):
        with pytest.raises(ValidationError):
            ParserSettings(log_format="xml")


class TestSetupLogging:
    def test_level_applied(self):
        setup_logging("INFO", "json")
        assert logging.getLogger("gradle_to_json").level == logging.INFO

    def test_env_defaults(self):
        with patch.dict(os.environ, {"GRADLE_TO_JSON_LOG_LEVEL": "ERROR"}, clear=True):
            setup_logging()
        assert logging.getLogger("gradle_to_json").level == logging.ERROR

    def test_events_go_to_stderr(self, capsys):
        try:
            setup_logging("DEBUG", "json")
            logging.getLogger("gradle_to_json.parser").debug("parser.sample_event")
            captured = capsys.readouterr()
        finally:
            setup_logging("WARNING", "console")
        assert captured.out == ""
        assert "parser.sample_event" in captured.err
