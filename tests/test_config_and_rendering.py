"""Tests for settings validation and the timestamp template filter."""

from datetime import datetime

import pytest
from pydantic import ValidationError as PydanticValidationError

from notes_app.config import Settings
from notes_app.rendering import format_timestamp, templates


class TestSettings:

    def test_log_level_is_upper_cased(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level_rejected(self):
        with pytest.raises(PydanticValidationError):
            Settings(log_level="chatty")

    def test_sql_echo_only_at_debug(self):
        assert Settings(log_level="DEBUG").sql_echo is True
        assert Settings(log_level="INFO").sql_echo is False

    def test_port_range_enforced(self):
        with pytest.raises(PydanticValidationError):
            Settings(backend_port=80)


class TestRendering:

    def test_format_timestamp(self):
        assert format_timestamp(datetime(2024, 1, 5, 9, 3, 7)) == "05/01/2024 at 09:03:07"

    def test_format_timestamp_none(self):
        assert format_timestamp(None) == ""

    def test_templates_autoescape(self):
        rendered = templates.env.from_string("{{ value }}").render(value="<b>x</b>")
        assert rendered == "&lt;b&gt;x&lt;/b&gt;"
