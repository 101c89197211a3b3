"""Tests for settings validation."""
import pytest
from pydantic import ValidationError

from app.config import Settings


class TestSettings:

    def test_valid_timezone_accepted(self):
        assert Settings(DEFAULT_TIMEZONE="Europe/Bucharest").DEFAULT_TIMEZONE == "Europe/Bucharest"

    def test_unknown_timezone_rejected_on_load(self):
        with pytest.raises(ValidationError, match="Unknown timezone"):
            Settings(DEFAULT_TIMEZONE="Mars/Olympus_Mons")
