import pytest
from pydantic import ValidationError

from puzterm.config import Settings


class TestSettings:
    """Test suite for Settings"""

    def test_defaults(self):
        """Test the defaults when nothing is set"""
        s = Settings.from_env({})
        assert s.poll_interval == 0.01
        assert s.status_refresh_ticks == 10
        assert s.clues_scroll_step == 5
        assert s.log_level == "INFO"
        assert s.log_file is None
        assert not s.show_log

    def test_from_env(self):
        """Test PUZTERM_* variables are read"""
        s = Settings.from_env({
            "PUZTERM_LOG_LEVEL": "debug",
            "PUZTERM_LOG_FILE": "/tmp/puzterm.log",
            "PUZTERM_SHOW_LOG": "Yes",
            "PUZTERM_POLL_INTERVAL": "0.05",
            "UNRELATED": "1",
        })
        assert s.log_level == "DEBUG"
        assert s.log_file == "/tmp/puzterm.log"
        assert s.show_log
        assert s.poll_interval == 0.05

    @pytest.mark.parametrize("value", ["0", "no", "off", ""])
    def test_show_log_falsy(self, value):
        """Test anything outside the truthy words disables the log panel"""
        assert not Settings.from_env({"PUZTERM_SHOW_LOG": value}).show_log

    def test_empty_log_file_ignored(self):
        """Test an empty log file path means no file"""
        assert Settings.from_env({"PUZTERM_LOG_FILE": ""}).log_file is None

    @pytest.mark.parametrize(
        "env",
        [{"PUZTERM_LOG_LEVEL": "loud"}, {"PUZTERM_POLL_INTERVAL": "0"}, {"PUZTERM_POLL_INTERVAL": "fast"}],
    )
    def test_invalid(self, env):
        """Test bad values are rejected"""
        with pytest.raises(ValidationError):
            Settings.from_env(env)

    def test_frozen(self):
        """Test settings cannot be changed after creation"""
        s = Settings()
        with pytest.raises(ValidationError):
            s.log_level = "DEBUG"
