"""
Unit tests for the static Config.

Environment changes go through the `env` fixture so Config is re-read once
the test's changes are undone.
"""

from priority_emitter import PriorityEventEmitter
from priority_emitter.config import Config, Environment


class TestEnvironment:
    """Environment parsing."""

    def test_known_values(self):
        """Known names should parse case-insensitively."""
        assert Environment.from_string("production") is Environment.PRODUCTION
        assert Environment.from_string(" Testing ") is Environment.TESTING

    def test_unknown_value_falls_back(self):
        """Unknown names should fall back to development."""
        assert Environment.from_string("staging-eu") is Environment.DEVELOPMENT

    def test_test_session_runs_in_testing(self):
        """The test session should run in the testing environment."""
        assert Config.is_testing()
        assert not Config.is_production()

    def test_development_check(self, env):
        """Development should be reported by is_development()."""
        env.setenv("PRIORITY_EMITTER_ENV", "development")
        Config.reload()

        assert Config.is_development()
        assert not Config.is_testing()


class TestMaxListeners:
    """PRIORITY_EMITTER_MAX_LISTENERS."""

    def test_default(self):
        """MAX_LISTENERS should default to 10."""
        assert Config.MAX_LISTENERS == 10
        assert "MAX_LISTENERS" in Config.get_metrics().defaults_used

    def test_from_environment(self, env):
        """MAX_LISTENERS should be read from the environment."""
        env.setenv("PRIORITY_EMITTER_MAX_LISTENERS", "25")
        Config.reload()

        assert Config.MAX_LISTENERS == 25
        assert PriorityEventEmitter().get_max_listeners() == 25

    def test_zero_allowed(self, env):
        """A ceiling of 0 should be accepted."""
        env.setenv("PRIORITY_EMITTER_MAX_LISTENERS", "0")
        Config.reload()

        assert Config.MAX_LISTENERS == 0

    def test_negative_falls_back(self, env):
        """Negative ceilings should fall back to the default."""
        env.setenv("PRIORITY_EMITTER_MAX_LISTENERS", "-3")
        Config.reload()

        assert Config.MAX_LISTENERS == 10
        assert "MAX_LISTENERS" in Config.get_metrics().validation_errors

    def test_garbage_falls_back(self, env):
        """Non-numeric ceilings should fall back to the default."""
        env.setenv("PRIORITY_EMITTER_MAX_LISTENERS", "lots")
        Config.reload()

        assert Config.MAX_LISTENERS == 10

    def test_explicit_argument_wins(self, env):
        """An explicit constructor ceiling should beat the environment."""
        env.setenv("PRIORITY_EMITTER_MAX_LISTENERS", "25")
        Config.reload()

        assert PriorityEventEmitter(3).get_max_listeners() == 3


class TestLoggingSettings:
    """Logging-related keys."""

    def test_boolean_parsing(self, env):
        """Boolean keys should accept yes/off spellings."""
        env.setenv("PRIORITY_EMITTER_LOG_JSON", "yes")
        env.setenv("PRIORITY_EMITTER_LOG_COLORS", "off")
        Config.reload()

        assert Config.LOG_JSON is True
        assert Config.LOG_COLORS is False

    def test_invalid_level_falls_back(self, env):
        """An unknown log level should fall back to INFO."""
        env.setenv("PRIORITY_EMITTER_LOG_LEVEL", "chatty")
        Config.reload()

        assert Config.LOG_LEVEL == "INFO"

    def test_summary(self):
        """The summary should report the current values."""
        summary = Config.get_config_summary()

        assert summary["environment"] == "testing"
        assert summary["max_listeners"] == Config.MAX_LISTENERS
