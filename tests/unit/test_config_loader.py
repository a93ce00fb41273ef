"""
Tests for the Config model and load_config() in src/core/config.py.

The autouse clean_env fixture (tests/conftest.py) clears every managed
variable, so each test starts from the documented defaults.
"""

import pickle
from datetime import timedelta

import pydantic
import pytest

from src.core.config import Config, get_config, load_config
from src.core.constants import ENV_NAMES
from src.core.exceptions import ConfigLoadError, ConfigurationError, InvalidFieldError
from src.core.fields import LogFormat, LogLevel, LogOutput

VALID_VALUES = {
    "LOG_LEVEL": "debug",
    "LOG_FORMAT": "json",
    "LOG_OUTPUT": "stderr",
    "SERVER_ADDRESS": ":9000",
    "SERVER_READ_TIMEOUT": "1s",
    "SERVER_READ_HEADER_TIMEOUT": "1s",
    "SERVER_WRITE_TIMEOUT": "1s",
    "SERVER_IDLE_TIMEOUT": "1s",
    "SERVER_SHUTDOWN_TIMEOUT": "1s",
}

EXPECTED_DEFAULTS = {
    "LOG_LEVEL": LogLevel.INFO,
    "LOG_FORMAT": LogFormat.TEXT,
    "LOG_OUTPUT": LogOutput.STDOUT,
    "SERVER_ADDRESS": "localhost:8080",
    "SERVER_READ_TIMEOUT": timedelta(seconds=5),
    "SERVER_READ_HEADER_TIMEOUT": timedelta(seconds=2),
    "SERVER_WRITE_TIMEOUT": timedelta(seconds=10),
    "SERVER_IDLE_TIMEOUT": timedelta(minutes=1),
    "SERVER_SHUTDOWN_TIMEOUT": timedelta(seconds=15),
}

INVALID_VALUES = {
    "LOG_LEVEL": "verbose",
    "LOG_FORMAT": "xml",
    "LOG_OUTPUT": "  ",
    "SERVER_READ_TIMEOUT": "bad",
    "SERVER_READ_HEADER_TIMEOUT": "2x",
    "SERVER_WRITE_TIMEOUT": "ten",
    "SERVER_IDLE_TIMEOUT": "1 m",
    "SERVER_SHUTDOWN_TIMEOUT": "-",
}


class TestDefaults:
    """Unset variables fall back to the documented defaults."""

    def test_all_unset_yields_defaults(self):
        config = load_config()

        assert config.log_level is LogLevel.INFO
        assert config.log_format is LogFormat.TEXT
        assert config.log_output is LogOutput.STDOUT
        assert config.server_address == "localhost:8080"
        assert config.server_read_timeout == timedelta(seconds=5)
        assert config.server_read_header_timeout == timedelta(seconds=2)
        assert config.server_write_timeout == timedelta(seconds=10)
        assert config.server_idle_timeout == timedelta(minutes=1)
        assert config.server_shutdown_timeout == timedelta(seconds=15)

    @pytest.mark.parametrize("env", ENV_NAMES)
    def test_unsetting_one_variable_yields_its_default(self, clean_env, env):
        """With every other variable set, the unset one still gets its default."""
        for name, value in VALID_VALUES.items():
            if name != env:
                clean_env.setenv(name, value)

        config = load_config()

        assert getattr(config, env.lower()) == EXPECTED_DEFAULTS[env]


class TestEnvironmentValues:
    """Set variables are parsed and normalized."""

    def test_all_variables_set(self, clean_env):
        for name, value in VALID_VALUES.items():
            clean_env.setenv(name, value)

        config = load_config()

        assert config.log_level is LogLevel.DEBUG
        assert config.log_format is LogFormat.JSON
        assert config.log_output is LogOutput.STDERR
        assert config.server_address == ":9000"
        assert config.server_idle_timeout == timedelta(seconds=1)

    def test_log_level_mixed_case(self, clean_env):
        clean_env.setenv("LOG_LEVEL", "Debug")
        assert load_config().log_level is LogLevel.DEBUG

    def test_log_output_uppercase_stdout(self, clean_env):
        clean_env.setenv("LOG_OUTPUT", "STDOUT")
        assert load_config().log_output is LogOutput.STDOUT

    def test_log_output_path_verbatim(self, clean_env):
        clean_env.setenv("LOG_OUTPUT", "/var/log/app.log")
        assert load_config().log_output == "/var/log/app.log"

    def test_server_address_is_opaque(self, clean_env):
        """No port-range or host-format check happens at load time."""
        clean_env.setenv("SERVER_ADDRESS", "example.com:70000")
        assert load_config().server_address == "example.com:70000"

    def test_unrelated_variables_ignored(self, clean_env):
        clean_env.setenv("SOME_OTHER_SETTING", "whatever")
        load_config()

    def test_lower_case_names_are_ignored(self, clean_env):
        """Variable names match exactly; log_level is not LOG_LEVEL."""
        clean_env.setenv("log_level", "verbose")
        clean_env.setenv("log_format", "json")
        clean_env.setenv("Server_Idle_Timeout", "bad")

        config = load_config()

        assert config.log_level is LogLevel.INFO
        assert config.log_format is LogFormat.TEXT
        assert config.server_idle_timeout == timedelta(minutes=1)

    def test_exact_name_wins_over_lower_case(self, clean_env):
        clean_env.setenv("LOG_LEVEL", "error")
        clean_env.setenv("log_level", "debug")
        assert load_config().log_level is LogLevel.ERROR


class TestErrorAggregation:
    """Every invalid field is reported, in load order, in one error."""

    def test_log_level_verbose_fails(self, clean_env):
        clean_env.setenv("LOG_LEVEL", "verbose")
        with pytest.raises(ConfigLoadError) as exc_info:
            load_config()
        assert exc_info.value.env_names == ["LOG_LEVEL"]
        assert exc_info.value.errors[0].value == "verbose"

    def test_empty_log_output_fails(self, clean_env):
        clean_env.setenv("LOG_OUTPUT", "")
        with pytest.raises(ConfigLoadError) as exc_info:
            load_config()
        assert exc_info.value.env_names == ["LOG_OUTPUT"]
        assert "LOG_OUTPUT" in str(exc_info.value)

    def test_timeout_and_format_fail_together(self, clean_env):
        """SERVER_READ_TIMEOUT=bad and LOG_FORMAT=xml give two distinct errors."""
        clean_env.setenv("SERVER_READ_TIMEOUT", "bad")
        clean_env.setenv("LOG_FORMAT", "xml")

        with pytest.raises(ConfigLoadError) as exc_info:
            load_config()

        errors = exc_info.value.errors
        assert len(errors) == 2
        assert errors[0] == InvalidFieldError("LOG_FORMAT", "xml", "log format")
        assert errors[1] == InvalidFieldError(
            "SERVER_READ_TIMEOUT", "bad", "server read timeout"
        )

    def test_all_invalid_reported_in_load_order(self, clean_env):
        for name, value in INVALID_VALUES.items():
            clean_env.setenv(name, value)

        with pytest.raises(ConfigLoadError) as exc_info:
            load_config()

        expected = [name for name in ENV_NAMES if name in INVALID_VALUES]
        assert exc_info.value.env_names == expected

    def test_rendering_lists_each_failure(self, clean_env):
        clean_env.setenv("LOG_LEVEL", "verbose")
        clean_env.setenv("SERVER_WRITE_TIMEOUT", "ten")

        with pytest.raises(ConfigLoadError) as exc_info:
            load_config()

        message = str(exc_info.value)
        lines = message.splitlines()
        assert lines[0] == "failed to load config:"
        assert lines[1] == "  - invalid log level (LOG_LEVEL) got='verbose'"
        assert lines[2] == "  - invalid server write timeout (SERVER_WRITE_TIMEOUT) got='ten'"

    def test_error_is_not_chained(self, clean_env):
        clean_env.setenv("LOG_FORMAT", "xml")
        with pytest.raises(ConfigLoadError) as exc_info:
            load_config()
        assert exc_info.value.__cause__ is None
        assert exc_info.value.__suppress_context__ is True

    def test_load_error_is_configuration_error(self):
        assert issubclass(ConfigLoadError, ConfigurationError)

    def test_load_error_requires_failures(self):
        with pytest.raises(ValueError):
            ConfigLoadError([])

    def test_load_error_survives_pickling(self, clean_env):
        clean_env.setenv("LOG_FORMAT", "xml")
        clean_env.setenv("SERVER_READ_TIMEOUT", "bad")
        with pytest.raises(ConfigLoadError) as exc_info:
            load_config()

        restored = pickle.loads(pickle.dumps(exc_info.value))

        assert restored.errors == exc_info.value.errors
        assert str(restored) == str(exc_info.value)


class TestIdempotence:
    """Same environment, same outcome."""

    def test_equal_configs(self, clean_env):
        clean_env.setenv("LOG_LEVEL", "WARN")
        clean_env.setenv("SERVER_IDLE_TIMEOUT", "90s")
        assert load_config() == load_config()

    def test_equal_error_sets(self, clean_env):
        clean_env.setenv("LOG_LEVEL", "verbose")
        clean_env.setenv("SERVER_SHUTDOWN_TIMEOUT", "soon")

        outcomes = []
        for _ in range(2):
            with pytest.raises(ConfigLoadError) as exc_info:
                load_config()
            outcomes.append(exc_info.value.errors)

        assert outcomes[0] == outcomes[1]


class TestImmutability:
    """A loaded Config cannot be modified."""

    def test_assignment_rejected(self):
        config = load_config()
        with pytest.raises(pydantic.ValidationError):
            config.log_level = LogLevel.DEBUG  # type: ignore[misc]

    def test_hashable(self):
        config = load_config()
        assert hash(config) == hash(load_config())


class TestDirectConstruction:
    """Config(**raw) runs the same parsers as environment values."""

    def test_raw_kwargs_are_parsed(self):
        config = Config(LOG_LEVEL=" ERROR ", SERVER_READ_TIMEOUT="250ms")
        assert config.log_level is LogLevel.ERROR
        assert config.server_read_timeout == timedelta(milliseconds=250)

    def test_typed_kwargs_pass_through(self):
        config = Config(LOG_FORMAT=LogFormat.JSON, SERVER_IDLE_TIMEOUT=timedelta(seconds=3))
        assert config.log_format is LogFormat.JSON
        assert config.server_idle_timeout == timedelta(seconds=3)

    def test_log_fields_are_plain_values(self):
        fields = Config(LOG_OUTPUT="/tmp/app.log").log_fields()
        assert fields["log_level"] == "info"
        assert fields["log_output"] == "/tmp/app.log"
        assert fields["server_idle_timeout"] == 60.0


class TestGetConfig:
    """get_config() caches the first successful load."""

    def test_returns_same_instance(self):
        assert get_config() is get_config()

    def test_cache_clear_reloads(self, clean_env):
        first = get_config()
        clean_env.setenv("LOG_LEVEL", "error")
        assert get_config() is first
        get_config.cache_clear()
        assert get_config().log_level is LogLevel.ERROR

    def test_failure_not_cached(self, clean_env):
        clean_env.setenv("LOG_LEVEL", "verbose")
        with pytest.raises(ConfigLoadError):
            get_config()
        clean_env.delenv("LOG_LEVEL")
        assert get_config().log_level is LogLevel.INFO
