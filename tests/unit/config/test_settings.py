"""Unit tests for config settings & validation."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from starflight.config import (
    DEFAULT_PUSH_URL,
    ConfigError,
    DotenvSettingsLoader,
    EnvSettingsLoader,
    InvalidSettingValueError,
    MissingRequiredSettingError,
    StarflightSettings,
)


def _settings(**overrides: object) -> StarflightSettings:
    values: dict[str, object] = {"sender_id": "sender", "app_id": "app", "client_secret": "secret"}
    values.update(overrides)
    return StarflightSettings(**values)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# StarflightSettings
# ---------------------------------------------------------------------------


class TestStarflightSettings:
    def test_defaults(self) -> None:
        s = _settings()
        assert s.push_url == DEFAULT_PUSH_URL
        assert s.platform_type == "android"
        assert s.timeout == 10.0
        assert s.state_path == ""
        assert s.acknowledgement_capacity == 100

    @pytest.mark.parametrize("field", ["sender_id", "app_id", "client_secret"])
    def test_blank_credentials_rejected(self, field: str) -> None:
        with pytest.raises(InvalidSettingValueError) as exc_info:
            _settings(**{field: "  "})
        assert exc_info.value.setting_name == field

    def test_non_positive_timeout_rejected(self) -> None:
        with pytest.raises(InvalidSettingValueError):
            _settings(timeout=0)

    def test_non_positive_capacity_rejected(self) -> None:
        with pytest.raises(InvalidSettingValueError):
            _settings(acknowledgement_capacity=0)

    def test_repr_hides_secret(self) -> None:
        assert "secret'" not in repr(_settings(client_secret="secret"))
        assert "[REDACTED]" in repr(_settings())

    def test_invalid_setting_is_config_error(self) -> None:
        assert issubclass(InvalidSettingValueError, ConfigError)


    def test_invalid_secret_is_not_echoed(self) -> None:
        error = InvalidSettingValueError("client_secret", "hunter2", "too short")
        assert "hunter2" not in error.message
        assert "STARFLIGHT_CLIENT_SECRET" in error.message


# ---------------------------------------------------------------------------
# EnvSettingsLoader
# ---------------------------------------------------------------------------

_REQUIRED = {
    "STARFLIGHT_SENDER_ID": "1234",
    "STARFLIGHT_APP_ID": "app-1",
    "STARFLIGHT_CLIENT_SECRET": "s3cret",
}


def _load(**extra: str) -> StarflightSettings:
    return EnvSettingsLoader({**_REQUIRED, **extra}).load()


class TestEnvSettingsLoader:
    def test_loads_required(self) -> None:
        s = _load()
        assert (s.sender_id, s.app_id, s.client_secret) == ("1234", "app-1", "s3cret")

    def test_reads_process_environment_by_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for key, value in _REQUIRED.items():
            monkeypatch.setenv(key, value)
        assert EnvSettingsLoader().load().app_id == "app-1"

    def test_coerces_float_and_int(self) -> None:
        s = _load(STARFLIGHT_TIMEOUT="2.5", STARFLIGHT_ACKNOWLEDGEMENT_CAPACITY="10")
        assert s.timeout == 2.5
        assert s.acknowledgement_capacity == 10

    def test_loads_optional_strings(self) -> None:
        s = _load(STARFLIGHT_PUSH_URL="http://localhost/push", STARFLIGHT_STATE_PATH="/tmp/state.json")
        assert s.push_url == "http://localhost/push"
        assert s.state_path == "/tmp/state.json"

    def test_blank_optional_uses_default(self) -> None:
        assert _load(STARFLIGHT_PUSH_URL="  ").push_url == DEFAULT_PUSH_URL

    def test_missing_required_names_variable(self) -> None:
        environ = {k: v for k, v in _REQUIRED.items() if k != "STARFLIGHT_CLIENT_SECRET"}
        with pytest.raises(MissingRequiredSettingError) as exc_info:
            EnvSettingsLoader(environ).load()
        assert exc_info.value.setting_name == "client_secret"
        assert exc_info.value.env_var == "STARFLIGHT_CLIENT_SECRET"
        assert "STARFLIGHT_CLIENT_SECRET" in exc_info.value.message

    def test_uncoercible_value_raises(self) -> None:
        with pytest.raises(InvalidSettingValueError) as exc_info:
            _load(STARFLIGHT_TIMEOUT="soon")
        assert exc_info.value.env_var == "STARFLIGHT_TIMEOUT"

    def test_validation_error_propagates(self) -> None:
        with pytest.raises(InvalidSettingValueError):
            _load(STARFLIGHT_TIMEOUT="-1")


class TestDotenvSettingsLoader:
    def test_file_values_fill_gaps_without_touching_environ(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        pytest.importorskip("dotenv")
        env_file = tmp_path / ".env"
        env_file.write_text("STARFLIGHT_APP_ID=from-file\nSTARFLIGHT_CLIENT_SECRET=file-secret\n")
        monkeypatch.setenv("STARFLIGHT_SENDER_ID", "1234")
        monkeypatch.setenv("STARFLIGHT_APP_ID", "from-env")
        monkeypatch.delenv("STARFLIGHT_CLIENT_SECRET", raising=False)

        s = DotenvSettingsLoader(str(env_file)).load()
        assert s.app_id == "from-env"
        assert s.client_secret == "file-secret"
        assert "STARFLIGHT_CLIENT_SECRET" not in os.environ

        assert DotenvSettingsLoader(str(env_file), override=True).load().app_id == "from-file"
