"""Config – build StarflightSettings from ``STARFLIGHT_*`` variables or a ``.env`` file."""
from __future__ import annotations

import abc
import dataclasses
import os
from typing import Any, Callable, Mapping

from starflight.config.errors import ConfigError, InvalidSettingValueError, MissingRequiredSettingError, env_var_for
from starflight.config.settings import StarflightSettings

# Field annotations are strings under postponed evaluation.
_COERCERS: dict[str, Callable[[str], Any]] = {"float": float, "int": int}


class SettingsLoader(abc.ABC):
    """Port: produce :class:`StarflightSettings` from an external source."""

    @abc.abstractmethod
    def load(self) -> StarflightSettings: ...


class EnvSettingsLoader(SettingsLoader):
    """Read each settings field ``foo`` from ``STARFLIGHT_FOO``.

    *environ* defaults to ``os.environ``. Blank variables count as unset, so
    an exported-but-empty ``STARFLIGHT_STATE_PATH`` falls back to the default.
    """

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = environ

    def load(self) -> StarflightSettings:
        environ = os.environ if self._environ is None else self._environ
        kwargs: dict[str, Any] = {}
        for field in dataclasses.fields(StarflightSettings):
            raw = environ.get(env_var_for(field.name), "").strip()
            if not raw:
                if field.default is dataclasses.MISSING:
                    raise MissingRequiredSettingError(field.name)
                continue
            coerce = _COERCERS.get(str(field.type))
            try:
                kwargs[field.name] = coerce(raw) if coerce else raw
            except ValueError as exc:
                raise InvalidSettingValueError(field.name, raw, f"expected {field.type}") from exc

        try:
            return StarflightSettings(**kwargs)
        except ConfigError:
            raise
        except Exception as exc:
            raise ConfigError(f"Failed to load Starflight settings: {exc}", cause=exc) from exc


class DotenvSettingsLoader(SettingsLoader):
    """Read ``STARFLIGHT_*`` values from a ``.env`` file.

    Values already in the process environment win unless *override* is set.
    The process environment itself is never modified.
    """

    def __init__(self, env_file: str = ".env", override: bool = False) -> None:
        self._env_file = env_file
        self._override = override

    def load(self) -> StarflightSettings:
        try:
            from dotenv import dotenv_values  # type: ignore[import-untyped]
        except ImportError as exc:
            raise ImportError("Install 'starflight-client[dotenv]' to use DotenvSettingsLoader") from exc
        from_file = {k: v for k, v in dotenv_values(self._env_file).items() if v is not None}
        merged = {**os.environ, **from_file} if self._override else {**from_file, **os.environ}
        return EnvSettingsLoader(merged).load()


__all__ = ["DotenvSettingsLoader", "EnvSettingsLoader", "SettingsLoader"]
