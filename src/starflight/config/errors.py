"""Config – errors raised while building StarflightSettings."""
from starflight.kernel.errors import ApplicationError

ENV_PREFIX = "STARFLIGHT"

_SECRET_SETTINGS = frozenset({"client_secret"})


def env_var_for(setting_name: str) -> str:
    """``client_secret`` -> ``STARFLIGHT_CLIENT_SECRET``."""
    return f"{ENV_PREFIX}_{setting_name}".upper()


class ConfigError(ApplicationError):
    """Raised when the client configuration is invalid or could not be loaded."""
    default_code = "config_error"


class MissingRequiredSettingError(ConfigError):
    """A required setting such as ``app_id`` was given neither directly nor via ``STARFLIGHT_*``."""
    default_code = "missing_required_setting"

    def __init__(self, setting_name: str) -> None:
        self.setting_name = setting_name
        self.env_var = env_var_for(setting_name)
        super().__init__(f"Required setting '{setting_name}' is missing (set {self.env_var})")


class InvalidSettingValueError(ConfigError):
    """A setting is present but unusable; the client secret is never echoed."""
    default_code = "invalid_setting_value"

    def __init__(self, setting_name: str, value: object, reason: str) -> None:
        self.setting_name = setting_name
        self.env_var = env_var_for(setting_name)
        self.value = value
        self.reason = reason
        shown = "'[REDACTED]'" if setting_name in _SECRET_SETTINGS else repr(value)
        super().__init__(f"Setting '{setting_name}' ({self.env_var}) has invalid value {shown}: {reason}")


__all__ = [
    "ConfigError",
    "ENV_PREFIX",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "env_var_for",
]
