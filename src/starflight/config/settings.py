"""Config – StarflightSettings."""
from __future__ import annotations

import dataclasses

from starflight.config.errors import InvalidSettingValueError

DEFAULT_PUSH_URL = "https://starflight.starcloud.us/push"
DEFAULT_ACKNOWLEDGEMENT_CAPACITY = 100


@dataclasses.dataclass
class StarflightSettings:
    """Everything needed to talk to one StarFlight app for one device.

    Loaded from ``STARFLIGHT_*`` environment variables by
    :class:`~starflight.config.loaders.EnvSettingsLoader`, or constructed
    directly.
    """

    sender_id: str
    app_id: str
    client_secret: str
    push_url: str = DEFAULT_PUSH_URL
    platform_type: str = "android"
    timeout: float = 10.0
    state_path: str = ""
    acknowledgement_capacity: int = DEFAULT_ACKNOWLEDGEMENT_CAPACITY

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        for name in ("sender_id", "app_id", "client_secret", "push_url", "platform_type"):
            value = getattr(self, name)
            if not value or not value.strip():
                raise InvalidSettingValueError(name, value, "must not be blank")
        if self.timeout <= 0:
            raise InvalidSettingValueError("timeout", self.timeout, "must be positive")
        if self.acknowledgement_capacity <= 0:
            raise InvalidSettingValueError(
                "acknowledgement_capacity", self.acknowledgement_capacity, "must be positive"
            )

    def __repr__(self) -> str:
        return (
            f"StarflightSettings(sender_id={self.sender_id!r}, app_id={self.app_id!r}, "
            f"client_secret='[REDACTED]', push_url={self.push_url!r})"
        )


__all__ = ["DEFAULT_ACKNOWLEDGEMENT_CAPACITY", "DEFAULT_PUSH_URL", "StarflightSettings"]
