"""Platform – messaging-service availability as a value, not an exception."""
from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Protocol, runtime_checkable


class PlatformAvailability(str, Enum):
    """State of the platform messaging service on this device."""

    AVAILABLE = "AVAILABLE"
    SERVICE_MISSING = "SERVICE_MISSING"
    SERVICE_UPDATING = "SERVICE_UPDATING"
    SERVICE_VERSION_UPDATE_REQUIRED = "SERVICE_VERSION_UPDATE_REQUIRED"
    SERVICE_DISABLED = "SERVICE_DISABLED"
    SERVICE_INVALID = "SERVICE_INVALID"


@dataclasses.dataclass(frozen=True)
class AvailabilityResult:
    """Outcome of an availability check.

    ``resolution_code`` is the platform's own code for the problem and
    ``user_resolvable`` tells whether the user can fix it (install, update,
    enable) so the caller may offer a resolution flow.
    """

    status: PlatformAvailability
    resolution_code: int | None = None
    user_resolvable: bool = False

    @property
    def is_available(self) -> bool:
        return self.status is PlatformAvailability.AVAILABLE

    @classmethod
    def available(cls) -> "AvailabilityResult":
        return cls(PlatformAvailability.AVAILABLE)


@runtime_checkable
class AvailabilityChecker(Protocol):
    """Port: probe whether the platform messaging service can be used."""

    def check(self) -> AvailabilityResult: ...


class AlwaysAvailable:
    """Checker for environments without a platform service to probe."""

    def check(self) -> AvailabilityResult:
        return AvailabilityResult.available()


__all__ = [
    "AlwaysAvailable",
    "AvailabilityChecker",
    "AvailabilityResult",
    "PlatformAvailability",
]
