"""Platform – token provider and availability ports."""
from starflight.platform.availability import (
    AlwaysAvailable,
    AvailabilityChecker,
    AvailabilityResult,
    PlatformAvailability,
)
from starflight.platform.token import CallbackTokenProvider, TokenProvider, TokenRequest

__all__ = [
    "AlwaysAvailable",
    "AvailabilityChecker",
    "AvailabilityResult",
    "CallbackTokenProvider",
    "PlatformAvailability",
    "TokenProvider",
    "TokenRequest",
]
