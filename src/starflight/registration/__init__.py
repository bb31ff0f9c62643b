"""Registration – reconciliation and acknowledgement policy."""
from starflight.registration.acknowledgement import AcknowledgementTracker, normalize_message_id
from starflight.registration.coordinator import RegistrationCoordinator
from starflight.registration.locks import KeyedLock
from starflight.registration.outcomes import (
    AcknowledgementOutcome,
    RegistrationOutcome,
    UnregistrationOutcome,
)

__all__ = [
    "AcknowledgementOutcome",
    "AcknowledgementTracker",
    "KeyedLock",
    "RegistrationCoordinator",
    "RegistrationOutcome",
    "UnregistrationOutcome",
    "normalize_message_id",
]
