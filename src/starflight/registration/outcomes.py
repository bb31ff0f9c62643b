"""Registration – operation outcomes."""
from __future__ import annotations

from enum import Enum


class RegistrationOutcome(str, Enum):
    """Result of a successful register / refresh call."""

    REGISTERED = "REGISTERED"
    """The backend created a new registration."""
    REFRESHED = "REFRESHED"
    """The backend updated an existing registration."""
    ALREADY_REGISTERED = "ALREADY_REGISTERED"
    """Token and tags were unchanged; no call was made."""


class UnregistrationOutcome(str, Enum):
    OK = "OK"
    NOT_REGISTERED = "NOT_REGISTERED"


class AcknowledgementOutcome(str, Enum):
    OK = "OK"
    ALREADY_OPENED = "ALREADY_OPENED"


__all__ = ["AcknowledgementOutcome", "RegistrationOutcome", "UnregistrationOutcome"]
