"""State – RegistrationState."""
from __future__ import annotations

import dataclasses
from datetime import datetime
from uuid import UUID


@dataclasses.dataclass(frozen=True)
class RegistrationState:
    """The device's registration as last confirmed by the backend."""

    client_uuid: UUID
    last_sent_token: str
    registered_tags: frozenset[str]
    last_registration_time: datetime


__all__ = ["RegistrationState"]
