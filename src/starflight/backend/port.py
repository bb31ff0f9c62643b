"""Backend – the three remote operations the client depends on."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence, runtime_checkable
from uuid import UUID

__all__ = [
    "BackendClient",
    "MessageOpenedReply",
    "RegistrationReply",
    "UnregistrationReply",
]


@dataclass(frozen=True)
class RegistrationReply:
    """Backend answer to ``register``.

    ``created`` is ``True`` when the backend created a new registration and
    ``False`` when it updated an existing one.
    """

    client_uuid: UUID
    created: bool


@dataclass(frozen=True)
class UnregistrationReply:
    ok: bool


@dataclass(frozen=True)
class MessageOpenedReply:
    ok: bool


@runtime_checkable
class BackendClient(Protocol):
    """Port: StarFlight registration service.

    ``tags`` is forwarded exactly as given: ``None`` and an empty sequence are
    distinct values and implementations decide how each maps onto the wire.
    Implementations raise :class:`~starflight.kernel.errors.TransportError`
    or :class:`~starflight.kernel.errors.ProtocolError` on failure.
    """

    async def register(
        self, app_id: str, client_secret: str, token: str, tags: Sequence[str] | None
    ) -> RegistrationReply: ...

    async def unregister(
        self, app_id: str, client_secret: str, token: str, tags: Sequence[str] | None
    ) -> UnregistrationReply: ...

    async def mark_message_opened(
        self, app_id: str, client_secret: str, token: str, message_id: str
    ) -> MessageOpenedReply: ...
