"""Registration – AcknowledgementTracker."""
from __future__ import annotations

from uuid import UUID

from starflight.backend.port import BackendClient
from starflight.kernel.errors import PreconditionError
from starflight.observability.logging import get_logger
from starflight.registration.calls import backend_call, require_ok
from starflight.registration.locks import KeyedLock
from starflight.registration.outcomes import AcknowledgementOutcome
from starflight.state.store import RegistrationStateStore

log = get_logger(__name__)


class AcknowledgementTracker:
    """Sends each "message opened" acknowledgement at most once.

    Acknowledged ids go into the store's bounded log only after the backend
    confirmed them. Once an id ages out of the log a repeated open sends it
    again; that trade-off keeps local history bounded.
    """

    def __init__(
        self,
        *,
        app_id: str,
        client_secret: str,
        backend: BackendClient,
        store: RegistrationStateStore,
        locks: KeyedLock | None = None,
    ) -> None:
        self._app_id = app_id
        self._client_secret = client_secret
        self._backend = backend
        self._store = store
        self._locks = locks or KeyedLock()

    async def mark_opened(self, message_id: UUID | str) -> AcknowledgementOutcome:
        key = normalize_message_id(message_id)
        async with self._locks.hold(self._store.namespace):
            if await self._store.is_acknowledged(key):
                log.debug("acknowledgement.already_opened", message_id=key)
                return AcknowledgementOutcome.ALREADY_OPENED

            token = await self._store.get_last_sent_token()
            if token is None:
                raise PreconditionError("Cannot acknowledge message: device is not registered")

            reply = await backend_call(
                "message_opened",
                self._backend.mark_message_opened(self._app_id, self._client_secret, token, key),
            )
            require_ok("message_opened", reply.ok)
            await self._store.record_acknowledged(key)
            log.info("acknowledgement.sent", message_id=key)
            return AcknowledgementOutcome.OK

    async def is_opened(self, message_id: UUID | str) -> bool:
        return await self._store.is_acknowledged(normalize_message_id(message_id))


def normalize_message_id(message_id: UUID | str) -> str:
    """Canonical lower-case hyphenated form of a message UUID."""
    if isinstance(message_id, UUID):
        return str(message_id)
    try:
        return str(UUID(message_id))
    except (TypeError, ValueError) as exc:
        raise PreconditionError(f"Invalid message id {message_id!r}", cause=exc) from exc


__all__ = ["AcknowledgementTracker", "normalize_message_id"]
