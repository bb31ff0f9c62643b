"""State – RegistrationStateStore."""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable
from uuid import UUID

from starflight.state.codec import decode_id_log, decode_tags, encode_id_log, encode_tags
from starflight.state.kv import KeyValueStore
from starflight.state.models import RegistrationState

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1
DEFAULT_CAPACITY = 100


def _key(name: str) -> str:
    return f"{name}_{SCHEMA_VERSION}"


KEY_CLIENT_UUID = _key("client_uuid")
KEY_LAST_SENT_TOKEN = _key("last_sent_token")
KEY_LAST_REGISTRATION_TIME = _key("last_registration_time")
KEY_REGISTERED_TAGS = _key("registered_tags")
KEY_OPENED_MESSAGES = _key("opened_messages")

_REGISTRATION_KEYS = (
    KEY_CLIENT_UUID,
    KEY_LAST_SENT_TOKEN,
    KEY_LAST_REGISTRATION_TIME,
    KEY_REGISTERED_TAGS,
)


class RegistrationStateStore:
    """Persistent record of the device registration and the acknowledgement log.

    Pure storage: no policy lives here. Absence is reported as ``None`` or an
    empty collection, never as an error. All keys carry the schema version
    suffix (``last_sent_token_1`` …) so a future format change cannot read
    stale data.
    """

    def __init__(
        self,
        kv: KeyValueStore,
        *,
        capacity: int = DEFAULT_CAPACITY,
        namespace: str = "default",
    ) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._kv = kv
        self._capacity = capacity
        self._namespace = namespace

    @property
    def namespace(self) -> str:
        """Identifies the device whose state this store holds."""
        return f"{self._namespace}/v{SCHEMA_VERSION}"

    @property
    def capacity(self) -> int:
        return self._capacity

    # ------------------------------------------------------------------
    # Registration record
    # ------------------------------------------------------------------

    async def get(self) -> RegistrationState | None:
        token = await self._kv.get(KEY_LAST_SENT_TOKEN)
        if token is None:
            return None
        raw_uuid = await self._kv.get(KEY_CLIENT_UUID)
        raw_time = await self._kv.get(KEY_LAST_REGISTRATION_TIME)
        try:
            client_uuid = UUID(raw_uuid) if raw_uuid else None
            registered_at = datetime.fromisoformat(raw_time) if raw_time else None
        except ValueError:
            client_uuid = registered_at = None
        if client_uuid is None or registered_at is None:
            logger.warning("state.registration_incomplete namespace=%s", self.namespace)
            return None
        return RegistrationState(
            client_uuid=client_uuid,
            last_sent_token=token,
            registered_tags=decode_tags(await self._kv.get(KEY_REGISTERED_TAGS)),
            last_registration_time=registered_at,
        )

    async def put(self, state: RegistrationState) -> None:
        await self._kv.set_many(
            {
                KEY_CLIENT_UUID: str(state.client_uuid),
                KEY_LAST_SENT_TOKEN: state.last_sent_token,
                KEY_LAST_REGISTRATION_TIME: state.last_registration_time.isoformat(),
                KEY_REGISTERED_TAGS: encode_tags(state.registered_tags),
            }
        )

    async def clear(self) -> None:
        """Remove the registration record; the acknowledgement log is kept."""
        await self._kv.delete_many(_REGISTRATION_KEYS)

    async def get_last_sent_token(self) -> str | None:
        return await self._kv.get(KEY_LAST_SENT_TOKEN)

    async def get_client_uuid(self) -> UUID | None:
        state = await self.get()
        return state.client_uuid if state is not None else None

    async def is_registered(self) -> bool:
        return await self.get_last_sent_token() is not None

    async def get_tags(self) -> frozenset[str]:
        return decode_tags(await self._kv.get(KEY_REGISTERED_TAGS))

    async def set_tags(self, tags: Iterable[str]) -> None:
        await self._kv.set_many({KEY_REGISTERED_TAGS: encode_tags(tags)})

    # ------------------------------------------------------------------
    # Acknowledgement log
    # ------------------------------------------------------------------

    async def get_acknowledgement_log(self) -> list[str]:
        """Acknowledged message ids, oldest first."""
        return decode_id_log(await self._kv.get(KEY_OPENED_MESSAGES))

    async def is_acknowledged(self, message_id: str) -> bool:
        return message_id in await self.get_acknowledgement_log()

    async def record_acknowledged(self, message_id: str) -> None:
        """Append *message_id*, evicting the oldest entries beyond capacity."""
        entries = await self.get_acknowledgement_log()
        if message_id in entries:
            return
        entries.append(message_id)
        evicted = len(entries) - self._capacity
        if evicted > 0:
            entries = entries[evicted:]
            logger.debug("state.acknowledgements_evicted count=%d", evicted)
        await self._kv.set_many({KEY_OPENED_MESSAGES: encode_id_log(entries)})


__all__ = [
    "DEFAULT_CAPACITY",
    "KEY_CLIENT_UUID",
    "KEY_LAST_REGISTRATION_TIME",
    "KEY_LAST_SENT_TOKEN",
    "KEY_OPENED_MESSAGES",
    "KEY_REGISTERED_TAGS",
    "RegistrationStateStore",
    "SCHEMA_VERSION",
]
