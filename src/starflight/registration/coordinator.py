"""Registration – RegistrationCoordinator."""
from __future__ import annotations

from typing import Iterable
from uuid import UUID

from starflight.backend.port import BackendClient
from starflight.kernel.errors import BaseError, PlatformUnavailableError, PreconditionError
from starflight.kernel.time import Clock, SystemClock
from starflight.observability.logging import get_logger
from starflight.platform.token import TokenProvider
from starflight.registration.calls import backend_call, canonicalize, require_ok
from starflight.registration.locks import KeyedLock
from starflight.registration.outcomes import RegistrationOutcome, UnregistrationOutcome
from starflight.state.models import RegistrationState
from starflight.state.store import RegistrationStateStore

log = get_logger(__name__)


class RegistrationCoordinator:
    """Keeps the device's token and tag set in sync with the backend.

    The backend is only called when the platform token or the canonical tag
    set differs from what was last confirmed. Stored state is written only
    after a successful backend reply, so a failed call never leaves local
    state claiming something the backend did not accept.

    Operations on the same store are serialised through *locks*; share one
    :class:`KeyedLock` with the :class:`AcknowledgementTracker` of the same
    device.
    """

    def __init__(
        self,
        *,
        app_id: str,
        client_secret: str,
        backend: BackendClient,
        token_provider: TokenProvider,
        store: RegistrationStateStore,
        clock: Clock | None = None,
        locks: KeyedLock | None = None,
    ) -> None:
        self._app_id = app_id
        self._client_secret = client_secret
        self._backend = backend
        self._tokens = token_provider
        self._store = store
        self._clock = clock or SystemClock()
        self._locks = locks or KeyedLock()

    async def register(self, tags: Iterable[str] | None = None) -> RegistrationOutcome:
        """Register the current platform token with *tags*.

        The stored tag set is replaced, not merged. ``None`` and an empty
        collection compare equal for the skip decision but are forwarded to
        the backend as given.
        """
        desired = canonicalize(tags)
        async with self._locks.hold(self._store.namespace):
            return await self._register(desired, send_tags=tags is not None)

    async def refresh_registration(self) -> RegistrationOutcome:
        """Re-register with the stored tags; fails fast when not registered.

        A device counts as registered while a token is stored. If the rest
        of the record is unreadable, the refresh goes to the backend and
        rewrites it.
        """
        async with self._locks.hold(self._store.namespace):
            if not await self._store.is_registered():
                raise PreconditionError("Cannot refresh: device is not registered")
            tags = await self._store.get_tags()
            return await self._register(tuple(sorted(tags)), send_tags=True)

    async def unregister(self, tags: Iterable[str] | None = None) -> UnregistrationOutcome:
        """Remove *tags* from the registration, or the whole registration."""
        removed = canonicalize(tags)
        async with self._locks.hold(self._store.namespace):
            token = await self._store.get_last_sent_token()
            if token is None:
                log.info("registration.unregister_skipped", reason="not_registered")
                return UnregistrationOutcome.NOT_REGISTERED

            if removed:
                reply = await backend_call(
                    "unregister",
                    self._backend.unregister(self._app_id, self._client_secret, token, list(removed)),
                )
                require_ok("unregister", reply.ok)
                remaining = await self._store.get_tags() - set(removed)
                await self._store.set_tags(remaining)
                log.info("registration.tags_removed", tags=list(removed), remaining=sorted(remaining))
                return UnregistrationOutcome.OK

            reply = await backend_call(
                "unregister",
                self._backend.unregister(self._app_id, self._client_secret, token, None),
            )
            require_ok("unregister", reply.ok)
            await self._store.clear()
            log.info("registration.removed")
            await self._invalidate_token()
            return UnregistrationOutcome.OK

    async def get_registered_tags(self) -> frozenset[str]:
        return await self._store.get_tags()

    async def get_client_uuid(self) -> UUID | None:
        return await self._store.get_client_uuid()

    async def is_registered(self) -> bool:
        return await self._store.is_registered()

    async def _register(self, desired: tuple[str, ...], *, send_tags: bool) -> RegistrationOutcome:
        token = await self._fetch_token()
        state = await self._store.get()
        if (
            state is not None
            and state.last_sent_token == token
            and tuple(sorted(state.registered_tags)) == desired
        ):
            log.info("registration.already_registered", client_uuid=str(state.client_uuid))
            return RegistrationOutcome.ALREADY_REGISTERED

        reply = await backend_call(
            "register",
            self._backend.register(
                self._app_id,
                self._client_secret,
                token,
                list(desired) if send_tags else None,
            ),
        )
        await self._store.put(
            RegistrationState(
                client_uuid=reply.client_uuid,
                last_sent_token=token,
                registered_tags=frozenset(desired),
                last_registration_time=self._clock.now(),
            )
        )
        outcome = RegistrationOutcome.REGISTERED if reply.created else RegistrationOutcome.REFRESHED
        log.info(
            "registration.stored",
            outcome=outcome.value,
            client_uuid=str(reply.client_uuid),
            tags=list(desired),
        )
        return outcome

    async def _fetch_token(self) -> str:
        try:
            return await self._tokens.get_token()
        except BaseError:
            raise
        except Exception as exc:
            raise PlatformUnavailableError(f"Could not obtain messaging token: {exc}", cause=exc) from exc

    async def _invalidate_token(self) -> None:
        try:
            await self._tokens.invalidate()
        except BaseError:
            raise
        except Exception as exc:
            raise PlatformUnavailableError(f"Could not invalidate messaging token: {exc}", cause=exc) from exc


__all__ = ["RegistrationCoordinator"]
