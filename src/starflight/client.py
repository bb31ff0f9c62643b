"""StarflightClient – the public entry point.

One instance per device, constructed explicitly and passed to whoever needs
it::

    async with StarflightClient.initialize(
        sender_id="1234", app_id="my-app", client_secret="s3cret",
        token_provider=provider,
    ) as client:
        result = await client.register(["news", "sports"])
        if result.is_ok():
            print(result.value)          # RegistrationOutcome.REGISTERED
        else:
            print(result.error.code)     # e.g. "transport_error"

``register``, ``refresh_registration``, ``unregister`` and
``mark_message_opened`` return a :class:`~starflight.kernel.types.Result`
and never raise a :class:`~starflight.kernel.errors.BaseError`; an optional
callback is notified as well. The plain readers (``get_registered_tags``,
``get_client_uuid``, ``is_registered``) raise, for example
:class:`~starflight.kernel.errors.InfrastructureError` on an unreadable
state file.
"""
from __future__ import annotations

from typing import Any, Awaitable, Callable, Iterable, Protocol, TypeVar
from uuid import UUID

from starflight.backend.http import HttpxBackendClient
from starflight.backend.port import BackendClient
from starflight.config.settings import StarflightSettings
from starflight.kernel.errors import BaseError, PlatformUnavailableError
from starflight.kernel.time import Clock
from starflight.kernel.types import Err, Ok, Result
from starflight.observability.logging import get_logger
from starflight.platform.availability import AlwaysAvailable, AvailabilityChecker, AvailabilityResult
from starflight.platform.token import TokenProvider
from starflight.registration import (
    AcknowledgementOutcome,
    AcknowledgementTracker,
    KeyedLock,
    RegistrationCoordinator,
    RegistrationOutcome,
    UnregistrationOutcome,
)
from starflight.state.kv import InMemoryKeyValueStore, JsonFileKeyValueStore, KeyValueStore
from starflight.state.store import RegistrationStateStore

T = TypeVar("T")
T_contra = TypeVar("T_contra", contravariant=True)

log = get_logger(__name__)


class StarflightCallback(Protocol[T_contra]):
    """Optional listener for the outcome of one operation."""

    def on_success(self, result: T_contra) -> None: ...

    def on_failure(self, error: BaseError) -> None: ...


class StarflightClient:
    """Facade over the coordinator and the acknowledgement tracker."""

    def __init__(
        self,
        settings: StarflightSettings,
        *,
        backend: BackendClient,
        token_provider: TokenProvider,
        store: RegistrationStateStore,
        availability: AvailabilityChecker | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._settings = settings
        self._backend = backend
        self._owned: list[Any] = []
        self._availability = availability or AlwaysAvailable()
        locks = KeyedLock()
        self._coordinator = RegistrationCoordinator(
            app_id=settings.app_id,
            client_secret=settings.client_secret,
            backend=backend,
            token_provider=token_provider,
            store=store,
            clock=clock,
            locks=locks,
        )
        self._tracker = AcknowledgementTracker(
            app_id=settings.app_id,
            client_secret=settings.client_secret,
            backend=backend,
            store=store,
            locks=locks,
        )

    # ------------------------------------------------------------------
    # Construction / teardown
    # ------------------------------------------------------------------

    @classmethod
    def from_settings(
        cls,
        settings: StarflightSettings,
        *,
        token_provider: TokenProvider,
        availability: AvailabilityChecker | None = None,
        backend: BackendClient | None = None,
        kv: KeyValueStore | None = None,
        clock: Clock | None = None,
    ) -> "StarflightClient":
        """Build a client, creating the HTTP backend and state store as needed.

        State goes to ``settings.state_path`` when set, otherwise to memory.
        """
        owned_backend = None
        if backend is None:
            backend = owned_backend = HttpxBackendClient(
                settings.push_url,
                platform_type=settings.platform_type,
                timeout=settings.timeout,
            )
        if kv is None:
            kv = JsonFileKeyValueStore(settings.state_path) if settings.state_path else InMemoryKeyValueStore()
        store = RegistrationStateStore(
            kv,
            capacity=settings.acknowledgement_capacity,
            namespace=settings.app_id,
        )
        client = cls(
            settings,
            backend=backend,
            token_provider=token_provider,
            store=store,
            availability=availability,
            clock=clock,
        )
        if owned_backend is not None:
            client._owned.append(owned_backend)
        log.debug("client.initialized", sender_id=settings.sender_id, app_id=settings.app_id)
        return client

    @classmethod
    def initialize(
        cls,
        sender_id: str,
        app_id: str,
        client_secret: str,
        *,
        token_provider: TokenProvider,
        availability: AvailabilityChecker | None = None,
        backend: BackendClient | None = None,
        kv: KeyValueStore | None = None,
        clock: Clock | None = None,
        **settings: Any,
    ) -> "StarflightClient":
        """Shorthand for :meth:`from_settings` with inline credentials."""
        return cls.from_settings(
            StarflightSettings(sender_id=sender_id, app_id=app_id, client_secret=client_secret, **settings),
            token_provider=token_provider,
            availability=availability,
            backend=backend,
            kv=kv,
            clock=clock,
        )

    @property
    def settings(self) -> StarflightSettings:
        return self._settings

    async def aclose(self) -> None:
        while self._owned:
            await self._owned.pop().aclose()

    async def __aenter__(self) -> "StarflightClient":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def check_availability(self) -> AvailabilityResult:
        return self._availability.check()

    async def register(
        self,
        tags: Iterable[str] | None = None,
        callback: StarflightCallback[RegistrationOutcome] | None = None,
    ) -> Result[RegistrationOutcome, BaseError]:
        return await self._run(
            "register", lambda: self._coordinator.register(tags), callback, needs_platform=True
        )

    async def refresh_registration(
        self,
        callback: StarflightCallback[RegistrationOutcome] | None = None,
    ) -> Result[RegistrationOutcome, BaseError]:
        """Refresh the registration if needed; call on every application start."""
        return await self._run(
            "refresh_registration", self._coordinator.refresh_registration, callback, needs_platform=True
        )

    async def unregister(
        self,
        tags: Iterable[str] | None = None,
        callback: StarflightCallback[UnregistrationOutcome] | None = None,
    ) -> Result[UnregistrationOutcome, BaseError]:
        return await self._run(
            "unregister", lambda: self._coordinator.unregister(tags), callback, needs_platform=True
        )

    async def mark_message_opened(
        self,
        message_id: UUID | str,
        callback: StarflightCallback[AcknowledgementOutcome] | None = None,
    ) -> Result[AcknowledgementOutcome, BaseError]:
        return await self._run(
            "mark_message_opened", lambda: self._tracker.mark_opened(message_id), callback
        )

    async def get_registered_tags(self) -> frozenset[str]:
        return await self._coordinator.get_registered_tags()

    async def get_client_uuid(self) -> UUID | None:
        return await self._coordinator.get_client_uuid()

    async def is_registered(self) -> bool:
        return await self._coordinator.is_registered()

    async def _run(
        self,
        action: str,
        operation: Callable[[], Awaitable[T]],
        callback: StarflightCallback[T] | None,
        *,
        needs_platform: bool = False,
    ) -> Result[T, BaseError]:
        if needs_platform:
            availability = self._availability.check()
            if not availability.is_available:
                error = PlatformUnavailableError(
                    f"Platform messaging service unavailable: {availability.status.value}",
                    availability=availability,
                )
                return self._failed(action, error, callback)
        try:
            value = await operation()
        except BaseError as exc:
            return self._failed(action, exc, callback)
        if callback is not None:
            callback.on_success(value)
        return Ok(value)

    @staticmethod
    def _failed(
        action: str, error: BaseError, callback: StarflightCallback[Any] | None
    ) -> Err[BaseError]:
        log.warning("client.operation_failed", action=action, code=error.code, error=error.message)
        if callback is not None:
            callback.on_failure(error)
        return Err(error)


__all__ = ["StarflightCallback", "StarflightClient"]
