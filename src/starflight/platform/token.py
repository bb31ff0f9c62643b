"""Platform – TokenProvider port and the callback bridge."""
from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Awaitable, Callable, Protocol, runtime_checkable

logger = logging.getLogger(__name__)

OnToken = Callable[[str], None]
OnTokenFailure = Callable[[BaseException], None]
TokenRequest = Callable[[OnToken, OnTokenFailure], None]
Invalidate = Callable[[], Awaitable[None] | None]


@runtime_checkable
class TokenProvider(Protocol):
    """Port: the platform push-messaging token.

    ``get_token`` completes exactly once with the current token or raises.
    ``invalidate`` drops the token so the platform stops delivering to it.
    """

    async def get_token(self) -> str: ...

    async def invalidate(self) -> None: ...


class CallbackTokenProvider:
    """Adapt a callback-style platform API to :class:`TokenProvider`.

    *request* is called with ``(on_success, on_failure)`` and must invoke one
    of them, from any thread. The first completion wins; completions that
    arrive after the awaiting coroutine was cancelled are ignored.

    Example::

        provider = CallbackTokenProvider(
            lambda ok, fail: messaging.get_token(on_complete=ok, on_error=fail),
            invalidate=messaging.delete_token,
        )
    """

    def __init__(self, request: TokenRequest, invalidate: Invalidate | None = None) -> None:
        self._request = request
        self._invalidate = invalidate

    async def get_token(self) -> str:
        loop = asyncio.get_running_loop()
        future: asyncio.Future[str] = loop.create_future()

        def _settle(token: str | None, error: BaseException | None) -> None:
            if future.done():
                logger.debug("token.late_completion_ignored")
                return
            if error is not None:
                future.set_exception(error)
            else:
                future.set_result(token or "")

        def _deliver(token: str | None, error: BaseException | None) -> None:
            # The awaiting loop may already be closed when the platform answers.
            try:
                loop.call_soon_threadsafe(_settle, token, error)
            except RuntimeError:
                logger.debug("token.late_completion_ignored reason=loop_closed")

        def on_success(token: str) -> None:
            _deliver(token, None)

        def on_failure(error: BaseException) -> None:
            _deliver(None, error)

        self._request(on_success, on_failure)
        token = await future
        if not token:
            raise ValueError("platform returned an empty token")
        return token

    async def invalidate(self) -> None:
        if self._invalidate is None:
            return
        result = self._invalidate()
        if inspect.isawaitable(result):
            await result


__all__ = [
    "CallbackTokenProvider",
    "Invalidate",
    "OnToken",
    "OnTokenFailure",
    "TokenProvider",
    "TokenRequest",
]
