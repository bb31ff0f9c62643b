"""Unit tests for CallbackTokenProvider."""

from __future__ import annotations

import asyncio
import threading

import pytest

from starflight.platform import CallbackTokenProvider, TokenProvider
from starflight.testing.fakes import FakeTokenProvider


class TestCallbackTokenProvider:
    def test_satisfies_port(self) -> None:
        assert isinstance(CallbackTokenProvider(lambda ok, fail: ok("t")), TokenProvider)

    def test_synchronous_success(self) -> None:
        provider = CallbackTokenProvider(lambda ok, fail: ok("tok-1"))
        assert asyncio.run(provider.get_token()) == "tok-1"

    def test_success_from_other_thread(self) -> None:
        def request(ok, fail) -> None:
            threading.Timer(0.01, ok, args=("tok-thread",)).start()

        provider = CallbackTokenProvider(request)
        assert asyncio.run(provider.get_token()) == "tok-thread"

    def test_failure_propagates(self) -> None:
        provider = CallbackTokenProvider(lambda ok, fail: fail(RuntimeError("no play services")))
        with pytest.raises(RuntimeError, match="no play services"):
            asyncio.run(provider.get_token())

    def test_first_completion_wins(self) -> None:
        def request(ok, fail) -> None:
            ok("first")
            ok("second")
            fail(RuntimeError("late"))

        assert asyncio.run(CallbackTokenProvider(request).get_token()) == "first"

    def test_empty_token_rejected(self) -> None:
        with pytest.raises(ValueError):
            asyncio.run(CallbackTokenProvider(lambda ok, fail: ok("")).get_token())

    def test_late_completion_after_cancel_is_ignored(self) -> None:
        callbacks: list = []

        async def _run() -> None:
            provider = CallbackTokenProvider(lambda ok, fail: callbacks.append(ok))
            task = asyncio.create_task(provider.get_token())
            await asyncio.sleep(0)
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task
            callbacks[0]("too-late")
            await asyncio.sleep(0)

        asyncio.run(_run())

    def test_completion_after_loop_closed_is_ignored(self) -> None:
        callbacks: list = []

        def request(ok, fail) -> None:
            callbacks.extend([ok, fail])

        async def _run() -> None:
            task = asyncio.create_task(CallbackTokenProvider(request).get_token())
            await asyncio.sleep(0)
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task

        asyncio.run(_run())
        on_success, on_failure = callbacks
        on_success("late-token")
        on_failure(RuntimeError("late failure"))

    def test_invalidate_sync_and_async(self) -> None:
        calls: list[str] = []

        async def _async_invalidate() -> None:
            calls.append("async")

        async def _run() -> None:
            await CallbackTokenProvider(lambda ok, fail: ok("t"), invalidate=lambda: calls.append("sync")).invalidate()
            await CallbackTokenProvider(lambda ok, fail: ok("t"), invalidate=_async_invalidate).invalidate()
            await CallbackTokenProvider(lambda ok, fail: ok("t")).invalidate()

        asyncio.run(_run())
        assert calls == ["sync", "async"]


class TestFakeTokenProvider:
    def test_invalidate_renews_token(self) -> None:
        async def _run() -> None:
            provider = FakeTokenProvider("t")
            assert await provider.get_token() == "t"
            await provider.invalidate()
            assert provider.invalidations == 1
            assert await provider.get_token() != "t"

        asyncio.run(_run())
