"""Registration – helpers shared by the coordinator and the tracker."""
from __future__ import annotations

from typing import Awaitable, Iterable, TypeVar

from starflight.kernel.errors import BaseError, PreconditionError, TransportError
from starflight.state.codec import canonical_tags

T = TypeVar("T")


async def backend_call(action: str, call: Awaitable[T]) -> T:
    """Await a backend call, turning stray exceptions into ``TransportError``."""
    try:
        return await call
    except BaseError:
        raise
    except Exception as exc:
        raise TransportError(f"Unexpected failure during {action}: {exc!r}", cause=exc) from exc


def require_ok(action: str, ok: bool) -> None:
    if not ok:
        raise TransportError(f"Backend rejected {action}")


def canonicalize(tags: Iterable[str] | None) -> tuple[str, ...]:
    try:
        return canonical_tags(tags)
    except ValueError as exc:
        raise PreconditionError(f"Invalid tags: {exc}", cause=exc) from exc


__all__ = ["backend_call", "canonicalize", "require_ok"]
