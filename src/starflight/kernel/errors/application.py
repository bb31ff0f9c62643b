"""Application-layer errors – invalid local state and platform problems."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from starflight.kernel.errors.base import BaseError

if TYPE_CHECKING:
    from starflight.platform.availability import AvailabilityResult


class ApplicationError(BaseError):
    """Cross-cutting application-layer concern."""

    default_code = "application_error"


class PreconditionError(ApplicationError):
    """Operation invoked in an invalid local state; nothing was sent."""

    default_code = "precondition_failed"


class PlatformUnavailableError(ApplicationError):
    """The platform messaging provider cannot be used.

    ``availability`` is set when the failure came from an availability check,
    so callers can branch on ``availability.status`` or offer a resolution.
    """

    default_code = "platform_unavailable"

    def __init__(
        self,
        message: str = "Platform messaging service unavailable",
        *,
        availability: AvailabilityResult | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.availability = availability

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        if self.availability is not None:
            base["availability"] = self.availability.status.value
        return base


__all__ = [
    "ApplicationError",
    "PlatformUnavailableError",
    "PreconditionError",
]
