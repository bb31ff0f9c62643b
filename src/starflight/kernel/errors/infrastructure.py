"""Infrastructure errors – failed or unintelligible backend calls."""

from __future__ import annotations

from typing import Any

from starflight.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """Infrastructure / I/O failure that is not a local state problem."""

    default_code = "infrastructure_error"


class TransportError(InfrastructureError):
    """The remote call could not be completed.

    Covers connectivity failures, timeouts and non-success status codes
    (``status_code`` is set for the latter).
    """

    default_code = "transport_error"

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.status_code = status_code

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        if self.status_code is not None:
            base["status_code"] = self.status_code
        return base


class ProtocolError(InfrastructureError):
    """A response arrived but could not be interpreted."""

    default_code = "protocol_error"


__all__ = [
    "InfrastructureError",
    "ProtocolError",
    "TransportError",
]
