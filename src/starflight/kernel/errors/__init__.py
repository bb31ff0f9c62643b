"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── ApplicationError          (application.py)
    │   ├── PreconditionError
    │   └── PlatformUnavailableError
    └── InfrastructureError       (infrastructure.py)
        ├── TransportError
        └── ProtocolError
"""

from starflight.kernel.errors.application import (
    ApplicationError,
    PlatformUnavailableError,
    PreconditionError,
)
from starflight.kernel.errors.base import BaseError
from starflight.kernel.errors.infrastructure import (
    InfrastructureError,
    ProtocolError,
    TransportError,
)

__all__ = [
    "ApplicationError",
    "BaseError",
    "InfrastructureError",
    "PlatformUnavailableError",
    "PreconditionError",
    "ProtocolError",
    "TransportError",
]
