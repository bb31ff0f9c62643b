"""Backend – BackendClient port and the httpx implementation."""
from starflight.backend.http import HttpxBackendClient
from starflight.backend.port import (
    BackendClient,
    MessageOpenedReply,
    RegistrationReply,
    UnregistrationReply,
)

__all__ = [
    "BackendClient",
    "HttpxBackendClient",
    "MessageOpenedReply",
    "RegistrationReply",
    "UnregistrationReply",
]
