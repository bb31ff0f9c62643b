"""Testing fakes – in-memory stand-ins for the external collaborators."""
from starflight.testing.fakes.backend import BackendCall, InMemoryBackendClient
from starflight.testing.fakes.clock import FAKE_EPOCH, FakeClock
from starflight.testing.fakes.token import FakeTokenProvider

__all__ = ["BackendCall", "FAKE_EPOCH", "FakeClock", "FakeTokenProvider", "InMemoryBackendClient"]
