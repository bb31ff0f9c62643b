"""
starflight – device-registration client for the StarFlight push backend.

Import path convention::

    from starflight.client import StarflightClient
    from starflight.registration import RegistrationCoordinator, RegistrationOutcome
    from starflight.state import RegistrationStateStore
    from starflight.kernel.errors import TransportError
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
