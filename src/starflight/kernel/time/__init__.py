"""Kernel time – Clock port + implementations."""
from starflight.kernel.time.clock import Clock, FrozenClock, SystemClock

__all__ = ["Clock", "FrozenClock", "SystemClock"]
