"""Kernel types – Result monad."""
from starflight.kernel.types.result import Err, Ok, Result

__all__ = ["Err", "Ok", "Result"]
