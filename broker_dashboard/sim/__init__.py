"""Price simulation components."""

from .simulator import PriceSimulator

__all__ = ["PriceSimulator"]
