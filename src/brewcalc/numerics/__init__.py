"""
Numeric building blocks.

Pure Python/NumPy; knows nothing about brewing.
"""
from brewcalc.numerics.polynomial import Polynomial, RootResult, RootStatus

__all__ = ["Polynomial", "RootResult", "RootStatus"]
