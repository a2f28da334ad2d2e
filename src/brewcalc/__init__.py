"""
Brewing calculations built on empirically fitted polynomials.

The package has two layers:
1. `brewcalc.numerics`: a single-variable real polynomial with evaluation
   and a secant-method root finder.
2. `brewcalc.conversions`: the fixed brewing fits and the formulas that
   evaluate or invert them (Plato, specific gravity, ABV/ABW, extract).

Neither layer touches files, the network or any GUI.
"""
from brewcalc.config import SecantSettings, DEFAULT_SECANT_SETTINGS
from brewcalc.exceptions import (
    BrewCalcError,
    RootFindError,
    DivergenceError,
    DegenerateSecantError,
    InputRangeError,
)
from brewcalc.numerics.polynomial import Polynomial, RootResult, RootStatus
from brewcalc.conversions.service import ConversionService

__all__ = [
    "SecantSettings",
    "DEFAULT_SECANT_SETTINGS",
    "BrewCalcError",
    "RootFindError",
    "DivergenceError",
    "DegenerateSecantError",
    "InputRangeError",
    "Polynomial",
    "RootResult",
    "RootStatus",
    "ConversionService",
]
