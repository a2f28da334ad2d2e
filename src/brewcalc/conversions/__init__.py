"""
Brewing conversions built on the fixed polynomial fits.

Note: This package should stay pure Python/NumPy; recipe, UI and storage
layers import it, never the other way round.
"""
from brewcalc.conversions.fits import (
    FittedPolynomial,
    InputDomain,
    PLATO_FROM_SG_20C20C,
    WATER_DENSITY_VS_CELSIUS,
    HYDROMETER_15C_CORRECTION,
    ALL_FITS,
)
from brewcalc.conversions.service import ConversionService

__all__ = [
    "FittedPolynomial",
    "InputDomain",
    "PLATO_FROM_SG_20C20C",
    "WATER_DENSITY_VS_CELSIUS",
    "HYDROMETER_15C_CORRECTION",
    "ALL_FITS",
    "ConversionService",
]
