"""
Physical Constants
==================
Densities and absorption factors consumed by the brewing formulas.

Only SUCROSE_DENSITY_KGL is used by the conversion service; the others are
kept here for recipe-level calculations built on top of it.
"""

# Sucrose density in kg/L.
SUCROSE_DENSITY_KGL: float = 1.587

# Grain density in kg/L (measured by steeping, not a handbook value).
GRAIN_DENSITY_KGL: float = 0.963

LIQUID_EXTRACT_DENSITY_KGL: float = 1.412
DRY_EXTRACT_DENSITY_KGL: float = SUCROSE_DENSITY_KGL

# Litres of water absorbed by 1 kg of grain.
GRAIN_ABSORPTION_LKG: float = 1.085
