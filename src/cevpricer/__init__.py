# cevpricer — CEV model option pricing
# Public API

# Data model and errors
from .core import CevSpec, CevMarket, DomainError, CALL, PUT, resolve_market

# Change of variable
from .transform import (
    betac, cev_scale, change_of_variable, price_degrees, mass_degree,
)

# Vectorised evaluators and scalar wrappers
from .cev import cev_price, cev_mass_zero, price as cev_price_spec, mass_zero

# Model validation
from .validation import (
    parity_residual, absorbed_normal_price, absorbed_normal_mass,
    beta_limit_analysis,
)

__all__ = [
    # Data model
    "CevSpec", "CevMarket", "DomainError", "CALL", "PUT", "resolve_market",
    # Transform
    "betac", "cev_scale", "change_of_variable", "price_degrees", "mass_degree",
    # Evaluators
    "cev_price", "cev_mass_zero", "cev_price_spec", "mass_zero",
    # Validation
    "parity_residual", "absorbed_normal_price", "absorbed_normal_mass",
    "beta_limit_analysis",
]

__version__ = "0.1.0"
