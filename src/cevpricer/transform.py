# transform.py
# Change of variable mapping strike / forward onto the arguments of the
# noncentral chi-squared and gamma distributions (Schroder 1989).
#
#   betac = 1 - beta
#   scale = (betac * sigma)^2 * texp
#   cov(X) = X^(2 betac) / scale
#
# All functions accept scalars or arrays and broadcast.

from __future__ import annotations
import numpy as np

from .core import DomainError, as_finite, as_positive

__all__ = [
    "betac",
    "cev_scale",
    "change_of_variable",
    "price_degrees",
    "mass_degree",
]


def betac(beta) -> np.ndarray:
    """Complement ``1 - beta``; beta >= 1 hits the 1/(1-beta) pole."""
    beta = as_finite("beta", beta)
    if np.any(beta >= 1.0):
        raise DomainError(
            f"beta must be below 1 (beta=1 is the lognormal limit), got {beta!r}"
        )
    return 1.0 - beta


def cev_scale(sigma, beta, texp) -> np.ndarray:
    """Variance scale ``(betac*sigma)^2 * texp`` of the transformed process."""
    sigma = as_positive("sigma", sigma)
    texp = as_positive("texp", texp)
    bc = betac(beta)
    return (bc * sigma) ** 2 * texp


def change_of_variable(x, sigma, beta, texp) -> np.ndarray:
    """Map a price level ``x`` (strike or forward) to ``x^(2 betac) / scale``."""
    x = as_positive("x", x)
    bc = betac(beta)
    return x ** (2.0 * bc) / cev_scale(sigma, beta, texp)


def price_degrees(beta) -> np.ndarray:
    """Degrees of freedom ``1/betac``; the price uses ``deg + 2`` and ``deg``."""
    return 1.0 / betac(beta)


def mass_degree(beta) -> np.ndarray:
    """Gamma shape ``0.5/betac`` for the absorption probability."""
    return 0.5 / betac(beta)
