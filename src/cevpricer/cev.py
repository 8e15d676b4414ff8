# cev.py
# Closed-form CEV European option price and mass at zero.
# All public functions accept scalars *or* NumPy arrays and broadcast.
#
# Reference: Schroder, M. (1989). Computing the constant elasticity of
# variance option pricing formula. Journal of Finance, 44(1), 211-219.

from __future__ import annotations
import logging
from typing import Literal

import numpy as np
from scipy.stats import gamma, ncx2

from .core import (
    CALL, CevSpec, DomainError,
    as_finite, as_positive, broadcast, cp_sign, resolve_market,
)
from .transform import change_of_variable, mass_degree, price_degrees

logger = logging.getLogger(__name__)

__all__ = ["cev_price", "cev_mass_zero", "price", "mass_zero"]


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------
def _ncx2_tail(x, dof, nc, upper) -> np.ndarray:
    """Noncentral chi-squared CDF, upper tail where ``upper`` is True.

    Inputs are equal-length 1-d arrays; only the needed tail is evaluated.
    """
    out = np.empty_like(x)
    out[upper] = ncx2.sf(x[upper], dof[upper], nc[upper])
    lower = ~upper
    out[lower] = ncx2.cdf(x[lower], dof[lower], nc[lower])
    return out


def _require_sigma(sigma) -> np.ndarray:
    if sigma is None:
        raise DomainError("sigma must be given")
    return as_positive("sigma", sigma)


# ---------------------------------------------------------------------------
# Vectorised price
# ---------------------------------------------------------------------------
def cev_price(
    strike=None, spot=None, texp=1.0, sigma=None, beta=0.5,
    intr=0.0, divr=0.0, cp=1, *, forward=None, df=None,
):
    """Vectorised CEV European option price.

    Parameters
    ----------
    strike : array-like, optional
        Strike price.  Defaults to the forward (at-the-money).
    spot : array-like, optional
        Spot price.  Ignored when ``forward`` is given.
    texp : array-like
        Time to expiry in years.
    sigma : array-like
        CEV volatility scale; the local volatility is ``sigma * F**(beta-1)``.
    beta : array-like
        Elasticity, must be below 1.
    intr, divr : array-like
        Continuous interest rate and dividend / convenience yield.
    cp : int, str or array-like
        ``1`` / ``"call"`` for calls, ``-1`` / ``"put"`` for puts.
    forward, df : array-like, optional
        Forward price and discount factor.  When given they override the
        values derived from ``spot`` / ``divr`` and ``intr``.

    Returns
    -------
    np.float64 or np.ndarray
        Discounted option prices, shaped like the broadcast inputs.
    """
    mkt = resolve_market(spot, texp, intr, divr, forward=forward, df=df)
    sigma = _require_sigma(sigma)
    strike = mkt.forward if strike is None else as_positive("strike", strike)
    beta = as_finite("beta", beta)
    sign = cp_sign(cp)

    strike, fwd, disc, texp, sigma, beta, sign = broadcast(
        strike=strike, forward=mkt.forward, df=mkt.df, texp=mkt.texp,
        sigma=sigma, beta=beta, cp=sign,
    )
    shape = strike.shape
    logger.debug("cev_price over broadcast shape %s", shape)
    strike, fwd, disc, texp, sigma, beta, sign = (
        a.ravel() for a in (strike, fwd, disc, texp, sigma, beta, sign)
    )

    deg = price_degrees(beta)
    strike_cov = change_of_variable(strike, sigma, beta, texp)
    forward_cov = change_of_variable(fwd, sigma, beta, texp)

    # call: upper tail for term1, lower tail for term2; put: the reverse
    is_call = sign > 0
    term1 = _ncx2_tail(strike_cov, deg + 2.0, forward_cov, upper=is_call)
    term2 = _ncx2_tail(forward_cov, deg, strike_cov, upper=~is_call)

    px = sign * disc * (fwd * term1 - strike * term2)
    return px.reshape(shape)[()]


# ---------------------------------------------------------------------------
# Vectorised mass at zero
# ---------------------------------------------------------------------------
def cev_mass_zero(
    spot=None, texp=1.0, sigma=None, beta=0.5,
    intr=0.0, divr=0.0, *, forward=None, df=None,
):
    """Probability that the CEV forward has been absorbed at zero by expiry.

    The mass is the gamma survival function at ``0.5 * F^(2 betac) / scale``
    with shape ``0.5 / betac``.  Entries with ``beta <= 0`` return 0.

    Returns
    -------
    np.float64 or np.ndarray
        Probabilities in [0, 1], shaped like the broadcast inputs.
    """
    mkt = resolve_market(spot, texp, intr, divr, forward=forward, df=df)
    sigma = _require_sigma(sigma)
    beta = as_finite("beta", beta)

    fwd, texp, sigma, beta = broadcast(
        forward=mkt.forward, texp=mkt.texp, sigma=sigma, beta=beta,
    )
    shape = fwd.shape
    fwd, texp, sigma, beta = (a.ravel() for a in (fwd, texp, sigma, beta))

    deg = mass_degree(beta)   # raises for beta >= 1
    mass = np.zeros_like(fwd)
    attainable = beta > 0.0
    if not np.all(attainable):
        logger.debug("beta <= 0 on %d entries, mass set to 0",
                     int(np.count_nonzero(~attainable)))

    if np.any(attainable):
        b = beta[attainable]
        x = 0.5 * change_of_variable(fwd[attainable], sigma[attainable], b,
                                     texp[attainable])
        mass[attainable] = gamma.sf(x, deg[attainable])

    return mass.reshape(shape)[()]


# ---------------------------------------------------------------------------
# Scalar interface
# ---------------------------------------------------------------------------
def price(spec: CevSpec, kind: Literal["call", "put"] = CALL) -> float:
    return float(cev_price(spec.strike, spec.spot, spec.texp, spec.sigma,
                           spec.beta, spec.intr, spec.divr, kind))


def mass_zero(spec: CevSpec) -> float:
    return float(cev_mass_zero(spec.spot, spec.texp, spec.sigma, spec.beta,
                               spec.intr, spec.divr))
