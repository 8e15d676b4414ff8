"""Model validation helpers for the CEV closed form.

Independent checks a model reviewer runs against the Schroder formula:
put-call parity residuals and the beta -> 0 limit, where the CEV forward
is an arithmetic Brownian motion absorbed at zero and both the price and
the absorption probability follow from the reflection principle.
"""

from __future__ import annotations

import numpy as np
from scipy.stats import norm

from .core import CALL, CevSpec, DomainError, as_positive, cp_sign, resolve_market
from .cev import cev_price

__all__ = [
    "parity_residual",
    "absorbed_normal_price",
    "absorbed_normal_mass",
    "beta_limit_analysis",
]


# ---------------------------------------------------------------------------
# Put-call parity
# ---------------------------------------------------------------------------

def parity_residual(
    strike=None, spot=None, texp=1.0, sigma=None, beta=0.5,
    intr=0.0, divr=0.0, *, forward=None, df=None,
):
    """Return ``C - P - df * (F - K)``; zero up to rounding for a sound model."""
    mkt = resolve_market(spot, texp, intr, divr, forward=forward, df=df)
    strike = mkt.forward if strike is None else as_positive("strike", strike)
    kw = dict(texp=mkt.texp, sigma=sigma, beta=beta,
              forward=mkt.forward, df=mkt.df)
    call = cev_price(strike, cp=1, **kw)
    put = cev_price(strike, cp=-1, **kw)
    return call - put - mkt.df * (mkt.forward - strike)


# ---------------------------------------------------------------------------
# beta = 0 reference: absorbed arithmetic Brownian motion
# ---------------------------------------------------------------------------

def _bachelier_call(forward, strike, stdev):
    d = (forward - strike) / stdev
    return (forward - strike) * norm.cdf(d) + stdev * norm.pdf(d)


def absorbed_normal_price(strike, forward, texp, sigma, df=1.0, cp=1):
    """Price under ``dF = sigma dW`` with absorption at zero.

    By the method of images the call is ``Bachelier(F, K) - Bachelier(-F, K)``;
    the put follows from parity with the same forward and discount factor.
    """
    strike = as_positive("strike", strike)
    forward = as_positive("forward", forward)
    stdev = as_positive("sigma", sigma) * np.sqrt(as_positive("texp", texp))
    df = as_positive("df", df)
    sign = cp_sign(cp)

    call = df * (_bachelier_call(forward, strike, stdev)
                 - _bachelier_call(-forward, strike, stdev))
    put = call - df * (forward - strike)
    return np.where(sign > 0, call, put)[()]


def absorbed_normal_mass(forward, texp, sigma):
    """Probability an arithmetic Brownian motion from ``forward`` hits zero."""
    forward = as_positive("forward", forward)
    stdev = as_positive("sigma", sigma) * np.sqrt(as_positive("texp", texp))
    return (2.0 * norm.cdf(-forward / stdev))[()]


# ---------------------------------------------------------------------------
# Convergence towards the beta = 0 limit
# ---------------------------------------------------------------------------

def beta_limit_analysis(
    spec: CevSpec,
    kind: str = CALL,
    betas: list | np.ndarray = (0.2, 0.1, 0.05, 0.01, 0.001),
) -> dict:
    """Price ``spec`` for shrinking beta against the absorbed-normal reference.

    Sigma is rescaled for every beta so that the absolute local volatility
    at the forward, ``sigma * F**beta``, stays at the value implied by
    ``spec``.

    Returns
    -------
    dict
        ``"betas"``, ``"prices"``, ``"errors"`` (absolute, vs reference),
        ``"reference"``.
    """
    betas = np.asarray(betas, dtype=float)
    if np.any(betas <= 0) or np.any(betas >= 1):
        raise DomainError(f"betas must lie in (0, 1), got {betas!r}")

    fwd, df = spec.forward, spec.df
    abs_vol = spec.sigma * fwd ** spec.beta
    reference = float(absorbed_normal_price(spec.strike, fwd, spec.texp,
                                            abs_vol, df, kind))

    prices = cev_price(spec.strike, texp=spec.texp, sigma=abs_vol / fwd ** betas,
                       beta=betas, cp=kind, forward=fwd, df=df)
    prices = np.atleast_1d(prices)
    return {
        "betas": betas.tolist(),
        "prices": prices.tolist(),
        "errors": np.abs(prices - reference).tolist(),
        "reference": reference,
    }
