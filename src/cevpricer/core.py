from __future__ import annotations
import logging
from dataclasses import dataclass

import numpy as np

logger = logging.getLogger(__name__)


class DomainError(ValueError):
    """Raised when an input lies outside the domain of the CEV formulae."""


CALL = "call"
PUT  = "put"


# ---------------------------------------------------------------------------
# Argument checks shared by the evaluators
# ---------------------------------------------------------------------------
def as_positive(name: str, value) -> np.ndarray:
    """Return ``value`` as a float array, raising unless every entry is > 0."""
    arr = np.asarray(value, dtype=float)
    if not np.all(np.isfinite(arr)):
        raise DomainError(f"{name} must be finite, got {value!r}")
    if np.any(arr <= 0):
        raise DomainError(f"{name} must be positive, got {value!r}")
    return arr


def as_finite(name: str, value) -> np.ndarray:
    arr = np.asarray(value, dtype=float)
    if not np.all(np.isfinite(arr)):
        raise DomainError(f"{name} must be finite, got {value!r}")
    return arr


def cp_sign(cp) -> np.ndarray:
    """Map ``cp`` (``1``/``-1`` or ``"call"``/``"put"``) to an array of signs."""
    arr = np.asarray(cp)
    if arr.dtype.kind in "US":
        lookup = {CALL: 1.0, PUT: -1.0}
        try:
            signs = [lookup[str(k).strip().lower()] for k in arr.flat]
        except KeyError:
            raise DomainError(f"cp must be 'call' or 'put', got {cp!r}") from None
        return np.array(signs, dtype=float).reshape(arr.shape)

    arr = arr.astype(float)
    if not np.all((arr == 1.0) | (arr == -1.0)):
        raise DomainError(f"cp must be +1 (call) or -1 (put), got {cp!r}")
    return arr


def broadcast(**arrays: np.ndarray) -> list[np.ndarray]:
    """Broadcast keyword arrays together, naming them if shapes disagree."""
    try:
        out = np.broadcast_arrays(*arrays.values())
    except ValueError:
        shapes = ", ".join(f"{k}={np.shape(v)}" for k, v in arrays.items())
        raise DomainError(f"inputs cannot be broadcast together: {shapes}") from None
    return out


# ---------------------------------------------------------------------------
# Market resolution: explicit forward / df always beat derived values
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class CevMarket:
    """Fully-resolved market inputs consumed by the evaluators.

    Parameters
    ----------
    forward : np.ndarray
        Forward price to expiry.
    df : np.ndarray
        Discount factor to expiry.
    texp : np.ndarray
        Time to expiry in years.
    """
    forward: np.ndarray
    df: np.ndarray
    texp: np.ndarray


def resolve_market(
    spot=None, texp=1.0, intr=0.0, divr=0.0, *, forward=None, df=None,
) -> CevMarket:
    """Resolve forward and discount factor from the recognised options.

    ``df`` defaults to ``exp(-intr*texp)`` and ``forward`` to
    ``spot*exp(-divr*texp)/df``.  Values passed explicitly take
    precedence, so ``spot`` is only required when ``forward`` is absent.
    """
    texp = as_positive("texp", texp)

    if df is None:
        df = np.exp(-as_finite("intr", intr) * texp)
    else:
        logger.debug("explicit df overrides intr=%r", intr)
    df = as_positive("df", df)

    if forward is None:
        if spot is None:
            raise DomainError("either spot or forward must be given")
        spot = as_positive("spot", spot)
        forward = spot * np.exp(-as_finite("divr", divr) * texp) / df
    else:
        logger.debug("explicit forward overrides spot=%r, divr=%r", spot, divr)
    forward = as_positive("forward", forward)

    return CevMarket(forward=forward, df=df, texp=texp)


# ---------------------------------------------------------------------------
# Scalar convenience container
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class CevSpec:
    """Single-option container bundling contract, market and CEV model inputs.

    Handy for one-off valuations and the validation helpers; batch work
    should call the vectorised ``cev_price`` / ``cev_mass_zero`` directly.
    """
    strike: float
    spot: float
    texp: float         # years
    sigma: float        # CEV volatility scale, local vol is sigma * F**(beta-1)
    beta: float = 0.5
    intr: float = 0.0   # continuous risk-free
    divr: float = 0.0   # continuous dividend / convenience yield

    def __post_init__(self):
        if self.strike <= 0:
            raise DomainError(f"strike must be positive, got {self.strike}")
        if self.spot <= 0:
            raise DomainError(f"spot must be positive, got {self.spot}")
        if self.texp <= 0:
            raise DomainError(f"texp must be positive, got {self.texp}")
        if self.sigma <= 0:
            raise DomainError(f"sigma must be positive, got {self.sigma}")
        if self.beta >= 1:
            raise DomainError(f"beta must be below 1, got {self.beta}")

    @property
    def df(self) -> float:
        return float(np.exp(-self.intr * self.texp))

    @property
    def forward(self) -> float:
        return float(self.spot * np.exp(-self.divr * self.texp) / self.df)
