import numpy as np
from cevpricer.cev import cev_price


def _cev_terminal(F0, sigma, beta, T, n_steps, n_paths, seed):
    """Euler scheme for dF = sigma F^beta dW, absorbed once F hits zero."""
    rng = np.random.default_rng(seed)
    dt = T / n_steps
    Z = rng.standard_normal((n_steps, n_paths))
    Z = np.concatenate([Z, -Z], axis=1)
    F = np.full(Z.shape[1], F0)
    for t in range(n_steps):
        F = np.maximum(F + sigma * F ** beta * np.sqrt(dt) * Z[t], 0.0)
    return F


def test_mc_matches_cev_within_tol():
    F0, T, sigma, beta = 100.0, 1.2, 2.0, 0.5
    FT = _cev_terminal(F0, sigma, beta, T, n_steps=200, n_paths=40_000, seed=1)
    for K in (90.0, 100.0, 110.0):
        for cp in (1, -1):
            payoff = np.maximum(cp * (FT - K), 0.0)
            mc = payoff.mean()
            se = payoff.std() / np.sqrt(payoff.size)
            cf = cev_price(K, texp=T, sigma=sigma, beta=beta, cp=cp, forward=F0, df=1.0)
            assert abs(mc - cf) < 4 * se + 0.05, f"K={K} cp={cp}: MC={mc:.4f} CF={cf:.4f}"
