# black_scholes.py
# Closed-form Black-Scholes prices. Reference values for validating the
# Monte Carlo engine; the engine itself never calls into this module.

from __future__ import annotations
from math import log, sqrt, exp
from typing import Literal
from scipy.stats import norm

from .core import CALL, PUT, InvalidParameter

_N = norm.cdf


def _d1_d2(S0, K, r, sigma, T):
    rt = sigma * sqrt(T)
    d1 = (log(S0 / K) + (r + 0.5 * sigma * sigma) * T) / rt
    d2 = d1 - rt
    return d1, d2


def closed_form_price(
    S0: float, K: float, r: float, sigma: float, T: float,
    kind: Literal["call", "put"] = CALL,
) -> float:
    """Black-Scholes price of a European option (no dividends).

    With ``sigma == 0`` the terminal price is the forward, and the price is
    the discounted intrinsic value ``max(S0 - K e^{-rT}, 0)`` (call) or
    ``max(K e^{-rT} - S0, 0)`` (put).
    """
    for name, value in (("S0", S0), ("K", K), ("T", T)):
        if value <= 0:
            raise InvalidParameter(name, value, "must be positive")
    if sigma < 0:
        raise InvalidParameter("sigma", sigma, "must be non-negative")
    if kind not in (CALL, PUT):
        raise InvalidParameter("kind", kind, "must be 'call' or 'put'")

    disc_r = exp(-r * T)
    if sigma == 0:
        fwd_gap = S0 - K * disc_r
        return max(fwd_gap, 0.0) if kind == CALL else max(-fwd_gap, 0.0)

    d1, d2 = _d1_d2(S0, K, r, sigma, T)
    if kind == CALL:
        return float(S0 * _N(d1) - disc_r * K * _N(d2))
    return float(disc_r * K * _N(-d2) - S0 * _N(-d1))


def put_call_parity_gap(call: float, put: float, S0: float, K: float, r: float, T: float) -> float:
    """(C - P) - (S0 - K e^{-rT}); zero for arbitrage-free prices."""
    return (call - put) - (S0 - K * exp(-r * T))
