# payoffs.py
# European payoffs at maturity. Scalars or arrays; results are never negative.

from __future__ import annotations
import numpy as np
from typing import Callable

from .core import CALL, PUT, InvalidParameter


__all__ = [
    "call_payoff",
    "put_payoff",
    "payoff_function",
]


def call_payoff(S_T, K):
    """max(S_T - K, 0)"""
    out = np.maximum(np.asarray(S_T, dtype=float) - K, 0.0)
    return float(out) if out.ndim == 0 else out


def put_payoff(S_T, K):
    """max(K - S_T, 0)"""
    out = np.maximum(K - np.asarray(S_T, dtype=float), 0.0)
    return float(out) if out.ndim == 0 else out


_PAYOFFS: dict[str, Callable] = {
    CALL: call_payoff,
    PUT: put_payoff,
}


def payoff_function(kind: str) -> Callable:
    try:
        return _PAYOFFS[kind]
    except KeyError:
        raise InvalidParameter("kind", kind, "must be 'call' or 'put'") from None
