# processes.py
# GBM path generators for Monte Carlo pricing.
# simulate_path returns one path of shape (n_steps+1,); gbm_paths returns
# a batch of shape (n_steps+1, n_paths). Both include the t=0 entry S0.

from __future__ import annotations
import numpy as np
from typing import Optional

from .core import SimulationParameters, check_simulation, check_count
from .sampling import NormalSampler


__all__ = [
    "simulate_path",
    "gbm_paths",
    "gbm_increments",
]


def _check(params: SimulationParameters, drift_rate: float) -> None:
    err = check_simulation(params.S0, params.sigma, params.T, params.n_steps, drift_rate)
    if err is not None:
        raise err


def gbm_increments(params: SimulationParameters, drift_rate: float) -> tuple[float, float]:
    """Per-step log drift and diffusion scale of the exact GBM transition."""
    dt = params.T / params.n_steps
    drift = (drift_rate - 0.5 * params.sigma * params.sigma) * dt
    vol = params.sigma * np.sqrt(dt)
    return drift, vol


# -----------------------------
# Geometric Brownian Motion
# -----------------------------
def simulate_path(
    params: SimulationParameters, drift_rate: float,
    sampler: Optional[NormalSampler] = None,
) -> np.ndarray:
    """
    One GBM path under the risk-neutral drift:
        S_{t+dt} = S_t * exp((drift_rate - 0.5*sigma^2) dt + sigma * sqrt(dt) * Z)

    The transition is exact in distribution for constant parameters.
    With sigma = 0 the path is deterministic growth at ``drift_rate``.
    """
    _check(params, drift_rate)
    if sampler is None:
        sampler = NormalSampler()

    drift, vol = gbm_increments(params, drift_rate)
    Z = sampler.standard_normal(params.n_steps)

    path = np.empty(params.n_steps + 1)
    path[0] = params.S0
    path[1:] = params.S0 * np.exp(np.cumsum(drift + vol * Z))
    return path


def gbm_paths(
    params: SimulationParameters, drift_rate: float, n_paths: int,
    sampler: Optional[NormalSampler] = None,
) -> np.ndarray:
    """Batch of independent GBM paths, one per column.

    Same transition as :func:`simulate_path`; the normals for all paths of
    a batch are drawn in one call.
    """
    _check(params, drift_rate)
    err = check_count("n_paths", n_paths)
    if err is not None:
        raise err
    if sampler is None:
        sampler = NormalSampler()

    drift, vol = gbm_increments(params, drift_rate)
    Z = sampler.standard_normal((params.n_steps, n_paths))

    log_paths = np.cumsum(drift + vol * Z, axis=0)
    S = params.S0 * np.exp(log_paths)
    S = np.vstack([np.full((1, n_paths), params.S0, dtype=S.dtype), S])
    return S
