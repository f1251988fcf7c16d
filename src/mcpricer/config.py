"""
Frozen configuration for the Monte Carlo pricer.

Defaults reproduce the reference run (S0=K=100, r=0.05, sigma=0.2, T=1,
252 steps, one million paths). Engine sizing can be overridden through
environment variables:

    MCPRICER_WORKERS     number of parallel workers (default: CPU count)
    MCPRICER_BATCH_SIZE  paths per vectorised batch inside a worker
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Final, Optional

from .monte_carlo import DEFAULT_BATCH_SIZE

# =============================================================================
# Validation tolerances
# =============================================================================

#: Monte Carlo vs Black-Scholes relative error accepted for >= 10M trials
MC_RELATIVE_TOLERANCE: Final[float] = 0.01

#: Allowed spread of stderr^2 * n across trial counts (relative to their mean)
VARIANCE_STABILITY_TOLERANCE: Final[float] = 0.20

#: Put-call parity on closed-form prices
PARITY_TOLERANCE: Final[float] = 1e-8


def _env_int(name: str) -> Optional[int]:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return None
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


@dataclass(frozen=True)
class PricerConfig:
    """
    Immutable defaults for a pricing run.

    Attributes
    ----------
    S0, K, r, mu, sigma, T : float
        Market and contract defaults. ``mu`` is the real-world drift; it is
        reported but never used by the simulation.
    steps : int
        Time steps per path.
    paths : int
        Monte Carlo trials.
    n_workers : int
        Parallel workers. Override with MCPRICER_WORKERS.
    batch_size : int
        Paths per vectorised batch. Override with MCPRICER_BATCH_SIZE.
    """

    S0: float = 100.0
    K: float = 100.0
    r: float = 0.05
    mu: float = 0.05
    sigma: float = 0.2
    T: float = 1.0
    steps: int = 252
    paths: int = 1_000_000
    n_workers: int = None  # type: ignore[assignment]  # Set in __post_init__
    batch_size: int = None  # type: ignore[assignment]  # Set in __post_init__

    def __post_init__(self) -> None:
        # Frozen dataclass: resolve environment overrides via object.__setattr__
        if self.n_workers is None:
            object.__setattr__(
                self, "n_workers", _env_int("MCPRICER_WORKERS") or os.cpu_count() or 1
            )
        if self.batch_size is None:
            object.__setattr__(
                self, "batch_size", _env_int("MCPRICER_BATCH_SIZE") or DEFAULT_BATCH_SIZE
            )


def load_config(**overrides) -> PricerConfig:
    """Defaults with environment overrides applied, then explicit ``overrides``."""
    return PricerConfig(**overrides)
