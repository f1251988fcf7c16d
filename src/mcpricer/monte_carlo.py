# mcpricer/monte_carlo.py

from __future__ import annotations
import os
import numpy as np
from typing import Optional, Union
from concurrent.futures import ThreadPoolExecutor, ProcessPoolExecutor

from .core import (
    PricingRequest, PricingResult, SimulationParameters, InvalidParameter,
    check_simulation, check_pricing, check_count,
)
from .accumulator import RunningStatistics
from .payoffs import payoff_function
from .processes import gbm_paths
from .sampling import NormalSampler

__all__ = [
    "price_option",
    "try_price_option",
    "partition_trials",
    "DEFAULT_BATCH_SIZE",
]

# paths simulated per vectorised batch inside a worker
DEFAULT_BATCH_SIZE = 4096


def partition_trials(n_trials: int, n_workers: int) -> list[int]:
    """Contiguous split of ``n_trials`` into at most ``n_workers`` shares.

    Shares differ by at most one and sum to ``n_trials``; empty shares are
    dropped, so fewer trials than workers yields fewer shares.
    """
    err = check_count("n_trials", n_trials) or check_count("n_workers", n_workers)
    if err is not None:
        raise err
    base, extra = divmod(n_trials, n_workers)
    shares = [base + 1 if i < extra else base for i in range(n_workers)]
    return [m for m in shares if m > 0]


def _plan_batches(n: int, batch_size: int) -> list[int]:
    batches = []
    remaining = int(n)
    while remaining > 0:
        m = min(batch_size, remaining)
        batches.append(m)
        remaining -= m
    return batches


# ---- one worker: a contiguous share of trials, fully local state ----

def _run_worker(
    request: PricingRequest,
    n: int,
    seed: np.random.SeedSequence,
    batch_size: int,
) -> RunningStatistics:
    """
    Simulate `n` trials for `request` and return their sufficient statistics.
    The sampler and the accumulator are created here and never shared.
    """
    sampler = NormalSampler(seed)
    payoff = payoff_function(request.kind)
    df = request.discount
    stats = RunningStatistics()

    for m in _plan_batches(n, batch_size):
        # risk-neutral: simulate under r, never a real-world drift
        S = gbm_paths(request.params, request.r, m, sampler)
        ST = S[-1]
        stats.push_many(df * payoff(ST, request.K))
    return stats


def _check_engine(n_workers, batch_size) -> Optional[InvalidParameter]:
    if n_workers is not None:
        err = check_count("n_workers", n_workers)
        if err is not None:
            return err
    if batch_size is not None:
        return check_count("batch_size", batch_size)
    return None


def price_option(
    request: PricingRequest,
    *,
    n_workers: Optional[int] = None,
    seed: Union[int, np.random.SeedSequence, None] = None,
    batch_size: Optional[int] = None,
    use_processes: bool = False,
) -> PricingResult:
    """
    Monte Carlo price of a European option under GBM.
    Returns a PricingResult that unpacks as (price, stderr).

    - Trials are split contiguously across `n_workers` (default: CPU count).
    - Each worker owns a sampler spawned from one SeedSequence, so a fixed
      `seed` reproduces the result for a fixed worker count.
    - Workers accumulate locally; statistics are merged once, in worker order.
    - Threads by default; `use_processes=True` uses a process pool instead.

    The standard error uses the population variance of the discounted
    payoffs: sqrt((mean(x^2) - mean(x)^2) / n).
    """
    p = request.params
    err = (
        check_simulation(p.S0, p.sigma, p.T, p.n_steps, request.r)
        or check_pricing(request.K, request.kind, request.n_trials, request.r)
        or _check_engine(n_workers, batch_size)
    )
    if err is not None:
        raise err

    if n_workers is None:
        n_workers = os.cpu_count() or 1
    if batch_size is None:
        batch_size = DEFAULT_BATCH_SIZE

    shares = partition_trials(request.n_trials, n_workers)
    ss_root = seed if isinstance(seed, np.random.SeedSequence) else np.random.SeedSequence(seed)
    child_seeds = ss_root.spawn(len(shares))

    if len(shares) == 1:
        parts = [_run_worker(request, shares[0], child_seeds[0], batch_size)]
    else:
        pool = ProcessPoolExecutor if use_processes else ThreadPoolExecutor
        with pool(max_workers=len(shares)) as ex:
            parts = list(ex.map(
                _run_worker,
                [request] * len(shares), shares, child_seeds,
                [batch_size] * len(shares),
            ))

    return RunningStatistics.merge(parts).to_result()


def try_price_option(
    S0: float, sigma: float, T: float, n_steps: int,
    K: float, kind: str, n_trials: int, r: float,
    **engine_kwargs,
) -> Union[PricingResult, InvalidParameter]:
    """Like :func:`price_option`, but returns the ``InvalidParameter``
    describing the first violated precondition instead of raising it.

    ``engine_kwargs`` are forwarded to :func:`price_option`.
    """
    err = (
        check_simulation(S0, sigma, T, n_steps)
        or check_pricing(K, kind, n_trials, r)
        or _check_engine(engine_kwargs.get("n_workers"), engine_kwargs.get("batch_size"))
    )
    if err is not None:
        return err
    request = PricingRequest(
        params=SimulationParameters(S0=S0, sigma=sigma, T=T, n_steps=n_steps),
        K=K, kind=kind, n_trials=n_trials, r=r,
    )
    return price_option(request, **engine_kwargs)
