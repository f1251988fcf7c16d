"""Statistical validation of the Monte Carlo engine.

Compares Monte Carlo estimates against the closed-form oracle and checks
the two scaling laws of a plain estimator: the standard error falls like
1/sqrt(n) while the per-trial variance stderr^2 * n stays put.
"""

from __future__ import annotations

import logging
import numpy as np
from dataclasses import replace
from typing import Optional, Sequence

from .core import PricingRequest
from .config import VARIANCE_STABILITY_TOLERANCE

__all__ = [
    "relative_error",
    "convergence_study",
    "variance_is_stable",
]

logger = logging.getLogger(__name__)


def relative_error(estimate: float, reference: float) -> float:
    """|estimate - reference| / |reference|"""
    if reference == 0:
        raise ValueError("reference must be non-zero for a relative error.")
    return abs(estimate - reference) / abs(reference)


# ---------------------------------------------------------------------------
# Convergence study
# ---------------------------------------------------------------------------

def convergence_study(
    request: PricingRequest,
    trial_counts: Sequence[int],
    *,
    reference: Optional[float] = None,
    seed: Optional[int] = None,
    n_workers: Optional[int] = None,
) -> dict:
    """Price ``request`` once per trial count and collect the error profile.

    Parameters
    ----------
    request : PricingRequest
        Base request; only ``n_trials`` is varied.
    trial_counts : sequence of int
        Trial counts to run, e.g. ``[10_000, 100_000, 1_000_000]``.
    reference : float, optional
        True price for error computation.  Default: Black-Scholes.
    seed : int, optional
        Root seed; each run gets its own spawned stream.

    Returns
    -------
    dict
        ``"n_trials"``, ``"prices"``, ``"stderrs"``, ``"variances"``,
        ``"errors"`` (absolute, vs reference) and ``"order"``, the fitted
        decay rate of the standard error (about 0.5 for plain Monte Carlo).
    """
    from .monte_carlo import price_option

    trial_counts = [int(n) for n in trial_counts]
    if not trial_counts:
        raise ValueError("trial_counts must not be empty.")

    if reference is None:
        from .black_scholes import closed_form_price
        p = request.params
        reference = closed_form_price(p.S0, request.K, request.r, p.sigma, p.T, request.kind)

    seeds = np.random.SeedSequence(seed).spawn(len(trial_counts))
    prices, stderrs = [], []
    for n, ss in zip(trial_counts, seeds):
        res = price_option(replace(request, n_trials=n), seed=ss, n_workers=n_workers)
        logger.debug("n=%d price=%.6f stderr=%.6f", n, res.price, res.stderr)
        prices.append(res.price)
        stderrs.append(res.stderr)

    variances = [se * se * n for se, n in zip(stderrs, trial_counts)]
    errors = [abs(p - reference) for p in prices]

    # stderr ~ C / n^order  => log(se) = -order * log(n) + const
    order = float("nan")
    valid = [(n, se) for n, se in zip(trial_counts, stderrs) if se > 0]
    if len({n for n, _ in valid}) >= 2:
        coeffs = np.polyfit(np.log([n for n, _ in valid]), np.log([se for _, se in valid]), 1)
        order = -float(coeffs[0])

    return {
        "n_trials": trial_counts,
        "prices": prices,
        "stderrs": stderrs,
        "variances": variances,
        "errors": errors,
        "reference": reference,
        "order": order,
    }


def variance_is_stable(
    variances: Sequence[float], tolerance: float = VARIANCE_STABILITY_TOLERANCE
) -> bool:
    """True when every variance lies within ``tolerance`` of their mean."""
    v = np.asarray(variances, dtype=float)
    mean = v.mean()
    if mean == 0:
        return bool(np.all(v == 0))
    return bool(np.all(np.abs(v - mean) / mean <= tolerance))
