from __future__ import annotations
import math
import numbers
from dataclasses import dataclass
from typing import Iterator, Optional


CALL = "call"
PUT  = "put"
KINDS = (CALL, PUT)


# ---------------------------------------------------------------------------
# Error kind
# ---------------------------------------------------------------------------
class InvalidParameter(ValueError):
    """A pricing or simulation input violates its precondition.

    Parameters
    ----------
    field : str
        Name of the offending field (``"S0"``, ``"sigma"``, ``"n_trials"``...).
    value : object
        The rejected value.
    requirement : str
        What the field must satisfy, e.g. ``"must be positive"``.
    """

    def __init__(self, field: str, value, requirement: str):
        self.field = field
        self.value = value
        self.requirement = requirement
        super().__init__(f"{field} {requirement}, got {value!r}")

    def __eq__(self, other):
        if not isinstance(other, InvalidParameter):
            return NotImplemented
        return (self.field, self.value, self.requirement) == (
            other.field, other.value, other.requirement
        )

    def __hash__(self):
        return hash((self.field, self.requirement))

    def __reduce__(self):
        return (self.__class__, (self.field, self.value, self.requirement))


def _positive(field: str, value) -> Optional[InvalidParameter]:
    if not value > 0:
        return InvalidParameter(field, value, "must be positive")
    return None


def check_count(field: str, value) -> Optional[InvalidParameter]:
    """Counts (steps, trials, workers, batch sizes) must be positive integers."""
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        return InvalidParameter(field, value, "must be an integer")
    return _positive(field, value)


def _non_negative(field: str, value) -> Optional[InvalidParameter]:
    if not value >= 0:
        return InvalidParameter(field, value, "must be non-negative")
    return None


# ---------------------------------------------------------------------------
# Value-returning validators: first violation, or None
# ---------------------------------------------------------------------------
def check_simulation(
    S0: float, sigma: float, T: float, n_steps: int,
    drift_rate: Optional[float] = None,
) -> Optional[InvalidParameter]:
    """Check GBM inputs without raising.

    ``drift_rate`` is only checked when given; it belongs to the call, not
    to :class:`SimulationParameters`.
    """
    for err in (
        _positive("S0", S0),
        _non_negative("sigma", sigma),
        _positive("T", T),
        check_count("n_steps", n_steps),
    ):
        if err is not None:
            return err
    if drift_rate is not None:
        return _non_negative("drift_rate", drift_rate)
    return None


def check_pricing(K: float, kind: str, n_trials: int, r: float) -> Optional[InvalidParameter]:
    """Check the contract-level inputs of a pricing run without raising."""
    for err in (
        _positive("K", K),
        check_count("n_trials", n_trials),
        _non_negative("r", r),
    ):
        if err is not None:
            return err
    if kind not in KINDS:
        return InvalidParameter("kind", kind, "must be 'call' or 'put'")
    return None


# ---------------------------------------------------------------------------
# Data model
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class SimulationParameters:
    """GBM inputs shared read-only by every trial.

    Parameters
    ----------
    S0 : float
        Initial price of the underlying.
    sigma : float
        Volatility; zero gives a deterministic path.
    T : float
        Time to maturity in years.
    n_steps : int
        Number of time steps per path.
    """
    S0: float
    sigma: float
    T: float          # years
    n_steps: int

    def __post_init__(self):
        err = check_simulation(self.S0, self.sigma, self.T, self.n_steps)
        if err is not None:
            raise err

    @property
    def dt(self) -> float:
        return self.T / self.n_steps


@dataclass(frozen=True)
class PricingRequest:
    """Everything one Monte Carlo pricing run needs.

    Parameters
    ----------
    params : SimulationParameters
        Underlying dynamics.
    K : float
        Strike price.
    kind : str
        ``"call"`` or ``"put"``.
    n_trials : int
        Number of simulated paths.
    r : float
        Continuously-compounded risk-free rate, used both as the simulation
        drift and for discounting.
    """
    params: SimulationParameters
    K: float
    kind: str = CALL
    n_trials: int = 100_000
    r: float = 0.0

    def __post_init__(self):
        err = check_pricing(self.K, self.kind, self.n_trials, self.r)
        if err is not None:
            raise err

    @property
    def discount(self) -> float:
        return math.exp(-self.r * self.params.T)


@dataclass(frozen=True)
class PricingResult:
    """Monte Carlo estimate and its standard error.

    Unpacks as ``price, stderr = result``.
    """
    price: float
    stderr: float
    n_trials: int = 0

    def __iter__(self) -> Iterator[float]:
        yield self.price
        yield self.stderr

    @property
    def variance(self) -> float:
        """Per-trial payoff variance implied by the standard error."""
        return self.stderr * self.stderr * self.n_trials

    def confidence_interval(self, z: float = 1.96) -> tuple[float, float]:
        half = z * self.stderr
        return self.price - half, self.price + half
