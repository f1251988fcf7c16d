# mcpricer: Monte Carlo option pricer with a Black-Scholes oracle
# Public API

from .core import (
    CALL, PUT,
    SimulationParameters, PricingRequest, PricingResult, InvalidParameter,
    check_simulation, check_pricing, check_count,
)
from .sampling import NormalSampler, spawn_samplers
from .processes import simulate_path, gbm_paths
from .payoffs import call_payoff, put_payoff, payoff_function
from .accumulator import RunningStatistics
from .monte_carlo import price_option, try_price_option, partition_trials
from .black_scholes import closed_form_price, put_call_parity_gap
from .config import PricerConfig, load_config
from .validation import relative_error, convergence_study, variance_is_stable

__all__ = [
    "CALL", "PUT",
    "SimulationParameters", "PricingRequest", "PricingResult", "InvalidParameter",
    "check_simulation", "check_pricing", "check_count",
    "NormalSampler", "spawn_samplers",
    "simulate_path", "gbm_paths",
    "call_payoff", "put_payoff", "payoff_function",
    "RunningStatistics",
    "price_option", "try_price_option", "partition_trials",
    "closed_form_price", "put_call_parity_gap",
    "PricerConfig", "load_config",
    "relative_error", "convergence_study", "variance_is_stable",
]

__version__ = "0.1.0"
