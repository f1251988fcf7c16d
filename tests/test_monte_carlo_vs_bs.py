from mcpricer.core import SimulationParameters, PricingRequest, CALL, PUT
from mcpricer.black_scholes import closed_form_price
from mcpricer.monte_carlo import price_option
from mcpricer.validation import relative_error
from mcpricer.config import MC_RELATIVE_TOLERANCE


def test_mc_matches_bs_within_one_percent_at_ten_million_trials():
    # log-Euler steps are exact in distribution, so few steps suffice
    params = SimulationParameters(S0=100, sigma=0.2, T=1.0, n_steps=4)
    for kind in (CALL, PUT):
        req = PricingRequest(params, K=100, kind=kind, n_trials=10_000_000, r=0.05)
        mc = price_option(req, seed=1)
        bs = closed_form_price(100, 100, 0.05, 0.2, 1.0, kind)
        assert relative_error(mc.price, bs) < MC_RELATIVE_TOLERANCE
